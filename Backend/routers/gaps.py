from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from typing import Optional
import logging

from database import get_db
from app_models import GapReport, User
from app_utils.constants import BOROUGHS, NEIGHBORHOODS_BY_BOROUGH, GAP_STATUSES, SEVERITIES
from app_utils.map_render import render_gap_map
from routers.auth import get_current_user
from schemas import GapReportCreate, GapStatusUpdate
from services.coverage_service import build_coverage
import crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gaps", tags=["Gap Analysis"])


def serialize_gap(gap, category_names):
    return {
        "id": gap.id,
        "service_category_id": gap.service_category_id,
        "service_name": category_names.get(gap.service_category_id, "Unknown"),
        "borough": gap.borough,
        "neighborhood": gap.neighborhood,
        "severity": gap.severity,
        "description": gap.description,
        "reported_by": gap.reported_by,
        "created_by_user": gap.created_by_user,
        "status": gap.status,
        "created_at": gap.created_at.isoformat() if gap.created_at else None,
        "updated_at": gap.updated_at.isoformat() if gap.updated_at else None,
        "resolved_at": gap.resolved_at.isoformat() if gap.resolved_at else None,
    }


def _filtered_gaps(db, borough, neighborhood, status, severity):
    query = db.query(GapReport)

    # "all" is what the filter selects send for no filter
    if borough and borough != "all":
        query = query.filter(GapReport.borough == borough)
    if neighborhood and neighborhood != "all":
        query = query.filter(GapReport.neighborhood == neighborhood)
    if status and status != "all":
        query = query.filter(GapReport.status == status)
    if severity and severity != "all":
        query = query.filter(GapReport.severity == severity)

    gaps = query.order_by(GapReport.created_at.desc(), GapReport.id).all()
    category_names = crud.get_category_names(db)
    return [serialize_gap(gap, category_names) for gap in gaps]


# --------------------------------------------------
# GAP REPORTS
# --------------------------------------------------
@router.get("")
def list_gap_reports(
    borough: Optional[str] = Query(None),
    neighborhood: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description="open, in_progress or resolved"),
    severity: Optional[str] = Query(None, description="critical, high, medium or low"),
    db: Session = Depends(get_db)
):
    """Gap reports, newest first"""
    gaps = _filtered_gaps(db, borough, neighborhood, status, severity)
    return {"status": "success", "count": len(gaps), "gaps": gaps}


@router.post("")
def create_gap_report(
    payload: GapReportCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        gap = crud.create_gap_report(db, payload.model_dump(), user_id=user.id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Gap report %s filed by user %s", gap.id, user.id)
    return {"status": "success", "gap": serialize_gap(gap, crud.get_category_names(db))}


@router.patch("/{gap_id}/status")
def update_gap_status(
    gap_id: str,
    payload: GapStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Move a gap report between open / in_progress / resolved.
    resolved_at is recorded when resolved and cleared otherwise.
    """
    try:
        gap = crud.update_gap_status(db, gap_id, payload.status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not gap:
        raise HTTPException(status_code=404, detail="Gap report not found")

    return {
        "status": "success",
        "message": f"Status updated to {gap.status}",
        "gap": serialize_gap(gap, crud.get_category_names(db)),
    }


# --------------------------------------------------
# FILTER OPTIONS
# --------------------------------------------------
@router.get("/options")
def filter_options():
    return {
        "status": "success",
        "boroughs": BOROUGHS,
        "statuses": GAP_STATUSES,
        "severities": SEVERITIES,
    }


@router.get("/neighborhoods")
def list_neighborhoods(borough: str = Query(...)):
    if borough not in NEIGHBORHOODS_BY_BOROUGH:
        raise HTTPException(status_code=404, detail="Borough not found")
    return {
        "status": "success",
        "borough": borough,
        "neighborhoods": NEIGHBORHOODS_BY_BOROUGH[borough],
    }


# --------------------------------------------------
# COVERAGE MATRIX
# --------------------------------------------------
@router.get("/coverage")
def get_coverage(
    view: str = Query("borough", description="borough or neighborhood"),
    borough: Optional[str] = Query(None, description="Limit the neighborhood view to one borough"),
    db: Session = Depends(get_db)
):
    if borough == "all":
        borough = None
    if borough and borough not in BOROUGHS:
        raise HTTPException(status_code=400, detail="Invalid borough")

    try:
        columns, rows = build_coverage(db, view=view, borough=borough)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "status": "success",
        "view": view,
        "borough": borough,
        "columns": columns,
        "coverage": rows,
    }


# --------------------------------------------------
# GAP MAP (HTML)
# --------------------------------------------------
@router.get("/map", response_class=HTMLResponse)
def gap_map(
    borough: Optional[str] = Query(None),
    neighborhood: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    severity: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    gaps = _filtered_gaps(db, borough, neighborhood, status, severity)
    return HTMLResponse(content=render_gap_map(gaps))
