from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from typing import Optional

from database import get_db
from app_models import Organization
from app_utils.constants import BOROUGHS
from app_utils.geo import geocode_address
from app_utils.map_render import render_borough_heatmap, render_organization_map
from services.coverage_service import dashboard_stats, borough_summary

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("/stats")
def get_stats(db: Session = Depends(get_db)):
    """
    Active organizations (total, by borough, by type),
    organization-service links and open gap reports.
    """
    return {"status": "success", "stats": dashboard_stats(db)}


@router.get("/boroughs")
def get_borough_summary(db: Session = Depends(get_db)):
    organizations = db.query(Organization).filter(Organization.active.is_(True)).all()
    return {"status": "success", "boroughs": borough_summary(organizations)}


@router.get("/boroughs/{borough}")
def get_borough_detail(
    borough: str,
    type: Optional[str] = Query(None, description="Organization type ('all' for no filter)"),
    db: Session = Depends(get_db)
):
    if borough not in BOROUGHS:
        raise HTTPException(status_code=404, detail="Borough not found")

    query = db.query(Organization).filter(
        Organization.active.is_(True),
        Organization.borough == borough
    )
    if type and type != "all":
        query = query.filter(Organization.type == type)

    organizations = query.order_by(Organization.name).all()
    return {
        "status": "success",
        "borough": borough,
        "count": len(organizations),
        "organizations": [
            {
                "id": org.id,
                "name": org.name,
                "type": org.type,
                "neighborhood": org.neighborhood,
                "description": org.description,
                "contact_phone": org.contact_phone,
                "website": org.website,
            }
            for org in organizations
        ],
    }


@router.get("/heatmap", response_class=HTMLResponse)
def get_heatmap(db: Session = Depends(get_db)):
    organizations = db.query(Organization).filter(Organization.active.is_(True)).all()
    return HTMLResponse(content=render_borough_heatmap(borough_summary(organizations)))


@router.get("/map", response_class=HTMLResponse)
def get_organization_map(db: Session = Depends(get_db)):
    organizations = db.query(Organization).filter(Organization.active.is_(True)).all()
    return HTMLResponse(content=render_organization_map(organizations))


@router.get("/geocode")
def geocode(
    address: str = Query(...),
    borough: Optional[str] = Query(None)
):
    """
    Look up coordinates for an address
    """
    location = geocode_address(address, borough)
    if not location:
        raise HTTPException(status_code=404, detail="Address not found")
    return {"status": "success", **location}
