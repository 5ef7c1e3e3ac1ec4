from fastapi import APIRouter, Depends, UploadFile, File, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import Optional
import csv
import logging

from database import get_db
from app_models import Organization, User
from routers.auth import get_current_user
from schemas import OrganizationCreate, MessageResponse
from services.import_service import (
    build_template,
    parse_organizations_csv,
    import_organizations,
    PREVIEW_ROWS,
)
import crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/organizations", tags=["Organizations"])


def serialize_organization(org, links, category_names):
    return {
        "id": org.id,
        "name": org.name,
        "type": org.type,
        "borough": org.borough,
        "neighborhood": org.neighborhood,
        "address": org.address,
        "contact_email": org.contact_email,
        "contact_phone": org.contact_phone,
        "website": org.website,
        "description": org.description,
        "active": org.active,
        "latitude": org.latitude,
        "longitude": org.longitude,
        "created_at": org.created_at.isoformat() if org.created_at else None,
        "updated_at": org.updated_at.isoformat() if org.updated_at else None,
        "services": [
            {
                "id": link.id,
                "service_category_id": link.service_category_id,
                "capacity": link.capacity,
                "notes": link.notes,
                "service_name": category_names.get(link.service_category_id, "Unknown"),
            }
            for link in links
        ],
    }


def _organization_payload(db, org):
    links = crud.get_services_by_organization(db, [org.id]).get(org.id, [])
    return serialize_organization(org, links, crud.get_category_names(db))


def _split_payload(payload: OrganizationCreate):
    data = payload.model_dump(exclude={"services"})
    services = [s.model_dump() for s in payload.services]
    return data, services


# ==================================================
# CSV IMPORT
# ==================================================
@router.get("/import/template")
def download_import_template():
    return Response(
        content=build_template(),
        media_type="text/csv",
        headers={
            "Content-Disposition": 'attachment; filename="organization_import_template.csv"'
        }
    )


@router.post("/import")
def import_organizations_csv(
    file: UploadFile = File(..., description="CSV file following the import template"),
    dry_run: bool = Query(False, description="Only parse and validate, do not insert"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Parse and import organizations from CSV.
    - Invalid rows are reported and skipped.
    - With dry_run the parsed rows are only previewed.
    - Imported rows are not geocoded.
    """
    if file.filename and not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Failed to parse CSV file")

    raw = file.file.read()
    try:
        rows, errors = parse_organizations_csv(raw.decode("utf-8-sig"))
    except (UnicodeDecodeError, csv.Error) as e:
        logger.warning("Rejected CSV upload %r: %s", file.filename, e)
        raise HTTPException(status_code=400, detail="Failed to parse CSV file")

    response = {
        "status": "success",
        "parsed": len(rows),
        "errors": errors,
        "preview": rows[:PREVIEW_ROWS],
        "dry_run": dry_run,
    }
    if not dry_run:
        response["result"] = import_organizations(db, rows)
    return response


# ==================================================
# ORGANIZATION CRUD
# ==================================================
@router.get("")
def list_organizations(
    borough: Optional[str] = Query(None, description="Filter by borough ('all' for no filter)"),
    type: Optional[str] = Query(None, description="Filter by organization type ('all' for no filter)"),
    active: Optional[bool] = Query(None, description="Filter by active flag"),
    db: Session = Depends(get_db)
):
    total = db.query(Organization).count()

    query = db.query(Organization)
    if borough and borough != "all":
        query = query.filter(Organization.borough == borough)
    if type and type != "all":
        query = query.filter(Organization.type == type)
    if active is not None:
        query = query.filter(Organization.active.is_(active))

    organizations = query.order_by(Organization.name).all()
    services = crud.get_services_by_organization(db, [org.id for org in organizations])
    category_names = crud.get_category_names(db)

    return {
        "status": "success",
        "count": len(organizations),
        "total": total,
        "organizations": [
            serialize_organization(org, services.get(org.id, []), category_names)
            for org in organizations
        ],
    }


@router.get("/{org_id}")
def get_organization(org_id: str, db: Session = Depends(get_db)):
    org = db.query(Organization).filter(Organization.id == org_id).first()
    if not org:
        raise HTTPException(status_code=404, detail="Organization not found")

    return {"status": "success", "organization": _organization_payload(db, org)}


@router.post("")
def create_organization(
    payload: OrganizationCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    data, services = _split_payload(payload)
    try:
        org = crud.create_organization(db, data, services)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Organization %s created by user %s", org.id, user.id)
    return {"status": "success", "organization": _organization_payload(db, org)}


@router.put("/{org_id}")
def update_organization(
    org_id: str,
    payload: OrganizationCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    data, services = _split_payload(payload)
    try:
        org = crud.update_organization(db, org_id, data, services)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not org:
        raise HTTPException(status_code=404, detail="Organization not found")

    return {"status": "success", "organization": _organization_payload(db, org)}


@router.delete("/{org_id}", response_model=MessageResponse)
def delete_organization(
    org_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    org = crud.delete_organization(db, org_id)
    if not org:
        raise HTTPException(status_code=404, detail="Organization not found")

    logger.info("Organization %s deleted by user %s", org_id, user.id)
    return {"status": "success", "message": f"Organization {org_id} deleted"}
