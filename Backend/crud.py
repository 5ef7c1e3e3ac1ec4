from app_models import Organization, OrganizationService, ServiceCategory, GapReport, Profile
from app_utils.constants import (
    BOROUGHS,
    ORGANIZATION_TYPES,
    SEVERITIES,
    GAP_STATUSES,
    CAPACITIES,
    DEFAULT_SERVICE_CATEGORIES,
)
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from datetime import datetime
import logging

import config

logger = logging.getLogger(__name__)

ORGANIZATION_FIELDS = [
    "name", "type", "borough", "neighborhood", "address",
    "contact_email", "contact_phone", "website", "description",
]


def clean(value):
    """Trim strings; blank strings become None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _commit(db):
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


# ---------- Service Categories ----------
def seed_default_categories(db):
    """Insert the default categories when the table is empty. Returns inserted count."""
    if db.query(ServiceCategory).count() > 0:
        return 0

    for name, description in DEFAULT_SERVICE_CATEGORIES:
        db.add(ServiceCategory(name=name, description=description))
    _commit(db)
    logger.info("Seeded %d default service categories", len(DEFAULT_SERVICE_CATEGORIES))
    return len(DEFAULT_SERVICE_CATEGORIES)


def create_service_category(db, name, description=None):
    name = clean(name)
    if not name:
        raise ValueError("Name is required")

    existing = db.query(ServiceCategory).filter(
        func.lower(ServiceCategory.name) == name.lower()
    ).first()
    if existing:
        raise ValueError(f"Service category '{name}' already exists")

    category = ServiceCategory(name=name, description=clean(description))
    db.add(category)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent insert of the same name
        db.rollback()
        raise ValueError(f"Service category '{name}' already exists")
    db.refresh(category)
    return category


def get_category_names(db):
    return {c.id: c.name for c in db.query(ServiceCategory).all()}


# ---------- Organizations ----------
def validate_organization(data):
    """
    Normalize organization fields (dict) in place and check enumerations.
    Raises ValueError with a user facing message.
    """
    for field in ORGANIZATION_FIELDS:
        data[field] = clean(data.get(field))

    if not data["name"]:
        raise ValueError("Name is required")
    if data["type"] not in ORGANIZATION_TYPES:
        raise ValueError("Invalid type. Must be: church, ministry, nonprofit, or civic_group")
    if data["borough"] not in BOROUGHS:
        raise ValueError("Invalid borough")
    return data


def _validate_services(db, services):
    """Drop repeated categories, check ids and capacities. Returns list of dicts."""
    known_ids = {c_id for (c_id,) in db.query(ServiceCategory.id).all()}
    selected = []
    seen = set()

    for service in services or []:
        category_id = service["service_category_id"]
        if category_id in seen:
            continue
        if category_id not in known_ids:
            raise ValueError(f"Unknown service category: {category_id}")

        capacity = clean(service.get("capacity"))
        if capacity is not None and capacity not in CAPACITIES:
            raise ValueError("Invalid capacity. Must be: low, medium, or high")

        seen.add(category_id)
        selected.append({
            "service_category_id": category_id,
            "capacity": capacity,
            "notes": clean(service.get("notes")),
        })
    return selected


def _apply_geocode(org):
    """Fill coordinates (and a missing neighborhood) from the address."""
    from app_utils.geo import geocode_address, nearest_neighborhood

    org.latitude = None
    org.longitude = None
    if not org.address or not config.GEOCODING_ENABLED:
        return

    location = geocode_address(org.address, org.borough)
    if not location:
        return

    org.latitude = location["latitude"]
    org.longitude = location["longitude"]
    if not org.neighborhood:
        org.neighborhood = nearest_neighborhood(org.latitude, org.longitude, org.borough)


def _add_services(db, org_id, services):
    for service in services:
        db.add(OrganizationService(organization_id=org_id, **service))


def create_organization(db, data, services=None, geocode=True):
    """
    data: dict of organization fields
    services: list of {"service_category_id", "capacity", "notes"}
    geocode: False leaves the coordinates empty (bulk imports)
    """
    data = validate_organization(dict(data))
    selected = _validate_services(db, services)

    org = Organization(
        active=bool(data.get("active", True)),
        **{field: data[field] for field in ORGANIZATION_FIELDS}
    )
    if geocode:
        _apply_geocode(org)

    db.add(org)
    try:
        db.flush()
        _add_services(db, org.id, selected)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(org)
    return org


def update_organization(db, org_id, data, services=None):
    """Update fields and replace the service links wholesale."""
    org = db.query(Organization).filter(Organization.id == org_id).first()
    if not org:
        return None

    data = validate_organization(dict(data))
    selected = _validate_services(db, services)

    location_changed = data["address"] != org.address or data["borough"] != org.borough
    for field in ORGANIZATION_FIELDS:
        setattr(org, field, data[field])
    org.active = bool(data.get("active", org.active))
    org.updated_at = datetime.now()

    if location_changed:
        _apply_geocode(org)
    elif not org.neighborhood and org.latitude is not None and org.longitude is not None:
        from app_utils.geo import nearest_neighborhood
        org.neighborhood = nearest_neighborhood(org.latitude, org.longitude, org.borough)

    try:
        db.query(OrganizationService).filter(
            OrganizationService.organization_id == org_id
        ).delete(synchronize_session=False)
        _add_services(db, org_id, selected)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(org)
    return org


def delete_organization(db, org_id):
    org = db.query(Organization).filter(Organization.id == org_id).first()
    if not org:
        return None

    db.query(OrganizationService).filter(
        OrganizationService.organization_id == org_id
    ).delete(synchronize_session=False)
    db.delete(org)
    _commit(db)
    return org


def get_services_by_organization(db, org_ids=None):
    """{organization_id: [OrganizationService, ...]}"""
    query = db.query(OrganizationService)
    if org_ids is not None:
        query = query.filter(OrganizationService.organization_id.in_(org_ids))

    grouped = {}
    for link in query.order_by(OrganizationService.created_at).all():
        grouped.setdefault(link.organization_id, []).append(link)
    return grouped


# ---------- Gap Reports ----------
def create_gap_report(db, data, user_id=None):
    category = db.query(ServiceCategory).filter(
        ServiceCategory.id == data.get("service_category_id")
    ).first()
    if not category:
        raise ValueError("Unknown service category")

    borough = clean(data.get("borough"))
    if borough not in BOROUGHS:
        raise ValueError("Invalid borough")

    severity = clean(data.get("severity"))
    if severity not in SEVERITIES:
        raise ValueError("Invalid severity. Must be: critical, high, medium, or low")

    description = clean(data.get("description"))
    if not description:
        raise ValueError("Description is required")

    gap = GapReport(
        service_category_id=category.id,
        borough=borough,
        neighborhood=clean(data.get("neighborhood")),
        severity=severity,
        description=description,
        reported_by=clean(data.get("reported_by")),
        created_by_user=user_id,
        status="open",
    )
    db.add(gap)
    _commit(db)
    db.refresh(gap)
    return gap


def update_gap_status(db, gap_id, status):
    """
    open -> in_progress -> resolved (any transition allowed, like the dashboard select).
    Records resolved_at when resolved, clears it otherwise.
    """
    if status not in GAP_STATUSES:
        raise ValueError("Invalid status. Must be: open, in_progress, or resolved")

    gap = db.query(GapReport).filter(GapReport.id == gap_id).first()
    if not gap:
        return None

    current_time = datetime.now()
    gap.status = status
    gap.updated_at = current_time
    gap.resolved_at = current_time if status == "resolved" else None

    _commit(db)
    db.refresh(gap)
    return gap


# ---------- Profile ----------
PROFILE_FIELDS = [
    "organization", "organization_type", "organization_email",
    "organization_phone", "role", "phone",
]


def save_profile(db, user_id, data):
    """Insert the profile on first save, update it afterwards."""
    full_name = clean(data.get("full_name"))
    if not full_name:
        raise ValueError("Full name is required")

    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if profile is None:
        profile = Profile(id=user_id, full_name=full_name)
        db.add(profile)
    else:
        profile.full_name = full_name
        profile.updated_at = datetime.now()

    for field in PROFILE_FIELDS:
        setattr(profile, field, clean(data.get(field)))

    _commit(db)
    db.refresh(profile)
    return profile
