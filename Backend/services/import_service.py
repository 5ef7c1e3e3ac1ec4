"""
Organization CSV import.

Columns: name,type,borough,neighborhood,address,contact_email,
contact_phone,website,description,services

`services` holds semicolon separated category names, matched
case-insensitively. Unknown names are ignored.
"""

import csv
import io
import logging

from sqlalchemy.exc import SQLAlchemyError

from app_models import ServiceCategory
from app_utils.constants import BOROUGHS, ORGANIZATION_TYPES
from crud import create_organization

logger = logging.getLogger(__name__)

TEMPLATE_COLUMNS = [
    "name", "type", "borough", "neighborhood", "address",
    "contact_email", "contact_phone", "website", "description", "services",
]

TEMPLATE_ROWS = [
    ["Example Church", "church", "Manhattan", "Upper West Side", "123 Main St",
     "contact@example.org", "212-555-0100", "https://example.org", "Community church",
     "Food Assistance;Youth Programs"],
    ["Community Center", "nonprofit", "Brooklyn", "Park Slope", "456 Oak Ave",
     "info@center.org", "718-555-0200", "https://center.org", "Youth and family services",
     "Education & Tutoring;Family Support"],
]

PREVIEW_ROWS = 5


def build_template():
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(TEMPLATE_COLUMNS)
    writer.writerows(TEMPLATE_ROWS)
    return out.getvalue()


def _strip_quotes(value):
    value = value.strip()
    if value[:1] in ("'", '"'):
        value = value[1:]
    if value[-1:] in ("'", '"'):
        value = value[:-1]
    return value.strip()


def parse_organizations_csv(text):
    """
    Returns (rows, errors).
    rows: list of dicts holding only the non-empty columns
    errors: list of {"row", "field", "message"}; row numbers count the header as row 1
    """
    reader = csv.reader(io.StringIO(text, newline=""), skipinitialspace=True)
    # blank records are skipped and not numbered, quoted fields may span lines
    records = (values for values in reader if any(v.strip() for v in values))

    header = next(records, None)
    if header is None:
        return [], []
    headers = [h.strip().lower() for h in header]

    rows = []
    errors = []
    for row_number, values in enumerate(records, start=2):
        org = {}
        for column, value in zip(headers, values):
            value = _strip_quotes(value)
            if value:
                org[column] = value

        if not org.get("name"):
            errors.append({"row": row_number, "field": "name", "message": "Name is required"})
            continue

        if org.get("type") not in ORGANIZATION_TYPES:
            errors.append({
                "row": row_number,
                "field": "type",
                "message": "Invalid type. Must be: church, ministry, nonprofit, or civic_group",
            })
            continue

        if org.get("borough") not in BOROUGHS:
            errors.append({"row": row_number, "field": "borough", "message": "Invalid borough"})
            continue

        rows.append(org)

    return rows, errors


def import_organizations(db, rows):
    """
    Insert parsed rows as active organizations with their service links.
    Rows are not geocoded.
    A failing row is rolled back and counted, the batch continues.
    """
    category_ids = {c.name.lower(): c.id for c in db.query(ServiceCategory).all()}

    imported = 0
    failed = 0
    created_ids = []
    for org in rows:
        services = []
        for name in (org.get("services") or "").split(";"):
            category_id = category_ids.get(name.strip().lower())
            if category_id:
                services.append({"service_category_id": category_id})

        data = {key: org.get(key) for key in TEMPLATE_COLUMNS if key != "services"}
        data["active"] = True
        try:
            new_org = create_organization(db, data, services, geocode=False)
        except (ValueError, SQLAlchemyError) as e:
            db.rollback()
            failed += 1
            logger.error("Error importing organization %r: %s", org.get("name"), e)
            continue

        imported += 1
        created_ids.append(new_org.id)

    logger.info("CSV import finished: %d imported, %d failed", imported, failed)
    return {"imported": imported, "failed": failed, "organization_ids": created_ids}
