"""
Coverage Service

Counts how many active organizations offer each service category per
borough or neighborhood. Inputs are small (a few thousand rows), so
everything is grouped in memory.

COVERAGE LEVELS (table cells):
0 → none, 1 → low, 2-3 → medium, 4+ → high

MARKER LEVELS (borough map):
0 → none, 1-2 → low, 3-4 → medium, 5+ → high
"""

from app_models import Organization, OrganizationService, ServiceCategory, GapReport
from app_utils.constants import BOROUGHS, NEIGHBORHOODS_BY_BOROUGH, BOROUGH_COORDINATES

MARKER_STYLES = {
    "none": {"color": "#ef4444", "size": 30},
    "low": {"color": "#f59e0b", "size": 40},
    "medium": {"color": "#3b82f6", "size": 50},
    "high": {"color": "#10b981", "size": 60},
}


def coverage_level(count):
    if count <= 0:
        return "none"
    if count < 2:
        return "low"
    if count < 4:
        return "medium"
    return "high"


def marker_level(count):
    if count <= 0:
        return "none"
    if count < 3:
        return "low"
    if count < 5:
        return "medium"
    return "high"


def _providers_by_category(links):
    """{category_id: {organization_id, ...}}"""
    providers = {}
    for link in links:
        providers.setdefault(link.service_category_id, set()).add(link.organization_id)
    return providers


def _cell(borough, neighborhood, count):
    return {
        "borough": borough,
        "neighborhood": neighborhood,
        "count": count,
        "level": coverage_level(count),
    }


def compute_coverage(categories, organizations, links):
    """
    Neighborhood matrix: one row per category, one cell per canonical
    (borough, neighborhood) pair in borough order.
    """
    active = [org for org in organizations if org.active]
    providers = _providers_by_category(links)

    # Active organizations per location
    orgs_by_location = {}
    for org in active:
        orgs_by_location.setdefault((org.borough, org.neighborhood), set()).add(org.id)

    results = []
    for category in sorted(categories, key=lambda c: c.name):
        offering = providers.get(category.id, set())
        cells = []
        for borough in BOROUGHS:
            for neighborhood in NEIGHBORHOODS_BY_BOROUGH[borough]:
                in_location = orgs_by_location.get((borough, neighborhood), set())
                cells.append(_cell(borough, neighborhood, len(in_location & offering)))

        results.append({
            "category_id": category.id,
            "category_name": category.name,
            "coverage": cells,
        })
    return results


def rollup_by_borough(categories, organizations, links):
    """
    Borough matrix. Organizations outside the canonical neighborhood
    list still count toward their borough.
    """
    providers = _providers_by_category(links)

    orgs_by_borough = {}
    for org in organizations:
        if org.active:
            orgs_by_borough.setdefault(org.borough, set()).add(org.id)

    results = []
    for category in sorted(categories, key=lambda c: c.name):
        offering = providers.get(category.id, set())
        results.append({
            "category_id": category.id,
            "category_name": category.name,
            "coverage": [
                _cell(borough, "", len(orgs_by_borough.get(borough, set()) & offering))
                for borough in BOROUGHS
            ],
        })
    return results


def filter_coverage_by_borough(coverage, borough):
    return [
        {**row, "coverage": [c for c in row["coverage"] if c["borough"] == borough]}
        for row in coverage
    ]


def load_coverage_inputs(db):
    categories = db.query(ServiceCategory).all()
    organizations = db.query(Organization).filter(Organization.active.is_(True)).all()
    links = db.query(OrganizationService).all()
    return categories, organizations, links


def build_coverage(db, view="borough", borough=None):
    """
    view: "borough" or "neighborhood"
    borough: only used by the neighborhood view
    Returns (columns, rows)
    """
    categories, organizations, links = load_coverage_inputs(db)

    if view == "borough":
        return list(BOROUGHS), rollup_by_borough(categories, organizations, links)

    if view != "neighborhood":
        raise ValueError("Invalid view. Must be: borough or neighborhood")

    rows = compute_coverage(categories, organizations, links)
    if borough:
        return list(NEIGHBORHOODS_BY_BOROUGH[borough]), filter_coverage_by_borough(rows, borough)

    columns = [n for b in BOROUGHS for n in NEIGHBORHOODS_BY_BOROUGH[b]]
    return columns, rows


# --------------------------------------------------
# Dashboard aggregates
# --------------------------------------------------
def summarize_organizations(organizations):
    """Active organization counts by borough and by type."""
    by_borough = {}
    by_type = {}
    total = 0
    for org in organizations:
        if not org.active:
            continue
        total += 1
        if org.borough:
            by_borough[org.borough] = by_borough.get(org.borough, 0) + 1
        if org.type:
            by_type[org.type] = by_type.get(org.type, 0) + 1

    return {"total_orgs": total, "by_borough": by_borough, "by_type": by_type}


def dashboard_stats(db):
    organizations = db.query(Organization).all()
    stats = summarize_organizations(organizations)
    stats["total_services"] = db.query(OrganizationService).count()
    stats["open_gaps"] = db.query(GapReport).filter(GapReport.status == "open").count()
    return stats


def borough_summary(organizations):
    """One entry per borough with type breakdown and marker style."""
    summary = []
    for borough in BOROUGHS:
        in_borough = [org for org in organizations if org.active and org.borough == borough]
        types = {}
        for org in in_borough:
            types[org.type] = types.get(org.type, 0) + 1

        level = marker_level(len(in_borough))
        lat, lon = BOROUGH_COORDINATES[borough]
        summary.append({
            "borough": borough,
            "count": len(in_borough),
            "types": types,
            "level": level,
            "color": MARKER_STYLES[level]["color"],
            "size": MARKER_STYLES[level]["size"],
            "latitude": lat,
            "longitude": lon,
        })
    return summary
