from app_models import Organization, OrganizationService
from services.import_service import build_template, import_organizations, parse_organizations_csv

HEADER = "name,type,borough,neighborhood,address,contact_email,contact_phone,website,description,services\n"


def test_template_parses_cleanly():
    rows, errors = parse_organizations_csv(build_template())

    assert errors == []
    assert [r["name"] for r in rows] == ["Example Church", "Community Center"]
    assert rows[0]["services"] == "Food Assistance;Youth Programs"


def test_parse_reports_first_failing_field_per_row():
    text = (
        HEADER
        + ",church,Manhattan\n"
        + "Bad Type,temple,Manhattan\n"
        + "Bad Borough,church,Hoboken\n"
        + "No Borough,ministry\n"
        + "Good One,civic_group,Queens,Astoria\n"
    )

    rows, errors = parse_organizations_csv(text)

    assert [r["name"] for r in rows] == ["Good One"]
    assert errors == [
        {"row": 2, "field": "name", "message": "Name is required"},
        {
            "row": 3,
            "field": "type",
            "message": "Invalid type. Must be: church, ministry, nonprofit, or civic_group",
        },
        {"row": 4, "field": "borough", "message": "Invalid borough"},
        {"row": 5, "field": "borough", "message": "Invalid borough"},
    ]


def test_parse_trims_values_quotes_and_headers():
    text = " Name , TYPE ,Borough,description\n  'Hope House' , nonprofit ,Bronx,\"Meals, showers and mail\"\n\n"

    rows, errors = parse_organizations_csv(text)

    assert errors == []
    assert rows == [{
        "name": "Hope House",
        "type": "nonprofit",
        "borough": "Bronx",
        "description": "Meals, showers and mail",
    }]


def test_parse_empty_text():
    assert parse_organizations_csv("") == ([], [])
    assert parse_organizations_csv("\n\n") == ([], [])


def test_parse_keeps_line_breaks_inside_quoted_fields():
    text = (
        HEADER
        + 'Hope House,nonprofit,Bronx,Fordham,,,,,"Meals daily\n\nShowers on Fridays",Food Assistance\n'
        + "\n"
        + ",church,Queens\n"
    )

    rows, errors = parse_organizations_csv(text)

    assert rows[0]["description"] == "Meals daily\n\nShowers on Fridays"
    assert rows[0]["services"] == "Food Assistance"
    # the multi-line record counts once, the blank line not at all
    assert errors == [{"row": 3, "field": "name", "message": "Name is required"}]


def test_import_links_known_services_case_insensitively(db, categories):
    rows, _ = parse_organizations_csv(
        HEADER
        + "Hope House,nonprofit,Bronx,Fordham,,,,,,food assistance; YOUTH PROGRAMS ;Dog Walking\n"
        + "Quiet Chapel,church,Queens,,,,,,,\n"
    )

    result = import_organizations(db, rows)

    assert result["imported"] == 2
    assert result["failed"] == 0

    hope = db.query(Organization).filter(Organization.name == "Hope House").one()
    assert hope.active is True
    assert hope.neighborhood == "Fordham"
    linked = {
        link.service_category_id
        for link in db.query(OrganizationService).filter(OrganizationService.organization_id == hope.id)
    }
    assert linked == {categories["Food Assistance"], categories["Youth Programs"]}

    chapel = db.query(Organization).filter(Organization.name == "Quiet Chapel").one()
    assert chapel.neighborhood is None
    assert chapel.address is None


def test_import_counts_failed_rows_and_continues(db):
    rows = [
        {"name": "Valid Org", "type": "ministry", "borough": "Manhattan"},
        # bypassed the parser, still rejected on insert
        {"name": "Broken Org", "type": "unknown", "borough": "Manhattan"},
        {"name": "Another Org", "type": "nonprofit", "borough": "Staten Island"},
    ]

    result = import_organizations(db, rows)

    assert result["imported"] == 2
    assert result["failed"] == 1
    assert len(result["organization_ids"]) == 2
    assert db.query(Organization).count() == 2
