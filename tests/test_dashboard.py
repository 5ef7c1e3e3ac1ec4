from app_utils import geo
from helpers import make_gap, make_org


def test_stats_count_active_organizations(client, auth_headers, categories):
    food = categories["Food Assistance"]
    make_org(client, auth_headers, name="A", services=[{"service_category_id": food}])
    make_org(client, auth_headers, name="B", type="ministry", borough="Queens", neighborhood="Astoria")
    make_org(client, auth_headers, name="C", active=False, services=[{"service_category_id": food}])
    gap = make_gap(client, auth_headers, food)
    make_gap(client, auth_headers, food)
    client.patch(f"/api/gaps/{gap['id']}/status", json={"status": "resolved"}, headers=auth_headers)

    stats = client.get("/api/dashboard/stats").json()["stats"]

    assert stats["total_orgs"] == 2
    assert stats["by_borough"] == {"Brooklyn": 1, "Queens": 1}
    assert stats["by_type"] == {"church": 1, "ministry": 1}
    assert stats["total_services"] == 2
    assert stats["open_gaps"] == 1


def test_stats_on_empty_database(client):
    stats = client.get("/api/dashboard/stats").json()["stats"]

    assert stats == {"total_orgs": 0, "by_borough": {}, "by_type": {}, "total_services": 0, "open_gaps": 0}


def test_borough_summary_has_every_borough(client, auth_headers):
    for i in range(3):
        make_org(client, auth_headers, name=f"Org {i}", borough="Bronx", neighborhood="Fordham")

    boroughs = client.get("/api/dashboard/boroughs").json()["boroughs"]

    assert [b["borough"] for b in boroughs] == ["Manhattan", "Brooklyn", "Queens", "Bronx", "Staten Island"]
    bronx = boroughs[3]
    assert bronx["count"] == 3
    assert bronx["level"] == "medium"
    assert bronx["color"] == "#3b82f6"
    assert boroughs[0]["level"] == "none"


def test_borough_detail_filters_by_type(client, auth_headers):
    make_org(client, auth_headers, name="Hope Ministry", type="ministry", borough="Queens", neighborhood="Jamaica")
    make_org(client, auth_headers, name="Astoria Church", borough="Queens", neighborhood="Astoria")
    make_org(client, auth_headers, name="Closed Church", borough="Queens", active=False)

    everything = client.get("/api/dashboard/boroughs/Queens").json()
    assert [o["name"] for o in everything["organizations"]] == ["Astoria Church", "Hope Ministry"]

    ministries = client.get("/api/dashboard/boroughs/Queens", params={"type": "ministry"}).json()
    assert ministries["count"] == 1
    assert ministries["organizations"][0]["neighborhood"] == "Jamaica"

    assert client.get("/api/dashboard/boroughs/Queens", params={"type": "all"}).json()["count"] == 2


def test_borough_detail_unknown_borough(client):
    assert client.get("/api/dashboard/boroughs/Atlantis").status_code == 404


def test_heatmap_renders_counts(client, auth_headers):
    make_org(client, auth_headers)

    response = client.get("/api/dashboard/heatmap")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "1 organization<" in response.text
    assert "Staten Island" in response.text


def test_organization_map_only_shows_located_organizations(client, auth_headers, db):
    from app_models import Organization

    located = make_org(client, auth_headers, name="Located Chapel")
    make_org(client, auth_headers, name="Floating Chapel")
    db.query(Organization).filter(Organization.id == located["id"]).update(
        {"latitude": 40.6942, "longitude": -73.9194}
    )
    db.commit()

    html = client.get("/api/dashboard/map").text

    assert "Located Chapel" in html
    assert "Floating Chapel" not in html


def test_geocode_endpoint(client, monkeypatch):
    class FakeResponse:
        status_code = 200

        def json(self):
            return [{"lat": "40.7580", "lon": "-73.9855", "display_name": "Times Square"}]

    monkeypatch.setattr(geo.requests, "get", lambda *a, **kw: FakeResponse())

    response = client.get("/api/dashboard/geocode", params={"address": "1 Times Sq", "borough": "Manhattan"})

    assert response.status_code == 200
    assert response.json()["latitude"] == 40.7580
    assert response.json()["display_name"] == "Times Square"


def test_geocode_endpoint_not_found(client, monkeypatch):
    class EmptyResponse:
        status_code = 200

        def json(self):
            return []

    monkeypatch.setattr(geo.requests, "get", lambda *a, **kw: EmptyResponse())

    response = client.get("/api/dashboard/geocode", params={"address": "nowhere at all"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Address not found"
