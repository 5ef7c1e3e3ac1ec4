import pytest


def test_default_categories_are_seeded_and_sorted(client):
    body = client.get("/api/service-categories").json()

    names = [c["name"] for c in body["categories"]]
    assert body["count"] == 10
    assert names == sorted(names)
    assert "Food Assistance" in names


def test_seeding_is_skipped_when_categories_exist(db):
    import crud

    assert crud.seed_default_categories(db) == 0


def test_create_category(client, auth_headers):
    response = client.post(
        "/api/service-categories",
        json={"name": " Legal Aid ", "description": "Free legal clinics"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Legal Aid"
    assert client.get("/api/service-categories").json()["count"] == 11


def test_create_category_rejects_duplicates_and_blank_names(client, auth_headers):
    duplicate = client.post("/api/service-categories", json={"name": "food assistance"}, headers=auth_headers)
    assert duplicate.status_code == 400

    blank = client.post("/api/service-categories", json={"name": ""}, headers=auth_headers)
    assert blank.status_code == 400
    assert blank.json()["detail"] == "Name is required"


def test_create_category_needs_authentication(client):
    assert client.post("/api/service-categories", json={"name": "Legal Aid"}).status_code == 401


def test_category_names_are_unique_ignoring_case_in_the_database(db):
    from sqlalchemy.exc import IntegrityError

    from app_models import ServiceCategory

    db.add(ServiceCategory(name="FOOD ASSISTANCE"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_create_category_reports_concurrent_duplicate(db, monkeypatch):
    import crud
    from app_models import ServiceCategory

    # another request inserted the name between the lookup and the commit
    class NoMatch:
        def filter(self, *args):
            return self

        def first(self):
            return None

    real_query = db.query
    monkeypatch.setattr(db, "query", lambda model: NoMatch() if model is ServiceCategory else real_query(model))

    with pytest.raises(ValueError, match="already exists"):
        crud.create_service_category(db, "food assistance")
