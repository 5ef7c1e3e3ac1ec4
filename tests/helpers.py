"""Request helpers shared by the API tests."""


def sign_in(client, email="organizer@example.org", password="secret123"):
    client.post("/api/auth/signup", json={"email": email, "password": password})
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


def make_org(client, headers, **overrides):
    payload = {
        "name": "Grace Church",
        "type": "church",
        "borough": "Brooklyn",
        "neighborhood": "Bushwick",
        "services": [],
    }
    payload.update(overrides)
    response = client.post("/api/organizations", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["organization"]


def make_gap(client, headers, category_id, **overrides):
    payload = {
        "service_category_id": category_id,
        "borough": "Bronx",
        "neighborhood": "Mott Haven",
        "severity": "high",
        "description": "No food pantry open on weekends",
    }
    payload.update(overrides)
    response = client.post("/api/gaps", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["gap"]
