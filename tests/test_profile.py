def test_profile_is_null_until_saved(client, auth_headers):
    response = client.get("/api/profile", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["profile"] is None


def test_save_then_update_profile(client, auth_headers):
    created = client.put(
        "/api/profile",
        json={"full_name": "Maria Ruiz", "organization": "Grace Church", "role": "Pastor", "phone": " "},
        headers=auth_headers,
    ).json()["profile"]

    assert created["full_name"] == "Maria Ruiz"
    assert created["phone"] is None

    updated = client.put(
        "/api/profile",
        json={"full_name": "Maria Ruiz-Lopez", "organization_type": "church"},
        headers=auth_headers,
    ).json()["profile"]

    assert updated["id"] == created["id"]
    assert updated["full_name"] == "Maria Ruiz-Lopez"
    # omitted fields are cleared, the form always sends the full profile
    assert updated["organization"] is None
    assert updated["organization_type"] == "church"
    assert updated["updated_at"] is not None

    me = client.get("/api/auth/me", headers=auth_headers).json()
    assert me["profile"]["full_name"] == "Maria Ruiz-Lopez"


def test_profile_requires_full_name(client, auth_headers):
    blank = client.put("/api/profile", json={"full_name": "  "}, headers=auth_headers)
    assert blank.status_code == 400
    assert blank.json()["detail"] == "Full name is required"

    assert client.put("/api/profile", json={"role": "Volunteer"}, headers=auth_headers).status_code == 422


def test_profile_needs_authentication(client):
    assert client.get("/api/profile").status_code == 401
    assert client.put("/api/profile", json={"full_name": "Anon"}).status_code == 401
