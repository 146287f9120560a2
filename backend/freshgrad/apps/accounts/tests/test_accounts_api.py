from __future__ import annotations


def _register(client, email="api@example.com", password="pw", name="Api User", **extra):
    body = {"email": email, "password": password, "name": name, **extra}
    return client.post("/api/users/auth/register", json=body)


def test_register_then_duplicate_in_other_case(client):
    first = _register(client, email="X@Y.com", password="p", name="N")
    second = _register(client, email="x@y.com", password="p", name="N")

    assert first.status_code == 201
    body = first.json()
    assert body["email"] == "x@y.com"
    assert body["role"] == "Teacher"
    assert body["verified"] is True
    assert body["applicantStatus"] == "None"
    assert "password" not in body and "hashedPassword" not in body
    assert second.status_code == 409


def test_register_with_short_role_name(client):
    response = _register(client, email="mgr@example.com", role="Manager")

    assert response.status_code == 201
    assert response.json()["role"] == "ECAE Manager"


def test_login_and_me(client):
    _register(client, email="me@example.com", password="pw", name="Me")

    login = client.post("/api/users/auth/login", json={"email": "ME@example.com", "password": "pw"})
    assert login.status_code == 200
    payload = login.json()
    assert payload["tokenType"] == "bearer"
    assert payload["name"] == "Me"

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {payload['accessToken']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "me@example.com"


def test_me_requires_valid_token(client):
    assert client.get("/api/users/me").status_code == 401
    bad = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert bad.status_code == 401


def test_login_failures_are_401(client):
    _register(client, email="me@example.com", password="pw")

    wrong_pw = client.post("/api/users/auth/login", json={"email": "me@example.com", "password": "x"})
    unknown = client.post("/api/users/auth/login", json={"email": "who@example.com", "password": "pw"})

    assert wrong_pw.status_code == 401
    assert unknown.status_code == 401
    assert wrong_pw.json() == unknown.json() == {"detail": "Invalid credentials"}


def test_user_crud_by_email(client):
    _register(client, email="crud@example.com", name="Crud")

    listed = client.get("/api/users")
    assert [u["email"] for u in listed.json()] == ["crud@example.com"]

    updated = client.put("/api/users/CRUD@example.com", json={"verified": False, "docs": {"cv": "cv.pdf"}})
    assert updated.status_code == 200
    assert updated.json()["verified"] is False
    assert updated.json()["docs"] == {"cv": "cv.pdf"}
    assert updated.json()["name"] == "Crud"

    assert client.get("/api/users/crud@example.com").json()["docs"] == {"cv": "cv.pdf"}

    deleted = client.delete("/api/users/crud@example.com")
    assert deleted.json() == {"success": True}
    assert client.get("/api/users/crud@example.com").status_code == 404
    assert client.delete("/api/users/crud@example.com").status_code == 404
