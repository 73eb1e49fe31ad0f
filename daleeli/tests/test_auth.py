from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from daleeli.app import app
from daleeli.auth.users import clear_users

SIGNUP = {
    "name": "Layla",
    "email": "Layla@Example.com",
    "password": "secret123",
    "confirm_password": "secret123",
    "accept_terms": True,
}


@pytest.fixture(autouse=True)
def fresh_users():
    clear_users()
    yield
    clear_users()


def _signup(c, **overrides):
    return c.post("/auth/signup", json={**SIGNUP, **overrides})


# ── Signup ───────────────────────────────────────────────────────────────


def test_signup_logs_in():
    c = TestClient(app)
    resp = _signup(c)
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user == {
        "name": "Layla",
        "email": "layla@example.com",
        "avatar": None,
        "preferences": [],
    }
    assert c.get("/auth/me").json()["email"] == "layla@example.com"
    assert c.get("/session").json()["user_email"] == "layla@example.com"


def test_signup_duplicate_email():
    c = TestClient(app)
    _signup(c)
    resp = _signup(TestClient(app), email="layla@example.com")
    assert resp.status_code == 400
    assert "already exists" in resp.json()["detail"]


def test_signup_password_mismatch():
    resp = _signup(TestClient(app), confirm_password="different")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Passwords do not match"


def test_signup_requires_terms():
    resp = _signup(TestClient(app), accept_terms=False)
    assert resp.status_code == 400


def test_signup_validates_fields():
    c = TestClient(app)
    assert _signup(c, email="not-an-email").status_code == 422
    assert _signup(c, password="123", confirm_password="123").status_code == 422


# ── Login / Logout ───────────────────────────────────────────────────────


def test_login_success():
    _signup(TestClient(app))
    c = TestClient(app)
    resp = c.post("/auth/login", json={"email": "LAYLA@example.com", "password": "secret123"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["user"]["name"] == "Layla"


def test_login_wrong_password():
    _signup(TestClient(app))
    resp = TestClient(app).post("/auth/login", json={"email": "layla@example.com", "password": "wrong"})
    assert resp.status_code == 401


def test_login_unknown_user():
    resp = TestClient(app).post("/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 401


def test_auth_me_not_logged_in():
    c = TestClient(app)  # fresh client, no session
    assert c.get("/auth/me").status_code == 401


def test_logout():
    c = TestClient(app)
    _signup(c)
    resp = c.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["status"] == "logged_out"
    assert c.get("/auth/me").status_code == 401


# ── Profile ──────────────────────────────────────────────────────────────


def test_profile_requires_login():
    assert TestClient(app).get("/profile").status_code == 401


def test_profile_update():
    c = TestClient(app)
    _signup(c)

    resp = c.put("/profile", json={"name": "Layla A.", "preferences": ["cafes", "museums"]})

    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Layla A."
    assert body["preferences"] == ["cafes", "museums"]
    assert body["email"] == "layla@example.com"
    assert c.get("/profile").json() == body


# ── Public endpoints stay public ─────────────────────────────────────────


def test_recommendations_last_is_public():
    assert TestClient(app).get("/recommendations/last").status_code == 200


def test_metadata_is_public():
    assert TestClient(app).get("/metadata").status_code == 200
