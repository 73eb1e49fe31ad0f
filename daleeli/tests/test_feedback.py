from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from daleeli.app import app
from daleeli.auth.users import clear_users
from daleeli.feedback.store import clear_feedback, get_feedback


@pytest.fixture(autouse=True)
def fresh_store():
    clear_feedback()
    clear_users()
    yield
    clear_feedback()
    clear_users()


def test_feedback_anonymous():
    c = TestClient(app)
    resp = c.post("/feedback", json={"type": "bug", "message": "  Map link is broken  "})
    assert resp.status_code == 200
    assert resp.json() == {"status": "recorded", "total_feedback": 1}

    entry = get_feedback()[0]
    assert entry["type"] == "bug"
    assert entry["message"] == "Map link is broken"
    assert entry["language"] == "en"
    assert entry["user_email"] is None


def test_feedback_defaults_to_general():
    c = TestClient(app)
    c.post("/feedback", json={"message": "Love it"})
    assert get_feedback()[0]["type"] == "feedback"


def test_feedback_records_user_and_language():
    c = TestClient(app)
    c.post("/auth/signup", json={
        "name": "Omar",
        "email": "omar@example.com",
        "password": "secret123",
        "confirm_password": "secret123",
        "accept_terms": True,
    })
    c.post("/session/language", json={"language": "ar"})

    resp = c.post("/feedback", json={"type": "suggestion", "message": "أضيفوا المزيد من المدن"})

    assert resp.status_code == 200
    entry = get_feedback()[0]
    assert entry["user_email"] == "omar@example.com"
    assert entry["language"] == "ar"


def test_feedback_counts_accumulate():
    c = TestClient(app)
    c.post("/feedback", json={"message": "one"})
    resp = c.post("/feedback", json={"message": "two"})
    assert resp.json()["total_feedback"] == 2


def test_feedback_rejects_empty_message():
    c = TestClient(app)
    assert c.post("/feedback", json={"message": ""}).status_code == 422
    assert c.post("/feedback", json={"type": "rant", "message": "x"}).status_code == 422
