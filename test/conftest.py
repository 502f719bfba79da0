from __future__ import annotations

from datetime import datetime

import pytest

import portal_app
from portal_store import KeyValueStore

# a Monday
FIXED_NOW = datetime(2026, 10, 19, 15, 0)

STUDENT_FORM = {
    "studentId": "2023-0001",
    "fullName": "Juan Dela Cruz",
    "section": "BSIT 3A",
    "program": "BS Information Technology",
    "yearLevel": "3rd Year",
    "email": "juan@example.com",
    "password": "secret",
}


@pytest.fixture
def now(monkeypatch: pytest.MonkeyPatch):
    """Freeze the clock the web routes read."""
    monkeypatch.setattr(portal_app, "_now", lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def app(now):
    return portal_app.create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "STORE_PATH": "",
    })


@pytest.fixture
def store(app) -> KeyValueStore:
    return app.extensions["portal_store"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def student_client(client):
    """A client logged in as a freshly registered student."""
    client.post("/register", data=STUDENT_FORM)
    resp = client.post("/login", data={"username": STUDENT_FORM["studentId"], "password": "secret"})
    assert resp.status_code == 302
    return client


@pytest.fixture
def admin_client(client):
    resp = client.post("/login", data={"username": "Admin123", "password": "CCS2025"})
    assert resp.status_code == 302
    return client
