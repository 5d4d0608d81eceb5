# tests/conftest.py
import os
import sys
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

# Flat module layout, same as running uvicorn from inside prixfinance/
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "prixfinance")))
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

import repository
from database import get_db
from fake_firestore import FakeFirestore
from main import app

ALICE = "alice@example.com"
BOB = "bob@example.com"


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def clock(monkeypatch):
    """Store clock that advances one minute on every write."""
    ticks = {"now": datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)}

    def fake_now():
        ticks["now"] += timedelta(minutes=1)
        return ticks["now"]

    monkeypatch.setattr(repository, "now", fake_now)
    return ticks


@pytest.fixture
def client(db, clock):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def alice(client):
    resp = client.post("/users/create", json={"email": ALICE})
    assert resp.status_code == 201
    return resp.json()["userId"]


@pytest.fixture
def bob(client):
    resp = client.post("/users/create", json={"email": BOB})
    assert resp.status_code == 201
    return resp.json()["userId"]
