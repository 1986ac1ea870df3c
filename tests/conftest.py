"""Shared test fixtures.

Uses an in-memory SQLite engine shared across connections so the API and the
test body see the same data. The clock is pinned to a Wednesday morning.
"""

import os

os.environ.setdefault("NAILBOOK_DATABASE_URL", "sqlite://")
os.environ.setdefault("NAILBOOK_SECRET_KEY", "test-secret")

from dataclasses import dataclass
from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from nailbook import models  # noqa: F401  registers tables
from nailbook.core import WeeklySchedule
from nailbook.core.clock import DAY_NAMES
from nailbook.core.schedule import DaySchedule, TimeInterval
from nailbook.db import get_session
from nailbook.deps import get_now
from nailbook.main import app

NOW = datetime(2026, 3, 4, 10, 0)  # Wednesday
NEXT_MONDAY = date(2026, 3, 9)
NEXT_SATURDAY = date(2026, 3, 7)


def monday_only(*intervals) -> WeeklySchedule:
    days = {name: DaySchedule(enabled=False) for name in DAY_NAMES}
    days["monday"] = DaySchedule(
        enabled=True,
        intervals=tuple(TimeInterval.of(s, e) for s, e in intervals),
    )
    return WeeklySchedule(days)


@dataclass
class FakeAppointment:
    date: date
    start_time: str
    end_time: str
    status: str = "confirmed"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_now] = lambda: NOW
    yield TestClient(app)
    app.dependency_overrides.clear()


def register_and_login(client, email, password="secret-pass-1", name="Test"):
    resp = client.post("/users", json={"email": email, "password": password, "display_name": name})
    assert resp.status_code == 201
    resp = client.post("/auth/login", data={"username": email, "password": password})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    # the first account registered becomes the admin
    return register_and_login(client, "owner@salon.test", name="Owner")


@pytest.fixture
def client_headers(client, admin_headers):
    return register_and_login(client, "ana@example.com", name="Ana")


@pytest.fixture
def other_client_headers(client, admin_headers):
    return register_and_login(client, "bea@example.com", name="Bea")


@pytest.fixture
def manicure(client, admin_headers):
    resp = client.post("/services", headers=admin_headers, json={
        "name": "Manicure",
        "description": "Classic manicure",
        "duration_minutes": 60,
        "price": 1000,
    })
    assert resp.status_code == 201
    return resp.json()
