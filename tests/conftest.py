"""Shared fixtures: in-memory SQLite database, ledger store and API client."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ALLOW_SIGNUPS"] = "true"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from database import SessionLocal, engine
from main import app
from models import Base, Property, Tenant, TenantStatus, User
from services.ledger_store import LedgerStore


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def store(db):
    return LedgerStore(db)


def _make_user(db, email):
    user = User(email=email, password="not-a-real-hash")
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def owner(db):
    return _make_user(db, "owner@example.com")


@pytest.fixture
def other_owner(db):
    return _make_user(db, "someone-else@example.com")


@pytest.fixture
def make_tenant(store, owner):
    """Factory for persisted tenants owned by `owner`."""

    def _make(**overrides):
        fields = {
            "name": "Ravi Kumar",
            "phone": "+91 9876543210",
            "rent_amount": Decimal("12000"),
            "status": TenantStatus.ACTIVE,
            "base_electricity_multiplier": Decimal("7"),
            "start_month_meter_reading": Decimal("500"),
            "lease_start": date(2026, 1, 1),
        }
        fields.update(overrides)
        tenant = Tenant(owner_id=fields.pop("owner_id", owner.id), **fields)
        store.insert("tenants", tenant)
        return tenant

    return _make


@pytest.fixture
def make_property(store, owner):
    def _make(**overrides):
        fields = {"name": "Lakeview Apartments", "address": "12 MG Road", "units": 4}
        fields.update(overrides)
        prop = Property(owner_id=fields.pop("owner_id", owner.id), **fields)
        store.insert("properties", prop)
        return prop

    return _make


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def register(client, email="landlord@example.com", password="secret-pass"):
    response = client.post("/api/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return register(client)
