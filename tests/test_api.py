"""End-to-end tests through the FastAPI app."""

from datetime import date, timedelta
from decimal import Decimal
from unittest import mock

import pytest
from sqlalchemy.exc import OperationalError

import config
from tests.conftest import register


def create_tenant(client, headers, **fields):
    body = {
        "name": "Ravi Kumar",
        "phone": "9876543210",
        "rent_amount": 12000,
        "start_month_meter_reading": 500,
    }
    body.update(fields)
    response = client.post("/api/tenants", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def record(client, headers, tenant_id, **body):
    return client.post(f"/api/tenants/{tenant_id}/activities", json=body, headers=headers)


class TestAuth:
    def test_register_and_me(self, client):
        headers = register(client, "Asha@Example.com")
        response = client.get("/api/auth/me", headers=headers)
        assert response.status_code == 200
        assert response.json()["email"] == "asha@example.com"

    def test_email_in_use(self, client, auth_headers):
        response = client.post("/api/auth/register", json={"email": "landlord@example.com", "password": "another-pass"})
        assert response.status_code == 409
        assert response.json()["detail"] == {"code": "email-in-use", "message": "Email is already registered"}

    @pytest.mark.parametrize("email, password, code", [
        ("not-an-email", "secret-pass", "invalid-email"),
        ("landlord@example.com", "123", "weak-password"),
    ])
    def test_rejected_registration(self, client, email, password, code):
        response = client.post("/api/auth/register", json={"email": email, "password": password})
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == code

    def test_signups_disabled(self, client, monkeypatch):
        monkeypatch.setattr(config, "ALLOW_SIGNUPS", False)
        response = client.post("/api/auth/register", json={"email": "a@example.com", "password": "secret-pass"})
        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "operation-not-allowed"

    def test_login(self, client, auth_headers):
        ok = client.post("/api/auth/login", json={"email": "landlord@example.com", "password": "secret-pass"})
        assert ok.status_code == 200
        assert ok.json()["token"]

        bad = client.post("/api/auth/login", json={"email": "landlord@example.com", "password": "wrong-pass"})
        assert bad.status_code == 401
        assert bad.json()["detail"] == {"code": "invalid-credential", "message": "Invalid email or password"}

    def test_missing_and_invalid_token(self, client):
        assert client.get("/api/tenants").status_code == 401
        assert client.get("/api/tenants", headers={"Authorization": "Bearer nonsense"}).status_code == 403


class TestProperties:
    def test_crud(self, client, auth_headers):
        created = client.post("/api/properties", json={"name": "Lakeview", "units": 4}, headers=auth_headers)
        assert created.status_code == 201
        prop_id = created.json()["id"]

        updated = client.put(f"/api/properties/{prop_id}", json={"units": 6}, headers=auth_headers)
        assert updated.json()["units"] == 6
        assert updated.json()["name"] == "Lakeview"

        listing = client.get("/api/properties", headers=auth_headers).json()
        assert listing["total"] == 1

        tenant = create_tenant(client, auth_headers, property_id=prop_id)
        assert tenant["property_name"] == "Lakeview"

        deleted = client.delete(f"/api/properties/{prop_id}", headers=auth_headers)
        assert deleted.json() == {"deleted": True, "property_id": prop_id, "tenants_detached": 1}

        detached = client.get(f"/api/tenants/{tenant['id']}", headers=auth_headers).json()
        assert detached["property_id"] is None
        assert detached["property_name"] == "Lakeview"


class TestTenants:
    def test_create_formats_phone(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        assert tenant["phone"] == "+91 9876543210"
        assert tenant["status"] == "Active"
        assert Decimal(tenant["balance"]) == 0

    def test_phone_too_long(self, client, auth_headers):
        response = client.post("/api/tenants", json={"name": "X", "phone": "98765432101"}, headers=auth_headers)
        assert response.status_code == 422

    def test_update_cannot_set_meter_reading(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        response = client.put(f"/api/tenants/{tenant['id']}", json={"last_meter_reading": 1}, headers=auth_headers)
        assert response.status_code == 422

    def test_list_grouped(self, client, auth_headers):
        create_tenant(client, auth_headers, name="Beta")
        create_tenant(client, auth_headers, name="Alpha")

        body = client.get("/api/tenants?group=true", headers=auth_headers).json()

        assert [t["name"] for t in body["tenants"]] == ["Alpha", "Beta"]
        assert list(body["groups"]) == ["Unassigned"]

    def test_bad_sort(self, client, auth_headers):
        response = client.get("/api/tenants?sort_by=rent", headers=auth_headers)
        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "sort_by"

    def test_delete_cascades(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        record(client, auth_headers, tenant["id"], type="Payment", amount=100, description="Rent")
        record(client, auth_headers, tenant["id"], type="Expense", amount=50, description="Repairs")

        response = client.delete(f"/api/tenants/{tenant['id']}", headers=auth_headers)

        assert response.json()["activities_deleted"] == 2
        assert client.get(f"/api/tenants/{tenant['id']}", headers=auth_headers).status_code == 404


class TestActivities:
    def test_electricity_bill(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)

        response = record(client, auth_headers, tenant["id"], type="Electricity Bill",
                          description="October 2026", current_meter_reading=520)

        assert response.status_code == 201, response.text
        bill = response.json()
        assert Decimal(bill["amount"]) == Decimal("-140")
        assert Decimal(bill["previous_meter_reading"]) == Decimal("500")
        assert bill["tenant_name"] == "Ravi Kumar"

        reloaded = client.get(f"/api/tenants/{tenant['id']}", headers=auth_headers).json()
        assert Decimal(reloaded["last_meter_reading"]) == Decimal("520")
        assert Decimal(reloaded["balance"]) == Decimal("-140")

        detail = client.get(f"/api/activities/{bill['id']}", headers=auth_headers).json()
        assert Decimal(detail["electricity_breakdown"]["units_consumed"]) == Decimal("20")

    def test_meter_rollback_rejected(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        record(client, auth_headers, tenant["id"], type="Electricity Bill", current_meter_reading=520)

        response = record(client, auth_headers, tenant["id"], type="Electricity Bill", current_meter_reading=510)

        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "current_meter_reading"
        ledger = client.get(f"/api/tenants/{tenant['id']}/activities", headers=auth_headers).json()
        assert len(ledger["activities"]) == 1

    def test_payment_requires_amount(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        response = record(client, auth_headers, tenant["id"], type="Payment", description="Rent")
        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "amount"

    def test_ledger_balance(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        record(client, auth_headers, tenant["id"], type="Expense", amount=12000, description="Rent")
        record(client, auth_headers, tenant["id"], type="Payment", amount=10000, description="Part payment")

        ledger = client.get(f"/api/tenants/{tenant['id']}/activities", headers=auth_headers).json()

        assert Decimal(ledger["balance"]) == Decimal("-2000")
        assert len(ledger["activities"]) == 2

    def test_share(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        payment = record(client, auth_headers, tenant["id"], type="Payment", amount=12000,
                         description="October rent", date="2026-10-05").json()

        share = client.get(f"/api/activities/{payment['id']}/share", headers=auth_headers).json()

        assert share["message"].startswith("Thank you for your payment of ₹12,000.00 for October rent.")
        assert share["whatsapp_url"].startswith("https://wa.me/919876543210?text=Thank%20you")
        assert share["sms_url"].startswith("sms:9876543210&body=")

    def test_feed_limit(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        for i in range(4):
            record(client, auth_headers, tenant["id"], type="Payment", amount=1, description=f"P{i}")

        feed = client.get("/api/activities?limit=3", headers=auth_headers).json()

        assert len(feed["activities"]) == 3
        assert feed["limit"] == 3


class TestReconcile:
    def test_rent_once_per_month(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        url = f"/api/tenants/{tenant['id']}/reconcile?as_of=2026-10-19"

        first = client.post(url, headers=auth_headers).json()
        second = client.post(url, headers=auth_headers).json()

        assert first["rent_activity"]["description"] == "Monthly Rent for October 2026"
        assert Decimal(first["rent_activity"]["amount"]) == Decimal("-12000")
        assert second["rent_activity"] is None
        assert Decimal(second["balance"]) == Decimal("-12000")

    def test_reading_a_tenant_never_charges_rent(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        client.get(f"/api/tenants/{tenant['id']}", headers=auth_headers)
        ledger = client.get(f"/api/tenants/{tenant['id']}/activities", headers=auth_headers).json()
        assert ledger["activities"] == []


class TestDashboard:
    def test_summary(self, client, auth_headers):
        owing = create_tenant(client, auth_headers, name="Owing")
        gone = create_tenant(client, auth_headers, name="Gone", status="Inactive")
        recent = (date.today() - timedelta(days=3)).isoformat()
        stale = (date.today() - timedelta(days=250)).isoformat()

        record(client, auth_headers, owing["id"], type="Expense", amount=500, date=recent)
        record(client, auth_headers, owing["id"], type="Expense", amount=9000, date=stale)
        record(client, auth_headers, gone["id"], type="Expense", amount=700, date=recent)

        body = client.get("/api/dashboard", headers=auth_headers).json()

        assert body["tenant_count"] == 2
        assert body["active_tenant_count"] == 1
        assert Decimal(body["total_amount_owed"]) == Decimal("500")
        assert len(body["recent_activities"]) == 2


class TestOwnerIsolation:
    def test_other_landlord_sees_nothing(self, client, auth_headers):
        tenant = create_tenant(client, auth_headers)
        payment = record(client, auth_headers, tenant["id"], type="Payment", amount=100).json()
        intruder = register(client, "intruder@example.com")

        assert client.get(f"/api/tenants/{tenant['id']}", headers=intruder).status_code == 404
        assert client.get(f"/api/activities/{payment['id']}", headers=intruder).status_code == 404
        assert record(client, intruder, tenant["id"], type="Payment", amount=1).status_code == 404
        assert client.delete(f"/api/tenants/{tenant['id']}", headers=intruder).status_code == 404
        assert client.get("/api/tenants", headers=intruder).json()["total"] == 0


class TestStoreFailure:
    def test_store_error_becomes_503(self, client, auth_headers):
        failure = OperationalError("SELECT", {}, Exception("connection reset"))
        with mock.patch("sqlalchemy.orm.Query.all", side_effect=failure):
            response = client.get("/api/tenants", headers=auth_headers)

        assert response.status_code == 503
        assert response.json() == {"detail": "The ledger store is unavailable. Please try again."}
