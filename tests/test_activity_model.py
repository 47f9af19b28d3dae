"""Tests for building and recording ledger activities."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from models import ActivityType
from services.activity_service import build_activity, record_activity
from services.errors import ValidationError


def tenant(**fields):
    defaults = {
        "id": 1,
        "last_meter_reading": None,
        "start_month_meter_reading": Decimal("500"),
        "base_electricity_multiplier": Decimal("7"),
    }
    defaults.update(fields)
    return SimpleNamespace(**defaults)


class TestBuildActivity:
    def test_payment_is_positive(self):
        activity = build_activity(1, tenant(), "Payment", "October rent", date(2026, 10, 5), amount="12000")
        assert activity.type == ActivityType.PAYMENT
        assert activity.amount == Decimal("12000")

    def test_expense_is_negative(self):
        activity = build_activity(1, tenant(), ActivityType.EXPENSE, "Plumbing", date(2026, 10, 5), amount=Decimal("850"))
        assert activity.amount == Decimal("-850")

    @pytest.mark.parametrize("activity_type", ["Payment", "Expense"])
    def test_amount_required(self, activity_type):
        with pytest.raises(ValidationError) as exc:
            build_activity(1, tenant(), activity_type, "", date(2026, 10, 5))
        assert exc.value.field == "amount"

    @pytest.mark.parametrize("activity_type", ["Payment", "Expense"])
    def test_negative_amount_rejected(self, activity_type):
        with pytest.raises(ValidationError):
            build_activity(1, tenant(), activity_type, "", date(2026, 10, 5), amount=-5)

    def test_non_numeric_amount_rejected(self):
        with pytest.raises(ValidationError):
            build_activity(1, tenant(), "Payment", "", date(2026, 10, 5), amount="ten")

    def test_other_types_keep_sign_as_given(self):
        activity = build_activity(1, tenant(), "Maintenance", "Deposit refund", date(2026, 10, 5), amount=Decimal("-300"))
        assert activity.amount == Decimal("-300")

    def test_other_types_amount_optional(self):
        activity = build_activity(1, tenant(), "Notice", "Water off on Sunday", date(2026, 10, 5))
        assert activity.amount is None

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError) as exc:
            build_activity(1, tenant(), "Refund", "", date(2026, 10, 5), amount=1)
        assert exc.value.field == "type"

    def test_date_defaults_to_today(self):
        activity = build_activity(1, tenant(), "Payment", "", amount=10)
        assert activity.date == date.today()

    def test_electricity_bill_from_start_reading(self):
        activity = build_activity(
            1, tenant(), "Electricity Bill", "October 2026", date(2026, 10, 19), current_meter_reading=520
        )
        assert activity.amount == Decimal("-140")
        assert activity.previous_meter_reading == Decimal("500")
        assert activity.current_meter_reading == Decimal("520")
        assert activity.base_electricity_multiplier == Decimal("7")

    def test_electricity_bill_from_last_reading(self):
        activity = build_activity(
            1,
            tenant(last_meter_reading=Decimal("520"), base_electricity_multiplier=Decimal("8")),
            "Electricity Bill",
            "November 2026",
            date(2026, 11, 19),
            current_meter_reading=Decimal("545"),
        )
        assert activity.previous_meter_reading == Decimal("520")
        assert activity.amount == Decimal("-200")

    def test_electricity_bill_ignores_supplied_amount(self):
        activity = build_activity(
            1, tenant(), "Electricity Bill", "", date(2026, 10, 19), amount=5, current_meter_reading=510
        )
        assert activity.amount == Decimal("-70")

    def test_electricity_bill_requires_reading(self):
        with pytest.raises(ValidationError) as exc:
            build_activity(1, tenant(), "Electricity Bill", "", date(2026, 10, 19))
        assert exc.value.field == "current_meter_reading"

    def test_electricity_bill_rejects_meter_rollback(self):
        with pytest.raises(ValidationError):
            build_activity(
                1, tenant(last_meter_reading=Decimal("600")), "Electricity Bill", "", date(2026, 10, 19),
                current_meter_reading=590,
            )

    def test_electricity_bill_same_reading_is_zero(self):
        activity = build_activity(1, tenant(), "Electricity Bill", "", date(2026, 10, 19), current_meter_reading=500)
        assert activity.amount == Decimal("0")


class TestRecordActivity:
    def test_bill_moves_last_meter_reading(self, store, owner, make_tenant):
        tenant = make_tenant(start_month_meter_reading=Decimal("500"), base_electricity_multiplier=Decimal("7"))

        activity = record_activity(
            store, owner.id, tenant, "Electricity Bill", "October 2026", date(2026, 10, 19),
            current_meter_reading=Decimal("520"),
        )

        assert activity.id is not None
        assert activity.amount == Decimal("-140")
        assert store.get_by_id("tenants", tenant.id, owner.id).last_meter_reading == Decimal("520")

    def test_consecutive_bills_chain_readings(self, store, owner, make_tenant):
        tenant = make_tenant()
        record_activity(store, owner.id, tenant, "Electricity Bill", "", date(2026, 9, 19), current_meter_reading=520)
        second = record_activity(store, owner.id, tenant, "Electricity Bill", "", date(2026, 10, 19), current_meter_reading=530)

        assert second.previous_meter_reading == Decimal("520")
        assert second.amount == Decimal("-70")
        assert tenant.last_meter_reading == Decimal("530")

    def test_multiplier_snapshot_survives_tenant_change(self, store, owner, make_tenant):
        tenant = make_tenant()
        bill = record_activity(store, owner.id, tenant, "Electricity Bill", "", date(2026, 10, 19), current_meter_reading=520)

        store.update("tenants", tenant.id, owner.id, {"base_electricity_multiplier": Decimal("10")})

        assert store.get_by_id("activities", bill.id, owner.id).base_electricity_multiplier == Decimal("7")

    def test_rejected_bill_writes_nothing(self, store, owner, make_tenant):
        tenant = make_tenant(last_meter_reading=Decimal("600"))

        with pytest.raises(ValidationError):
            record_activity(store, owner.id, tenant, "Electricity Bill", "", date(2026, 10, 19), current_meter_reading=550)

        assert store.query_by_owner("activities", owner.id) == []
        assert tenant.last_meter_reading == Decimal("600")

    def test_payment_leaves_meter_untouched(self, store, owner, make_tenant):
        tenant = make_tenant()
        record_activity(store, owner.id, tenant, "Payment", "Rent", date(2026, 10, 5), amount=12000)
        assert tenant.last_meter_reading is None
