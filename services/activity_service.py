# services/activity_service.py
"""
Activity Service - validation and recording of ledger entries.

build_activity() turns raw input into an unsaved Activity, applying the sign
convention per type. record_activity() persists it; for an Electricity Bill it
also moves the tenant's last_meter_reading forward in the same transaction.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from models import Activity, ActivityType
from .billing import compute_charge, resolve_last_reading, resolve_multiplier, to_decimal
from .errors import ValidationError
from .ledger_store import LedgerStore

logger = logging.getLogger(__name__)


def parse_activity_type(value) -> ActivityType:
     if isinstance(value, ActivityType):
          return value
     try:
          return ActivityType(value)
     except ValueError:
          raise ValidationError(f"Unknown activity type '{value}'", field="type")


def _required_amount(amount, activity_type: ActivityType) -> Decimal:
     if amount is None or amount == "":
          raise ValidationError(f"Amount is required for {activity_type.value}", field="amount")
     value = to_decimal(amount, "amount")
     if value < 0:
          raise ValidationError("Amount must not be negative", field="amount")
     return value


def build_activity(
     owner_id: int,
     tenant,
     activity_type,
     description: str = "",
     activity_date: Optional[date] = None,
     amount=None,
     current_meter_reading=None,
) -> Activity:
     """
     Create an unsaved Activity for a tenant.

     - Payment: amount required, >= 0, stored positive
     - Expense: amount required, >= 0, stored negative
     - Electricity Bill: current_meter_reading required; amount is the
       computed charge, stored negative; the previous reading and the
       multiplier are snapshotted from the tenant
     - anything else: amount optional, stored as given

     Raises:
          ValidationError: on missing or malformed input, or a meter reading
               below the tenant's last reading
     """
     activity_type = parse_activity_type(activity_type)
     if activity_date is None:
          activity_date = date.today()

     activity = Activity(
          owner_id=owner_id,
          tenant_id=tenant.id,
          type=activity_type,
          description=(description or "").strip(),
          date=activity_date,
     )

     if activity_type == ActivityType.PAYMENT:
          activity.amount = _required_amount(amount, activity_type)

     elif activity_type == ActivityType.EXPENSE:
          activity.amount = -_required_amount(amount, activity_type)

     elif activity_type == ActivityType.ELECTRICITY_BILL:
          if current_meter_reading is None or current_meter_reading == "":
               raise ValidationError(
                    "Current meter reading is required for an Electricity Bill",
                    field="current_meter_reading",
               )
          reading = to_decimal(current_meter_reading, "current_meter_reading")
          if reading < 0:
               raise ValidationError("Meter reading must not be negative", field="current_meter_reading")

          previous = resolve_last_reading(tenant)
          if reading < previous:
               # Meter rollback: reject instead of billing a negative charge
               raise ValidationError(
                    f"Meter reading {reading} is lower than the last reading {previous}",
                    field="current_meter_reading",
               )
          multiplier = resolve_multiplier(tenant)

          activity.amount = -compute_charge(reading, previous, multiplier)
          activity.current_meter_reading = reading
          activity.previous_meter_reading = previous
          activity.base_electricity_multiplier = multiplier

     else:
          activity.amount = None if amount is None or amount == "" else to_decimal(amount, "amount")

     return activity


def record_activity(
     store: LedgerStore,
     owner_id: int,
     tenant,
     activity_type,
     description: str = "",
     activity_date: Optional[date] = None,
     amount=None,
     current_meter_reading=None,
) -> Activity:
     """
     Validate and persist an activity.

     For an Electricity Bill the tenant's last_meter_reading is updated in the
     same session, so both writes commit together or not at all.
     """
     activity = build_activity(
          owner_id,
          tenant,
          activity_type,
          description=description,
          activity_date=activity_date,
          amount=amount,
          current_meter_reading=current_meter_reading,
     )
     store.insert("activities", activity)

     if activity.type == ActivityType.ELECTRICITY_BILL:
          store.update(
               "tenants",
               tenant.id,
               owner_id,
               {"last_meter_reading": activity.current_meter_reading},
          )
          logger.info(
               "Electricity bill %s for tenant %s: %s -> %s, amount %s",
               activity.id, tenant.id, activity.previous_meter_reading,
               activity.current_meter_reading, activity.amount,
          )

     return activity
