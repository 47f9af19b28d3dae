# services/billing.py
"""
Electricity billing calculator.

A bill is the meter-reading delta times the tenant's per-unit multiplier:

     charge = (current_reading - last_reading) * multiplier

The calculator itself does not reject a reading lower than the last one; it
returns a negative charge. Rejecting meter rollbacks is the caller's job
(see services.activity_service.build_activity).
"""
from decimal import Decimal, InvalidOperation

from .errors import ValidationError

DEFAULT_ELECTRICITY_MULTIPLIER = Decimal("7")


def to_decimal(value, field: str = "value") -> Decimal:
     """Coerce a number or numeric string to Decimal; ValidationError otherwise."""
     if isinstance(value, Decimal):
          return value
     if isinstance(value, bool) or value is None:
          raise ValidationError(f"{field} must be a number", field=field)
     try:
          result = Decimal(str(value).strip())
     except (InvalidOperation, ValueError):
          raise ValidationError(f"{field} must be a number", field=field)
     if not result.is_finite():
          raise ValidationError(f"{field} must be a number", field=field)
     return result


def resolve_last_reading(tenant) -> Decimal:
     """last_meter_reading if set, else start_month_meter_reading, else 0."""
     if tenant.last_meter_reading is not None:
          return Decimal(tenant.last_meter_reading)
     if tenant.start_month_meter_reading is not None:
          return Decimal(tenant.start_month_meter_reading)
     return Decimal("0")


def resolve_multiplier(tenant) -> Decimal:
     """Tenant's base_electricity_multiplier, or the default of 7."""
     if tenant.base_electricity_multiplier is not None:
          return Decimal(tenant.base_electricity_multiplier)
     return DEFAULT_ELECTRICITY_MULTIPLIER


def units_consumed(current_reading, last_reading) -> Decimal:
     return to_decimal(current_reading, "current_reading") - to_decimal(last_reading, "last_reading")


def compute_charge(current_reading, last_reading, multiplier) -> Decimal:
     """
     Charge for the consumption between two readings.

     Negative consumption yields a negative charge:
          compute_charge(90, 100, 7) == Decimal("-70")
     """
     units = units_consumed(current_reading, last_reading)
     return units * to_decimal(multiplier, "multiplier")
