# utils/sharing.py
"""
Plain-text messages for sharing a ledger entry with a tenant (WhatsApp / SMS).

Three templates: Electricity Bill, Payment, and a generic one for every other
activity type. Field order matches what tenants already receive.
"""
import calendar
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from urllib.parse import quote

from models import ActivityType

CURRENCY_SYMBOL = "₹"
DEFAULT_COUNTRY_CODE = "91"

# encodeURIComponent leaves these unescaped
_URI_SAFE = "-_.!~*'()"


def _group_indian(integer_part: str) -> str:
     """1234567 -> 12,34,567"""
     if len(integer_part) <= 3:
          return integer_part
     head, tail = integer_part[:-3], integer_part[-3:]
     groups = []
     while len(head) > 2:
          groups.insert(0, head[-2:])
          head = head[:-2]
     if head:
          groups.insert(0, head)
     return ",".join(groups) + "," + tail


def format_currency(amount) -> str:
     """Decimal('-1234.5') -> '-₹1,234.50'"""
     if amount is None:
          return "-"
     value = Decimal(amount).quantize(Decimal("0.01"))
     sign = "-" if value < 0 else ""
     integer_part, fraction = f"{abs(value):.2f}".split(".")
     return f"{sign}{CURRENCY_SYMBOL}{_group_indian(integer_part)}.{fraction}"


def format_number(value) -> str:
     """Meter readings and multipliers without trailing zeros: 520.00 -> '520'."""
     if value is None:
          return "-"
     normalized = Decimal(value).normalize()
     return f"{normalized:f}"


def format_date(value) -> str:
     """date -> '05/Oct/2026'; datetime -> '05/Oct/2026 3:04 PM'"""
     if value is None or value == "":
          return ""
     if isinstance(value, str):
          try:
               value = date.fromisoformat(value) if len(value) == 10 else datetime.fromisoformat(value)
          except ValueError:
               return ""
     if isinstance(value, datetime):
          hour = value.hour % 12 or 12
          ampm = "PM" if value.hour >= 12 else "AM"
          return f"{value.day:02d}/{calendar.month_abbr[value.month]}/{value.year} {hour}:{value.minute:02d} {ampm}"
     if isinstance(value, date):
          return f"{value.day:02d}/{calendar.month_abbr[value.month]}/{value.year}"
     return ""


def electricity_breakdown(activity) -> Optional[dict]:
     """Units, rate and amounts for an Electricity Bill; None for other types."""
     if activity.type != ActivityType.ELECTRICITY_BILL:
          return None
     units = activity.units_consumed
     multiplier = activity.base_electricity_multiplier
     base_amount = units * multiplier if units is not None and multiplier is not None else None
     return {
          "previous_meter_reading": activity.previous_meter_reading,
          "current_meter_reading": activity.current_meter_reading,
          "units_consumed": units,
          "rate_per_unit": multiplier,
          "base_amount": base_amount,
          "total_amount": abs(activity.amount) if activity.amount is not None else None,
     }


def build_share_message(activity) -> str:
     activity_type = ActivityType(activity.type)

     if activity_type == ActivityType.ELECTRICITY_BILL:
          total = abs(activity.amount) if activity.amount is not None else None
          return (
               f"Your Electricity Bill for {activity.description}\n"
               f"Date: {format_date(activity.date)}\n"
               f"Previous Reading: {format_number(activity.previous_meter_reading)}\n"
               f"Current Reading: {format_number(activity.current_meter_reading)}\n"
               f"Base multiplier: {format_number(activity.base_electricity_multiplier)}\n"
               f"Total Amount: {format_currency(total)}"
          )

     if activity_type == ActivityType.PAYMENT:
          return (
               f"Thank you for your payment of {format_currency(activity.amount)} for {activity.description}.\n"
               f"Date: {format_date(activity.date)}\n"
               f"\n"
               f"We appreciate your timely payment."
          )

     return (
          f"Activity Details:\n"
          f"Type: {activity_type.value}\n"
          f"Description: {activity.description}\n"
          f"Amount: {format_currency(activity.amount)}\n"
          f"Date: {format_date(activity.date)}"
     )


def split_phone(phone: Optional[str]) -> tuple:
     """
     '+44 7700 900123' -> ('44', '7700900123')
     '919876543210'    -> ('91', '9876543210')
     '9876543210'      -> ('91', '9876543210')
     """
     phone = phone or ""
     digits = re.sub(r"[^0-9]", "", phone)
     country_code = DEFAULT_COUNTRY_CODE
     match = re.match(r"^\+(\d{1,3})", phone)
     if match:
          country_code = match.group(1)
          digits = digits[len(country_code):]
     elif len(digits) > 10 and digits.startswith(DEFAULT_COUNTRY_CODE):
          digits = digits[len(DEFAULT_COUNTRY_CODE):]
     return country_code, digits


def whatsapp_link(phone: Optional[str], message: str) -> str:
     country_code, number = split_phone(phone)
     return f"https://wa.me/{country_code}{number}?text={quote(message, safe=_URI_SAFE)}"


def sms_link(phone: Optional[str], message: str) -> str:
     digits = re.sub(r"[^0-9]", "", phone or "")
     if len(digits) > 10 and digits.startswith(DEFAULT_COUNTRY_CODE):
          digits = digits[len(DEFAULT_COUNTRY_CODE):]
     return f"sms:{digits}&body={quote(message, safe=_URI_SAFE)}"
