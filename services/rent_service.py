# services/rent_service.py
"""
Recurring rent charges.

Each Active tenant gets exactly one monthly rent Expense per calendar month.
Generation is lazy: it happens when reconcile is invoked for the tenant, not
on a schedule.

A month counts as charged when there is either
- an activity tagged generated_kind="auto-rent" for that year/month, or
- an Expense whose description contains "Monthly Rent" dated in that month
  (charges recorded before the tag existed, or entered by hand).
"""
import calendar
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from models import Activity, ActivityType, AUTO_RENT_KIND, TenantStatus

MONTHLY_RENT_TOKEN = "Monthly Rent"


def monthly_rent_description(as_of: date) -> str:
     """'Monthly Rent for October 2026'"""
     return f"{MONTHLY_RENT_TOKEN} for {calendar.month_name[as_of.month]} {as_of.year}"


def _type_of(activity) -> Optional[ActivityType]:
     try:
          return ActivityType(activity.type)
     except ValueError:
          return None


def is_rent_for_month(activity, year: int, month: int) -> bool:
     if getattr(activity, "generated_kind", None) == AUTO_RENT_KIND:
          return activity.rent_year == year and activity.rent_month == month
     if _type_of(activity) != ActivityType.EXPENSE:
          return False
     if MONTHLY_RENT_TOKEN not in (activity.description or ""):
          return False
     return activity.date is not None and activity.date.year == year and activity.date.month == month


def has_rent_for_month(activities: Iterable, year: int, month: int) -> bool:
     return any(is_rent_for_month(a, year, month) for a in activities)


def ensure_monthly_rent(tenant, activities: Iterable, as_of: Optional[date] = None) -> Optional[Activity]:
     """
     Return the rent charge missing for as_of's month, or None.

     The returned Activity is not persisted; calling this again with the same
     activities plus the returned one yields None.
     """
     if tenant.status != TenantStatus.ACTIVE:
          return None
     if as_of is None:
          as_of = date.today()

     if has_rent_for_month(activities, as_of.year, as_of.month):
          return None

     rent = Decimal(tenant.rent_amount or 0)
     return Activity(
          owner_id=tenant.owner_id,
          tenant_id=tenant.id,
          type=ActivityType.EXPENSE,
          description=monthly_rent_description(as_of),
          amount=-rent if rent else Decimal("0"),
          date=as_of,
          generated_kind=AUTO_RENT_KIND,
          rent_year=as_of.year,
          rent_month=as_of.month,
     )
