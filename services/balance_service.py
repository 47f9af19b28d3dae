# services/balance_service.py
"""
Balance aggregation over already-loaded activities.

All functions are pure: they take in-memory collections (ORM objects or any
objects with the same attributes) and never touch the database.
"""
from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from itertools import islice
from typing import Dict, Iterable, Iterator, Optional

from dateutil.relativedelta import relativedelta

from models import TenantStatus

DEFAULT_WINDOW_MONTHS = 6
DEFAULT_FEED_LIMIT = 10


def _amount(activity) -> Decimal:
     return Decimal(activity.amount) if activity.amount is not None else Decimal("0")


def window_start(as_of: Optional[date] = None, months: int = DEFAULT_WINDOW_MONTHS) -> date:
     """First date inside a window of `months` months ending at as_of."""
     if as_of is None:
          as_of = date.today()
     return as_of - relativedelta(months=months)


def in_window(activity, start: date) -> bool:
     return activity.date is not None and activity.date >= start


def tenant_balance(activities: Iterable) -> Decimal:
     """Sum of all activity amounts; negative means the tenant owes money."""
     return sum((_amount(a) for a in activities), Decimal("0"))


def tenant_balances(activities: Iterable) -> Dict[int, Decimal]:
     """Running balance per tenant_id."""
     balances = defaultdict(lambda: Decimal("0"))
     for activity in activities:
          balances[activity.tenant_id] += _amount(activity)
     return dict(balances)


def portfolio_amount_owed(
     tenants: Iterable,
     activities: Iterable,
     window_months: int = DEFAULT_WINDOW_MONTHS,
     as_of: Optional[date] = None,
) -> Decimal:
     """
     Total owed by Active tenants over the last `window_months` months.

     Balances are computed per tenant from activities dated inside the window;
     only negative balances of Active tenants contribute (as positive amounts).
     """
     start = window_start(as_of, window_months)
     balances = tenant_balances(a for a in activities if in_window(a, start))

     total = Decimal("0")
     for tenant in tenants:
          if tenant.status != TenantStatus.ACTIVE:
               continue
          balance = balances.get(tenant.id, Decimal("0"))
          if balance < 0:
               total += -balance
     return total


def _recency_key(activity) -> datetime:
     created_at = getattr(activity, "created_at", None)
     if created_at is not None:
          return created_at
     return datetime.combine(activity.date, datetime.min.time())


def recent_activity_feed(
     activities: Iterable,
     limit: int = DEFAULT_FEED_LIMIT,
     window_months: int = DEFAULT_WINDOW_MONTHS,
     as_of: Optional[date] = None,
) -> Iterator:
     """
     Most recent activities inside the window, newest first, at most `limit`.

     Ordered by created_at when present, else by date. The sort is stable, so
     entries with equal keys keep their input order on every call.
     """
     start = window_start(as_of, window_months)
     candidates = [a for a in activities if in_window(a, start)]
     candidates.sort(key=_recency_key, reverse=True)
     return islice(candidates, max(limit, 0))
