# services/__init__.py
from .errors import (
     AuthError,
     DuplicateRecordError,
     NotFoundError,
     StoreError,
     ValidationError,
)
from .ledger_store import LedgerStore, Subscription
from .billing import (
     DEFAULT_ELECTRICITY_MULTIPLIER,
     compute_charge,
     resolve_last_reading,
     resolve_multiplier,
)
from .activity_service import build_activity, record_activity
from .rent_service import ensure_monthly_rent, monthly_rent_description
from .balance_service import (
     portfolio_amount_owed,
     recent_activity_feed,
     tenant_balance,
     tenant_balances,
)
from .tenant_service import TenantService
from .property_service import PropertyService

__all__ = [
     "AuthError",
     "DuplicateRecordError",
     "NotFoundError",
     "StoreError",
     "ValidationError",
     "LedgerStore",
     "Subscription",
     "DEFAULT_ELECTRICITY_MULTIPLIER",
     "compute_charge",
     "resolve_last_reading",
     "resolve_multiplier",
     "build_activity",
     "record_activity",
     "ensure_monthly_rent",
     "monthly_rent_description",
     "portfolio_amount_owed",
     "recent_activity_feed",
     "tenant_balance",
     "tenant_balances",
     "TenantService",
     "PropertyService",
]
