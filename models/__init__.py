# models/__init__.py
from .base import Base
from .user import User
from .property import Property, PropertyStatus
from .tenant import Tenant, TenantStatus
from .activity import Activity, ActivityType, AUTO_RENT_KIND

__all__ = [
     "Base",
     "User",
     "Property",
     "PropertyStatus",
     "Tenant",
     "TenantStatus",
     "Activity",
     "ActivityType",
     "AUTO_RENT_KIND",
]
