# schemas/__init__.py
from .auth import RegisterRequest, LoginRequest, TokenResponse, UserResponse
from .property import PropertyCreate, PropertyUpdate, PropertyResponse, PropertyListResponse
from .tenant import TenantCreate, TenantUpdate, TenantResponse, TenantListResponse
from .activity import (
     ActivityCreate,
     ActivityResponse,
     ActivityDetailResponse,
     ActivityFeedResponse,
     ElectricityBreakdown,
     ReconcileResponse,
     ShareResponse,
     TenantLedgerResponse,
)
from .dashboard import DashboardResponse

__all__ = [
     "RegisterRequest",
     "LoginRequest",
     "TokenResponse",
     "UserResponse",
     "PropertyCreate",
     "PropertyUpdate",
     "PropertyResponse",
     "PropertyListResponse",
     "TenantCreate",
     "TenantUpdate",
     "TenantResponse",
     "TenantListResponse",
     "ActivityCreate",
     "ActivityResponse",
     "ActivityDetailResponse",
     "ActivityFeedResponse",
     "ElectricityBreakdown",
     "ReconcileResponse",
     "ShareResponse",
     "TenantLedgerResponse",
     "DashboardResponse",
]
