# routers/__init__.py
from .auth import router as auth_router
from .properties import router as properties_router
from .tenants import router as tenants_router
from .activities import router as activities_router
from .dashboard import router as dashboard_router

__all__ = [
     "auth_router",
     "properties_router",
     "tenants_router",
     "activities_router",
     "dashboard_router",
]
