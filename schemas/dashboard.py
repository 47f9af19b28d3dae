# schemas/dashboard.py
from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field

from .activity import ActivityResponse


class DashboardResponse(BaseModel):
     """Portfolio summary for the landlord's home screen."""
     property_count: int
     tenant_count: int
     active_tenant_count: int
     total_amount_owed: Decimal = Field(..., description="Owed by Active tenants over the window")
     window_months: int
     recent_activities: List[ActivityResponse]
