# schemas/activity.py
"""
Pydantic schemas for ledger activities.
"""
import datetime as dt
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

from models.activity import ActivityType


class ActivityCreate(BaseModel):
     """
     Schema for recording an activity.

     - Payment / Expense: amount required (entered as a positive number)
     - Electricity Bill: current_meter_reading required; amount is computed
     - other types: amount optional, stored as entered
     """
     type: ActivityType = Field(default=ActivityType.ELECTRICITY_BILL)
     description: str = Field("", max_length=2000)
     amount: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
     date: Optional[dt.date] = Field(None, description="Effective date (defaults to today)")
     current_meter_reading: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)

     model_config = ConfigDict(
          extra="forbid",
          json_schema_extra={
               "example": {
                    "type": "Electricity Bill",
                    "description": "October 2026",
                    "date": "2026-10-19",
                    "current_meter_reading": 520
               }
          }
     )


class ActivityResponse(BaseModel):
     """Schema for activity response."""
     id: int
     tenant_id: int
     type: ActivityType
     description: str
     amount: Optional[Decimal] = None
     date: dt.date
     created_at: Optional[dt.datetime] = None
     current_meter_reading: Optional[Decimal] = None
     previous_meter_reading: Optional[Decimal] = None
     base_electricity_multiplier: Optional[Decimal] = None
     generated_kind: Optional[str] = None

     tenant_name: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class ElectricityBreakdown(BaseModel):
     previous_meter_reading: Optional[Decimal] = None
     current_meter_reading: Optional[Decimal] = None
     units_consumed: Optional[Decimal] = None
     rate_per_unit: Optional[Decimal] = None
     base_amount: Optional[Decimal] = None
     total_amount: Optional[Decimal] = None


class ActivityDetailResponse(ActivityResponse):
     electricity_breakdown: Optional[ElectricityBreakdown] = None


class TenantLedgerResponse(BaseModel):
     """A tenant's activities (newest first) and running balance."""
     tenant_id: int
     balance: Decimal
     activities: List[ActivityResponse]


class ReconcileResponse(BaseModel):
     tenant_id: int
     rent_activity: Optional[ActivityResponse] = None
     meter_reading_repaired: bool = False
     last_meter_reading: Optional[Decimal] = None
     balance: Decimal


class ActivityFeedResponse(BaseModel):
     activities: List[ActivityResponse]
     window_months: int
     limit: int


class ShareResponse(BaseModel):
     """Message body plus ready-made WhatsApp / SMS links."""
     message: str
     whatsapp_url: str
     sms_url: str
