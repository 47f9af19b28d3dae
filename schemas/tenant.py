# schemas/tenant.py
"""
Pydantic schemas for Tenant API request/response validation.

last_meter_reading is read-only: it changes only when an Electricity Bill is
recorded, so no request schema accepts it.
"""
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from models.tenant import TenantStatus


def _clean_phone(value: Optional[str]) -> Optional[str]:
     if value is None or value.strip() == "":
          return None
     value = value.strip()
     if value.startswith("+"):
          return value
     digits = re.sub(r"[^0-9]", "", value)
     if len(digits) > 10:
          raise ValueError("Phone number must have at most 10 digits")
     return digits


class TenantCreate(BaseModel):
     """Schema for creating a new tenant."""
     name: str = Field(..., min_length=1, max_length=200)
     email: Optional[str] = Field(None, max_length=255)
     phone: Optional[str] = Field(None, description="Up to 10 digits, or a '+<code> <number>' string")
     country_code: str = Field("91", pattern=r"^\d{1,4}$", description="Dialling code prefixed to phone")
     property_id: Optional[int] = Field(None, gt=0)
     unit_number: Optional[str] = Field(None, max_length=50)
     lease_start: Optional[date] = None
     lease_end: Optional[date] = None
     rent_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     status: TenantStatus = Field(default=TenantStatus.ACTIVE)
     base_electricity_multiplier: Decimal = Field(Decimal("7"), ge=0, max_digits=10, decimal_places=2)
     start_month_meter_reading: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)

     model_config = ConfigDict(
          extra="forbid",
          json_schema_extra={
               "example": {
                    "name": "Ravi Kumar",
                    "email": "ravi@example.com",
                    "phone": "9876543210",
                    "country_code": "91",
                    "property_id": 1,
                    "unit_number": "2B",
                    "lease_start": "2026-01-01",
                    "lease_end": "2026-12-31",
                    "rent_amount": 12000,
                    "status": "Active",
                    "base_electricity_multiplier": 7,
                    "start_month_meter_reading": 500
               }
          }
     )

     @field_validator("phone")
     @classmethod
     def normalize_phone(cls, value):
          return _clean_phone(value)

     @model_validator(mode="after")
     def check_lease_order(self):
          if self.lease_start and self.lease_end and self.lease_end < self.lease_start:
               raise ValueError("lease_end must not be before lease_start")
          return self


class TenantUpdate(BaseModel):
     """Schema for editing a tenant; only provided fields change."""
     name: Optional[str] = Field(None, min_length=1, max_length=200)
     email: Optional[str] = Field(None, max_length=255)
     phone: Optional[str] = None
     country_code: Optional[str] = Field(None, pattern=r"^\d{1,4}$")
     property_id: Optional[int] = Field(None, gt=0)
     unit_number: Optional[str] = Field(None, max_length=50)
     lease_start: Optional[date] = None
     lease_end: Optional[date] = None
     rent_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     status: Optional[TenantStatus] = None
     base_electricity_multiplier: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
     start_month_meter_reading: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)

     model_config = ConfigDict(
          extra="forbid",
          json_schema_extra={"example": {"status": "Inactive"}}
     )

     @field_validator("phone")
     @classmethod
     def normalize_phone(cls, value):
          return _clean_phone(value)


class TenantResponse(BaseModel):
     """Schema for tenant response."""
     id: int
     name: str
     email: Optional[str] = None
     phone: Optional[str] = None
     property_id: Optional[int] = None
     property_name: Optional[str] = None
     unit_number: Optional[str] = None
     lease_start: Optional[date] = None
     lease_end: Optional[date] = None
     rent_amount: Decimal
     status: TenantStatus
     base_electricity_multiplier: Optional[Decimal] = None
     start_month_meter_reading: Optional[Decimal] = None
     last_meter_reading: Optional[Decimal] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     # Running balance; negative means the tenant owes money
     balance: Optional[Decimal] = None

     model_config = ConfigDict(from_attributes=True)


class TenantListResponse(BaseModel):
     """Tenants with balances, optionally grouped by property name."""
     tenants: List[TenantResponse]
     total: int
     groups: Optional[Dict[str, List[TenantResponse]]] = None
