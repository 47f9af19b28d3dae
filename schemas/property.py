# schemas/property.py
"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from models.property import PropertyStatus


class PropertyCreate(BaseModel):
     """Schema for creating a new property."""
     name: str = Field(..., min_length=1, max_length=255, description="Property name")
     address: Optional[str] = Field(None, description="Street address")
     units: int = Field(0, ge=0, description="Number of rentable units")
     status: PropertyStatus = Field(default=PropertyStatus.ACTIVE)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Lakeview Apartments",
                    "address": "12 MG Road, Pune",
                    "units": 8,
                    "status": "Active"
               }
          }
     )


class PropertyUpdate(BaseModel):
     """Schema for updating a property; only provided fields change."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     address: Optional[str] = None
     units: Optional[int] = Field(None, ge=0)
     status: Optional[PropertyStatus] = None

     model_config = ConfigDict(extra="forbid")


class PropertyResponse(BaseModel):
     """Schema for property response."""
     id: int
     name: str
     address: Optional[str] = None
     units: int
     status: PropertyStatus
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class PropertyListResponse(BaseModel):
     properties: List[PropertyResponse]
     total: int
