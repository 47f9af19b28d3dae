# models/tenant.py
import enum
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base, OwnedMixin


class TenantStatus(str, enum.Enum):
     """
     Tenant lifecycle status. Changes only through explicit edits.
     Only ACTIVE tenants are charged rent automatically and count towards
     the portfolio amount owed.
     """
     ACTIVE = "Active"
     INACTIVE = "Inactive"
     PENDING = "Pending"


class Tenant(OwnedMixin, Base):
     """
     Tenant model - a person renting a unit from the landlord.

     last_meter_reading is written only when an Electricity Bill activity is
     recorded; until the first bill it is NULL and billing falls back to
     start_month_meter_reading.
     """
     __tablename__ = "tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.id"),
          nullable=True,
          index=True
     )
     # Cached at write time so listings don't need the property row
     property_name = Column(String(255), nullable=True)
     unit_number = Column(String(50), nullable=True)

     # Contact
     name = Column(String(200), nullable=False)
     email = Column(String(255), nullable=True)
     phone = Column(String(50), nullable=True)

     # Lease
     lease_start = Column(Date, nullable=True)
     lease_end = Column(Date, nullable=True)
     rent_amount = Column(Numeric(12, 2), default=Decimal("0"), nullable=False)

     status = Column(
          Enum(
               TenantStatus,
               name="tenant_status",
               values_callable=lambda e: [m.value for m in e],
          ),
          default=TenantStatus.ACTIVE,
          nullable=False,
          index=True
     )

     # Electricity
     base_electricity_multiplier = Column(Numeric(10, 2), default=Decimal("7"), nullable=True)
     start_month_meter_reading = Column(Numeric(12, 2), nullable=True)
     last_meter_reading = Column(Numeric(12, 2), nullable=True)

     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     property = relationship("Property", back_populates="tenants")
     activities = relationship("Activity", back_populates="tenant")

     def __repr__(self):
          return f"<Tenant(id={self.id}, name='{self.name}', status='{self.status}')>"
