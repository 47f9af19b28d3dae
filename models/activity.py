# models/activity.py
"""
Activity model - one entry in a tenant's ledger.

Sign convention for amount:
- Payment: positive (reduces what the tenant owes)
- Expense, Electricity Bill, generated monthly rent: negative (increases it)
- Maintenance / Complaint / Notice / Other: optional, stored as given

A tenant's balance is the sum of their activity amounts; negative means the
tenant owes money. Records are append-only; they are removed only when the
tenant is deleted.
"""
import enum
from sqlalchemy import Column, Integer, String, Text, Numeric, Date, ForeignKey, Enum, Index, text
from sqlalchemy.orm import relationship
from .base import Base, OwnedMixin


class ActivityType(str, enum.Enum):
     """Kinds of ledger entries."""
     PAYMENT = "Payment"
     EXPENSE = "Expense"
     ELECTRICITY_BILL = "Electricity Bill"
     MAINTENANCE = "Maintenance"
     COMPLAINT = "Complaint"
     NOTICE = "Notice"
     OTHER = "Other"


# generated_kind value for automatically generated monthly rent charges
AUTO_RENT_KIND = "auto-rent"


class Activity(OwnedMixin, Base):
     """
     Immutable ledger entry attached to a tenant.
     """
     __tablename__ = "activities"

     id = Column(Integer, primary_key=True, autoincrement=True)
     tenant_id = Column(
          Integer,
          ForeignKey("tenants.id"),
          nullable=False,
          index=True
     )

     type = Column(
          Enum(
               ActivityType,
               name="activity_type",
               values_callable=lambda e: [m.value for m in e],
          ),
          nullable=False,
          index=True
     )
     description = Column(Text, nullable=False, default="")
     amount = Column(Numeric(12, 2), nullable=True)
     date = Column(Date, nullable=False, index=True)

     # Electricity Bill only; snapshot taken when the bill is recorded
     current_meter_reading = Column(Numeric(12, 2), nullable=True)
     previous_meter_reading = Column(Numeric(12, 2), nullable=True)
     base_electricity_multiplier = Column(Numeric(10, 2), nullable=True)

     # Structured dedup key for generated charges ("auto-rent" + year/month)
     generated_kind = Column(String(20), nullable=True)
     rent_year = Column(Integer, nullable=True)
     rent_month = Column(Integer, nullable=True)

     # Relationships
     tenant = relationship("Tenant", back_populates="activities")

     __table_args__ = (
          # At most one generated rent charge per tenant per calendar month
          Index(
               "uq_activities_generated_month",
               "tenant_id", "generated_kind", "rent_year", "rent_month",
               unique=True,
               sqlite_where=text("generated_kind IS NOT NULL"),
               postgresql_where=text("generated_kind IS NOT NULL"),
               mssql_where=text("generated_kind IS NOT NULL"),
          ),
     )

     @property
     def units_consumed(self):
          if self.current_meter_reading is None or self.previous_meter_reading is None:
               return None
          return self.current_meter_reading - self.previous_meter_reading

     def __repr__(self):
          return f"<Activity(id={self.id}, tenant_id={self.tenant_id}, type='{self.type}', amount={self.amount})>"
