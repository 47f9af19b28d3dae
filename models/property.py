# models/property.py
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, func
from sqlalchemy.orm import relationship
from .base import Base, OwnedMixin


class PropertyStatus(str, enum.Enum):
     """Operational status of a property."""
     ACTIVE = "Active"
     INACTIVE = "Inactive"
     MAINTENANCE = "Maintenance"


class Property(OwnedMixin, Base):
     """
     Property model - a building or house owned by a landlord.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     address = Column(Text, nullable=True)
     units = Column(Integer, default=0, nullable=False)
     status = Column(
          Enum(
               PropertyStatus,
               name="property_status",
               values_callable=lambda e: [m.value for m in e],
          ),
          default=PropertyStatus.ACTIVE,
          nullable=False,
     )

     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     tenants = relationship("Tenant", back_populates="property")

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.name}')>"
