# models/base.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     """


class OwnedMixin:
     """
     Columns shared by every record a landlord owns.

     owner_id partitions the data: a record is never readable or writable
     by a different owner (enforced by LedgerStore).
     """

     @declared_attr
     def owner_id(cls):
          return Column(
               Integer,
               ForeignKey("users.id"),
               nullable=False,
               index=True,
          )

     @declared_attr
     def created_at(cls):
          return Column(DateTime, server_default=func.now(), nullable=False)
