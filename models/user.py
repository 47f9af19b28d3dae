# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, func
from .base import Base


class User(Base):
     """
     User model - a landlord account. Every property, tenant and activity
     carries the id of the user that owns it.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     display_name = Column(String(200), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}')>"
