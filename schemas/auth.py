# schemas/auth.py
"""
Pydantic schemas for sign-up / sign-in.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class RegisterRequest(BaseModel):
     """Request body for POST /api/auth/register."""
     email: str = Field(..., max_length=255)
     password: str = Field(..., max_length=128)
     display_name: Optional[str] = Field(None, max_length=200)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "email": "landlord@example.com",
                    "password": "s3cret-pass",
                    "display_name": "Asha Rao",
               }
          }
     )


class LoginRequest(BaseModel):
     """Request body for POST /api/auth/login."""
     email: str
     password: str


class UserResponse(BaseModel):
     id: int
     email: str
     display_name: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
     """Bearer token plus the signed-in user."""
     token: str
     user: UserResponse
