"""
Pydantic schemas for registration and sign-in.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    name: str = Field(min_length=2)
    email: EmailStr
    password: str = Field(min_length=8, description="At least 8 characters")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class SessionUserOut(BaseModel):
    email: str
    name: str
    is_admin: bool


class SessionResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: SessionUserOut
