"""Pydantic schemas for User model."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, ConfigDict


class UserCreate(BaseModel):
    """Registration payload."""
    email: EmailStr
    name: str
    password: str


class UserResponse(BaseModel):
    """Schema for user responses (excludes password)."""
    id: int
    email: EmailStr
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"
