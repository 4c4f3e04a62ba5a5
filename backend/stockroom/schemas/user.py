"""
User Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class UserBase(BaseModel):
    """Base user schema."""
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")


class UserCreate(UserBase):
    """Schema for registering a user."""
    pass


class UserUpdate(BaseModel):
    """Schema for account settings changes."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)


class UserResponse(UserBase):
    """Schema for user response."""
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    """Public user fields shown inside group details."""
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True
