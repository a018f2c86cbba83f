"""
User Models.

Pydantic models for registration and password login.
"""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from rental_api.modules.auth.models import Role


class User(BaseModel):
    """User model from database (without password)."""

    user_id: UUID
    email: str
    user_type: Role


class UserCreate(BaseModel):
    """Model for user registration."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=3, max_length=16, description="Password")
    user_type: Role = Field(..., description="client or moderator")


class UserLogin(BaseModel):
    """Model for user login."""

    id: UUID = Field(..., description="User ID returned by registration")
    password: str = Field(..., min_length=1, description="Password")


class RegisterResponse(BaseModel):
    """Response model for registration."""

    user_id: UUID
