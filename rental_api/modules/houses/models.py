"""
House Models.

Pydantic models for houses and house subscriptions.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from rental_api.modules.flats.models import INT4_MAX, Flat


class House(BaseModel):
    """House model from database."""

    id: int
    address: str
    year: int
    developer: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class HouseCreate(BaseModel):
    """Model for creating a house."""

    address: str = Field(..., min_length=1, description="Street address")
    year: int = Field(..., ge=0, le=INT4_MAX, description="Construction year")
    developer: Optional[str] = Field(None, description="Developer or builder")

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Reject whitespace-only addresses."""
        if not v.strip():
            raise ValueError("address cannot be empty")
        return v

    @field_validator("developer")
    @classmethod
    def validate_developer(cls, v: Optional[str]) -> Optional[str]:
        """An empty developer means unknown; whitespace-only is rejected."""
        if v is None or v == "":
            return None
        if not v.strip():
            raise ValueError("developer cannot be empty")
        return v


class HouseFlatsResponse(BaseModel):
    """Response model for the flats of a house."""

    flats: list[Flat]


class Subscription(BaseModel):
    """Subscription model from database."""

    id: int
    house_id: int
    email: str
    created_at: datetime


class SubscriptionCreate(BaseModel):
    """Model for subscribing to a house."""

    email: EmailStr = Field(..., description="Subscriber email address")
