"""
Flat Models.

Pydantic models for flats and their moderation status.
"""

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

# Upper bound of the INTEGER / SERIAL columns
INT4_MAX = 2_147_483_647


class FlatStatus(str, Enum):
    """Moderation status of a flat."""

    CREATED = "created"
    ON_MODERATION = "on_moderation"
    APPROVED = "approved"
    DECLINED = "declined"

    def __str__(self) -> str:
        return self.value


class Flat(BaseModel):
    """Flat model from database."""

    id: int
    house_id: int
    price: int
    rooms: int
    status: FlatStatus
    moderator_id: Optional[UUID] = None


class FlatCreate(BaseModel):
    """Model for creating a flat. Any status sent by the caller is ignored."""

    house_id: int = Field(..., gt=0, le=INT4_MAX, description="Owning house ID")
    price: int = Field(..., gt=0, le=INT4_MAX, description="Monthly price")
    rooms: int = Field(..., gt=0, le=INT4_MAX, description="Number of rooms")


class FlatStatusUpdate(BaseModel):
    """Model for a status change request."""

    id: int = Field(..., gt=0, le=INT4_MAX, description="Flat ID")
    status: FlatStatus = Field(..., description="Desired status")


class FlatStatusPayload(BaseModel):
    """Request body for a status change; the status literal is checked by the validator."""

    id: int = Field(..., description="Flat ID")
    status: str = Field(..., description="Desired status")


class FlatUpdateResponse(BaseModel):
    """Response model for a status change."""

    flat: Flat
