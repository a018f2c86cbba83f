"""
Auth Models.

Roles and the authenticated principal handed to the repositories.
"""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Caller role carried in the access token."""

    CLIENT = "client"
    MODERATOR = "moderator"

    def __str__(self) -> str:
        return self.value


class Principal(BaseModel):
    """Authenticated caller."""

    user_id: UUID
    role: Role


class TokenResponse(BaseModel):
    """Response model for issued tokens."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token expiry in seconds")
