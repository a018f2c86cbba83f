"""
Token Service.

Issues and verifies role-tagged JWT access tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import jwt
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from config.settings import AuthSettings, get_settings
from rental_api.modules.auth.models import Principal, Role

auth_log = logger.bind(module="Auth")

ALGORITHM = "HS256"


class TokenService:
    """Create and decode JWT access tokens."""

    def __init__(self, settings: Optional[AuthSettings] = None):
        """
        Initialize token service.

        Args:
            settings: Auth settings (uses application settings if not provided)
        """
        self._settings = settings or get_settings().auth

    def issue(self, user_id: UUID, role: Role) -> tuple[str, int]:
        """
        Create JWT access token.

        Args:
            user_id: User ID
            role: User role

        Returns:
            Tuple of (token, expires_in_seconds)
        """
        expires_in = self._settings.token_ttl_seconds
        now = datetime.now(timezone.utc)

        payload = {
            "sub": str(user_id),
            "role": role.value,
            "exp": now + timedelta(seconds=expires_in),
            "iat": now,
        }

        token = jwt.encode(payload, self._settings.jwt_secret, algorithm=ALGORITHM)
        return token, expires_in

    def decode(self, token: str) -> Optional[Principal]:
        """
        Decode and verify JWT token.

        Args:
            token: JWT token string

        Returns:
            Principal or None if the token is invalid
        """
        try:
            payload = jwt.decode(token, self._settings.jwt_secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            auth_log.warning("Token expired")
            return None
        except jwt.InvalidTokenError as e:
            auth_log.warning(f"Invalid token: {e}")
            return None

        try:
            return Principal(user_id=payload.get("sub"), role=payload.get("role"))
        except PydanticValidationError:
            auth_log.warning("Token carries an invalid subject or role")
            return None
