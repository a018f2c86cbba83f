"""
Auth Module.

Role-tagged access tokens for the role gate.
"""

from rental_api.modules.auth.models import Principal, Role, TokenResponse
from rental_api.modules.auth.tokens import TokenService

__all__ = [
    "Principal",
    "Role",
    "TokenResponse",
    "TokenService",
]
