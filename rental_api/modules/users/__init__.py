"""Users module."""

from rental_api.modules.users.models import (
    RegisterResponse,
    User,
    UserCreate,
    UserLogin,
)
from rental_api.modules.users.repository import UserRepository

__all__ = [
    "RegisterResponse",
    "User",
    "UserCreate",
    "UserLogin",
    "UserRepository",
]
