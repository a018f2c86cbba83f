"""Modules package - Domain modules with repository pattern."""

from rental_api.modules.flats import (
    Flat,
    FlatCreate,
    FlatRepository,
    FlatStatus,
    FlatStatusUpdate,
)
from rental_api.modules.houses import (
    House,
    HouseCreate,
    HouseRepository,
    Subscription,
    SubscriptionCreate,
)
from rental_api.modules.users import User, UserRepository
from rental_api.modules.validation import PayloadValidator

__all__ = [
    # Flats
    "Flat",
    "FlatCreate",
    "FlatStatus",
    "FlatStatusUpdate",
    "FlatRepository",
    # Houses
    "House",
    "HouseCreate",
    "Subscription",
    "SubscriptionCreate",
    "HouseRepository",
    # Users
    "User",
    "UserRepository",
    # Validation
    "PayloadValidator",
]
