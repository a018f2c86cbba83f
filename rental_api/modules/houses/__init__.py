"""Houses module."""

from rental_api.modules.houses.models import (
    House,
    HouseCreate,
    HouseFlatsResponse,
    Subscription,
    SubscriptionCreate,
)
from rental_api.modules.houses.repository import HouseRepository

__all__ = [
    "House",
    "HouseCreate",
    "HouseFlatsResponse",
    "Subscription",
    "SubscriptionCreate",
    "HouseRepository",
]
