"""Flats module."""

from rental_api.modules.flats.lifecycle import Transition, check_transition
from rental_api.modules.flats.models import (
    INT4_MAX,
    Flat,
    FlatCreate,
    FlatStatus,
    FlatStatusPayload,
    FlatStatusUpdate,
    FlatUpdateResponse,
)
from rental_api.modules.flats.repository import FlatRepository

__all__ = [
    "INT4_MAX",
    "Flat",
    "FlatCreate",
    "FlatStatus",
    "FlatStatusPayload",
    "FlatStatusUpdate",
    "FlatUpdateResponse",
    "FlatRepository",
    "Transition",
    "check_transition",
]
