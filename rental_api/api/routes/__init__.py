"""API routes module."""

from rental_api.api.routes.auth import router as auth_router
from rental_api.api.routes.flats import router as flats_router
from rental_api.api.routes.health import router as health_router
from rental_api.api.routes.houses import router as houses_router

__all__ = [
    "auth_router",
    "flats_router",
    "health_router",
    "houses_router",
]
