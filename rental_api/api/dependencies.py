"""
API Dependencies.

Shared dependencies for API routes (role gate, repositories, notifier).
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException

from rental_api.connections.postgres import get_postgres
from rental_api.modules.auth import Principal, Role, TokenService
from rental_api.modules.flats import FlatRepository
from rental_api.modules.houses import HouseRepository
from rental_api.modules.users import UserRepository
from rental_api.modules.validation import PayloadValidator
from rental_api.notifications import BaseNotifier, get_notifier

_validator = PayloadValidator()


def get_validator() -> PayloadValidator:
    """Get the shared payload validator (stateless)."""
    return _validator


def get_token_service() -> TokenService:
    """Get token service instance."""
    return TokenService()


async def get_house_repository(
    validator: Annotated[PayloadValidator, Depends(get_validator)],
) -> HouseRepository:
    """Get house repository instance."""
    postgres = await get_postgres()
    return HouseRepository(postgres.pool, validator)


async def get_flat_repository(
    validator: Annotated[PayloadValidator, Depends(get_validator)],
) -> FlatRepository:
    """Get flat repository instance."""
    postgres = await get_postgres()
    return FlatRepository(postgres.pool, validator)


async def get_user_repository(
    validator: Annotated[PayloadValidator, Depends(get_validator)],
) -> UserRepository:
    """Get user repository instance."""
    postgres = await get_postgres()
    return UserRepository(postgres.pool, validator)


def get_subscriber_notifier() -> BaseNotifier:
    """Get notifier for subscription emails."""
    return get_notifier()


async def get_current_principal(
    tokens: Annotated[TokenService, Depends(get_token_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> Principal:
    """
    Get current caller from JWT token.

    Args:
        tokens: Token service
        authorization: Authorization header (Bearer token)

    Returns:
        Authenticated Principal

    Raises:
        HTTPException: If not authenticated
    """
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Authorization header is required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Parse Bearer token
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    principal = tokens.decode(parts[1])
    if not principal:
        raise HTTPException(
            status_code=401,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return principal


def require_roles(*roles: Role):
    """
    Build a dependency that admits only the given roles.

    Args:
        *roles: Allowed roles

    Returns:
        FastAPI dependency returning the Principal
    """

    async def dependency(
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        if principal.role not in roles:
            raise HTTPException(status_code=403, detail="Forbidden")
        return principal

    return dependency


# Type aliases for dependency injection
AnyUser = Annotated[Principal, Depends(require_roles(Role.CLIENT, Role.MODERATOR))]
Moderator = Annotated[Principal, Depends(require_roles(Role.MODERATOR))]
Houses = Annotated[HouseRepository, Depends(get_house_repository)]
Flats = Annotated[FlatRepository, Depends(get_flat_repository)]
Users = Annotated[UserRepository, Depends(get_user_repository)]
Notifier = Annotated[BaseNotifier, Depends(get_subscriber_notifier)]
