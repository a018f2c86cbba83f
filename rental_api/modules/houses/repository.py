"""
House Repository.

Data access layer for houses, their flat listings and subscriptions.
"""

from typing import TYPE_CHECKING, Optional

from asyncpg import Pool
from loguru import logger

from rental_api.connections.postgres import store_connection
from rental_api.modules.auth.models import Role
from rental_api.modules.flats.models import INT4_MAX, Flat, FlatStatus
from rental_api.modules.houses.models import House, Subscription

if TYPE_CHECKING:
    from rental_api.modules.validation import PayloadValidator

houses_log = logger.bind(module="Houses")


class HouseRepository:
    """Repository for house database operations."""

    def __init__(self, pool: Pool, validator: "PayloadValidator"):
        """
        Initialize repository with database connection pool.

        Args:
            pool: asyncpg connection pool
            validator: Payload validator
        """
        self._pool = pool
        self._validator = validator

    async def create(self, address: str, year: int, developer: Optional[str] = None) -> House:
        """
        Create a new house.

        Both timestamps are the transaction start time.

        Args:
            address: Street address
            year: Construction year
            developer: Developer or builder

        Returns:
            Created House
        """
        data = self._validator.house(address, year, developer)

        query = """
        INSERT INTO house (address, year, developer, created_at, updated_at)
        VALUES ($1, $2, $3, NOW(), NOW())
        RETURNING id, address, year, developer, created_at, updated_at
        """
        async with store_connection(self._pool, "create house", address=data.address) as conn:
            row = await conn.fetchrow(query, data.address, data.year, data.developer)

        house = House(**dict(row))
        houses_log.info(f"Created house {house.id}")
        return house

    async def get_flats(self, house_id: int, requester_role: Role) -> list[Flat]:
        """
        Get the flats of a house visible to a role.

        Moderators see every flat; everyone else sees approved flats only.

        Args:
            house_id: House ID
            requester_role: Role of the caller

        Returns:
            List of flats, empty if none match
        """
        self._validator.positive_id("house_id", house_id, maximum=None)
        if house_id > INT4_MAX:
            # No stored house can have this id
            return []

        if requester_role == Role.MODERATOR:
            query = """
            SELECT id, house_id, price, rooms, status, moderator_id
            FROM flat
            WHERE house_id = $1
            ORDER BY id
            """
            args = (house_id,)
        else:
            query = """
            SELECT id, house_id, price, rooms, status, moderator_id
            FROM flat
            WHERE house_id = $1 AND status = $2
            ORDER BY id
            """
            args = (house_id, FlatStatus.APPROVED.value)

        async with store_connection(
            self._pool, "get house flats", house_id=house_id, role=str(requester_role)
        ) as conn:
            rows = await conn.fetch(query, *args)

        return [Flat(**dict(row)) for row in rows]

    async def add_subscription(self, house_id: int, email: str) -> Subscription:
        """
        Subscribe an email to a house.

        The house is not checked for existence here.

        Args:
            house_id: House ID
            email: Subscriber email

        Returns:
            Created Subscription
        """
        data = self._validator.subscription(house_id, email)

        query = """
        INSERT INTO subscription (house_id, email, created_at)
        VALUES ($1, $2, NOW())
        RETURNING id, house_id, email, created_at
        """
        async with store_connection(
            self._pool, "add subscription", house_id=house_id, email=data.email
        ) as conn:
            row = await conn.fetchrow(query, house_id, data.email)

        subscription = Subscription(**dict(row))
        houses_log.info(f"Created subscription {subscription.id} for house {house_id}")
        return subscription
