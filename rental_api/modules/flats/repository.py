"""
Flat Repository.

Transactional lifecycle engine for flats: creation with the owning house
touch, and moderation status changes serialized by a row lock.
"""

from typing import TYPE_CHECKING, Optional
from uuid import UUID

from asyncpg import Pool
from loguru import logger

from config.settings import get_settings
from rental_api.connections.postgres import store_connection, store_transaction
from rental_api.errors import AuthorizationError, FlatNotFoundError, TransitionError
from rental_api.modules.flats.lifecycle import check_transition
from rental_api.modules.flats.models import Flat, FlatStatus

if TYPE_CHECKING:
    from rental_api.modules.validation import PayloadValidator

flats_log = logger.bind(module="Flats")

FLAT_COLUMNS = "id, house_id, price, rooms, status, moderator_id"


class FlatRepository:
    """Repository for flat database operations."""

    def __init__(
        self,
        pool: Pool,
        validator: "PayloadValidator",
        lock_timeout_ms: Optional[int] = None,
    ):
        """
        Initialize repository with database connection pool.

        Args:
            pool: asyncpg connection pool
            validator: Payload validator
            lock_timeout_ms: Max wait for a flat row lock (uses settings if not provided)
        """
        self._pool = pool
        self._validator = validator
        if lock_timeout_ms is None:
            lock_timeout_ms = get_settings().postgres.lock_timeout_ms
        self._lock_timeout_ms = lock_timeout_ms

    async def create(self, house_id: int, price: int, rooms: int) -> Flat:
        """
        Create a flat and advance the owning house's updated_at.

        Both statements run in one transaction. The new flat always starts
        in status created without a moderator.

        Args:
            house_id: Owning house ID
            price: Monthly price
            rooms: Number of rooms

        Returns:
            Created Flat
        """
        data = self._validator.flat(house_id, price, rooms)

        insert_query = f"""
        INSERT INTO flat (house_id, price, rooms, status)
        VALUES ($1, $2, $3, $4)
        RETURNING {FLAT_COLUMNS}
        """
        touch_query = """
        UPDATE house
        SET updated_at = NOW()
        WHERE id = $1
        """

        async with store_transaction(
            self._pool, "create flat", house_id=data.house_id, price=data.price, rooms=data.rooms
        ) as conn:
            row = await conn.fetchrow(
                insert_query,
                data.house_id,
                data.price,
                data.rooms,
                FlatStatus.CREATED.value,
            )
            await conn.execute(touch_query, data.house_id)

        flat = Flat(**dict(row))
        flats_log.info(f"Created flat {flat.id} in house {flat.house_id}")
        return flat

    async def get_by_id(self, flat_id: int) -> Flat:
        """
        Get flat by ID.

        Args:
            flat_id: Flat ID

        Returns:
            Flat

        Raises:
            FlatNotFoundError: If the flat does not exist
        """
        self._validator.positive_id("flat_id", flat_id)

        query = f"SELECT {FLAT_COLUMNS} FROM flat WHERE id = $1"
        async with store_connection(self._pool, "get flat", flat_id=flat_id) as conn:
            row = await conn.fetchrow(query, flat_id)

        if row is None:
            raise FlatNotFoundError(flat_id)
        return Flat(**dict(row))

    async def update_status(
        self, acting_user_id: UUID, flat_id: int, desired_status: FlatStatus | str
    ) -> Flat:
        """
        Move a flat along the moderation state machine.

        The current status and moderator are read with FOR UPDATE, so
        concurrent changes of one flat run one after another while other
        flats are not blocked. A rejected change leaves the row untouched.

        Args:
            acting_user_id: Moderator requesting the change
            flat_id: Flat ID
            desired_status: Requested status

        Returns:
            Flat as stored after the change

        Raises:
            ValidationError: If the command is malformed
            FlatNotFoundError: If the flat does not exist
            TransitionError: If the state machine has no such edge
            AuthorizationError: If the actor is not the assigned moderator
            StoreError: On any database failure
        """
        self._validator.actor(acting_user_id)
        command = self._validator.status_change(flat_id, desired_status)

        lock_query = """
        SELECT status, moderator_id
        FROM flat
        WHERE id = $1
        FOR UPDATE
        """

        try:
            async with store_transaction(
                self._pool,
                "update flat status",
                flat_id=command.id,
                status=str(command.status),
                user_id=str(acting_user_id),
            ) as conn:
                await conn.execute(
                    "SELECT set_config('lock_timeout', $1, true)",
                    f"{self._lock_timeout_ms}ms",
                )

                row = await conn.fetchrow(lock_query, command.id)
                if row is None:
                    raise FlatNotFoundError(command.id)

                transition = check_transition(
                    current=FlatStatus(row["status"]),
                    moderator_id=row["moderator_id"],
                    desired=command.status,
                    acting_user_id=acting_user_id,
                )

                if transition.assign_moderator:
                    await conn.execute(
                        "UPDATE flat SET status = $1, moderator_id = $2 WHERE id = $3",
                        transition.status.value,
                        acting_user_id,
                        command.id,
                    )
                else:
                    await conn.execute(
                        "UPDATE flat SET status = $1 WHERE id = $2",
                        transition.status.value,
                        command.id,
                    )
        except (TransitionError, AuthorizationError, FlatNotFoundError) as e:
            flats_log.warning(
                f"Rejected status change of flat {command.id} to {command.status} "
                f"by {acting_user_id}: {e}"
            )
            raise

        flats_log.info(
            f"Flat {command.id} moved to {transition.status} by {acting_user_id}"
        )

        # Committed above; the row lock is released, so a plain read is enough
        return await self.get_by_id(command.id)
