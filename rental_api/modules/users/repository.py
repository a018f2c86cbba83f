"""
User Repository.

Database operations for registered users and password checks.
"""

import asyncio
import hashlib
import hmac
import secrets
import uuid
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from asyncpg import Pool
from loguru import logger

from rental_api.connections.postgres import store_connection
from rental_api.modules.auth.models import Role
from rental_api.modules.users.models import User

if TYPE_CHECKING:
    from rental_api.modules.validation import PayloadValidator

users_log = logger.bind(module="Users")

HASH_ITERATIONS = 100_000


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, pool: Pool, validator: "PayloadValidator"):
        """
        Initialize repository with database connection pool.

        Args:
            pool: asyncpg connection pool
            validator: Payload validator
        """
        self._pool = pool
        self._validator = validator

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash password with PBKDF2-SHA256 and a random salt.

        Args:
            password: Plain text password

        Returns:
            "<salt hex>$<digest hex>"
        """
        salt = secrets.token_bytes(16)
        digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, HASH_ITERATIONS)
        return f"{salt.hex()}${digest.hex()}"

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        """
        Verify password against hash.

        Args:
            password: Plain text password
            hashed: Hashed password from database

        Returns:
            True if password matches
        """
        salt_hex, _, digest_hex = hashed.partition("$")
        try:
            salt = bytes.fromhex(salt_hex)
        except ValueError:
            return False
        if not digest_hex:
            return False
        digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, HASH_ITERATIONS)
        return hmac.compare_digest(digest.hex(), digest_hex)

    async def create(self, email: str, password: str, user_type: Role | str) -> Optional[User]:
        """
        Register a new user.

        Args:
            email: User email
            password: Plain text password
            user_type: client or moderator

        Returns:
            Created User or None if the email is taken
        """
        data = self._validator.user(email, password, user_type)
        hashed_password = await asyncio.to_thread(self.hash_password, data.password)

        query = """
        INSERT INTO users (user_id, email, password, user_type)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT (email) DO NOTHING
        RETURNING user_id, email, user_type
        """

        async with store_connection(self._pool, "create user", email=data.email) as conn:
            row = await conn.fetchrow(
                query, uuid.uuid4(), data.email, hashed_password, data.user_type.value
            )

        if row is None:
            users_log.warning(f"Registration with existing email: {data.email}")
            return None

        user = User(**dict(row))
        users_log.info(f"Created {user.user_type} user {user.user_id}")
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[dict]:
        """
        Get user by ID (includes password hash for authentication).

        Args:
            user_id: User ID

        Returns:
            User dict with password or None if not found
        """
        self._validator.actor(user_id)

        query = "SELECT user_id, email, password, user_type FROM users WHERE user_id = $1"
        async with store_connection(self._pool, "get user", user_id=str(user_id)) as conn:
            row = await conn.fetchrow(query, user_id)

        return dict(row) if row else None

    async def authenticate(self, user_id: UUID, password: str) -> Optional[User]:
        """
        Authenticate user with id and password.

        Args:
            user_id: User ID
            password: Plain text password

        Returns:
            User if authenticated, None otherwise
        """
        user_data = await self.get_by_id(user_id)
        if not user_data:
            return None

        matches = await asyncio.to_thread(
            self.verify_password, password, user_data["password"]
        )
        if not matches:
            users_log.warning(f"Wrong password for user {user_id}")
            return None

        return User(
            user_id=user_data["user_id"],
            email=user_data["email"],
            user_type=user_data["user_type"],
        )
