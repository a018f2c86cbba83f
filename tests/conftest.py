"""
Shared pytest fixtures for all tests.

FakeDatabase stands in for an asyncpg pool. It runs the repositories' SQL
against in-memory tables, rolls transactions back through an undo log,
holds a per-row asyncio.Lock for SELECT ... FOR UPDATE until the
transaction ends, and can inject a fault into any statement.
"""

import asyncio
import itertools
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import asyncpg
import pytest

from rental_api.modules.validation import PayloadValidator


# ============================================================
# Fake asyncpg pool
# ============================================================


def _normalize(query: str) -> str:
    return " ".join(query.split())


def classify(query: str) -> str:
    """Map a SQL statement to a short statement name."""
    q = _normalize(query)
    if q.startswith("INSERT INTO house"):
        return "insert_house"
    if q.startswith("INSERT INTO flat"):
        return "insert_flat"
    if q.startswith("INSERT INTO subscription"):
        return "insert_subscription"
    if q.startswith("INSERT INTO users"):
        return "insert_user"
    if "FROM users WHERE user_id = $1" in q:
        return "select_user"
    if q.startswith("UPDATE house"):
        return "touch_house"
    if q.startswith("UPDATE flat SET status = $1, moderator_id = $2"):
        return "assign_flat"
    if q.startswith("UPDATE flat SET status = $1 WHERE"):
        return "set_flat_status"
    if q.startswith("SELECT set_config('lock_timeout'"):
        return "set_lock_timeout"
    if q.endswith("FOR UPDATE"):
        return "lock_flat"
    if "FROM flat WHERE house_id = $1 AND status = $2" in q:
        return "select_house_flats_by_status"
    if "FROM flat WHERE house_id = $1" in q:
        return "select_house_flats"
    if "FROM flat WHERE id = $1" in q:
        return "select_flat"
    raise AssertionError(f"Unexpected query: {q}")


INT4_MIN, INT4_MAX = -(2**31), 2**31 - 1

VALID_STATUSES = {"created", "on_moderation", "approved", "declined"}


class FakeTransaction:
    """Transaction state of one fake connection."""

    def __init__(self, db: "FakeDatabase", conn: "FakeConnection"):
        self._db = db
        self._conn = conn
        self.undo: list[Callable[[], None]] = []
        self.locks: list[asyncio.Lock] = []
        self.started_at: Optional[datetime] = None

    async def __aenter__(self):
        self._db.check_fault("begin")
        self.started_at = self._db.now()
        self._conn.tx = self
        self._db.begins += 1
        return self

    async def __aexit__(self, exc_type, exc, tb):
        try:
            if exc_type is None:
                try:
                    self._db.check_fault("commit")
                except BaseException:
                    self._rollback()
                    raise
                self._db.commits += 1
            else:
                self._rollback()
        finally:
            for lock in self.locks:
                lock.release()
            self.locks.clear()
            self._conn.tx = None
        return False

    def _rollback(self) -> None:
        for undo in reversed(self.undo):
            undo()
        self.undo.clear()
        self._db.rollbacks += 1


class FakeConnection:
    """Subset of asyncpg.Connection used by the repositories."""

    def __init__(self, db: "FakeDatabase"):
        self._db = db
        self.tx: Optional[FakeTransaction] = None

    def transaction(self) -> FakeTransaction:
        assert self.tx is None, "nested transactions are not used"
        return FakeTransaction(self._db, self)

    async def fetchrow(self, query: str, *args) -> Optional[dict]:
        rows = await self._run(query, args)
        return rows[0] if rows else None

    async def fetch(self, query: str, *args) -> list[dict]:
        return await self._run(query, args)

    async def execute(self, query: str, *args) -> str:
        rows = await self._run(query, args)
        return f"OK {len(rows)}"

    def _now(self) -> datetime:
        return self.tx.started_at if self.tx else self._db.now()

    def _record_undo(self, undo: Callable[[], None]) -> None:
        if self.tx:
            self.tx.undo.append(undo)

    async def _run(self, query: str, args: tuple) -> list[dict]:
        # Yield so concurrent tasks interleave between statements
        await asyncio.sleep(0)

        name = classify(query)
        self._db.statements.append(name)
        self._db.check_fault(name)
        for position, arg in enumerate(args, start=1):
            if isinstance(arg, int) and not INT4_MIN <= arg <= INT4_MAX:
                raise asyncpg.exceptions.DataError(
                    f"invalid input for query argument ${position}: {arg} "
                    "(value out of int32 range)"
                )
        return await getattr(self, f"_{name}")(*args)

    # ---------- statements ----------

    async def _insert_house(self, address, year, developer):
        house_id = next(self._db.house_ids)
        now = self._now()
        self._db.houses[house_id] = {
            "id": house_id,
            "address": address,
            "year": year,
            "developer": developer,
            "created_at": now,
            "updated_at": now,
        }
        self._record_undo(lambda: self._db.houses.pop(house_id, None))
        return [dict(self._db.houses[house_id])]

    async def _insert_flat(self, house_id, price, rooms, status):
        if house_id not in self._db.houses:
            raise asyncpg.exceptions.ForeignKeyViolationError(
                'insert or update on table "flat" violates foreign key constraint'
            )
        self._db.check_status(status, None)
        flat_id = next(self._db.flat_ids)
        self._db.flats[flat_id] = {
            "id": flat_id,
            "house_id": house_id,
            "price": price,
            "rooms": rooms,
            "status": status,
            "moderator_id": None,
        }
        self._record_undo(lambda: self._db.flats.pop(flat_id, None))
        return [dict(self._db.flats[flat_id])]

    async def _insert_subscription(self, house_id, email):
        sub_id = next(self._db.subscription_ids)
        self._db.subscriptions[sub_id] = {
            "id": sub_id,
            "house_id": house_id,
            "email": email,
            "created_at": self._now(),
        }
        self._record_undo(lambda: self._db.subscriptions.pop(sub_id, None))
        return [dict(self._db.subscriptions[sub_id])]

    async def _insert_user(self, user_id, email, password, user_type):
        assert user_type in ("client", "moderator")
        # ON CONFLICT (email) DO NOTHING
        if any(u["email"] == email for u in self._db.users.values()):
            return []
        self._db.users[user_id] = {
            "user_id": user_id,
            "email": email,
            "password": password,
            "user_type": user_type,
        }
        self._record_undo(lambda: self._db.users.pop(user_id, None))
        return [{"user_id": user_id, "email": email, "user_type": user_type}]

    async def _select_user(self, user_id):
        user = self._db.users.get(user_id)
        return [dict(user)] if user else []

    async def _touch_house(self, house_id):
        house = self._db.houses.get(house_id)
        if house is None:
            return []
        previous = house["updated_at"]
        house["updated_at"] = self._now()
        self._record_undo(lambda: house.__setitem__("updated_at", previous))
        return [dict(house)]

    async def _set_lock_timeout(self, value):
        assert self.tx is not None, "set_config(..., true) only lasts for a transaction"
        self._db.lock_timeouts.append(value)
        return [{"set_config": value}]

    async def _lock_flat(self, flat_id):
        assert self.tx is not None, "FOR UPDATE outside a transaction"
        lock = self._db.row_lock(flat_id)
        await lock.acquire()
        self.tx.locks.append(lock)
        flat = self._db.flats.get(flat_id)
        if flat is None:
            return []
        return [{"status": flat["status"], "moderator_id": flat["moderator_id"]}]

    async def _update_flat(self, flat_id, **changes):
        flat = self._db.flats.get(flat_id)
        if flat is None:
            return []
        merged = {**flat, **changes}
        self._db.check_status(merged["status"], merged["moderator_id"])
        previous = dict(flat)
        flat.update(changes)
        self._record_undo(lambda: flat.update(previous))
        return [dict(flat)]

    async def _assign_flat(self, status, moderator_id, flat_id):
        return await self._update_flat(flat_id, status=status, moderator_id=moderator_id)

    async def _set_flat_status(self, status, flat_id):
        return await self._update_flat(flat_id, status=status)

    async def _select_house_flats(self, house_id):
        return [dict(f) for f in self._sorted_flats() if f["house_id"] == house_id]

    async def _select_house_flats_by_status(self, house_id, status):
        return [
            dict(f)
            for f in self._sorted_flats()
            if f["house_id"] == house_id and f["status"] == status
        ]

    async def _select_flat(self, flat_id):
        flat = self._db.flats.get(flat_id)
        return [dict(flat)] if flat else []

    def _sorted_flats(self) -> list[dict]:
        return [self._db.flats[k] for k in sorted(self._db.flats)]


class FakeAcquire:
    """Async context manager returned by FakeDatabase.acquire()."""

    def __init__(self, db: "FakeDatabase"):
        self._db = db

    async def __aenter__(self) -> FakeConnection:
        self._db.check_fault("acquire")
        return FakeConnection(self._db)

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeDatabase:
    """In-memory stand-in for an asyncpg.Pool."""

    def __init__(self):
        self.houses: dict[int, dict] = {}
        self.flats: dict[int, dict] = {}
        self.subscriptions: dict[int, dict] = {}
        self.users: dict[uuid.UUID, dict] = {}
        self.house_ids = itertools.count(1)
        self.flat_ids = itertools.count(1)
        self.subscription_ids = itertools.count(1)

        self.faults: dict[str, BaseException] = {}
        self.statements: list[str] = []
        self.lock_timeouts: list[str] = []
        self.begins = 0
        self.commits = 0
        self.rollbacks = 0

        self._row_locks: dict[int, asyncio.Lock] = {}
        self._clock = datetime(2024, 8, 4, 12, 0, tzinfo=timezone.utc)

    def acquire(self) -> FakeAcquire:
        return FakeAcquire(self)

    def now(self) -> datetime:
        """Advance the fake clock by one second per call."""
        self._clock += timedelta(seconds=1)
        return self._clock

    def row_lock(self, flat_id: int) -> asyncio.Lock:
        if flat_id not in self._row_locks:
            self._row_locks[flat_id] = asyncio.Lock()
        return self._row_locks[flat_id]

    def fail(self, statement: str, exc: Optional[BaseException] = None) -> None:
        """Make every following run of a statement raise."""
        self.faults[statement] = exc or ConnectionResetError(f"{statement} lost connection")

    def check_fault(self, statement: str) -> None:
        exc = self.faults.get(statement)
        if exc is not None:
            raise exc

    @staticmethod
    def check_status(status: str, moderator_id: Any) -> None:
        if status not in VALID_STATUSES:
            raise asyncpg.exceptions.CheckViolationError(f"invalid status {status!r}")
        if (status == "created") != (moderator_id is None):
            raise asyncpg.exceptions.CheckViolationError("moderator invariant violated")

    # ---------- seeding helpers ----------

    def add_house(self, address: str = "1 Main St", year: int = 2020, developer: str = "Acme") -> dict:
        house_id = next(self.house_ids)
        now = self.now()
        self.houses[house_id] = {
            "id": house_id,
            "address": address,
            "year": year,
            "developer": developer,
            "created_at": now,
            "updated_at": now,
        }
        return self.houses[house_id]

    def add_flat(
        self,
        house_id: int,
        status: str = "created",
        moderator_id: Optional[uuid.UUID] = None,
        price: int = 1000,
        rooms: int = 2,
    ) -> dict:
        self.check_status(status, moderator_id)
        flat_id = next(self.flat_ids)
        self.flats[flat_id] = {
            "id": flat_id,
            "house_id": house_id,
            "price": price,
            "rooms": rooms,
            "status": status,
            "moderator_id": moderator_id,
        }
        return self.flats[flat_id]


# ============================================================
# Fixtures
# ============================================================


@pytest.fixture
def db() -> FakeDatabase:
    """Fresh in-memory database for each test."""
    return FakeDatabase()


@pytest.fixture
def validator() -> PayloadValidator:
    """Payload validator."""
    return PayloadValidator()


@pytest.fixture
def moderator_id() -> uuid.UUID:
    """First moderator."""
    return uuid.UUID("11111111-1111-1111-1111-111111111111")


@pytest.fixture
def other_moderator_id() -> uuid.UUID:
    """Second moderator."""
    return uuid.UUID("22222222-2222-2222-2222-222222222222")


@pytest.fixture
def sample_house_data() -> dict:
    """House creation arguments."""
    return {"address": "1 Main St", "year": 2020, "developer": "Acme"}


@pytest.fixture
def sample_flat_data() -> dict:
    """Flat creation arguments (without house_id)."""
    return {"price": 1000, "rooms": 2}
