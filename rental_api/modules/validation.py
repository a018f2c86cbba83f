"""
Payload Validator.

Stateless validation component handed to the repositories. It turns raw
command arguments into validated pydantic models and reports failures as
rental_api.errors.ValidationError.
"""

from typing import Any, Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from rental_api.errors import ValidationError
from rental_api.modules.flats.models import (
    INT4_MAX,
    FlatCreate,
    FlatStatus,
    FlatStatusUpdate,
)
from rental_api.modules.houses.models import HouseCreate, SubscriptionCreate
from rental_api.modules.users.models import UserCreate

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_errors(errors: list[dict]) -> str:
    """
    Build a single message from pydantic error dicts.

    Only the first error is reported, as "<field>: <msg>".
    """
    if not errors:
        return "Validation error"

    first_error = errors[0]
    field = ".".join(str(loc) for loc in first_error.get("loc", []))
    msg = first_error.get("msg", "Validation error")
    return f"{field}: {msg}" if field else msg


class PayloadValidator:
    """Validate repository commands."""

    def _parse(self, model: Type[ModelT], data: dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(format_validation_errors(e.errors())) from e

    @staticmethod
    def positive_id(name: str, value: Any, maximum: Optional[int] = INT4_MAX) -> int:
        """
        Check an identifier is a positive integer.

        Args:
            name: Field name used in the message
            value: Identifier to check
            maximum: Largest accepted value, None for no upper bound
        """
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValidationError(f"{name}: must be a positive integer")
        if maximum is not None and value > maximum:
            raise ValidationError(f"{name}: must be less than or equal to {maximum}")
        return value

    def house(self, address: str, year: int, developer: Optional[str] = None) -> HouseCreate:
        """Validate a house creation command."""
        return self._parse(
            HouseCreate, {"address": address, "year": year, "developer": developer}
        )

    def flat(self, house_id: int, price: int, rooms: int) -> FlatCreate:
        """Validate a flat creation command."""
        return self._parse(
            FlatCreate, {"house_id": house_id, "price": price, "rooms": rooms}
        )

    def status_change(self, flat_id: int, status: Any) -> FlatStatusUpdate:
        """
        Validate a status change command.

        Unknown status literals are rejected here, before any transaction
        is opened.
        """
        try:
            FlatStatus(status)
        except ValueError:
            raise ValidationError(f"invalid status {status}") from None
        return self._parse(FlatStatusUpdate, {"id": flat_id, "status": status})

    def actor(self, user_id: Any) -> UUID:
        """Check the acting user id is a UUID."""
        if not isinstance(user_id, UUID):
            raise ValidationError("user_id: must be a UUID")
        return user_id

    def subscription(self, house_id: int, email: str) -> SubscriptionCreate:
        """Validate a subscription command."""
        self.positive_id("house_id", house_id)
        return self._parse(SubscriptionCreate, {"email": email})

    def user(self, email: str, password: str, user_type: Any) -> UserCreate:
        """Validate a registration command."""
        return self._parse(
            UserCreate, {"email": email, "password": password, "user_type": user_type}
        )
