"""Exception hierarchy for the rental service."""


class RentalError(Exception):
    """Base exception for all rental service errors."""


class ValidationError(RentalError):
    """Raised when input is malformed or a required field is missing."""


class TransitionError(RentalError):
    """Raised when a requested status change is not allowed by the state machine."""

    def __init__(self, message: str, current: str | None = None, requested: str | None = None):
        super().__init__(message)
        self.current = current
        self.requested = requested


class AuthorizationError(RentalError):
    """Raised when the actor has no rights over this particular resource."""


class FlatNotFoundError(RentalError):
    """Raised when a flat id does not exist."""

    def __init__(self, flat_id: int):
        super().__init__(f"flat {flat_id} not found")
        self.flat_id = flat_id


class StoreError(RentalError):
    """Raised on any database failure. The transaction is already rolled back."""
