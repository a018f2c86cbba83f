"""
Flat Lifecycle Rules.

Pure decision logic of the moderation state machine:

    created       -> on_moderation   (any moderator, becomes the assignee)
    on_moderation -> approved        (assigned moderator only)
    on_moderation -> declined        (assigned moderator only)

approved and declined are terminal. The repository calls check_transition
while it holds the row lock, so the decision always sees committed state.
"""

from typing import NamedTuple, Optional
from uuid import UUID

from rental_api.errors import AuthorizationError, TransitionError
from rental_api.modules.flats.models import FlatStatus


class Transition(NamedTuple):
    """Outcome of an allowed status change."""

    status: FlatStatus
    assign_moderator: bool


def check_transition(
    current: FlatStatus,
    moderator_id: Optional[UUID],
    desired: FlatStatus,
    acting_user_id: UUID,
) -> Transition:
    """
    Decide whether a status change is allowed.

    Args:
        current: Status currently stored for the flat
        moderator_id: Moderator currently assigned to the flat
        desired: Requested status
        acting_user_id: User requesting the change

    Returns:
        The transition to apply

    Raises:
        TransitionError: If the state machine has no such edge
        AuthorizationError: If the actor is not the assigned moderator
    """
    if desired == FlatStatus.ON_MODERATION:
        if current != FlatStatus.CREATED:
            raise TransitionError(
                f"cannot put flat into moderation from status {current}",
                current=current.value,
                requested=desired.value,
            )
        return Transition(status=desired, assign_moderator=True)

    if current != FlatStatus.ON_MODERATION:
        raise TransitionError(
            "flat must be in status on_moderation to be approved or declined",
            current=current.value,
            requested=desired.value,
        )
    if desired not in (FlatStatus.APPROVED, FlatStatus.DECLINED):
        raise TransitionError(
            f"invalid status change: {desired}",
            current=current.value,
            requested=desired.value,
        )
    if moderator_id != acting_user_id:
        raise AuthorizationError("only the assigned moderator can change the status")

    return Transition(status=desired, assign_moderator=False)
