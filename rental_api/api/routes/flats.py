"""Flat routes."""

from fastapi import APIRouter

from rental_api.api.dependencies import AnyUser, Flats, Moderator
from rental_api.modules.flats import (
    Flat,
    FlatCreate,
    FlatStatusPayload,
    FlatUpdateResponse,
)

router = APIRouter(prefix="/flat", tags=["Flat"])


@router.post("/create", status_code=201, response_model=Flat)
async def create_flat(
    data: FlatCreate,
    current_user: AnyUser,
    repo: Flats,
) -> Flat:
    """
    Create a new flat in status created.

    Args:
        data: Flat data
    """
    return await repo.create(data.house_id, data.price, data.rooms)


@router.post("/update", response_model=FlatUpdateResponse)
async def update_flat_status(
    data: FlatStatusPayload,
    current_user: Moderator,
    repo: Flats,
) -> dict:
    """
    Change the moderation status of a flat.

    Requires moderator role; approving or declining also requires being
    the moderator who took the flat into moderation.

    Args:
        data: Flat ID and desired status
    """
    flat = await repo.update_status(current_user.user_id, data.id, data.status)
    return {"flat": flat}


@router.get("/{flat_id}", response_model=Flat)
async def get_flat(
    flat_id: int,
    current_user: Moderator,
    repo: Flats,
) -> Flat:
    """
    Get a single flat.

    Args:
        flat_id: Flat ID
    """
    return await repo.get_by_id(flat_id)
