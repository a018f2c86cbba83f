"""House routes."""

from fastapi import APIRouter, BackgroundTasks, Request

from rental_api.api.dependencies import AnyUser, Houses, Moderator, Notifier
from rental_api.jobs import notify_subscriber
from rental_api.modules.houses import (
    House,
    HouseCreate,
    HouseFlatsResponse,
    SubscriptionCreate,
)

router = APIRouter(prefix="/house", tags=["House"])


@router.post("/create", status_code=201, response_model=House)
async def create_house(
    data: HouseCreate,
    current_user: Moderator,
    repo: Houses,
) -> House:
    """
    Create a new house.

    Requires moderator role.

    Args:
        data: House data
    """
    return await repo.create(data.address, data.year, data.developer)


@router.get("/{house_id}", response_model=HouseFlatsResponse)
async def get_house_flats(
    house_id: int,
    current_user: AnyUser,
    repo: Houses,
) -> dict:
    """
    List the flats of a house.

    Moderators see every flat, clients only approved ones.

    Args:
        house_id: House ID
    """
    flats = await repo.get_flats(house_id, current_user.role)
    return {"flats": flats}


@router.post("/{house_id}/subscribe", status_code=201)
async def subscribe_house(
    house_id: int,
    data: SubscriptionCreate,
    request: Request,
    current_user: AnyUser,
    repo: Houses,
    notifier: Notifier,
    background_tasks: BackgroundTasks,
) -> dict:
    """
    Subscribe an email to a house.

    The notification email is sent after the response, and its outcome is
    only logged.

    Args:
        house_id: House ID
        data: Subscriber email
    """
    await repo.add_subscription(house_id, data.email)

    background_tasks.add_task(notify_subscriber, notifier, house_id, data.email)

    return {
        "message": "Subscription successful",
        "request_id": getattr(request.state, "request_id", None),
        "code": 201,
    }
