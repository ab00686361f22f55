"""Food item catalog endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from race_fuel.api.deps import current_user, get_container
from race_fuel.api.schemas import FoodItemRequest
from race_fuel.api.serializers import food_item_to_dict
from race_fuel.domain.models import UserRecord

router = APIRouter(prefix="/food-items", tags=["food-items"])


@router.get("")
async def list_food_items(
    request: Request,
    mine_only: bool = False,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Return the catalog, optionally only items the user created."""
    items = get_container(request).food_item_service.list_items(
        user.id, mine_only=mine_only
    )
    return {"food_items": [food_item_to_dict(item) for item in items]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food_item(
    body: FoodItemRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    item = get_container(request).food_item_service.create_item(
        user.id, body.model_dump()
    )
    return food_item_to_dict(item)


@router.get("/{food_item_id}", dependencies=[Depends(current_user)])
async def get_food_item(food_item_id: UUID, request: Request) -> dict[str, object]:
    item = get_container(request).food_item_service.get_item(food_item_id)
    return food_item_to_dict(item)


@router.put("/{food_item_id}")
async def update_food_item(
    food_item_id: UUID,
    body: FoodItemRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Update an item the user created and replace its nutrients."""
    item = get_container(request).food_item_service.update_item(
        food_item_id, user.id, body.model_dump()
    )
    return food_item_to_dict(item)
