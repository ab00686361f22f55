"""Favorite food item endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from race_fuel.api.deps import current_user, get_container
from race_fuel.api.schemas import FavoriteRequest
from race_fuel.api.serializers import favorite_to_dict, food_item_to_dict
from race_fuel.domain.models import UserRecord

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("")
async def list_favorites(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the food items the user marked as favorites."""
    items = get_container(request).favorite_service.list_favorites(user.id)
    return {
        "favorites": [food_item_to_dict(item) for item in items],
        "count": len(items),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_favorite(
    body: FavoriteRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    favorite = get_container(request).favorite_service.add_favorite(
        user.id, body.food_item_id
    )
    return {"favorite": favorite_to_dict(favorite)}


@router.delete("/{food_item_id}")
async def remove_favorite(
    food_item_id: UUID,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, str]:
    get_container(request).favorite_service.remove_favorite(user.id, food_item_id)
    return {"status": "deleted", "food_item_id": str(food_item_id)}
