"""Endpoints for food instances scheduled on event timelines."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from race_fuel.api.deps import current_user, get_container
from race_fuel.api.schemas import (
    CreateFoodInstanceRequest,
    RepeatFoodInstanceRequest,
    UpdateFoodInstanceRequest,
)
from race_fuel.api.serializers import food_instance_to_dict

router = APIRouter(tags=["food-instances"], dependencies=[Depends(current_user)])


@router.get("/events/{event_id}/food-instances")
async def list_food_instances(event_id: UUID, request: Request) -> dict[str, object]:
    """Return the event's food instances in ascending time."""
    instances = get_container(request).consumption_service.list_for_event(event_id)
    return {"food_instances": [food_instance_to_dict(item) for item in instances]}


@router.post(
    "/events/{event_id}/food-instances", status_code=status.HTTP_201_CREATED
)
async def create_food_instance(
    event_id: UUID, body: CreateFoodInstanceRequest, request: Request
) -> dict[str, object]:
    instance = get_container(request).consumption_service.add(
        event_id, body.food_item_id, body.time_offset_seconds, body.servings
    )
    return food_instance_to_dict(instance)


@router.post(
    "/events/{event_id}/food-instances/repeat",
    status_code=status.HTTP_201_CREATED,
)
async def repeat_food_instance(
    event_id: UUID, body: RepeatFoodInstanceRequest, request: Request
) -> dict[str, object]:
    """Schedule a food item at a fixed interval through the end time."""
    created = get_container(request).consumption_service.schedule_repeating(
        event_id,
        body.food_item_id,
        body.start_seconds,
        body.interval_seconds,
        servings=body.servings,
        end_seconds=body.end_seconds,
    )
    return {"food_instances": [food_instance_to_dict(item) for item in created]}


@router.put("/food-instances/{instance_id}")
async def update_food_instance(
    instance_id: UUID, body: UpdateFoodInstanceRequest, request: Request
) -> dict[str, object]:
    """Move a food instance or change its servings."""
    instance = get_container(request).consumption_service.update(
        instance_id,
        time_offset_seconds=body.time_offset_seconds,
        servings=body.servings,
    )
    return food_instance_to_dict(instance)


@router.delete("/food-instances/{instance_id}")
async def delete_food_instance(instance_id: UUID, request: Request) -> dict[str, str]:
    removed = get_container(request).consumption_service.remove(instance_id)
    return {"status": "deleted", "id": str(removed)}
