"""Nutrient goal endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from race_fuel.api.deps import current_user, get_container
from race_fuel.api.schemas import BaseGoalsRequest, HourlyGoalsRequest
from race_fuel.api.serializers import goal_to_dict, goals_to_dict
from race_fuel.domain.models import UserRecord

router = APIRouter(tags=["goals"])


@router.get("/events/{event_id}/goals")
async def get_goals(
    event_id: UUID, request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the base goals and hourly overrides of an event."""
    goals = get_container(request).goal_service.get_goals(user.id, event_id)
    return goals_to_dict(goals)


@router.put("/events/{event_id}/goals/base")
async def replace_base_goals(
    event_id: UUID,
    body: BaseGoalsRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    saved = get_container(request).goal_service.replace_base_goals(
        user.id, event_id, [goal.model_dump() for goal in body.goals]
    )
    return {"goals": [goal_to_dict(goal) for goal in saved]}


@router.put("/events/{event_id}/goals/hourly")
async def replace_hourly_goals(
    event_id: UUID,
    body: HourlyGoalsRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    saved = get_container(request).goal_service.replace_hourly_goals(
        user.id, event_id, [goal.model_dump() for goal in body.goals]
    )
    return {"goals": [goal_to_dict(goal) for goal in saved]}


@router.delete("/goals/base/{goal_id}", dependencies=[Depends(current_user)])
async def delete_base_goal(goal_id: UUID, request: Request) -> dict[str, str]:
    get_container(request).goal_service.delete_base_goal(goal_id)
    return {"status": "deleted", "id": str(goal_id)}


@router.delete("/goals/hourly/{goal_id}", dependencies=[Depends(current_user)])
async def delete_hourly_goal(goal_id: UUID, request: Request) -> dict[str, str]:
    get_container(request).goal_service.delete_hourly_goal(goal_id)
    return {"status": "deleted", "id": str(goal_id)}
