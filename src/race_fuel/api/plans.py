"""Timeline layout and nutrient report endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from race_fuel.api.deps import current_user, get_container
from race_fuel.api.serializers import hour_to_dict, plan_to_dict, timeline_to_dict
from race_fuel.domain.models import UserRecord

router = APIRouter(prefix="/events", tags=["plans"])


@router.get("/{event_id}/plan")
async def get_plan(
    event_id: UUID,
    request: Request,
    exclude_id: UUID | None = None,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Return the timeline layout, nutrient summaries and item counts of an event.

    ``exclude_id`` leaves out the food instance currently being dragged.
    """
    plan = get_container(request).plan_service.build_plan(
        event_id, user.id, exclude_id=exclude_id
    )
    return plan_to_dict(plan)


@router.get("/{event_id}/layout", dependencies=[Depends(current_user)])
async def get_layout(
    event_id: UUID, request: Request, exclude_id: UUID | None = None
) -> dict[str, object]:
    timeline = get_container(request).plan_service.build_timeline(
        event_id, exclude_id=exclude_id
    )
    return timeline_to_dict(timeline)


@router.get("/{event_id}/report")
async def get_report(
    event_id: UUID, request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    hours = get_container(request).plan_service.build_report(event_id, user.id)
    return {"hours": [hour_to_dict(hour) for hour in hours]}
