"""Planning event endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from race_fuel.api.deps import current_user, get_container
from race_fuel.api.schemas import CreateEventRequest, UpdateEventRequest
from race_fuel.api.serializers import event_to_dict
from race_fuel.domain.models import UserRecord

router = APIRouter(prefix="/events", tags=["events"])


@router.get("")
async def list_events(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the user's events, newest first."""
    events = get_container(request).event_service.list_events(user.id)
    return {"events": [event_to_dict(event) for event in events]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    body: CreateEventRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    event = get_container(request).event_service.create_event(
        user.id, body.name, body.event_type, body.duration_seconds
    )
    return event_to_dict(event)


@router.get("/{event_id}", dependencies=[Depends(current_user)])
async def get_event(event_id: UUID, request: Request) -> dict[str, object]:
    return event_to_dict(get_container(request).event_service.get_event(event_id))


@router.put("/{event_id}")
async def update_event(
    event_id: UUID,
    body: UpdateEventRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Update the provided fields of an owned event."""
    event = get_container(request).event_service.update_event(
        event_id,
        user.id,
        name=body.name,
        event_type=body.event_type,
        duration_seconds=body.duration_seconds,
    )
    return event_to_dict(event)


@router.post(
    "/{event_id}/duplicate",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(current_user)],
)
async def duplicate_event(event_id: UUID, request: Request) -> dict[str, object]:
    """Copy an event together with its scheduled food instances."""
    copy, copied = get_container(request).event_service.duplicate_event(event_id)
    return {"event": event_to_dict(copy), "copied_food_instances": copied}


@router.delete("/{event_id}")
async def delete_event(
    event_id: UUID, request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, str]:
    """Delete an owned event with its food instances and goals."""
    get_container(request).event_service.delete_event(event_id, user.id)
    return {"status": "deleted", "id": str(event_id)}
