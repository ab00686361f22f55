"""User synchronization endpoint."""

from fastapi import APIRouter, Request

from race_fuel.api.deps import get_container
from race_fuel.api.schemas import SyncUserRequest
from race_fuel.api.serializers import user_to_dict

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/sync")
async def sync_user(body: SyncUserRequest, request: Request) -> dict[str, object]:
    """Return the user for an identity-provider subject, creating it if new."""
    container = get_container(request)
    user, created = container.user_service.sync_user(
        body.auth0_sub, body.email, body.first_name, body.last_name
    )
    return {"user": user_to_dict(user), "created": created}
