"""Nutrient catalog endpoint."""

from fastapi import APIRouter, Depends, Request

from race_fuel.api.deps import current_user, get_container
from race_fuel.api.serializers import nutrient_to_dict

router = APIRouter(prefix="/nutrients", tags=["nutrients"])


@router.get("", dependencies=[Depends(current_user)])
async def list_nutrients(request: Request) -> dict[str, object]:
    nutrients = get_container(request).nutrient_service.list_nutrients()
    return {"nutrients": [nutrient_to_dict(nutrient) for nutrient in nutrients]}
