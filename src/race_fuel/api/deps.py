"""Request dependencies shared by the API routers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from race_fuel.domain.errors import NotFoundError
from race_fuel.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from race_fuel.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def current_user(
    request: Request,
    x_user_sub: str | None = Header(default=None),
) -> UserRecord:
    """Resolve the acting user from the identity-provider subject header."""
    if not x_user_sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    container = get_container(request)
    try:
        return container.user_service.require_user(x_user_sub)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user"
        ) from exc
