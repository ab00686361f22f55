"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from race_fuel.api.events import router as events_router
from race_fuel.api.favorites import router as favorites_router
from race_fuel.api.food_instances import router as food_instances_router
from race_fuel.api.food_items import router as food_items_router
from race_fuel.api.goals import router as goals_router
from race_fuel.api.nutrients import router as nutrients_router
from race_fuel.api.plans import router as plans_router
from race_fuel.api.users import router as users_router
from race_fuel.app_logging import configure_logging
from race_fuel.config import parse_allowed_origins
from race_fuel.containers import AppContainer
from race_fuel.domain.errors import (
    NotFoundError,
    PermissionDeniedError,
    UnitConversionError,
    ValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    allowed_origins = parse_allowed_origins(container.settings.cors_allowed_origins)
    if allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    for router in (
        users_router,
        events_router,
        plans_router,
        goals_router,
        food_instances_router,
        food_items_router,
        favorites_router,
        nutrients_router,
    ):
        app.include_router(router)

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": exc.kind.value, "detail": exc.message},
        )

    @app.exception_handler(UnitConversionError)
    async def unit_conversion_error(
        request: Request, exc: UnitConversionError
    ) -> JSONResponse:
        logger.warning("Unit mismatch on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "unit_conversion", "detail": str(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "not_found", "detail": str(exc)},
        )

    @app.exception_handler(PermissionDeniedError)
    async def permission_denied(
        request: Request, exc: PermissionDeniedError
    ) -> JSONResponse:
        logger.warning("Permission denied on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"error": "permission_denied", "detail": str(exc)},
        )

    @app.exception_handler(RuntimeError)
    async def storage_error(request: Request, exc: RuntimeError) -> JSONResponse:
        logger.exception("Storage failure on %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "storage", "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
