"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from meal_planner.api.meal_plans import router as meal_plan_router
from meal_planner.app_logging import configure_logging
from meal_planner.containers import AppContainer
from meal_planner.errors import InternalError, MealPlanError, ValidationError

_REQUEST_LOCATIONS = {"body", "query", "path"}


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

    app.include_router(meal_plan_router)

    @app.exception_handler(MealPlanError)
    async def meal_plan_error_handler(
        request: Request, exc: MealPlanError
    ) -> JSONResponse:
        logger.warning(
            "%s %s failed: %s: %s",
            request.method,
            request.url.path,
            exc.error,
            exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        fields: list[str] = []
        messages: list[str] = []
        for item in exc.errors():
            field = ".".join(
                str(part) for part in item["loc"] if part not in _REQUEST_LOCATIONS
            )
            fields.append(field)
            messages.append(f"{field or 'body'}: {item['msg']}")
        error = ValidationError(
            "Invalid request: " + "; ".join(messages), details={"fields": fields}
        )
        return JSONResponse(status_code=error.status_code, content=error.to_payload())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = InternalError(f"Unexpected error: {exc}")
        return JSONResponse(status_code=error.status_code, content=error.to_payload())

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
