"""Application factory for the Items API.

``create_app`` wires the request pipeline in front of the items router:
request context, request logging, the pre-parse Content-Type guard, then the
router-level guard and the handlers. Every exception that escapes is rendered
by the handlers from ``register_exception_handlers``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast

from fastapi import FastAPI
from loguru import logger

from src.api.content_type import ContentTypeValidator, JsonContentTypeValidator
from src.api.middleware.content_type import ContentTypeMiddleware
from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.routes.items import router as items_router
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging
from src.core.observability import instrument_app, setup_tracing
from src.infrastructure.database.session import (
    check_database_connection,
    close_database,
    create_schema,
    get_engine,
)


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Check the item store at startup and release it at shutdown.

    Raises:
        RuntimeError: If the database cannot be reached at startup.
    """
    reachable, error_msg = await check_database_connection()
    if not reachable:
        logger.error("Item store unreachable at startup: {}", error_msg)
        msg = f"Database connection failed: {error_msg}"
        raise RuntimeError(msg)

    if get_settings().database_config.create_schema:
        await create_schema()

    logger.info("{} v{} started", app_instance.title, app_instance.version)
    yield

    await close_database()
    logger.info("{} stopped", app_instance.title)


async def health() -> dict[str, object]:
    """Report whether the item store answers.

    The probe always answers 200; an unreachable database only turns the
    status to ``degraded``.
    """
    reachable, error_msg = await check_database_connection()
    if not reachable:
        logger.warning("Health check: database unreachable: {}", error_msg)
        return {"status": "degraded", "database": False}

    pool = cast("Any", get_engine().pool)
    logger.bind(
        checked_out=pool.checkedout(),
        size=pool.size(),
        overflow=pool.overflow(),
    ).debug("Database pool status")
    return {"status": "healthy", "database": True}


def create_app(
    settings: Settings | None = None,
    content_type_validator: ContentTypeValidator | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to build from; defaults to ``get_settings()``.
        content_type_validator: Validator shared by the pre-parse middleware and
            the router guard. Defaults to the JSON/UTF-8 validator.

    Returns:
        FastAPI: The configured application.
    """
    settings = settings or get_settings()
    validator = content_type_validator or JsonContentTypeValidator()

    setup_logging(settings)
    setup_tracing(settings)

    # debug stays off so the 500 handler is never replaced by Starlette's page
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    application.state.content_type_validator = validator
    register_exception_handlers(application)

    # Added innermost first; requests pass context, logging, then the guard
    application.add_middleware(ContentTypeMiddleware, validator=validator)
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)
    application.add_middleware(RequestContextMiddleware)

    application.add_api_route("/health", health, methods=["GET"], tags=["health"])
    application.include_router(items_router, prefix=settings.api_prefix)

    instrument_app(application, settings)
    return application


app = create_app()
