"""Unit tests for the application factory and lifespan."""

from typing import Any

import pytest
import pytest_check
from fastapi import FastAPI
from fastapi.routing import APIRoute
from httpx import ASGITransport, AsyncClient
from pytest_mock import MockerFixture, MockType

from src.api.content_type import JsonContentTypeValidator
from src.api.main import create_app, lifespan
from src.api.middleware.content_type import ContentTypeMiddleware
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.utils.responses import ORJSONResponse
from src.core.config import DatabaseConfig, Settings


def _routes(app: FastAPI) -> set[tuple[str, str]]:
    return {
        (method, route.path)
        for route in app.routes
        if isinstance(route, APIRoute)
        for method in route.methods
    }


@pytest.mark.unit
@pytest.mark.usefixtures("mock_api_main_dependencies")
class TestCreateApp:
    """Test cases for create_app."""

    def test_routes(self, app_settings: Settings) -> None:
        """Test that health and every item route are registered."""
        routes = _routes(create_app(app_settings))

        assert {
            ("GET", "/health"),
            ("POST", "/items"),
            ("GET", "/items"),
            ("GET", "/items/{item_id}"),
            ("PATCH", "/items/{item_id}"),
            ("DELETE", "/items/{item_id}"),
        } <= routes

    def test_api_prefix(self, app_settings: Settings) -> None:
        """Test that item routes are mounted under the configured prefix."""
        settings = app_settings.model_copy(update={"api_prefix": "/api"})

        routes = _routes(create_app(settings))

        with pytest_check.check:
            assert ("GET", "/api/items/{item_id}") in routes
        with pytest_check.check:
            assert ("GET", "/health") in routes

    def test_metadata(self, app_settings: Settings) -> None:
        """Test title, version and default response class."""
        app = create_app(app_settings)

        with pytest_check.check:
            assert app.title == "Items API"
        with pytest_check.check:
            assert app.version == app_settings.app_version
        with pytest_check.check:
            assert app.router.default_response_class is ORJSONResponse
        with pytest_check.check:
            assert app.debug is False

    def test_middleware_order(self, app_settings: Settings) -> None:
        """Test that middleware run context, logging, then the Content-Type guard."""
        app = create_app(app_settings)

        assert [m.cls for m in app.user_middleware] == [
            RequestContextMiddleware,
            RequestLoggingMiddleware,
            ContentTypeMiddleware,
        ]

    def test_shared_validator(
        self, app_settings: Settings, mocker: MockerFixture
    ) -> None:
        """Test that the same validator backs the middleware and the router guard."""
        validator = mocker.Mock()

        app = create_app(app_settings, content_type_validator=validator)

        guard = next(m for m in app.user_middleware if m.cls is ContentTypeMiddleware)
        with pytest_check.check:
            assert app.state.content_type_validator is validator
        with pytest_check.check:
            assert guard.kwargs["validator"] is validator

    def test_default_validator(self, app_settings: Settings) -> None:
        """Test the default JSON validator."""
        app = create_app(app_settings)
        assert isinstance(app.state.content_type_validator, JsonContentTypeValidator)

    def test_startup_collaborators(
        self, app_settings: Settings, mock_api_main_dependencies: dict[str, MockType]
    ) -> None:
        """Test that logging, tracing and instrumentation are configured."""
        mocks = mock_api_main_dependencies

        app = create_app(app_settings)

        mocks["setup_logging"].assert_called_once_with(app_settings)
        mocks["setup_tracing"].assert_called_once_with(app_settings)
        mocks["instrument_app"].assert_called_once_with(app, app_settings)


@pytest.mark.unit
class TestHealth:
    """Test cases for the health endpoint."""

    async def _get_health(self, app: FastAPI) -> Any:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            return await client.get("/health")

    async def test_healthy(
        self, app_settings: Settings, mock_api_main_dependencies: dict[str, MockType]
    ) -> None:
        """Test the healthy response."""
        response = await self._get_health(create_app(app_settings))

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": True}
        mock_api_main_dependencies["get_engine"].assert_called_once()

    async def test_degraded(
        self, app_settings: Settings, mock_api_main_dependencies: dict[str, MockType]
    ) -> None:
        """Test that an unreachable database degrades but still answers 200."""
        mock_api_main_dependencies["check_database_connection"].return_value = (
            False,
            "connection refused",
        )

        response = await self._get_health(create_app(app_settings))

        assert response.status_code == 200
        assert response.json() == {"status": "degraded", "database": False}


@pytest.mark.unit
class TestLifespan:
    """Test cases for the application lifespan."""

    async def test_startup_and_shutdown(
        self,
        app_settings: Settings,
        mock_api_main_dependencies: dict[str, MockType],
        mocker: MockerFixture,
    ) -> None:
        """Test schema creation at startup and cleanup at shutdown."""
        mocker.patch("src.api.main.get_settings", return_value=app_settings)

        async with lifespan(FastAPI()):
            mock_api_main_dependencies["create_schema"].assert_awaited_once()
            mock_api_main_dependencies["close_database"].assert_not_awaited()

        mock_api_main_dependencies["close_database"].assert_awaited_once()

    async def test_schema_creation_disabled(
        self,
        mock_api_main_dependencies: dict[str, MockType],
        mocker: MockerFixture,
    ) -> None:
        """Test that schema creation can be turned off."""
        settings = Settings(database_config=DatabaseConfig(create_schema=False))
        mocker.patch("src.api.main.get_settings", return_value=settings)

        async with lifespan(FastAPI()):
            pass

        mock_api_main_dependencies["create_schema"].assert_not_awaited()

    async def test_database_unavailable(
        self, mock_api_main_dependencies: dict[str, MockType]
    ) -> None:
        """Test that startup fails when the database is unreachable."""
        mock_api_main_dependencies["check_database_connection"].return_value = (
            False,
            "connection refused",
        )

        with pytest.raises(RuntimeError, match="connection refused"):
            async with lifespan(FastAPI()):
                pass
