"""Fixtures for API middleware tests."""

from collections.abc import Callable
from typing import Any

import pytest
from pytest_mock import MockerFixture, MockType
from starlette.requests import Request
from starlette.responses import Response

from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.core.config import LogConfig


async def _empty_app(scope: Any, receive: Any, send: Any) -> None:
    """ASGI placeholder wrapped by middleware under test."""


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Factory building real Starlette requests from an ASGI scope.

    Returns:
        Callable[..., Request]: Builder taking method, path and headers.
    """

    def _make(
        method: str = "GET",
        path: str = "/items",
        headers: list[tuple[str, str]] | None = None,
    ) -> Request:
        scope = {
            "type": "http",
            "http_version": "1.1",
            "method": method,
            "scheme": "http",
            "path": path,
            "raw_path": path.encode(),
            "query_string": b"",
            "root_path": "",
            "headers": [
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in headers or []
            ],
            "client": ("127.0.0.1", 50000),
            "server": ("testserver", 80),
        }
        return Request(scope)

    return _make


@pytest.fixture
def downstream_response() -> Response:
    """Response returned by the next handler in the chain."""
    return Response(content=b"{}", status_code=200, media_type="application/json")


@pytest.fixture
def call_next(mocker: MockerFixture, downstream_response: Response) -> MockType:
    """Async call_next returning the downstream response."""
    return mocker.AsyncMock(return_value=downstream_response)


@pytest.fixture
def request_context_middleware() -> RequestContextMiddleware:
    """RequestContextMiddleware around a placeholder app."""
    return RequestContextMiddleware(_empty_app)


@pytest.fixture
def log_config() -> LogConfig:
    """Logging configuration with a low slow-request threshold."""
    return LogConfig(slow_request_threshold_ms=500, excluded_paths=["/health"])


@pytest.fixture
def request_logging_middleware(log_config: LogConfig) -> RequestLoggingMiddleware:
    """RequestLoggingMiddleware around a placeholder app."""
    return RequestLoggingMiddleware(_empty_app, log_config=log_config)
