"""HTTP request/response logging with timing.

Logs the start and completion of every request that is not excluded by
configuration, flags slow requests, and tags the response with an
``X-Request-ID`` so client reports can be matched to log lines.
"""

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.api.constants import REQUEST_ID_HEADER
from src.core.config import LogConfig
from src.core.constants import MILLISECONDS_PER_SECOND
from src.core.context import generate_request_id

USER_AGENT_MAX_LENGTH = 200


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses.

    Args:
        app: The ASGI application.
        log_config: Logging configuration.
    """

    def __init__(self, app: ASGIApp, *, log_config: LogConfig) -> None:
        super().__init__(app)
        self.log_config = log_config
        self.excluded_paths = set(log_config.excluded_paths)

    @staticmethod
    def _get_user_agent(request: Request) -> str:
        """Return the user agent, truncated to keep log lines bounded."""
        ua = request.headers.get("user-agent", "")
        return ua[:USER_AGENT_MAX_LENGTH] if ua else "unknown"

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Process the request and log details.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: The response from the application.

        Raises:
            Exception: Any exception raised by the application is re-raised
                after logging.
        """
        if request.url.path in self.excluded_paths:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()

        with logger.contextualize(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else "unknown",
            user_agent=self._get_user_agent(request),
        ):
            logger.info("Request started")
            start_time = time.perf_counter()

            try:
                response = await call_next(request)
            except Exception as exc:
                elapsed = time.perf_counter() - start_time
                duration_ms = elapsed * MILLISECONDS_PER_SECOND
                logger.error(
                    "Request failed",
                    duration_ms=round(duration_ms, 2),
                    error_type=type(exc).__name__,
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * MILLISECONDS_PER_SECOND
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id

            if duration_ms > self.log_config.slow_request_threshold_ms:
                logger.warning(
                    "Slow request detected",
                    duration_ms=round(duration_ms, 2),
                    threshold_ms=self.log_config.slow_request_threshold_ms,
                )

            return response
