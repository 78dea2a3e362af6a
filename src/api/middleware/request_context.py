"""Request context middleware for correlation IDs.

The correlation ID is taken from the ``X-Correlation-ID`` request header or
generated, stored in a context variable for the error handlers and tracing
hooks, bound to every Loguru record of the request, and echoed back on the
response.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.api.constants import CORRELATION_ID_HEADER
from src.core.context import RequestContext, generate_correlation_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to manage request context and correlation IDs."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request with context management.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: Response with correlation ID header.
        """
        correlation_id = (
            request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        )
        RequestContext.set_correlation_id(correlation_id)

        # contextualize removes the binding when the request ends
        with logger.contextualize(correlation_id=correlation_id):
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
