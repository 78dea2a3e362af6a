"""Pre-parse Content-Type guard.

Rejects body-bearing requests whose Content-Type is not JSON, or whose
charset cannot be decoded, before anything reads the body.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.api.content_type import ContentTypeValidator, default_content_type_validator
from src.api.utils.responses import error_response


class ContentTypeMiddleware(BaseHTTPMiddleware):
    """Middleware short-circuiting requests with an unacceptable Content-Type.

    Args:
        app: The ASGI application.
        validator: The validator shared with the router-level guard.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        validator: ContentTypeValidator = default_content_type_validator,
    ) -> None:
        super().__init__(app)
        self.validator = validator

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Validate the Content-Type and pass the request on if it is acceptable.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: A 400 error response, or the downstream response.
        """
        content_types = request.headers.getlist("content-type")
        detail = self.validator.validate(request.method, content_types or None)
        if detail is None:
            return await call_next(request)

        logger.warning(
            "Rejected request before body parsing: {}",
            detail.message,
            method=request.method,
            path=request.url.path,
            content_type=content_types[0] if content_types else None,
        )
        return error_response(detail)
