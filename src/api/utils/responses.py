"""JSON response classes using orjson serialization.

ORJSONResponse is the default response class of the application. It
handles datetime, date and UUID values natively and sorts keys so that
responses are byte-for-byte predictable.
"""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.api.schemas.errors import ErrorResponse
from src.core.exceptions import ErrorDetail


class ORJSONResponse(JSONResponse):
    """FastAPI Response class using orjson for JSON serialization.

    Attributes:
        media_type: The media type for the response.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON using orjson.

        Args:
            content: The content to serialize to JSON.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json", by_alias=True)

        return orjson.dumps(content, option=orjson.OPT_SORT_KEYS)


def error_response(detail: ErrorDetail) -> ORJSONResponse:
    """Render an error as ``{statusCode, error, message}``.

    Args:
        detail: The error to render.

    Returns:
        ORJSONResponse: Response with the error's status code.
    """
    body = ErrorResponse.from_detail(detail)
    return ORJSONResponse(status_code=int(detail.status_code), content=body)
