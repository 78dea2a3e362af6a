"""Error response schema shared by every rejection path.

Whether a request is stopped by the content-type middleware, a domain
validator or the framework itself, the client receives exactly these three
fields.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.core.exceptions import ErrorDetail


class ErrorResponse(BaseModel):
    """Standardized error response body."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "statusCode": 400,
                    "error": "Bad Request",
                    "message": "Invalid UUID format.",
                },
                {
                    "statusCode": 404,
                    "error": "Not Found",
                    "message": (
                        'Item with id "00000000-0000-0000-0000-000000000000" '
                        "not found"
                    ),
                },
            ]
        },
    )

    status_code: int = Field(
        ...,
        alias="statusCode",
        description="HTTP status code of the response",
        examples=[400, 404, 500],
    )

    error: str = Field(
        ...,
        description="HTTP reason phrase for the status code",
        examples=["Bad Request", "Not Found", "Internal Server Error"],
    )

    message: str = Field(
        ...,
        description="Human-readable explanation of the rejection",
        examples=["Request body must be valid JSON."],
    )

    @classmethod
    def from_detail(cls, detail: ErrorDetail) -> "ErrorResponse":
        """Build the response body for an error detail."""
        return cls(
            status_code=int(detail.status_code),
            error=detail.error,
            message=detail.message,
        )
