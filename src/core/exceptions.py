"""Error taxonomy and structured exception hierarchy.

This module defines the error model shared by every layer of the request
pipeline:

- **ErrorKind enum**: Classification used by the boundary normalizer
- **Severity enum**: Error classification for logging and alerting
- **ErrorDetail**: The user-facing ``{statusCode, error, message}`` triple
- **ItemsApiError**: Base exception carrying a kind, status and message
- **Specialized exceptions**: Content-type, validation and not-found errors

Lower layers raise the most specific exception available; the API boundary
turns any exception into an ``ErrorDetail`` and nothing else writes error
responses.
"""

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any


class ErrorKind(Enum):
    """Classification of every way a request can be rejected."""

    TRANSPORT = "TRANSPORT"
    """Missing or non-JSON Content-Type, or an unsupported charset."""

    DECODE = "DECODE"
    """Body bytes could not be decoded in the declared or assumed charset."""

    SYNTAX = "SYNTAX"
    """Body decoded but is not valid JSON."""

    VALIDATION = "VALIDATION"
    """Well-formed JSON that is semantically invalid."""

    NOT_FOUND = "NOT_FOUND"
    """A valid identifier that resolves to no record."""

    HTTP = "HTTP"
    """Status raised by the framework itself (unknown route, wrong method)."""

    UNKNOWN = "UNKNOWN"
    """Anything else. Always reported as a scrubbed 500."""


class Severity(Enum):
    """Severity levels; expected severities are logged as warnings."""

    LOW = "LOW"
    """Expected errors caused by client input."""

    MEDIUM = "MEDIUM"
    """Errors that may affect some features but not critical operations."""

    HIGH = "HIGH"
    """Errors impacting critical functionality or data integrity."""

    CRITICAL = "CRITICAL"
    """Unexpected failures requiring immediate attention."""

    @property
    def is_expected(self) -> bool:
        """Whether errors of this severity come from normal client input."""
        return self in (Severity.LOW, Severity.MEDIUM)


@dataclass(frozen=True, slots=True)
class ErrorDetail:
    """Stable, user-facing description of a rejected request.

    Attributes:
        kind: Internal classification of the error.
        status_code: HTTP status code to respond with.
        message: Human-readable message; part of the API contract.
    """

    kind: ErrorKind
    status_code: int
    message: str

    @property
    def error(self) -> str:
        """HTTP reason phrase for the status code (e.g. ``Bad Request``)."""
        try:
            return HTTPStatus(self.status_code).phrase
        except ValueError:
            return "Error"

    def to_exception(self) -> "ItemsApiError":
        """Build the domain exception matching this detail's kind.

        Returns:
            ItemsApiError: Exception that reproduces this detail when normalized.
        """
        if self.kind is ErrorKind.TRANSPORT:
            return ContentTypeError(self.message)
        if self.kind is ErrorKind.VALIDATION:
            return ValidationError(self.message)
        if self.kind is ErrorKind.NOT_FOUND:
            return NotFoundError(self.message)
        return ItemsApiError(self.kind, self.message, status_code=self.status_code)


class ItemsApiError(Exception):
    """Base exception class for all deliberately raised API errors.

    These errors carry a structured HTTP status and message and are forwarded
    verbatim by the error normalizer.

    Args:
        kind: Classification of the error
        message: Human-readable error message
        status_code: HTTP status code (defaults to 400)
        severity: Severity level of the error (defaults to CRITICAL for
            server errors and LOW otherwise)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int = HTTPStatus.BAD_REQUEST,
        severity: Severity | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.status_code = int(status_code)
        if severity is None:
            severity = (
                Severity.CRITICAL
                if self.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR
                else Severity.LOW
            )
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    @property
    def detail(self) -> ErrorDetail:
        """The response-facing detail for this error."""
        return ErrorDetail(self.kind, self.status_code, self.message)

    @property
    def is_expected(self) -> bool:
        """Whether the error comes from normal operation (client input)."""
        return self.severity.is_expected

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(kind='{self.kind.value}', status_code={self.status_code}, "
            f"message='{self.message}'{context_str})"
        )


class ContentTypeError(ItemsApiError):
    """Raised when a body-bearing request has a bad Content-Type or charset.

    Args:
        message: Description of the transport failure
        context: Additional context information about the error
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorKind.TRANSPORT, message, context=context)


class ValidationError(ItemsApiError):
    """Raised when well-formed input fails a domain rule.

    Args:
        message: Description of the validation failure
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(ErrorKind.VALIDATION, message, context=context, cause=cause)


class NotFoundError(ItemsApiError):
    """Raised when a valid identifier resolves to no record.

    Args:
        message: Description of what resource was not found
        context: Additional context information about the error
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            ErrorKind.NOT_FOUND,
            message,
            status_code=HTTPStatus.NOT_FOUND,
            context=context,
        )
