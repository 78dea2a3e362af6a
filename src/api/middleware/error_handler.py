"""Exception normalization and the application's exception handlers.

Every exception that escapes body parsing, a dependency or a handler is
classified into an ``ErrorKind`` and rendered as ``{statusCode, error,
message}``. Classification, first match wins:

1. Unstructured exceptions that look like a body decoding failure
   (``UnicodeError`` or a message mentioning encoding, charset, decode, ...)
   become a 400 decode error.
2. JSON syntax errors, and unstructured exceptions carrying status 400 with
   a JSON/parse message, become a 400 syntax error.
3. Structured errors (``ItemsApiError``, framework ``HTTPException``) are
   forwarded with their own status and message.
4. Anything else becomes a 500 with a fixed message.
"""

import json
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.constants import (
    CORRELATION_ID_HEADER,
    DECODE_ERROR_MARKERS,
    DECODE_MESSAGE,
    INVALID_JSON_MESSAGE,
    SYNTAX_ERROR_MARKERS,
    UNEXPECTED_ERROR_MESSAGE,
)
from src.api.utils.responses import error_response
from src.core.context import RequestContext
from src.core.error_context import sanitize_error_context
from src.core.exceptions import ErrorDetail, ErrorKind, ItemsApiError, Severity
from src.core.observability import add_span_attributes


def _is_structured(exc: BaseException) -> bool:
    """Whether the exception carries its own HTTP status and message."""
    return isinstance(exc, (ItemsApiError, StarletteHTTPException))


def _carried_status(exc: BaseException) -> int | None:
    """Read a status code an arbitrary exception may carry."""
    for attribute in ("status_code", "status"):
        value = getattr(exc, attribute, None)
        if isinstance(value, int):
            return value
    return None


def _is_decode_error(exc: BaseException) -> bool:
    if isinstance(exc, UnicodeError):
        return True
    message = str(exc).lower()
    if any(marker in message for marker in DECODE_ERROR_MARKERS):
        return True
    return "utf" in message and "invalid" in message


def _is_syntax_error(exc: BaseException) -> bool:
    # orjson.JSONDecodeError subclasses json.JSONDecodeError
    if isinstance(exc, (SyntaxError, json.JSONDecodeError)):
        return True
    if _is_structured(exc) or _carried_status(exc) != HTTPStatus.BAD_REQUEST:
        return False
    message = str(exc).lower()
    return any(marker in message for marker in SYNTAX_ERROR_MARKERS)


def classify_exception(exc: BaseException) -> ErrorKind:
    """Classify an exception raised while handling a request.

    Args:
        exc: The exception to classify.

    Returns:
        ErrorKind: The kind the exception is reported as.
    """
    if not _is_structured(exc) and _is_decode_error(exc):
        return ErrorKind.DECODE
    if _is_syntax_error(exc):
        return ErrorKind.SYNTAX
    if isinstance(exc, ItemsApiError):
        return exc.kind
    if isinstance(exc, StarletteHTTPException):
        return ErrorKind.HTTP
    return ErrorKind.UNKNOWN


def normalize_exception(exc: BaseException) -> ErrorDetail:
    """Map an exception to the error detail sent to the client.

    Unknown failures never expose their message or type.

    Args:
        exc: The exception to normalize.

    Returns:
        ErrorDetail: Status code and message for the response.
    """
    kind = classify_exception(exc)

    if kind is ErrorKind.DECODE:
        return ErrorDetail(kind, HTTPStatus.BAD_REQUEST, DECODE_MESSAGE)
    if kind is ErrorKind.SYNTAX:
        return ErrorDetail(kind, HTTPStatus.BAD_REQUEST, INVALID_JSON_MESSAGE)
    if isinstance(exc, ItemsApiError):
        return exc.detail
    if isinstance(exc, StarletteHTTPException):
        return ErrorDetail(kind, exc.status_code, str(exc.detail))
    return ErrorDetail(
        ErrorKind.UNKNOWN, HTTPStatus.INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE
    )


def error_severity(exc: BaseException, detail: ErrorDetail) -> Severity:
    """Severity an exception is logged with.

    Domain errors carry their own; other server errors are critical and other
    client errors are low.
    """
    if isinstance(exc, ItemsApiError):
        return exc.severity
    if detail.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        return Severity.CRITICAL
    return Severity.LOW


async def api_exception_handler(request: Request, exc: Exception) -> Response:
    """Log an exception and render it as an error response.

    Expected errors are logged as warnings; high and critical ones are
    logged as errors with their traceback.

    Args:
        request: The request that caused the exception.
        exc: The exception to handle.

    Returns:
        Response: ORJSONResponse with ``{statusCode, error, message}``.
    """
    detail = normalize_exception(exc)
    severity = error_severity(exc, detail)
    correlation_id = RequestContext.get_correlation_id()

    error_context = sanitize_error_context(
        exc,
        {
            "method": request.method,
            "path": request.url.path,
            "error_kind": detail.kind.value,
            "status_code": int(detail.status_code),
            "severity": severity.value,
        },
    )

    if not severity.is_expected:
        logger.opt(exception=exc).error(
            "Request failed: {}",
            type(exc).__name__,
            correlation_id=correlation_id,
            **error_context,
        )
    else:
        logger.warning(
            "Request rejected: {}",
            detail.message,
            correlation_id=correlation_id,
            **error_context,
        )

    add_span_attributes(
        **{
            "error.kind": detail.kind.value,
            "error.type": type(exc).__name__,
            "http.response.status_code": int(detail.status_code),
        }
    )

    response = error_response(detail)
    if correlation_id:
        response.headers[CORRELATION_ID_HEADER] = correlation_id
    if isinstance(exc, StarletteHTTPException) and exc.headers:
        response.headers.update(exc.headers)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """Register the exception handlers with the FastAPI application.

    ``Exception`` itself is handled by Starlette's outermost error
    middleware, which re-raises after responding; the more specific types
    are handled inside the application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ItemsApiError, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, api_exception_handler)
    app.add_exception_handler(ValueError, api_exception_handler)
    app.add_exception_handler(SyntaxError, api_exception_handler)
    app.add_exception_handler(Exception, api_exception_handler)

    logger.info("Exception handlers registered")
