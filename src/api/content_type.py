"""Content-Type and charset validation for body-bearing requests.

Both request guards (the pre-parse middleware and the router dependency)
call the same validator instance, so a request is judged by one rule set
whichever guard sees it first.
"""

from collections.abc import Sequence
from http import HTTPStatus
from typing import Protocol

from src.api.constants import (
    CHARSET_MESSAGE,
    CHARSET_PARAMETER,
    CONTENT_TYPE_MESSAGE,
    JSON_CONTENT_TYPE,
    QUOTE_CHARACTERS,
    REQUEST_BODY_METHODS,
    SUPPORTED_CHARSETS,
)
from src.core.exceptions import ErrorDetail, ErrorKind
from src.core.types import HeaderValue


class ContentTypeValidator(Protocol):
    """Judges whether a request's Content-Type is acceptable."""

    def validate(self, method: str, content_type: HeaderValue) -> ErrorDetail | None:
        """Return the rejection for this request, or None if it may proceed."""
        ...


def _first_header_value(content_type: HeaderValue) -> str | None:
    """Reduce a possibly repeated header to the value that is judged."""
    if isinstance(content_type, str) or content_type is None:
        return content_type
    if isinstance(content_type, Sequence) and content_type:
        return content_type[0]
    return None


def _unquote(value: str) -> str:
    """Drop at most one quote character from each end."""
    if value[:1] in QUOTE_CHARACTERS:
        value = value[1:]
    if value[-1:] in QUOTE_CHARACTERS:
        value = value[:-1]
    return value


def _extract_charset(parameters: Sequence[str]) -> str | None:
    """Return the charset parameter value, or None when not declared.

    The first parameter that starts with ``charset=`` wins. Its value is the
    text between the first and second ``=``, trimmed, unquoted and
    lower-cased.
    """
    for parameter in parameters:
        normalized = parameter.strip().lower()
        if normalized.startswith(CHARSET_PARAMETER):
            value = normalized.split("=")[1].strip()
            return _unquote(value)
    return None


class JsonContentTypeValidator:
    """Require ``application/json`` with an optional UTF-8 charset.

    Methods without a body always pass. For POST, PATCH and PUT the media
    type must be ``application/json`` (case-insensitive) and a declared,
    non-empty charset must be ``utf-8`` or ``utf8``.
    """

    def validate(self, method: str, content_type: HeaderValue) -> ErrorDetail | None:
        """Validate the Content-Type of a request.

        Args:
            method: HTTP method of the request.
            content_type: Raw Content-Type header: absent, a single value,
                or the list of values of a repeated header.

        Returns:
            ErrorDetail | None: The rejection, or None if the request passes.
        """
        if method.upper() not in REQUEST_BODY_METHODS:
            return None

        header = _first_header_value(content_type)
        if header is None or not header.strip():
            return ErrorDetail(
                ErrorKind.TRANSPORT, HTTPStatus.BAD_REQUEST, CONTENT_TYPE_MESSAGE
            )

        media_type, *parameters = header.split(";")
        if media_type.strip().lower() != JSON_CONTENT_TYPE:
            return ErrorDetail(
                ErrorKind.TRANSPORT, HTTPStatus.BAD_REQUEST, CONTENT_TYPE_MESSAGE
            )

        charset = _extract_charset(parameters)
        if charset and charset not in SUPPORTED_CHARSETS:
            return ErrorDetail(
                ErrorKind.TRANSPORT, HTTPStatus.BAD_REQUEST, CHARSET_MESSAGE
            )
        return None


default_content_type_validator = JsonContentTypeValidator()
