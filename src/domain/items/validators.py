"""Field validators for item payloads.

Each validator returns a ``Checked`` outcome holding either the normalized
value or the ``ErrorDetail`` describing why the input was rejected. Callers
decide when to turn a failure into an exception with ``unwrap()``.
"""

import re
import uuid
from dataclasses import dataclass
from datetime import date
from http import HTTPStatus
from typing import Final, cast

from src.core.exceptions import ErrorDetail, ErrorKind

INVALID_UUID_MESSAGE: Final[str] = "Invalid UUID format."
INVALID_NAME_MESSAGE: Final[str] = "name is required and must be a non-empty string."
INVALID_DATE_OF_BIRTH_MESSAGE: Final[str] = (
    "Invalid date of birth; use ISO date format (YYYY-MM-DD)."
)

UUID_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)

# Attribute name -> wire name, used in free-text error messages
FIELD_LABELS: Final[dict[str, str]] = {
    "name": "name",
    "description": "description",
    "date_of_birth": "dateOfBirth",
    "sex": "sex",
    "phone_number": "phoneNumber",
    "address": "address",
}

# Free-text fields stored trimmed; description is stored as given
TRIMMED_TEXT_FIELDS: Final[frozenset[str]] = frozenset(
    {"sex", "phone_number", "address"}
)


@dataclass(frozen=True, slots=True)
class Checked[T]:
    """Outcome of a validator: a value or an error, never both."""

    value: T | None = None
    error: ErrorDetail | None = None

    @property
    def ok(self) -> bool:
        """Whether the input was accepted."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the accepted value.

        Returns:
            T: The normalized value.

        Raises:
            ItemsApiError: The exception matching the rejection, if any.
        """
        if self.error is not None:
            raise self.error.to_exception()
        return cast("T", self.value)


def _invalid[T](message: str) -> Checked[T]:
    detail = ErrorDetail(ErrorKind.VALIDATION, HTTPStatus.BAD_REQUEST, message)
    return Checked(error=detail)


def check_item_id(value: object) -> Checked[uuid.UUID]:
    """Accept only canonical 8-4-4-4-12 hexadecimal identifiers.

    Args:
        value: Identifier as received from the client.

    Returns:
        Checked[uuid.UUID]: The parsed identifier or an invalid-format error.
    """
    if not isinstance(value, str) or not UUID_PATTERN.fullmatch(value):
        return _invalid(INVALID_UUID_MESSAGE)
    return Checked(uuid.UUID(value))


def check_name(value: object) -> Checked[str]:
    """Require a string that is non-empty after trimming.

    Args:
        value: Raw ``name`` from the payload.

    Returns:
        Checked[str]: The trimmed name or a validation error.
    """
    if not isinstance(value, str) or not value.strip():
        return _invalid(INVALID_NAME_MESSAGE)
    return Checked(value.strip())


def check_date_of_birth(value: object) -> Checked[date | None]:
    """Parse an ISO calendar date, rejecting dates that do not round-trip.

    Absent, ``null`` and blank values mean "no date". A non-blank string is
    accepted only if formatting the parsed date as ``YYYY-MM-DD`` reproduces
    the trimmed input exactly, which rejects ``1989-11-31`` as well as the
    compact and week-date forms ``date.fromisoformat`` would otherwise take.

    Args:
        value: Raw ``dateOfBirth`` from the payload.

    Returns:
        Checked[date | None]: The parsed date, None, or a validation error.
    """
    if value is None:
        return Checked(None)
    if not isinstance(value, str):
        return _invalid(INVALID_DATE_OF_BIRTH_MESSAGE)

    trimmed = value.strip()
    if not trimmed:
        return Checked(None)

    try:
        parsed = date.fromisoformat(trimmed)
    except ValueError:
        return _invalid(INVALID_DATE_OF_BIRTH_MESSAGE)

    if parsed.isoformat() != trimmed:
        return _invalid(INVALID_DATE_OF_BIRTH_MESSAGE)
    return Checked(parsed)


def check_text(field: str, value: object) -> Checked[str]:
    """Validate an optional free-text field.

    ``null`` becomes an empty string. Strings are kept, trimmed for the
    fields in ``TRIMMED_TEXT_FIELDS``. Any other JSON type is rejected.

    Args:
        field: Attribute name of the field (e.g. ``phone_number``).
        value: Raw value from the payload.

    Returns:
        Checked[str]: The normalized text or a validation error.
    """
    if value is None:
        return Checked("")
    if not isinstance(value, str):
        return _invalid(f"{FIELD_LABELS.get(field, field)} must be a string.")
    return Checked(value.strip() if field in TRIMMED_TEXT_FIELDS else value)
