"""Type aliases shared across layers."""

from typing import Any

# Decoded request payload (top-level JSON object)
type JsonObject = dict[str, Any]

# Raw Content-Type header as seen by the validators: absent, single or repeated
type HeaderValue = str | list[str] | tuple[str, ...] | None
