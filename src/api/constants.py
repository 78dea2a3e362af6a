"""API-related constants."""

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Request handling
REQUEST_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

# Content types
JSON_CONTENT_TYPE = "application/json"
SUPPORTED_CHARSETS = frozenset({"utf-8", "utf8"})
CHARSET_PARAMETER = "charset="
# One of these is dropped from each end of a charset value
QUOTE_CHARACTERS = ('"', "'")

# Error messages returned to clients
CONTENT_TYPE_MESSAGE = (
    "Content-Type must be application/json. Send the request body in JSON format."
)
CHARSET_MESSAGE = (
    "Unsupported or invalid encoding. Use an encoding that can be decoded "
    "(e.g. UTF-8: Content-Type: application/json; charset=utf-8)."
)
DECODE_MESSAGE = (
    "Request body could not be decoded. Use an encoding that can be decoded "
    "(e.g. UTF-8)."
)
INVALID_JSON_MESSAGE = "Request body must be valid JSON."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."

# Exception message fragments that identify a body decoding failure
DECODE_ERROR_MARKERS = (
    "encoding",
    "charset",
    "decode",
    "invalid utf",
    "invalid character",
    "invalid byte",
)

# Message fragments that identify a JSON syntax failure carrying status 400
SYNTAX_ERROR_MARKERS = ("json", "unexpected token", "parse")
