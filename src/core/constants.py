"""Core application constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Security and redaction
REDACTED = "[REDACTED]"

# Maximum length of a string value shown in console log context
MAX_LOG_FIELD_LENGTH = 100
