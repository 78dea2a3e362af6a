"""Structured logging built on Loguru.

Formatter types:
- **console**: Human-readable with inline context (development)
- **json**: One JSON object per line (staging, production, log shippers)

Standard library loggers (uvicorn, SQLAlchemy, OpenTelemetry) are intercepted
and routed through Loguru so every line shares the same format and carries
the request-scoped context bound with ``logger.contextualize``.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Final, Protocol, cast

from loguru import logger

from src.core.constants import MAX_LOG_FIELD_LENGTH, REDACTED
from src.core.error_context import is_sensitive_field

CORRELATION_ID_DISPLAY_LENGTH: Final[int] = 8

# Context fields rendered first, in this order, by the console formatter
PRIORITY_FIELDS: Final[tuple[str, ...]] = (
    "correlation_id",
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
)


class _LoggingState:
    """Simple state holder to track if logging has been configured."""

    def __init__(self) -> None:
        self.configured = False


_state = _LoggingState()


class LogConfigProtocol(Protocol):
    """Protocol for log configuration objects."""

    @property
    def log_level(self) -> str:
        """Logging level."""
        ...

    @property
    def log_formatter_type(self) -> str | None:
        """Log formatter type."""
        ...


class SettingsProtocol(Protocol):
    """Protocol for settings objects that setup_logging can accept."""

    @property
    def debug(self) -> bool:
        """Debug mode flag."""
        ...

    @property
    def log_config(self) -> LogConfigProtocol:
        """Log configuration."""
        ...


def _escape(value: object) -> str:
    """Escape braces so Loguru does not treat values as format fields."""
    return str(value).replace("{", "{{").replace("}", "}}")


def _format_field(key: str, value: object) -> str:
    """Render one context field as ``key=value`` for the console formatter.

    Args:
        key: The field name.
        value: The field value.

    Returns:
        str: The escaped, possibly redacted or truncated field.
    """
    if key == "correlation_id":
        text = str(value)[:CORRELATION_ID_DISPLAY_LENGTH]
    elif key == "duration_ms":
        text = f"{value}ms"
    elif is_sensitive_field(key):
        text = REDACTED
    else:
        text = str(value)
        if len(text) > MAX_LOG_FIELD_LENGTH:
            text = text[: MAX_LOG_FIELD_LENGTH - 3] + "..."
    return f"{_escape(key)}={_escape(text)}"


def format_console_with_context(record: dict[str, Any]) -> str:
    """Format a record for the console with all context fields visible.

    Args:
        record: Loguru record to format.

    Returns:
        str: Loguru format string for this record.
    """
    extra: dict[str, Any] = record.get("extra", {})
    fields = [
        f"<yellow>{_format_field(key, extra[key])}</yellow>"
        for key in PRIORITY_FIELDS
        if extra.get(key) is not None
    ]
    fields.extend(
        f"<dim>{_format_field(key, value)}</dim>"
        for key, value in extra.items()
        if key not in PRIORITY_FIELDS and not key.startswith("_") and value is not None
    )

    parts = [
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>",
        "<level>{level: <8}</level>",
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>",
    ]
    if fields:
        parts.append(" ".join(f"[{field}]" for field in fields))
    parts.append(_escape(record.get("message", "")))

    line = " | ".join(parts)
    if record.get("exception"):
        line += "\n{exception}"
    return line + "\n"


def serialize_for_json(record: dict[str, Any]) -> str:
    """Format a log record as a single JSON line.

    Args:
        record: Loguru record to format.

    Returns:
        str: JSON-formatted log entry with newline.
    """
    log_entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
    }

    for key, value in record.get("extra", {}).items():
        if key.startswith("_"):
            continue
        log_entry[key] = REDACTED if is_sensitive_field(key) else value

    if exc := record.get("exception"):
        log_entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return json.dumps(log_entry, default=str) + "\n"


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Forward log record to Loguru.

        Args:
            record: Standard library LogRecord to forward.
        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so Loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(settings: SettingsProtocol) -> None:
    """Configure Loguru once for the whole process.

    Args:
        settings: Application settings containing log configuration.
    """
    if _state.configured:
        return

    logger.remove()

    formatter_type = settings.log_config.log_formatter_type or "console"
    level = settings.log_config.log_level

    if formatter_type == "json":

        def json_sink(message: object) -> None:
            """Write each record as one JSON line to stdout."""
            record = getattr(message, "record", None)
            if record is not None:
                sys.stdout.write(serialize_for_json(record))
                sys.stdout.flush()

        logger.add(json_sink, level=level, enqueue=True, diagnose=False)
    else:
        logger.add(
            sys.stdout,
            format=cast("Any", format_console_with_context),
            level=level,
            enqueue=True,
            colorize=True,
            diagnose=settings.debug,
            backtrace=settings.debug,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(logger_name)
        uvicorn_logger.handlers = [InterceptHandler()]
        uvicorn_logger.propagate = False

    logger.info(
        "Logging configured with {} formatter",
        formatter_type,
        log_level=level,
    )
    _state.configured = True
