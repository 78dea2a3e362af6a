"""Main entry point for running the Items API."""

import os

import uvicorn
from loguru import logger

from src.api.main import app
from src.core.config import get_settings
from src.core.logging import setup_logging

# Route uvicorn's own loggers through Loguru
UVICORN_LOG_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "default": {
            "class": "src.core.logging.InterceptHandler",
        },
    },
    "loggers": {
        name: {"handlers": ["default"], "level": "INFO", "propagate": False}
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
    },
}


def main() -> None:
    """Run the API under uvicorn, with auto-reload in debug mode."""
    settings = get_settings()
    setup_logging(settings)

    # PORT takes precedence over API_PORT (container platforms set it)
    port = int(os.environ.get("PORT", settings.api_port))

    if settings.debug:
        logger.info(
            "Starting Uvicorn on http://{}:{} (development mode with auto-reload)",
            settings.api_host,
            port,
        )
        # Reload requires the app as an import string
        uvicorn.run(
            "src.api.main:app",
            host=settings.api_host,
            port=port,
            reload=True,
            log_config=UVICORN_LOG_CONFIG,
        )
    else:
        logger.info(
            "Starting Uvicorn on http://{}:{} (production mode)",
            settings.api_host,
            port,
        )
        uvicorn.run(
            app,
            host=settings.api_host,
            port=port,
            reload=False,
            log_config=UVICORN_LOG_CONFIG,
        )


if __name__ == "__main__":
    main()
