"""
Run the calldata API server.

Reads host/port and logging settings from the environment (see
:mod:`gametoken.core.config`).
"""

from __future__ import annotations

import sys

from gametoken.api import create_app
from gametoken.core.config import Settings, load_settings
from gametoken.core.exceptions import ConfigurationError
from gametoken.core.logging_config import setup_logging


def run(settings: Settings | None = None) -> None:
    """Configure logging and serve the API until interrupted."""
    settings = settings or load_settings()
    logger = setup_logging(
        name="gametoken",
        log_file=settings.log_file,
        level=settings.log_level,
        environment=settings.environment,
    )
    app = create_app(settings=settings)
    logger.info(
        "Starting API server on %s:%d",
        settings.api_host,
        settings.api_port,
        extra={"event": "api.start"},
    )
    app.run(host=settings.api_host, port=settings.api_port)


def main() -> int:
    try:
        run()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
