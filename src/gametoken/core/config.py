"""
Game Token SDK Configuration

All settings come from environment variables. Only the API server and the CLI
read them; the encoding core takes no configuration.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_TOKEN_DECIMALS = 18

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_int(env_var: str, default: int, minimum: int, maximum: int) -> int:
    raw = os.getenv(env_var, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{env_var} must be an integer, got {raw!r}",
            details={"env_var": env_var},
        )
    if value < minimum or value > maximum:
        raise ConfigurationError(
            f"{env_var} must be between {minimum} and {maximum}, got {value}",
            details={"env_var": env_var},
        )
    return value


def _get_list(env_var: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(env_var, default).split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the API server and CLI."""

    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str | None = None
    environment: str = DEFAULT_ENVIRONMENT
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    default_decimals: int = DEFAULT_TOKEN_DECIMALS


def load_settings() -> Settings:
    """
    Read settings from the environment.

    Recognised variables:
        GAMETOKEN_API_HOST, GAMETOKEN_API_PORT (falls back to PORT),
        GAMETOKEN_LOG_LEVEL, GAMETOKEN_LOG_FILE, GAMETOKEN_ENVIRONMENT,
        GAMETOKEN_CORS_ORIGINS (comma separated), GAMETOKEN_DEFAULT_DECIMALS

    Raises:
        ConfigurationError: If a value is malformed or out of range
    """
    port_var = "GAMETOKEN_API_PORT" if os.getenv("GAMETOKEN_API_PORT") else "PORT"
    api_port = _get_int(port_var, DEFAULT_API_PORT, 1, 65535)

    log_level = os.getenv("GAMETOKEN_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            f"GAMETOKEN_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}",
            details={"env_var": "GAMETOKEN_LOG_LEVEL"},
        )

    settings = Settings(
        api_host=os.getenv("GAMETOKEN_API_HOST", DEFAULT_API_HOST).strip() or DEFAULT_API_HOST,
        api_port=api_port,
        log_level=log_level,
        log_file=os.getenv("GAMETOKEN_LOG_FILE", "").strip() or None,
        environment=os.getenv("GAMETOKEN_ENVIRONMENT", DEFAULT_ENVIRONMENT).strip() or DEFAULT_ENVIRONMENT,
        cors_origins=_get_list("GAMETOKEN_CORS_ORIGINS", "*"),
        default_decimals=_get_int("GAMETOKEN_DEFAULT_DECIMALS", DEFAULT_TOKEN_DECIMALS, 0, 255),
    )
    logger.debug(
        "Loaded settings",
        extra={"event": "config.loaded", "environment": settings.environment},
    )
    return settings


__all__ = [
    "Settings",
    "load_settings",
    "DEFAULT_API_HOST",
    "DEFAULT_API_PORT",
    "DEFAULT_TOKEN_DECIMALS",
    "LOG_LEVELS",
]
