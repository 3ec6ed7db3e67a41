"""
Game Token calldata HTTP API

Flask application factory. The API only prepares calldata; callers sign and
submit the transactions themselves.

Usage:
    from gametoken.api import create_app
    app = create_app()
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from gametoken.api.calldata_bp import calldata_bp
from gametoken.api.error_response import ErrorCode, error_response
from gametoken.core.config import Settings, load_settings
from gametoken.sdk import GameTokenSdk

__all__ = ["create_app", "calldata_bp"]

logger = logging.getLogger(__name__)


def create_app(
    sdk: Optional[GameTokenSdk] = None,
    settings: Optional[Settings] = None,
) -> Flask:
    """
    Build the API application.

    Args:
        sdk: SDK instance to serve (a default one is created if omitted)
        settings: Runtime settings (read from the environment if omitted)
    """
    settings = settings or load_settings()
    app = Flask(__name__)
    app.config["GAMETOKEN_SETTINGS"] = settings
    app.extensions["gametoken_sdk"] = sdk or GameTokenSdk()

    CORS(app, origins=settings.cors_origins)
    app.register_blueprint(calldata_bp)

    @app.errorhandler(HTTPException)
    def _handle_http_error(error: HTTPException) -> Tuple[Any, int]:
        if error.code == 404:
            body, status = error_response(ErrorCode.NOT_FOUND, "Endpoint not found")
        elif error.code == 405:
            body, status = error_response(ErrorCode.METHOD_NOT_ALLOWED, "Method not allowed")
        else:
            body, status = error_response(
                ErrorCode.INTERNAL_ERROR, error.description or "HTTP error", status=error.code
            )
        return jsonify(body), status

    logger.info(
        "API application created",
        extra={"event": "api.created", "environment": settings.environment},
    )
    return app
