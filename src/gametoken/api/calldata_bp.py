"""
Calldata API Blueprint

JSON endpoints wrapping :class:`gametoken.sdk.GameTokenSdk`:
single-call encoders under ``/api/v1/calldata`` and the two flows under
``/api/v1/flow``. Every endpoint is a pure computation; nothing is sent to a
chain.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from flask import Blueprint, current_app, jsonify, request

from gametoken import __version__
from gametoken.api.error_response import invalid_payload, sdk_error_response
from gametoken.core.exceptions import SdkError, get_error_context, is_input_error
from gametoken.sdk import GameTokenSdk

logger = logging.getLogger(__name__)

calldata_bp = Blueprint("calldata", __name__)


class PayloadError(ValueError):
    """Raised when a request body is missing a field or has the wrong type."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def get_sdk() -> GameTokenSdk:
    return current_app.extensions["gametoken_sdk"]


def _payload() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise PayloadError("Request body must be a JSON object")
    return body


def _require_str(body: Dict[str, Any], name: str) -> str:
    if name not in body:
        raise PayloadError(f"Missing field: {name}", field=name)
    value = body[name]
    if not isinstance(value, str):
        raise PayloadError(f"Field {name} must be a string", field=name)
    return value


def _require_decimals(body: Dict[str, Any], name: str = "decimals") -> int:
    if name not in body:
        raise PayloadError(f"Missing field: {name}", field=name)
    value = body[name]
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise PayloadError(f"Field {name} must be an integer between 0 and 255", field=name)
    return value


@calldata_bp.errorhandler(PayloadError)
def _handle_payload_error(error: PayloadError) -> Tuple[Any, int]:
    body, status = invalid_payload(str(error), error.field)
    return jsonify(body), status


@calldata_bp.errorhandler(SdkError)
def _handle_sdk_error(error: SdkError) -> Tuple[Any, int]:
    body, status = sdk_error_response(error)
    level = logging.WARNING if is_input_error(error) else logging.ERROR
    logger.log(
        level,
        "Calldata request failed: %s",
        error,
        extra={"event": "api.sdk_error", "path": request.path, **get_error_context(error)},
    )
    return jsonify(body), status


@calldata_bp.route("/", methods=["GET"])
def health_check() -> Tuple[Any, int]:
    """Health check endpoint."""
    return jsonify({"status": "ok", "version": __version__}), 200


@calldata_bp.route("/api/v1/catalog", methods=["GET"])
def catalog() -> Tuple[Any, int]:
    """List every known function signature and its selector, per contract role."""
    return jsonify({"catalog": get_sdk().registry.describe()}), 200


# ==================== Single Calls ====================


@calldata_bp.route("/api/v1/calldata/creda-approve", methods=["POST"])
def approve_creda() -> Tuple[Any, int]:
    body = _payload()
    calldata = get_sdk().approve_deposit(
        _require_str(body, "spender"), _require_str(body, "amount")
    )
    return jsonify({"calldata": calldata}), 200


@calldata_bp.route("/api/v1/calldata/approve-xp", methods=["POST"])
def approve_xp() -> Tuple[Any, int]:
    body = _payload()
    calldata = get_sdk().approve_reward(
        _require_str(body, "spender"), _require_str(body, "amount")
    )
    return jsonify({"calldata": calldata}), 200


@calldata_bp.route("/api/v1/calldata/lock-creda", methods=["POST"])
def lock_creda() -> Tuple[Any, int]:
    body = _payload()
    calldata = get_sdk().encode_lock(_require_str(body, "amount"))
    return jsonify({"calldata": calldata}), 200


@calldata_bp.route("/api/v1/calldata/create-token", methods=["POST"])
def create_game_token() -> Tuple[Any, int]:
    body = _payload()
    calldata = get_sdk().encode_create_token(
        _require_str(body, "xp_amount"),
        _require_str(body, "name"),
        _require_str(body, "symbol"),
        _require_decimals(body),
    )
    return jsonify({"calldata": calldata}), 200


@calldata_bp.route("/api/v1/calldata/burn-token", methods=["POST"])
def burn_game_token() -> Tuple[Any, int]:
    body = _payload()
    calldata = get_sdk().encode_burn_token(
        _require_str(body, "game_id"), _require_str(body, "amount")
    )
    return jsonify({"calldata": calldata}), 200


# ==================== Flows ====================


@calldata_bp.route("/api/v1/flow/create", methods=["POST"])
def create_token_flow() -> Tuple[Any, int]:
    body = _payload()
    flow = get_sdk().create_flow(
        _require_str(body, "factory_address"),
        _require_str(body, "creda_amount"),
        _require_str(body, "game_name"),
        _require_str(body, "game_symbol"),
        _require_decimals(body),
    )
    return (
        jsonify(
            {
                "creda_approve": flow.deposit_approve,
                "lock_creda": flow.lock_deposit,
                "xp_amount": str(flow.reward_amount),
                "xp_approve": flow.reward_approve,
                "create_token": flow.create_token,
            }
        ),
        200,
    )


@calldata_bp.route("/api/v1/flow/burn", methods=["POST"])
def burn_token_flow() -> Tuple[Any, int]:
    body = _payload()
    flow = get_sdk().burn_flow(
        _require_str(body, "factory_address"),
        _require_str(body, "game_token_address"),
        _require_str(body, "game_id"),
        _require_str(body, "burn_amount"),
    )
    return (
        jsonify(
            {
                "game_token_approve": flow.issued_token_approve,
                "burn_game_token": flow.burn_issued_token,
            }
        ),
        200,
    )
