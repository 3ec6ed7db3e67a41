"""
Structured Error Response Module

Maps the SDK's closed error taxonomy onto HTTP responses:
- One error code per exception class
- An explicit code -> HTTP status table
- A single JSON body shape for every error
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from gametoken.core.exceptions import (
    ArityMismatchError,
    ContractError,
    EncodingError,
    FunctionNotFoundError,
    InvalidAddressError,
    InvalidNumberError,
    SdkError,
    TypeMismatchError,
)


class ErrorCode(str, Enum):
    """Error codes returned by the calldata API."""

    # Validation
    INVALID_ADDRESS = "INVALID_ADDRESS"
    INVALID_NUMBER = "INVALID_NUMBER"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"

    # Routing
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # Internal
    FUNCTION_NOT_FOUND = "FUNCTION_NOT_FOUND"
    ENCODING_ERROR = "ENCODING_ERROR"
    CONTRACT_ERROR = "CONTRACT_ERROR"
    SDK_ERROR = "SDK_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_STATUS_MAP: dict[ErrorCode, int] = {
    # 400 Bad Request
    ErrorCode.INVALID_ADDRESS: 400,
    ErrorCode.INVALID_NUMBER: 400,
    ErrorCode.INVALID_PAYLOAD: 400,
    # 404 / 405
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.METHOD_NOT_ALLOWED: 405,
    # 500 Internal Server Error
    ErrorCode.FUNCTION_NOT_FOUND: 500,
    ErrorCode.ENCODING_ERROR: 500,
    ErrorCode.CONTRACT_ERROR: 500,
    ErrorCode.SDK_ERROR: 500,
    ErrorCode.INTERNAL_ERROR: 500,
}

# Most specific class first
EXCEPTION_CODE_MAP: tuple[tuple[type[SdkError], ErrorCode], ...] = (
    (InvalidAddressError, ErrorCode.INVALID_ADDRESS),
    (InvalidNumberError, ErrorCode.INVALID_NUMBER),
    (FunctionNotFoundError, ErrorCode.FUNCTION_NOT_FOUND),
    (ArityMismatchError, ErrorCode.ENCODING_ERROR),
    (TypeMismatchError, ErrorCode.ENCODING_ERROR),
    (EncodingError, ErrorCode.ENCODING_ERROR),
    (ContractError, ErrorCode.CONTRACT_ERROR),
)

_MESSAGE_PREFIX: dict[ErrorCode, str] = {
    ErrorCode.INVALID_ADDRESS: "Invalid Ethereum address",
    ErrorCode.INVALID_NUMBER: "Invalid number format",
}


@dataclass
class APIError:
    """
    Structured API error response.

    Format:
    {
        "error": {
            "code": "ERROR_CODE",
            "message": "Human readable message",
            "details": {...}  // Optional additional context
        }
    }
    """

    code: ErrorCode | str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        error_body: dict[str, Any] = {
            "code": self.code.value if isinstance(self.code, ErrorCode) else self.code,
            "message": self.message,
        }
        if self.details:
            error_body["details"] = self.details
        return {"error": error_body}

    @property
    def status_code(self) -> int:
        if isinstance(self.code, ErrorCode):
            return ERROR_STATUS_MAP.get(self.code, 500)
        return 500

    def to_response(self) -> tuple[dict[str, Any], int]:
        """Return as Flask response tuple (body, status_code)."""
        return self.to_dict(), self.status_code


def error_code_for(exc: Exception) -> ErrorCode:
    """Pick the error code for an exception via ``EXCEPTION_CODE_MAP``."""
    for exc_type, code in EXCEPTION_CODE_MAP:
        if isinstance(exc, exc_type):
            return code
    if isinstance(exc, SdkError):
        return ErrorCode.SDK_ERROR
    return ErrorCode.INTERNAL_ERROR


def error_response(
    code: ErrorCode | str,
    message: str,
    details: dict[str, Any] | None = None,
    status: int | None = None,
) -> tuple[dict[str, Any], int]:
    """
    Create a structured error response.

    Args:
        code: Error code (from ErrorCode enum or string)
        message: Human-readable error message
        details: Additional error context
        status: Override HTTP status code (optional)

    Returns:
        Tuple of (response_dict, status_code) for Flask
    """
    error = APIError(code=code, message=message, details=details or {})
    response_status = status if status is not None else error.status_code
    return error.to_dict(), response_status


def sdk_error_response(exc: SdkError) -> tuple[dict[str, Any], int]:
    """Translate an SDK exception into a response; internals are not leaked."""
    code = error_code_for(exc)
    status = ERROR_STATUS_MAP[code]
    if status < 500:
        prefix = _MESSAGE_PREFIX.get(code)
        raw = getattr(exc, "raw", None)
        message = f"{prefix}: {raw}" if prefix else exc.message
        return error_response(code, message, details={"value": raw})
    return error_response(code, f"SDK error: {exc.message}")


def invalid_payload(message: str, field_name: str | None = None) -> tuple[dict[str, Any], int]:
    """Missing or malformed JSON request field."""
    details = {"field": field_name} if field_name else None
    return error_response(ErrorCode.INVALID_PAYLOAD, message, details=details)
