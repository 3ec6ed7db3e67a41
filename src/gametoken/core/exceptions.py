"""
Game token SDK exception hierarchy.

Typed exceptions for calldata generation so callers can separate bad user
input from internal defects (catalog or encoder mismatches). None of these
errors are transient: retrying the same call always fails the same way.
"""

from __future__ import annotations
from typing import Optional, Any, Dict


class SdkError(Exception):
    """Base exception for all SDK errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error
        recoverable: Whether the operation can be retried
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable


# ==================== Input Errors ====================


class InputError(SdkError):
    """Raised when a caller-supplied string cannot be parsed."""

    def __init__(self, message: str, raw: Any = None, **kwargs: Any) -> None:
        details = kwargs.pop("details", None) or {}
        details.setdefault("raw", raw)
        super().__init__(message, details=details, **kwargs)
        self.raw = raw


class InvalidAddressError(InputError):
    """Raised when a string is not a 0x-prefixed 20-byte hex address."""

    def __init__(self, raw: Any, **kwargs: Any) -> None:
        super().__init__(f"Invalid address format: {raw}", raw=raw, **kwargs)


class InvalidNumberError(InputError):
    """Raised when a string is not a valid uint256 (decimal or 0x-hex)."""

    def __init__(self, raw: Any, reason: Optional[str] = None, **kwargs: Any) -> None:
        message = f"Invalid numeric value: {raw}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, raw=raw, **kwargs)
        self.reason = reason


# ==================== Internal Invariant Errors ====================


class InternalInvariantError(SdkError):
    """Raised when the catalog and the call builders disagree.

    These indicate a programming defect, never a user error.
    """
    pass


class FunctionNotFoundError(InternalInvariantError):
    """Raised when a function name is missing from a catalog."""

    def __init__(self, name: str, role: Optional[str] = None, **kwargs: Any) -> None:
        where = f" in {role} catalog" if role else ""
        super().__init__(
            f"Function '{name}' not found{where}",
            details={"function": name, "role": role},
            **kwargs,
        )
        self.name = name
        self.role = role


class ArityMismatchError(InternalInvariantError):
    """Raised when the value count differs from the signature's parameter count."""

    def __init__(self, signature: str, expected: int, actual: int, **kwargs: Any) -> None:
        super().__init__(
            f"{signature} expects {expected} arguments, got {actual}",
            details={"signature": signature, "expected": expected, "actual": actual},
            **kwargs,
        )
        self.expected = expected
        self.actual = actual


class TypeMismatchError(InternalInvariantError):
    """Raised when a typed value does not fit the parameter at its position."""

    def __init__(
        self,
        position: int,
        expected: str,
        actual: str,
        reason: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        message = f"Argument {position}: expected {expected}, got {actual}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message,
            details={"position": position, "expected": expected, "actual": actual},
            **kwargs,
        )
        self.position = position
        self.expected = expected
        self.actual = actual


# ==================== Encoding & Facade Errors ====================


class EncodingError(SdkError):
    """Raised when byte assembly fails for a single call."""
    pass


class ContractError(SdkError):
    """Raised by the facade when a multi-step flow fails."""
    pass


class ConfigurationError(SdkError):
    """Raised when environment configuration is missing or invalid."""
    pass


# ==================== Utility Functions ====================


def is_input_error(exc: Exception) -> bool:
    """Check whether an exception was caused by bad caller input."""
    if isinstance(exc, InputError):
        return True
    cause = exc.__cause__
    return isinstance(cause, InputError)


def get_error_context(exc: Exception) -> Dict[str, Any]:
    """Extract error context from an exception for logging.

    Args:
        exc: The exception to extract context from

    Returns:
        Dictionary containing error type, message, and any additional details
    """
    context: Dict[str, Any] = {
        "error_type": type(exc).__name__,
        "error_message": str(exc),
    }

    if isinstance(exc, SdkError):
        context["recoverable"] = exc.recoverable
        if exc.details:
            context["details"] = exc.details

    if exc.__cause__ is not None:
        context["cause"] = type(exc.__cause__).__name__

    return context
