"""
Address and amount parsing for calldata inputs.

Callers hand the SDK plain strings (from JSON bodies, CLI flags, web forms).
This module turns them into typed values the encoder understands:

- ``parse_address``: ``0x`` + 40 hex digits -> 20-byte :class:`Address`
- ``parse_uint256``: decimal or ``0x`` hex -> int in ``[0, 2**256 - 1]``
- ``format_units`` / ``to_base_units``: convert between raw base units and
  human decimal strings for a given number of token decimals

Checksum (EIP-55 mixed case) is not validated; any hex casing is accepted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from .exceptions import InvalidAddressError, InvalidNumberError

UINT256_MAX = 2**256 - 1
UINT8_MAX = 2**8 - 1
ADDRESS_LENGTH = 20

_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")
_DECIMAL_RE = re.compile(r"[0-9]+")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")


@dataclass(frozen=True)
class Address:
    """A 20-byte account or contract address."""

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray)) or len(self.value) != ADDRESS_LENGTH:
            raise InvalidAddressError(self.value)
        object.__setattr__(self, "value", bytes(self.value))

    def hex(self) -> str:
        """Lowercase 0x-prefixed form."""
        return "0x" + self.value.hex()

    def __str__(self) -> str:
        return self.hex()


def parse_address(raw: str) -> Address:
    """
    Parse a 0x-prefixed hex string into an :class:`Address`.

    Args:
        raw: Address string, e.g. ``0x1234...7890`` (any hex casing)

    Returns:
        Parsed address

    Raises:
        InvalidAddressError: If the prefix, length or digits are wrong
    """
    if not isinstance(raw, str) or not _ADDRESS_RE.fullmatch(raw):
        raise InvalidAddressError(raw)
    return Address(bytes.fromhex(raw[2:]))


def parse_uint256(raw: str) -> int:
    """
    Parse a decimal or 0x-prefixed hexadecimal string into a uint256.

    Args:
        raw: Number string, e.g. ``"1000000000000000000"`` or ``"0x3e8"``

    Returns:
        Integer value in ``[0, UINT256_MAX]``

    Raises:
        InvalidNumberError: On empty input, stray characters (including
            whitespace and signs) or values above ``UINT256_MAX``
    """
    if not isinstance(raw, str):
        raise InvalidNumberError(raw, reason="not a string")

    if raw.startswith("0x"):
        digits = raw[2:]
        if not _HEX_RE.fullmatch(digits):
            raise InvalidNumberError(raw, reason="invalid hex digits")
        value = int(digits, 16)
    else:
        if not _DECIMAL_RE.fullmatch(raw):
            raise InvalidNumberError(raw, reason="invalid decimal digits")
        value = int(raw, 10)

    if value > UINT256_MAX:
        raise InvalidNumberError(raw, reason="exceeds uint256")
    return value


def format_units(value: int, decimals: int) -> str:
    """
    Render a base-unit integer as a human decimal string.

    ``format_units(1500000000000000000, 18)`` -> ``"1.5"``;
    ``format_units(5, 0)`` -> ``"5"``.
    """
    if value < 0:
        raise InvalidNumberError(value, reason="negative amount")
    if decimals < 0:
        raise InvalidNumberError(decimals, reason="negative decimals")

    digits = str(value)
    if decimals == 0:
        return digits

    if len(digits) <= decimals:
        digits = "0" * (decimals + 1 - len(digits)) + digits

    point = len(digits) - decimals
    rendered = f"{digits[:point]}.{digits[point:]}"
    rendered = rendered.rstrip("0")
    if rendered.endswith("."):
        rendered = rendered[:-1]
    return rendered


def to_base_units(amount: Union[str, Decimal, int], decimals: int) -> int:
    """
    Scale a human decimal amount into integer base units.

    ``to_base_units("1.5", 18)`` -> ``1500000000000000000``. Exact: more
    fractional digits than ``decimals`` is an error rather than a silent
    truncation.

    Raises:
        InvalidNumberError: If the amount is malformed, negative, too precise
            or overflows uint256
    """
    if decimals < 0 or decimals > UINT8_MAX:
        raise InvalidNumberError(decimals, reason="decimals out of range")
    if isinstance(amount, float):
        raise InvalidNumberError(amount, reason="floats are not accepted")

    try:
        value = Decimal(amount.strip() if isinstance(amount, str) else amount)
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidNumberError(amount, reason="not a decimal number")

    if not value.is_finite():
        raise InvalidNumberError(amount, reason="not a finite number")
    if value < 0:
        raise InvalidNumberError(amount, reason="negative amount")

    with localcontext() as ctx:
        ctx.prec = 200
        try:
            scaled = value.scaleb(decimals)
        except ArithmeticError:
            raise InvalidNumberError(amount, reason="exceeds uint256")
        # UINT256_MAX has 78 digits
        if scaled and scaled.adjusted() > 77:
            raise InvalidNumberError(amount, reason="exceeds uint256")
        if scaled != scaled.to_integral_value():
            raise InvalidNumberError(amount, reason=f"more than {decimals} decimal places")
        result = int(scaled)

    if result > UINT256_MAX:
        raise InvalidNumberError(amount, reason="exceeds uint256")
    return result
