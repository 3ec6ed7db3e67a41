"""
Ethereum ABI encoding for contract calldata.

Calldata layout (Solidity ABI spec):

    selector (4 bytes) || head (32 bytes per parameter) || tail

- Static types (address, uint256, uint8, bool) occupy one right-aligned,
  big-endian 32-byte word in the head.
- Dynamic types (string) put a 32-byte offset in the head, measured from the
  start of the argument block. The tail holds a 32-byte length word followed
  by the UTF-8 bytes, zero-padded to a 32-byte boundary.

The selector is the first 4 bytes of keccak256 over the canonical signature,
e.g. ``approve(address,uint256)`` -> ``095ea7b3``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from Crypto.Hash import keccak

from .exceptions import ArityMismatchError, EncodingError, TypeMismatchError
from .units import ADDRESS_LENGTH, UINT8_MAX, UINT256_MAX, Address

WORD_SIZE = 32
SELECTOR_SIZE = 4


def keccak256(data: bytes) -> bytes:
    """Compute keccak256 hash (Ethereum variant, not NIST SHA3-256)."""
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


def function_selector(signature: str) -> bytes:
    """Return the 4-byte selector for a canonical signature string."""
    return keccak256(signature.encode("ascii"))[:SELECTOR_SIZE]


def to_hex(data: bytes) -> str:
    """Format bytes as a lowercase 0x-prefixed hex string."""
    return "0x" + bytes(data).hex()


class ParamType(Enum):
    """ABI parameter types supported by the catalog."""

    ADDRESS = "address"
    UINT256 = "uint256"
    UINT8 = "uint8"
    STRING = "string"
    BOOL = "bool"

    @property
    def abi_name(self) -> str:
        return self.value

    @property
    def is_dynamic(self) -> bool:
        return self is ParamType.STRING

    @classmethod
    def from_abi_name(cls, name: str) -> "ParamType":
        # "uint" is shorthand for uint256 in Solidity sources
        if name == "uint":
            name = "uint256"
        try:
            return cls(name)
        except ValueError:
            raise EncodingError(f"Unsupported ABI type: {name}", details={"type": name})


@dataclass(frozen=True)
class Param:
    """A named function parameter."""

    name: str
    type: ParamType


@dataclass(frozen=True)
class FunctionSignature:
    """Function name plus ordered parameters; determines the selector."""

    name: str
    params: Tuple[Param, ...]

    @property
    def canonical(self) -> str:
        return f"{self.name}({','.join(p.type.abi_name for p in self.params)})"

    @property
    def selector(self) -> bytes:
        return function_selector(self.canonical)

    @property
    def param_types(self) -> Tuple[ParamType, ...]:
        return tuple(p.type for p in self.params)

    @classmethod
    def from_abi(cls, entry: Dict[str, Any]) -> "FunctionSignature":
        """
        Build a signature from a JSON ABI function fragment.

        Args:
            entry: ``{"type": "function", "name": ..., "inputs": [{"name", "type"}]}``

        Returns:
            FunctionSignature with parameters in declared order
        """
        if entry.get("type", "function") != "function":
            raise EncodingError(f"ABI entry is not a function: {entry.get('type')}")
        params = tuple(
            Param(name=item.get("name", ""), type=ParamType.from_abi_name(item["type"]))
            for item in entry.get("inputs", [])
        )
        return cls(name=entry["name"], params=params)

    def __str__(self) -> str:
        return self.canonical


@dataclass(frozen=True)
class TypedValue:
    """A value tagged with the ABI type it should be encoded as."""

    type: ParamType
    value: Any

    @classmethod
    def address(cls, value: Address | bytes) -> "TypedValue":
        return cls(ParamType.ADDRESS, value)

    @classmethod
    def uint256(cls, value: int) -> "TypedValue":
        return cls(ParamType.UINT256, value)

    @classmethod
    def uint8(cls, value: int) -> "TypedValue":
        return cls(ParamType.UINT8, value)

    @classmethod
    def string(cls, value: str) -> "TypedValue":
        return cls(ParamType.STRING, value)

    @classmethod
    def boolean(cls, value: bool) -> "TypedValue":
        return cls(ParamType.BOOL, value)


# ==================== Word Encoders ====================


def _uint_word(value: int) -> bytes:
    return value.to_bytes(WORD_SIZE, "big")


def _pad_right(data: bytes) -> bytes:
    remainder = len(data) % WORD_SIZE
    if remainder:
        data += b"\x00" * (WORD_SIZE - remainder)
    return data


def _check_int(position: int, tv: TypedValue, upper: int) -> int:
    value = tv.value
    # bool is an int subclass; reject it so True never encodes as 1 silently
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeMismatchError(position, tv.type.abi_name, type(value).__name__)
    if value < 0 or value > upper:
        raise TypeMismatchError(
            position, tv.type.abi_name, str(value), reason="value out of range"
        )
    return value


def _encode_static(position: int, tv: TypedValue) -> bytes:
    if tv.type is ParamType.UINT256:
        return _uint_word(_check_int(position, tv, UINT256_MAX))

    if tv.type is ParamType.UINT8:
        return _uint_word(_check_int(position, tv, UINT8_MAX))

    if tv.type is ParamType.BOOL:
        if not isinstance(tv.value, bool):
            raise TypeMismatchError(position, "bool", type(tv.value).__name__)
        return _uint_word(int(tv.value))

    if tv.type is ParamType.ADDRESS:
        raw = tv.value.value if isinstance(tv.value, Address) else tv.value
        if not isinstance(raw, (bytes, bytearray)) or len(raw) != ADDRESS_LENGTH:
            raise TypeMismatchError(position, "address", type(tv.value).__name__)
        return b"\x00" * (WORD_SIZE - ADDRESS_LENGTH) + bytes(raw)

    raise EncodingError(f"{tv.type.abi_name} is not a static type")


def _encode_dynamic(position: int, tv: TypedValue) -> bytes:
    if tv.type is ParamType.STRING:
        if not isinstance(tv.value, str):
            raise TypeMismatchError(position, "string", type(tv.value).__name__)
        try:
            data = tv.value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodingError(f"Argument {position}: string is not valid UTF-8: {exc}")
        return _uint_word(len(data)) + _pad_right(data)

    raise EncodingError(f"{tv.type.abi_name} is not a dynamic type")


# ==================== Public API ====================


def encode_arguments(
    params: Sequence[ParamType],
    values: Sequence[TypedValue],
    signature: str = "",
) -> bytes:
    """
    ABI-encode ``values`` against the ordered ``params`` (no selector).

    Raises:
        ArityMismatchError: If the counts differ
        TypeMismatchError: If a value's tag or payload does not fit its slot
        EncodingError: On any other byte assembly failure
    """
    if len(values) != len(params):
        raise ArityMismatchError(signature or "arguments", len(params), len(values))

    for position, (param, tv) in enumerate(zip(params, values)):
        if not isinstance(tv, TypedValue):
            raise TypeMismatchError(position, param.abi_name, type(tv).__name__)
        if tv.type is not param:
            raise TypeMismatchError(position, param.abi_name, tv.type.abi_name)

    head_size = WORD_SIZE * len(params)
    head: List[bytes] = []
    tail: List[bytes] = []
    tail_size = 0

    for position, tv in enumerate(values):
        if tv.type.is_dynamic:
            encoded = _encode_dynamic(position, tv)
            head.append(_uint_word(head_size + tail_size))
            tail.append(encoded)
            tail_size += len(encoded)
        else:
            head.append(_encode_static(position, tv))

    return b"".join(head) + b"".join(tail)


def encode_call(signature: FunctionSignature, values: Iterable[TypedValue]) -> bytes:
    """
    Encode a full contract call: ``selector || head || tail``.

    Deterministic: the same signature and values always give the same bytes.
    """
    values = list(values)
    return signature.selector + encode_arguments(
        signature.param_types, values, signature=signature.canonical
    )


def encode_call_hex(signature: FunctionSignature, values: Iterable[TypedValue]) -> str:
    """Encode a contract call and format it as 0x-prefixed hex."""
    return to_hex(encode_call(signature, values))
