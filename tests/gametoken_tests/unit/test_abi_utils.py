"""
Unit tests for ABI encoding: selectors, head/tail layout and type checks.
"""

import pytest
from eth_utils import keccak

from gametoken.core.abi import (
    FunctionSignature,
    Param,
    ParamType,
    TypedValue,
    encode_arguments,
    encode_call,
    function_selector,
    keccak256,
    to_hex,
)
from gametoken.core.exceptions import ArityMismatchError, EncodingError, TypeMismatchError
from gametoken.core.units import parse_address


def _sig(name, *types):
    return FunctionSignature(name, tuple(Param(f"p{i}", t) for i, t in enumerate(types)))


APPROVE = _sig("approve", ParamType.ADDRESS, ParamType.UINT256)
CREATE = _sig(
    "createGameToken", ParamType.UINT256, ParamType.STRING, ParamType.STRING, ParamType.UINT8
)


class TestSelectors:
    """Selector derivation must match the Ethereum algorithm bit for bit."""

    @pytest.mark.parametrize(
        "signature,expected",
        [
            ("approve(address,uint256)", "095ea7b3"),
            ("lockCreda(uint256)", "bec697db"),
            ("createGameToken(uint256,string,string,uint8)", "fd44d274"),
            ("burnGameToken(uint256,uint256)", "5ed6c1db"),
            ("transfer(address,uint256)", "a9059cbb"),
            ("burn(uint256)", "42966c68"),
            ("burnFrom(address,uint256)", "79cc6790"),
        ],
    )
    def test_known_selectors(self, signature, expected):
        assert function_selector(signature).hex() == expected

    def test_keccak_matches_reference_implementation(self):
        """keccak256 is Ethereum's keccak, not NIST SHA3-256."""
        for data in (b"", b"abc", b"setBurnEnabled(bool)"):
            assert keccak256(data) == keccak(data)

    def test_empty_input_hash(self):
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_canonical_signature(self):
        assert CREATE.canonical == "createGameToken(uint256,string,string,uint8)"
        assert CREATE.selector.hex() == "fd44d274"


class TestStaticEncoding:
    """Static types fill one right-aligned 32-byte head word each."""

    def test_encode_call_approve(self):
        spender = parse_address("0x" + "ab" * 20)
        amount = 12345678901234567890
        calldata = encode_call(APPROVE, [TypedValue.address(spender), TypedValue.uint256(amount)])

        assert len(calldata) == 4 + 64
        assert calldata[:4].hex() == "095ea7b3"
        assert calldata[4:16] == b"\x00" * 12
        assert calldata[16:36] == bytes.fromhex("ab" * 20)
        assert int.from_bytes(calldata[36:68], "big") == amount

    def test_raw_address_bytes_accepted(self):
        sig = _sig("f", ParamType.ADDRESS)
        encoded = encode_call(sig, [TypedValue.address(b"\x11" * 20)])
        assert encoded[4:] == b"\x00" * 12 + b"\x11" * 20

    def test_uint256_max(self):
        sig = _sig("f", ParamType.UINT256)
        encoded = encode_call(sig, [TypedValue.uint256(2**256 - 1)])
        assert encoded[4:] == b"\xff" * 32

    def test_uint8_left_padded(self):
        sig = _sig("f", ParamType.UINT8)
        encoded = encode_call(sig, [TypedValue.uint8(18)])
        assert encoded[4:] == b"\x00" * 31 + b"\x12"

    @pytest.mark.parametrize("flag,last_byte", [(True, b"\x01"), (False, b"\x00")])
    def test_bool(self, flag, last_byte):
        sig = _sig("setBurnEnabled", ParamType.BOOL)
        encoded = encode_call(sig, [TypedValue.boolean(flag)])
        assert encoded[:4] == keccak(b"setBurnEnabled(bool)")[:4]
        assert encoded[4:] == b"\x00" * 31 + last_byte


class TestDynamicEncoding:
    """Strings get a head offset plus a length-prefixed, padded tail."""

    def test_create_game_token_layout(self, split_words):
        amount = 10**21
        calldata = to_hex(
            encode_call(
                CREATE,
                [
                    TypedValue.uint256(amount),
                    TypedValue.string("Test Game"),
                    TypedValue.string("TEST"),
                    TypedValue.uint8(18),
                ],
            )
        )
        w = split_words(calldata)

        assert w[0] == "fd44d274"
        assert w[1] == amount.to_bytes(32, "big").hex()
        assert int(w[2], 16) == 0x80  # 4 head words
        assert int(w[3], 16) == 0xC0  # 0x80 + length word + one data word
        assert int(w[4], 16) == 18
        assert int(w[5], 16) == 9
        assert w[6] == "Test Game".encode().hex().ljust(64, "0")
        assert int(w[7], 16) == 4
        assert w[8] == b"TEST".hex().ljust(64, "0")
        assert len(w) == 9

    def test_empty_string_has_no_data_words(self):
        sig = _sig("f", ParamType.STRING)
        encoded = encode_call(sig, [TypedValue.string("")])
        assert encoded[4:] == (32).to_bytes(32, "big") + b"\x00" * 32

    def test_exact_word_string_not_padded_further(self):
        sig = _sig("f", ParamType.STRING)
        text = "x" * 32
        encoded = encode_call(sig, [TypedValue.string(text)])
        assert len(encoded) == 4 + 32 * 3
        assert encoded[-32:] == text.encode()

    def test_multibyte_utf8_length_in_bytes(self):
        sig = _sig("f", ParamType.STRING)
        encoded = encode_call(sig, [TypedValue.string("é")])
        assert int.from_bytes(encoded[36:68], "big") == 2
        assert encoded[68:70] == "é".encode("utf-8")

    def test_encode_arguments_excludes_selector(self):
        encoded = encode_arguments((ParamType.UINT256,), [TypedValue.uint256(1)])
        assert encoded == (1).to_bytes(32, "big")


class TestPreconditions:
    """Arity and tag mismatches are rejected before any bytes are produced."""

    def test_too_few_values(self):
        with pytest.raises(ArityMismatchError) as exc:
            encode_call(APPROVE, [TypedValue.address(b"\x00" * 20)])
        assert exc.value.expected == 2
        assert exc.value.actual == 1

    def test_too_many_values(self):
        with pytest.raises(ArityMismatchError):
            encode_call(
                APPROVE,
                [
                    TypedValue.address(b"\x00" * 20),
                    TypedValue.uint256(1),
                    TypedValue.uint256(2),
                ],
            )

    def test_string_where_uint256_expected(self):
        with pytest.raises(TypeMismatchError) as exc:
            encode_call(
                APPROVE, [TypedValue.address(b"\x00" * 20), TypedValue.string("1000")]
            )
        assert exc.value.position == 1
        assert exc.value.expected == "uint256"
        assert exc.value.actual == "string"

    def test_untagged_value_rejected(self):
        with pytest.raises(TypeMismatchError):
            encode_call(_sig("f", ParamType.UINT256), [1000])

    @pytest.mark.parametrize("value", [-1, 2**256, True, "1", 1.0])
    def test_bad_uint256_payloads(self, value):
        with pytest.raises(TypeMismatchError):
            encode_call(_sig("f", ParamType.UINT256), [TypedValue.uint256(value)])

    def test_uint8_out_of_range(self):
        with pytest.raises(TypeMismatchError):
            encode_call(_sig("f", ParamType.UINT8), [TypedValue.uint8(256)])

    def test_int_tagged_bool_rejected(self):
        with pytest.raises(TypeMismatchError):
            encode_call(_sig("f", ParamType.BOOL), [TypedValue.boolean(1)])

    def test_short_address_rejected(self):
        with pytest.raises(TypeMismatchError):
            encode_call(_sig("f", ParamType.ADDRESS), [TypedValue.address(b"\x01" * 19)])


class TestSignatureFromAbi:
    def test_builds_ordered_params(self):
        sig = FunctionSignature.from_abi(
            {
                "type": "function",
                "name": "burnGameToken",
                "inputs": [
                    {"name": "gameId", "type": "uint256"},
                    {"name": "burnAmount", "type": "uint256"},
                ],
            }
        )
        assert sig.canonical == "burnGameToken(uint256,uint256)"
        assert [p.name for p in sig.params] == ["gameId", "burnAmount"]

    def test_uint_alias(self):
        assert ParamType.from_abi_name("uint") is ParamType.UINT256

    def test_unsupported_type(self):
        with pytest.raises(EncodingError):
            ParamType.from_abi_name("bytes32")

    def test_non_function_entry(self):
        with pytest.raises(EncodingError):
            FunctionSignature.from_abi({"type": "event", "name": "Transfer", "inputs": []})


def test_encoding_is_deterministic():
    values = [
        TypedValue.uint256(7),
        TypedValue.string("Name"),
        TypedValue.string("SYM"),
        TypedValue.uint8(6),
    ]
    assert encode_call(CREATE, values) == encode_call(CREATE, list(values))


def test_to_hex_lowercase():
    assert to_hex(b"\xab\xcd") == "0xabcd"
