"""
Unit tests for mapping SDK exceptions onto API error bodies.
"""

import pytest

from gametoken.api.error_response import (
    ERROR_STATUS_MAP,
    APIError,
    ErrorCode,
    error_code_for,
    error_response,
    invalid_payload,
    sdk_error_response,
)
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


@pytest.mark.parametrize(
    "exc,code",
    [
        (InvalidAddressError("x"), ErrorCode.INVALID_ADDRESS),
        (InvalidNumberError("x"), ErrorCode.INVALID_NUMBER),
        (FunctionNotFoundError("approve", role="factory"), ErrorCode.FUNCTION_NOT_FOUND),
        (ArityMismatchError("f()", 0, 1), ErrorCode.ENCODING_ERROR),
        (TypeMismatchError(0, "uint256", "string"), ErrorCode.ENCODING_ERROR),
        (EncodingError("x"), ErrorCode.ENCODING_ERROR),
        (ContractError("x"), ErrorCode.CONTRACT_ERROR),
        (SdkError("x"), ErrorCode.SDK_ERROR),
        (ValueError("x"), ErrorCode.INTERNAL_ERROR),
    ],
)
def test_error_code_for(exc, code):
    assert error_code_for(exc) is code


def test_every_code_has_status():
    assert set(ERROR_STATUS_MAP) == set(ErrorCode)


class TestSdkErrorResponse:
    def test_invalid_address(self):
        body, status = sdk_error_response(InvalidAddressError("invalid"))
        assert status == 400
        assert body == {
            "error": {
                "code": "INVALID_ADDRESS",
                "message": "Invalid Ethereum address: invalid",
                "details": {"value": "invalid"},
            }
        }

    def test_invalid_number(self):
        body, status = sdk_error_response(InvalidNumberError("abc", reason="invalid decimal digits"))
        assert status == 400
        assert body["error"]["code"] == "INVALID_NUMBER"
        assert body["error"]["message"] == "Invalid number format: abc"

    def test_internal_error_hides_details(self):
        exc = ContractError("create_flow failed: boom", details={"function": "approve"})
        body, status = sdk_error_response(exc)
        assert status == 500
        assert body == {
            "error": {
                "code": "CONTRACT_ERROR",
                "message": "SDK error: create_flow failed: boom",
            }
        }


class TestHelpers:
    def test_error_response_status_override(self):
        body, status = error_response(ErrorCode.INTERNAL_ERROR, "teapot", status=418)
        assert status == 418
        assert body["error"]["message"] == "teapot"

    def test_string_code_defaults_to_500(self):
        assert APIError(code="CUSTOM", message="m").to_response() == (
            {"error": {"code": "CUSTOM", "message": "m"}},
            500,
        )

    def test_invalid_payload(self):
        body, status = invalid_payload("Missing field: amount", "amount")
        assert status == 400
        assert body["error"]["code"] == "INVALID_PAYLOAD"
        assert body["error"]["details"] == {"field": "amount"}
