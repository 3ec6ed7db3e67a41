"""
Integration tests for the Flask calldata API.
"""

import logging

import pytest

from gametoken import __version__
from gametoken.api import create_app
from gametoken.core.catalog import ContractRole, build_default_registry
from gametoken.core.config import Settings
from gametoken.sdk import GameTokenSdk

pytestmark = pytest.mark.integration


@pytest.fixture
def app():
    app = create_app(settings=Settings())
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


class TestHealthAndCatalog:
    def test_health(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok", "version": __version__}

    def test_catalog(self, client):
        data = client.get("/api/v1/catalog").get_json()
        assert data["catalog"]["factory"]["createGameToken(uint256,string,string,uint8)"] == (
            "0xfd44d274"
        )

    def test_unknown_route(self, client):
        response = client.get("/api/v1/nothing")
        assert response.status_code == 404
        assert response.get_json()["error"]["code"] == "NOT_FOUND"

    def test_wrong_method(self, client):
        response = client.get("/api/v1/flow/create")
        assert response.status_code == 405
        assert response.get_json()["error"]["code"] == "METHOD_NOT_ALLOWED"


class TestFlows:
    def test_create_flow(self, client, factory_address):
        response = client.post(
            "/api/v1/flow/create",
            json={
                "factory_address": factory_address,
                "creda_amount": "1000000000000000000000",
                "game_name": "Test Game",
                "game_symbol": "TEST",
                "decimals": 18,
            },
        )
        assert response.status_code == 200
        data = response.get_json()
        assert data["creda_approve"].startswith("0x095ea7b3")
        assert data["lock_creda"].startswith("0xbec697db")
        assert data["xp_amount"] == "1000000000000000000000"
        assert data["xp_approve"].startswith("0x095ea7b3")
        assert data["create_token"].startswith("0xfd44d274")

    def test_burn_flow(self, client, factory_address, game_token_address):
        response = client.post(
            "/api/v1/flow/burn",
            json={
                "factory_address": factory_address,
                "game_token_address": game_token_address,
                "game_id": "1",
                "burn_amount": "500000000000000000000",
            },
        )
        assert response.status_code == 200
        data = response.get_json()
        assert data["game_token_approve"].startswith("0x095ea7b3")
        assert data["burn_game_token"].startswith("0x5ed6c1db")

    def test_invalid_address(self, client):
        response = client.post(
            "/api/v1/flow/create",
            json={
                "factory_address": "invalid",
                "creda_amount": "1000",
                "game_name": "Test",
                "game_symbol": "TEST",
                "decimals": 18,
            },
        )
        assert response.status_code == 400
        assert response.get_json() == {
            "error": {
                "code": "INVALID_ADDRESS",
                "message": "Invalid Ethereum address: invalid",
                "details": {"value": "invalid"},
            }
        }

    def test_invalid_amount(self, client, factory_address, game_token_address):
        response = client.post(
            "/api/v1/flow/burn",
            json={
                "factory_address": factory_address,
                "game_token_address": game_token_address,
                "game_id": "1",
                "burn_amount": "lots",
            },
        )
        assert response.status_code == 400
        assert response.get_json()["error"]["code"] == "INVALID_NUMBER"

    def test_internal_failure_is_500(self, factory_address):
        sdk = GameTokenSdk(build_default_registry({ContractRole.DEPOSIT_TOKEN: []}))
        client = create_app(sdk=sdk, settings=Settings()).test_client()
        response = client.post(
            "/api/v1/flow/create",
            json={
                "factory_address": factory_address,
                "creda_amount": "1000",
                "game_name": "Test",
                "game_symbol": "TEST",
                "decimals": 18,
            },
        )
        assert response.status_code == 500
        error = response.get_json()["error"]
        assert error["code"] == "CONTRACT_ERROR"
        assert error["message"].startswith("SDK error: ")
        assert "details" not in error


class TestSingleCalls:
    def test_creda_approve(self, client, factory_address):
        response = client.post(
            "/api/v1/calldata/creda-approve",
            json={"spender": factory_address, "amount": "1000"},
        )
        assert response.status_code == 200
        assert response.get_json()["calldata"].startswith("0x095ea7b3")

    def test_approve_xp(self, client, factory_address):
        response = client.post(
            "/api/v1/calldata/approve-xp",
            json={"spender": factory_address, "amount": "0x3e8"},
        )
        assert response.get_json()["calldata"].endswith((1000).to_bytes(32, "big").hex())

    def test_lock_creda(self, client):
        response = client.post("/api/v1/calldata/lock-creda", json={"amount": "1000"})
        assert response.get_json()["calldata"] == (
            "0xbec697db" + (1000).to_bytes(32, "big").hex()
        )

    def test_create_token(self, client):
        response = client.post(
            "/api/v1/calldata/create-token",
            json={"xp_amount": "1000", "name": "Test Game", "symbol": "TEST", "decimals": 18},
        )
        calldata = response.get_json()["calldata"]
        assert calldata.startswith("0xfd44d274")
        assert len(calldata) == 522

    def test_burn_token(self, client):
        response = client.post(
            "/api/v1/calldata/burn-token", json={"game_id": "1", "amount": "10"}
        )
        assert response.get_json()["calldata"].startswith("0x5ed6c1db")


class TestPayloadValidation:
    def test_missing_body(self, client):
        response = client.post("/api/v1/calldata/lock-creda")
        assert response.status_code == 400
        assert response.get_json()["error"]["code"] == "INVALID_PAYLOAD"

    def test_missing_field(self, client):
        response = client.post("/api/v1/calldata/lock-creda", json={})
        assert response.status_code == 400
        assert response.get_json()["error"]["details"] == {"field": "amount"}

    def test_numeric_amount_rejected(self, client):
        response = client.post("/api/v1/calldata/lock-creda", json={"amount": 1000})
        assert response.status_code == 400
        assert response.get_json()["error"]["code"] == "INVALID_PAYLOAD"

    @pytest.mark.parametrize("decimals", [256, -1, "18", True])
    def test_bad_decimals(self, client, decimals):
        response = client.post(
            "/api/v1/calldata/create-token",
            json={"xp_amount": "1", "name": "A", "symbol": "B", "decimals": decimals},
        )
        assert response.status_code == 400
        assert response.get_json()["error"]["details"] == {"field": "decimals"}


def test_cors_header(client):
    response = client.get("/", headers={"Origin": "https://game.example"})
    assert response.headers.get("Access-Control-Allow-Origin") in ("*", "https://game.example")


class TestErrorLogging:
    def test_input_error_logged_as_warning(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="gametoken"):
            client.post("/api/v1/calldata/lock-creda", json={"amount": "lots"})
        records = [r for r in caplog.records if getattr(r, "event", None) == "api.sdk_error"]
        assert [r.levelno for r in records] == [logging.WARNING]

    def test_internal_error_logged_as_error(self, caplog):
        sdk = GameTokenSdk(build_default_registry({ContractRole.FACTORY: []}))
        client = create_app(sdk=sdk, settings=Settings()).test_client()
        with caplog.at_level(logging.INFO, logger="gametoken"):
            response = client.post("/api/v1/calldata/lock-creda", json={"amount": "1"})
        assert response.status_code == 500
        records = [r for r in caplog.records if getattr(r, "event", None) == "api.sdk_error"]
        assert [r.levelno for r in records] == [logging.ERROR]
