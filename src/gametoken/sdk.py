"""
Game Token SDK facade.

String-in / string-out entry point used by the HTTP API, the CLI and library
callers. Raw strings are parsed here; everything below works on typed values.

Example:
    >>> from gametoken import GameTokenSdk
    >>> sdk = GameTokenSdk()
    >>> sdk.encode_lock("1000")[:10]
    '0xbec697db'
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Optional, TypeVar, Union

from gametoken.core.calldata import CallDataGenerator
from gametoken.core.catalog import CatalogRegistry, ContractRole, default_registry
from gametoken.core.exceptions import (
    ContractError,
    EncodingError,
    InputError,
    InvalidNumberError,
    SdkError,
    get_error_context,
)
from gametoken.core.flows import (
    DEFAULT_EXCHANGE_RATE,
    BurnFlowCallData,
    CreateFlowCallData,
    GameTokenFlow,
)
from gametoken.core.units import (
    UINT8_MAX,
    format_units,
    parse_address,
    parse_uint256,
    to_base_units,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _parse_decimals(decimals: Union[int, str]) -> int:
    """Token decimals must fit a uint8."""
    if isinstance(decimals, bool):
        raise InvalidNumberError(decimals, reason="decimals must be an integer")
    if isinstance(decimals, str):
        value = parse_uint256(decimals)
    elif isinstance(decimals, int):
        value = decimals
    else:
        raise InvalidNumberError(decimals, reason="decimals must be an integer")
    if value < 0 or value > UINT8_MAX:
        raise InvalidNumberError(decimals, reason="decimals must fit in uint8")
    return value


def _parse_bool(enabled: Union[bool, str]) -> bool:
    if isinstance(enabled, bool):
        return enabled
    lowered = str(enabled).strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise InvalidNumberError(enabled, reason="expected a boolean")


class GameTokenSdk:
    """
    Generate raw calldata for the game ecosystem contracts.

    Flow: CREDA -> lock in factory -> XP -> create GameToken -> burn -> XP.

    Errors:
        InvalidAddressError / InvalidNumberError: a raw input failed to parse
        EncodingError: a single-call encoding failed (internal defect)
        ContractError: a flow step failed (internal defect)
    """

    def __init__(self, registry: Optional[CatalogRegistry] = None) -> None:
        self.registry = registry or default_registry()
        self.generator = CallDataGenerator(self.registry)
        self.flow = GameTokenFlow(self.generator)

    # ==================== Error Mapping ====================

    def _run(self, operation: str, func: Callable[[], T], wrap: type) -> T:
        try:
            return func()
        except InputError:
            raise
        except SdkError as exc:
            logger.error(
                "%s failed: %s",
                operation,
                exc,
                extra={"event": "sdk.failure", **get_error_context(exc)},
            )
            raise wrap(f"{operation} failed: {exc}", details=exc.details) from exc

    # ==================== Flows ====================

    def create_flow(
        self,
        factory_address: str,
        lock_amount: str,
        name: str,
        symbol: str,
        decimals: Union[int, str],
        exchange_rate: Optional[Union[Decimal, int, str]] = None,
    ) -> CreateFlowCallData:
        """
        Calldata for the complete game token creation flow.

        Args:
            factory_address: GameTokenFactory address
            lock_amount: CREDA base units to lock (decimal or 0x hex)
            name: Game token name
            symbol: Game token symbol
            decimals: Game token decimals (uint8; the factory caps this at 18)
            exchange_rate: XP per CREDA; defaults to the 1:1 placeholder
        """
        factory = parse_address(factory_address)
        amount = parse_uint256(lock_amount)
        token_decimals = _parse_decimals(decimals)
        rate = DEFAULT_EXCHANGE_RATE if exchange_rate is None else exchange_rate

        return self._run(
            "create_flow",
            lambda: self.flow.create_flow(
                factory, amount, name, symbol, token_decimals, exchange_rate=rate
            ),
            ContractError,
        )

    def burn_flow(
        self,
        factory_address: str,
        issued_token_address: str,
        game_id: str,
        burn_amount: str,
    ) -> BurnFlowCallData:
        """
        Calldata for burning game tokens back into XP.

        ``issued_token_address`` is validated but not used by either step.
        """
        factory = parse_address(factory_address)
        issued_token = parse_address(issued_token_address)
        gid = parse_uint256(game_id)
        amount = parse_uint256(burn_amount)

        return self._run(
            "burn_flow",
            lambda: self.flow.burn_flow(factory, issued_token, gid, amount),
            ContractError,
        )

    # ==================== Single Calls ====================

    def encode_approve(
        self,
        role: Union[ContractRole, str],
        spender: str,
        amount: str,
    ) -> str:
        """``approve(spender, amount)`` on the deposit, reward or issued token."""
        contract_role = ContractRole.parse(role)
        # Factory has no approve; report the bad role rather than an encoding failure
        self.registry.lookup(contract_role, "approve")
        spender_addr = parse_address(spender)
        value = parse_uint256(amount)
        return self._run(
            "encode_approve",
            lambda: self.generator.approve(contract_role, spender_addr, value),
            EncodingError,
        )

    def approve_deposit(self, spender: str, amount: str) -> str:
        return self.encode_approve(ContractRole.DEPOSIT_TOKEN, spender, amount)

    def approve_reward(self, spender: str, amount: str) -> str:
        return self.encode_approve(ContractRole.REWARD_TOKEN, spender, amount)

    def encode_lock(self, amount: str) -> str:
        """Factory ``lockCreda(amount)``."""
        value = parse_uint256(amount)
        return self._run(
            "encode_lock", lambda: self.generator.lock_deposit(value), EncodingError
        )

    def encode_create_token(
        self,
        amount: str,
        name: str,
        symbol: str,
        decimals: Union[int, str],
    ) -> str:
        """Factory ``createGameToken(xpAmount, name, symbol, decimals)``."""
        value = parse_uint256(amount)
        token_decimals = _parse_decimals(decimals)
        return self._run(
            "encode_create_token",
            lambda: self.generator.create_issued_token(value, name, symbol, token_decimals),
            EncodingError,
        )

    def encode_burn_token(self, game_id: str, amount: str) -> str:
        """Factory ``burnGameToken(gameId, burnAmount)``."""
        gid = parse_uint256(game_id)
        value = parse_uint256(amount)
        return self._run(
            "encode_burn_token",
            lambda: self.generator.burn_issued_token_via_factory(gid, value),
            EncodingError,
        )

    def encode_issued_burn(self, amount: str) -> str:
        """Game token ``burn(amount)`` called directly by the holder."""
        value = parse_uint256(amount)
        return self._run(
            "encode_issued_burn",
            lambda: self.generator.issued_token_burn(value),
            EncodingError,
        )

    def encode_burn_from(self, holder: str, amount: str) -> str:
        holder_addr = parse_address(holder)
        value = parse_uint256(amount)
        return self._run(
            "encode_burn_from",
            lambda: self.generator.issued_token_burn_from(holder_addr, value),
            EncodingError,
        )

    def encode_set_burn_enabled(self, enabled: Union[bool, str]) -> str:
        flag = _parse_bool(enabled)
        return self._run(
            "encode_set_burn_enabled",
            lambda: self.generator.issued_token_set_burn_enabled(flag),
            EncodingError,
        )

    # ==================== Units ====================

    @staticmethod
    def format_units(value: str, decimals: Union[int, str]) -> str:
        """Render raw base units (decimal or 0x hex string) for display."""
        return format_units(parse_uint256(value), _parse_decimals(decimals))

    @staticmethod
    def to_base_units(amount: Union[str, Decimal], decimals: Union[int, str]) -> int:
        """Scale a human amount (e.g. ``"1.5"``) into raw base units."""
        return to_base_units(amount, _parse_decimals(decimals))
