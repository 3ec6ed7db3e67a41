"""
Calldata generation for every catalog entry.

Inputs are already parsed (Address, int, str, bool); string parsing happens in
:mod:`gametoken.sdk`. Each method looks up its fixed signature, assembles the
typed values in declared order and returns the ``0x`` hex calldata.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .abi import TypedValue, encode_call_hex
from .catalog import CatalogRegistry, ContractRole, default_registry
from .units import Address

logger = logging.getLogger(__name__)


class CallDataGenerator:
    """Build calldata for the deposit, reward, factory and issued-token contracts.

    No range or business checks are applied here (e.g. ``decimals <= 18`` is
    documented by the factory but not enforced).
    """

    def __init__(self, registry: Optional[CatalogRegistry] = None) -> None:
        self.registry = registry or default_registry()

    def _encode(self, role: ContractRole, name: str, values: List[TypedValue]) -> str:
        signature = self.registry.lookup(role, name)
        calldata = encode_call_hex(signature, values)
        logger.debug(
            "Encoded %s.%s",
            role.value,
            signature.canonical,
            extra={"event": "calldata.encoded", "bytes": (len(calldata) - 2) // 2},
        )
        return calldata

    # ==================== ERC20 approvals ====================

    def deposit_approve(self, spender: Address, amount: int) -> str:
        """CREDA ``approve(spender, amount)``, normally spender = factory."""
        return self._encode(
            ContractRole.DEPOSIT_TOKEN,
            "approve",
            [TypedValue.address(spender), TypedValue.uint256(amount)],
        )

    def reward_approve(self, spender: Address, amount: int) -> str:
        """XP ``approve(spender, amount)``."""
        return self._encode(
            ContractRole.REWARD_TOKEN,
            "approve",
            [TypedValue.address(spender), TypedValue.uint256(amount)],
        )

    def issued_token_approve(self, spender: Address, amount: int) -> str:
        """Game token ``approve(spender, amount)``, required before a factory burn."""
        return self._encode(
            ContractRole.ISSUED_TOKEN,
            "approve",
            [TypedValue.address(spender), TypedValue.uint256(amount)],
        )

    def approve(self, role: ContractRole, spender: Address, amount: int) -> str:
        """``approve`` on whichever token contract ``role`` names."""
        return self._encode(
            ContractRole.parse(role),
            "approve",
            [TypedValue.address(spender), TypedValue.uint256(amount)],
        )

    # ==================== Factory ====================

    def lock_deposit(self, amount: int) -> str:
        """Factory ``lockCreda(amountCreda)``: lock CREDA, receive XP."""
        return self._encode(
            ContractRole.FACTORY, "lockCreda", [TypedValue.uint256(amount)]
        )

    def create_issued_token(
        self,
        xp_amount: int,
        name: str,
        symbol: str,
        decimals: int,
    ) -> str:
        """Factory ``createGameToken(xpAmount, name, symbol, decimals)``."""
        return self._encode(
            ContractRole.FACTORY,
            "createGameToken",
            [
                TypedValue.uint256(xp_amount),
                TypedValue.string(name),
                TypedValue.string(symbol),
                TypedValue.uint8(decimals),
            ],
        )

    def burn_issued_token_via_factory(self, game_id: int, burn_amount: int) -> str:
        """Factory ``burnGameToken(gameId, burnAmount)``: burn game tokens, get XP back."""
        return self._encode(
            ContractRole.FACTORY,
            "burnGameToken",
            [TypedValue.uint256(game_id), TypedValue.uint256(burn_amount)],
        )

    # ==================== Issued (game) token ====================

    def issued_token_burn(self, amount: int) -> str:
        return self._encode(
            ContractRole.ISSUED_TOKEN, "burn", [TypedValue.uint256(amount)]
        )

    def issued_token_burn_from(self, holder: Address, amount: int) -> str:
        return self._encode(
            ContractRole.ISSUED_TOKEN,
            "burnFrom",
            [TypedValue.address(holder), TypedValue.uint256(amount)],
        )

    def issued_token_set_burn_enabled(self, enabled: bool) -> str:
        return self._encode(
            ContractRole.ISSUED_TOKEN, "setBurnEnabled", [TypedValue.boolean(enabled)]
        )
