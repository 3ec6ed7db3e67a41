"""
Multi-step calldata flows.

Create flow (CREDA -> XP -> game token):
    1. CREDA approve(factory, amount)
    2. factory lockCreda(amount)
    3. estimate XP received (1:1 unless the caller passes a rate)
    4. XP approve(factory, xp_amount)
    5. factory createGameToken(xp_amount, name, symbol, decimals)

Burn flow (game token -> XP):
    1. game token approve(factory, amount)
    2. factory burnGameToken(game_id, amount)

Both flows are pure: nothing is submitted, so a failing step simply aborts the
flow and no partial result is returned.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from decimal import ROUND_DOWN, Decimal, localcontext
from typing import Any, Dict, List, Optional, Tuple, Union

from .calldata import CallDataGenerator
from .exceptions import InvalidNumberError
from .units import UINT256_MAX, Address

logger = logging.getLogger(__name__)

# Placeholder: the real rate lives on-chain (factory credaToXpRate()).
DEFAULT_EXCHANGE_RATE = Decimal(1)


def estimate_reward_amount(
    deposit_amount: int,
    exchange_rate: Union[Decimal, int, str] = DEFAULT_EXCHANGE_RATE,
) -> int:
    """
    Estimate XP base units minted for ``deposit_amount`` CREDA base units.

    Rounds down, since the contract never mints a fractional base unit.

    Raises:
        InvalidNumberError: If the rate is not a finite, non-negative number or
            the result overflows uint256
    """
    try:
        rate = Decimal(exchange_rate)
    except (ArithmeticError, ValueError, TypeError):
        raise InvalidNumberError(exchange_rate, reason="invalid exchange rate")
    if not rate.is_finite() or rate < 0:
        raise InvalidNumberError(exchange_rate, reason="invalid exchange rate")

    if rate == DEFAULT_EXCHANGE_RATE:
        return deposit_amount

    with localcontext() as ctx:
        ctx.prec = 200
        try:
            product = Decimal(deposit_amount) * rate
        except ArithmeticError:
            raise InvalidNumberError(exchange_rate, reason="reward amount exceeds uint256")
        # UINT256_MAX has 78 digits
        if product and product.adjusted() > 77:
            raise InvalidNumberError(exchange_rate, reason="reward amount exceeds uint256")
        reward = int(product.to_integral_value(rounding=ROUND_DOWN))

    if reward > UINT256_MAX:
        raise InvalidNumberError(str(reward), reason="reward amount exceeds uint256")
    return reward


@dataclass(frozen=True)
class CreateFlowCallData:
    """Calldata for every transaction in the game token creation flow."""

    deposit_approve: str
    lock_deposit: str
    reward_amount: int
    reward_approve: str
    create_token: str

    def steps(self) -> List[Tuple[str, str]]:
        return [
            ("deposit_approve", self.deposit_approve),
            ("lock_deposit", self.lock_deposit),
            ("reward_approve", self.reward_approve),
            ("create_token", self.create_token),
        ]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["reward_amount"] = str(self.reward_amount)
        return data


@dataclass(frozen=True)
class BurnFlowCallData:
    """Calldata for the game token burning flow."""

    issued_token_approve: str
    burn_issued_token: str

    def steps(self) -> List[Tuple[str, str]]:
        return [
            ("issued_token_approve", self.issued_token_approve),
            ("burn_issued_token", self.burn_issued_token),
        ]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class GameTokenFlow:
    """Sequence call builders into the create and burn flows."""

    def __init__(self, generator: Optional[CallDataGenerator] = None) -> None:
        self.generator = generator or CallDataGenerator()

    def create_flow(
        self,
        factory: Address,
        deposit_amount: int,
        name: str,
        symbol: str,
        decimals: int,
        exchange_rate: Union[Decimal, int, str] = DEFAULT_EXCHANGE_RATE,
    ) -> CreateFlowCallData:
        gen = self.generator

        deposit_approve = gen.deposit_approve(factory, deposit_amount)
        lock_deposit = gen.lock_deposit(deposit_amount)
        reward_amount = estimate_reward_amount(deposit_amount, exchange_rate)
        reward_approve = gen.reward_approve(factory, reward_amount)
        create_token = gen.create_issued_token(reward_amount, name, symbol, decimals)

        logger.info(
            "Built create flow for %s (%s)",
            name,
            symbol,
            extra={
                "event": "flow.create",
                "factory": factory.hex(),
                "reward_amount": str(reward_amount),
            },
        )
        return CreateFlowCallData(
            deposit_approve=deposit_approve,
            lock_deposit=lock_deposit,
            reward_amount=reward_amount,
            reward_approve=reward_approve,
            create_token=create_token,
        )

    def burn_flow(
        self,
        factory: Address,
        issued_token: Address,
        game_id: int,
        burn_amount: int,
    ) -> BurnFlowCallData:
        # issued_token is kept for interface compatibility; neither step needs it
        logger.debug(
            "Burn flow ignores issued token address %s",
            issued_token.hex(),
            extra={"event": "flow.burn.unused_token"},
        )
        gen = self.generator

        issued_token_approve = gen.issued_token_approve(factory, burn_amount)
        burn_issued_token = gen.burn_issued_token_via_factory(game_id, burn_amount)

        logger.info(
            "Built burn flow for game %d",
            game_id,
            extra={"event": "flow.burn", "factory": factory.hex()},
        )
        return BurnFlowCallData(
            issued_token_approve=issued_token_approve,
            burn_issued_token=burn_issued_token,
        )
