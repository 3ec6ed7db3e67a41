"""
Game Token SDK - calldata for the CREDA / XP / GameToken contracts

Generates raw Ethereum calldata (selector + ABI-encoded arguments) for the
game ecosystem contracts without touching a network:

- Deposit token (CREDA): approve
- Reward token (XP): approve
- GameTokenFactory: lockCreda, createGameToken, burnGameToken
- GameToken: approve, burn, burnFrom, setBurnEnabled

Example:
    >>> from gametoken import GameTokenSdk
    >>> flow = GameTokenSdk().create_flow(
    ...     "0x1234567890123456789012345678901234567890",
    ...     "1000000000000000000000", "Test Game", "TEST", 18)
    >>> flow.lock_deposit[:10]
    '0xbec697db'
"""

__version__ = "0.1.0"
__author__ = "Game Token SDK Team"

from gametoken.core.catalog import ContractRole
from gametoken.core.exceptions import (
    ContractError,
    EncodingError,
    FunctionNotFoundError,
    InvalidAddressError,
    InvalidNumberError,
    SdkError,
)
from gametoken.core.flows import BurnFlowCallData, CreateFlowCallData
from gametoken.sdk import GameTokenSdk

__all__ = [
    "GameTokenSdk",
    "ContractRole",
    "CreateFlowCallData",
    "BurnFlowCallData",
    "SdkError",
    "InvalidAddressError",
    "InvalidNumberError",
    "FunctionNotFoundError",
    "EncodingError",
    "ContractError",
]
