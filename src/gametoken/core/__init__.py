"""
Encoding core: address/amount parsing, ABI encoding, function catalogs,
call builders and flows. Synchronous and side-effect free.
"""

from gametoken.core.abi import FunctionSignature, ParamType, TypedValue, encode_call, to_hex
from gametoken.core.calldata import CallDataGenerator
from gametoken.core.catalog import CatalogRegistry, ContractRole, default_registry
from gametoken.core.flows import GameTokenFlow
from gametoken.core.units import Address, format_units, parse_address, parse_uint256

__all__ = [
    "Address",
    "CallDataGenerator",
    "CatalogRegistry",
    "ContractRole",
    "FunctionSignature",
    "GameTokenFlow",
    "ParamType",
    "TypedValue",
    "default_registry",
    "encode_call",
    "format_units",
    "parse_address",
    "parse_uint256",
    "to_hex",
]
