"""
Function catalogs for the game token contracts.

One catalog per contract role, each an immutable name -> signature mapping
built from JSON ABI fragments. The registry is constructed once and only read
afterwards, so it is safe to share between threads.

Roles:
- deposit-token: CREDA, the token users lock in the factory
- reward-token:  XP, minted by the factory in exchange for locked CREDA
- factory:       GameTokenFactory (lockCreda / createGameToken / burnGameToken)
- issued-token:  a GameToken created by the factory
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from .abi import FunctionSignature
from .exceptions import FunctionNotFoundError


class ContractRole(str, Enum):
    """Logical contract a function signature belongs to."""

    DEPOSIT_TOKEN = "deposit-token"
    REWARD_TOKEN = "reward-token"
    FACTORY = "factory"
    ISSUED_TOKEN = "issued-token"

    @classmethod
    def parse(cls, role: Union["ContractRole", str]) -> "ContractRole":
        if isinstance(role, cls):
            return role
        try:
            return cls(str(role).strip().lower())
        except ValueError:
            raise FunctionNotFoundError("*", role=str(role))


def _fn(name: str, *inputs: tuple[str, str]) -> Dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": arg, "type": abi_type} for abi_type, arg in inputs],
    }


_APPROVE = _fn("approve", ("address", "spender"), ("uint256", "amount"))

CATALOG_ABIS: Dict[ContractRole, List[Dict[str, Any]]] = {
    ContractRole.DEPOSIT_TOKEN: [
        _APPROVE,
    ],
    ContractRole.REWARD_TOKEN: [
        _APPROVE,
    ],
    ContractRole.FACTORY: [
        _fn("lockCreda", ("uint256", "amountCreda")),
        _fn(
            "createGameToken",
            ("uint256", "xpAmount"),
            ("string", "name"),
            ("string", "symbol"),
            ("uint8", "decimals"),
        ),
        _fn("burnGameToken", ("uint256", "gameId"), ("uint256", "burnAmount")),
    ],
    ContractRole.ISSUED_TOKEN: [
        _fn("burn", ("uint256", "amount")),
        _APPROVE,
        _fn("burnFrom", ("address", "from"), ("uint256", "amount")),
        _fn("setBurnEnabled", ("bool", "enabled")),
    ],
}


class FunctionCatalog(Mapping[str, FunctionSignature]):
    """Read-only function registry for a single contract role."""

    def __init__(self, role: ContractRole, signatures: Mapping[str, FunctionSignature]) -> None:
        self.role = role
        self._signatures = MappingProxyType(dict(signatures))

    @classmethod
    def from_abi(cls, role: ContractRole, abi: List[Dict[str, Any]]) -> "FunctionCatalog":
        signatures: Dict[str, FunctionSignature] = {}
        for entry in abi:
            if entry.get("type", "function") != "function":
                continue
            sig = FunctionSignature.from_abi(entry)
            # Overloads are not used by these contracts; first declaration wins
            signatures.setdefault(sig.name, sig)
        return cls(role, signatures)

    def lookup(self, name: str) -> FunctionSignature:
        try:
            return self._signatures[name]
        except KeyError:
            raise FunctionNotFoundError(name, role=self.role.value)

    def __getitem__(self, name: str) -> FunctionSignature:
        return self._signatures[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._signatures)

    def __len__(self) -> int:
        return len(self._signatures)

    def __repr__(self) -> str:
        return f"FunctionCatalog({self.role.value}, {sorted(self._signatures)})"


class CatalogRegistry:
    """Immutable role -> catalog mapping shared by all call builders."""

    def __init__(self, catalogs: Mapping[ContractRole, FunctionCatalog]) -> None:
        self._catalogs = MappingProxyType(dict(catalogs))

    def catalog(self, role: Union[ContractRole, str]) -> FunctionCatalog:
        role = ContractRole.parse(role)
        try:
            return self._catalogs[role]
        except KeyError:
            raise FunctionNotFoundError("*", role=role.value)

    def lookup(self, role: Union[ContractRole, str], name: str) -> FunctionSignature:
        return self.catalog(role).lookup(name)

    @property
    def roles(self) -> tuple[ContractRole, ...]:
        return tuple(self._catalogs)

    def describe(self) -> Dict[str, Dict[str, str]]:
        """Role -> {canonical signature: 0x selector}, for listings and docs."""
        return {
            role.value: {
                sig.canonical: "0x" + sig.selector.hex() for sig in catalog.values()
            }
            for role, catalog in self._catalogs.items()
        }


def build_default_registry(
    abis: Optional[Mapping[ContractRole, List[Dict[str, Any]]]] = None,
) -> CatalogRegistry:
    """Build a registry from JSON ABI fragments (defaults to the game contracts)."""
    abis = CATALOG_ABIS if abis is None else abis
    return CatalogRegistry(
        {role: FunctionCatalog.from_abi(role, abi) for role, abi in abis.items()}
    )


@lru_cache(maxsize=1)
def default_registry() -> CatalogRegistry:
    """Process-wide registry, built on first use and never mutated."""
    return build_default_registry()
