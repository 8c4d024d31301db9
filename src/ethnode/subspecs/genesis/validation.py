"""
Genesis validation.

Checks a private network's genesis before any client artifact is generated.
Problems are collected rather than raised, so a caller can surface every one
of them on the resource status at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from ethnode.types import hex_to_int

from .accounts import RESERVED_ACCOUNTS
from .spec import ConsensusAlgorithm, GenesisSpec

if TYPE_CHECKING:
    from ethnode.subspecs.node import NetworkConfig

CHAIN_BY_ID: Final = {
    1: "mainnet",
    3: "ropsten",
    4: "rinkeby",
    5: "goerli",
    6: "kotti",
    61: "classic",
    63: "mordor",
    2018: "dev",
    11155111: "sepolia",
}
"""Public chains whose IDs a private network must not reuse (tx replay)."""


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single invalid field."""

    path: str
    """Dotted path of the field, e.g. `genesis.forks.london`."""
    value: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: Invalid value: {self.value!r}: {self.message}"


def validate_genesis(
    genesis: GenesisSpec, consensus: ConsensusAlgorithm | None = None
) -> list[ValidationIssue]:
    """
    Validate a genesis specification.

    Args:
        genesis: The genesis block to check.
        consensus: The network's declared algorithm, checked against the
            populated engine section when given.

    Returns:
        Every problem found, empty when the genesis is valid.
    """
    issues: list[ValidationIssue] = []

    # Reserved addresses host the precompiles and carry a fixed allocation.
    for account in genesis.accounts:
        if hex_to_int(account.address) < RESERVED_ACCOUNTS:
            issues.append(
                ValidationIssue("genesis.accounts", account.address, "reserved account is used")
            )

    if consensus is not None and consensus.engine != genesis.engine:
        issues.append(
            ValidationIssue(
                "genesis",
                genesis.engine,
                f"{consensus.value} consensus requires {consensus.engine} configuration",
            )
        )

    if (chain := CHAIN_BY_ID.get(genesis.chain_id)) is not None:
        issues.append(
            ValidationIssue(
                "genesis.chainId",
                str(genesis.chain_id),
                f"can't use chain id of {chain} network to avoid tx replay",
            )
        )

    for violation in genesis.forks.order_violations():
        issues.append(
            ValidationIssue(f"genesis.forks.{violation.fork}", str(violation.block), str(violation))
        )

    return issues


def validate_network(network: NetworkConfig) -> list[ValidationIssue]:
    """Validate the genesis of a private network; public networks have none."""
    if network.genesis is None:
        return []
    return validate_genesis(network.genesis, network.consensus)
