"""
Node validation.

Rejects node settings that a client binary would refuse at start-up, or that
would leave an imported account exposed. The adapters render whatever they
are given, so these checks run before any argument is generated.
"""

from __future__ import annotations

from typing import Final

from ethnode.subspecs.genesis import ConsensusAlgorithm, ValidationIssue

from .spec import ClientKind, NetworkConfig, NodeSpec, SyncMode, VerbosityLevel

UNSUPPORTED_LOGGING: Final = {
    ClientKind.GETH: frozenset({VerbosityLevel.FATAL, VerbosityLevel.TRACE}),
    ClientKind.PARITY: frozenset({VerbosityLevel.OFF, VerbosityLevel.FATAL, VerbosityLevel.ALL}),
}
"""Verbosity levels each client has no equivalent for."""

ACCOUNT_EXPOSING_APIS: Final = ("rpc", "ws", "graphql")
"""Servers that must stay closed while an account is unlocked."""


def consensus_of(network: NetworkConfig) -> ConsensusAlgorithm | None:
    """The declared algorithm, or the one implied by a private genesis."""
    if network.consensus is not None:
        return network.consensus
    if network.genesis is None:
        return None
    return {algorithm.engine: algorithm for algorithm in ConsensusAlgorithm}[
        network.genesis.engine
    ]


def validate_node(node: NodeSpec, network: NetworkConfig) -> list[ValidationIssue]:
    """
    Validate a node against the client it runs and the network it joins.

    Args:
        node: The node to check.
        network: The network the node joins.

    Returns:
        Every problem found, empty when the node is valid.
    """
    issues: list[ValidationIssue] = []
    client = node.client
    besu = client is ClientKind.BESU
    consensus = consensus_of(network)

    if node.logging in UNSUPPORTED_LOGGING.get(client, ()):
        issues.append(
            ValidationIssue(
                "node.logging", node.logging.value, f"not supported by client {client.value}"
            )
        )

    if node.miner and node.coinbase is None:
        issues.append(
            ValidationIssue("node.coinbase", "", "must provide coinbase if miner is true")
        )

    if node.coinbase is not None and not node.miner:
        issues.append(
            ValidationIssue("node.miner", "false", "must set miner to true if coinbase is provided")
        )

    if besu and node.import_account is not None:
        issues.append(
            ValidationIssue(
                "node.client", client.value, "must be geth or parity if import is provided"
            )
        )

    if client is ClientKind.GETH and node.graphql and not node.rpc:
        issues.append(
            ValidationIssue(
                "node.rpc", "false", "must enable rpc if client is geth and graphql is enabled"
            )
        )

    if client is ClientKind.PARITY and node.graphql:
        issues.append(
            ValidationIssue("node.client", client.value, "client doesn't support graphQL")
        )

    if client is not ClientKind.GETH and node.sync_mode is SyncMode.LIGHT:
        issues.append(
            ValidationIssue("node.client", client.value, "must be geth if syncMode is light")
        )

    if network.is_private and consensus is ConsensusAlgorithm.ISTANBUL_BFT and not besu:
        issues.append(
            ValidationIssue(
                "node.client", client.value, f"client doesn't support {consensus.value} consensus"
            )
        )

    genesis = network.genesis
    if (
        genesis is not None
        and genesis.ethash is not None
        and genesis.ethash.fixed_difficulty is not None
        and not besu
    ):
        issues.append(
            ValidationIssue(
                "node.client",
                client.value,
                "client doesn't support fixed difficulty pow networks",
            )
        )

    if not besu and node.coinbase is not None and node.import_account is None:
        issues.append(ValidationIssue("node.importAccount", "", "must import coinbase account"))

    if client is ClientKind.PARITY and consensus is ConsensusAlgorithm.PROOF_OF_WORK and node.miner:
        issues.append(ValidationIssue("node.client", client.value, "client doesn't support mining"))

    if not besu and node.import_account is not None:
        for server in ACCOUNT_EXPOSING_APIS:
            if getattr(node, server):
                issues.append(
                    ValidationIssue(f"node.{server}", "true", "must be false if import is provided")
                )

    return issues
