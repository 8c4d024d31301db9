"""Test helpers for building provisioning inputs."""

from .builders import (
    ENODE_A,
    ENODE_B,
    IBFT2_EXTRA_DATA,
    SIGNERS,
    VALIDATORS,
    make_clique_genesis,
    make_ethash_genesis,
    make_ibft2_genesis,
    make_node,
    private_network,
    public_network,
)

__all__ = [
    "ENODE_A",
    "ENODE_B",
    "IBFT2_EXTRA_DATA",
    "SIGNERS",
    "VALIDATORS",
    "make_clique_genesis",
    "make_ethash_genesis",
    "make_ibft2_genesis",
    "make_node",
    "private_network",
    "public_network",
]
