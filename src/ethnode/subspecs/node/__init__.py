"""Node and network inputs consumed by the client adapters."""

from .spec import (
    DEFAULT_APIS,
    MAIN_NETWORK,
    Api,
    ClientKind,
    ImportedAccount,
    NetworkConfig,
    NodeSpec,
    SyncMode,
    VerbosityLevel,
)
from .validation import consensus_of, validate_node

__all__ = [
    "Api",
    "ClientKind",
    "DEFAULT_APIS",
    "ImportedAccount",
    "MAIN_NETWORK",
    "NetworkConfig",
    "NodeSpec",
    "SyncMode",
    "VerbosityLevel",
    "consensus_of",
    "validate_node",
]
