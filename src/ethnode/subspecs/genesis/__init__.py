"""Genesis block specification, encoders and per-dialect builders."""

from .accounts import genesis_accounts
from .builders import (
    BESU,
    GETH,
    ChainspecGenesisBuilder,
    GenesisDialect,
    GenesisDocument,
    GethStyleGenesisBuilder,
    normalize_nonce,
    render_document,
)
from .extradata import decode_clique, decode_ibft2, encode_clique, encode_ibft2
from .forks import FORK_ORDER, ForkOrderViolation, ForkSchedule
from .precompiles import precompiles
from .spec import (
    Account,
    CliqueConfig,
    ConsensusAlgorithm,
    EthashConfig,
    GenesisSpec,
    IBFT2Config,
)
from .validation import CHAIN_BY_ID, ValidationIssue, validate_genesis, validate_network

__all__ = [
    # Specification
    "Account",
    "CliqueConfig",
    "ConsensusAlgorithm",
    "EthashConfig",
    "FORK_ORDER",
    "ForkOrderViolation",
    "ForkSchedule",
    "GenesisSpec",
    "IBFT2Config",
    # Encoders
    "decode_clique",
    "decode_ibft2",
    "encode_clique",
    "encode_ibft2",
    "genesis_accounts",
    "precompiles",
    # Builders
    "BESU",
    "GETH",
    "ChainspecGenesisBuilder",
    "GenesisDialect",
    "GenesisDocument",
    "GethStyleGenesisBuilder",
    "normalize_nonce",
    "render_document",
    # Validation
    "CHAIN_BY_ID",
    "ValidationIssue",
    "validate_genesis",
    "validate_network",
]
