"""
Genesis block specification.

The client-agnostic description of a private network's first block. Each
client adapter renders it into its own genesis dialect; all of them must agree
on every value here or the nodes disagree on the genesis hash.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from pydantic import Field, NonNegativeInt, PositiveInt, model_validator

from ethnode.types import ZERO_ADDRESS, ZERO_HASH, Address, Hash, HexString, StrictBaseModel

from .forks import ForkSchedule

DEFAULT_DIFFICULTY: Final = "0x1"
DEFAULT_GAS_LIMIT: Final = "0x47b760"
DEFAULT_NONCE: Final = "0x0"
DEFAULT_TIMESTAMP: Final = "0x0"


class ConsensusAlgorithm(Enum):
    """Algorithm the network's nodes use to agree on the chain."""

    PROOF_OF_AUTHORITY = "poa"
    PROOF_OF_WORK = "pow"
    ISTANBUL_BFT = "ibft2"

    @property
    def engine(self) -> str:
        """Name of the genesis engine section implementing this algorithm."""
        return {
            ConsensusAlgorithm.PROOF_OF_AUTHORITY: "clique",
            ConsensusAlgorithm.PROOF_OF_WORK: "ethash",
            ConsensusAlgorithm.ISTANBUL_BFT: "ibft2",
        }[self]


class Account(StrictBaseModel):
    """Pre-funded account, optionally holding contract code and storage."""

    address: Address
    balance: HexString = "0x0"
    """Balance in wei."""
    code: HexString | None = None
    """Deployed contract bytecode."""
    storage: dict[HexString, HexString] | None = None
    """Contract storage slots."""

    def to_alloc(self) -> dict[str, object]:
        """Render the account as a genesis allocation entry."""
        entry: dict[str, object] = {"balance": self.balance}
        if self.code:
            entry["code"] = self.code
        if self.storage is not None:
            entry["storage"] = dict(self.storage)
        return entry


class EthashConfig(StrictBaseModel):
    """Ethash proof-of-work engine settings."""

    fixed_difficulty: PositiveInt | None = None
    """Constant block difficulty for private networks (Besu only)."""


class CliqueConfig(StrictBaseModel):
    """Clique proof-of-authority engine settings."""

    block_period: PositiveInt = 15
    """Target seconds between blocks."""
    epoch_length: PositiveInt = 3000
    """Blocks after which pending votes are reset."""
    signers: list[Address] = Field(min_length=1)
    """Initial signers. Order is part of the genesis extraData."""


class IBFT2Config(StrictBaseModel):
    """IBFT 2.0 Byzantine-fault-tolerant engine settings."""

    block_period: PositiveInt = 15
    epoch_length: PositiveInt = 3000
    request_timeout: PositiveInt = 10
    """Seconds before a consensus round times out."""
    message_queue_limit: PositiveInt = 1000
    duplicate_message_limit: PositiveInt = 100
    future_messages_limit: PositiveInt = 1000
    future_messages_max_distance: PositiveInt = 10
    """Max height above the chain head for buffering future messages."""
    validators: list[Address] = Field(min_length=1)
    """Initial validators. Order is part of the genesis extraData."""


class GenesisSpec(StrictBaseModel):
    """Client-agnostic genesis block of a private network."""

    accounts: list[Account] = Field(default_factory=list)
    network_id: NonNegativeInt
    chain_id: NonNegativeInt
    """EIP-155 chain ID used in transaction signatures."""
    coinbase: Address = ZERO_ADDRESS
    difficulty: HexString = DEFAULT_DIFFICULTY
    mix_hash: Hash = ZERO_HASH
    nonce: HexString = DEFAULT_NONCE
    timestamp: HexString = DEFAULT_TIMESTAMP
    gas_limit: HexString = DEFAULT_GAS_LIMIT
    forks: ForkSchedule = Field(default_factory=ForkSchedule)
    ethash: EthashConfig | None = None
    clique: CliqueConfig | None = None
    ibft2: IBFT2Config | None = None

    @model_validator(mode="after")
    def single_engine(self) -> GenesisSpec:
        """Exactly one consensus engine section must be populated."""
        if len(self.engines()) != 1:
            raise ValueError(
                "exactly one consensus configuration (ethash, clique, or ibft2) is required, "
                f"got {self.engines() or 'none'}"
            )
        return self

    def engines(self) -> list[str]:
        """Names of the populated engine sections, alphabetically."""
        return sorted(
            name for name in ("clique", "ethash", "ibft2") if getattr(self, name) is not None
        )

    @property
    def engine(self) -> str:
        """Name of the single populated engine section."""
        return self.engines()[0]
