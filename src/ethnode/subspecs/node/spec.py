"""
Node and network specification.

These are the already-defaulted, already-validated inputs handed to the client
adapters. They are frozen: an adapter never changes what it is given.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from pydantic import Field, NonNegativeInt

from ethnode.subspecs.genesis import ConsensusAlgorithm, GenesisSpec
from ethnode.types import Address, Enode, StrictBaseModel

DEFAULT_P2P_PORT: Final = 30303
DEFAULT_RPC_PORT: Final = 8545
DEFAULT_WS_PORT: Final = 8546
DEFAULT_GRAPHQL_PORT: Final = 8547
DEFAULT_ENGINE_PORT: Final = 8551

MAIN_NETWORK: Final = "mainnet"


class ClientKind(Enum):
    """Execution client binary running on a node."""

    BESU = "besu"
    GETH = "geth"
    NETHERMIND = "nethermind"
    PARITY = "parity"


class SyncMode(Enum):
    """How a node catches up with the chain head."""

    FAST = "fast"
    FULL = "full"
    LIGHT = "light"


class VerbosityLevel(Enum):
    """Client log verbosity, from silent to everything."""

    OFF = "off"
    FATAL = "fatal"
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"
    ALL = "all"


class Api(Enum):
    """JSON-RPC module exposed over HTTP or WebSocket."""

    ADMIN = "admin"
    CLIQUE = "clique"
    DEBUG = "debug"
    EEA = "eea"
    ETH = "eth"
    IBFT = "ibft"
    MINER = "miner"
    NET = "net"
    PERM = "perm"
    PLUGINS = "plugins"
    PRIV = "priv"
    TXPOOL = "txpool"
    WEB3 = "web3"


DEFAULT_APIS: Final = (Api.WEB3, Api.ETH, Api.NET)


class ImportedAccount(StrictBaseModel):
    """Keystore account imported into the node and unlocked at start."""

    private_key_secret_name: str
    password_secret_name: str


class NetworkConfig(StrictBaseModel):
    """
    The network a node joins.

    A public network is selected by `network` name. A private network instead
    carries its own `genesis`, and `network` is ignored.
    """

    network: str | None = None
    consensus: ConsensusAlgorithm | None = None
    genesis: GenesisSpec | None = None

    @property
    def is_private(self) -> bool:
        """Whether the network is defined by its own genesis block."""
        return self.genesis is not None


class NodeSpec(StrictBaseModel):
    """A single execution client node."""

    client: ClientKind
    image: str | None = None
    """Container image reference; the adapter's default when unset."""
    sync_mode: SyncMode | None = None
    """Unset means full sync on private networks and fast sync on public ones."""
    logging: VerbosityLevel = VerbosityLevel.INFO
    node_private_key_secret_name: str | None = None
    p2p_port: NonNegativeInt = DEFAULT_P2P_PORT
    bootnodes: list[Enode] = Field(default_factory=list)
    static_nodes: list[Enode] = Field(default_factory=list)

    miner: bool = False
    coinbase: Address | None = None
    """Account receiving block rewards; also the imported account's address."""
    import_account: ImportedAccount | None = None

    rpc: bool = False
    rpc_port: NonNegativeInt = DEFAULT_RPC_PORT
    rpc_api: list[Api] = Field(default_factory=lambda: list(DEFAULT_APIS))

    ws: bool = False
    ws_port: NonNegativeInt = DEFAULT_WS_PORT
    ws_api: list[Api] = Field(default_factory=lambda: list(DEFAULT_APIS))

    graphql: bool = False
    graphql_port: NonNegativeInt = DEFAULT_GRAPHQL_PORT

    engine: bool = False
    """Whether the authenticated Engine API for consensus clients is served."""
    engine_port: NonNegativeInt = DEFAULT_ENGINE_PORT
    jwt_secret_name: str | None = None

    hosts: list[str] = Field(default_factory=list)
    """Host names allowed to reach the HTTP servers."""
    cors_domains: list[str] = Field(default_factory=list)
    """Origins allowed to make cross-origin requests."""

    def effective_sync_mode(self, network: NetworkConfig) -> SyncMode:
        """The configured sync mode, or the network-type default."""
        if self.sync_mode is not None:
            return self.sync_mode
        return SyncMode.FULL if network.is_private else SyncMode.FAST
