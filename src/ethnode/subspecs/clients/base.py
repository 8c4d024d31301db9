"""
Client adapter base
===================

Every execution client exposes the same features under different flag names
and value conventions. An adapter declares its command line as an ordered
table of `Arg` entries; each entry names a flag, how to compute its value, and
when it applies. Evaluating the table against a node yields the argument
vector.

Keeping the table declarative lets each flag be checked on its own, and makes
the emitted order a property of the table rather than of control flow.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, ClassVar, Final, Sequence

from ethnode.subspecs.genesis import GenesisSpec
from ethnode.subspecs.node import Api, ClientKind, NetworkConfig, NodeSpec, SyncMode, VerbosityLevel

DEFAULT_HOST: Final = "0.0.0.0"
"""Listen address of every HTTP, WebSocket and Engine API server."""

DATA_SUBDIR: Final = "kotal-data"
SECRETS_SUBDIR: Final = ".kotal-secrets"
CONFIG_SUBDIR: Final = "kotal-config"


@dataclass(frozen=True, slots=True)
class ArgContext:
    """Everything an argument table entry may read."""

    node: NodeSpec
    network: NetworkConfig
    data_dir: str
    secrets_dir: str
    config_dir: str
    log_level: str
    """The node's verbosity in the client's own vocabulary."""

    @property
    def private(self) -> bool:
        """Whether the node joins a private network."""
        return self.network.is_private

    @property
    def public(self) -> bool:
        """Whether the node joins a named public network."""
        return not self.network.is_private

    @property
    def sync_mode(self) -> SyncMode:
        return self.node.effective_sync_mode(self.network)

    @property
    def network_id(self) -> str:
        assert self.network.genesis is not None
        return str(self.network.genesis.network_id)


Predicate = Callable[[ArgContext], bool]
ValueFn = Callable[[ArgContext], str]


def always(ctx: ArgContext) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class Arg:
    """
    One command-line flag in an adapter table.

    Attributes:
        flag: Literal flag, or a function computing it.
        value: Function computing the flag's value; `None` for a bare switch.
        when: Condition under which the flag is emitted.
    """

    flag: str | ValueFn
    value: ValueFn | None = None
    when: Predicate = always

    def render(self, ctx: ArgContext) -> list[str]:
        """The flag (and value) for this context, or nothing when it does not apply."""
        if not self.when(ctx):
            return []
        flag = self.flag if isinstance(self.flag, str) else self.flag(ctx)
        if self.value is None:
            return [flag]
        return [flag, self.value(ctx)]


# Reusable value and condition functions shared by the adapter tables.


def comma_joined(values: Sequence[str]) -> str:
    return ",".join(values)


def lower_apis(apis: Sequence[Api]) -> str:
    return comma_joined([api.value.lower() for api in apis])


def upper_apis(apis: Sequence[Api]) -> str:
    return comma_joined([api.value.upper() for api in apis])


def has_hosts(ctx: ArgContext) -> bool:
    return bool(ctx.node.hosts)


def has_cors(ctx: ArgContext) -> bool:
    return bool(ctx.node.cors_domains)


def hosts(ctx: ArgContext) -> str:
    return comma_joined(ctx.node.hosts)


def cors_domains(ctx: ArgContext) -> str:
    return comma_joined(ctx.node.cors_domains)


def bootnodes(ctx: ArgContext) -> str:
    return comma_joined(ctx.node.bootnodes)


def has_bootnodes(ctx: ArgContext) -> bool:
    return bool(ctx.node.bootnodes)


def has_static_nodes(ctx: ArgContext) -> bool:
    return bool(ctx.node.static_nodes)


def has_node_key(ctx: ArgContext) -> bool:
    return ctx.node.node_private_key_secret_name is not None


def is_miner(ctx: ArgContext) -> bool:
    return ctx.node.miner


def has_coinbase(ctx: ArgContext) -> bool:
    return ctx.node.coinbase is not None


def coinbase(ctx: ArgContext) -> str:
    assert ctx.node.coinbase is not None
    return ctx.node.coinbase


def has_imported_account(ctx: ArgContext) -> bool:
    return ctx.node.import_account is not None and ctx.node.coinbase is not None


def account_password_file(ctx: ArgContext) -> str:
    return f"{ctx.secrets_dir}/account.password"


def jwt_secret_file(ctx: ArgContext) -> str:
    return f"{ctx.secrets_dir}/jwt.secret"


def rpc_enabled(ctx: ArgContext) -> bool:
    return ctx.node.rpc


def ws_enabled(ctx: ArgContext) -> bool:
    return ctx.node.ws


def graphql_enabled(ctx: ArgContext) -> bool:
    return ctx.node.graphql


def engine_enabled(ctx: ArgContext) -> bool:
    return ctx.node.engine


def has_jwt_secret(ctx: ArgContext) -> bool:
    return ctx.node.engine and ctx.node.jwt_secret_name is not None


def default_host(ctx: ArgContext) -> str:
    return DEFAULT_HOST


def log_level(ctx: ArgContext) -> str:
    return ctx.log_level


def both(*predicates: Predicate) -> Predicate:
    """Condition holding when every predicate holds."""
    return lambda ctx: all(predicate(ctx) for predicate in predicates)


def either(*predicates: Predicate) -> Predicate:
    """Condition holding when any predicate holds."""
    return lambda ctx: any(predicate(ctx) for predicate in predicates)


def const(text: str) -> ValueFn:
    """Value function returning fixed text."""
    return lambda ctx: text


def port(attribute: str) -> ValueFn:
    """Value function rendering a node port field."""
    return lambda ctx: str(getattr(ctx.node, attribute))


def is_private(ctx: ArgContext) -> bool:
    return ctx.private


def is_public(ctx: ArgContext) -> bool:
    return ctx.public


class ClientAdapter(ABC):
    """
    Translates client-agnostic node inputs into one client's artifacts.

    Adapters hold no state; one instance can serve any number of nodes
    concurrently.
    """

    kind: ClassVar[ClientKind]
    home_dir: ClassVar[str]
    """Home directory inside the client's container image."""
    default_image: ClassVar[str]
    arguments: ClassVar[tuple[Arg, ...]]
    """Ordered argument table."""

    @property
    def data_dir(self) -> str:
        return f"{self.home_dir}/{DATA_SUBDIR}"

    @property
    def secrets_dir(self) -> str:
        return f"{self.home_dir}/{SECRETS_SUBDIR}"

    @property
    def config_dir(self) -> str:
        return f"{self.home_dir}/{CONFIG_SUBDIR}"

    def logging_level(self, level: VerbosityLevel) -> str:
        """Translate a verbosity level into the client's logging flag value."""
        return level.value

    def context(self, node: NodeSpec, network: NetworkConfig) -> ArgContext:
        return ArgContext(
            node=node,
            network=network,
            data_dir=self.data_dir,
            secrets_dir=self.secrets_dir,
            config_dir=self.config_dir,
            log_level=self.logging_level(node.logging),
        )

    def args(self, node: NodeSpec, network: NetworkConfig) -> list[str]:
        """Command-line arguments starting the client for this node."""
        ctx = self.context(node, network)
        return [part for arg in self.arguments for part in arg.render(ctx)]

    @abstractmethod
    def genesis(self, spec: GenesisSpec) -> str:
        """
        Render the genesis file this client reads at initialization.

        Raises:
            EncodingError: If extraData or the nonce cannot be encoded.
            MarshalError: If the document cannot be serialized.
            UnsupportedConsensusError: If the client's genesis dialect cannot
                express the configured engine.
        """

    @abstractmethod
    def encode_static_nodes(self, enodes: Sequence[str]) -> str:
        """Render static peers in the client's configuration format."""

    def image(self, node: NodeSpec) -> str:
        """The node's container image, falling back to the adapter default."""
        return node.image or self.default_image

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def json_static_nodes(enodes: Sequence[str]) -> str:
    """Static peers as a JSON array of enode URLs."""
    return json.dumps(list(enodes), separators=(",", ":"))
