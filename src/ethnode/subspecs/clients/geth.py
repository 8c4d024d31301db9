"""Go-Ethereum adapter."""

from __future__ import annotations

from typing import Final, Sequence

from ethnode.subspecs.genesis import GETH, GenesisSpec, GethStyleGenesisBuilder, render_document
from ethnode.subspecs.node import MAIN_NETWORK, ClientKind, VerbosityLevel

from .base import (
    Arg,
    ArgContext,
    ClientAdapter,
    account_password_file,
    bootnodes,
    both,
    coinbase,
    cors_domains,
    default_host,
    engine_enabled,
    graphql_enabled,
    has_bootnodes,
    has_coinbase,
    has_cors,
    has_hosts,
    has_imported_account,
    has_jwt_secret,
    has_node_key,
    has_static_nodes,
    hosts,
    is_miner,
    is_private,
    is_public,
    json_static_nodes,
    jwt_secret_file,
    log_level,
    lower_apis,
    port,
    rpc_enabled,
    ws_enabled,
)

GETH_LOGGING: Final = "--verbosity"
GETH_CONFIG: Final = "--config"
GETH_NETWORK_ID: Final = "--networkid"
GETH_NODE_KEY: Final = "--nodekey"
GETH_NO_DISCOVERY: Final = "--nodiscover"
GETH_DATA_DIR: Final = "--datadir"
GETH_IPC_DISABLE: Final = "--ipcdisable"
GETH_P2P_PORT: Final = "--port"
GETH_BOOTNODES: Final = "--bootnodes"
GETH_SYNC_MODE: Final = "--syncmode"
GETH_MINER_ENABLED: Final = "--mine"
GETH_MINER_COINBASE: Final = "--miner.etherbase"
GETH_UNLOCK: Final = "--unlock"
GETH_PASSWORD: Final = "--password"
GETH_RPC_HTTP_ENABLED: Final = "--http"
GETH_RPC_HTTP_HOST: Final = "--http.addr"
GETH_RPC_HTTP_PORT: Final = "--http.port"
GETH_RPC_HTTP_API: Final = "--http.api"
GETH_RPC_HOST_WHITELIST: Final = "--http.vhosts"
GETH_RPC_HTTP_CORS_ORIGINS: Final = "--http.corsdomain"
GETH_RPC_WS_ENABLED: Final = "--ws"
GETH_RPC_WS_HOST: Final = "--ws.addr"
GETH_RPC_WS_PORT: Final = "--ws.port"
GETH_RPC_WS_API: Final = "--ws.api"
GETH_WS_ORIGINS: Final = "--ws.origins"
GETH_GRAPHQL_HTTP_ENABLED: Final = "--graphql"
GETH_GRAPHQL_HOST_WHITELIST: Final = "--graphql.vhosts"
GETH_GRAPHQL_HTTP_CORS_ORIGINS: Final = "--graphql.corsdomain"
GETH_AUTH_RPC_ADDRESS: Final = "--authrpc.addr"
GETH_AUTH_RPC_PORT: Final = "--authrpc.port"
GETH_AUTH_RPC_HOSTS: Final = "--authrpc.vhosts"
GETH_AUTH_RPC_JWT_SECRET: Final = "--authrpc.jwtsecret"

GETH_HOME_DIR: Final = "/home/ethereum"
DEFAULT_GETH_IMAGE: Final = "kotalco/geth:v1.10.26"

VERBOSITY: Final = {
    VerbosityLevel.OFF: "0",
    VerbosityLevel.FATAL: "1",
    VerbosityLevel.ERROR: "1",
    VerbosityLevel.WARN: "2",
    VerbosityLevel.INFO: "3",
    VerbosityLevel.DEBUG: "4",
    VerbosityLevel.TRACE: "5",
    VerbosityLevel.ALL: "5",
}
"""Geth's numeric verbosity for each level; geth has no separate fatal or trace."""

STATIC_NODES_SECTION: Final = "[Node.P2P]"


def _network_flag(ctx: ArgContext) -> str:
    return f"--{ctx.network.network or MAIN_NETWORK}"


class GethAdapter(ClientAdapter):
    """Go-Ethereum, the reference Go client."""

    kind = ClientKind.GETH
    home_dir = GETH_HOME_DIR
    default_image = DEFAULT_GETH_IMAGE

    genesis_builder = GethStyleGenesisBuilder(GETH)

    arguments = (
        Arg(GETH_DATA_DIR, lambda ctx: ctx.data_dir),
        Arg(GETH_IPC_DISABLE),
        Arg(GETH_P2P_PORT, port("p2p_port")),
        Arg(GETH_SYNC_MODE, lambda ctx: ctx.sync_mode.value),
        Arg(GETH_LOGGING, log_level),
        # config.toml holds the static nodes.
        Arg(GETH_CONFIG, lambda ctx: f"{ctx.config_dir}/config.toml", has_static_nodes),
        Arg(GETH_NODE_KEY, lambda ctx: f"{ctx.secrets_dir}/nodekey", has_node_key),
        Arg(GETH_BOOTNODES, bootnodes, has_bootnodes),
        Arg(_network_flag, when=is_public),
        Arg(GETH_NO_DISCOVERY, when=is_private),
        Arg(GETH_NETWORK_ID, lambda ctx: ctx.network_id, is_private),
        Arg(GETH_MINER_ENABLED, when=is_miner),
        Arg(GETH_MINER_COINBASE, coinbase, both(is_miner, has_coinbase)),
        Arg(GETH_UNLOCK, coinbase, has_imported_account),
        Arg(GETH_PASSWORD, account_password_file, has_imported_account),
        Arg(GETH_RPC_HTTP_ENABLED, when=rpc_enabled),
        Arg(GETH_RPC_HTTP_HOST, default_host, rpc_enabled),
        Arg(GETH_RPC_HTTP_PORT, port("rpc_port"), rpc_enabled),
        Arg(GETH_RPC_HTTP_API, lambda ctx: lower_apis(ctx.node.rpc_api), rpc_enabled),
        Arg(GETH_RPC_WS_ENABLED, when=ws_enabled),
        Arg(GETH_RPC_WS_HOST, default_host, ws_enabled),
        Arg(GETH_RPC_WS_PORT, port("ws_port"), ws_enabled),
        Arg(GETH_RPC_WS_API, lambda ctx: lower_apis(ctx.node.ws_api), ws_enabled),
        # GraphQL is served on the HTTP JSON-RPC port.
        Arg(GETH_GRAPHQL_HTTP_ENABLED, when=graphql_enabled),
        Arg(GETH_AUTH_RPC_ADDRESS, default_host, engine_enabled),
        Arg(GETH_AUTH_RPC_PORT, port("engine_port"), engine_enabled),
        Arg(GETH_AUTH_RPC_HOSTS, hosts, both(engine_enabled, has_hosts)),
        Arg(GETH_AUTH_RPC_JWT_SECRET, jwt_secret_file, has_jwt_secret),
        # No WebSocket host allow-list exists.
        Arg(GETH_RPC_HOST_WHITELIST, hosts, both(has_hosts, rpc_enabled)),
        Arg(GETH_GRAPHQL_HOST_WHITELIST, hosts, both(has_hosts, graphql_enabled)),
        Arg(GETH_RPC_HTTP_CORS_ORIGINS, cors_domains, both(has_cors, rpc_enabled)),
        Arg(GETH_GRAPHQL_HTTP_CORS_ORIGINS, cors_domains, both(has_cors, graphql_enabled)),
        Arg(GETH_WS_ORIGINS, cors_domains, both(has_cors, ws_enabled)),
    )

    def logging_level(self, level: VerbosityLevel) -> str:
        return VERBOSITY[level]

    def genesis(self, spec: GenesisSpec) -> str:
        return render_document(self.genesis_builder.build(spec))

    def encode_static_nodes(self, enodes: Sequence[str]) -> str:
        """
        Static peers as a geth TOML configuration fragment::

            [Node.P2P]
            StaticNodes = ["enode://...", ...]
        """
        return f"{STATIC_NODES_SECTION}\nStaticNodes = {json_static_nodes(enodes)}"
