"""Hyperledger Besu adapter."""

from __future__ import annotations

from typing import Final, Sequence

from ethnode.subspecs.genesis import BESU, GenesisSpec, GethStyleGenesisBuilder, render_document
from ethnode.subspecs.node import MAIN_NETWORK, ClientKind, VerbosityLevel

from .base import (
    Arg,
    ArgContext,
    ClientAdapter,
    bootnodes,
    both,
    coinbase,
    const,
    cors_domains,
    default_host,
    either,
    engine_enabled,
    graphql_enabled,
    has_bootnodes,
    has_cors,
    has_coinbase,
    has_hosts,
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
    port,
    rpc_enabled,
    upper_apis,
    ws_enabled,
)

BESU_LOGGING: Final = "--logging"
BESU_NETWORK_ID: Final = "--network-id"
BESU_NAT_METHOD: Final = "--nat-method"
BESU_NODE_PRIVATE_KEY: Final = "--node-private-key-file"
BESU_GENESIS_FILE: Final = "--genesis-file"
BESU_DATA_PATH: Final = "--data-path"
BESU_NETWORK: Final = "--network"
BESU_DISCOVERY_ENABLED: Final = "--discovery-enabled"
BESU_P2P_PORT: Final = "--p2p-port"
BESU_BOOTNODES: Final = "--bootnodes"
BESU_SYNC_MODE: Final = "--sync-mode"
BESU_MINER_ENABLED: Final = "--miner-enabled"
BESU_MINER_COINBASE: Final = "--miner-coinbase"
BESU_RPC_HTTP_CORS_ORIGINS: Final = "--rpc-http-cors-origins"
BESU_RPC_HTTP_ENABLED: Final = "--rpc-http-enabled"
BESU_RPC_HTTP_PORT: Final = "--rpc-http-port"
BESU_RPC_HTTP_HOST: Final = "--rpc-http-host"
BESU_RPC_HTTP_API: Final = "--rpc-http-api"
BESU_ENGINE_RPC_ENABLED: Final = "--engine-rpc-enabled"
BESU_ENGINE_JWT_SECRET: Final = "--engine-jwt-secret"
BESU_ENGINE_RPC_PORT: Final = "--engine-rpc-port"
BESU_ENGINE_HOST_ALLOWLIST: Final = "--engine-host-allowlist"
BESU_RPC_WS_ENABLED: Final = "--rpc-ws-enabled"
BESU_RPC_WS_PORT: Final = "--rpc-ws-port"
BESU_RPC_WS_HOST: Final = "--rpc-ws-host"
BESU_RPC_WS_API: Final = "--rpc-ws-api"
BESU_GRAPHQL_HTTP_ENABLED: Final = "--graphql-http-enabled"
BESU_GRAPHQL_HTTP_PORT: Final = "--graphql-http-port"
BESU_GRAPHQL_HTTP_HOST: Final = "--graphql-http-host"
BESU_GRAPHQL_HTTP_CORS_ORIGINS: Final = "--graphql-http-cors-origins"
BESU_HOST_ALLOWLIST: Final = "--host-allowlist"
BESU_STATIC_NODES_FILE: Final = "--static-nodes-file"

BESU_HOME_DIR: Final = "/opt/besu"
DEFAULT_BESU_IMAGE: Final = "hyperledger/besu:22.10.0"


def _sync_mode(ctx: ArgContext) -> str:
    return ctx.sync_mode.value.upper()


def _network(ctx: ArgContext) -> str:
    return ctx.network.network or MAIN_NETWORK


class BesuAdapter(ClientAdapter):
    """Hyperledger Besu, the Java enterprise client."""

    kind = ClientKind.BESU
    home_dir = BESU_HOME_DIR
    default_image = DEFAULT_BESU_IMAGE

    genesis_builder = GethStyleGenesisBuilder(BESU)

    arguments = (
        Arg(BESU_NAT_METHOD, const("KUBERNETES")),
        Arg(BESU_DATA_PATH, lambda ctx: ctx.data_dir),
        Arg(BESU_P2P_PORT, port("p2p_port")),
        Arg(BESU_SYNC_MODE, _sync_mode),
        Arg(BESU_LOGGING, log_level),
        Arg(BESU_NODE_PRIVATE_KEY, lambda ctx: f"{ctx.secrets_dir}/nodekey", has_node_key),
        Arg(
            BESU_STATIC_NODES_FILE,
            lambda ctx: f"{ctx.config_dir}/static-nodes.json",
            has_static_nodes,
        ),
        Arg(BESU_BOOTNODES, bootnodes, has_bootnodes),
        # Public network.
        Arg(BESU_NETWORK, _network, is_public),
        # Private network.
        Arg(BESU_GENESIS_FILE, lambda ctx: f"{ctx.config_dir}/genesis.json", is_private),
        Arg(BESU_NETWORK_ID, lambda ctx: ctx.network_id, is_private),
        Arg(BESU_DISCOVERY_ENABLED, const("false"), is_private),
        # Mining.
        Arg(BESU_MINER_ENABLED, when=is_miner),
        Arg(BESU_MINER_COINBASE, coinbase, both(is_miner, has_coinbase)),
        # JSON-RPC over HTTP.
        Arg(BESU_RPC_HTTP_ENABLED, when=rpc_enabled),
        Arg(BESU_RPC_HTTP_HOST, default_host, rpc_enabled),
        Arg(BESU_RPC_HTTP_PORT, port("rpc_port"), rpc_enabled),
        Arg(BESU_RPC_HTTP_API, lambda ctx: upper_apis(ctx.node.rpc_api), rpc_enabled),
        # JSON-RPC over WebSocket.
        Arg(BESU_RPC_WS_ENABLED, when=ws_enabled),
        Arg(BESU_RPC_WS_HOST, default_host, ws_enabled),
        Arg(BESU_RPC_WS_PORT, port("ws_port"), ws_enabled),
        Arg(BESU_RPC_WS_API, lambda ctx: upper_apis(ctx.node.ws_api), ws_enabled),
        # GraphQL over HTTP.
        Arg(BESU_GRAPHQL_HTTP_ENABLED, when=graphql_enabled),
        Arg(BESU_GRAPHQL_HTTP_HOST, default_host, graphql_enabled),
        Arg(BESU_GRAPHQL_HTTP_PORT, port("graphql_port"), graphql_enabled),
        # Engine API.
        Arg(BESU_ENGINE_RPC_ENABLED, when=engine_enabled),
        Arg(BESU_ENGINE_RPC_PORT, port("engine_port"), engine_enabled),
        Arg(BESU_ENGINE_JWT_SECRET, jwt_secret_file, has_jwt_secret),
        Arg(BESU_ENGINE_HOST_ALLOWLIST, hosts, both(engine_enabled, has_hosts)),
        # Host allow-list covers JSON-RPC and GraphQL; there is no WebSocket setting.
        Arg(BESU_HOST_ALLOWLIST, hosts, both(has_hosts, either(rpc_enabled, graphql_enabled))),
        Arg(BESU_RPC_HTTP_CORS_ORIGINS, cors_domains, both(has_cors, rpc_enabled)),
        Arg(BESU_GRAPHQL_HTTP_CORS_ORIGINS, cors_domains, both(has_cors, graphql_enabled)),
    )

    def logging_level(self, level: VerbosityLevel) -> str:
        return level.value.upper()

    def genesis(self, spec: GenesisSpec) -> str:
        return render_document(self.genesis_builder.build(spec))

    def encode_static_nodes(self, enodes: Sequence[str]) -> str:
        return json_static_nodes(enodes)

