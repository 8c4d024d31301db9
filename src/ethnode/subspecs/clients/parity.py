"""OpenEthereum (formerly Parity) adapter."""

from __future__ import annotations

from typing import Final, Sequence

from ethnode.subspecs.genesis import ChainspecGenesisBuilder, GenesisSpec, render_document
from ethnode.subspecs.node import MAIN_NETWORK, ClientKind, SyncMode

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
    has_bootnodes,
    has_coinbase,
    has_cors,
    has_hosts,
    has_imported_account,
    has_node_key,
    has_static_nodes,
    hosts,
    is_private,
    log_level,
    lower_apis,
    port,
    rpc_enabled,
    ws_enabled,
)

PARITY_LOGGING: Final = "--logging"
PARITY_NETWORK_ID: Final = "--network-id"
PARITY_NODE_KEY: Final = "--node-key"
PARITY_DATA_DIR: Final = "--base-path"
PARITY_RESERVED_PEERS: Final = "--reserved-peers"
PARITY_NETWORK: Final = "--chain"
PARITY_NO_DISCOVERY: Final = "--no-discovery"
PARITY_P2P_PORT: Final = "--port"
PARITY_BOOTNODES: Final = "--bootnodes"
PARITY_SYNC_MODE: Final = "--pruning"
PARITY_MINER_COINBASE: Final = "--author"
PARITY_ENGINE_SIGNER: Final = "--engine-signer"
PARITY_UNLOCK: Final = "--unlock"
PARITY_PASSWORD: Final = "--password"
PARITY_DISABLE_RPC: Final = "--no-jsonrpc"
PARITY_RPC_HTTP_CORS_ORIGINS: Final = "--jsonrpc-cors"
PARITY_RPC_HTTP_PORT: Final = "--jsonrpc-port"
PARITY_RPC_HTTP_HOST: Final = "--jsonrpc-interface"
PARITY_RPC_HTTP_API: Final = "--jsonrpc-apis"
PARITY_RPC_HOST_WHITELIST: Final = "--jsonrpc-hosts"
PARITY_DISABLE_WS: Final = "--no-ws"
PARITY_RPC_WS_CORS_ORIGINS: Final = "--ws-origins"
PARITY_RPC_WS_PORT: Final = "--ws-port"
PARITY_RPC_WS_HOST: Final = "--ws-interface"
PARITY_RPC_WS_API: Final = "--ws-apis"
PARITY_RPC_WS_WHITELIST: Final = "--ws-hosts"

PARITY_HOME_DIR: Final = "/home/openethereum"
DEFAULT_PARITY_IMAGE: Final = "openethereum/openethereum:v3.2.4"

PRUNING: Final = {
    SyncMode.FULL: "archive",
    SyncMode.FAST: "fast",
    SyncMode.LIGHT: "fast",
}
"""OpenEthereum state pruning for each sync mode; it has no light mode of its own."""


def _pruning(ctx: ArgContext) -> str:
    return PRUNING[ctx.sync_mode]


def _named_chain(ctx: ArgContext) -> bool:
    """Public networks other than mainnet, which OpenEthereum joins by default."""
    return ctx.public and (ctx.network.network or MAIN_NETWORK) != MAIN_NETWORK


def _clique_signer(ctx: ArgContext) -> bool:
    genesis = ctx.network.genesis
    return genesis is not None and genesis.clique is not None and has_coinbase(ctx)


def _rpc_disabled(ctx: ArgContext) -> bool:
    return not ctx.node.rpc


def _ws_disabled(ctx: ArgContext) -> bool:
    return not ctx.node.ws


class ParityAdapter(ClientAdapter):
    """OpenEthereum, the Rust client. It serves no GraphQL and no Engine API."""

    kind = ClientKind.PARITY
    home_dir = PARITY_HOME_DIR
    default_image = DEFAULT_PARITY_IMAGE

    genesis_builder = ChainspecGenesisBuilder()

    arguments = (
        Arg(PARITY_DATA_DIR, lambda ctx: ctx.data_dir),
        Arg(PARITY_P2P_PORT, port("p2p_port")),
        Arg(PARITY_SYNC_MODE, _pruning),
        Arg(PARITY_LOGGING, log_level),
        Arg(PARITY_NODE_KEY, lambda ctx: f"{ctx.secrets_dir}/nodekey", has_node_key),
        Arg(PARITY_BOOTNODES, bootnodes, has_bootnodes),
        Arg(PARITY_RESERVED_PEERS, lambda ctx: f"{ctx.config_dir}/static-nodes", has_static_nodes),
        Arg(PARITY_NETWORK, lambda ctx: str(ctx.network.network), _named_chain),
        Arg(PARITY_NETWORK, lambda ctx: f"{ctx.config_dir}/genesis.json", is_private),
        Arg(PARITY_NETWORK_ID, lambda ctx: ctx.network_id, is_private),
        Arg(PARITY_NO_DISCOVERY, when=is_private),
        Arg(PARITY_MINER_COINBASE, coinbase, has_coinbase),
        Arg(PARITY_UNLOCK, coinbase, has_imported_account),
        Arg(PARITY_PASSWORD, account_password_file, has_imported_account),
        Arg(PARITY_ENGINE_SIGNER, coinbase, _clique_signer),
        Arg(PARITY_RPC_HTTP_PORT, port("rpc_port"), rpc_enabled),
        Arg(PARITY_RPC_HTTP_HOST, default_host, rpc_enabled),
        Arg(PARITY_RPC_HTTP_API, lambda ctx: lower_apis(ctx.node.rpc_api), rpc_enabled),
        Arg(PARITY_DISABLE_RPC, when=_rpc_disabled),
        Arg(PARITY_RPC_WS_PORT, port("ws_port"), ws_enabled),
        Arg(PARITY_RPC_WS_HOST, default_host, ws_enabled),
        Arg(PARITY_RPC_WS_API, lambda ctx: lower_apis(ctx.node.ws_api), ws_enabled),
        Arg(PARITY_DISABLE_WS, when=_ws_disabled),
        Arg(PARITY_RPC_HOST_WHITELIST, hosts, both(has_hosts, rpc_enabled)),
        Arg(PARITY_RPC_WS_WHITELIST, hosts, both(has_hosts, ws_enabled)),
        Arg(PARITY_RPC_HTTP_CORS_ORIGINS, cors_domains, both(has_cors, rpc_enabled)),
        Arg(PARITY_RPC_WS_CORS_ORIGINS, cors_domains, both(has_cors, ws_enabled)),
    )

    def genesis(self, spec: GenesisSpec) -> str:
        return render_document(self.genesis_builder.build(spec))

    def encode_static_nodes(self, enodes: Sequence[str]) -> str:
        """Reserved peers file: one enode URL per line."""
        return "\n".join(enodes)
