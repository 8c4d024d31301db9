"""Nethermind adapter."""

from __future__ import annotations

from typing import Final, Sequence

from ethnode.subspecs.genesis import ChainspecGenesisBuilder, GenesisSpec, render_document
from ethnode.subspecs.node import MAIN_NETWORK, ClientKind, SyncMode, VerbosityLevel

from .base import (
    Arg,
    ArgContext,
    ClientAdapter,
    account_password_file,
    bootnodes,
    coinbase,
    const,
    default_host,
    engine_enabled,
    has_bootnodes,
    has_coinbase,
    has_imported_account,
    has_jwt_secret,
    has_node_key,
    has_static_nodes,
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

NETHERMIND_LOGGING: Final = "--log"
NETHERMIND_NODE_PRIVATE_KEY: Final = "--KeyStore.EnodeKeyFile"
NETHERMIND_STATIC_NODES_FILE: Final = "--Init.StaticNodesPath"
NETHERMIND_BOOTNODES: Final = "--Discovery.Bootnodes"
NETHERMIND_GENESIS_FILE: Final = "--Init.ChainSpecPath"
NETHERMIND_DATA_PATH: Final = "--datadir"
NETHERMIND_NETWORK: Final = "--config"
NETHERMIND_DISCOVERY_ENABLED: Final = "--Init.DiscoveryEnabled"
NETHERMIND_P2P_PORT: Final = "--Network.P2PPort"
NETHERMIND_FAST_SYNC: Final = "--Sync.FastSync"
NETHERMIND_BEAM_SYNC: Final = "--Sync.BeamSync"
NETHERMIND_FAST_BLOCKS: Final = "--Sync.FastBlocks"
NETHERMIND_DOWNLOAD_HEADERS_IN_FAST_SYNC: Final = "--Sync.DownloadHeadersInFastSync"
NETHERMIND_DOWNLOAD_BODIES_IN_FAST_SYNC: Final = "--Sync.DownloadBodiesInFastSync"
NETHERMIND_DOWNLOAD_RECEIPTS_IN_FAST_SYNC: Final = "--Sync.DownloadReceiptsInFastSync"
NETHERMIND_MINING_ENABLED: Final = "--Mining.Enabled"
NETHERMIND_MINER_COINBASE: Final = "--KeyStore.BlockAuthorAccount"
NETHERMIND_UNLOCK_ACCOUNTS: Final = "--KeyStore.UnlockAccounts"
NETHERMIND_PASSWORD_FILES: Final = "--KeyStore.PasswordFiles"
NETHERMIND_RPC_HTTP_ENABLED: Final = "--JsonRpc.Enabled"
NETHERMIND_RPC_HTTP_HOST: Final = "--JsonRpc.Host"
NETHERMIND_RPC_HTTP_PORT: Final = "--JsonRpc.Port"
NETHERMIND_RPC_HTTP_API: Final = "--JsonRpc.EnabledModules"
NETHERMIND_RPC_WS_ENABLED: Final = "--Init.WebSocketsEnabled"
NETHERMIND_RPC_WS_PORT: Final = "--JsonRpc.WebSocketsPort"
NETHERMIND_RPC_ENGINE_HOST: Final = "--JsonRpc.EngineHost"
NETHERMIND_RPC_ENGINE_PORT: Final = "--JsonRpc.EnginePort"
NETHERMIND_RPC_JWT_SECRET_FILE: Final = "--JsonRpc.JwtSecretFile"

NETHERMIND_HOME_DIR: Final = "/home/nethermind"
DEFAULT_NETHERMIND_IMAGE: Final = "kotalco/nethermind:v1.14.5"

SYNC_FLAGS: Final = {
    SyncMode.FULL: (
        (NETHERMIND_FAST_SYNC, "false"),
        (NETHERMIND_FAST_BLOCKS, "false"),
        (NETHERMIND_DOWNLOAD_BODIES_IN_FAST_SYNC, "false"),
        (NETHERMIND_DOWNLOAD_RECEIPTS_IN_FAST_SYNC, "false"),
    ),
    SyncMode.FAST: (
        (NETHERMIND_FAST_SYNC, "true"),
        (NETHERMIND_FAST_BLOCKS, "true"),
        (NETHERMIND_DOWNLOAD_BODIES_IN_FAST_SYNC, "true"),
        (NETHERMIND_DOWNLOAD_RECEIPTS_IN_FAST_SYNC, "true"),
    ),
    SyncMode.LIGHT: (
        (NETHERMIND_FAST_SYNC, "true"),
        (NETHERMIND_BEAM_SYNC, "true"),
        (NETHERMIND_FAST_BLOCKS, "true"),
        (NETHERMIND_DOWNLOAD_HEADERS_IN_FAST_SYNC, "false"),
        (NETHERMIND_DOWNLOAD_BODIES_IN_FAST_SYNC, "false"),
        (NETHERMIND_DOWNLOAD_RECEIPTS_IN_FAST_SYNC, "false"),
    ),
}
"""Nethermind has no single sync-mode switch; each mode is a set of `Sync.*` flags."""


def _sync_args() -> tuple[Arg, ...]:
    """One table entry per `Sync.*` flag, each gated on the mode using it."""
    entries: list[Arg] = []
    for mode, flags in SYNC_FLAGS.items():
        for flag, value in flags:
            entries.append(Arg(flag, const(value), lambda ctx, mode=mode: ctx.sync_mode is mode))
    return tuple(entries)


def _network(ctx: ArgContext) -> str:
    return ctx.network.network or MAIN_NETWORK


def _unlock_accounts(ctx: ArgContext) -> str:
    return f"[{coinbase(ctx)}]"


def _password_files(ctx: ArgContext) -> str:
    return f"[{account_password_file(ctx)}]"


class NethermindAdapter(ClientAdapter):
    """
    Nethermind, the .NET client.

    Nethermind takes no host allow-list and no CORS origins, and serves no
    GraphQL; those node settings never reach its command line.
    """

    kind = ClientKind.NETHERMIND
    home_dir = NETHERMIND_HOME_DIR
    default_image = DEFAULT_NETHERMIND_IMAGE

    genesis_builder = ChainspecGenesisBuilder()

    arguments = (
        Arg(NETHERMIND_LOGGING, log_level),
        # Enode key converted to the binary format nethermind reads.
        Arg(NETHERMIND_NODE_PRIVATE_KEY, lambda ctx: f"{ctx.data_dir}/kotal_nodekey", has_node_key),
        Arg(
            NETHERMIND_STATIC_NODES_FILE,
            lambda ctx: f"{ctx.config_dir}/static-nodes.json",
            has_static_nodes,
        ),
        Arg(NETHERMIND_BOOTNODES, bootnodes, has_bootnodes),
        Arg(NETHERMIND_GENESIS_FILE, lambda ctx: f"{ctx.config_dir}/genesis.json", is_private),
        Arg(NETHERMIND_DATA_PATH, lambda ctx: ctx.data_dir),
        Arg(NETHERMIND_NETWORK, _network, is_public),
        Arg(NETHERMIND_NETWORK, lambda ctx: f"{ctx.config_dir}/empty.cfg", is_private),
        Arg(NETHERMIND_DISCOVERY_ENABLED, const("false"), is_private),
        Arg(NETHERMIND_P2P_PORT, port("p2p_port")),
        *_sync_args(),
        Arg(NETHERMIND_MINING_ENABLED, const("true"), is_miner),
        Arg(NETHERMIND_MINER_COINBASE, coinbase, has_coinbase),
        Arg(NETHERMIND_UNLOCK_ACCOUNTS, _unlock_accounts, has_imported_account),
        Arg(NETHERMIND_PASSWORD_FILES, _password_files, has_imported_account),
        Arg(NETHERMIND_RPC_HTTP_ENABLED, const("true"), rpc_enabled),
        Arg(NETHERMIND_RPC_HTTP_HOST, default_host, rpc_enabled),
        Arg(NETHERMIND_RPC_HTTP_PORT, port("rpc_port"), rpc_enabled),
        Arg(NETHERMIND_RPC_HTTP_API, lambda ctx: lower_apis(ctx.node.rpc_api), rpc_enabled),
        # WebSocket shares the JSON-RPC host and modules.
        Arg(NETHERMIND_RPC_WS_ENABLED, const("true"), ws_enabled),
        Arg(NETHERMIND_RPC_WS_PORT, port("ws_port"), ws_enabled),
        Arg(NETHERMIND_RPC_ENGINE_HOST, default_host, engine_enabled),
        Arg(NETHERMIND_RPC_ENGINE_PORT, port("engine_port"), engine_enabled),
        Arg(NETHERMIND_RPC_JWT_SECRET_FILE, jwt_secret_file, has_jwt_secret),
    )

    def logging_level(self, level: VerbosityLevel) -> str:
        return level.value.upper()

    def genesis(self, spec: GenesisSpec) -> str:
        return render_document(self.genesis_builder.build(spec))

    def encode_static_nodes(self, enodes: Sequence[str]) -> str:
        return json_static_nodes(enodes)
