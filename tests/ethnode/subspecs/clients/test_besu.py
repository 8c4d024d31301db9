"""Tests for the Besu adapter."""

from __future__ import annotations

import json

import pytest

from ethnode.subspecs.clients import BesuAdapter
from ethnode.subspecs.node import Api, ClientKind, ImportedAccount, VerbosityLevel
from tests.ethnode.helpers import (
    ENODE_A,
    ENODE_B,
    IBFT2_EXTRA_DATA,
    make_ibft2_genesis,
    make_node,
    private_network,
    public_network,
)

COINBASE = "0x" + "5a" * 20


@pytest.fixture
def adapter() -> BesuAdapter:
    return BesuAdapter()


def besu_node(**overrides):
    return make_node(ClientKind.BESU, **overrides)


class TestArgs:
    def test_minimal_private_node(self, adapter: BesuAdapter) -> None:
        assert adapter.args(besu_node(), private_network()) == [
            "--nat-method", "KUBERNETES",
            "--data-path", "/opt/besu/kotal-data",
            "--p2p-port", "30303",
            "--sync-mode", "FULL",
            "--logging", "INFO",
            "--genesis-file", "/opt/besu/kotal-config/genesis.json",
            "--network-id", "4444",
            "--discovery-enabled", "false",
        ]  # fmt: skip

    def test_public_network(self, adapter: BesuAdapter) -> None:
        args = adapter.args(besu_node(), public_network("goerli"))
        assert args[args.index("--network") + 1] == "goerli"
        assert args[args.index("--sync-mode") + 1] == "FAST"
        assert "--genesis-file" not in args
        assert "--discovery-enabled" not in args

    @pytest.mark.parametrize(
        "level, expected",
        [(VerbosityLevel.OFF, "OFF"), (VerbosityLevel.TRACE, "TRACE"), (VerbosityLevel.ALL, "ALL")],
    )
    def test_logging_is_uppercased(
        self, adapter: BesuAdapter, level: VerbosityLevel, expected: str
    ) -> None:
        args = adapter.args(besu_node(logging=level), private_network())
        assert args[args.index("--logging") + 1] == expected

    def test_node_key_and_peers(self, adapter: BesuAdapter) -> None:
        node = besu_node(
            node_private_key_secret_name="nodekey",
            bootnodes=[ENODE_A, ENODE_B],
            static_nodes=[ENODE_A],
        )
        args = adapter.args(node, private_network())
        assert args[args.index("--node-private-key-file") + 1] == "/opt/besu/.kotal-secrets/nodekey"
        assert args[args.index("--bootnodes") + 1] == f"{ENODE_A},{ENODE_B}"
        assert args[args.index("--static-nodes-file") + 1] == (
            "/opt/besu/kotal-config/static-nodes.json"
        )

    def test_miner(self, adapter: BesuAdapter) -> None:
        node = besu_node(miner=True, coinbase=COINBASE)
        args = adapter.args(node, private_network())
        assert "--miner-enabled" in args
        assert args[args.index("--miner-coinbase") + 1] == COINBASE

    def test_imported_account_is_never_unlocked(self, adapter: BesuAdapter) -> None:
        node = besu_node(
            miner=True,
            coinbase=COINBASE,
            import_account=ImportedAccount(
                private_key_secret_name="key", password_secret_name="password"
            ),
        )
        args = adapter.args(node, private_network())
        assert not any("unlock" in arg or "password" in arg for arg in args)

    def test_rpc(self, adapter: BesuAdapter) -> None:
        node = besu_node(rpc=True, rpc_port=8599, rpc_api=[Api.ETH, Api.ADMIN, Api.IBFT])
        args = adapter.args(node, private_network())
        assert "--rpc-http-enabled" in args
        assert args[args.index("--rpc-http-host") + 1] == "0.0.0.0"
        assert args[args.index("--rpc-http-port") + 1] == "8599"
        assert args[args.index("--rpc-http-api") + 1] == "ETH,ADMIN,IBFT"

    def test_ws(self, adapter: BesuAdapter) -> None:
        args = adapter.args(besu_node(ws=True), private_network())
        assert "--rpc-ws-enabled" in args
        assert args[args.index("--rpc-ws-port") + 1] == "8546"
        assert args[args.index("--rpc-ws-api") + 1] == "WEB3,ETH,NET"

    def test_graphql(self, adapter: BesuAdapter) -> None:
        args = adapter.args(besu_node(graphql=True), private_network())
        assert "--graphql-http-enabled" in args
        assert args[args.index("--graphql-http-port") + 1] == "8547"

    def test_engine(self, adapter: BesuAdapter) -> None:
        node = besu_node(engine=True, jwt_secret_name="jwt", hosts=["node.local"])
        args = adapter.args(node, private_network())
        assert "--engine-rpc-enabled" in args
        assert args[args.index("--engine-rpc-port") + 1] == "8551"
        assert args[args.index("--engine-jwt-secret") + 1] == "/opt/besu/.kotal-secrets/jwt.secret"
        assert args[args.index("--engine-host-allowlist") + 1] == "node.local"

    def test_disabled_transports_emit_nothing(self, adapter: BesuAdapter) -> None:
        node = besu_node(hosts=["a"], cors_domains=["b"], jwt_secret_name="jwt")
        args = adapter.args(node, private_network())
        assert not any(arg.startswith(("--rpc", "--graphql", "--engine")) for arg in args)
        assert "--host-allowlist" not in args

    def test_hosts_and_cors_follow_enabled_transports(self, adapter: BesuAdapter) -> None:
        node = besu_node(rpc=True, hosts=["a", "b"], cors_domains=["c"])
        args = adapter.args(node, private_network())
        assert args[args.index("--host-allowlist") + 1] == "a,b"
        assert args[args.index("--rpc-http-cors-origins") + 1] == "c"
        assert "--graphql-http-cors-origins" not in args


class TestGenesis:
    def test_ibft2(self, adapter: BesuAdapter) -> None:
        document = json.loads(adapter.genesis(make_ibft2_genesis()))
        assert document["extraData"] == IBFT2_EXTRA_DATA
        assert "messageQueueLimit" in document["config"]["ibft2"]


class TestStaticNodes:
    def test_json_array(self, adapter: BesuAdapter) -> None:
        assert adapter.encode_static_nodes([ENODE_A, ENODE_B]) == f'["{ENODE_A}","{ENODE_B}"]'

    def test_empty(self, adapter: BesuAdapter) -> None:
        assert adapter.encode_static_nodes([]) == "[]"
