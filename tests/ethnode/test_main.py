"""Tests for the command-line entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest
import yaml

from ethnode.__main__ import (
    EXIT_INVALID,
    EXIT_OK,
    EXIT_PROVISIONING_ERROR,
    ColoredFormatter,
    main,
    run,
)
from tests.ethnode.helpers import ENODE_A, VALIDATORS

CLIQUE_NETWORK = {
    "consensus": "poa",
    "genesis": {
        "chainId": 4444,
        "networkId": 4444,
        "clique": {"signers": ["0x" + "11" * 20]},
    },
}

IBFT2_NETWORK = {
    "consensus": "ibft2",
    "genesis": {"chainId": 5555, "networkId": 5555, "ibft2": {"validators": VALIDATORS}},
}


@pytest.fixture
def write_manifest(tmp_path: Path):
    def write(network: dict[str, Any], node: dict[str, Any]) -> Path:
        path = tmp_path / "node.yaml"
        path.write_text(yaml.safe_dump({"network": network, "node": node}))
        return path

    return write


@pytest.fixture(autouse=True)
def no_image_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    for variable in ("BESU_IMAGE", "GETH_IMAGE", "NETHERMIND_IMAGE", "PARITY_IMAGE"):
        monkeypatch.delenv(variable, raising=False)


class TestRender:
    def test_args(self, write_manifest, capsys: pytest.CaptureFixture[str]) -> None:
        path = write_manifest(CLIQUE_NETWORK, {"client": "besu"})
        assert run("args", path) == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert lines[:2] == ["--nat-method", "KUBERNETES"]
        assert "--genesis-file" in lines

    def test_genesis(self, write_manifest, capsys: pytest.CaptureFixture[str]) -> None:
        path = write_manifest(CLIQUE_NETWORK, {"client": "geth"})
        assert run("genesis", path) == EXIT_OK
        document = json.loads(capsys.readouterr().out)
        assert document["config"]["clique"] == {"period": 15, "epoch": 3000}

    def test_static_nodes(self, write_manifest, capsys: pytest.CaptureFixture[str]) -> None:
        path = write_manifest(CLIQUE_NETWORK, {"client": "parity", "staticNodes": [ENODE_A]})
        assert run("static-nodes", path) == EXIT_OK
        assert capsys.readouterr().out == f"{ENODE_A}\n"

    def test_image_override(
        self, write_manifest, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("NETHERMIND_IMAGE", "nethermind:dev")
        path = write_manifest(CLIQUE_NETWORK, {"client": "nethermind"})
        assert run("image", path) == EXIT_OK
        assert capsys.readouterr().out == "nethermind:dev\n"


class TestFailures:
    def test_public_network_has_no_genesis(
        self, write_manifest, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = write_manifest({"network": "goerli"}, {"client": "geth"})
        assert run("genesis", path) == EXIT_PROVISIONING_ERROR
        assert "no genesis" in caplog.text

    def test_ibft2_chainspec_fails(
        self, write_manifest, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = write_manifest(IBFT2_NETWORK, {"client": "nethermind"})
        assert run("genesis", path) == EXIT_PROVISIONING_ERROR
        assert "ibft2 consensus is not supported by chainspec genesis" in caplog.text

    def test_missing_manifest(self, tmp_path: Path) -> None:
        assert run("args", tmp_path / "missing.yaml") == EXIT_INVALID

    def test_invalid_manifest(self, write_manifest) -> None:
        path = write_manifest(CLIQUE_NETWORK, {"client": "erigon"})
        assert run("args", path) == EXIT_INVALID


class TestValidate:
    def test_valid(self, write_manifest, capsys: pytest.CaptureFixture[str]) -> None:
        path = write_manifest(CLIQUE_NETWORK, {"client": "besu"})
        assert run("validate", path) == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_issues_are_printed(self, write_manifest, capsys: pytest.CaptureFixture[str]) -> None:
        network = CLIQUE_NETWORK | {"consensus": "pow"}
        path = write_manifest(network, {"client": "besu"})
        assert run("validate", path) == EXIT_INVALID
        assert "pow consensus requires ethash configuration" in capsys.readouterr().out

    def test_node_issues_are_printed(
        self, write_manifest, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = write_manifest(CLIQUE_NETWORK, {"client": "parity", "logging": "off"})
        assert run("validate", path) == EXIT_INVALID
        assert "node.logging: Invalid value: 'off': not supported by client parity" in (
            capsys.readouterr().out
        )


class TestMain:
    def test_main_dispatches(self, write_manifest, capsys: pytest.CaptureFixture[str]) -> None:
        path = write_manifest(CLIQUE_NETWORK, {"client": "geth"})
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        try:
            assert main(["static-nodes", str(path), "--no-color"]) == EXIT_OK
        finally:
            root.handlers[:] = handlers
            root.setLevel(level)
        assert capsys.readouterr().out == "[Node.P2P]\nStaticNodes = []\n"

    def test_unknown_command(self) -> None:
        with pytest.raises(SystemExit):
            main(["deploy", "node.yaml"])


def test_colored_formatter() -> None:
    record = logging.LogRecord("ethnode", logging.ERROR, __file__, 1, "boom", None, None)
    text = ColoredFormatter(datefmt="%Y").format(record)
    assert "boom" in text
    assert ColoredFormatter.RED in text
