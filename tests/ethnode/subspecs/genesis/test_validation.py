"""Tests for genesis validation."""

from __future__ import annotations

import pytest

from ethnode.subspecs.genesis import (
    Account,
    ConsensusAlgorithm,
    ForkSchedule,
    ValidationIssue,
    validate_genesis,
    validate_network,
)
from ethnode.types import address_of
from tests.ethnode.helpers import (
    make_clique_genesis,
    make_ethash_genesis,
    private_network,
    public_network,
)


def test_valid_genesis_has_no_issues() -> None:
    assert validate_genesis(make_clique_genesis(), ConsensusAlgorithm.PROOF_OF_AUTHORITY) == []


def test_reserved_account_is_rejected() -> None:
    genesis = make_ethash_genesis(accounts=[Account(address=address_of(0xFF))])
    [issue] = validate_genesis(genesis)
    assert issue.path == "genesis.accounts"
    assert issue.message == "reserved account is used"


def test_first_unreserved_account_is_allowed() -> None:
    genesis = make_ethash_genesis(accounts=[Account(address=address_of(0x100))])
    assert validate_genesis(genesis) == []


def test_consensus_mismatch() -> None:
    [issue] = validate_genesis(make_clique_genesis(), ConsensusAlgorithm.PROOF_OF_WORK)
    assert issue.path == "genesis"
    assert issue.value == "clique"
    assert "pow consensus requires ethash configuration" in issue.message


@pytest.mark.parametrize("chain_id, name", [(1, "mainnet"), (5, "goerli"), (11155111, "sepolia")])
def test_public_chain_id_is_rejected(chain_id: int, name: str) -> None:
    [issue] = validate_genesis(make_ethash_genesis(chain_id=chain_id))
    assert issue.path == "genesis.chainId"
    assert name in issue.message


def test_fork_order_violations_are_all_reported() -> None:
    forks = ForkSchedule(homestead=10, berlin=20)
    issues = validate_genesis(make_ethash_genesis(forks=forks))
    assert [issue.path for issue in issues] == ["genesis.forks.eip150", "genesis.forks.london"]
    assert issues[0].value == "0"


def test_issues_accumulate() -> None:
    genesis = make_ethash_genesis(
        chain_id=1,
        accounts=[Account(address=address_of(1))],
        forks=ForkSchedule(homestead=3),
    )
    issues = validate_genesis(genesis, ConsensusAlgorithm.PROOF_OF_AUTHORITY)
    assert len(issues) == 4


def test_issue_str() -> None:
    issue = ValidationIssue("genesis.chainId", "1", "bad")
    assert str(issue) == "genesis.chainId: Invalid value: '1': bad"


class TestValidateNetwork:
    def test_public_network_has_nothing_to_check(self) -> None:
        assert validate_network(public_network()) == []

    def test_private_network_uses_declared_consensus(self) -> None:
        assert validate_network(private_network()) == []

    def test_private_network_reports_issues(self) -> None:
        network = private_network(make_clique_genesis(chain_id=4))
        [issue] = validate_network(network)
        assert "rinkeby" in issue.message
