"""
Genesis document builders
=========================

Two families of genesis documents exist among execution clients:

- Geth-style (Besu, Geth): a flat object whose `config` holds the chain ID,
  one `<fork>Block` key per fork and an engine sub-object, beside the block
  header fields and an `alloc` of pre-funded accounts.
- Chainspec (OpenEthereum, Nethermind): a nested object with a `genesis`
  header and seal, protocol `params` expressed as `eip*Transition` blocks, an
  `engine` section, and `accounts` that also declare the precompiles.

Both builders are pure: the same `GenesisSpec` always yields the same document.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Final

from ethnode.types import (
    ZERO_HASH,
    EncodingError,
    MarshalError,
    UnsupportedConsensusError,
    hex_to_int,
    to_hex,
)

from .accounts import genesis_accounts
from .extradata import encode_clique, encode_ibft2
from .spec import GenesisSpec

GenesisDocument = dict[str, Any]
"""A genesis document ready to be rendered as JSON."""

DEFAULT_EXTRA_DATA: Final = "0x00"

IBFT2_MIX_HASH: Final = "0x63746963616c2062797a616e74696e65206661756c7420746f6c6572616e6365"
"""The IBFT 2.0 block identifier ("ctical byzantine fault tolerance")."""

IBFT2_NONCE: Final = "0x0"
IBFT2_DIFFICULTY: Final = "0x1"

GENESIS_BASE_FEE: Final = "0x3B9ACA00"
"""1 gwei: the EIP-1559 initial base fee, required when London is active at genesis."""

FORK_BLOCK_KEYS: Final = {
    "homestead": "homesteadBlock",
    "eip150": "eip150Block",
    "eip155": "eip155Block",
    "eip158": "eip158Block",
    "byzantium": "byzantiumBlock",
    "constantinople": "constantinopleBlock",
    "petersburg": "petersburgBlock",
    "istanbul": "istanbulBlock",
    "muir_glacier": "muirGlacierBlock",
    "berlin": "berlinBlock",
    "london": "londonBlock",
    "arrow_glacier": "arrowGlacierBlock",
}
"""Geth-style `config` key for each scheduled fork."""

logger = logging.getLogger(__name__)


def render_document(document: GenesisDocument) -> str:
    """
    Serialize a genesis document as compact JSON with sorted keys.

    Sorting makes the output byte-stable, so every node of a network receives
    an identical file.

    Raises:
        MarshalError: If the document holds a value JSON cannot represent.
    """
    try:
        return json.dumps(document, sort_keys=True, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise MarshalError(str(e)) from e


@dataclass(frozen=True, slots=True)
class GenesisDialect:
    """Key names and optional features that differ between Geth-style clients."""

    name: str
    clique_period_key: str
    clique_epoch_key: str
    ibft2_message_limits: bool
    """Whether IBFT 2.0 message queue and buffering limits are accepted."""
    ethash_fixed_difficulty: bool
    """Whether a fixed ethash difficulty can be configured."""
    dao_fork_support: bool
    """Whether `daoForkSupport` must accompany `daoForkBlock`."""


BESU: Final = GenesisDialect(
    name="besu",
    clique_period_key="blockperiodseconds",
    clique_epoch_key="epochlength",
    ibft2_message_limits=True,
    ethash_fixed_difficulty=True,
    dao_fork_support=False,
)

GETH: Final = GenesisDialect(
    name="geth",
    clique_period_key="period",
    clique_epoch_key="epoch",
    ibft2_message_limits=False,
    ethash_fixed_difficulty=False,
    dao_fork_support=True,
)


class GethStyleGenesisBuilder:
    """Builds Besu and Geth genesis files, parameterized by dialect."""

    def __init__(self, dialect: GenesisDialect) -> None:
        self.dialect = dialect

    def build(self, spec: GenesisSpec) -> GenesisDocument:
        """
        Assemble the genesis document.

        Raises:
            EncodingError: If a signer or validator address is malformed.
        """
        logger.debug("Building %s genesis for chain %d", self.dialect.name, spec.chain_id)

        mix_hash = spec.mix_hash
        nonce = spec.nonce
        difficulty = spec.difficulty
        extra_data = DEFAULT_EXTRA_DATA

        if spec.clique is not None:
            extra_data = encode_clique(spec.clique.signers)
        elif spec.ibft2 is not None:
            mix_hash = IBFT2_MIX_HASH
            nonce = IBFT2_NONCE
            difficulty = IBFT2_DIFFICULTY
            extra_data = encode_ibft2(spec.ibft2.validators)

        config: dict[str, Any] = {"chainId": spec.chain_id}
        for fork, block in spec.forks.milestones():
            config[FORK_BLOCK_KEYS[fork]] = block
        if spec.forks.dao is not None:
            config["daoForkBlock"] = spec.forks.dao
            if self.dialect.dao_fork_support:
                config["daoForkSupport"] = True
        config[spec.engine] = self._engine_config(spec)

        document: GenesisDocument = {
            "config": config,
            "nonce": nonce,
            "timestamp": spec.timestamp,
            "gasLimit": spec.gas_limit,
            "difficulty": difficulty,
            "coinbase": spec.coinbase,
            "mixHash": mix_hash,
            "extraData": extra_data,
            "alloc": genesis_accounts(spec.forks, spec.accounts, with_builtins=False),
        }
        if spec.forks.london_at_genesis:
            document["baseFeePerGas"] = GENESIS_BASE_FEE
        return document

    def _engine_config(self, spec: GenesisSpec) -> dict[str, int]:
        dialect = self.dialect
        if spec.clique is not None:
            return {
                dialect.clique_period_key: spec.clique.block_period,
                dialect.clique_epoch_key: spec.clique.epoch_length,
            }
        if spec.ibft2 is not None:
            ibft2 = spec.ibft2
            config = {
                "blockperiodseconds": ibft2.block_period,
                "epochlength": ibft2.epoch_length,
                "requesttimeoutseconds": ibft2.request_timeout,
            }
            if dialect.ibft2_message_limits:
                config |= {
                    "messageQueueLimit": ibft2.message_queue_limit,
                    "duplicateMessageLimit": ibft2.duplicate_message_limit,
                    "futureMessagesLimit": ibft2.future_messages_limit,
                    "futureMessagesMaxDistance": ibft2.future_messages_max_distance,
                }
            return config

        # Ethash.
        assert spec.ethash is not None
        if dialect.ethash_fixed_difficulty and spec.ethash.fixed_difficulty is not None:
            return {"fixeddifficulty": spec.ethash.fixed_difficulty}
        return {}


class ChainspecGenesisBuilder:
    """
    Builds OpenEthereum / Nethermind chainspec files.

    Supports the ethash and clique engines. IBFT 2.0 has no chainspec
    representation; networks using it are rejected before reaching here.
    """

    name: Final = "chainspec"

    def build(self, spec: GenesisSpec) -> GenesisDocument:
        """
        Assemble the chainspec document.

        Raises:
            EncodingError: If a signer address or the nonce is malformed.
            UnsupportedConsensusError: If the network uses IBFT 2.0.
        """
        logger.debug("Building chainspec genesis for chain %d", spec.chain_id)

        extra_data = DEFAULT_EXTRA_DATA
        if spec.clique is not None:
            extra_data = encode_clique(spec.clique.signers)
            engine: dict[str, Any] = {
                "clique": {
                    "params": {
                        "period": spec.clique.block_period,
                        "epoch": spec.clique.epoch_length,
                    }
                }
            }
        elif spec.ethash is not None:
            engine = {"Ethash": {"params": self._ethash_params(spec)}}
        else:
            raise UnsupportedConsensusError(spec.engine, self.name)

        header: dict[str, Any] = {
            "seal": {
                "ethereum": {
                    "nonce": normalize_nonce(spec.nonce),
                    "mixHash": spec.mix_hash,
                }
            },
            "parentHash": ZERO_HASH,
            "timestamp": spec.timestamp,
            "gasLimit": spec.gas_limit,
            "difficulty": spec.difficulty,
            "author": spec.coinbase,
            "extraData": extra_data,
        }
        # OpenEthereum requires the initial base fee on the header itself
        # when EIP-1559 is active from the first block.
        if spec.forks.london_at_genesis:
            header["baseFeePerGas"] = GENESIS_BASE_FEE

        return {
            "name": "network",
            "genesis": header,
            "params": self._params(spec),
            "engine": engine,
            "accounts": genesis_accounts(spec.forks, spec.accounts, with_builtins=True),
        }

    def _ethash_params(self, spec: GenesisSpec) -> dict[str, Any]:
        forks = spec.forks
        params: dict[str, Any] = {
            "minimumDifficulty": "0x020000",
            "difficultyBoundDivisor": "0x0800",
            "durationLimit": "0x0d",
            "blockReward": {
                to_hex(forks.eip150): "0x4563918244f40000",
                to_hex(forks.byzantium): "0x29a2241af62c0000",
                to_hex(forks.constantinople): "0x1bc16d674ec80000",
            },
            "homesteadTransition": to_hex(forks.homestead),
            "eip100bTransition": to_hex(forks.byzantium),
            "difficultyBombDelays": {
                to_hex(forks.byzantium): "0x2dc6c0",
                to_hex(forks.constantinople): "0x1e8480",
                to_hex(forks.muir_glacier): "0x3d0900",
                to_hex(forks.london): "0xaae60",
                to_hex(forks.arrow_glacier): "0xf4240",
            },
        }
        if forks.dao is not None:
            params["daoHardforkTransition"] = to_hex(forks.dao)
        return params

    def _params(self, spec: GenesisSpec) -> dict[str, Any]:
        forks = spec.forks
        tangerine_whistle = to_hex(forks.eip150)
        spurious_dragon = to_hex(forks.eip155)
        byzantium = to_hex(forks.byzantium)
        constantinople = to_hex(forks.constantinople)
        istanbul = to_hex(forks.istanbul)
        berlin = to_hex(forks.berlin)
        london = to_hex(forks.london)

        return {
            "chainID": to_hex(spec.chain_id),
            "networkID": to_hex(spec.network_id),
            "accountStartNonce": "0x00",
            "gasLimitBoundDivisor": "0x0400",
            "maximumExtraDataSize": "0xffff",
            "minGasLimit": "0x1388",
            # Tangerine Whistle
            "eip150Transition": tangerine_whistle,
            # Spurious Dragon
            "eip155Transition": spurious_dragon,
            "eip160Transition": spurious_dragon,
            "eip161abcTransition": spurious_dragon,
            "eip161dTransition": spurious_dragon,
            "maxCodeSizeTransition": spurious_dragon,
            "maxCodeSize": "0x6000",
            # Byzantium
            "eip140Transition": byzantium,
            "eip211Transition": byzantium,
            "eip214Transition": byzantium,
            "eip658Transition": byzantium,
            # Constantinople
            "eip145Transition": constantinople,
            "eip1014Transition": constantinople,
            "eip1052Transition": constantinople,
            "eip1283Transition": constantinople,
            # Petersburg
            "eip1283DisableTransition": to_hex(forks.petersburg),
            # Istanbul
            "eip1283ReenableTransition": istanbul,
            "eip1344Transition": istanbul,
            "eip1706Transition": istanbul,
            "eip1884Transition": istanbul,
            "eip2028Transition": istanbul,
            # Berlin
            "eip2315Transition": berlin,
            "eip2929Transition": berlin,
            "eip2930Transition": berlin,
            # London
            "eip1559Transition": london,
            "eip3198Transition": london,
            "eip3541Transition": london,
            "eip3529Transition": london,
            "eip1559BaseFeeMaxChangeDenominator": "0x8",
            "eip1559ElasticityMultiplier": "0x2",
            "eip1559BaseFeeInitialValue": GENESIS_BASE_FEE,
        }


def normalize_nonce(nonce: str) -> str:
    """
    Widen a hex nonce to the 8-byte (16 hex digit) seal field.

    Raises:
        EncodingError: If the nonce is not hex or exceeds 8 bytes.
    """
    value = hex_to_int(nonce)
    if value >= 1 << 64:
        raise EncodingError(nonce, "nonce exceeds 8 bytes")
    return f"0x{value:016x}"
