"""
Genesis extraData codecs
========================

Proof-of-authority engines read their initial signer or validator set from the
genesis block's `extraData` field. The field is hashed into the genesis block,
so every node of a network must produce exactly the same bytes, including the
order of the addresses.

Clique
------

Fixed-layout concatenation::

    vanity (32 zero bytes) || signer_1 || ... || signer_n || seal (65 zero bytes)

IBFT 2.0
--------

RLP list::

    [vanity (32 zero bytes), [validator_1, ..., validator_n], vote (empty),
     round (4 zero bytes), committer seals (empty list)]
"""

from __future__ import annotations

import logging
from typing import Final, Sequence

from ethnode.types import EncodingError, address_bytes
from ethnode.types.hex import ADDRESS_LENGTH
from ethnode.types.rlp import decode_rlp, encode_rlp

VANITY_LENGTH: Final = 32
"""Leading bytes reserved for arbitrary signer vanity data."""

SEAL_LENGTH: Final = 65
"""Trailing bytes reserved for the block sealer's secp256k1 signature."""

ROUND_LENGTH: Final = 4
"""Width of the IBFT 2.0 round number."""

logger = logging.getLogger(__name__)


def encode_clique(signers: Sequence[str]) -> str:
    """
    Pack Clique signers into genesis extraData.

    Raises:
        EncodingError: If a signer is not a 20-byte hex address.
    """
    payload = b"".join(address_bytes(signer) for signer in signers)
    extra_data = bytes(VANITY_LENGTH) + payload + bytes(SEAL_LENGTH)
    logger.debug("Encoded clique extraData for %d signers", len(signers))
    return "0x" + extra_data.hex()


def decode_clique(extra_data: str) -> list[str]:
    """
    Recover the Clique signer list from genesis extraData.

    Raises:
        EncodingError: If the payload between vanity and seal is not a
            whole number of addresses.
    """
    raw = _from_hex(extra_data)
    signers = raw[VANITY_LENGTH : len(raw) - SEAL_LENGTH]
    if len(raw) < VANITY_LENGTH + SEAL_LENGTH or len(signers) % ADDRESS_LENGTH:
        raise EncodingError(extra_data, "not a clique extraData layout")
    return [
        "0x" + signers[i : i + ADDRESS_LENGTH].hex()
        for i in range(0, len(signers), ADDRESS_LENGTH)
    ]


def encode_ibft2(validators: Sequence[str]) -> str:
    """
    RLP-encode IBFT 2.0 validators into genesis extraData.

    Raises:
        EncodingError: If a validator is not a 20-byte hex address.
    """
    fields = [
        bytes(VANITY_LENGTH),
        [address_bytes(validator) for validator in validators],
        b"",
        bytes(ROUND_LENGTH),
        [],
    ]
    extra_data = encode_rlp(fields)
    logger.debug("Encoded ibft2 extraData for %d validators", len(validators))
    return "0x" + extra_data.hex()


def decode_ibft2(extra_data: str) -> list[str]:
    """
    Recover the IBFT 2.0 validator list from genesis extraData.

    Raises:
        EncodingError: If the data is not the five-field IBFT 2.0 RLP list.
    """
    item = decode_rlp(_from_hex(extra_data))
    if not isinstance(item, list) or len(item) != 5 or not isinstance(item[1], list):
        raise EncodingError(extra_data, "not an ibft2 extraData list")

    validators = []
    for validator in item[1]:
        if not isinstance(validator, bytes) or len(validator) != ADDRESS_LENGTH:
            raise EncodingError(extra_data, "malformed validator address")
        validators.append("0x" + validator.hex())
    return validators


def _from_hex(value: str) -> bytes:
    try:
        return bytes.fromhex(value.removeprefix("0x"))
    except ValueError as e:
        raise EncodingError(value, f"invalid hex: {e}") from e
