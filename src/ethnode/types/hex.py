"""
Hex-encoded scalar types.

Genesis documents and command lines carry every quantity as text. These
aliases pin the textual shapes accepted on input, and the helpers convert
between them and raw values.
"""

from __future__ import annotations

from typing import Annotated, Final

from pydantic import StringConstraints

from .exceptions import EncodingError

ADDRESS_LENGTH: Final = 20
"""Byte length of an Ethereum account address."""

HASH_LENGTH: Final = 32
"""Byte length of a KECCAK-256 hash."""

HexString = Annotated[str, StringConstraints(pattern=r"^0[xX][0-9a-fA-F]+$")]
"""Arbitrary-length hexadecimal quantity with a `0x` prefix."""

Hash = Annotated[str, StringConstraints(pattern=r"^0[xX][0-9a-fA-F]{64}$")]
"""32-byte hash with a `0x` prefix."""

Address = Annotated[str, StringConstraints(pattern=r"^0[xX][0-9a-fA-F]{40}$")]
"""20-byte account address with a `0x` prefix, any letter case."""

Enode = Annotated[str, StringConstraints(pattern=r"^enode://[0-9a-fA-F]{128}@[^:\s]+:\d+.*$")]
"""devp2p node URL: `enode://<public key>@<host>:<port>`."""

ZERO_ADDRESS: Final = "0x" + "00" * ADDRESS_LENGTH
ZERO_HASH: Final = "0x" + "00" * HASH_LENGTH


def to_hex(value: int) -> str:
    """Render a non-negative integer as a minimal `0x`-prefixed hex string."""
    return hex(value)


def address_of(index: int) -> str:
    """Render a small integer as a full-width 20-byte address."""
    return f"0x{index:0{ADDRESS_LENGTH * 2}x}"


def address_bytes(address: str) -> bytes:
    """
    Decode an address into its 20 raw bytes.

    Raises:
        EncodingError: If the text is not `0x` followed by 40 hex digits.
    """
    digits = address[2:] if address[:2] in ("0x", "0X") else address
    try:
        raw = bytes.fromhex(digits)
    except ValueError as e:
        raise EncodingError(address, f"invalid hex: {e}") from e
    if len(raw) != ADDRESS_LENGTH:
        raise EncodingError(address, f"expected {ADDRESS_LENGTH} bytes, got {len(raw)}")
    return raw


def hex_to_int(value: str) -> int:
    """
    Parse a `0x`-prefixed hex quantity.

    Raises:
        EncodingError: If the text is not hexadecimal.
    """
    try:
        return int(value, 16)
    except ValueError as e:
        raise EncodingError(value, "invalid hex quantity") from e
