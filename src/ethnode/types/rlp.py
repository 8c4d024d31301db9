"""
Recursive Length Prefix (RLP)
=============================

RLP is the canonical Ethereum serialization for nested byte strings.

Within this package it has one job: packing the IBFT 2.0 genesis `extraData`
field. Every node of an IBFT 2.0 network hashes the genesis block, so the
encoding below must be byte-for-byte canonical or the network forks at block 0.

Prefix ranges
-------------

+-------------+------------------------------------------------------+
| Prefix      | Meaning                                              |
+=============+======================================================+
| [0x00-0x7f] | Single byte encoded as itself                        |
+-------------+------------------------------------------------------+
| [0x80-0xb7] | String of 0-55 bytes, length = prefix - 0x80         |
+-------------+------------------------------------------------------+
| [0xb8-0xbf] | Longer string, prefix - 0xb7 = byte size of length   |
+-------------+------------------------------------------------------+
| [0xc0-0xf7] | List with 0-55 payload bytes, length = prefix - 0xc0 |
+-------------+------------------------------------------------------+
| [0xf8-0xff] | Longer list, prefix - 0xf7 = byte size of length     |
+-------------+------------------------------------------------------+

References:
----------
- Ethereum Yellow Paper, Appendix B
- https://ethereum.org/en/developers/docs/data-structures-and-encoding/rlp/
"""

from __future__ import annotations

from typing import TypeAlias

from .exceptions import EncodingError

RLPItem: TypeAlias = bytes | list["RLPItem"]
"""A byte string or a (possibly nested) list of byte strings."""

SINGLE_BYTE_MAX = 0x7F
"""Largest byte value that encodes as itself."""

STRING_OFFSET = 0x80
"""Offset added to the length of a short string."""

LIST_OFFSET = 0xC0
"""Offset added to the payload length of a short list."""

SHORT_PAYLOAD_MAX = 55
"""Largest payload that fits the single-prefix-byte form."""

LONG_FORM_GAP = SHORT_PAYLOAD_MAX
"""Distance between a short-form offset and its long-form base (0xb7, 0xf7)."""


def encode_rlp(item: RLPItem) -> bytes:
    """
    Encode a byte string or nested list.

    Raises:
        EncodingError: If the item (or a nested element) is neither bytes nor list.
    """
    if isinstance(item, (bytes, bytearray)):
        data = bytes(item)
        if len(data) == 1 and data[0] <= SINGLE_BYTE_MAX:
            return data
        return _prefix(len(data), STRING_OFFSET) + data
    if isinstance(item, list):
        payload = b"".join(encode_rlp(element) for element in item)
        return _prefix(len(payload), LIST_OFFSET) + payload
    raise EncodingError(repr(item), f"cannot RLP encode {type(item).__name__}")


def _prefix(length: int, offset: int) -> bytes:
    """Build the length prefix for a payload of `length` bytes."""
    if length <= SHORT_PAYLOAD_MAX:
        return bytes([offset + length])

    # Long form: the length itself is written big-endian without leading zeros.
    length_bytes = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([offset + LONG_FORM_GAP + len(length_bytes)]) + length_bytes


def decode_rlp(data: bytes) -> RLPItem:
    """
    Decode a complete RLP value.

    Raises:
        EncodingError: If the data is empty, truncated, non-canonical or has
            trailing bytes.
    """
    if not data:
        raise EncodingError("0x", "empty RLP data")

    item, end = _decode_at(data, 0)
    if end != len(data):
        raise EncodingError(
            "0x" + data.hex(), f"trailing data: decoded {end} of {len(data)} bytes"
        )
    return item


def _decode_at(data: bytes, offset: int) -> tuple[RLPItem, int]:
    """Decode one item at `offset`, returning it with the offset just past it."""
    if offset >= len(data):
        raise EncodingError("0x" + data.hex(), "unexpected end of RLP data")

    prefix = data[offset]
    if prefix <= SINGLE_BYTE_MAX:
        return data[offset : offset + 1], offset + 1

    is_list = prefix >= LIST_OFFSET
    base = LIST_OFFSET if is_list else STRING_OFFSET
    start, length = _read_length(data, offset, prefix - base)
    end = start + length
    if end > len(data):
        raise EncodingError("0x" + data.hex(), f"need {end} bytes, have {len(data)}")

    if not is_list:
        if length == 1 and data[start] <= SINGLE_BYTE_MAX:
            raise EncodingError("0x" + data.hex(), "non-canonical single byte string")
        return data[start:end], end

    items: list[RLPItem] = []
    cursor = start
    while cursor < end:
        item, cursor = _decode_at(data, cursor)
        items.append(item)
    if cursor != end:
        raise EncodingError("0x" + data.hex(), "list payload length mismatch")
    return items, end


def _read_length(data: bytes, offset: int, code: int) -> tuple[int, int]:
    """
    Resolve the payload start and length for a prefix code.

    `code` is the prefix minus its short-form offset; values above 55 select
    the long form, where `code - 55` bytes of big-endian length follow.
    """
    if code <= SHORT_PAYLOAD_MAX:
        return offset + 1, code

    size = code - LONG_FORM_GAP
    start = offset + 1
    if start + size > len(data):
        raise EncodingError("0x" + data.hex(), "truncated length prefix")
    if data[start] == 0:
        raise EncodingError("0x" + data.hex(), "non-canonical: leading zeros in length")

    length = int.from_bytes(data[start : start + size], "big")
    if length <= SHORT_PAYLOAD_MAX:
        raise EncodingError("0x" + data.hex(), "non-canonical: long form for short payload")
    return start + size, length
