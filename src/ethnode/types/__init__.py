"""Reusable type definitions for node provisioning."""

from .base import CamelModel, StrictBaseModel
from .exceptions import (
    EncodingError,
    MarshalError,
    ProvisioningError,
    UnsupportedClientError,
    UnsupportedConsensusError,
)
from .hex import (
    ZERO_ADDRESS,
    ZERO_HASH,
    Address,
    Enode,
    Hash,
    HexString,
    address_bytes,
    address_of,
    hex_to_int,
    to_hex,
)

__all__ = [
    # Models
    "CamelModel",
    "StrictBaseModel",
    # Scalars
    "Address",
    "Enode",
    "Hash",
    "HexString",
    "ZERO_ADDRESS",
    "ZERO_HASH",
    "address_bytes",
    "address_of",
    "hex_to_int",
    "to_hex",
    # Exceptions
    "ProvisioningError",
    "UnsupportedClientError",
    "UnsupportedConsensusError",
    "EncodingError",
    "MarshalError",
]
