"""
Precompiled contracts
=====================

OpenEthereum-style chainspecs must declare the nine standard precompiles as
`builtin` accounts together with their gas pricing. Besu and Geth compile the
same table into their binaries, so only the chainspec builder needs this.

Pricing that changes over time is keyed by the hex block at which each price
takes effect. When two of those forks share a block, the later fork's price
replaces the earlier one under the shared key.
"""

from __future__ import annotations

from typing import Any, Callable, Final

from ethnode.types import address_of, to_hex

from .forks import ForkSchedule

PrecompileDescriptor = dict[str, Any]
"""A chainspec `builtin` object: name, pricing and optional activation."""

EIP_1108_INFO: Final = "EIP 1108 transition"


def _linear(name: str, base: int, word: int) -> PrecompileDescriptor:
    return {"name": name, "pricing": {"linear": {"base": base, "word": word}}}


def _ecrecover(forks: ForkSchedule) -> PrecompileDescriptor:
    return _linear("ecrecover", 3000, 0)


def _sha256(forks: ForkSchedule) -> PrecompileDescriptor:
    return _linear("sha256", 60, 12)


def _ripemd160(forks: ForkSchedule) -> PrecompileDescriptor:
    return _linear("ripemd160", 600, 120)


def _identity(forks: ForkSchedule) -> PrecompileDescriptor:
    return _linear("identity", 15, 3)


def _modexp(forks: ForkSchedule) -> PrecompileDescriptor:
    pricing: dict[str, Any] = {}
    pricing[to_hex(forks.byzantium)] = {
        "info": "EIP-198: Big integer modular exponentiation.",
        "price": {"modexp": {"divisor": 20}},
    }
    pricing[to_hex(forks.berlin)] = {
        "info": "EIP-2565: ModExp Gas Cost.",
        "price": {"modexp2565": {}},
    }
    return {"name": "modexp", "pricing": pricing}


def _alt_bn128(
    name: str, before: dict[str, int], after: dict[str, int]
) -> Callable[[ForkSchedule], PrecompileDescriptor]:
    """Build an elliptic-curve precompile repriced by EIP-1108 at Istanbul."""
    price_key = "alt_bn128_pairing" if name == "alt_bn128_pairing" else "alt_bn128_const_operations"

    def descriptor(forks: ForkSchedule) -> PrecompileDescriptor:
        pricing: dict[str, Any] = {}
        pricing[to_hex(forks.byzantium)] = {"price": {price_key: dict(before)}}
        pricing[to_hex(forks.istanbul)] = {
            "info": EIP_1108_INFO,
            "price": {price_key: dict(after)},
        }
        return {"name": name, "pricing": pricing}

    return descriptor


def _blake2f(forks: ForkSchedule) -> PrecompileDescriptor:
    return {
        "name": "blake2_f",
        "activate_at": to_hex(forks.istanbul),
        "pricing": {"blake2_f": {"gas_per_round": 1}},
    }


PRECOMPILES: Final[dict[int, Callable[[ForkSchedule], PrecompileDescriptor]]] = {
    1: _ecrecover,
    2: _sha256,
    3: _ripemd160,
    4: _identity,
    5: _modexp,
    6: _alt_bn128("alt_bn128_add", {"price": 500}, {"price": 150}),
    7: _alt_bn128("alt_bn128_mul", {"price": 40000}, {"price": 6000}),
    8: _alt_bn128(
        "alt_bn128_pairing",
        {"base": 100000, "pair": 80000},
        {"base": 45000, "pair": 34000},
    ),
    9: _blake2f,
}
"""Precompile address index to descriptor factory."""


def precompiles(forks: ForkSchedule) -> dict[str, PrecompileDescriptor]:
    """
    Describe the standard precompiles for a fork schedule.

    Returns:
        Descriptors keyed by the 20-byte hex address, in address order.
    """
    return {address_of(index): factory(forks) for index, factory in PRECOMPILES.items()}
