"""Tests for the chainspec precompile descriptors."""

from __future__ import annotations

from ethnode.subspecs.genesis import ForkSchedule, precompiles
from ethnode.types import address_of


def test_nine_precompiles_in_address_order() -> None:
    table = precompiles(ForkSchedule())
    assert list(table) == [address_of(index) for index in range(1, 10)]
    assert [d["name"] for d in table.values()] == [
        "ecrecover",
        "sha256",
        "ripemd160",
        "identity",
        "modexp",
        "alt_bn128_add",
        "alt_bn128_mul",
        "alt_bn128_pairing",
        "blake2_f",
    ]


def test_linear_pricing() -> None:
    table = precompiles(ForkSchedule())
    assert table[address_of(1)]["pricing"] == {"linear": {"base": 3000, "word": 0}}
    assert table[address_of(4)]["pricing"] == {"linear": {"base": 15, "word": 3}}


def test_alt_bn128_reprices_at_istanbul() -> None:
    forks = ForkSchedule(byzantium=4, constantinople=5, petersburg=5, istanbul=9,
                         muir_glacier=9, berlin=9, london=9, arrow_glacier=9)
    pricing = precompiles(forks)[address_of(6)]["pricing"]
    assert pricing == {
        "0x4": {"price": {"alt_bn128_const_operations": {"price": 500}}},
        "0x9": {
            "info": "EIP 1108 transition",
            "price": {"alt_bn128_const_operations": {"price": 150}},
        },
    }


def test_pairing_uses_pairing_price_key() -> None:
    pricing = precompiles(ForkSchedule())[address_of(8)]["pricing"]
    assert pricing["0x0"]["price"] == {"alt_bn128_pairing": {"base": 45000, "pair": 34000}}


def test_shared_block_keeps_later_fork_price() -> None:
    """Byzantium and Berlin at genesis: only the EIP-2565 modexp price remains."""
    pricing = precompiles(ForkSchedule())[address_of(5)]["pricing"]
    assert list(pricing) == ["0x0"]
    assert pricing["0x0"]["price"] == {"modexp2565": {}}


def test_modexp_before_berlin() -> None:
    forks = ForkSchedule(berlin=16, london=16, arrow_glacier=16)
    pricing = precompiles(forks)[address_of(5)]["pricing"]
    assert pricing["0x0"]["price"] == {"modexp": {"divisor": 20}}
    assert pricing["0x10"]["price"] == {"modexp2565": {}}


def test_blake2f_activates_at_istanbul() -> None:
    forks = ForkSchedule(istanbul=255, muir_glacier=255, berlin=255, london=255,
                         arrow_glacier=255)
    assert precompiles(forks)[address_of(9)]["activate_at"] == "0xff"


def test_descriptors_are_independent() -> None:
    """Mutating one result never leaks into the next."""
    first = precompiles(ForkSchedule())
    first[address_of(6)]["pricing"]["0x0"]["price"]["alt_bn128_const_operations"]["price"] = 1
    second = precompiles(ForkSchedule())
    price = second[address_of(6)]["pricing"]["0x0"]["price"]["alt_bn128_const_operations"]
    assert price == {"price": 150}
