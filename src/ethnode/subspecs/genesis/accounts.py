"""Genesis allocation of the reserved low address space."""

from __future__ import annotations

from typing import Any, Final, Iterable

from ethnode.types import address_of

from .forks import ForkSchedule
from .precompiles import precompiles
from .spec import Account

RESERVED_ACCOUNTS: Final = 256
"""Addresses 0x00..0xff are reserved for (current and future) precompiles."""

RESERVED_BALANCE: Final = "0x1"
"""Non-zero balance keeping reserved accounts out of state-clearing (EIP-158)."""


def genesis_accounts(
    forks: ForkSchedule, accounts: Iterable[Account], *, with_builtins: bool
) -> dict[str, dict[str, Any]]:
    """
    Build the genesis allocation.

    Every reserved address is funded with `RESERVED_BALANCE`. Chainspec
    dialects also attach the `builtin` precompile descriptors. User accounts
    are merged on top, a later entry for the same address replacing an
    earlier one.
    """
    builtins = precompiles(forks) if with_builtins else {}

    alloc: dict[str, dict[str, Any]] = {}
    for index in range(RESERVED_ACCOUNTS):
        address = address_of(index)
        entry: dict[str, Any] = {"balance": RESERVED_BALANCE}
        if address in builtins:
            entry["builtin"] = builtins[address]
        alloc[address] = entry

    for account in accounts:
        alloc[account.address] = account.to_alloc()
    return alloc
