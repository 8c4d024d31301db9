"""
Fork schedule
=============

Execution-layer upgrades and the block at which a private network activates
each of them. The ordering below is the canonical activation order: a fork
may share a block with its predecessor but never precede it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterator

from pydantic import NonNegativeInt

from ethnode.types import StrictBaseModel

FORK_ORDER: Final = (
    "homestead",
    "eip150",
    "eip155",
    "eip158",
    "byzantium",
    "constantinople",
    "petersburg",
    "istanbul",
    "muir_glacier",
    "berlin",
    "london",
    "arrow_glacier",
)
"""Scheduled forks in activation order. The optional DAO fork is not ordered."""


@dataclass(frozen=True, slots=True)
class ForkOrderViolation:
    """A fork scheduled before the fork that must precede it."""

    fork: str
    block: int
    previous_fork: str
    previous_block: int

    def __str__(self) -> str:
        return (
            f"Fork {self.fork} can't be activated (at block {self.block}) "
            f"before fork {self.previous_fork} (at block {self.previous_block})"
        )


class ForkSchedule(StrictBaseModel):
    """Activation block of every supported fork. Unset forks activate at genesis."""

    homestead: NonNegativeInt = 0
    dao: NonNegativeInt | None = None
    """DAO hard fork; absent on networks that never ran it."""
    eip150: NonNegativeInt = 0
    """Tangerine Whistle."""
    eip155: NonNegativeInt = 0
    """Spurious Dragon (replay protection)."""
    eip158: NonNegativeInt = 0
    """Spurious Dragon (state trie clearing)."""
    byzantium: NonNegativeInt = 0
    constantinople: NonNegativeInt = 0
    petersburg: NonNegativeInt = 0
    istanbul: NonNegativeInt = 0
    muir_glacier: NonNegativeInt = 0
    berlin: NonNegativeInt = 0
    london: NonNegativeInt = 0
    arrow_glacier: NonNegativeInt = 0

    def milestones(self) -> Iterator[tuple[str, int]]:
        """Yield `(fork, block)` pairs in activation order."""
        for name in FORK_ORDER:
            yield name, getattr(self, name)

    def order_violations(self) -> list[ForkOrderViolation]:
        """
        Report every adjacent pair of forks scheduled out of order.

        All pairs are collected, not only the first, so a caller can surface
        the complete list of fields to fix in one pass.
        """
        milestones = list(self.milestones())
        return [
            ForkOrderViolation(fork, block, previous_fork, previous_block)
            for (previous_fork, previous_block), (fork, block) in zip(
                milestones, milestones[1:]
            )
            if block < previous_block
        ]

    @property
    def london_at_genesis(self) -> bool:
        """Whether EIP-1559 is live from block 0, requiring a genesis base fee."""
        return self.london == 0
