"""Selects the adapter for a client kind."""

from __future__ import annotations

import logging
from typing import Final

from ethnode.subspecs.node import ClientKind
from ethnode.types import UnsupportedClientError

from .base import ClientAdapter
from .besu import BesuAdapter
from .geth import GethAdapter
from .nethermind import NethermindAdapter
from .parity import ParityAdapter

logger = logging.getLogger(__name__)

ADAPTERS: Final[dict[ClientKind, ClientAdapter]] = {
    adapter.kind: adapter
    for adapter in (BesuAdapter(), GethAdapter(), NethermindAdapter(), ParityAdapter())
}
"""One stateless adapter per supported client."""


def new_adapter(kind: ClientKind | str) -> ClientAdapter:
    """
    Return the adapter for a client kind.

    Args:
        kind: A `ClientKind`, or its string value as found in a manifest.

    Raises:
        UnsupportedClientError: If no adapter exists for the kind.
    """
    try:
        adapter = ADAPTERS[ClientKind(kind)]
    except (KeyError, ValueError):
        raise UnsupportedClientError(str(kind)) from None
    logger.debug("Selected %r for client %s", adapter, adapter.kind.value)
    return adapter
