"""Per-client command line, genesis and static node adapters."""

from .base import Arg, ArgContext, ClientAdapter
from .besu import BesuAdapter
from .factory import ADAPTERS, new_adapter
from .geth import GethAdapter
from .nethermind import NethermindAdapter
from .parity import ParityAdapter

__all__ = [
    "ADAPTERS",
    "Arg",
    "ArgContext",
    "BesuAdapter",
    "ClientAdapter",
    "GethAdapter",
    "NethermindAdapter",
    "ParityAdapter",
    "new_adapter",
]
