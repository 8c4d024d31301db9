"""Exception hierarchy for client provisioning."""

from __future__ import annotations


class ProvisioningError(Exception):
    """
    Base exception for every failure raised while provisioning a node.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class UnsupportedClientError(ProvisioningError):
    """
    Raised when no adapter exists for the requested client kind.

    Attributes:
        client: The client kind exactly as it was requested.
    """

    def __init__(self, client: str) -> None:
        self.client = client
        super().__init__(f"client {client} is not supported")


class EncodingError(ProvisioningError):
    """
    Raised when a value cannot be hex- or RLP-encoded.

    Attributes:
        value: The offending input, rendered as text.
        detail: What was wrong with it.
    """

    def __init__(self, value: str, detail: str) -> None:
        self.value = value
        self.detail = detail
        super().__init__(f"cannot encode {value!r}: {detail}")


class MarshalError(ProvisioningError):
    """
    Raised when a generated document cannot be serialized to JSON.

    Attributes:
        detail: The underlying serializer message.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"failed to marshal document: {detail}")


class UnsupportedConsensusError(ProvisioningError):
    """
    Raised when a genesis dialect cannot express the configured engine.

    Attributes:
        engine: The consensus engine configured on the genesis block.
        target: The genesis dialect that was asked to render it.
    """

    def __init__(self, engine: str, target: str) -> None:
        self.engine = engine
        self.target = target
        super().__init__(f"{engine} consensus is not supported by {target} genesis")
