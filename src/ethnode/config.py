"""
Process-level configuration for node provisioning.

Container images may be overridden per client through the environment. The
environment is read only here, once, at start-up; the rest of the package
receives the chosen image through `NodeSpec.image`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Mapping

import yaml

from ethnode.subspecs.clients.besu import DEFAULT_BESU_IMAGE
from ethnode.subspecs.clients.geth import DEFAULT_GETH_IMAGE
from ethnode.subspecs.clients.nethermind import DEFAULT_NETHERMIND_IMAGE
from ethnode.subspecs.clients.parity import DEFAULT_PARITY_IMAGE
from ethnode.subspecs.node import ClientKind, NetworkConfig, NodeSpec
from ethnode.types import StrictBaseModel

IMAGE_ENV_VARS: Final = {
    ClientKind.BESU: "BESU_IMAGE",
    ClientKind.GETH: "GETH_IMAGE",
    ClientKind.NETHERMIND: "NETHERMIND_IMAGE",
    ClientKind.PARITY: "PARITY_IMAGE",
}
"""Environment variable overriding each client's container image."""


class ClientImages(StrictBaseModel):
    """Container image used for each client."""

    besu: str = DEFAULT_BESU_IMAGE
    geth: str = DEFAULT_GETH_IMAGE
    nethermind: str = DEFAULT_NETHERMIND_IMAGE
    parity: str = DEFAULT_PARITY_IMAGE

    def for_client(self, kind: ClientKind) -> str:
        return getattr(self, kind.value)


def resolve_images(environ: Mapping[str, str] | None = None) -> ClientImages:
    """
    Read image overrides from the environment.

    Unset or empty variables keep the client's default image.

    Args:
        environ: Variables to read; the process environment when omitted.
    """
    if environ is None:
        environ = os.environ
    overrides = {
        kind.value: image
        for kind, variable in IMAGE_ENV_VARS.items()
        if (image := environ.get(variable))
    }
    return ClientImages(**overrides)


class Manifest(StrictBaseModel):
    """A node together with the network it joins, as handed to the CLI."""

    network: NetworkConfig
    node: NodeSpec

    @classmethod
    def from_yaml_file(cls, path: Path) -> Manifest:
        """
        Load a manifest from a YAML file.

        Args:
            path: Path to the manifest.

        Returns:
            Validated Manifest instance.
        """
        with path.open() as f:
            return cls.model_validate(yaml.safe_load(f))

    def with_images(self, images: ClientImages) -> Manifest:
        """The manifest with the node's image filled in when it names none."""
        if self.node.image is not None:
            return self
        node = self.node.copy(image=images.for_client(self.node.client))
        return self.copy(node=node)
