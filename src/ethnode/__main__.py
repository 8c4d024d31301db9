"""
Execution client provisioning CLI entry point.

Render the artifacts an execution client needs to boot from a YAML manifest
describing one node and the network it joins.

Usage::

    python -m ethnode args node.yaml
    python -m ethnode genesis node.yaml
    python -m ethnode static-nodes node.yaml
    python -m ethnode image node.yaml
    python -m ethnode validate node.yaml

Commands:
    args          Print the client's command-line arguments, one per line
    genesis       Print the client's genesis file (private networks only)
    static-nodes  Print the client's static nodes file
    image         Print the container image, honoring *_IMAGE overrides
    validate      Check the genesis and the node, and list every problem

Exit status is 1 when an artifact cannot be produced, and 2 when the manifest
or its genesis is invalid.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

import yaml
from pydantic import ValidationError

from ethnode.config import Manifest, resolve_images
from ethnode.subspecs.clients import ClientAdapter, new_adapter
from ethnode.subspecs.genesis import validate_network
from ethnode.subspecs.node import validate_node
from ethnode.types import ProvisioningError

EXIT_OK = 0
EXIT_PROVISIONING_ERROR = 1
EXIT_INVALID = 2

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Send log records to stderr, keeping stdout for the rendered artifact."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def render_args(adapter: ClientAdapter, manifest: Manifest) -> str:
    return "\n".join(adapter.args(manifest.node, manifest.network))


def render_genesis(adapter: ClientAdapter, manifest: Manifest) -> str:
    genesis = manifest.network.genesis
    if genesis is None:
        raise ProvisioningError(
            f"network {manifest.network.network} is public and has no genesis to render"
        )
    return adapter.genesis(genesis)


def render_static_nodes(adapter: ClientAdapter, manifest: Manifest) -> str:
    return adapter.encode_static_nodes(manifest.node.static_nodes)


def render_image(adapter: ClientAdapter, manifest: Manifest) -> str:
    return adapter.image(manifest.node)


RENDERERS: dict[str, Callable[[ClientAdapter, Manifest], str]] = {
    "args": render_args,
    "genesis": render_genesis,
    "static-nodes": render_static_nodes,
    "image": render_image,
}


def validate(manifest: Manifest) -> int:
    """Report every genesis and node problem; the exit status tells whether any were found."""
    issues = [
        *validate_network(manifest.network),
        *validate_node(manifest.node, manifest.network),
    ]
    for issue in issues:
        print(issue)
    if issues:
        logger.error("Found %d invalid field(s)", len(issues))
        return EXIT_INVALID
    logger.info("Network is valid")
    return EXIT_OK


def run(command: str, manifest_path: Path) -> int:
    """Execute one command against a manifest and return the exit status."""
    try:
        manifest = Manifest.from_yaml_file(manifest_path).with_images(resolve_images())
    except (OSError, yaml.YAMLError) as e:
        logger.error("Cannot read manifest %s: %s", manifest_path, e)
        return EXIT_INVALID
    except ValidationError as e:
        logger.error("Invalid manifest %s:\n%s", manifest_path, e)
        return EXIT_INVALID

    if command == "validate":
        return validate(manifest)

    try:
        adapter = new_adapter(manifest.node.client)
        print(RENDERERS[command](adapter, manifest))
    except ProvisioningError as e:
        logger.error("%s failed: %s", command, e.message)
        return EXIT_PROVISIONING_ERROR
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="ethnode",
        description="Execution client provisioning",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "command",
        choices=[*RENDERERS, "validate"],
        help="Artifact to render, or validate to check the manifest",
    )
    parser.add_argument(
        "manifest",
        type=Path,
        help="Path to the node manifest YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    return run(args.command, args.manifest)


if __name__ == "__main__":
    sys.exit(main())
