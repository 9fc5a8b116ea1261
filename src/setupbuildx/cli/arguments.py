"""Argument parser for the setupbuildx CLI."""

from __future__ import annotations

import argparse
from pathlib import Path


def _add_config_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--version",
        dest="buildx_version",
        default=None,
        help="Buildx version: empty for latest, a release tag, pr-<number> or a workflow run id.",
    )
    parser.add_argument(
        "--github-token",
        default=None,
        help="Token used to download pull request and workflow run artifacts.",
    )
    parser.add_argument(
        "--docker-config",
        dest="docker_config_home",
        default=None,
        help="Docker config directory (default: $DOCKER_CONFIG or ~/.docker).",
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        metavar="PATH",
        type=Path,
        help="Path to config file (default: .setup-buildx.yml in project root).",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path("."),
        help="Directory searched for .setup-buildx.yml (default: current directory).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="setup-buildx",
        description="setup-buildx - Install and inspect the Docker Buildx CLI plugin.",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show setupbuildx version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )

    subparsers = parser.add_subparsers(dest="command")

    setup = subparsers.add_parser(
        "setup",
        help="Install buildx if needed, create and bootstrap a builder, publish its state.",
    )
    _add_config_options(setup)
    setup.add_argument("--driver", default=None, help="Builder driver (default: docker-container).")
    setup.add_argument(
        "--driver-opt",
        dest="driver_opts",
        action="append",
        default=None,
        metavar="OPT",
        help="Driver-specific option (can be specified multiple times).",
    )
    setup.add_argument("--buildkitd-flags", default=None, help="Flags for buildkitd.")
    setup.add_argument("--endpoint", default=None, help="Docker context or endpoint for the builder node.")
    setup.add_argument("--buildkitd-config", dest="buildkitd_config", default=None, help="BuildKit config file.")
    setup.add_argument(
        "--install",
        dest="install",
        action="store_const",
        const=True,
        default=None,
        help="Make `docker build` an alias of `docker buildx build`.",
    )
    setup.add_argument(
        "--no-use",
        dest="use",
        action="store_const",
        const=False,
        default=None,
        help="Do not switch to the created builder.",
    )

    install = subparsers.add_parser("install", help="Download and install the buildx plugin.")
    _add_config_options(install)

    inspect = subparsers.add_parser("inspect", help="Inspect a builder and publish its state.")
    inspect.add_argument("name", help="Builder name.")

    subparsers.add_parser("version", help="Print the installed buildx version.")

    buildkit = subparsers.add_parser("buildkit-version", help="Print the BuildKit version of a builder container.")
    buildkit.add_argument("container", help="BuildKit container id or name.")

    return parser
