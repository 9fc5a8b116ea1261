"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from setupbuildx.config.models import SetupBuildxConfig


class Command(ABC):
    """Base class for CLI commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier as used on the command line."""

    @abstractmethod
    def execute(self, args: Namespace, config: "SetupBuildxConfig | None" = None) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            config: Loaded configuration, for commands that need one.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# ruff: noqa: E402
from setupbuildx.cli.commands.install import InstallCommand
from setupbuildx.cli.commands.setup import SetupCommand
from setupbuildx.cli.commands.inspect import InspectCommand
from setupbuildx.cli.commands.version import BuildKitVersionCommand, VersionCommand

__all__ = [
    "Command",
    "InstallCommand",
    "SetupCommand",
    "InspectCommand",
    "VersionCommand",
    "BuildKitVersionCommand",
]
