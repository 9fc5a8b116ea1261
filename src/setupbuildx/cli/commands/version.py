"""Version reporting commands."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING, Optional

from setupbuildx.buildx.inspector import BuildxInspector
from setupbuildx.cli.commands import Command
from setupbuildx.cli.exit_codes import EXIT_SUCCESS, EXIT_TOOL_ERROR

if TYPE_CHECKING:
    from setupbuildx.config.models import SetupBuildxConfig


class VersionCommand(Command):
    """Prints the installed buildx version."""

    def __init__(self, inspector: Optional[BuildxInspector] = None) -> None:
        self._inspector = inspector or BuildxInspector()

    @property
    def name(self) -> str:
        return "version"

    def execute(self, args: Namespace, config: "SetupBuildxConfig | None" = None) -> int:
        print(self._inspector.get_version())
        return EXIT_SUCCESS


class BuildKitVersionCommand(Command):
    """Prints the BuildKit version running in a builder container."""

    def __init__(self, inspector: Optional[BuildxInspector] = None) -> None:
        self._inspector = inspector or BuildxInspector()

    @property
    def name(self) -> str:
        return "buildkit-version"

    def execute(self, args: Namespace, config: "SetupBuildxConfig | None" = None) -> int:
        version = self._inspector.get_buildkit_version(args.container)
        if not version:
            return EXIT_TOOL_ERROR
        print(version)
        return EXIT_SUCCESS
