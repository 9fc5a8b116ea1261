"""Inspect command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING, Optional

from setupbuildx.buildx.inspector import BuildxInspector
from setupbuildx.cli.commands import Command
from setupbuildx.cli.exit_codes import EXIT_SUCCESS
from setupbuildx.core.outputs import set_outputs

if TYPE_CHECKING:
    from setupbuildx.config.models import SetupBuildxConfig


class InspectCommand(Command):
    """Prints builder state and publishes it as step outputs."""

    def __init__(self, inspector: Optional[BuildxInspector] = None) -> None:
        self._inspector = inspector or BuildxInspector()

    @property
    def name(self) -> str:
        return "inspect"

    def execute(self, args: Namespace, config: "SetupBuildxConfig | None" = None) -> int:
        builder = self._inspector.inspect(args.name)
        outputs = builder.to_outputs()
        for key, value in outputs.items():
            print(f"{key}: {value or ''}")
        set_outputs(outputs)
        return EXIT_SUCCESS
