"""Install command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING

from setupbuildx.bootstrap.validation import ToolStatus, validate_binary
from setupbuildx.buildx.service import install_buildx
from setupbuildx.cli.commands import Command
from setupbuildx.cli.exit_codes import EXIT_BOOTSTRAP_FAILURE, EXIT_INVALID_USAGE, EXIT_SUCCESS
from setupbuildx.core.context import RunContext
from setupbuildx.core.logging import get_logger
from setupbuildx.core.outputs import set_output

if TYPE_CHECKING:
    from setupbuildx.config.models import SetupBuildxConfig

LOGGER = get_logger(__name__)


class InstallCommand(Command):
    """Downloads buildx and installs it as a Docker CLI plugin."""

    @property
    def name(self) -> str:
        return "install"

    def execute(self, args: Namespace, config: "SetupBuildxConfig | None" = None) -> int:
        if config is None:
            LOGGER.error("Configuration is required for install command")
            return EXIT_INVALID_USAGE

        with RunContext() as context:
            plugin_path = install_buildx(config, context)

        status = validate_binary(plugin_path)
        if status != ToolStatus.PRESENT:
            LOGGER.error(f"Installed plugin {plugin_path} is {status.value}")
            return EXIT_BOOTSTRAP_FAILURE

        print(plugin_path)
        set_output("plugin-path", str(plugin_path))
        return EXIT_SUCCESS
