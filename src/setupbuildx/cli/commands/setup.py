"""Setup command implementation.

Installs buildx when it is missing or a version was requested, then
creates and boots a builder and publishes its state as step outputs.
"""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING, Optional

from setupbuildx.bootstrap.paths import docker_config_env
from setupbuildx.buildx.builder import BuilderCreator, BuilderOptions
from setupbuildx.buildx.inspector import BuildxInspector, builder_container_name
from setupbuildx.buildx.service import install_buildx
from setupbuildx.cli.commands import Command
from setupbuildx.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from setupbuildx.core.context import RunContext
from setupbuildx.core.logging import get_logger
from setupbuildx.core.outputs import set_outputs

if TYPE_CHECKING:
    from setupbuildx.config.models import SetupBuildxConfig

LOGGER = get_logger(__name__)

# The docker driver always uses the builder of the current Docker context
DOCKER_DRIVER_BUILDER = "default"


class SetupCommand(Command):
    """Full setup: install, create, bootstrap, inspect."""

    def __init__(
        self,
        inspector: Optional[BuildxInspector] = None,
        creator: Optional[BuilderCreator] = None,
    ) -> None:
        self._inspector = inspector
        self._creator = creator

    @property
    def name(self) -> str:
        return "setup"

    def execute(self, args: Namespace, config: "SetupBuildxConfig | None" = None) -> int:
        if config is None:
            LOGGER.error("Configuration is required for setup command")
            return EXIT_INVALID_USAGE

        env = docker_config_env(config.docker_config_home)
        inspector = self._inspector or BuildxInspector(env=env)
        creator = self._creator or BuilderCreator(env=env)

        if not inspector.is_available() or config.version:
            with RunContext() as context:
                plugin_path = install_buildx(config, context)
            LOGGER.info(f"Buildx installed at {plugin_path}")

        buildx_version = inspector.get_version()
        print(f"Buildx version: {buildx_version}")

        builder_name = self._ensure_builder(creator, config)

        if config.install:
            creator.install_alias()

        builder = inspector.inspect(builder_name)
        set_outputs(builder.to_outputs())

        container = builder_container_name(builder)
        if container:
            buildkit_version = inspector.get_buildkit_version(container)
            if buildkit_version:
                print(f"BuildKit version: {buildkit_version}")

        return EXIT_SUCCESS

    def _ensure_builder(self, creator: BuilderCreator, config: "SetupBuildxConfig") -> str:
        if config.driver == "docker":
            return DOCKER_DRIVER_BUILDER

        name = creator.create(
            BuilderOptions(
                driver=config.driver,
                driver_opts=config.driver_opts,
                buildkitd_flags=config.buildkitd_flags,
                config=config.config,
                endpoint=config.endpoint,
                use=config.use,
            )
        )
        creator.bootstrap(name)
        return name
