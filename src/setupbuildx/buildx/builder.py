"""Builder creation and bootstrap."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from setupbuildx.core.errors import ExternalToolError
from setupbuildx.core.logging import get_logger
from setupbuildx.core.subprocess_runner import ExecOutput, ProcessRunner, get_exec_output

LOGGER = get_logger(__name__)


@dataclass
class BuilderOptions:
    """Arguments for `docker buildx create`."""

    driver: str = "docker-container"
    driver_opts: List[str] = field(default_factory=list)
    buildkitd_flags: str = ""
    config: str = ""
    endpoint: str = ""
    use: bool = False
    name: str = ""


def generate_builder_name() -> str:
    return f"builder-{uuid.uuid4()}"


def create_args(options: BuilderOptions, name: str) -> List[str]:
    """Build the argument list for `docker buildx create`."""
    args = ["buildx", "create", "--name", name, "--driver", options.driver]
    for opt in options.driver_opts:
        args.extend(["--driver-opt", opt])
    if options.buildkitd_flags and options.driver != "docker":
        args.extend(["--buildkitd-flags", options.buildkitd_flags])
    if options.config:
        args.extend(["--config", options.config])
    if options.use:
        args.append("--use")
    if options.endpoint:
        args.append(options.endpoint)
    return args


class BuilderCreator:
    """Creates, bootstraps and aliases builders via the docker CLI."""

    def __init__(
        self,
        runner: ProcessRunner = get_exec_output,
        docker: str = "docker",
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._run = runner
        self._docker = docker
        self._env = env

    def _exec(self, args: List[str]) -> ExecOutput:
        res = self._run(self._docker, args, ignore_return_code=True, silent=True, env=self._env)
        if res.failed:
            raise ExternalToolError(res.stderr.strip())
        return res

    def create(self, options: BuilderOptions) -> str:
        """Create a builder and return its name."""
        name = options.name or generate_builder_name()
        LOGGER.info(f"Creating a new builder instance {name}")
        self._exec(create_args(options, name))
        return name

    def bootstrap(self, name: str) -> None:
        """Boot the builder so its nodes report their status."""
        LOGGER.info(f"Booting builder {name}")
        self._exec(["buildx", "inspect", "--bootstrap", name])

    def install_alias(self) -> None:
        """Make `docker build` an alias of `docker buildx build`."""
        LOGGER.info("Setting buildx as default builder")
        self._exec(["buildx", "install"])
