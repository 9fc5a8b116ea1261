"""Introspection of the buildx plugin and its builders.

Runs docker/buildx commands through an injectable process runner and
parses their textual output.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Mapping, Optional

from setupbuildx.buildx.models import Builder
from setupbuildx.buildx.versioning import clean_version
from setupbuildx.core.errors import ExternalToolError, ParseError
from setupbuildx.core.logging import get_logger
from setupbuildx.core.subprocess_runner import ExecOutput, ProcessRunner, get_exec_output

LOGGER = get_logger(__name__)

VERSION_PATTERN = re.compile(r"(?:^|\s)v?(\d+(?:\.\d+)*)")


def parse_version(output: str) -> str:
    """Extract the cleaned buildx version from `docker buildx version` output.

    Examples:
        >>> parse_version("github.com/docker/buildx v0.11.2 9872040")
        '0.11.2'

    Raises:
        ParseError: If no version token is found.
    """
    match = VERSION_PATTERN.search(output)
    cleaned = clean_version(match.group(1)) if match else None
    if not cleaned:
        raise ParseError("Cannot parse buildx version")
    return cleaned


class _ParserState(Enum):
    AWAITING_KEY = "awaiting_key"
    IN_BLOCK = "in_block"
    DONE = "done"


class InspectParser:
    """Line classifier for `docker buildx inspect` output.

    Blocks are separated by blank lines. The first Name: line names the
    builder, later ones name a node. The scan stops at the first
    Platforms: line, so only fields up to and including it are read and
    node fields reflect the last node block seen.
    """

    def __init__(self) -> None:
        self.state = _ParserState.AWAITING_KEY
        self.builder = Builder()

    def feed(self, line: str) -> None:
        if self.state is _ParserState.DONE:
            return

        if not line.strip():
            self.state = _ParserState.AWAITING_KEY
            return

        key, _, rest = line.partition(":")
        key = key.strip()
        value = ":".join(part.strip() for part in rest.split(":"))
        if not key or not value:
            return

        self.state = _ParserState.IN_BLOCK
        self._apply(key, value)

    def _apply(self, key: str, value: str) -> None:
        b = self.builder
        if key == "Name":
            if b.name is None:
                b.name = value
            else:
                b.node_name = value
        elif key == "Driver":
            b.driver = value
        elif key == "Endpoint":
            b.node_endpoint = value
        elif key == "Status":
            b.node_status = value
        elif key == "Flags":
            b.node_flags = value
        elif key == "Platforms":
            b.node_platforms = re.sub(r"\s", "", value)
            self.state = _ParserState.DONE

    @property
    def done(self) -> bool:
        return self.state is _ParserState.DONE


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse_inspect(output: str) -> Builder:
    """Parse `docker buildx inspect` output into a Builder."""
    parser = InspectParser()
    for line in normalize_newlines(output).strip().split("\n"):
        parser.feed(line)
        if parser.done:
            break
    return parser.builder


class BuildxInspector:
    """Queries the installed buildx plugin.

    env is layered over the process environment of every docker call, e.g.
    DOCKER_CONFIG when the plugin lives outside the default config home.
    """

    def __init__(
        self,
        runner: ProcessRunner = get_exec_output,
        docker: str = "docker",
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._run = runner
        self._docker = docker
        self._env = env

    def _exec(self, *args: str) -> ExecOutput:
        return self._run(self._docker, list(args), ignore_return_code=True, silent=True, env=self._env)

    def is_available(self) -> bool:
        """Whether the buildx subcommand exists.

        Only a non-zero exit together with stderr output counts as unavailable.
        """
        res = self._exec("buildx")
        return not res.failed

    def get_version(self) -> str:
        res = self._exec("buildx", "version")
        if res.failed:
            raise ExternalToolError(res.stderr.strip())
        return parse_version(res.stdout)

    def inspect(self, name: str) -> Builder:
        res = self._exec("buildx", "inspect", name)
        if res.failed:
            raise ExternalToolError(res.stderr.strip())
        return parse_inspect(res.stdout)

    def get_buildkit_version(self, container_id: str) -> str:
        """Report the BuildKit version running in a builder container.

        Failures are logged as warnings and the partial output returned.
        """
        image_res = self._exec("inspect", "--format", "{{.Config.Image}}", container_id)
        image = image_res.stdout.strip()
        if image_res.exit_code != 0 or not image_res.stdout:
            if image_res.stderr:
                LOGGER.warning(image_res.stderr.strip())
            return image

        version_res = self._exec("run", "--rm", image, "--version")
        version = version_res.stdout.strip()
        if version_res.exit_code == 0 and version_res.stdout:
            return f"{image} => {version}"
        if version_res.stderr:
            LOGGER.warning(version_res.stderr.strip())
        return version


def builder_container_name(builder: Builder) -> Optional[str]:
    """Name of the BuildKit container backing a docker-container builder node."""
    if builder.driver != "docker-container" or not builder.node_name:
        return None
    return f"buildx_buildkit_{builder.node_name}"
