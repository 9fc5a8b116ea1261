"""Path management for setupbuildx.

Handles the ~/.setupbuildx directory structure (tool cache, config) and
the Docker config home where CLI plugins are installed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Dict, Optional

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".setupbuildx"

# Environment variable to override home directory
SETUPBUILDX_HOME_ENV = "SETUPBUILDX_HOME"

# GitHub Actions exposes a persistent tool cache location through this variable
RUNNER_TOOL_CACHE_ENV = "RUNNER_TOOL_CACHE"

DOCKER_CONFIG_ENV = "DOCKER_CONFIG"


def get_setupbuildx_home() -> Path:
    """Get the setupbuildx home directory path.

    Resolution order:
    1. SETUPBUILDX_HOME environment variable (if set)
    2. ~/.setupbuildx (default)
    """
    env_home = os.environ.get(SETUPBUILDX_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


def get_docker_config_home(override: Optional[str] = None) -> Path:
    """Get the Docker config directory holding cli-plugins/.

    Resolution order: explicit override, $DOCKER_CONFIG, ~/.docker.
    """
    if override:
        return Path(override)
    env_value = os.environ.get(DOCKER_CONFIG_ENV)
    if env_value:
        return Path(env_value)
    return Path.home() / ".docker"


def docker_config_env(override: Optional[str] = None) -> Dict[str, str]:
    """Environment pointing docker at an overridden config home.

    Empty when there is no override, so docker keeps resolving
    $DOCKER_CONFIG or ~/.docker itself.
    """
    if not override:
        return {}
    return {DOCKER_CONFIG_ENV: str(get_docker_config_home(override).absolute())}


@dataclass
class SetupBuildxPaths:
    """Manages paths within the setupbuildx home directory.

    Directory structure:
        ~/.setupbuildx/
            tool-cache/
                buildx/{version}/{arch}/docker-buildx
            config/
                config.yml
    """

    home: Path

    _TOOL_CACHE_DIR: ClassVar[str] = "tool-cache"
    _CONFIG_DIR: ClassVar[str] = "config"

    @classmethod
    def default(cls) -> "SetupBuildxPaths":
        """Create paths from the default setupbuildx home."""
        return cls(get_setupbuildx_home())

    @property
    def tool_cache_dir(self) -> Path:
        """Root of the binary tool cache.

        Uses $RUNNER_TOOL_CACHE when running on a GitHub runner.
        """
        runner_cache = os.environ.get(RUNNER_TOOL_CACHE_ENV)
        if runner_cache:
            return Path(runner_cache)
        return self.home / self._TOOL_CACHE_DIR

    @property
    def config_dir(self) -> Path:
        """Directory for configuration files."""
        return self.home / self._CONFIG_DIR
