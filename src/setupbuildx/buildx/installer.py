"""Installation of the buildx binary as a Docker CLI plugin."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Optional

from setupbuildx.bootstrap.platform import get_platform_info
from setupbuildx.buildx.naming import plugin_filename
from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)

PLUGINS_DIR_NAME = "cli-plugins"
PLUGIN_MODE = 0o755


class PluginInstaller:
    """Copies a cached binary into {docker_config_home}/cli-plugins."""

    def __init__(self, os_name: Optional[str] = None) -> None:
        self._os = os_name or get_platform_info().os

    @property
    def filename(self) -> str:
        return plugin_filename(self._os)

    def install(self, tool_path: Path, docker_config_home: Path) -> Path:
        """Install the plugin binary found in tool_path.

        Args:
            tool_path: Directory holding the plugin binary (a tool cache entry).
            docker_config_home: Docker config directory.

        Returns:
            Path of the installed plugin.

        Raises:
            OSError: Filesystem errors are propagated as raised.
        """
        plugins_dir = docker_config_home / PLUGINS_DIR_NAME
        LOGGER.debug(f"Plugins dir is {plugins_dir}")
        plugins_dir.mkdir(parents=True, exist_ok=True)

        plugin_path = plugins_dir / self.filename
        LOGGER.debug(f"Plugin path is {plugin_path}")
        shutil.copyfile(tool_path / self.filename, plugin_path)

        LOGGER.info("Fixing perms")
        os.chmod(plugin_path, PLUGIN_MODE)

        return plugin_path
