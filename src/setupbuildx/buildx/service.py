"""Wiring of resolver, acquirer and installer for one setup run."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from setupbuildx.bootstrap.paths import SetupBuildxPaths, get_docker_config_home
from setupbuildx.bootstrap.platform import PlatformInfo, get_platform_info
from setupbuildx.bootstrap.tool_cache import ToolCache, ToolCacheStore
from setupbuildx.buildx.acquirer import Acquirer
from setupbuildx.buildx.installer import PluginInstaller
from setupbuildx.buildx.resolver import VersionResolver
from setupbuildx.config.models import SetupBuildxConfig
from setupbuildx.core.context import RunContext
from setupbuildx.core.logging import get_logger
from setupbuildx.github import GitHubClient

LOGGER = get_logger(__name__)


def install_buildx(
    config: SetupBuildxConfig,
    context: RunContext,
    client: Optional[GitHubClient] = None,
    cache: Optional[ToolCacheStore] = None,
    platform: Optional[PlatformInfo] = None,
) -> Path:
    """Resolve config.version, acquire the binary and install the plugin.

    Returns:
        Path of the installed docker-buildx plugin.
    """
    platform = platform or get_platform_info()
    client = client or GitHubClient(token=config.github_token)
    cache = cache or ToolCache(SetupBuildxPaths.default().tool_cache_dir, arch=platform.arch)

    source = VersionResolver(client).resolve(config.version)
    LOGGER.info(f"Installing buildx from {source}")

    tool_path = Acquirer(client, cache, context, platform=platform).acquire(source)
    LOGGER.debug(f"Using buildx binary from {tool_path}")

    docker_config_home = get_docker_config_home(config.docker_config_home or None)
    return PluginInstaller(os_name=platform.os).install(tool_path, docker_config_home)
