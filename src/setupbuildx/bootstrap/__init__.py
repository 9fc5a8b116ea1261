"""
Bootstrap module for setupbuildx binary management.

This module handles:
- Platform detection (OS + architecture)
- Home, tool cache and Docker config paths
- Downloading and caching tool binaries
- Binary validation utilities
"""

from setupbuildx.bootstrap.platform import get_platform_info, PlatformInfo
from setupbuildx.bootstrap.paths import (
    get_docker_config_home,
    get_setupbuildx_home,
    SetupBuildxPaths,
)
from setupbuildx.bootstrap.tool_cache import ToolCache, ToolCacheStore
from setupbuildx.bootstrap.validation import validate_binary, ToolStatus

__all__ = [
    "get_platform_info",
    "PlatformInfo",
    "get_docker_config_home",
    "get_setupbuildx_home",
    "SetupBuildxPaths",
    "ToolCache",
    "ToolCacheStore",
    "validate_binary",
    "ToolStatus",
]
