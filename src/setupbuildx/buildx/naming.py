"""Release asset and plugin file naming per platform."""

from __future__ import annotations

from typing import Optional

from setupbuildx.buildx.models import TOOL_NAME

PLUGIN_NAME = "docker-buildx"

_ARCH_NAMES = {
    "x64": "amd64",
    "ppc64": "ppc64le",
}


def release_arch(arch: str, arm_variant: Optional[int] = None) -> str:
    """Map an architecture token to the buildx release naming."""
    if arch == "arm":
        return f"arm-v{arm_variant}" if arm_variant else "arm"
    return _ARCH_NAMES.get(arch, arch)


def release_platform(os_name: str) -> str:
    """Map an OS token to the buildx release naming."""
    return "windows" if os_name == "win32" else os_name


def binary_extension(os_name: str) -> str:
    return ".exe" if os_name == "win32" else ""


def asset_filename(
    version: str,
    os_name: str,
    arch: str,
    arm_variant: Optional[int] = None,
) -> str:
    """Build the release asset filename for a platform.

    Examples:
        >>> asset_filename("0.11.2", "linux", "x64")
        'buildx-v0.11.2.linux-amd64'
        >>> asset_filename("0.11.2", "win32", "arm64")
        'buildx-v0.11.2.windows-arm64.exe'
    """
    platform = release_platform(os_name)
    return (
        f"{TOOL_NAME}-v{version}.{platform}-"
        f"{release_arch(arch, arm_variant)}{binary_extension(os_name)}"
    )


def asset_suffix(os_name: str, arch: str, arm_variant: Optional[int] = None) -> str:
    """Platform part of an asset filename, e.g. ".linux-amd64"."""
    return f".{release_platform(os_name)}-{release_arch(arch, arm_variant)}{binary_extension(os_name)}"


def plugin_filename(os_name: str) -> str:
    """Name of the CLI plugin binary inside cli-plugins/."""
    return f"{PLUGIN_NAME}{binary_extension(os_name)}"
