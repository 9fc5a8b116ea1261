"""Host platform detection.

Reports the operating system and CPU architecture using the same tokens
as the buildx release tooling expects on input: os in {linux, darwin,
win32, ...} and arch in {x64, arm64, arm, ppc64, s390x, riscv64, ia32, ...}.
"""

from __future__ import annotations

import platform
import re
import sys
from dataclasses import dataclass
from typing import Optional, Tuple

# platform.machine() values mapped to architecture tokens
_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "ppc64le": "ppc64",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "mips64": "mips64",
    "loong64": "loong64",
    "loongarch64": "loong64",
}

_ARM_MACHINE = re.compile(r"^armv?(\d+)?", re.IGNORECASE)


@dataclass(frozen=True)
class PlatformInfo:
    """Operating system and architecture of the host."""

    os: str
    arch: str
    arm_variant: Optional[int] = None


def normalize_os(value: str) -> str:
    """Map a sys.platform value to an OS token."""
    if value.startswith("win") or value == "cygwin":
        return "win32"
    if value.startswith("linux"):
        return "linux"
    if value.startswith("freebsd"):
        return "freebsd"
    return value


def normalize_arch(machine: str) -> Tuple[str, Optional[int]]:
    """Map a platform.machine() value to an (arch, arm_variant) pair."""
    key = machine.lower()
    if key in _ARCH_ALIASES:
        return _ARCH_ALIASES[key], None

    match = _ARM_MACHINE.match(key)
    if match:
        variant = int(match.group(1)) if match.group(1) else None
        return "arm", variant

    return key, None


def get_platform_info() -> PlatformInfo:
    """Detect the current platform."""
    arch, variant = normalize_arch(platform.machine())
    return PlatformInfo(os=normalize_os(sys.platform), arch=arch, arm_variant=variant)
