"""Semantic version cleaning and validation."""

from __future__ import annotations

import re
from typing import Optional

_NUMERIC = r"0|[1-9]\d*"
_PRERELEASE_ID = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][a-zA-Z0-9-]*)"
_BUILD_ID = r"[0-9A-Za-z-]+"

SEMVER_PATTERN = re.compile(
    rf"^({_NUMERIC})\.({_NUMERIC})\.({_NUMERIC})"
    rf"(?:-({_PRERELEASE_ID}(?:\.{_PRERELEASE_ID})*))?"
    rf"(?:\+({_BUILD_ID}(?:\.{_BUILD_ID})*))?$"
)


def clean_version(value: str) -> Optional[str]:
    """Normalize a version string.

    Surrounding whitespace and leading "=" / "v" characters are removed and
    build metadata is dropped. Returns None if what remains is not a valid
    semantic version.

    Examples:
        >>> clean_version(" v0.11.2 ")
        '0.11.2'
        >>> clean_version("0.11") is None
        True
    """
    candidate = value.strip().lstrip("=v").strip()
    match = SEMVER_PATTERN.match(candidate)
    if not match:
        return None
    major, minor, patch, prerelease, _build = match.groups()
    version = f"{major}.{minor}.{patch}"
    if prerelease:
        version = f"{version}-{prerelease}"
    return version


def is_valid_version(value: Optional[str]) -> bool:
    """Check whether value is already a clean semantic version."""
    if not value:
        return False
    return SEMVER_PATTERN.match(value) is not None
