"""Key-addressed cache of downloaded tool binaries.

Entries live under {root}/{tool}/{version}/{arch}/ and are only visible
to find() once a "{arch}.complete" marker sits next to the directory.
Concurrent writers of the same key are last-writer-wins; readers never
see a partially written entry because the marker is written last.
"""

from __future__ import annotations

import os
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from setupbuildx.bootstrap.platform import get_platform_info
from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)


class ToolCacheStore(ABC):
    """Capability interface for the binary cache."""

    @abstractmethod
    def find(self, tool: str, version: str) -> Optional[Path]:
        """Return the cached directory for (tool, version), or None."""

    @abstractmethod
    def cache_file(self, source: Path, target_name: str, tool: str, version: str) -> Path:
        """Store source as target_name under (tool, version).

        Returns:
            Directory holding the cached file.
        """


class ToolCache(ToolCacheStore):
    """Filesystem tool cache."""

    def __init__(self, root: Path, arch: Optional[str] = None) -> None:
        self._root = root
        self._arch = arch or get_platform_info().arch

    @property
    def root(self) -> Path:
        return self._root

    def _entry_dir(self, tool: str, version: str) -> Path:
        return self._root / tool / version / self._arch

    def _marker(self, tool: str, version: str) -> Path:
        return self._root / tool / version / f"{self._arch}.complete"

    def find(self, tool: str, version: str) -> Optional[Path]:
        if not tool or not version:
            return None
        entry = self._entry_dir(tool, version)
        if entry.is_dir() and self._marker(tool, version).exists():
            LOGGER.debug(f"Found {tool} {version} in cache at {entry}")
            return entry
        LOGGER.debug(f"{tool} {version} not found in cache")
        return None

    def cache_file(self, source: Path, target_name: str, tool: str, version: str) -> Path:
        entry = self._entry_dir(tool, version)
        marker = self._marker(tool, version)

        marker.unlink(missing_ok=True)
        entry.mkdir(parents=True, exist_ok=True)

        dest = entry / target_name
        shutil.copyfile(source, dest)
        os.chmod(dest, 0o755)

        marker.write_text("", encoding="utf-8")
        LOGGER.debug(f"Cached {source} as {dest}")
        return entry
