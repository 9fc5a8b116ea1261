"""Run-scoped resources owned by the caller."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import Optional

from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)

TMP_DIR_PREFIX = "docker-setup-buildx-"


class RunContext:
    """Holds the temporary directory for one setup run.

    The directory is created lazily on first access and removed on close().
    Use as a context manager to scope it to a block::

        with RunContext() as ctx:
            acquirer = Acquirer(..., context=ctx)
    """

    def __init__(self, base_dir: Optional[Path] = None, keep: bool = False) -> None:
        self._base_dir = base_dir
        self._keep = keep
        self._tmp_dir: Optional[Path] = None

    @property
    def tmp_dir(self) -> Path:
        """Temporary directory for downloads and extracted artifacts."""
        if self._tmp_dir is None:
            self._tmp_dir = Path(
                tempfile.mkdtemp(prefix=TMP_DIR_PREFIX, dir=self._base_dir)
            )
            LOGGER.debug(f"Created temp dir {self._tmp_dir}")
        return self._tmp_dir

    def new_tmp_subdir(self, name: str) -> Path:
        """Create a fresh subdirectory of the temp dir."""
        path = Path(tempfile.mkdtemp(prefix=f"{name}-", dir=self.tmp_dir))
        return path

    def close(self) -> None:
        """Remove the temporary directory unless keep was requested."""
        if self._tmp_dir is None:
            return
        if not self._keep:
            shutil.rmtree(self._tmp_dir, ignore_errors=True)
            LOGGER.debug(f"Removed temp dir {self._tmp_dir}")
        self._tmp_dir = None

    def __enter__(self) -> "RunContext":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
