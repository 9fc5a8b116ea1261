"""Acquisition of a buildx binary into the local tool cache."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional, Protocol

from setupbuildx.bootstrap.download import download_tool
from setupbuildx.bootstrap.platform import PlatformInfo, get_platform_info
from setupbuildx.bootstrap.tool_cache import ToolCacheStore
from setupbuildx.buildx.models import TOOL_NAME, Release, ReleaseTag, ResolvedSource, RunID
from setupbuildx.buildx.naming import asset_filename, asset_suffix, plugin_filename
from setupbuildx.buildx.versioning import clean_version, is_valid_version
from setupbuildx.core.context import RunContext
from setupbuildx.core.errors import NotFoundError, ValidationError
from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)

DOWNLOAD_URL_TEMPLATE = "https://github.com/docker/buildx/releases/download/v{version}/{filename}"


class ReleaseSource(Protocol):
    def get_release(self, tag: str) -> Optional[Release]: ...

    def download_artifact(self, run_id: int, dest_dir: Path) -> Path: ...


def strip_v(tag: str) -> str:
    """Strip leading and trailing "v" characters from a tag."""
    return tag.strip("v")


class Acquirer:
    """Obtains a local copy of the buildx binary for a resolved source.

    Returns the cache directory holding the plugin binary. A warm cache
    short-circuits all network access for concrete tags and run ids.
    """

    def __init__(
        self,
        releases: ReleaseSource,
        cache: ToolCacheStore,
        context: RunContext,
        platform: Optional[PlatformInfo] = None,
        downloader: Callable[[str, Path], Path] = download_tool,
    ) -> None:
        self._releases = releases
        self._cache = cache
        self._context = context
        self._platform = platform or get_platform_info()
        self._downloader = downloader
        self._resolved_releases: Dict[str, Release] = {}

    def acquire(self, source: ResolvedSource) -> Path:
        """Return a directory containing the plugin binary for source."""
        if isinstance(source, RunID):
            return self._acquire_run(source.run_id)
        if isinstance(source, ReleaseTag):
            return self._acquire_release(source)
        raise TypeError(f"Unsupported source: {source!r}")

    def _lookup_release(self, source: ReleaseTag) -> Release:
        if source.tag in self._resolved_releases:
            return self._resolved_releases[source.tag]

        release = self._releases.get_release(source.tag)
        if release is None:
            raise NotFoundError(f"Cannot find buildx {source.tag} release")
        LOGGER.debug(f"Release {release.tag_name} found")

        self._resolved_releases[source.tag] = release
        return release

    def _acquire_release(self, source: ReleaseTag) -> Path:
        if not source.is_latest:
            cached = self._cache.find(TOOL_NAME, strip_v(source.tag))
            if cached:
                return cached

        release = self._lookup_release(source)
        version = strip_v(release.tag_name)

        cached = self._cache.find(TOOL_NAME, version)
        if cached:
            return cached

        cleaned = clean_version(version) or ""
        if not is_valid_version(cleaned):
            raise ValidationError(f'Invalid Buildx version "{version}".')

        return self._download_release(version)

    def _download_release(self, version: str) -> Path:
        p = self._platform
        filename = asset_filename(version, p.os, p.arch, p.arm_variant)
        url = DOWNLOAD_URL_TEMPLATE.format(version=version, filename=filename)

        download_path = self._downloader(url, self._context.tmp_dir)
        return self._cache.cache_file(download_path, plugin_filename(p.os), TOOL_NAME, version)

    def _acquire_run(self, run_id: int) -> Path:
        version = str(run_id)
        cached = self._cache.find(TOOL_NAME, version)
        if cached:
            return cached

        extract_dir = self._releases.download_artifact(run_id, self._context.new_tmp_subdir("artifact"))
        binary = self._find_artifact_binary(extract_dir, run_id)
        return self._cache.cache_file(binary, plugin_filename(self._platform.os), TOOL_NAME, version)

    def _find_artifact_binary(self, extract_dir: Path, run_id: int) -> Path:
        """Locate the binary for this platform among the extracted artifact files."""
        p = self._platform
        suffix = asset_suffix(p.os, p.arch, p.arm_variant)
        candidates = sorted(f for f in extract_dir.rglob("*") if f.is_file() and f.name.endswith(suffix))
        if not candidates:
            raise NotFoundError(f"Cannot find a buildx binary matching *{suffix} in artifact of run {run_id}")
        LOGGER.debug(f"Using artifact file {candidates[0]}")
        return candidates[0]
