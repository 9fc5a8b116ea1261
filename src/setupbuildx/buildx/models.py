"""Data models for buildx resolution and inspection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

TOOL_NAME = "buildx"

# ReleaseTag value routed to the "latest stable release" lookup
LATEST = "latest"


@dataclass(frozen=True)
class ReleaseTag:
    """A release tag or version to download from the release assets."""

    tag: str

    @property
    def is_latest(self) -> bool:
        return self.tag == LATEST


@dataclass(frozen=True)
class RunID:
    """A CI workflow run whose build artifact holds the binary."""

    run_id: int


ResolvedSource = Union[ReleaseTag, RunID]


@dataclass
class Release:
    """A published buildx release."""

    tag_name: str


@dataclass
class Builder:
    """Snapshot of `docker buildx inspect` output.

    Node fields hold the last node block seen; earlier nodes are overwritten.
    """

    name: Optional[str] = None
    driver: Optional[str] = None
    node_name: Optional[str] = None
    node_endpoint: Optional[str] = None
    node_status: Optional[str] = None
    node_flags: Optional[str] = None
    node_platforms: Optional[str] = None

    def to_outputs(self) -> Dict[str, Optional[str]]:
        """Map builder fields to step output names."""
        return {
            "name": self.name,
            "driver": self.driver,
            "endpoint": self.node_endpoint,
            "status": self.node_status,
            "flags": self.node_flags,
            "platforms": self.node_platforms,
        }
