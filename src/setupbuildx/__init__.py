"""setupbuildx - resolve, install and inspect the Docker Buildx CLI plugin."""

from __future__ import annotations

__version__ = "0.1.0"
