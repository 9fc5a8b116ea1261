"""Shared fixtures for unit tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from setupbuildx.bootstrap.platform import PlatformInfo
from setupbuildx.bootstrap.tool_cache import ToolCache
from setupbuildx.core.context import RunContext
from setupbuildx.core.subprocess_runner import ExecOutput


class FakeRunner:
    """Process runner returning canned results keyed by argument tuple."""

    def __init__(self, results: Optional[Dict[Tuple[str, ...], ExecOutput]] = None) -> None:
        self.results = results or {}
        self.calls: List[Tuple[str, ...]] = []
        self.envs: List[Optional[Dict[str, str]]] = []
        self.default = ExecOutput(stdout="", stderr="", exit_code=0)

    def __call__(self, command, args=None, ignore_return_code=False, silent=False, **kwargs) -> ExecOutput:
        key = tuple(args or [])
        self.calls.append((command, *key))
        self.envs.append(kwargs.get("env"))
        return self.results.get(key, self.default)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def linux_amd64() -> PlatformInfo:
    return PlatformInfo(os="linux", arch="x64")


@pytest.fixture
def tool_cache(tmp_path: Path) -> ToolCache:
    return ToolCache(tmp_path / "tool-cache", arch="x64")


@pytest.fixture
def run_context(tmp_path: Path):
    with RunContext(base_dir=tmp_path) as ctx:
        yield ctx


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove handlers installed by configure_logging."""
    yield
    root = logging.getLogger("setupbuildx")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
