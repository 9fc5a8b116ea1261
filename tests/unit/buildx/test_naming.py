"""Tests for release asset and plugin naming."""

from __future__ import annotations

import pytest

from setupbuildx.buildx.naming import (
    asset_filename,
    asset_suffix,
    plugin_filename,
    release_arch,
)


class TestAssetFilename:
    """Tests for asset_filename mapping table."""

    @pytest.mark.parametrize(
        "os_name,arch,variant,expected",
        [
            ("linux", "x64", None, "buildx-v0.11.2.linux-amd64"),
            ("linux", "arm64", None, "buildx-v0.11.2.linux-arm64"),
            ("linux", "ppc64", None, "buildx-v0.11.2.linux-ppc64le"),
            ("linux", "s390x", None, "buildx-v0.11.2.linux-s390x"),
            ("linux", "riscv64", None, "buildx-v0.11.2.linux-riscv64"),
            ("linux", "arm", 7, "buildx-v0.11.2.linux-arm-v7"),
            ("linux", "arm", 6, "buildx-v0.11.2.linux-arm-v6"),
            ("linux", "arm", None, "buildx-v0.11.2.linux-arm"),
            ("darwin", "x64", None, "buildx-v0.11.2.darwin-amd64"),
            ("darwin", "arm64", None, "buildx-v0.11.2.darwin-arm64"),
            ("win32", "x64", None, "buildx-v0.11.2.windows-amd64.exe"),
            ("win32", "arm64", None, "buildx-v0.11.2.windows-arm64.exe"),
            ("freebsd", "x64", None, "buildx-v0.11.2.freebsd-amd64"),
        ],
    )
    def test_mapping(self, os_name: str, arch: str, variant, expected: str) -> None:
        assert asset_filename("0.11.2", os_name, arch, variant) == expected

    def test_is_deterministic(self) -> None:
        first = asset_filename("0.12.0", "linux", "arm", 7)
        second = asset_filename("0.12.0", "linux", "arm", 7)
        assert first == second

    def test_unknown_arch_passes_through(self) -> None:
        assert release_arch("mips64") == "mips64"


class TestAssetSuffix:
    def test_linux_amd64(self) -> None:
        assert asset_suffix("linux", "x64") == ".linux-amd64"

    def test_windows(self) -> None:
        assert asset_suffix("win32", "x64") == ".windows-amd64.exe"


class TestPluginFilename:
    def test_linux(self) -> None:
        assert plugin_filename("linux") == "docker-buildx"

    def test_darwin(self) -> None:
        assert plugin_filename("darwin") == "docker-buildx"

    def test_windows(self) -> None:
        assert plugin_filename("win32") == "docker-buildx.exe"
