"""Tests for the install command."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from unittest.mock import patch

import pytest

from setupbuildx.cli.commands.install import InstallCommand
from setupbuildx.cli.exit_codes import EXIT_BOOTSTRAP_FAILURE, EXIT_INVALID_USAGE, EXIT_SUCCESS
from setupbuildx.config.models import SetupBuildxConfig
from setupbuildx.core.errors import NotFoundError


class TestInstallCommand:
    def test_name(self) -> None:
        assert InstallCommand().name == "install"

    def test_requires_config(self) -> None:
        assert InstallCommand().execute(Namespace()) == EXIT_INVALID_USAGE

    def test_prints_plugin_path(self, tmp_path: Path, capsys) -> None:
        plugin = tmp_path / "docker-buildx"
        plugin.write_bytes(b"x")
        plugin.chmod(0o755)

        with patch("setupbuildx.cli.commands.install.install_buildx", return_value=plugin), \
                patch("setupbuildx.cli.commands.install.set_output") as mock_output:
            code = InstallCommand().execute(Namespace(), SetupBuildxConfig(version="v0.11.2"))

        assert code == EXIT_SUCCESS
        assert str(plugin) in capsys.readouterr().out
        mock_output.assert_called_once_with("plugin-path", str(plugin))

    def test_missing_plugin_fails(self, tmp_path: Path) -> None:
        with patch("setupbuildx.cli.commands.install.install_buildx", return_value=tmp_path / "nope"):
            code = InstallCommand().execute(Namespace(), SetupBuildxConfig())
        assert code == EXIT_BOOTSTRAP_FAILURE

    def test_errors_propagate(self) -> None:
        with patch("setupbuildx.cli.commands.install.install_buildx", side_effect=NotFoundError("no release")):
            with pytest.raises(NotFoundError, match="no release"):
                InstallCommand().execute(Namespace(), SetupBuildxConfig())
