"""Tests for CLI parsing and dispatch."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from unittest.mock import patch

import pytest

import setupbuildx.cli as cli
from setupbuildx.cli.exit_codes import (
    EXIT_BOOTSTRAP_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
    EXIT_TOOL_ERROR,
)
from setupbuildx.cli.runner import exit_code_for
from setupbuildx.config import ConfigError
from setupbuildx.core.errors import ExternalToolError, NotFoundError, ParseError, ValidationError
from setupbuildx.github import GitHubError


class TestBuildParser:
    def test_global_flags(self) -> None:
        parser = cli.build_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        for flag in ["--version", "--debug", "--verbose", "--quiet"]:
            assert any(a.option_strings and flag in a.option_strings for a in parser._actions)

    def test_install_options(self) -> None:
        args = cli.build_parser().parse_args(
            ["install", "--version", "v0.11.2", "--github-token", "t", "--docker-config", "/d"]
        )
        assert args.command == "install"
        assert args.buildx_version == "v0.11.2"
        assert args.github_token == "t"
        assert args.docker_config_home == "/d"

    def test_setup_options(self) -> None:
        args = cli.build_parser().parse_args(
            ["setup", "--driver", "docker", "--driver-opt", "a=1", "--driver-opt", "b=2", "--install", "--no-use"]
        )
        assert args.driver == "docker"
        assert args.driver_opts == ["a=1", "b=2"]
        assert args.install is True
        assert args.use is False

    def test_setup_flags_default_to_none(self) -> None:
        args = cli.build_parser().parse_args(["setup"])
        assert args.install is None
        assert args.use is None


class TestMainCommand:
    def test_help(self, capsys) -> None:
        assert cli.main(["--help"]) == EXIT_SUCCESS
        assert "usage:" in capsys.readouterr().out.lower()

    def test_version(self, capsys) -> None:
        assert cli.main(["--version"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip()

    def test_no_command(self) -> None:
        assert cli.main([]) == EXIT_INVALID_USAGE

    def test_bad_arguments(self) -> None:
        assert cli.main(["inspect"]) == EXIT_INVALID_USAGE

    def test_error_is_reported_verbatim(self, capsys) -> None:
        with patch(
            "setupbuildx.cli.commands.inspect.InspectCommand.execute",
            side_effect=ExternalToolError('ERROR: no builder "x" found'),
        ):
            assert cli.main(["inspect", "x"]) == EXIT_TOOL_ERROR
        assert 'ERROR: no builder "x" found' in capsys.readouterr().err

    def test_install_config_error(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"SETUPBUILDX_HOME": str(tmp_path)}):
            code = cli.main(["install", "--config", str(tmp_path / "missing.yml")])
        assert code == EXIT_INVALID_USAGE


class TestExitCodeFor:
    @pytest.mark.parametrize(
        "error,expected",
        [
            (ConfigError("x"), EXIT_INVALID_USAGE),
            (ValidationError("x"), EXIT_INVALID_USAGE),
            (NotFoundError("x"), EXIT_BOOTSTRAP_FAILURE),
            (GitHubError("x"), EXIT_BOOTSTRAP_FAILURE),
            (ExternalToolError("x"), EXIT_TOOL_ERROR),
            (ParseError("x"), EXIT_TOOL_ERROR),
            (PermissionError("x"), EXIT_BOOTSTRAP_FAILURE),
        ],
    )
    def test_mapping(self, error: Exception, expected: int) -> None:
        assert exit_code_for(error) == expected
