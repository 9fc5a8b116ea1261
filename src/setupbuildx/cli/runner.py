"""CLI runner: argument parsing, logging setup and command dispatch."""

from __future__ import annotations

from argparse import Namespace
from importlib.metadata import PackageNotFoundError, version
from typing import Dict, Iterable, Optional

from setupbuildx.cli.arguments import build_parser
from setupbuildx.cli.commands import (
    BuildKitVersionCommand,
    Command,
    InspectCommand,
    InstallCommand,
    SetupCommand,
    VersionCommand,
)
from setupbuildx.cli.exit_codes import (
    EXIT_BOOTSTRAP_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
    EXIT_TOOL_ERROR,
)
from setupbuildx.config import ConfigError, SetupBuildxConfig, load_config
from setupbuildx.core.errors import (
    ExternalToolError,
    NotFoundError,
    ParseError,
    SetupBuildxError,
    ValidationError,
)
from setupbuildx.core.logging import configure_logging, get_logger
from setupbuildx.github import GitHubError

LOGGER = get_logger(__name__)

# Commands that need a loaded configuration
CONFIG_COMMANDS = {"setup", "install"}


def get_version() -> str:
    try:
        return version("setupbuildx")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from setupbuildx import __version__

        return __version__


def exit_code_for(error: Exception) -> int:
    """Map an error to a CLI exit code."""
    if isinstance(error, (ConfigError, ValidationError)):
        return EXIT_INVALID_USAGE
    if isinstance(error, (NotFoundError, GitHubError)):
        return EXIT_BOOTSTRAP_FAILURE
    if isinstance(error, (ExternalToolError, ParseError)):
        return EXIT_TOOL_ERROR
    return EXIT_BOOTSTRAP_FAILURE


class CLIRunner:
    """Parses arguments and runs the selected command."""

    def __init__(self) -> None:
        self._version = get_version()
        self._commands: Dict[str, Command] = {
            cmd.name: cmd
            for cmd in (
                SetupCommand(),
                InstallCommand(),
                InspectCommand(),
                VersionCommand(),
                BuildKitVersionCommand(),
            )
        }

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        parser = build_parser()
        try:
            args = parser.parse_args(list(argv) if argv is not None else None)
        except SystemExit as e:
            # argparse exits 0 for --help and 2 for usage errors
            return EXIT_SUCCESS if e.code in (0, None) else EXIT_INVALID_USAGE

        configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        if not args.command:
            parser.print_help()
            return EXIT_INVALID_USAGE

        command = self._commands[args.command]
        try:
            config = self._load_config(args) if args.command in CONFIG_COMMANDS else None
            return command.execute(args, config)
        except (SetupBuildxError, OSError) as e:
            LOGGER.error(str(e))
            return exit_code_for(e)

    def _load_config(self, args: Namespace) -> SetupBuildxConfig:
        overrides = {
            "version": args.buildx_version,
            "github_token": args.github_token,
            "docker_config_home": args.docker_config_home,
            "driver": getattr(args, "driver", None),
            "driver_opts": getattr(args, "driver_opts", None),
            "buildkitd_flags": getattr(args, "buildkitd_flags", None),
            "endpoint": getattr(args, "endpoint", None),
            "config": getattr(args, "buildkitd_config", None),
            "install": getattr(args, "install", None),
            "use": getattr(args, "use", None),
        }
        return load_config(
            args.project_root,
            cli_config_path=args.config_file,
            cli_overrides=overrides,
        )
