"""setupbuildx CLI package.

This package provides the command-line interface for setupbuildx.
"""

from __future__ import annotations

from typing import Iterable, Optional

from setupbuildx.cli.runner import CLIRunner, get_version
from setupbuildx.cli.arguments import build_parser
from setupbuildx.cli.exit_codes import (
    EXIT_SUCCESS,
    EXIT_TOOL_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_BOOTSTRAP_FAILURE,
)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code.
    """
    runner = CLIRunner()
    return runner.run(argv)


__all__ = [
    "main",
    "build_parser",
    "get_version",
    "CLIRunner",
    "EXIT_SUCCESS",
    "EXIT_TOOL_ERROR",
    "EXIT_INVALID_USAGE",
    "EXIT_BOOTSTRAP_FAILURE",
]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
