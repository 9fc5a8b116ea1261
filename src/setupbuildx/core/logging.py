"""Logging helpers for setupbuildx.

All modules obtain their logger through get_logger(__name__) so that the
CLI can configure a single handler on the package root logger.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "setupbuildx"
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the setupbuildx namespace.

    Args:
        name: Module name, usually __name__.

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    stream: Optional[object] = None,
) -> None:
    """Configure the package root logger.

    Level precedence: debug > verbose > quiet > default (WARNING).

    Args:
        debug: Enable DEBUG level.
        verbose: Enable INFO level.
        quiet: Only show errors.
        stream: Output stream (defaults to stderr).
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    # Replace existing handlers on reconfiguration
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)  # type: ignore[arg-type]
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root.addHandler(handler)
