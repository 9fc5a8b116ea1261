"""Step outputs for GitHub Actions.

Outputs are appended to the file named by $GITHUB_OUTPUT. Outside of
Actions the values are only logged.
"""

from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Dict, Optional

from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)

GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"


def format_output(name: str, value: str) -> str:
    """Format a single output entry.

    Multi-line values use the heredoc form with a random delimiter.
    """
    if "\n" in value or "\r" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    return f"{name}={value}\n"


def set_output(name: str, value: Optional[str], output_file: Optional[Path] = None) -> None:
    """Publish a step output.

    Args:
        name: Output name.
        value: Output value; None is written as an empty string.
        output_file: Explicit output file, defaults to $GITHUB_OUTPUT.
    """
    text = value if value is not None else ""
    if output_file is None:
        env_path = os.environ.get(GITHUB_OUTPUT_ENV)
        output_file = Path(env_path) if env_path else None

    if output_file is None:
        LOGGER.info(f"Output {name}={text}")
        return

    with open(output_file, "a", encoding="utf-8") as f:
        f.write(format_output(name, text))


def set_outputs(values: Dict[str, Optional[str]], output_file: Optional[Path] = None) -> None:
    """Publish several step outputs in insertion order."""
    for name, value in values.items():
        set_output(name, value, output_file=output_file)
