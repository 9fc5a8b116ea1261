"""Process execution with captured output.

Wraps subprocess.run so callers can distinguish the exit code from the
diagnostic stream and decide for themselves what counts as a failure.
"""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from setupbuildx.core.errors import ExternalToolError
from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass
class ExecOutput:
    """Captured result of a process invocation."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def failed(self) -> bool:
        """Whether the process failed with diagnostic output."""
        return self.exit_code != 0 and len(self.stderr) > 0


# Signature of a process runner: (command, args, ignore_return_code, silent, env) -> ExecOutput
ProcessRunner = Callable[..., ExecOutput]


def get_exec_output(
    command: str,
    args: Optional[Sequence[str]] = None,
    ignore_return_code: bool = False,
    silent: bool = False,
    cwd: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ExecOutput:
    """Run a command and capture its output.

    Args:
        command: Executable to run.
        args: Arguments passed to the executable.
        ignore_return_code: If False, a non-zero exit raises ExternalToolError.
        silent: If False, captured output is echoed to this process' stdout/stderr.
        cwd: Optional working directory.
        env: Extra environment variables layered over the current environment.

    Returns:
        ExecOutput with stdout, stderr and exit code.

    Raises:
        ExternalToolError: If the process exits non-zero and ignore_return_code is False.
        FileNotFoundError: If the executable does not exist.
    """
    cmd: List[str] = [command, *(args or [])]
    LOGGER.debug(f"Running: {' '.join(cmd)}")

    run_env: Optional[Dict[str, str]] = None
    if env:
        run_env = {**os.environ, **env}

    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        cwd=cwd,
        env=run_env,
        check=False,
    )

    output = ExecOutput(
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        exit_code=result.returncode,
    )

    if not silent:
        if output.stdout:
            sys.stdout.write(output.stdout)
        if output.stderr:
            sys.stderr.write(output.stderr)

    if output.exit_code != 0 and not ignore_return_code:
        message = output.stderr.strip() or f"{command} exited with code {output.exit_code}"
        raise ExternalToolError(message)

    return output
