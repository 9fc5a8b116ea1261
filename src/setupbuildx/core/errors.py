"""Error taxonomy for setupbuildx.

Every error raised by the resolution, acquisition and inspection layers
derives from SetupBuildxError so the CLI can report the original message
verbatim and pick an exit code by kind.
"""

from __future__ import annotations


class SetupBuildxError(Exception):
    """Base class for setupbuildx errors."""


class NotFoundError(SetupBuildxError):
    """A release, pull request run or artifact does not exist."""


class ValidationError(SetupBuildxError):
    """A version string is malformed."""


class ExternalToolError(SetupBuildxError):
    """A wrapped process exited non-zero with diagnostic output."""


class ParseError(SetupBuildxError):
    """Expected content could not be found in tool output."""
