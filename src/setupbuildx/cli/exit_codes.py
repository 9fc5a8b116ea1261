"""Exit codes for the setupbuildx CLI.

- 0: Success
- 2: A wrapped docker/buildx command failed or its output could not be parsed
- 3: Invalid usage (bad arguments, invalid config or version string)
- 4: Bootstrap failure (release, pull request run or artifact not found, download failed)
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_TOOL_ERROR = 2
EXIT_INVALID_USAGE = 3
EXIT_BOOTSTRAP_FAILURE = 4
