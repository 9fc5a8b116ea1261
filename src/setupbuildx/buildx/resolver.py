"""Version specifier classification.

A specifier is one of:
- ""          latest stable release
- "pr-<N>"    build artifact of the latest successful run for pull request N
- "<N>"       build artifact of workflow run N
- anything else, a release tag or version
"""

from __future__ import annotations

import re
from typing import Protocol

from setupbuildx.buildx.models import LATEST, ReleaseTag, ResolvedSource, RunID
from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)

PR_PATTERN = re.compile(r"^pr-(\d+)$")
RUN_ID_PATTERN = re.compile(r"^\d+$")


class PullRequestLookup(Protocol):
    def get_pull_run_id(self, pr_number: int) -> int: ...


class VersionResolver:
    """Turns a version specifier into a ResolvedSource."""

    def __init__(self, pulls: PullRequestLookup) -> None:
        self._pulls = pulls

    def resolve(self, specifier: str) -> ResolvedSource:
        """Classify a specifier.

        Args:
            specifier: Version input as given by the user.

        Returns:
            ReleaseTag or RunID.

        Raises:
            NotFoundError: If a pull request has no qualifying run.
        """
        specifier = specifier.strip()
        if not specifier:
            LOGGER.debug("No version specified, using latest release")
            return ReleaseTag(LATEST)

        pr_match = PR_PATTERN.match(specifier)
        if pr_match:
            pr_number = int(pr_match.group(1))
            run_id = self._pulls.get_pull_run_id(pr_number)
            LOGGER.info(f"Using artifact of run {run_id} for pull request #{pr_number}")
            return RunID(run_id)

        if RUN_ID_PATTERN.match(specifier):
            return RunID(int(specifier))

        return ReleaseTag(specifier)
