"""GitHub REST API client for buildx releases and CI artifacts.

Release lookup works anonymously; pull request runs and artifact downloads
need a token with actions:read on the buildx repository.
"""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from setupbuildx import __version__
from setupbuildx.buildx.models import LATEST, TOOL_NAME, Release
from setupbuildx.core.errors import NotFoundError, SetupBuildxError
from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_REPO = "docker/buildx"
DEFAULT_WORKFLOW = "build.yml"
ARTIFACT_NAME = TOOL_NAME


class GitHubError(SetupBuildxError):
    """GitHub API request failed."""

    pass


class GitHubClient:
    """Client for the buildx repository on GitHub.

    Handles:
    - Release lookup (latest or by tag)
    - Pull request to workflow run resolution
    - Workflow run artifact download and extraction
    """

    def __init__(
        self,
        token: str = "",
        api_base: str = DEFAULT_API_BASE,
        repo: str = DEFAULT_REPO,
        workflow: str = DEFAULT_WORKFLOW,
        timeout: float = 30,
    ) -> None:
        self._token = token.strip()
        self._api_base = api_base.rstrip("/")
        self._repo = repo
        self._workflow = workflow
        self._timeout = timeout
        self._session = requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"setupbuildx/{__version__}",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _require_token(self, action: str) -> None:
        if not self._token:
            raise GitHubError(f"A GitHub token is required to {action}.")

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Send an API request and decode the JSON body.

        Raises:
            NotFoundError: On HTTP 404.
            GitHubError: On any other HTTP error status.
        """
        url = f"{self._api_base}{path}"
        LOGGER.debug(f"{method} {url}")
        r = self._session.request(method, url, headers=self._headers(), params=params, timeout=self._timeout)
        if r.status_code == 404:
            raise NotFoundError(f"GitHub API {method} {path}: not found")
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            raise GitHubError(f"GitHub API error {r.status_code} {method} {path}: {payload.get('message', payload)}")
        if r.status_code == 204:
            return None
        return r.json()

    def get_release(self, tag: str) -> Optional[Release]:
        """Look up a release by tag, or the latest release.

        Bare versions such as "0.11.2" are looked up as "v0.11.2".

        Returns:
            The release, or None if it does not exist.
        """
        if not tag or tag == LATEST:
            path = f"/repos/{self._repo}/releases/latest"
        else:
            if not tag.startswith("v"):
                tag = f"v{tag}"
            path = f"/repos/{self._repo}/releases/tags/{tag}"

        try:
            data = self._request("GET", path)
        except NotFoundError:
            return None

        return Release(tag_name=data["tag_name"])

    def get_pull_run_id(self, pr_number: int) -> int:
        """Return the id of the latest successful workflow run for a pull request head.

        Raises:
            NotFoundError: If the pull request or a successful run does not exist.
            GitHubError: If no token is configured.
        """
        self._require_token(f"download pull request #{pr_number} artifacts")
        try:
            pull = self._request("GET", f"/repos/{self._repo}/pulls/{pr_number}")
        except NotFoundError:
            raise NotFoundError(f"Cannot find pull request #{pr_number} in {self._repo}") from None

        head_sha = pull["head"]["sha"]
        runs = self._request(
            "GET",
            f"/repos/{self._repo}/actions/workflows/{self._workflow}/runs",
            params={"event": "pull_request", "head_sha": head_sha, "status": "success", "per_page": 1},
        )
        workflow_runs = runs.get("workflow_runs") or []
        if not workflow_runs:
            raise NotFoundError(f"No successful {self._workflow} run found for pull request #{pr_number} ({head_sha})")

        run_id = int(workflow_runs[0]["id"])
        LOGGER.debug(f"Pull request #{pr_number} resolved to run {run_id}")
        return run_id

    def download_artifact(self, run_id: int, dest_dir: Path) -> Path:
        """Download and extract the buildx artifact of a workflow run.

        Args:
            run_id: Workflow run id.
            dest_dir: Directory receiving the archive and its extracted files.

        Returns:
            Directory holding the extracted files.

        Raises:
            NotFoundError: If the run or an unexpired buildx artifact does not exist.
            GitHubError: If no token is configured or the download fails.
        """
        self._require_token(f"download artifacts of run {run_id}")
        try:
            data = self._request("GET", f"/repos/{self._repo}/actions/runs/{run_id}/artifacts")
        except NotFoundError:
            raise NotFoundError(f"Cannot find workflow run {run_id} in {self._repo}") from None

        artifact = next(
            (a for a in data.get("artifacts", []) if a.get("name") == ARTIFACT_NAME and not a.get("expired")),
            None,
        )
        if artifact is None:
            raise NotFoundError(f"Cannot find {ARTIFACT_NAME} artifact in workflow run {run_id}")

        dest_dir.mkdir(parents=True, exist_ok=True)
        archive = dest_dir / f"{ARTIFACT_NAME}-{run_id}.zip"
        url = artifact["archive_download_url"]
        LOGGER.info(f"Downloading artifact {artifact['id']} of run {run_id}")

        with self._session.get(url, headers=self._headers(), stream=True, timeout=self._timeout) as r:
            if r.status_code >= 400:
                raise GitHubError(f"GitHub API error {r.status_code} downloading artifact {artifact['id']}")
            with open(archive, "wb") as f:
                for chunk in r.iter_content(chunk_size=1024 * 1024):
                    f.write(chunk)

        extract_dir = dest_dir / f"{ARTIFACT_NAME}-{run_id}"
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(extract_dir)
        archive.unlink(missing_ok=True)

        LOGGER.debug(f"Artifact extracted to {extract_dir}")
        return extract_dir
