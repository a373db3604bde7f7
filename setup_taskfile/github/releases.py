"""
GitHub release lookup.

Implements the ReleaseRegistry interface against the GitHub REST API's
"latest release" endpoint.
"""

import logging
from typing import Optional

import requests
from requests.exceptions import RequestException

from setup_taskfile import __version__
from setup_taskfile.core.exceptions import ReleaseRegistryError
from setup_taskfile.core.interfaces import ReleaseRegistry

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


class GitHubReleaseRegistry(ReleaseRegistry):
    """
    Look up releases through the GitHub REST API.

    Example:
        >>> registry = GitHubReleaseRegistry(token=os.environ.get("GITHUB_TOKEN"))
        >>> registry.latest_tag("go-task", "task")
        'v3.46.4'
    """

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
    ):
        """
        Initialize registry client.

        Args:
            token: GitHub token sent as a bearer credential (optional)
            api_url: API base URL (GitHub Enterprise servers use their own)
            session: requests session to reuse (default: new session)
            timeout: Request timeout in seconds
        """
        self.api_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": f"setup-taskfile/{__version__}",
            }
        )
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def latest_tag(self, owner: str, repo: str) -> str:
        """
        Get the tag of the most recent published release.

        Raises:
            ReleaseRegistryError: On transport error, non-2xx status, or a
                response without a tag
        """
        url = f"{self.api_url}/repos/{owner}/{repo}/releases/latest"
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except RequestException as e:
            raise ReleaseRegistryError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            raise ReleaseRegistryError(
                _describe_failure(response), status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ReleaseRegistryError(
                f"Invalid JSON from {url}: {e}", status_code=response.status_code
            ) from e

        tag = data.get("tag_name") if isinstance(data, dict) else None
        if not tag:
            raise ReleaseRegistryError(
                f"Latest release of {owner}/{repo} has no tag_name",
                status_code=response.status_code,
            )

        logger.debug(f"Latest release of {owner}/{repo}: {tag}")
        return tag


def _describe_failure(response: requests.Response) -> str:
    """Build an error message from a failed API response."""
    message = ""
    try:
        body = response.json()
        if isinstance(body, dict):
            message = body.get("message", "")
    except ValueError:
        pass

    text = f"HttpError: {response.status_code} {response.reason or ''}".rstrip()
    if message:
        text += f" - {message}"
    return text


__all__ = ["GitHubReleaseRegistry", "DEFAULT_API_URL"]
