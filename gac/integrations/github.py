"""GitHub integration via the REST API."""

import re
from typing import Any, Dict, Optional

import requests

from gac.errors import (
    ConfigurationError,
    GitError,
    InvalidRequestError,
    RemoteError,
)
from gac.integrations.git import GitRepository
from gac.models import ChangeDescription, PRState, PullRequestRef, RepositoryCoordinates
from gac.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"

GITHUB_REMOTE_PATTERNS = [
    re.compile(r"^https?://(?:[^@/]+@)?(github\.com)/([^/]+)/([^/]+?)(?:\.git)?/?$"),
    re.compile(r"^git@(github\.com):([^/]+)/([^/]+?)(?:\.git)?/?$"),
    re.compile(r"^ssh://git@(github\.com)(?::\d+)?/([^/]+)/([^/]+?)(?:\.git)?/?$"),
]


def parse_remote_url(remote_url: str) -> RepositoryCoordinates:
    """Parse a GitHub remote URL into repository coordinates.

    Args:
        remote_url: HTTPS or SSH remote URL

    Returns:
        Repository coordinates

    Raises:
        ConfigurationError: If the URL is not a recognizable GitHub remote
    """
    url = remote_url.strip()
    for pattern in GITHUB_REMOTE_PATTERNS:
        match = pattern.match(url)
        if match:
            host, owner, name = match.groups()
            return RepositoryCoordinates(owner=owner, name=name, host=host, remote_url=url)

    raise ConfigurationError(f"Failed to parse GitHub remote URL: {remote_url!r}")


def detect_repository(git: Optional[GitRepository] = None) -> RepositoryCoordinates:
    """Detect GitHub repository coordinates from the origin remote.

    Raises:
        ConfigurationError: If there is no remote or it is not a GitHub URL
    """
    git = git or GitRepository()
    try:
        remote_url = git.remote_url()
    except GitError as e:
        raise ConfigurationError(f"Could not read git remote '{git.remote}': {e}") from e

    repository = parse_remote_url(remote_url)
    logger.debug(f"Detected repository {repository.full_name}")
    return repository


class GitHubService:
    """Creates or updates the pull request for a branch."""

    def __init__(
        self,
        token: Optional[str],
        repository: RepositoryCoordinates,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        """Initialize GitHub service.

        Args:
            token: GitHub access token, sent as a bearer credential
            repository: Repository the pull requests belong to
            api_url: REST API base URL
            timeout: Per-request timeout in seconds
            session: HTTP session (a new one is created if None)

        Raises:
            ConfigurationError: If the token is missing
        """
        if not token or not token.strip():
            raise ConfigurationError("No GitHub access token")

        self.token = token.strip()
        self.repository = repository
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github.v3+json",
        }

    @property
    def pulls_url(self) -> str:
        return f"{self.api_url}/repos/{self.repository.owner}/{self.repository.name}/pulls"

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send a request, turning transport failures into RemoteError."""
        try:
            return self.session.request(
                method, url, headers=self.headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise RemoteError(f"{method} {url} failed", detail=str(e)) from e

    def create_or_update_pull_request(
        self,
        source_branch: str,
        change: ChangeDescription,
        target_branch: str,
    ) -> str:
        """Create a pull request, or update the open one for the same branches.

        Args:
            source_branch: Head branch
            change: Title and body to publish
            target_branch: Base branch

        Returns:
            Browser link to the pull request

        Raises:
            InvalidRequestError: If source and target branch are the same
            RemoteError: If GitHub cannot be reached or rejects a request
        """
        if source_branch == target_branch:
            raise InvalidRequestError("Can't open a PR for the same branches")

        existing = self.find_open_pull_request(source_branch, target_branch)
        if existing is not None:
            return self.update_pull_request(existing.number, change)

        return self.create_pull_request(source_branch, change, target_branch)

    def find_open_pull_request(
        self, source_branch: str, target_branch: str
    ) -> Optional[PullRequestRef]:
        """Find the first open pull request from source to target branch."""
        params = {
            "state": PRState.OPEN.value,
            "head": f"{self.repository.owner}:{source_branch}",
            "base": target_branch,
        }
        response = self._request("GET", self.pulls_url, params=params)

        if response.status_code != 200:
            raise RemoteError(
                "Failed to look up pull requests",
                status_code=response.status_code,
                detail=response.text,
            )

        pulls = response.json()
        if not pulls:
            logger.debug(f"No open PR from {source_branch} into {target_branch}")
            return None

        existing = pulls[0]
        logger.debug(f"Found open PR #{existing['number']} from {source_branch}")
        return PullRequestRef(
            number=existing["number"],
            source_branch=source_branch,
            target_branch=target_branch,
        )

    def update_pull_request(self, number: int, change: ChangeDescription) -> str:
        """Replace the title and body of an existing pull request."""
        response = self._request(
            "PATCH",
            f"{self.pulls_url}/{number}",
            json={"title": change.title, "body": change.body},
        )

        if response.status_code != 200:
            raise RemoteError(
                "Failed to update the pull request",
                status_code=response.status_code,
                detail=response.text,
            )

        logger.info("Pull request updated successfully!")
        return self.repository.pull_request_url(number)

    def create_pull_request(
        self, source_branch: str, change: ChangeDescription, target_branch: str
    ) -> str:
        """Open a new pull request."""
        response = self._request(
            "POST",
            self.pulls_url,
            json={
                "title": change.title,
                "body": change.body,
                "head": source_branch,
                "base": target_branch,
            },
        )

        if response.status_code != 201:
            raise RemoteError(
                "Failed to create the pull request",
                status_code=response.status_code,
                detail=response.text,
            )

        number = response.json()["number"]
        logger.info("Pull request created successfully!")
        return self.repository.pull_request_url(number)
