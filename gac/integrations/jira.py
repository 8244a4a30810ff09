"""Jira integration via the Jira Cloud REST API."""

from typing import Optional

import requests

from gac.errors import ConfigurationError, JiraError
from gac.models import IssueContext, JiraConfig
from gac.utils.logger import get_logger

logger = get_logger(__name__)


class JiraClient:
    """Read-only Jira Cloud client."""

    def __init__(
        self,
        domain: Optional[str],
        email: Optional[str],
        api_key: Optional[str],
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Jira client.

        Args:
            domain: Atlassian subdomain, as in <domain>.atlassian.net
            email: Account email
            api_key: API token
            timeout: Request timeout in seconds
            session: HTTP session (a new one is created if None)

        Raises:
            ConfigurationError: If any credential is missing
        """
        missing = [
            name
            for name, value in (("jiraDomain", domain), ("jiraEmail", email), ("jiraApiKey", api_key))
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing Jira settings: {', '.join(missing)}")

        self.domain = domain
        self.email = email
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: JiraConfig) -> "JiraClient":
        return cls(config.domain, config.email, config.api_key, timeout=config.request_timeout)

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}.atlassian.net"

    def browse_url(self, issue_key: str) -> str:
        return f"{self.base_url}/browse/{issue_key}"

    def fetch_issue(self, issue_key: str) -> IssueContext:
        """Fetch a Jira issue.

        Args:
            issue_key: Issue key (e.g., "ENG-123")

        Returns:
            Issue summary and description

        Raises:
            JiraError: If the request fails or Jira returns an error status
        """
        url = f"{self.base_url}/rest/api/2/issue/{issue_key}"
        logger.debug(f"Fetching Jira issue {issue_key}")

        try:
            response = self.session.get(
                url,
                auth=(self.email, self.api_key),
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise JiraError(f"Failed getting jira issue {issue_key}: {e}") from e

        if response.status_code > 299:
            raise JiraError(f"Failed getting jira issue {issue_key}: {response.text}")

        try:
            fields = response.json()["fields"]
        except (ValueError, KeyError) as e:
            raise JiraError(f"Unexpected Jira response for {issue_key}: {e}") from e

        return IssueContext(
            key=issue_key,
            summary=fields.get("summary") or "",
            description=fields.get("description") or "",
            url=self.browse_url(issue_key),
        )
