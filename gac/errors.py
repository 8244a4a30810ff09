"""Exception hierarchy for the gac tool."""

from typing import Optional


class GacError(Exception):
    """Base error for all gac failures."""
    pass


class ConfigurationError(GacError):
    """Missing credential, unreadable profile, or unparsable repository remote."""
    pass


class GitError(GacError):
    """Git command error."""
    pass


class GitHubIntegrationError(GacError):
    """GitHub integration error."""
    pass


class InvalidRequestError(GitHubIntegrationError):
    """Pull request requested between a branch and itself."""
    pass


class RemoteError(GitHubIntegrationError):
    """Hosting service returned an unexpected status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: str = ""):
        """Initialize remote error.

        Args:
            message: Error message
            status_code: HTTP status code, if a response was received
            detail: Response body or transport error text
        """
        super().__init__(f"{message}: {detail}" if detail else message)
        self.status_code = status_code
        self.detail = detail


class JiraError(GacError):
    """Jira integration error."""
    pass


class AIIntegrationError(GacError):
    """AI text generation error."""
    pass


class PromptError(GacError):
    """Prompt template error."""
    pass
