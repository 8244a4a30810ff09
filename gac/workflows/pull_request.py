"""
Pull Request Workflow

Describes the current branch with the AI and creates or updates its pull
request against the default branch.
"""

from typing import Optional

from ..errors import ConfigurationError, InvalidRequestError
from ..integrations.ai import OpenAIIntegration
from ..integrations.git import GitRepository
from ..integrations.github import GitHubService, detect_repository
from ..models import GitHubConfig
from ..utils.logger import get_logger

logger = get_logger(__name__)

MAX_PR_BODY_LENGTH = 65000


def truncate_pr_description(description: str) -> str:
    """
    Truncate a PR body to fit GitHub's 65536 character limit.

    Cuts at the last line break near the limit and appends a notice.
    """
    if len(description) <= MAX_PR_BODY_LENGTH:
        return description

    logger.warning(f"PR description is {len(description)} characters, truncating")
    truncated = description[:MAX_PR_BODY_LENGTH]

    last_newline = truncated.rfind("\n")
    if last_newline > MAX_PR_BODY_LENGTH - 1000:
        truncated = truncated[:last_newline]

    truncated += (
        f"\n\n---\n\n**Note:** This PR description was truncated from "
        f"{len(description)} characters to fit GitHub's 65536 character limit."
    )
    return truncated


def pull_request_workflow(
    git: GitRepository,
    ai: OpenAIIntegration,
    github_config: GitHubConfig,
    target_branch: str,
    issue_context: str = "",
    github_service: Optional[GitHubService] = None,
) -> str:
    """
    Create or update the pull request for the current branch.

    The description is generated from the diff between the target branch and
    the current branch.

    Args:
        git: Repository the branch lives in
        ai: Description generator
        github_config: GitHub settings (token, API URL, diff exclusions)
        target_branch: Base branch of the pull request
        issue_context: Rendered issue text for the prompt
        github_service: Preconfigured service (built from config if None)

    Returns:
        Link to the pull request

    Raises:
        ConfigurationError: If no GitHub token is configured or the remote
            is not a GitHub repository
        InvalidRequestError: If the current branch is the target branch
        RemoteError: If GitHub rejects the lookup, create or update
    """
    if github_service is None:
        if not (github_config.token or "").strip():
            raise ConfigurationError("No GitHub access token")
        github_service = GitHubService(
            token=github_config.token,
            repository=detect_repository(git),
            api_url=github_config.api_url,
            timeout=github_config.request_timeout,
        )

    source_branch = git.current_branch()
    if source_branch == target_branch:
        raise InvalidRequestError("Can't open a PR for the same branches")

    diff = git.diff(target_branch, source_branch, exclude=github_config.diff_exclude)

    change = ai.generate_pr_description(diff, issue_context)
    change = change.model_copy(update={"body": truncate_pr_description(change.body)})

    return github_service.create_or_update_pull_request(source_branch, change, target_branch)
