"""
Commit Workflow

Commits the pending changes to tracked files with an AI-generated message and
pushes the branch.
"""

from ..errors import GitError
from ..integrations.ai import OpenAIIntegration
from ..integrations.git import GitRepository
from ..utils.logger import get_logger

logger = get_logger(__name__)


def commit_changes_workflow(
    git: GitRepository,
    ai: OpenAIIntegration,
    issue_context: str = "",
    force: bool = False,
) -> bool:
    """
    Commit and push pending changes if there are any.

    With a clean working tree the branch is only pushed. A failure while
    staging, committing or pushing generated changes is logged and does not
    abort the run.

    Args:
        git: Repository to commit in
        ai: Commit message generator
        issue_context: Rendered issue text for the prompt
        force: Force push

    Returns:
        True if a commit was created and pushed

    Raises:
        GitError: If the diff cannot be read or the clean-tree push fails
        AIIntegrationError: If the commit message cannot be generated
    """
    diff = git.diff()

    if not diff.strip():
        git.push(force=force)
        logger.info("No changes to commit.")
        return False

    commit_message = ai.generate_commit_message(diff, issue_context)
    logger.debug(f"Generated commit message:\n{commit_message.message}")

    try:
        git.stage_tracked()
        git.commit(commit_message.message)
        git.push(force=force)
    except GitError as e:
        logger.error(f"Failed to commit changes - {e}")
        return False

    logger.info("Changes committed and pushed successfully!")
    return True
