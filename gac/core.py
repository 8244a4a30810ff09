"""Main run orchestrator for the gac tool."""

from typing import Optional

from gac.errors import ConfigurationError, GitError
from gac.integrations.ai import OpenAIIntegration
from gac.integrations.git import GitRepository
from gac.integrations.github import GitHubService, detect_repository
from gac.integrations.jira import JiraClient
from gac.integrations.prompts import PromptManager
from gac.models import Config, RunOptions
from gac.utils.logger import get_logger
from gac.utils.shell import ShellError, run_command
from gac.workflows import commit_changes_workflow, pull_request_workflow

logger = get_logger(__name__)


class AutoCommitter:
    """Runs one commit (and optional pull request) cycle.

    Collaborators are built from the configuration unless passed in.
    """

    def __init__(
        self,
        config: Config,
        git: Optional[GitRepository] = None,
        ai: Optional[OpenAIIntegration] = None,
        jira: Optional[JiraClient] = None,
        github_service: Optional[GitHubService] = None,
    ):
        self.config = config
        self.git = git or GitRepository()
        self._ai = ai
        self._jira = jira
        self.github_service = github_service

    @property
    def ai(self) -> OpenAIIntegration:
        if self._ai is None:
            self._ai = OpenAIIntegration(
                self.config.openai,
                prompt_manager=PromptManager(self.config.prompt_templates_dir),
            )
        return self._ai

    @property
    def jira(self) -> JiraClient:
        if self._jira is None:
            self._jira = JiraClient.from_config(self.config.jira)
        return self._jira

    def resolve_new_branch(self, options: RunOptions, default_branch: str) -> Optional[str]:
        """Pick the branch to create, if any.

        An explicit branch wins; otherwise an issue key becomes the branch
        name when working directly on the default branch.
        """
        if options.branch:
            return options.branch
        if options.issue_id and self.git.current_branch() == default_branch:
            return options.issue_id
        return None

    def bump_version(self, bump: str) -> None:
        """Run the configured version bump command.

        Raises:
            GitError: If the command fails
        """
        command = self.config.version_command.format(bump=bump)
        try:
            result = run_command(command, cwd=self.git.cwd, check=True)
        except ShellError as e:
            raise GitError(f"Version bump failed ({command}): {e.stderr.strip() or e}") from e
        logger.info(f"Bumped version: {result.output.strip()}")

    def build_github_service(self) -> GitHubService:
        """Build the pull request service from the configuration.

        Raises:
            ConfigurationError: If no GitHub token is configured or the
                origin remote is not a GitHub repository
        """
        github_config = self.config.github
        if not (github_config.token or "").strip():
            raise ConfigurationError("No GitHub access token")

        return GitHubService(
            token=github_config.token,
            repository=detect_repository(self.git),
            api_url=github_config.api_url,
            timeout=github_config.request_timeout,
        )

    def run(self, options: RunOptions) -> Optional[str]:
        """Run the full cycle.

        Returns:
            Pull request link when a pull request was created or updated

        Raises:
            GacError: On any failure outside the tolerated commit step
        """
        if options.update_pr and self.github_service is None:
            self.github_service = self.build_github_service()

        default_branch = self.git.default_branch()
        new_branch = self.resolve_new_branch(options, default_branch)

        logger.info(f"Running for Jira Issue: {options.issue_id or 'N/A'}")
        logger.info(f"Should create/update a PR: {'Yes' if options.update_pr else 'No'}")
        logger.info(f"Should bump to version: {options.version_bump or 'No'}")
        logger.info(f"Switching to a new branch: {new_branch or 'No'}")

        issue_context = ""
        if options.issue_id:
            issue_context = self.jira.fetch_issue(options.issue_id).render()

        if new_branch:
            self.git.create_branch(new_branch)

        if options.version_bump:
            self.bump_version(options.version_bump)

        commit_changes_workflow(self.git, self.ai, issue_context, force=options.force)

        if not options.update_pr:
            return None

        link = pull_request_workflow(
            self.git,
            self.ai,
            self.config.github,
            target_branch=default_branch,
            issue_context=issue_context,
            github_service=self.github_service,
        )
        logger.info(f"Link to the PR -> {link}")
        return link
