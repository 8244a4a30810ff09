"""Tests for commit and pull request workflows."""

from unittest.mock import Mock, patch

import pytest

from gac.errors import ConfigurationError, GitError, InvalidRequestError
from gac.integrations.ai import OpenAIIntegration
from gac.integrations.github import GitHubService
from gac.models import ChangeDescription, CommitMessage, GitHubConfig, RepositoryCoordinates
from gac.workflows import commit_changes_workflow, pull_request_workflow, truncate_pr_description
from gac.workflows.pull_request import MAX_PR_BODY_LENGTH


@pytest.fixture
def mock_ai():
    ai = Mock(spec=OpenAIIntegration)
    ai.generate_commit_message.return_value = CommitMessage(message="Add sorting")
    ai.generate_pr_description.return_value = ChangeDescription(title="Sort widgets", body="Sorted.")
    return ai


class TestCommitWorkflow:
    """Test the commit step."""

    def test_commits_and_pushes(self, mock_git, mock_ai):
        """Test pending changes are committed with the generated message."""
        assert commit_changes_workflow(mock_git, mock_ai, "Jira Ticket ID: ENG-1") is True

        mock_ai.generate_commit_message.assert_called_once_with(
            mock_git.diff.return_value, "Jira Ticket ID: ENG-1"
        )
        mock_git.stage_tracked.assert_called_once_with()
        mock_git.commit.assert_called_once_with("Add sorting")
        mock_git.push.assert_called_once_with(force=False)

    def test_clean_tree_only_pushes(self, mock_git, mock_ai):
        """Test a clean tree skips the AI and just pushes."""
        mock_git.diff.return_value = "  \n"

        assert commit_changes_workflow(mock_git, mock_ai, force=True) is False

        mock_ai.generate_commit_message.assert_not_called()
        mock_git.commit.assert_not_called()
        mock_git.push.assert_called_once_with(force=True)

    def test_clean_tree_push_failure_propagates(self, mock_git, mock_ai):
        mock_git.diff.return_value = ""
        mock_git.push.side_effect = GitError("rejected")

        with pytest.raises(GitError):
            commit_changes_workflow(mock_git, mock_ai)

    @pytest.mark.parametrize("failing", ["stage_tracked", "commit", "push"])
    def test_commit_failure_is_tolerated(self, mock_git, mock_ai, failing):
        """Test git failures while committing do not abort the run."""
        getattr(mock_git, failing).side_effect = GitError("boom")

        assert commit_changes_workflow(mock_git, mock_ai) is False


class TestPullRequestWorkflow:
    """Test the pull request step."""

    def test_reconciles_with_generated_description(self, mock_git, mock_ai):
        """Test the branch diff is described and handed to the service."""
        service = Mock(spec=GitHubService)
        service.create_or_update_pull_request.return_value = "https://github.com/acme/widgets/pull/42"

        link = pull_request_workflow(
            mock_git,
            mock_ai,
            GitHubConfig(token="t"),
            target_branch="main",
            issue_context="ctx",
            github_service=service,
        )

        assert link == "https://github.com/acme/widgets/pull/42"
        mock_git.diff.assert_called_once_with("main", "feature/x", exclude=["package-lock.json"])
        mock_ai.generate_pr_description.assert_called_once_with(mock_git.diff.return_value, "ctx")
        service.create_or_update_pull_request.assert_called_once_with(
            "feature/x", ChangeDescription(title="Sort widgets", body="Sorted."), "main"
        )

    def test_missing_token(self, mock_git, mock_ai):
        """Test no work happens without a GitHub token."""
        with pytest.raises(ConfigurationError, match="No GitHub access token"):
            pull_request_workflow(mock_git, mock_ai, GitHubConfig(), target_branch="main")

        mock_ai.generate_pr_description.assert_not_called()

    @patch("gac.workflows.pull_request.GitHubService")
    @patch("gac.workflows.pull_request.detect_repository")
    def test_builds_service_from_config(self, mock_detect, mock_service_cls, mock_git, mock_ai):
        repo = RepositoryCoordinates(owner="acme", name="widgets")
        mock_detect.return_value = repo
        mock_service_cls.return_value.create_or_update_pull_request.return_value = "link"

        config = GitHubConfig(token="t", api_url="https://ghe/api", request_timeout=5)
        assert pull_request_workflow(mock_git, mock_ai, config, target_branch="main") == "link"

        mock_detect.assert_called_once_with(mock_git)
        mock_service_cls.assert_called_once_with(
            token="t", repository=repo, api_url="https://ghe/api", timeout=5
        )

    def test_same_branch_rejected(self, mock_git, mock_ai, repository):
        """Test running on the target branch fails before the diff, AI or network calls."""
        mock_git.current_branch.return_value = "main"
        session = Mock()
        service = GitHubService(token="t", repository=repository, session=session)

        with pytest.raises(InvalidRequestError):
            pull_request_workflow(mock_git, mock_ai, GitHubConfig(token="t"), "main", github_service=service)

        session.request.assert_not_called()
        mock_git.diff.assert_not_called()
        mock_ai.generate_pr_description.assert_not_called()

    def test_long_body_truncated(self, mock_git, mock_ai):
        mock_ai.generate_pr_description.return_value = ChangeDescription(
            title="Big", body="x" * (MAX_PR_BODY_LENGTH + 10)
        )
        service = Mock(spec=GitHubService)

        pull_request_workflow(mock_git, mock_ai, GitHubConfig(token="t"), "main", github_service=service)

        change = service.create_or_update_pull_request.call_args.args[1]
        assert "was truncated" in change.body
        assert len(change.body) < MAX_PR_BODY_LENGTH + 200


class TestTruncatePRDescription:
    """Test PR body truncation."""

    def test_short_description_unchanged(self):
        assert truncate_pr_description("short") == "short"

    def test_cuts_at_line_break(self):
        """Test truncation prefers the last line break near the limit."""
        line = "y" * 99 + "\n"
        description = line * (MAX_PR_BODY_LENGTH // 100 + 5)

        truncated = truncate_pr_description(description)
        body, note = truncated.split("\n\n---\n\n")

        assert body.endswith("y")
        assert len(body) <= MAX_PR_BODY_LENGTH
        assert str(len(description)) in note
