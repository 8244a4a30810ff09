"""Workflow modules for the commit and pull request stages."""

from gac.workflows.commit import commit_changes_workflow
from gac.workflows.pull_request import pull_request_workflow, truncate_pr_description

__all__ = [
    "commit_changes_workflow",
    "pull_request_workflow",
    "truncate_pr_description",
]
