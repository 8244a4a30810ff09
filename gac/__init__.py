"""gac - Git Auto Committer.

A Python CLI that commits pending changes with an AI-generated commit message,
optionally pulling context from a Jira ticket, and opens or updates a GitHub
pull request with an AI-generated description.
"""

__version__ = "0.1.0"
