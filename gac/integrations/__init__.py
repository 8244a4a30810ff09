"""Integrations with git, GitHub, Jira and OpenAI."""
