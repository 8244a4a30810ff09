"""Data models for the gac tool."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo-1106"
DEFAULT_VERSION_COMMAND = "npm --no-git-tag-version version {bump}"


class PRState(str, Enum):
    """Pull request state values used in lookups."""

    OPEN = "open"


class RepositoryCoordinates(BaseModel):
    """Remote hosting location of the local repository."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(description="Repository owner")
    name: str = Field(description="Repository name")
    host: str = Field(default="github.com", description="Hosting service host")
    remote_url: str | None = Field(default=None, description="Remote URL it was parsed from")

    @property
    def full_name(self) -> str:
        """Get full repository name (owner/name)."""
        return f"{self.owner}/{self.name}"

    def pull_request_url(self, number: int) -> str:
        """Canonical browser link for a pull request number."""
        return f"https://{self.host}/{self.owner}/{self.name}/pull/{number}"


class ChangeDescription(BaseModel):
    """Pull request title and body produced by the AI."""

    title: str = Field(description="PR title")
    body: str = Field(default="", description="PR description/body")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject blank titles."""
        if not v.strip():
            raise ValueError("Pull request title cannot be empty")
        return v.strip()


class PullRequestRef(BaseModel):
    """An existing open pull request found on the hosting service."""

    number: int = Field(description="PR number")
    source_branch: str = Field(description="Head branch")
    target_branch: str = Field(description="Base branch")
    state: PRState = Field(default=PRState.OPEN, description="PR state")


class CommitMessage(BaseModel):
    """Commit message produced by the AI."""

    message: str = Field(description="Full commit message")

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Commit message cannot be empty")
        return v.strip()


class IssueContext(BaseModel):
    """Jira issue fields used as prompt context."""

    key: str = Field(description="Issue key (e.g., 'ENG-123')")
    summary: str = Field(description="Issue summary")
    description: str = Field(default="", description="Issue description")
    url: str = Field(description="Browser link to the issue")

    def render(self) -> str:
        """Render the issue as plain text for prompt templates."""
        return f"Jira Ticket ID: {self.key}\n{self.summary}\n{self.description}, link: {self.url}"


class JiraConfig(BaseModel):
    """Jira configuration settings."""

    domain: str | None = Field(default=None, description="Atlassian subdomain (<domain>.atlassian.net)")
    email: str | None = Field(default=None, description="Account email for basic auth")
    api_key: str | None = Field(default=None, description="Jira API token")
    request_timeout: int = Field(default=30, description="HTTP timeout in seconds")


class GitHubConfig(BaseModel):
    """GitHub configuration settings."""

    token: str | None = Field(default=None, description="GitHub access token")
    api_url: str = Field(default="https://api.github.com", description="REST API base URL")
    request_timeout: int = Field(default=30, description="HTTP timeout in seconds")
    diff_exclude: list[str] = Field(
        default_factory=lambda: ["package-lock.json"],
        description="Paths left out of the PR description diff",
    )


class OpenAIConfig(BaseModel):
    """OpenAI configuration settings."""

    api_key: str | None = Field(default=None, description="OpenAI API key")
    model: str = Field(default=DEFAULT_OPENAI_MODEL, description="Chat completion model")
    max_tokens: int = Field(default=2500, description="Completion token limit")

    @field_validator("max_tokens")
    @classmethod
    def validate_max_tokens(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_tokens must be positive")
        return v


class Config(BaseModel):
    """Resolved settings for one run."""

    profile: str = Field(default="default", description="Active profile name")
    jira: JiraConfig = Field(default_factory=JiraConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    prompt_templates_dir: str = Field(
        default="~/.gac/prompts", description="User prompt templates directory"
    )
    version_command: str = Field(
        default=DEFAULT_VERSION_COMMAND, description="Version bump command; {bump} is substituted"
    )


class RunOptions(BaseModel):
    """Command line options for one commit run."""

    issue_id: str | None = Field(default=None, description="Jira issue key")
    update_pr: bool = Field(default=False, description="Create or update a pull request")
    version_bump: str | None = Field(default=None, description="Version bump kind")
    branch: str | None = Field(default=None, description="New branch to switch to")
    force: bool = Field(default=False, description="Force push")
