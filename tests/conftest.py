"""Shared test configuration and fixtures."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from gac.config import PROFILE_KEYS, ProfileManager
from gac.integrations.git import GitRepository
from gac.models import Config, GitHubConfig, OpenAIConfig, RepositoryCoordinates


@pytest.fixture
def temp_home(tmp_path):
    """Create a temporary home directory for tests."""
    return tmp_path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove profile-related environment variables."""
    for env_var, _ in PROFILE_KEYS.values():
        if env_var:
            monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def isolated_profile_manager(temp_home, monkeypatch):
    """Create a ProfileManager that doesn't touch the real profile file."""
    monkeypatch.setattr(Path, "home", lambda: temp_home)
    return ProfileManager(temp_home / ".gac" / "profile")


@pytest.fixture(autouse=True)
def mock_global_profile_manager(isolated_profile_manager, monkeypatch):
    """Replace the global profile_manager everywhere it was imported."""
    import gac.cli
    import gac.config

    monkeypatch.setattr(gac.config, "profile_manager", isolated_profile_manager)
    monkeypatch.setattr(gac.cli, "profile_manager", isolated_profile_manager)
    return isolated_profile_manager


@pytest.fixture
def write_profile(isolated_profile_manager):
    """Write profile file content."""

    def _write(content: str) -> Path:
        path = isolated_profile_manager.profile_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def repository():
    """Repository coordinates for acme/widgets."""
    return RepositoryCoordinates(owner="acme", name="widgets")


@pytest.fixture
def test_config():
    """Configuration with every credential set."""
    return Config(
        github=GitHubConfig(token="gh-token"),
        openai=OpenAIConfig(api_key="sk-test"),
    )


@pytest.fixture
def mock_git():
    """GitRepository double."""
    git = Mock(spec=GitRepository)
    git.cwd = None
    git.remote = "origin"
    git.current_branch.return_value = "feature/x"
    git.default_branch.return_value = "main"
    git.diff.return_value = "diff --git a/app.py b/app.py\n+print('hi')\n"
    return git


@pytest.fixture
def make_response():
    """Factory for requests.Response doubles."""

    def _make(status_code: int, payload=None, text: str = ""):
        response = Mock()
        response.status_code = status_code
        response.json.return_value = payload
        response.text = text
        return response

    return _make


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner
    return CliRunner()
