"""Profile configuration management for the gac tool."""

import configparser
import os
from pathlib import Path
from typing import Dict, Optional, Tuple

from pydantic import ValidationError

from gac.errors import ConfigurationError
from gac.models import DEFAULT_OPENAI_MODEL, Config
from gac.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PROFILE = "default"

# profile key -> (environment variable, dotted config field)
PROFILE_KEYS: Dict[str, Tuple[Optional[str], str]] = {
    "jiraEmail": ("JIRA_EMAIL", "jira.email"),
    "jiraApiKey": ("JIRA_API_KEY", "jira.api_key"),
    "jiraDomain": ("JIRA_DOMAIN", "jira.domain"),
    "githubAccessToken": ("GITHUB_ACCESS_TOKEN", "github.token"),
    "githubApiUrl": (None, "github.api_url"),
    "openaiApiKey": ("OPENAI_API_KEY", "openai.api_key"),
    "openaiModel": ("OPENAI_MODEL", "openai.model"),
    "openaiMaxTokens": (None, "openai.max_tokens"),
    "promptsDir": (None, "prompt_templates_dir"),
    "versionCommand": (None, "version_command"),
}

# Keys written into a freshly seeded profile
SEEDED_KEYS = [
    "jiraEmail",
    "jiraApiKey",
    "jiraDomain",
    "githubAccessToken",
    "openaiApiKey",
    "openaiModel",
]

SECRET_KEYS = {"jiraApiKey", "githubAccessToken", "openaiApiKey"}


class ProfileManager:
    """Loads named profiles from an INI file into an explicit Config."""

    def __init__(self, profile_path: Optional[Path] = None):
        """Initialize profile manager.

        Args:
            profile_path: Profile file (defaults to ~/.gac/profile)
        """
        self.profile_path = profile_path or Path.home() / ".gac" / "profile"

    def _read_profiles(self) -> Dict[str, Dict[str, str]]:
        """Parse the profile file into {section: {key: value}}.

        Returns:
            Parsed profiles, empty when the file does not exist

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        if not self.profile_path.exists():
            logger.debug(f"No profile file at {self.profile_path}")
            return {}

        parser = configparser.ConfigParser(interpolation=None)
        # Profile keys are camelCase
        parser.optionxform = str

        try:
            with open(self.profile_path, "r") as f:
                parser.read_file(f)
        except configparser.Error as e:
            raise ConfigurationError(f"Failed to parse profile file {self.profile_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read profile file {self.profile_path}: {e}")

        return {section: dict(parser.items(section)) for section in parser.sections()}

    def resolve_values(self, profile_name: str = DEFAULT_PROFILE) -> Dict[str, str]:
        """Resolve raw profile values for a profile name.

        A non-default profile is layered over the [default] section. Blank
        values fall back to the environment.

        Args:
            profile_name: Profile section name

        Returns:
            Resolved values keyed by profile key
        """
        profiles = self._read_profiles()
        values: Dict[str, str] = {}

        sections = [profile_name]
        if profile_name != DEFAULT_PROFILE:
            sections.insert(0, DEFAULT_PROFILE)

        for section in sections:
            selected = profiles.get(section)
            if selected is None:
                if profiles:
                    logger.error(f"Profile '{section}' not found in {self.profile_path}.")
                continue
            for key, value in selected.items():
                if value.strip():
                    values[key] = value.strip()
            logger.debug(f"Profile configuration for '{section}' loaded from {self.profile_path}.")

        for key, (env_var, _) in PROFILE_KEYS.items():
            env_value = os.getenv(env_var, "").strip() if env_var else ""
            if key not in values and env_value:
                values[key] = env_value

        return values

    def load_config(self, profile_name: str = DEFAULT_PROFILE) -> Config:
        """Load configuration for a profile.

        Args:
            profile_name: Profile section name

        Returns:
            Validated configuration

        Raises:
            ConfigurationError: If the profile cannot be read or is invalid
        """
        values = self.resolve_values(profile_name)

        config_data: Dict[str, object] = {"profile": profile_name}
        for key, value in values.items():
            if key not in PROFILE_KEYS:
                logger.warning(f"Ignoring unknown profile key '{key}'")
                continue
            _, field_path = PROFILE_KEYS[key]
            parts = field_path.split(".")
            current = config_data
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = value

        try:
            config = Config.model_validate(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid profile '{profile_name}': {e}")

        logger.debug(f"Configuration for profile '{profile_name}' resolved")
        return config

    def create_default_profile(self) -> Tuple[Path, bool]:
        """Seed a [default] profile from the current environment.

        An existing profile file is never overwritten.

        Returns:
            Tuple of (profile path, whether it was created)

        Raises:
            ConfigurationError: If the profile cannot be written
        """
        if self.profile_path.exists():
            logger.info(f"Profile already exists at {self.profile_path}")
            return self.profile_path, False

        width = max(len(key) for key in SEEDED_KEYS)
        lines = [f"[{DEFAULT_PROFILE}]"]
        for key in SEEDED_KEYS:
            env_var, _ = PROFILE_KEYS[key]
            default = DEFAULT_OPENAI_MODEL if key == "openaiModel" else ""
            lines.append(f"{key.ljust(width)} = {os.getenv(env_var, '') or default}")

        try:
            self.profile_path.parent.mkdir(parents=True, exist_ok=True)
            self.profile_path.write_text("\n".join(lines) + "\n")
        except OSError as e:
            raise ConfigurationError(f"Failed to create profile {self.profile_path}: {e}")

        logger.info(f"Created default profile at {self.profile_path}")
        return self.profile_path, True

    def list_profiles(self) -> list:
        """List profile names defined in the profile file."""
        return list(self._read_profiles().keys())


def mask_secret(value: Optional[str]) -> str:
    """Mask a secret for display, keeping the last four characters."""
    if not value:
        return ""
    if len(value) <= 4:
        return "****"
    return f"****{value[-4:]}"


# Global profile manager instance
profile_manager = ProfileManager()
