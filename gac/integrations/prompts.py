"""Prompt template loading and rendering."""

import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from jinja2 import Environment, StrictUndefined, TemplateError
from pydantic import BaseModel, Field, ValidationError

from gac.errors import PromptError
from gac.utils.logger import get_logger

logger = get_logger(__name__)

BUILTIN_PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

COMMIT_MESSAGE_TEMPLATE = "commit_message"
PR_DESCRIPTION_TEMPLATE = "pr_description"


class PromptTemplate(BaseModel):
    """Prompt template model."""

    name: str = Field(description="Template name")
    description: Optional[str] = Field(default=None, description="Template description")
    prompt: str = Field(description="Jinja2 prompt source")


class PromptManager:
    """Resolves prompt templates from the user directory, then the built-ins."""

    def __init__(self, templates_dir: Optional[str] = None):
        """Initialize prompt manager.

        Args:
            templates_dir: User templates directory (e.g. ~/.gac/prompts)
        """
        self.templates_dir = Path(templates_dir).expanduser() if templates_dir else None
        self._template_cache: Dict[str, PromptTemplate] = {}
        self._env = Environment(
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @property
    def search_paths(self) -> List[Path]:
        paths = []
        if self.templates_dir and self.templates_dir.is_dir():
            paths.append(self.templates_dir)
        paths.append(BUILTIN_PROMPTS_DIR)
        return paths

    def load_template(self, template_name: str) -> PromptTemplate:
        """Load a named template.

        Raises:
            PromptError: If the template cannot be found or loaded
        """
        if template_name in self._template_cache:
            return self._template_cache[template_name]

        for search_path in self.search_paths:
            template_file = search_path / f"{template_name}.yaml"
            if template_file.exists():
                template = self._load_template_file(template_file, template_name)
                self._template_cache[template_name] = template
                logger.debug(f"Loaded template '{template_name}' from {template_file}")
                return template

        raise PromptError(
            f"Prompt template '{template_name}' not found in search paths: "
            f"{[str(p) for p in self.search_paths]}"
        )

    def _load_template_file(self, template_file: Path, template_name: str) -> PromptTemplate:
        try:
            with open(template_file, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PromptError(f"Invalid YAML in template file {template_file}: {e}")
        except OSError as e:
            raise PromptError(f"Failed to read template file {template_file}: {e}")

        if not isinstance(data, dict):
            raise PromptError(f"Template file must contain a YAML object: {template_file}")
        if "prompt" not in data:
            raise PromptError(f"Template file missing 'prompt' field: {template_file}")

        data.setdefault("name", template_name)
        try:
            return PromptTemplate.model_validate(data)
        except ValidationError as e:
            raise PromptError(f"Invalid template file {template_file}: {e}")

    def render(self, template_name: str, **variables: Any) -> str:
        """Render a named template with the given variables.

        Raises:
            PromptError: If the template is missing, malformed, or uses an
                undefined variable
        """
        template = self.load_template(template_name)
        try:
            return self._env.from_string(template.prompt).render(**variables)
        except TemplateError as e:
            raise PromptError(f"Failed to render prompt template '{template_name}': {e}")


def install_prompt_templates(target_dir: Path) -> Tuple[List[str], List[str]]:
    """Copy the built-in templates into a user directory.

    Existing files are left untouched so local edits survive reinstalls.

    Returns:
        Tuple of (copied file names, skipped file names)

    Raises:
        PromptError: If the directory cannot be created or a file copied
    """
    target_dir = Path(target_dir).expanduser()
    copied: List[str] = []
    skipped: List[str] = []

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        for source in sorted(BUILTIN_PROMPTS_DIR.glob("*.yaml")):
            destination = target_dir / source.name
            if destination.exists():
                logger.debug(f"Skipped existing prompt: {source.name}")
                skipped.append(source.name)
                continue
            shutil.copyfile(source, destination)
            logger.debug(f"Copied prompt: {source.name}")
            copied.append(source.name)
    except OSError as e:
        raise PromptError(f"Failed to install prompt templates into {target_dir}: {e}")

    return copied, skipped
