"""
AI Integration Module

Generates commit messages and pull request descriptions with the OpenAI chat
completions API. Prompts are rendered from templates and the model is asked to
answer with a JSON object, which is validated into the matching model.
"""

import json
from typing import Any, Dict, Optional

import openai
from pydantic import ValidationError

from ..errors import AIIntegrationError, ConfigurationError
from ..models import ChangeDescription, CommitMessage, OpenAIConfig
from ..utils.logger import get_logger
from .prompts import COMMIT_MESSAGE_TEMPLATE, PR_DESCRIPTION_TEMPLATE, PromptManager

logger = get_logger(__name__)


class OpenAIIntegration:
    """
    OpenAI integration for commit messages and pull request descriptions.

    One chat completion per call, JSON response format, no retries.
    """

    def __init__(
        self,
        config: OpenAIConfig,
        prompt_manager: Optional[PromptManager] = None,
        client: Optional[openai.OpenAI] = None,
    ):
        """Initialize OpenAI integration.

        Raises:
            ConfigurationError: If no API key is configured and no client given
        """
        if client is None and not config.api_key:
            raise ConfigurationError("No OpenAI API key")

        self.config = config
        self.prompt_manager = prompt_manager or PromptManager()
        self.client = client or openai.OpenAI(api_key=config.api_key)

    def generate_json(self, prompt: str, max_tokens: Optional[int] = None) -> Dict[str, Any]:
        """
        Send a prompt and parse the JSON object the model answers with.

        Args:
            prompt: Rendered prompt
            max_tokens: Completion token limit (defaults to config)

        Returns:
            Parsed JSON object

        Raises:
            AIIntegrationError: If the API call fails or the answer is not a
                JSON object
        """
        logger.debug(f"Requesting completion from {self.config.model}")
        try:
            response = self.client.chat.completions.create(
                model=self.config.model,
                messages=[{"role": "user", "content": prompt}],
                response_format={"type": "json_object"},
                max_tokens=max_tokens or self.config.max_tokens,
            )
        except openai.OpenAIError as e:
            raise AIIntegrationError(f"OpenAI request failed: {e}") from e

        content = response.choices[0].message.content or "{}"

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Model returned invalid JSON: {content}")
            raise AIIntegrationError(f"Failed to parse AI response as JSON: {e}") from e

        if not isinstance(data, dict):
            raise AIIntegrationError(f"Expected a JSON object from the AI, got: {content}")

        return data

    def generate_commit_message(self, diff: str, issue_context: str = "") -> CommitMessage:
        """Generate a commit message for a working tree diff."""
        prompt = self.prompt_manager.render(
            COMMIT_MESSAGE_TEMPLATE, diff=diff, issue_context=issue_context
        )
        data = self.generate_json(prompt)
        try:
            return CommitMessage.model_validate(data)
        except ValidationError as e:
            raise AIIntegrationError(f"AI returned an invalid commit message: {e}") from e

    def generate_pr_description(self, diff: str, issue_context: str = "") -> ChangeDescription:
        """Generate a pull request title and body for a branch diff."""
        prompt = self.prompt_manager.render(
            PR_DESCRIPTION_TEMPLATE, diff=diff, issue_context=issue_context
        )
        data = self.generate_json(prompt)
        try:
            return ChangeDescription.model_validate(data)
        except ValidationError as e:
            raise AIIntegrationError(f"AI returned an invalid pull request description: {e}") from e
