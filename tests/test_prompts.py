"""Tests for prompt template management."""

import pytest

from gac.errors import PromptError
from gac.integrations.prompts import (
    BUILTIN_PROMPTS_DIR,
    COMMIT_MESSAGE_TEMPLATE,
    PR_DESCRIPTION_TEMPLATE,
    PromptManager,
    install_prompt_templates,
)


@pytest.fixture
def user_prompts(tmp_path):
    path = tmp_path / "prompts"
    path.mkdir()
    return path


class TestPromptManager:
    """Test template resolution and rendering."""

    @pytest.mark.parametrize("name", [COMMIT_MESSAGE_TEMPLATE, PR_DESCRIPTION_TEMPLATE])
    def test_builtin_templates(self, name):
        """Test the packaged templates load and render."""
        manager = PromptManager()
        template = manager.load_template(name)

        assert template.name == name
        rendered = manager.render(name, diff="+new line", issue_context="")
        assert "+new line" in rendered
        assert "JSON" in rendered

    def test_issue_context_is_optional_section(self):
        """Test the ticket block only appears with issue context."""
        manager = PromptManager()

        without = manager.render(PR_DESCRIPTION_TEMPLATE, diff="d", issue_context="")
        with_issue = manager.render(PR_DESCRIPTION_TEMPLATE, diff="d", issue_context="Jira Ticket ID: ENG-7")

        assert "ENG-7" not in without
        assert "Jira Ticket ID: ENG-7" in with_issue

    def test_user_template_overrides_builtin(self, user_prompts):
        """Test user templates win over built-ins."""
        (user_prompts / "commit_message.yaml").write_text(
            "prompt: 'Custom {{ diff }}'\n"
        )

        manager = PromptManager(str(user_prompts))
        assert manager.render(COMMIT_MESSAGE_TEMPLATE, diff="abc", issue_context="") == "Custom abc"
        assert manager.load_template(COMMIT_MESSAGE_TEMPLATE).name == "commit_message"

    def test_missing_user_dir_uses_builtin(self, tmp_path):
        manager = PromptManager(str(tmp_path / "nope"))
        assert manager.search_paths == [BUILTIN_PROMPTS_DIR]

    def test_unknown_template(self):
        with pytest.raises(PromptError, match="not found"):
            PromptManager().load_template("release_notes")

    def test_template_without_prompt(self, user_prompts):
        (user_prompts / "commit_message.yaml").write_text("description: nothing\n")

        with pytest.raises(PromptError, match="missing 'prompt' field"):
            PromptManager(str(user_prompts)).load_template(COMMIT_MESSAGE_TEMPLATE)

    def test_invalid_yaml(self, user_prompts):
        (user_prompts / "commit_message.yaml").write_text("prompt: [unclosed\n")

        with pytest.raises(PromptError, match="Invalid YAML"):
            PromptManager(str(user_prompts)).load_template(COMMIT_MESSAGE_TEMPLATE)

    def test_undefined_variable(self, user_prompts):
        """Test templates referencing unknown variables fail loudly."""
        (user_prompts / "commit_message.yaml").write_text("prompt: '{{ branch }}'\n")

        with pytest.raises(PromptError, match="Failed to render"):
            PromptManager(str(user_prompts)).render(COMMIT_MESSAGE_TEMPLATE, diff="d", issue_context="")


class TestInstallPromptTemplates:
    """Test copying built-in templates to the user directory."""

    def test_copies_builtins(self, tmp_path):
        target = tmp_path / ".gac" / "prompts"

        copied, skipped = install_prompt_templates(target)

        assert copied == ["commit_message.yaml", "pr_description.yaml"]
        assert skipped == []
        assert (target / "pr_description.yaml").read_text() == (
            BUILTIN_PROMPTS_DIR / "pr_description.yaml"
        ).read_text()

    def test_skips_existing(self, user_prompts):
        """Test edited templates are preserved."""
        (user_prompts / "commit_message.yaml").write_text("prompt: mine\n")

        copied, skipped = install_prompt_templates(user_prompts)

        assert copied == ["pr_description.yaml"]
        assert skipped == ["commit_message.yaml"]
        assert (user_prompts / "commit_message.yaml").read_text() == "prompt: mine\n"
