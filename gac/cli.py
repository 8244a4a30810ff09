"""Click CLI interface for the gac tool."""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gac import __version__
from gac.config import DEFAULT_PROFILE, PROFILE_KEYS, SECRET_KEYS, mask_secret, profile_manager
from gac.core import AutoCommitter
from gac.errors import GacError
from gac.integrations.prompts import install_prompt_templates
from gac.models import RunOptions
from gac.utils.logger import enable_verbose_logging, get_logger

logger = get_logger(__name__)
console = Console()


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, version: bool, verbose: bool) -> None:
    """gac - Git Auto Committer.

    Commits pending changes with an AI-generated message and opens or
    updates the pull request for the current branch.
    """
    if version:
        click.echo(f"gac version {__version__}")
        sys.exit(0)

    if verbose:
        enable_verbose_logging()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("issue_id", required=False)
@click.option("--pr", "--update-pr", "update_pr", is_flag=True, help="Create or update a pull request")
@click.option(
    "--bump",
    "version_bump",
    is_flag=False,
    flag_value="patch",
    default=None,
    help="Bump the package version (patch when given without a value)",
)
@click.option("--branch", "-b", help="Switch to a new branch before committing")
@click.option("--force", "-f", is_flag=True, help="Force push")
@click.option("--profile", "-p", default=DEFAULT_PROFILE, show_default=True, help="Profile to load")
def commit(
    issue_id: Optional[str],
    update_pr: bool,
    version_bump: Optional[str],
    branch: Optional[str],
    force: bool,
    profile: str,
) -> None:
    """Commit pending changes, optionally for a Jira issue.

    ISSUE_ID: Optional Jira issue key (e.g., 'ENG-123') used as prompt context
    """
    options = RunOptions(
        issue_id=issue_id,
        update_pr=update_pr,
        version_bump=version_bump,
        branch=branch,
        force=force,
    )

    try:
        config = profile_manager.load_config(profile)
        link = AutoCommitter(config).run(options)
    except GacError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if link:
        console.print(f"[green]✓[/green] Link to the PR -> {link}")


@cli.command()
def init() -> None:
    """Create the default profile and install prompt templates."""
    try:
        profile_path, created = profile_manager.create_default_profile()
        if created:
            console.print(f"[green]✓[/green] Created default profile at {profile_path}")
        else:
            console.print(f"Profile already exists at {profile_path}")

        prompts_dir = profile_manager.profile_path.parent / "prompts"
        copied, skipped = install_prompt_templates(prompts_dir)
        for name in copied:
            console.print(f"[green]✓[/green] Copied prompt: {name}")
        for name in skipped:
            console.print(f"Skipped existing prompt: {name}")

    except GacError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    console.print("\n[bold]Next steps:[/bold]")
    console.print(f"1. Fill in your credentials in [cyan]{profile_path}[/cyan]")
    console.print(f"2. Adjust the prompt templates in [cyan]{prompts_dir}[/cyan] if needed")
    console.print("3. Run [cyan]gac commit --help[/cyan] to see available options")


@cli.group()
def profile() -> None:
    """Profile management."""
    pass


@profile.command("list")
def profile_list() -> None:
    """List profiles defined in the profile file."""
    try:
        names = profile_manager.list_profiles()
    except GacError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if not names:
        console.print(f"No profiles found in {profile_manager.profile_path}")
        return

    for name in names:
        console.print(name)


@profile.command("show")
@click.option("--profile", "-p", "profile_name", default=DEFAULT_PROFILE, show_default=True)
def profile_show(profile_name: str) -> None:
    """Show resolved settings for a profile, with secrets masked."""
    try:
        values = profile_manager.resolve_values(profile_name)
    except GacError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    table = Table(title=f"Profile: {profile_name}")
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    for key in PROFILE_KEYS:
        value = values.get(key, "")
        table.add_row(key, mask_secret(value) if key in SECRET_KEYS else value)

    console.print(table)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
