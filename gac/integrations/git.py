"""Git repository access via the git CLI."""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from gac.errors import GitError
from gac.utils.logger import get_logger
from gac.utils.shell import ShellError, ShellResult, run_command

logger = get_logger(__name__)

HEAD_BRANCH_PATTERN = re.compile(r"^\s*HEAD branch:\s*(\S+)\s*$", re.MULTILINE)


class GitRepository:
    """Version control operations on one working tree.

    Every call shells out to git in ``cwd``; nothing is cached except the
    default branch, which is resolved once.
    """

    def __init__(self, cwd: Optional[Union[str, Path]] = None, remote: str = "origin"):
        """Initialize git repository wrapper.

        Args:
            cwd: Working tree (defaults to the current directory)
            remote: Remote name used for pushes and default branch lookup
        """
        self.cwd = Path(cwd) if cwd else None
        self.remote = remote
        self._default_branch: Optional[str] = None

    def _git(self, *args: str) -> ShellResult:
        """Run a git subcommand, raising GitError on failure."""
        try:
            return run_command(["git", *args], cwd=self.cwd, check=True)
        except ShellError as e:
            detail = e.stderr.strip() or e.stdout.strip() or str(e)
            raise GitError(f"git {' '.join(args)} failed: {detail}") from e

    def current_branch(self) -> str:
        """Get the checked out branch name."""
        return self._git("rev-parse", "--abbrev-ref", "HEAD").stdout.strip()

    def default_branch(self) -> str:
        """Get the remote's default (HEAD) branch.

        Tries ``git remote show`` first, then the local origin/HEAD ref, and
        finally assumes ``main``.
        """
        if self._default_branch is not None:
            return self._default_branch

        branch = None
        try:
            output = self._git("remote", "show", self.remote).stdout
            match = HEAD_BRANCH_PATTERN.search(output)
            if match and match.group(1) != "(unknown)":
                branch = match.group(1)
        except GitError as e:
            logger.debug(f"Could not query remote HEAD branch: {e}")

        if branch is None:
            try:
                ref = self._git("symbolic-ref", f"refs/remotes/{self.remote}/HEAD").stdout.strip()
                branch = ref.split("/")[-1] or None
            except GitError as e:
                logger.debug(f"Could not read {self.remote}/HEAD: {e}")

        if branch is None:
            logger.warning("Could not detect default branch, assuming 'main'")
            branch = "main"

        self._default_branch = branch
        return branch

    def remote_url(self) -> str:
        """Get the configured URL of the remote."""
        return self._git("remote", "get-url", self.remote).stdout.strip()

    def diff(
        self,
        base: Optional[str] = None,
        head: Optional[str] = None,
        exclude: Iterable[str] = (),
    ) -> str:
        """Get a diff.

        Without a range this is the working tree against HEAD.

        Args:
            base: Base revision
            head: Head revision (requires base)
            exclude: Paths to leave out of the diff

        Returns:
            Diff text
        """
        args: List[str] = ["diff"]
        if base:
            args.append(base)
            if head:
                args.append(head)
        else:
            args.append("HEAD")

        excluded = list(exclude)
        if excluded:
            args.extend(["--", "."])
            args.extend(f":(exclude){path}" for path in excluded)

        return self._git(*args).stdout

    def stage_tracked(self) -> None:
        """Stage modifications and deletions of tracked files."""
        self._git("add", "-u")

    def commit(self, message: str) -> None:
        """Commit staged changes."""
        self._git("commit", "-m", message)
        logger.debug("Created commit")

    def push(self, force: bool = False) -> None:
        """Push the current HEAD to the remote."""
        args = ["push", self.remote, "HEAD"]
        if force:
            args.append("-f")
        self._git(*args)
        logger.debug(f"Pushed HEAD to {self.remote}")

    def create_branch(self, name: str) -> None:
        """Create and switch to a new branch."""
        self._git("checkout", "-b", name)
        logger.info(f"Switched to a new branch '{name}'")
