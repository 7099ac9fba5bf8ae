"""Command for creating git commits."""

import os
import tempfile
from typing import Optional

from git import Repo
from git.exc import GitCommandError
from rich.console import Console

from ..errors import GitError
from ..git import has_staged_changes
from .base import GitCommand


class CommitCommand(GitCommand):
    """Command for committing the staged changes with a rendered message.

    The message is passed to ``git commit -F`` through a temporary file so
    multi-line messages and the repository's own hooks behave as with a
    normal commit.

    Attributes:
        message (str): The rendered commit message
        commit_hash (Optional[str]): The hash of the created commit
    """

    def __init__(
        self,
        repo: Repo,
        message: str,
        console: Optional[Console] = None,
        no_verify: bool = False,
    ):
        """Initialize the commit command.

        Args:
            repo: The git repository to operate on
            message: Output of ``render`` for a validated draft
            console: Optional Rich console for output
            no_verify: Skip the repository's commit hooks
        """
        super().__init__(repo, console)
        self.message = message
        self.commit_hash: Optional[str] = None
        self.no_verify = no_verify

    async def execute(self) -> bool:
        """Create the commit and notify observers.

        Returns:
            bool: True if the commit was created, False otherwise
        """
        try:
            if not has_staged_changes(self.repo):
                self.console.print(
                    "[yellow]No staged changes to commit. Stage your changes with 'git add' first.[/yellow]"
                )
                return False

            with tempfile.NamedTemporaryFile(
                mode="w", encoding="utf-8", delete=False, suffix=".commitmsg"
            ) as f:
                f.write(self.message + "\n")
                temp_file = f.name

            args = ["-F", temp_file]
            if self.no_verify:
                args.append("--no-verify")

            try:
                self.repo.git.commit(*args)
                self.commit_hash = self.repo.head.commit.hexsha
            finally:
                try:
                    os.unlink(temp_file)
                except OSError:
                    pass

            await self.notify("on_commit_created", self.message, self.commit_hash)

            return True

        except (GitCommandError, GitError) as e:
            self.console.print(f"[red]Failed to create commit: {str(e)}[/red]")
            return False

    async def undo(self) -> bool:
        """Undo the commit, keeping its changes staged.

        Returns:
            bool: True if the commit was undone, False otherwise
        """
        if not self.commit_hash:
            self.console.print("[yellow]No commit to undo[/yellow]")
            return False

        try:
            if self.repo.head.commit.parents:
                self.repo.git.reset("--soft", "HEAD~1")
            else:
                # Root commit: drop the branch ref, the index stays as it was
                self.repo.git.update_ref("-d", "HEAD")

            undone = self.commit_hash
            self.commit_hash = None
            await self.notify("on_commit_undone", undone)
            return True

        except GitCommandError as e:
            self.console.print(f"[red]Failed to undo commit: {str(e)}[/red]")
            return False
