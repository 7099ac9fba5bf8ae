"""Core workflow for commitkit: turning a draft into a commit."""
from pathlib import Path
from typing import List, Optional, Union

from rich.console import Console

from .commands import CommitCommand, GitCommand, InstallHooksCommand, UpdateChangelogCommand
from .commit_message import render
from .config import Config
from .git import get_identity, open_repo
from .models import Draft, Identity
from .observers import GitOperationObserver


class GitCommitter:
    """Handles repository operations using the Command Pattern."""

    def __init__(self, repo_path: Union[str, Path], console: Optional[Console] = None, no_verify: bool = False):
        self.repo = open_repo(repo_path)
        self.console = console or Console()
        self.no_verify = no_verify
        self.observers: List[GitOperationObserver] = []
        self.command_history: List[GitCommand] = []

    def add_observer(self, observer: GitOperationObserver) -> None:
        """Add an observer to be notified of operations."""
        self.observers.append(observer)

    def remove_observer(self, observer: GitOperationObserver) -> None:
        """Remove an observer from the notification list."""
        self.observers.remove(observer)

    async def execute_command(self, command: GitCommand) -> bool:
        """Execute a command and store it in history if successful."""
        for observer in self.observers:
            command.add_observer(observer)

        success = await command.execute()

        if success:
            self.command_history.append(command)

        return success

    async def undo_last_command(self) -> bool:
        """Undo the last executed command."""
        if not self.command_history:
            self.console.print("[yellow]No commands to undo[/yellow]")
            return False

        command = self.command_history.pop()
        return await command.undo()

    def identity(self) -> Identity:
        return get_identity(self.repo)

    def render(self, draft: Draft, config: Config) -> str:
        """Render a draft, resolving the git identity only when signing off."""
        sign_off = config.sign_off_commits if draft.sign_off is None else draft.sign_off
        identity = self.identity() if sign_off else None
        return render(draft, config, identity)

    async def commit(self, message: str) -> bool:
        """Commit the staged changes with an already rendered message."""
        command = CommitCommand(self.repo, message, self.console, no_verify=self.no_verify)
        return await self.execute_command(command)

    async def update_changelog(self, draft: Draft, config: Config) -> bool:
        command = UpdateChangelogCommand(self.repo, draft, config.changelog_file, self.console)
        return await self.execute_command(command)

    async def install_hooks(self, force: bool = False) -> bool:
        command = InstallHooksCommand(self.repo, self.console, force=force)
        return await self.execute_command(command)
