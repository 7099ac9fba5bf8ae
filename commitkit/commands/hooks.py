"""Command for installing commitkit's git hooks."""

from typing import List, Optional

from git import Repo
from rich.console import Console

from ..errors import HookError
from ..hooks import GitHookManager
from .base import GitCommand


class InstallHooksCommand(GitCommand):
    """Command for installing the commit-msg and prepare-commit-msg hooks.

    Attributes:
        manager (GitHookManager): Hook manager for the repository
        installed (List[str]): Hooks written by the last execute()
    """

    def __init__(self, repo: Repo, console: Optional[Console] = None, force: bool = False):
        super().__init__(repo, console)
        self.manager = GitHookManager(self.working_dir)
        self.force = force
        self.installed: List[str] = []

    async def execute(self) -> bool:
        try:
            self.installed = self.manager.install_all(force=self.force)
        except HookError as e:
            self.console.print(f"[red]Failed to install hooks: {str(e)}[/red]")
            return False

        await self.notify("on_hooks_installed", list(self.installed))
        return True

    async def undo(self) -> bool:
        if not self.installed:
            self.console.print("[yellow]No hooks to remove[/yellow]")
            return False

        try:
            for hook_name in self.installed:
                self.manager.remove_hook(hook_name)
        except HookError as e:
            self.console.print(f"[red]Failed to remove hooks: {str(e)}[/red]")
            return False

        self.installed = []
        return True
