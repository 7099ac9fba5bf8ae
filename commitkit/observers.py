"""Observer pattern for commitkit operations."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.console import Console


class GitOperationObserver(ABC):
    """Abstract base class for operation observers."""

    @abstractmethod
    async def on_commit_created(self, message: str, commit_hash: Optional[str]) -> None:
        """Called when a commit is created."""
        pass

    @abstractmethod
    async def on_commit_undone(self, commit_hash: str) -> None:
        """Called when a commit is undone."""
        pass

    @abstractmethod
    async def on_hooks_installed(self, hooks: List[str]) -> None:
        """Called when git hooks are installed."""
        pass

    @abstractmethod
    async def on_changelog_updated(self, path: Path) -> None:
        """Called when the changelog has been updated."""
        pass


class ConsoleLogObserver(GitOperationObserver):
    """Observer that logs operations to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def on_commit_created(self, message: str, commit_hash: Optional[str]) -> None:
        header = message.splitlines()[0] if message else ""
        short = f" {commit_hash[:7]}" if commit_hash else ""
        self.console.print(f"[green]Created commit{short}: {header}[/green]")

    async def on_commit_undone(self, commit_hash: str) -> None:
        self.console.print(f"[yellow]Undid commit {commit_hash[:7]}[/yellow]")

    async def on_hooks_installed(self, hooks: List[str]) -> None:
        self.console.print(f"[green]Installed git hooks: {', '.join(hooks)}[/green]")

    async def on_changelog_updated(self, path: Path) -> None:
        self.console.print(f"[green]Updated changelog: {path}[/green]")


class FileLogObserver(GitOperationObserver):
    """Observer that logs operations to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    async def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{timestamp} - {message}\n")

    async def on_commit_created(self, message: str, commit_hash: Optional[str]) -> None:
        header = message.splitlines()[0] if message else ""
        await self._log(f"Created commit {commit_hash or '?'}: {header}")

    async def on_commit_undone(self, commit_hash: str) -> None:
        await self._log(f"Undid commit {commit_hash}")

    async def on_hooks_installed(self, hooks: List[str]) -> None:
        await self._log(f"Installed hooks: {', '.join(hooks)}")

    async def on_changelog_updated(self, path: Path) -> None:
        await self._log(f"Updated changelog {path}")
