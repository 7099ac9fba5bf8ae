"""Base command class for repository operations.

Commands wrap one side effect on the working repository (a commit, the
hook scripts, the changelog) so it can be undone, and report what they
did to their observers.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from git import Repo
from rich.console import Console

from ..observers import GitOperationObserver


class GitCommand(ABC):
    """Abstract base class for repository commands.

    Attributes:
        repo (Repo): The repository the command works on
        console (Console): Rich console for output
        observers (List[GitOperationObserver]): Observers told about each event
    """

    def __init__(self, repo: Repo, console: Optional[Console] = None):
        self.repo = repo
        self.console = console or Console()
        self.observers: List[GitOperationObserver] = []

    @property
    def working_dir(self) -> Path:
        return Path(self.repo.working_tree_dir)

    def add_observer(self, observer: GitOperationObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: GitOperationObserver) -> None:
        self.observers.remove(observer)

    async def notify(self, event: str, *args) -> None:
        """Call ``event`` (e.g. ``"on_commit_created"``) on every observer."""
        for observer in self.observers:
            await getattr(observer, event)(*args)

    @abstractmethod
    async def execute(self) -> bool:
        """Run the command; True when it succeeded."""

    @abstractmethod
    async def undo(self) -> bool:
        """Revert the command; True when there was something to revert."""
