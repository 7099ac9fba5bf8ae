"""Command for adding a commit to the changelog."""

from typing import Optional

from git import Repo
from rich.console import Console

from ..changelog import ChangelogManager
from ..errors import ChangelogError
from ..models import Draft
from .base import GitCommand


class UpdateChangelogCommand(GitCommand):
    """Command for adding a changelog entry for a committed draft.

    Undo restores the file to its previous content, or removes it when the
    command created it.

    Attributes:
        manager (ChangelogManager): Changelog for the repository
        draft (Draft): The validated draft that was committed
    """

    def __init__(
        self,
        repo: Repo,
        draft: Draft,
        changelog_file: str = "CHANGELOG.md",
        console: Optional[Console] = None,
    ):
        super().__init__(repo, console)
        root = self.working_dir
        self.manager = ChangelogManager(root / changelog_file, root.name)
        self.draft = draft
        self._previous: Optional[str] = None
        self._executed = False

    async def execute(self) -> bool:
        path = self.manager.file_path
        try:
            self._previous = path.read_text(encoding="utf-8") if path.exists() else None
            self.manager.add_entry(
                self.draft.type,
                self.draft.scope,
                self.draft.subject,
                self.draft.body,
            )
        except (ChangelogError, OSError) as e:
            self.console.print(f"[red]Failed to update changelog: {str(e)}[/red]")
            return False

        self._executed = True
        await self.notify("on_changelog_updated", path)
        return True

    async def undo(self) -> bool:
        if not self._executed:
            self.console.print("[yellow]No changelog update to undo[/yellow]")
            return False

        path = self.manager.file_path
        try:
            if self._previous is None:
                path.unlink()
            else:
                path.write_text(self._previous, encoding="utf-8")
        except OSError as e:
            self.console.print(f"[red]Failed to restore changelog: {str(e)}[/red]")
            return False

        self._executed = False
        return True
