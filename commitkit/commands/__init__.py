"""Repository operations using the Command Pattern.

Example:
    ```python
    from commitkit.commands import CommitCommand
    from commitkit.observers import FileLogObserver

    commit_cmd = CommitCommand(repo, render(draft, config, identity))
    commit_cmd.add_observer(FileLogObserver("commitkit.log"))
    success = await commit_cmd.execute()

    # Undo the commit if needed
    success = await commit_cmd.undo()
    ```
"""

from .base import GitCommand
from .changelog import UpdateChangelogCommand
from .commit import CommitCommand
from .hooks import InstallHooksCommand

__all__ = [
    "GitCommand",
    "CommitCommand",
    "InstallHooksCommand",
    "UpdateChangelogCommand",
]
