"""Repository helpers built on GitPython."""
import os
from pathlib import Path
from typing import Optional, Union

from git import InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import GitCommandError

from .errors import GitError
from .models import Identity


def open_repo(path: Union[str, Path]) -> Repo:
    """Open the repository containing ``path``."""
    try:
        return Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise GitError(f"Not in a git repository: {path}") from e


def has_staged_changes(repo: Repo) -> bool:
    """Check whether the index differs from HEAD."""
    try:
        if not repo.head.is_valid():
            # Unborn branch: anything in the index is staged
            return len(repo.index.entries) > 0
        return bool(repo.index.diff(repo.head.commit))
    except GitCommandError as e:
        raise GitError(f"Failed to check for staged changes: {e}") from e


def get_identity(repo: Optional[Repo] = None) -> Identity:
    """Resolve the author identity for the Signed-off-by trailer.

    Reads ``user.name`` and ``user.email`` from git config and falls back to
    ``GIT_AUTHOR_NAME`` / ``GIT_AUTHOR_EMAIL``.

    Raises:
        GitError: If no complete identity is configured
    """
    name = email = None
    if repo is not None:
        reader = repo.config_reader()
        name = reader.get_value("user", "name", "") or None
        email = reader.get_value("user", "email", "") or None

    name = name or os.environ.get("GIT_AUTHOR_NAME")
    email = email or os.environ.get("GIT_AUTHOR_EMAIL")

    if not name or not email:
        raise GitError(
            "Unable to determine author identity; set user.name and user.email in git config"
        )
    return Identity(str(name), str(email))
