"""Tests for git commands."""

from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
from git import Repo
from rich.console import Console

from commitkit.commands import CommitCommand, InstallHooksCommand, UpdateChangelogCommand
from commitkit.core import GitCommitter
from commitkit.errors import GitError
from commitkit.models import Draft
from commitkit.observers import FileLogObserver, GitOperationObserver


@pytest.fixture
def mock_console():
    """Mock console for testing."""
    console = Mock(spec=Console)
    console.print = Mock()
    return console


@pytest.fixture
def mock_observer():
    observer = Mock(spec=GitOperationObserver)
    observer.on_commit_created = AsyncMock()
    observer.on_commit_undone = AsyncMock()
    observer.on_hooks_installed = AsyncMock()
    observer.on_changelog_updated = AsyncMock()
    return observer


@pytest.mark.asyncio
async def test_commit_command(staged_git_repo, mock_observer):
    """Test creating and undoing a commit."""
    repo = Repo(staged_git_repo)
    message = "feat(core): add parser\n\n# not a comment for us\nBody line"
    command = CommitCommand(repo, message)
    command.add_observer(mock_observer)

    success = await command.execute()
    assert success is True

    assert len(list(repo.iter_commits())) == 2
    assert repo.head.commit.message.startswith("feat(core): add parser")
    mock_observer.on_commit_created.assert_awaited_once_with(message, repo.head.commit.hexsha)

    # Undo keeps the change staged
    undone_hash = command.commit_hash
    success = await command.undo()
    assert success is True
    assert len(list(repo.iter_commits())) == 1
    assert repo.index.diff(repo.head.commit)
    mock_observer.on_commit_undone.assert_awaited_once_with(undone_hash)


@pytest.mark.asyncio
async def test_commit_command_no_staged_changes(temp_git_repo, mock_console, mock_observer):
    repo = Repo(temp_git_repo)
    command = CommitCommand(repo, "feat: add parser", mock_console)
    command.add_observer(mock_observer)

    assert await command.execute() is False
    assert len(list(repo.iter_commits())) == 1
    mock_observer.on_commit_created.assert_not_awaited()
    assert "No staged changes" in mock_console.print.call_args[0][0]


@pytest.mark.asyncio
async def test_commit_command_no_verify(staged_git_repo):
    """A failing commit-msg hook is skipped with no_verify."""
    repo = Repo(staged_git_repo)
    hook = Path(staged_git_repo) / ".git" / "hooks" / "commit-msg"
    hook.parent.mkdir(parents=True, exist_ok=True)
    hook.write_text("#!/bin/sh\nexit 1\n")
    hook.chmod(0o755)

    failing = CommitCommand(repo, "feat: add parser", Mock(spec=Console))
    assert await failing.execute() is False

    command = CommitCommand(repo, "feat: add parser", no_verify=True)
    assert await command.execute() is True
    assert repo.head.commit.message.strip() == "feat: add parser"


@pytest.mark.asyncio
async def test_commit_and_undo_root_commit(empty_git_repo):
    repo = Repo(empty_git_repo)
    (Path(empty_git_repo) / "a.txt").write_text("a")
    repo.index.add(["a.txt"])

    command = CommitCommand(repo, "chore: initial import")
    assert await command.execute() is True
    assert await command.undo() is True
    assert not repo.head.is_valid()
    assert "a.txt" in [path for path, _ in repo.index.entries]


@pytest.mark.asyncio
async def test_undo_without_commit(temp_git_repo, mock_console):
    command = CommitCommand(Repo(temp_git_repo), "feat: x", mock_console)
    assert await command.undo() is False


@pytest.mark.asyncio
async def test_install_hooks_command(temp_git_repo, mock_observer):
    repo = Repo(temp_git_repo)
    command = InstallHooksCommand(repo)
    command.add_observer(mock_observer)

    assert await command.execute() is True
    hooks_dir = Path(temp_git_repo) / ".git" / "hooks"
    assert (hooks_dir / "commit-msg").exists()
    mock_observer.on_hooks_installed.assert_awaited_once_with(["commit-msg", "prepare-commit-msg"])

    assert await command.undo() is True
    assert not (hooks_dir / "commit-msg").exists()


@pytest.mark.asyncio
async def test_install_hooks_command_foreign_hook(temp_git_repo, mock_console):
    hook = Path(temp_git_repo) / ".git" / "hooks" / "commit-msg"
    hook.parent.mkdir(parents=True, exist_ok=True)
    hook.write_text("#!/bin/sh\nexit 0\n")

    command = InstallHooksCommand(Repo(temp_git_repo), mock_console)
    assert await command.execute() is False

    forced = InstallHooksCommand(Repo(temp_git_repo), mock_console, force=True)
    assert await forced.execute() is True


@pytest.mark.asyncio
async def test_update_changelog_command(temp_git_repo, mock_observer):
    repo = Repo(temp_git_repo)
    draft = Draft(type="feat", scope="core", subject="add parser")
    command = UpdateChangelogCommand(repo, draft)
    command.add_observer(mock_observer)

    changelog = Path(temp_git_repo) / "CHANGELOG.md"
    assert await command.execute() is True
    assert "- **Added** (core): add parser" in changelog.read_text()
    mock_observer.on_changelog_updated.assert_awaited_once_with(changelog)

    assert await command.undo() is True
    assert not changelog.exists()


@pytest.mark.asyncio
async def test_update_changelog_undo_restores_content(temp_git_repo):
    changelog = Path(temp_git_repo) / "HISTORY.md"
    changelog.write_text("# History\n\n## Unreleased\n")
    command = UpdateChangelogCommand(
        Repo(temp_git_repo), Draft(type="fix", subject="handle eof"), "HISTORY.md"
    )

    assert await command.execute() is True
    assert "- **Fixed**: handle eof" in changelog.read_text()
    assert await command.undo() is True
    assert changelog.read_text() == "# History\n\n## Unreleased\n"


@pytest.mark.asyncio
async def test_git_committer_history(staged_git_repo, mock_observer):
    committer = GitCommitter(staged_git_repo, Mock(spec=Console))
    committer.add_observer(mock_observer)

    assert await committer.commit("fix: handle eof") is True
    assert len(committer.command_history) == 1
    mock_observer.on_commit_created.assert_awaited_once()

    assert await committer.undo_last_command() is True
    assert committer.command_history == []
    assert await committer.undo_last_command() is False


@pytest.mark.asyncio
async def test_git_committer_file_log(staged_git_repo, tmp_path):
    log_file = tmp_path / "logs" / "commitkit.log"
    committer = GitCommitter(staged_git_repo, Mock(spec=Console))
    committer.add_observer(FileLogObserver(str(log_file)))

    assert await committer.commit("fix: handle eof\n\nBody") is True
    assert "Created commit" in log_file.read_text()
    assert "fix: handle eof" in log_file.read_text()


def test_git_committer_render_with_identity(temp_git_repo, config):
    committer = GitCommitter(temp_git_repo, Mock(spec=Console))
    draft = Draft(type="feat", subject="add parser", sign_off=True)
    assert committer.render(draft, config).endswith(
        "Signed-off-by: Jane Doe <jane@example.com>"
    )


def test_git_committer_outside_repository(tmp_path):
    with pytest.raises(GitError):
        GitCommitter(tmp_path)
