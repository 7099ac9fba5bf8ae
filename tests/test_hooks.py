"""Tests for git hook installation and hook-side message handling."""
import os
from pathlib import Path

import pytest

from commitkit.config import Config
from commitkit.errors import HookError, InvalidFormat, SubjectTooLong, UnknownType
from commitkit.hooks import (
    HOOK_MARKER,
    GitHookManager,
    prepare_commit_message,
    validate_message_file,
    validate_message_text,
)


@pytest.fixture
def manager(temp_git_repo):
    return GitHookManager(temp_git_repo)


def test_install_all(manager):
    installed = manager.install_all()
    assert installed == ["commit-msg", "prepare-commit-msg"]

    for name in installed:
        hook_path = manager.hooks_dir / name
        assert hook_path.is_file()
        assert os.access(hook_path, os.X_OK)
        assert HOOK_MARKER in hook_path.read_text()
        assert manager.is_hook_installed(name)
        assert manager.is_commitkit_hook(name)


def test_commit_msg_hook_calls_validate(manager):
    path = manager.install_commit_msg_hook()
    assert 'commitkit --validate "$1"' in path.read_text()


def test_prepare_hook_calls_prepare(manager):
    path = manager.install_prepare_commit_msg_hook()
    assert "commitkit --prepare-msg" in path.read_text()


def test_reinstall_own_hook(manager):
    manager.install_commit_msg_hook()
    manager.install_commit_msg_hook()
    assert manager.is_commitkit_hook("commit-msg")


def test_foreign_hook_requires_force(manager):
    manager.hooks_dir.mkdir(parents=True, exist_ok=True)
    foreign = manager.hooks_dir / "commit-msg"
    foreign.write_text("#!/bin/sh\nexit 0\n")

    with pytest.raises(HookError):
        manager.install_commit_msg_hook()
    assert foreign.read_text() == "#!/bin/sh\nexit 0\n"

    manager.install_commit_msg_hook(force=True)
    assert manager.is_commitkit_hook("commit-msg")


def test_install_outside_repo(tmp_path):
    with pytest.raises(HookError):
        GitHookManager(tmp_path).install_all()


def test_unknown_hook(manager):
    with pytest.raises(HookError):
        manager.install_hook("pre-push")


def test_remove_hook(manager):
    manager.install_all()
    assert manager.remove_hook("commit-msg") is True
    assert manager.remove_hook("commit-msg") is False
    assert not manager.is_hook_installed("commit-msg")


def test_find_repo_root(temp_git_repo):
    nested = Path(temp_git_repo) / "a" / "b"
    nested.mkdir(parents=True)
    assert GitHookManager.find_repo_root(nested) == Path(temp_git_repo).resolve()


def test_find_repo_root_outside_repo(tmp_path):
    assert GitHookManager.find_repo_root(tmp_path) is None


def test_validate_message_text_valid(config):
    text = "feat(core): add parser\n\nBody\n\n# Please enter the commit message\n"
    assert validate_message_text(text, config) == []


def test_validate_message_text_invalid_format(config):
    errors = validate_message_text("Added some stuff\n", config)
    assert errors == [InvalidFormat("header", header="Added some stuff")]
    assert errors[0].message == "Invalid format. Expected: <type>[(scope)]: <subject>"


def test_validate_message_text_reports_all_errors():
    config = Config(max_subject_len=10)
    errors = validate_message_text("wip: a subject that is too long", config)
    assert [type(e) for e in errors] == [UnknownType, SubjectTooLong]


def test_validate_message_file(tmp_path, config):
    message_file = tmp_path / "COMMIT_EDITMSG"
    message_file.write_text("✨ feat: add parser\n", encoding="utf-8")
    assert validate_message_file(message_file, config) == []


def test_prepare_leaves_conventional_message(config):
    message = "fix(ui): align button\n\nDetails\n"
    assert prepare_commit_message(message, config) == message


def test_prepare_prefixes_free_form_message(config):
    assert prepare_commit_message("update readme\n\nMore text", config) == (
        "chore: update readme\n\nMore text"
    )


def test_prepare_uses_first_prefix_without_chore():
    config = Config(prefixes=["feat", "fix"])
    assert prepare_commit_message("update readme", config) == "feat: update readme"


def test_prepare_adds_emoji():
    config = Config(use_emoji=True)
    assert prepare_commit_message("update readme", config) == "🧹 chore: update readme"


def test_prepare_leaves_comment_only_message(config):
    message = "\n# Please enter the commit message\n"
    assert prepare_commit_message(message, config) == message
