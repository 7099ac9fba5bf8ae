"""Git hook installation and hook-side message handling."""
import stat
from pathlib import Path
from typing import List, Optional, Union

from .commit_message import match_header, parse_message, validate
from .commit_message.renderer import render_header
from .config import Config
from .errors import HookError, InvalidFormat, MalformedMessage, ValidationError

HOOK_MARKER = "# Installed by commitkit"

COMMIT_MSG_HOOK = f"""#!/bin/sh
{HOOK_MARKER}
#
# Called by "git commit" with the name of the file that holds the commit
# message. A non-zero exit aborts the commit.

if command -v commitkit > /dev/null 2>&1; then
    commitkit --validate "$1"
    exit $?
fi

exit 0
"""

PREPARE_COMMIT_MSG_HOOK = f"""#!/bin/sh
{HOOK_MARKER}
#
# Called by "git commit" with the name of the message file, followed by the
# source of the message. Messages from merges, squashes and amends are left
# alone.

case "$2" in
    merge|squash|commit) exit 0 ;;
esac

if command -v commitkit > /dev/null 2>&1; then
    ORIG_MSG=$(cat "$1")
    if [ -n "$ORIG_MSG" ]; then
        commitkit --prepare-msg "$ORIG_MSG" > "$1.commitkit" && mv "$1.commitkit" "$1"
    fi
fi
"""

HOOK_SCRIPTS = {
    "commit-msg": COMMIT_MSG_HOOK,
    "prepare-commit-msg": PREPARE_COMMIT_MSG_HOOK,
}


class GitHookManager:
    """Installs and removes commitkit hooks in a repository."""

    def __init__(self, repo_path: Union[str, Path]):
        self.repo_path = Path(repo_path)

    @property
    def hooks_dir(self) -> Path:
        return self.repo_path / ".git" / "hooks"

    def is_git_repo(self) -> bool:
        return (self.repo_path / ".git").exists()

    @staticmethod
    def find_repo_root(start_dir: Union[str, Path]) -> Optional[Path]:
        """Walk up from ``start_dir`` to the directory holding ``.git``."""
        current = Path(start_dir).resolve()
        for candidate in (current, *current.parents):
            if (candidate / ".git").exists():
                return candidate
        return None

    def is_hook_installed(self, hook_name: str) -> bool:
        return (self.hooks_dir / hook_name).exists()

    def is_commitkit_hook(self, hook_name: str) -> bool:
        path = self.hooks_dir / hook_name
        return path.is_file() and HOOK_MARKER in path.read_text(encoding="utf-8", errors="replace")

    def install_hook(self, hook_name: str, force: bool = False) -> Path:
        """Write one hook script and make it executable.

        Raises:
            HookError: If the repository has no .git directory or a foreign
                hook is in the way and ``force`` is not set
        """
        if hook_name not in HOOK_SCRIPTS:
            raise HookError(f"Unknown hook: {hook_name}")
        if not self.is_git_repo():
            raise HookError(f"Not a git repository: {self.repo_path}")

        hook_path = self.hooks_dir / hook_name
        if hook_path.exists() and not force and not self.is_commitkit_hook(hook_name):
            raise HookError(
                f"A {hook_name} hook already exists at {hook_path}; use --force to replace it"
            )

        try:
            self.hooks_dir.mkdir(parents=True, exist_ok=True)
            hook_path.write_text(HOOK_SCRIPTS[hook_name], encoding="utf-8")
            mode = hook_path.stat().st_mode
            hook_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            raise HookError(f"Failed to write {hook_name} hook: {e}") from e
        return hook_path

    def install_commit_msg_hook(self, force: bool = False) -> Path:
        return self.install_hook("commit-msg", force)

    def install_prepare_commit_msg_hook(self, force: bool = False) -> Path:
        return self.install_hook("prepare-commit-msg", force)

    def install_all(self, force: bool = False) -> List[str]:
        for hook_name in HOOK_SCRIPTS:
            self.install_hook(hook_name, force)
        return list(HOOK_SCRIPTS)

    def remove_hook(self, hook_name: str) -> bool:
        """Remove a hook; returns False if it was not there."""
        hook_path = self.hooks_dir / hook_name
        if not hook_path.exists():
            return False
        try:
            hook_path.unlink()
        except OSError as e:
            raise HookError(f"Failed to remove {hook_name} hook: {e}") from e
        return True


def validate_message_text(text: str, config: Config) -> List[ValidationError]:
    """Parse a raw commit message and validate it."""
    try:
        draft = parse_message(text, config)
    except MalformedMessage:
        header = next((line for line in text.splitlines() if line.strip() and not line.startswith("#")), "")
        return [InvalidFormat("header", header=header)]
    return validate(draft, config)


def validate_message_file(path: Union[str, Path], config: Config) -> List[ValidationError]:
    text = Path(path).read_text(encoding="utf-8")
    return validate_message_text(text, config)


def prepare_commit_message(message: str, config: Config) -> str:
    """Turn a free-form message into a conventional one.

    Messages whose first line already has a conventional header are
    returned unchanged. Otherwise the first line becomes the subject of a
    ``chore`` commit, or of the first configured type when ``chore`` is not
    configured.
    """
    lines = message.splitlines()
    first = next(
        (i for i, line in enumerate(lines) if line.strip() and not line.startswith("#")),
        None,
    )
    # Nothing but git comments: leave it for the editor
    if first is None or match_header(lines[first], config):
        return message

    titles = config.prefix_titles
    default_type = "chore" if "chore" in titles else titles[0]
    lines[first] = render_header(default_type, None, lines[first], config)
    return "\n".join(lines[first:])
