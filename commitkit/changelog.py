"""CHANGELOG.md maintenance in Keep a Changelog style."""
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from .errors import ChangelogError

TYPE_HEADINGS = {
    "feat": "Added",
    "fix": "Fixed",
    "perf": "Performance",
    "refactor": "Changed",
    "docs": "Documentation",
    "test": "Tests",
    "build": "Build",
    "ci": "CI",
    "chore": "Maintenance",
    "style": "Style",
    "revert": "Reverted",
}

UNRELEASED = "Unreleased"


class ChangelogManager:
    """Adds entries to a changelog file.

    Attributes:
        file_path (Path): The changelog file
        project_name (str): Name used in the file header
        version (Optional[str]): Version for a newly created section
    """

    def __init__(
        self,
        path: Union[str, Path],
        project_name: str,
        version: Optional[str] = None,
        today: Optional[date] = None,
    ):
        self.file_path = Path(path)
        self.project_name = project_name
        self.version = version
        self.today = today

    def _date(self) -> str:
        return (self.today or date.today()).isoformat()

    def header(self) -> str:
        return (
            "# Changelog\n\n"
            f"All notable changes to {self.project_name} will be documented in this file.\n\n"
            "The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.0.0/),\n"
            "and this project adheres to [Semantic Versioning](https://semver.org/spec/v2.0.0.html).\n"
        )

    def _read_lines(self) -> List[str]:
        try:
            return self.file_path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise ChangelogError(f"Failed to read changelog file: {e}") from e

    def _write_lines(self, lines: List[str]) -> None:
        try:
            self.file_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as e:
            raise ChangelogError(f"Failed to write changelog file: {e}") from e

    def add_entry(
        self,
        commit_type: str,
        scope: Optional[str],
        subject: str,
        body: Optional[str] = None,
    ) -> Path:
        """Insert an entry below the newest section header.

        The file is created with a standard header when missing, and a
        section is opened when the file has none.
        """
        if not self.file_path.exists():
            try:
                self.file_path.write_text(self.header(), encoding="utf-8")
            except OSError as e:
                raise ChangelogError(f"Failed to create changelog file: {e}") from e

        lines = self._read_lines()
        entry = self.format_entry(commit_type, scope, subject, body)

        section = next((i for i, line in enumerate(lines) if line.startswith("## ")), None)
        if section is not None:
            lines[section + 1:section + 1] = ["", *entry.splitlines()]
        else:
            while lines and not lines[-1].strip():
                lines.pop()
            version = self.version or UNRELEASED
            lines.extend(["", f"## {version} ({self._date()})", "", *entry.splitlines()])

        self._write_lines(lines)
        return self.file_path

    def format_entry(
        self,
        commit_type: str,
        scope: Optional[str],
        subject: str,
        body: Optional[str] = None,
    ) -> str:
        """Format one changelog bullet, with body lines as sub-bullets."""
        entry = f"- **{TYPE_HEADINGS.get(commit_type, commit_type)}**"
        if scope:
            entry += f" ({scope})"
        entry += f": {subject.strip()}"

        if body:
            for line in body.splitlines():
                if line.strip():
                    entry += f"\n  - {line.strip().lstrip('-* ').strip()}"
        return entry

    def update_version(self, new_version: str) -> Path:
        """Stamp the Unreleased section with a version and open a new one."""
        if not self.file_path.exists():
            raise ChangelogError("Changelog file does not exist")

        lines = self._read_lines()
        for i, line in enumerate(lines):
            if line.startswith(f"## {UNRELEASED}"):
                lines[i] = f"## {new_version} ({self._date()})"
                lines[i:i] = [f"## {UNRELEASED}", ""]
                break
        else:
            raise ChangelogError(f"No '{UNRELEASED}' section to release")

        self._write_lines(lines)
        return self.file_path
