"""Commit statistics over repository history."""
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from git.exc import GitCommandError

from .commit_message.parser import HEADER_PATTERN, strip_emoji
from .config import Config
from .emoji import DEFAULT_EMOJIS
from .errors import GitError
from .git import open_repo
from .models import Prefix

OTHER_TYPE = "other"
TOP_N = 5


@dataclass
class CommitRecord:
    author: str
    date: str
    message: str


@dataclass
class CommitStats:
    """Counts gathered from a list of commits."""

    total_commits: int = 0
    non_conventional: int = 0
    type_counts: Counter = field(default_factory=Counter)
    scope_counts: Counter = field(default_factory=Counter)
    contributors: Counter = field(default_factory=Counter)
    commits_by_date: Counter = field(default_factory=Counter)


def collect_stats(
    records: Iterable[CommitRecord],
    prefixes: Sequence[Prefix],
    emojis: Mapping[str, str] = DEFAULT_EMOJIS,
) -> CommitStats:
    """Bucket commits by configured type.

    Conventional headers whose type is not configured count as ``other``.
    """
    titles = {p.title for p in prefixes}
    stats = CommitStats()

    for record in records:
        stats.total_commits += 1
        stats.contributors[record.author] += 1
        stats.commits_by_date[record.date] += 1

        header = record.message.strip().splitlines()[0] if record.message.strip() else ""
        match = HEADER_PATTERN.match(strip_emoji(header, emojis))
        if not match:
            stats.non_conventional += 1
            continue

        commit_type = match.group("type")
        stats.type_counts[commit_type if commit_type in titles else OTHER_TYPE] += 1
        if match.group("scope"):
            stats.scope_counts[match.group("scope")] += 1

    return stats


def _percent(count: int, total: int) -> float:
    return (count / total) * 100.0 if total else 0.0


def format_summary(stats: CommitStats, days: Optional[int] = None) -> str:
    period = f"the past {days} days" if days else "all history"
    lines = [f"Commit statistics for {period}:", "", f"Total commits: {stats.total_commits}", ""]

    lines.append("Commit types:")
    for commit_type, count in stats.type_counts.most_common():
        lines.append(f"  {commit_type}: {count} ({_percent(count, stats.total_commits):.1f}%)")
    if stats.non_conventional:
        pct = _percent(stats.non_conventional, stats.total_commits)
        lines.append(f"  non-conventional: {stats.non_conventional} ({pct:.1f}%)")

    if stats.scope_counts:
        lines.extend(["", "Top scopes:"])
        for scope, count in stats.scope_counts.most_common(TOP_N):
            lines.append(f"  {scope}: {count}")

    if stats.contributors:
        lines.extend(["", "Top contributors:"])
        for author, count in stats.contributors.most_common(TOP_N):
            lines.append(f"  {author}: {count} ({_percent(count, stats.total_commits):.1f}%)")

    return "\n".join(lines)


class CommitAnalyzer:
    """Reads commit history from a repository."""

    def __init__(self, repo_path: Union[str, Path]):
        self.repo = open_repo(repo_path)

    def records(self, days: Optional[int] = None) -> List[CommitRecord]:
        if not self.repo.head.is_valid():
            return []

        kwargs = {}
        if days is not None:
            since = datetime.now(timezone.utc) - timedelta(days=days)
            kwargs["since"] = since.strftime("%Y-%m-%dT%H:%M:%S%z")

        try:
            return [
                CommitRecord(
                    author=commit.author.name or commit.author.email or "unknown",
                    date=commit.authored_datetime.date().isoformat(),
                    message=commit.message,
                )
                for commit in self.repo.iter_commits(**kwargs)
            ]
        except GitCommandError as e:
            raise GitError(f"Failed to read git log: {e}") from e

    def analyze(self, config: Config, days: Optional[int] = None) -> CommitStats:
        return collect_stats(self.records(days), config.prefixes, config.emojis)

    def get_type_summary(self, config: Config, days: Optional[int] = None) -> str:
        return format_summary(self.analyze(config, days), days)
