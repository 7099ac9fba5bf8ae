"""Emoji glyphs for commit types."""
from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_EMOJIS: Mapping[str, str] = MappingProxyType({
    "feat": "✨",
    "fix": "🐛",
    "docs": "📚",
    "style": "💎",
    "refactor": "♻️",
    "perf": "🚀",
    "test": "🧪",
    "build": "🏗️",
    "ci": "👷",
    "chore": "🧹",
    "revert": "⏪",
})


def get_emoji_for_type(commit_type: str, emojis: Mapping[str, str] = DEFAULT_EMOJIS) -> Optional[str]:
    """Return the glyph for a commit type, or None when there is no mapping."""
    return emojis.get(commit_type)
