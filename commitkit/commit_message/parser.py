"""Parsing raw commit message text back into a draft."""
import re
from typing import List, Mapping, Optional

from ..config import Config
from ..errors import MalformedMessage
from ..models import Draft
from .renderer import SIGN_OFF_TRAILER

HEADER_PATTERN = re.compile(
    r"^(?P<type>[^\s():]+)(?:\((?P<scope>[^()\s]*)\))?: (?P<subject>.*)$"
)

# Footer lines as defined by git-interpret-trailers and Conventional Commits
TRAILER_PATTERN = re.compile(r"^(BREAKING CHANGE|[A-Za-z][A-Za-z0-9-]*)(: | #)\S")

SCISSORS_LINE = "# ------------------------ >8 ------------------------"


def strip_emoji(header: str, emojis: Mapping[str, str]) -> str:
    """Remove a leading configured emoji glyph and its separating space."""
    for glyph in sorted(set(emojis.values()), key=len, reverse=True):
        if header.startswith(glyph + " "):
            return header[len(glyph) + 1:]
    return header


def match_header(header: str, config: Config) -> Optional[re.Match]:
    return HEADER_PATTERN.match(strip_emoji(header.strip(), config.emojis))


def _message_lines(text: str) -> List[str]:
    """Drop git comment lines and everything below the scissors line."""
    lines = []
    for line in text.splitlines():
        if line.rstrip() == SCISSORS_LINE:
            break
        if line.startswith("#"):
            continue
        lines.append(line.rstrip())
    return lines


def _paragraphs(lines: List[str]) -> List[List[str]]:
    paragraphs: List[List[str]] = []
    current: List[str] = []
    for line in lines:
        if line.strip():
            current.append(line)
        elif current:
            paragraphs.append(current)
            current = []
    if current:
        paragraphs.append(current)
    return paragraphs


def parse_message(text: str, config: Config) -> Draft:
    """Split commit message text into draft fields.

    The header is split into type, scope and subject. The last paragraph
    becomes the footer when every line in it is a trailer, and a closing
    Signed-off-by line sets ``sign_off`` instead of staying in the text.

    Raises:
        MalformedMessage: If there is no header or it is not conventional
    """
    lines = _message_lines(text)
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise MalformedMessage("Empty commit message")

    header = lines[0]
    match = match_header(header, config)
    if not match:
        raise MalformedMessage(f"Header does not follow <type>[(scope)]: <subject>: {header!r}")

    draft = Draft(
        type=match.group("type"),
        scope=match.group("scope") or None,
        subject=match.group("subject").strip(),
        sign_off=False,
    )

    paragraphs = _paragraphs(lines[1:])

    if paragraphs and paragraphs[-1][-1].startswith(f"{SIGN_OFF_TRAILER}:"):
        draft.sign_off = True
        paragraphs[-1].pop()
        if not paragraphs[-1]:
            paragraphs.pop()

    if paragraphs and all(TRAILER_PATTERN.match(line) for line in paragraphs[-1]):
        draft.footer = "\n".join(paragraphs.pop())

    if paragraphs:
        draft.body = "\n\n".join("\n".join(p) for p in paragraphs)

    return draft
