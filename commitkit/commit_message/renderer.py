"""Rendering of validated drafts into commit message text.

Format:
    [<emoji> ]<type>[(<scope>)]: <subject>

    <body>

    <footer>

    Signed-off-by: <name> <<email>>
"""
from typing import List, Optional

from ..config import Config
from ..emoji import get_emoji_for_type
from ..errors import InvalidDraft
from ..models import Draft, Identity
from .validator import validate

SIGN_OFF_TRAILER = "Signed-off-by"


def render_header(commit_type: str, scope: Optional[str], subject: str, config: Config) -> str:
    """Build the header line for a type, scope and subject."""
    header = commit_type
    if scope:
        header += f"({scope})"
    header += f": {subject.strip()}"

    if config.use_emoji:
        emoji = get_emoji_for_type(commit_type, config.emojis)
        if emoji:
            header = f"{emoji} {header}"
    return header


def clean_block(text: Optional[str]) -> str:
    """Strip trailing whitespace per line and surrounding blank lines."""
    if not text:
        return ""
    lines = [line.rstrip() for line in text.splitlines()]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


def sign_off_line(identity: Identity) -> str:
    return f"{SIGN_OFF_TRAILER}: {identity}"


def render(draft: Draft, config: Config, identity: Optional[Identity] = None) -> str:
    """Render a draft as commit message text.

    Args:
        draft: The draft to render; it must pass validation against ``config``
        config: The configuration the draft was validated with
        identity: Author identity, required when the draft is signed off

    Returns:
        str: The commit message, without a trailing newline

    Raises:
        InvalidDraft: If the draft does not validate, or sign-off is requested
            without an identity
    """
    errors = validate(draft, config)
    if errors:
        raise InvalidDraft(errors)

    sign_off = config.sign_off_commits if draft.sign_off is None else draft.sign_off
    if sign_off and identity is None:
        raise InvalidDraft(reason="sign-off requested but no identity was supplied")

    parts: List[str] = [render_header(draft.type, draft.scope, draft.subject, config)]

    body = clean_block(draft.body)
    if body:
        parts.extend(["", body])

    footer = clean_block(draft.footer)
    if footer:
        parts.extend(["", footer])

    if sign_off:
        trailer = sign_off_line(identity)
        if parts[-1].splitlines()[-1] != trailer:
            parts.extend(["", trailer])

    return "\n".join(parts)
