"""Commit message validation, rendering and parsing."""

from .parser import HEADER_PATTERN, match_header, parse_message
from .renderer import render, render_header
from .validation import ValidationHandler, create_validation_chain
from .validator import CommitMessageValidator, validate

__all__ = [
    'HEADER_PATTERN',
    'CommitMessageValidator',
    'ValidationHandler',
    'create_validation_chain',
    'match_header',
    'parse_message',
    'render',
    'render_header',
    'validate',
]
