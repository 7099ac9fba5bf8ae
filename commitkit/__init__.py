"""Conventional Commits message builder and validator."""

__version__ = "0.3.0"

from .commit_message import parse_message, render, validate
from .config import Config
from .models import Draft, Identity, Prefix
from .templates import resolve

__all__ = [
    "__version__",
    "Config",
    "Draft",
    "Identity",
    "Prefix",
    "parse_message",
    "render",
    "resolve",
    "validate",
]
