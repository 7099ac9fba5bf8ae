"""Draft validation using a chain of handlers.

Every handler in the chain runs, so a single pass reports all problems
with a draft instead of stopping at the first one.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..config import Config
from ..errors import (
    EmptySubject,
    MultilineSubject,
    SubjectTooLong,
    SubjectTooShort,
    UnknownScope,
    UnknownType,
    ValidationError,
)
from ..models import Draft


class ValidationHandler(ABC):
    """Abstract base class for validation handlers."""

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, draft: Draft, config: Config) -> List[ValidationError]:
        """Run this handler and the rest of the chain, collecting all errors."""
        errors = list(self.validate(draft, config))
        if self.next_handler:
            errors.extend(self.next_handler.handle(draft, config))
        return errors

    @abstractmethod
    def validate(self, draft: Draft, config: Config) -> List[ValidationError]:
        """Validate one aspect of the draft."""
        pass


class TypeHandler(ValidationHandler):
    """Validates that the type is one of the configured prefixes."""

    def validate(self, draft: Draft, config: Config) -> List[ValidationError]:
        commit_type = draft.type or ""
        titles = config.prefix_titles
        if not commit_type or commit_type not in titles:
            return [UnknownType("type", value=commit_type, allowed=tuple(titles))]
        return []


class ScopeHandler(ValidationHandler):
    """Validates the scope against the configured scopes.

    An empty scope is always accepted, and so is any scope when no scopes
    are configured.
    """

    def validate(self, draft: Draft, config: Config) -> List[ValidationError]:
        if not draft.scope or not config.scopes:
            return []
        if draft.scope not in config.scopes:
            return [UnknownScope("scope", value=draft.scope, allowed=tuple(config.scopes))]
        return []


class SubjectHandler(ValidationHandler):
    """Validates that the trimmed subject is one non-empty line within bounds."""

    def validate(self, draft: Draft, config: Config) -> List[ValidationError]:
        subject = (draft.subject or "").strip()
        if not subject:
            return [EmptySubject("subject")]
        if "\n" in subject or "\r" in subject:
            return [MultilineSubject("subject")]

        length = len(subject)
        bounds = dict(actual=length, minimum=config.min_subject_len, maximum=config.max_subject_len)
        if length < config.min_subject_len:
            return [SubjectTooShort("subject", **bounds)]
        if length > config.max_subject_len:
            return [SubjectTooLong("subject", **bounds)]
        return []


def create_validation_chain() -> ValidationHandler:
    """Create the default validation chain."""
    subject = SubjectHandler()
    scope = ScopeHandler(subject)
    commit_type = TypeHandler(scope)

    return commit_type
