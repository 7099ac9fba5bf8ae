"""Error taxonomy for commitkit.

Validation problems are plain values returned by ``validate``; everything
else is an exception derived from ``CommitKitError``.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence


class CommitKitError(Exception):
    """Base class for all commitkit exceptions."""


class ConfigError(CommitKitError):
    """Raised when a configuration file cannot be read or is invalid."""


class TemplateError(CommitKitError):
    """Base class for template problems."""


class TemplateNotFound(TemplateError):
    """Raised when a named template does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Template '{name}' not found")
        self.name = name


class UnresolvedPlaceholder(TemplateError):
    """Raised when a template placeholder has no matching value."""

    def __init__(self, name: str):
        super().__init__(f"No value supplied for placeholder '{{{{{name}}}}}'")
        self.name = name


class MalformedMessage(CommitKitError):
    """Raised when raw message text has no conventional header."""


class HookError(CommitKitError):
    """Raised when a git hook cannot be installed."""


class ChangelogError(CommitKitError):
    """Raised when the changelog cannot be updated."""


class GitError(CommitKitError):
    """Raised when a git operation fails."""


@dataclass(frozen=True)
class ValidationError:
    """A single problem found in a draft.

    Attributes:
        field: Name of the draft field the problem belongs to
    """

    field: str

    @property
    def message(self) -> str:
        return f"Invalid {self.field}"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class UnknownType(ValidationError):
    value: str = ""
    allowed: Sequence[str] = ()

    @property
    def message(self) -> str:
        if not self.value:
            return "Commit type is required"
        return f"Unknown commit type '{self.value}' (expected one of: {', '.join(self.allowed)})"


@dataclass(frozen=True)
class UnknownScope(ValidationError):
    value: str = ""
    allowed: Sequence[str] = ()

    @property
    def message(self) -> str:
        return f"Unknown scope '{self.value}' (expected one of: {', '.join(self.allowed)})"


@dataclass(frozen=True)
class SubjectTooShort(ValidationError):
    actual: int = 0
    minimum: int = 0
    maximum: int = 0

    @property
    def message(self) -> str:
        return f"Subject too short ({self.actual} < {self.minimum})"


@dataclass(frozen=True)
class SubjectTooLong(ValidationError):
    actual: int = 0
    minimum: int = 0
    maximum: int = 0

    @property
    def message(self) -> str:
        return f"Subject too long ({self.actual} > {self.maximum})"


@dataclass(frozen=True)
class EmptySubject(ValidationError):
    @property
    def message(self) -> str:
        return "Subject cannot be empty"


@dataclass(frozen=True)
class MultilineSubject(ValidationError):
    @property
    def message(self) -> str:
        return "Subject must be a single line"


@dataclass(frozen=True)
class InvalidFormat(ValidationError):
    header: str = ""

    @property
    def message(self) -> str:
        return "Invalid format. Expected: <type>[(scope)]: <subject>"


class InvalidDraft(CommitKitError):
    """Raised when rendering a draft that has not passed validation."""

    def __init__(self, errors: Optional[List[ValidationError]] = None, reason: Optional[str] = None):
        self.errors = list(errors or [])
        if reason is None:
            reason = "; ".join(error.message for error in self.errors) or "draft is not valid"
        super().__init__(f"Cannot render invalid draft: {reason}")


class DraftRejected(CommitKitError):
    """Raised when a draft is still invalid after all prompt attempts."""

    def __init__(self, errors: List[ValidationError]):
        self.errors = list(errors)
        super().__init__("; ".join(error.message for error in self.errors))
