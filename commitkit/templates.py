"""Commit message templates.

A template is a TOML file with an optional ``name`` and ``description`` and
any of the sections ``type``, ``scope``, ``subject``, ``body`` and
``footer``. Section text may contain ``{{placeholder}}`` tokens which are
filled from user supplied values in a single pass.

Example::

    name = "feature"
    description = "Template for new features"
    type = "feat"
    subject = "add {{feature_name}}"
    footer = "Closes #{{issue_number}}"
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Union
import re

import tomli
import tomli_w

from .commit_message.parser import HEADER_PATTERN
from .config import Config
from .errors import TemplateError, TemplateNotFound, UnresolvedPlaceholder
from .models import Draft

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_-]*)\s*\}\}")
SECTION_KEYS = ("type", "scope", "subject", "body", "footer")
TEMPLATE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
TEMPLATE_SUFFIX = ".toml"

TemplateLoader = Callable[[str], str]


@dataclass
class CommitTemplate:
    """A named set of section texts with placeholders."""

    name: str
    description: str = ""
    sections: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_toml(cls, raw: str, name: str) -> "CommitTemplate":
        """Parse template TOML; unknown keys are ignored."""
        try:
            data = tomli.loads(raw)
        except tomli.TOMLDecodeError as e:
            raise TemplateError(f"Failed to parse template '{name}': {e}") from e

        sections = {}
        for key in SECTION_KEYS:
            if key in data:
                if not isinstance(data[key], str):
                    raise TemplateError(f"Template '{name}': section '{key}' must be a string")
                sections[key] = data[key]

        return cls(
            name=str(data.get("name", name)),
            description=str(data.get("description", "")),
            sections=sections,
        )

    def to_toml(self) -> str:
        data = {"name": self.name, "description": self.description}
        data.update({k: self.sections[k] for k in SECTION_KEYS if k in self.sections})
        return tomli_w.dumps(data)

    def placeholders(self) -> List[str]:
        names: List[str] = []
        for key in SECTION_KEYS:
            for name in PLACEHOLDER_PATTERN.findall(self.sections.get(key, "")):
                if name not in names:
                    names.append(name)
        return names


DEFAULT_TEMPLATES = [
    CommitTemplate(
        name="feature",
        description="Template for new features",
        sections={
            "type": "feat",
            "subject": "add {{feature_name}}",
            "body": (
                "This change adds the ability to {{description}}\n\n"
                "The following functionality is now available:\n"
                "- {{point_1}}\n"
                "- {{point_2}}"
            ),
            "footer": "Closes #{{issue_number}}",
        },
    ),
    CommitTemplate(
        name="bugfix",
        description="Template for bug fixes",
        sections={
            "type": "fix",
            "subject": "resolve {{issue_description}}",
            "body": "This fixes an issue where {{problem_description}}\n\nRoot cause: {{root_cause}}",
            "footer": "Fixes #{{issue_number}}",
        },
    ),
    CommitTemplate(
        name="refactor",
        description="Template for code refactoring",
        sections={
            "type": "refactor",
            "subject": "restructure {{component_name}}",
            "body": (
                "This refactors {{component_name}} to improve {{goal}}\n\n"
                "Changes:\n"
                "- {{change_1}}\n"
                "- {{change_2}}"
            ),
        },
    ),
]


def substitute(text: str, values: Mapping[str, str]) -> str:
    """Replace every placeholder in one pass.

    Substituted values are not scanned again.

    Raises:
        UnresolvedPlaceholder: For the first placeholder without a value
    """
    def replace(match: re.Match) -> str:
        name = match.group(1)
        if name not in values:
            raise UnresolvedPlaceholder(name)
        return str(values[name])

    return PLACEHOLDER_PATTERN.sub(replace, text)


def placeholders(source: Union[str, CommitTemplate]) -> List[str]:
    """List placeholder names in first-seen order."""
    if isinstance(source, CommitTemplate):
        return source.placeholders()
    names: List[str] = []
    for name in PLACEHOLDER_PATTERN.findall(source):
        if name not in names:
            names.append(name)
    return names


class TemplateStore:
    """Templates stored as TOML files in a directory.

    The directory is created on first use and seeded with the default
    templates when it holds none.
    """

    def __init__(self, template_dir: Union[str, Path]):
        self.template_dir = Path(template_dir)

    def _ensure_directory(self) -> None:
        if not self.template_dir.exists():
            try:
                self.template_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise TemplateError(f"Failed to create template directory: {e}") from e

        if not any(self.template_dir.glob(f"*{TEMPLATE_SUFFIX}")):
            for template in DEFAULT_TEMPLATES:
                self.add(template)

    def path_for(self, name: str) -> Path:
        if not TEMPLATE_NAME_PATTERN.match(name):
            raise TemplateError(f"Invalid template name: {name!r}")
        return self.template_dir / f"{name}{TEMPLATE_SUFFIX}"

    def read_raw(self, name: str) -> str:
        """Return the raw TOML text of a template."""
        self._ensure_directory()
        path = self.path_for(name)
        if not path.is_file():
            raise TemplateNotFound(name)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateError(f"Failed to read template file {path}: {e}") from e

    def get(self, name: str) -> CommitTemplate:
        """Load a template; its name is always the file name it is stored under."""
        template = CommitTemplate.from_toml(self.read_raw(name), name)
        template.name = name
        return template

    def list(self) -> List[CommitTemplate]:
        self._ensure_directory()
        return [
            self.get(path.stem)
            for path in sorted(self.template_dir.glob(f"*{TEMPLATE_SUFFIX}"))
            if TEMPLATE_NAME_PATTERN.match(path.stem)
        ]

    def add(self, template: CommitTemplate) -> Path:
        path = self.path_for(template.name)
        try:
            path.write_text(template.to_toml(), encoding="utf-8")
        except OSError as e:
            raise TemplateError(f"Failed to write template file {path}: {e}") from e
        return path

    def delete(self, name: str) -> bool:
        path = self.path_for(name)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise TemplateError(f"Failed to delete template file {path}: {e}") from e
        return True


def default_loader(config: Config) -> TemplateLoader:
    if config.templates_dir is None:
        raise TemplateError("No templates directory configured")
    return TemplateStore(config.templates_dir).read_raw


def resolve(
    template_name: str,
    placeholder_values: Mapping[str, str],
    config: Config,
    loader: Optional[TemplateLoader] = None,
) -> Draft:
    """Expand a template into a partial draft.

    Sections the template omits stay ``None`` on the returned draft. The
    draft is not validated here.

    Args:
        template_name: Name of the template to load
        placeholder_values: Values for the ``{{name}}`` placeholders
        config: Active configuration
        loader: Returns the raw template text for a name; defaults to the
            configured templates directory

    Raises:
        TemplateNotFound: If the loader cannot find the template
        UnresolvedPlaceholder: If a placeholder has no value
    """
    loader = loader or default_loader(config)
    template = CommitTemplate.from_toml(loader(template_name), template_name)

    resolved = {
        key: substitute(template.sections[key], placeholder_values)
        for key in SECTION_KEYS
        if key in template.sections
    }

    draft = Draft(
        type=resolved.get("type"),
        scope=resolved.get("scope"),
        subject=resolved.get("subject"),
        body=resolved.get("body"),
        footer=resolved.get("footer"),
    )

    # A subject written as "type(scope): text" supplies the type and scope
    if draft.subject is not None and draft.type is None:
        match = HEADER_PATTERN.match(draft.subject.strip())
        if match:
            draft.type = match.group("type")
            if draft.scope is None:
                draft.scope = match.group("scope")
            draft.subject = match.group("subject").strip()

    return draft
