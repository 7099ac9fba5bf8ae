"""Configuration management for commitkit."""
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional
import os

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
import tomli
import tomli_w

from .emoji import DEFAULT_EMOJIS
from .errors import ConfigError
from .models import Prefix

DEFAULT_CONFIG_FILENAME = ".commitkit.toml"
CONFIG_SECTION = "commitkit"

DEFAULT_PREFIXES = [
    ("feat", "A new feature"),
    ("fix", "A bug fix"),
    ("docs", "Documentation changes"),
    ("style", "Changes that do not affect code meaning"),
    ("refactor", "Code change that neither fixes a bug nor adds a feature"),
    ("perf", "Code change that improves performance"),
    ("test", "Adding missing tests or correcting existing tests"),
    ("build", "Changes that affect the build system or external dependencies"),
    ("ci", "Changes to CI configuration files and scripts"),
    ("chore", "Other changes that don't modify src or test files"),
    ("revert", "Reverts a previous commit"),
]

DEFAULT_SCOPES = ["core", "ui", "docs", "tests", "deps"]

ENV_MAPPING = {
    'COMMITKIT_SIGN_OFF': 'sign_off_commits',
    'COMMITKIT_USE_EMOJI': 'use_emoji',
    'COMMITKIT_MAX_SUBJECT_LEN': 'max_subject_len',
    'COMMITKIT_MIN_SUBJECT_LEN': 'min_subject_len',
    'COMMITKIT_TEMPLATES_DIR': 'templates_dir',
    'COMMITKIT_UPDATE_CHANGELOG': 'update_changelog',
}


def default_templates_dir() -> Path:
    return Path.home() / ".commitkit" / "templates"


class Config(BaseModel):
    """Configuration settings for commitkit.

    Instances are immutable. Command line overrides produce a new instance
    through ``with_overrides`` so the invariants are checked again.
    """

    model_config = ConfigDict(frozen=True)

    prefixes: List[Prefix] = Field(
        default_factory=lambda: [Prefix(title=t, description=d) for t, d in DEFAULT_PREFIXES],
        description="Commit types offered to the user, in display order"
    )

    scopes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SCOPES),
        description="Allowed scopes; an empty list accepts any scope"
    )

    max_subject_len: int = Field(
        default=72,
        description="Maximum length of the commit subject"
    )

    min_subject_len: int = Field(
        default=1,
        description="Minimum length of the commit subject"
    )

    sign_off_commits: bool = Field(
        default=False,
        description="Whether to add a Signed-off-by trailer by default"
    )

    use_emoji: bool = Field(
        default=False,
        description="Whether to prefix the header with the emoji for its type"
    )

    emojis: Mapping[str, str] = Field(
        default_factory=lambda: DEFAULT_EMOJIS,
        description="Emoji glyph per commit type"
    )

    templates_dir: Optional[Path] = Field(
        default_factory=default_templates_dir,
        description="Directory holding commit templates"
    )

    update_changelog: bool = Field(
        default=False,
        description="Whether to add an entry to the changelog after committing"
    )

    changelog_file: str = Field(
        default="CHANGELOG.md",
        description="Changelog path relative to the repository root"
    )

    @field_validator("prefixes", mode="before")
    @classmethod
    def coerce_prefixes(cls, v):
        """Accept plain strings as prefixes without a description."""
        if isinstance(v, list):
            return [{"title": p} if isinstance(p, str) else p for p in v]
        return v

    @field_validator("emojis", mode="after")
    @classmethod
    def freeze_emojis(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    @model_validator(mode="after")
    def check_invariants(self) -> "Config":
        if not self.prefixes:
            raise ValueError("at least one prefix is required")

        titles = [p.title for p in self.prefixes]
        duplicates = sorted({t for t in titles if titles.count(t) > 1})
        if duplicates:
            raise ValueError(f"duplicate prefix titles: {', '.join(duplicates)}")

        duplicates = sorted({s for s in self.scopes if self.scopes.count(s) > 1})
        if duplicates:
            raise ValueError(f"duplicate scopes: {', '.join(duplicates)}")

        if self.min_subject_len <= 0:
            raise ValueError("min_subject_len must be greater than 0")
        if self.min_subject_len > self.max_subject_len:
            raise ValueError(
                f"min_subject_len ({self.min_subject_len}) exceeds max_subject_len ({self.max_subject_len})"
            )
        return self

    @property
    def prefix_titles(self) -> List[str]:
        return [p.title for p in self.prefixes]

    @staticmethod
    def env_values() -> Dict[str, Any]:
        """Field values taken from COMMITKIT_* environment variables."""
        env_data = {}

        for env_var, field_name in ENV_MAPPING.items():
            if env_var in os.environ:
                value = os.environ[env_var].strip()

                if field_name in ['sign_off_commits', 'use_emoji', 'update_changelog']:
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        return env_data

    def __init__(self, **data):
        """Initialize config with environment variable support."""
        merged_data = {**self.env_values(), **data}

        super().__init__(**merged_data)

    def with_overrides(self, **overrides: Any) -> "Config":
        """Return a new, re-validated config with some fields replaced."""
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return type(self)(**data)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid configuration override: {e}") from e

    @staticmethod
    def home_config_path() -> Path:
        return Path.home() / DEFAULT_CONFIG_FILENAME

    @classmethod
    def find_config_file(cls, repo_path: Path) -> Optional[Path]:
        """Return the first existing config file for a repository, if any."""
        for candidate in (Path(repo_path) / DEFAULT_CONFIG_FILENAME, cls.home_config_path()):
            if candidate.is_file():
                return candidate
        return None

    @classmethod
    def load(cls, repo_path: Path, config_file: Optional[Path] = None) -> 'Config':
        """Load configuration.

        Args:
            repo_path: Path to the git repository
            config_file: Explicit config file, which must exist

        Returns:
            Config: Configuration with values from the file or defaults

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        if config_file is not None:
            config_file = Path(config_file)
            if not config_file.is_file():
                raise ConfigError(f"Config file not found: {config_file}")
            return cls.load_file(config_file)

        config_path = cls.find_config_file(repo_path)
        if config_path is None:
            try:
                return cls()
            except PydanticValidationError as e:
                raise ConfigError(f"Invalid configuration from environment: {e}") from e
        return cls.load_file(config_path)

    @staticmethod
    def read_file_data(config_path: Path) -> Dict[str, Any]:
        """Read the raw settings table from a TOML config file."""
        try:
            with Path(config_path).open('rb') as f:
                config_data = tomli.load(f)
        except OSError as e:
            raise ConfigError(f"Failed to read config file {config_path}: {e}") from e
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse config from {config_path}: {e}") from e

        section = config_data.get(CONFIG_SECTION)
        if isinstance(section, dict):
            config_data = section
        return config_data

    @classmethod
    def load_file(cls, config_path: Path) -> 'Config':
        config_data = cls.read_file_data(config_path)
        try:
            return cls(**config_data)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a TOML-friendly dict."""
        data: Dict[str, Any] = {
            "sign_off_commits": self.sign_off_commits,
            "use_emoji": self.use_emoji,
            "prefixes": [{"title": p.title, "description": p.description} for p in self.prefixes],
            "scopes": list(self.scopes),
            "max_subject_len": self.max_subject_len,
            "min_subject_len": self.min_subject_len,
            "update_changelog": self.update_changelog,
            "changelog_file": self.changelog_file,
        }
        if self.templates_dir is not None and Path(self.templates_dir) != default_templates_dir():
            data["templates_dir"] = str(self.templates_dir)
        if dict(self.emojis) != dict(DEFAULT_EMOJIS):
            data["emojis"] = dict(self.emojis)
        return data

    def save(self, repo_path: Path) -> Path:
        """Save configuration to the config file.

        Args:
            repo_path: Directory to write the config file into

        Returns:
            Path: The written file
        """
        config_path = Path(repo_path) / DEFAULT_CONFIG_FILENAME
        try:
            with config_path.open('wb') as f:
                tomli_w.dump(self.to_dict(), f)
        except OSError as e:
            raise ConfigError(f"Error saving config file: {e}") from e
        return config_path
