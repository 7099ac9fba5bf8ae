"""Shared models for commitkit."""
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from .config import Config


class Prefix(BaseModel):
    """A commit type offered to the user."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Commit type, e.g. feat")
    description: str = Field(default="", description="Shown next to the type in the prompt")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("prefix title must not be empty")
        return v


class Identity(NamedTuple):
    """Author identity used for the Signed-off-by trailer."""

    name: str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass
class Draft:
    """Commit message fields collected before validation.

    ``None`` marks a field that has not been supplied yet.
    """

    type: Optional[str] = None
    scope: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    footer: Optional[str] = None
    sign_off: Optional[bool] = None

    @classmethod
    def for_config(cls, config: "Config") -> "Draft":
        return cls(sign_off=config.sign_off_commits)

    def merge(self, other: "Draft") -> "Draft":
        """Fill fields that are unset here from ``other``."""
        for f in fields(self):
            if getattr(self, f.name) is None:
                setattr(self, f.name, getattr(other, f.name))
        return self
