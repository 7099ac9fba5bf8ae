"""Interactive collection of draft fields."""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from .commit_message import validate
from .config import Config
from .errors import DraftRejected, ValidationError
from .models import Draft, Prefix

FIELD_ORDER = ("type", "scope", "subject", "body", "footer")


class Prompter(ABC):
    """Interaction methods used to build a draft."""

    @abstractmethod
    def prompt_type(self, prefixes: Sequence[Prefix]) -> str:
        pass

    @abstractmethod
    def prompt_scope(self, scopes: Sequence[str]) -> str:
        pass

    @abstractmethod
    def prompt_subject(self, min_length: int, max_length: int) -> str:
        pass

    @abstractmethod
    def prompt_body(self) -> str:
        pass

    @abstractmethod
    def prompt_footer(self) -> str:
        pass

    @abstractmethod
    def prompt_value(self, name: str) -> str:
        """Ask for the value of a template placeholder."""
        pass

    @abstractmethod
    def show_errors(self, errors: List[ValidationError]) -> None:
        pass

    @abstractmethod
    def confirm(self, question: str, default: bool = True) -> bool:
        pass


class RichPrompter(Prompter):
    """Terminal prompter built on rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _select(self, title: str, options: List[str], default: int = 1) -> int:
        """Show a numbered list and return the 0-based choice."""
        self.console.print(f"[bold]{title}[/bold]")
        for number, option in enumerate(options, start=1):
            self.console.print(f"  [cyan]{number:>2}[/cyan]  {option}")
        choices = [str(n) for n in range(1, len(options) + 1)]
        return IntPrompt.ask(
            "Choice", console=self.console, choices=choices, default=default, show_choices=False
        ) - 1

    def prompt_type(self, prefixes: Sequence[Prefix]) -> str:
        width = max(len(p.title) for p in prefixes)
        options = [f"{p.title:<{width}}  [dim]{p.description}[/dim]" for p in prefixes]
        return prefixes[self._select("Select commit type", options)].title

    def prompt_scope(self, scopes: Sequence[str]) -> str:
        if not scopes:
            return Prompt.ask("Scope (optional)", console=self.console, default="", show_default=False).strip()
        index = self._select("Select scope (optional)", ["None", *scopes])
        return "" if index == 0 else scopes[index - 1]

    def prompt_subject(self, min_length: int, max_length: int) -> str:
        return Prompt.ask(
            f"Enter commit subject ({min_length}-{max_length} characters)", console=self.console
        ).strip()

    def _multiline(self, title: str) -> str:
        self.console.print(f"[bold]{title}[/bold] [dim](finish with an empty line)[/dim]")
        lines = []
        while True:
            line = self.console.input("")
            if not line.strip():
                break
            lines.append(line.rstrip())
        return "\n".join(lines)

    def prompt_body(self) -> str:
        return self._multiline("Enter commit body (leave empty to skip)")

    def prompt_footer(self) -> str:
        return self._multiline("Enter commit footer, e.g. 'Closes #12' (leave empty to skip)")

    def prompt_value(self, name: str) -> str:
        return Prompt.ask(f"Enter value for [cyan]{name}[/cyan]", console=self.console)

    def show_errors(self, errors: List[ValidationError]) -> None:
        for error in errors:
            self.console.print(f"[red]✗ {error.message}[/red]")

    def confirm(self, question: str, default: bool = True) -> bool:
        return Confirm.ask(question, console=self.console, default=default)


def ask_field(prompter: Prompter, field: str, config: Config) -> str:
    if field == "type":
        return prompter.prompt_type(config.prefixes)
    if field == "scope":
        return prompter.prompt_scope(config.scopes)
    if field == "subject":
        return prompter.prompt_subject(config.min_subject_len, config.max_subject_len)
    if field == "body":
        return prompter.prompt_body()
    if field == "footer":
        return prompter.prompt_footer()
    raise ValueError(f"Unknown draft field: {field}")


def collect_draft(
    prompter: Prompter,
    config: Config,
    draft: Optional[Draft] = None,
    max_attempts: int = 3,
) -> Draft:
    """Fill the unset fields of a draft and re-ask until it validates.

    Only fields named by validation errors are asked again.

    Raises:
        DraftRejected: If the draft is still invalid after ``max_attempts``
            rounds of validation
    """
    draft = draft or Draft.for_config(config)
    if draft.sign_off is None:
        draft.sign_off = config.sign_off_commits

    for field in FIELD_ORDER:
        if getattr(draft, field) is None:
            setattr(draft, field, ask_field(prompter, field, config))

    errors = validate(draft, config)
    attempts = 1
    while errors:
        prompter.show_errors(errors)
        if attempts >= max_attempts:
            raise DraftRejected(errors)
        for field in dict.fromkeys(error.field for error in errors):
            setattr(draft, field, ask_field(prompter, field, config))
        errors = validate(draft, config)
        attempts += 1

    return draft
