"""Draft validation entry points."""
from typing import List, Optional

from ..config import Config
from ..errors import ValidationError
from ..models import Draft
from .validation import ValidationHandler, create_validation_chain


class CommitMessageValidator:
    """Validates drafts against a configuration."""

    def __init__(self, config: Config, chain: Optional[ValidationHandler] = None):
        self.config = config
        self.validation_chain = chain or create_validation_chain()

    def validate(self, draft: Draft) -> List[ValidationError]:
        """Return every problem with the draft; an empty list means valid."""
        return self.validation_chain.handle(draft, self.config)

    def is_valid(self, draft: Draft) -> bool:
        return not self.validate(draft)


def validate(draft: Draft, config: Config) -> List[ValidationError]:
    """Validate a draft with the default chain."""
    return CommitMessageValidator(config).validate(draft)
