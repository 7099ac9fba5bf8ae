"""Tests for draft validation."""
import pytest

from commitkit.commit_message import CommitMessageValidator, create_validation_chain, validate
from commitkit.commit_message.validation import ScopeHandler, SubjectHandler, TypeHandler
from commitkit.config import Config
from commitkit.errors import (
    EmptySubject,
    MultilineSubject,
    SubjectTooLong,
    SubjectTooShort,
    UnknownScope,
    UnknownType,
)
from commitkit.models import Draft


def test_valid_draft_has_no_errors(config):
    draft = Draft(type="feat", scope="core", subject="add parser")
    assert validate(draft, config) == []


def test_subject_at_bounds_is_valid():
    config = Config(min_subject_len=3, max_subject_len=10)
    assert validate(Draft(type="fix", subject="abc"), config) == []
    assert validate(Draft(type="fix", subject="a" * 10), config) == []


def test_unknown_type(config):
    errors = validate(Draft(type="feature", subject="add parser"), config)
    assert len(errors) == 1
    assert isinstance(errors[0], UnknownType)
    assert errors[0].field == "type"
    assert errors[0].value == "feature"
    assert "feat" in errors[0].allowed


def test_type_is_case_sensitive(config):
    errors = validate(Draft(type="Feat", subject="add parser"), config)
    assert [type(e) for e in errors] == [UnknownType]


def test_missing_type(config):
    errors = validate(Draft(subject="add parser"), config)
    assert isinstance(errors[0], UnknownType)
    assert errors[0].message == "Commit type is required"


def test_unknown_scope(config):
    errors = validate(Draft(type="feat", scope="backend", subject="add parser"), config)
    assert len(errors) == 1
    assert isinstance(errors[0], UnknownScope)
    assert errors[0].field == "scope"


@pytest.mark.parametrize("scope", [None, ""])
def test_empty_scope_is_always_valid(config, scope):
    assert validate(Draft(type="feat", scope=scope, subject="add parser"), config) == []


def test_any_scope_allowed_without_configured_scopes():
    config = Config(scopes=[])
    assert validate(Draft(type="feat", scope="anything", subject="add parser"), config) == []


def test_subject_too_short_reports_bounds():
    config = Config(min_subject_len=3, max_subject_len=50)
    errors = validate(Draft(type="feat", subject="ab"), config)
    assert errors == [SubjectTooShort("subject", actual=2, minimum=3, maximum=50)]
    assert errors[0].message == "Subject too short (2 < 3)"


def test_subject_too_long_reports_bounds():
    config = Config(max_subject_len=10)
    errors = validate(Draft(type="feat", subject="a" * 11), config)
    assert errors == [SubjectTooLong("subject", actual=11, minimum=1, maximum=10)]


def test_subject_length_is_measured_trimmed():
    config = Config(min_subject_len=3, max_subject_len=5)
    assert validate(Draft(type="feat", subject="   abcde   "), config) == []


def test_subject_length_counts_characters():
    config = Config(max_subject_len=5)
    assert validate(Draft(type="feat", subject="héllo"), config) == []


@pytest.mark.parametrize("subject", [None, "", "   "])
def test_blank_subject_reports_only_empty(subject):
    config = Config(min_subject_len=3)
    errors = validate(Draft(type="feat", subject=subject), config)
    assert errors == [EmptySubject("subject")]


@pytest.mark.parametrize("subject", ["add parser\nsecond line", "add parser\r\nsecond line"])
def test_multiline_subject_is_rejected(config, subject):
    assert validate(Draft(type="feat", subject=subject), config) == [MultilineSubject("subject")]


def test_trailing_newline_in_subject_is_trimmed(config):
    assert validate(Draft(type="feat", subject="add parser\n"), config) == []


def test_all_errors_are_collected(config):
    draft = Draft(type="nope", scope="backend", subject="")
    errors = validate(draft, config)
    assert [type(e) for e in errors] == [UnknownType, UnknownScope, EmptySubject]
    assert [e.field for e in errors] == ["type", "scope", "subject"]


def test_body_and_footer_are_unconstrained(config):
    draft = Draft(type="feat", subject="add parser", body="x" * 500 + "   \n", footer="  ")
    assert validate(draft, config) == []


def test_validation_chain_order():
    chain = create_validation_chain()
    assert isinstance(chain, TypeHandler)
    assert isinstance(chain.next_handler, ScopeHandler)
    assert isinstance(chain.next_handler.next_handler, SubjectHandler)


def test_validator_facade(config):
    validator = CommitMessageValidator(config)
    assert validator.is_valid(Draft(type="docs", subject="update readme"))
    assert not validator.is_valid(Draft(type="docs", subject=""))
    assert validator.validate(Draft(type="docs", subject="")) == [EmptySubject("subject")]


def test_validator_with_custom_chain(config):
    validator = CommitMessageValidator(config, chain=SubjectHandler())
    assert validator.validate(Draft(type="unknown", subject="ok")) == []
