from __future__ import annotations

import pytest

from errwrap.rewrite.classifier import build_wrap_forms, classify, is_wrappable
from errwrap.rewrite.model import DEFAULT_WRAP_FORMS, WrapCategory, WrapForm


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("err", True),
        ("nil", False),
        ('errors.New("x")', True),
        ('fmt.Errorf("x")', True),
        ("log.Error(x)", True),
        ("42", False),
        ("errors.Wrap(err)", False),
        ("error", False),
        ('"err"', False),
    ],
)
def test_is_wrappable(token: str, expected: bool) -> None:
    assert is_wrappable(token) is expected


def test_classify_reports_category() -> None:
    assert classify("err") is WrapCategory.CURRENT_ERROR
    assert classify('errors.New("x")') is WrapCategory.NEW_ERROR
    assert classify('fmt.Errorf("%d", n)') is WrapCategory.FORMATTED_ERROR
    assert classify("log.Error(err)") is WrapCategory.LOGGED_ERROR
    assert classify("value") is None


def test_prefix_forms_match_longer_names() -> None:
    assert classify("log.Errorf(x)") is WrapCategory.LOGGED_ERROR


def test_custom_forms_replace_defaults() -> None:
    forms = (WrapForm(WrapCategory.CURRENT_ERROR, "exact", "e"),)
    assert is_wrappable("e", forms)
    assert not is_wrappable("err", forms)


def test_build_wrap_forms_defaults_match_table() -> None:
    assert build_wrap_forms() == DEFAULT_WRAP_FORMS


def test_build_wrap_forms_skips_empty_entries() -> None:
    forms = build_wrap_forms(
        error_identifier="",
        new_error_prefixes=["", "trace.New"],
        formatted_error_prefixes=[],
        logged_error_prefixes=[],
    )
    assert forms == (WrapForm(WrapCategory.NEW_ERROR, "prefix", "trace.New"),)
