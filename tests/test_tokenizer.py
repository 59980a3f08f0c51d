from __future__ import annotations

import pytest

from errwrap.rewrite.tokenizer import (
    is_balanced,
    scan_args,
    split_trailing_comment,
    tokenize_args,
)


def test_comma_inside_call_does_not_split() -> None:
    assert tokenize_args("f(a, b), c") == ["f(a, b)", "c"]


def test_single_argument_yields_one_token() -> None:
    assert tokenize_args("err") == ["err"]


@pytest.mark.parametrize(
    ("text", "top_level_commas"),
    [
        ("nil, err", 1),
        ("a,b ,  c", 2),
        ("x(1, y(2, 3)), z", 1),
        ('map[string]int{"a": 1, "b": 2}, nil', 1),
        ("values[i], ok, err", 2),
    ],
)
def test_token_count_and_join(text: str, top_level_commas: int) -> None:
    tokens = tokenize_args(text)
    assert len(tokens) == top_level_commas + 1
    normalized = ", ".join(part.strip() for part in _split_top_level(text))
    assert ", ".join(tokens) == normalized


def _split_top_level(text: str) -> list[str]:
    # Plain splitter for literal-free input with balanced brackets.
    parts = [""]
    depth = 0
    for char in text:
        if char == "," and depth == 0:
            parts.append("")
            continue
        if char in "([{":
            depth += 1
        elif char in ")]}":
            depth -= 1
        parts[-1] += char
    return parts


def test_quoted_commas_and_brackets_are_copied_through() -> None:
    assert tokenize_args('"a,b", err') == ['"a,b"', "err"]
    assert tokenize_args('errors.New("oops :("), nil') == ['errors.New("oops :(")', "nil"]
    assert is_balanced('errors.New("oops :("), nil')


def test_escaped_quote_stays_inside_string() -> None:
    assert tokenize_args(r'"a\",b", err') == [r'"a\",b"', "err"]


def test_raw_string_has_no_escapes() -> None:
    assert tokenize_args("`a\\`, err") == ["`a\\`", "err"]


def test_rune_literal_comma() -> None:
    assert tokenize_args("',', err") == ["','", "err"]


def test_unclosed_call_keeps_accumulating() -> None:
    scan = scan_args("f(a, b")
    assert scan.tokens == ("f(a, b",)
    assert scan.depth == 1
    assert not scan.balanced


def test_stray_closer_is_unbalanced() -> None:
    scan = scan_args("a), b")
    assert scan.went_negative
    assert scan.tokens == ("a), b",)
    assert not is_balanced("a), b")


def test_unterminated_string_is_unbalanced() -> None:
    assert not is_balanced('"abc, err')


def test_split_trailing_comment() -> None:
    assert split_trailing_comment("nil, err // done") == ("nil, err", " // done")
    assert split_trailing_comment('"http://x", err') == ('"http://x", err', "")
    assert split_trailing_comment("err") == ("err", "")
