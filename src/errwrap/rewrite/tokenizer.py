"""Split the argument list of a return statement into top-level tokens.

The scanner works on a single line of text. It tracks bracket depth so that
commas nested inside calls, index expressions or composite literals never
split a token, and it steps over string and rune literals so that brackets or
commas quoted inside them are copied through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass

_OPENERS = frozenset("([{")
_CLOSERS = frozenset(")]}")
_QUOTES = frozenset("\"'`")
_RAW_QUOTE = "`"


@dataclass(frozen=True)
class ArgumentScan:
    tokens: tuple[str, ...]
    depth: int
    went_negative: bool
    open_quote: str | None

    @property
    def balanced(self) -> bool:
        return self.depth == 0 and not self.went_negative and self.open_quote is None


def scan_args(text: str) -> ArgumentScan:
    parts: list[list[str]] = [[]]
    depth = 0
    went_negative = False
    quote: str | None = None
    escaped = False
    for char in text:
        if quote is not None:
            parts[-1].append(char)
            if escaped:
                escaped = False
            elif char == "\\" and quote != _RAW_QUOTE:
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char == "," and depth == 0:
            parts.append([])
            continue
        if char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth < 0:
                went_negative = True
        parts[-1].append(char)
    return ArgumentScan(
        tokens=tuple("".join(part).strip() for part in parts),
        depth=depth,
        went_negative=went_negative,
        open_quote=quote,
    )


def tokenize_args(text: str) -> list[str]:
    return list(scan_args(text).tokens)


def is_balanced(text: str) -> bool:
    return scan_args(text).balanced


def split_trailing_comment(text: str, comment_prefix: str = "//") -> tuple[str, str]:
    """Return ``(code, comment)`` where ``comment`` starts at the first
    unquoted ``comment_prefix``; ``comment`` keeps the whitespace in front of
    it so the two halves concatenate back to ``text``."""
    quote: str | None = None
    escaped = False
    index = 0
    while index < len(text):
        char = text[index]
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\" and quote != _RAW_QUOTE:
                escaped = True
            elif char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif comment_prefix and text.startswith(comment_prefix, index):
            code = text[:index].rstrip()
            return code, text[len(code):]
        index += 1
    return text, ""
