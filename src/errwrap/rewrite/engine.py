from __future__ import annotations

from functools import lru_cache
import re

from errwrap.rewrite.classifier import classify
from errwrap.rewrite.model import (
    DEFAULT_POLICY,
    LineRewrite,
    LineStatus,
    WrapCategory,
    WrapPolicy,
)
from errwrap.rewrite.tokenizer import scan_args, split_trailing_comment

_RETURN = "return "


@lru_cache(maxsize=None)
def _suppression_pattern(comment_prefix: str, marker: str) -> re.Pattern[str]:
    return re.compile(re.escape(comment_prefix) + r"(.*?)" + re.escape(marker))


@lru_cache(maxsize=None)
def _double_wrap_pattern(wrap_call: str, family_prefix: str) -> re.Pattern[str]:
    return re.compile(re.escape(wrap_call) + r"\(" + re.escape(family_prefix) + r"(.*?)\)\)")


def is_suppressed(text: str, policy: WrapPolicy = DEFAULT_POLICY) -> bool:
    pattern = _suppression_pattern(policy.comment_prefix, policy.suppression_marker)
    return pattern.search(text) is not None


def rewrite_line_detailed(line: str, policy: WrapPolicy = DEFAULT_POLICY) -> LineRewrite:
    trimmed = line.strip()
    if not trimmed.startswith(_RETURN):
        return LineRewrite(original=line, rewritten=line, status=LineStatus.NOT_RETURN)
    if is_suppressed(trimmed, policy):
        return LineRewrite(original=line, rewritten=line, status=LineStatus.SUPPRESSED)

    args, comment = split_trailing_comment(trimmed[len(_RETURN):], policy.comment_prefix)
    scan = scan_args(args)
    if not scan.balanced:
        return LineRewrite(original=line, rewritten=line, status=LineStatus.UNBALANCED)

    tokens = list(scan.tokens)
    wrapped: list[WrapCategory] = []
    for index, token in enumerate(tokens):
        category = classify(token, policy.forms)
        if category is None:
            continue
        tokens[index] = policy.wrap(token)
        wrapped.append(category)
    if not wrapped:
        return LineRewrite(original=line, rewritten=line, status=LineStatus.UNCHANGED)

    indent = line.split(_RETURN, 1)[0]
    trailing = line[len(line.rstrip()):]
    rewritten = f"{indent}{_RETURN}{', '.join(tokens)}{comment}{trailing}"
    return LineRewrite(
        original=line,
        rewritten=rewritten,
        status=LineStatus.REWRITTEN,
        wrapped=tuple(wrapped),
    )


def rewrite_line(line: str, policy: WrapPolicy = DEFAULT_POLICY) -> str:
    return rewrite_line_detailed(line, policy).rewritten


def collapse_double_wrap(line: str, policy: WrapPolicy = DEFAULT_POLICY) -> str:
    """Flatten ``wrap(family.call(...))`` to ``family.call(...)``.

    Only the shape closing on two adjacent parentheses is recognised; the
    match is non-greedy, so the first ``))`` after the inner call ends it.
    """
    pattern = _double_wrap_pattern(policy.wrap_call, policy.family_prefix)
    prefix = policy.family_prefix
    return pattern.sub(lambda match: f"{prefix}{match.group(1)})", line)


def process_line_detailed(line: str, policy: WrapPolicy = DEFAULT_POLICY) -> LineRewrite:
    result = rewrite_line_detailed(line, policy)
    if result.status is LineStatus.SUPPRESSED:
        return result
    collapsed = collapse_double_wrap(result.rewritten, policy)
    if collapsed == result.rewritten:
        return result
    return LineRewrite(
        original=line,
        rewritten=collapsed,
        status=LineStatus.COLLAPSED,
        wrapped=result.wrapped,
    )


def process_line(line: str, policy: WrapPolicy = DEFAULT_POLICY) -> str:
    return process_line_detailed(line, policy).rewritten


def process_lines(lines: list[str], policy: WrapPolicy = DEFAULT_POLICY) -> list[LineRewrite]:
    return [process_line_detailed(line, policy) for line in lines]
