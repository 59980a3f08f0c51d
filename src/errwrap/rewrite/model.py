from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal

MatchKind = Literal["exact", "prefix"]


class WrapCategory(StrEnum):
    CURRENT_ERROR = "current_error"
    NEW_ERROR = "new_error"
    FORMATTED_ERROR = "formatted_error"
    LOGGED_ERROR = "logged_error"


class LineStatus(StrEnum):
    NOT_RETURN = "not_return"
    SUPPRESSED = "suppressed"
    UNBALANCED = "unbalanced"
    UNCHANGED = "unchanged"
    REWRITTEN = "rewritten"
    COLLAPSED = "collapsed"


@dataclass(frozen=True)
class WrapForm:
    category: WrapCategory
    match: MatchKind
    text: str

    def matches(self, token: str) -> bool:
        if self.match == "exact":
            return token == self.text
        return token.startswith(self.text)


DEFAULT_WRAP_FORMS: tuple[WrapForm, ...] = (
    WrapForm(WrapCategory.CURRENT_ERROR, "exact", "err"),
    WrapForm(WrapCategory.NEW_ERROR, "prefix", "errors.New"),
    WrapForm(WrapCategory.FORMATTED_ERROR, "prefix", "fmt.Errorf"),
    WrapForm(WrapCategory.LOGGED_ERROR, "prefix", "log.Error"),
)


@dataclass(frozen=True)
class WrapPolicy:
    wrap_call: str = "errors.Wrap"
    family_prefix: str = "errors."
    forms: tuple[WrapForm, ...] = DEFAULT_WRAP_FORMS
    suppression_marker: str = "nowrap"
    comment_prefix: str = "//"

    def wrap(self, token: str) -> str:
        return f"{self.wrap_call}({token})"


DEFAULT_POLICY = WrapPolicy()


@dataclass(frozen=True)
class RewriteRule:
    pattern: str
    replacement: str

    @classmethod
    def parse(cls, text: str) -> "RewriteRule":
        pattern, sep, replacement = text.partition("->")
        if not sep or not pattern.strip() or not replacement.strip():
            raise ValueError(f"rewrite rule must look like 'pattern -> replacement': {text!r}")
        return cls(pattern=pattern.strip(), replacement=replacement.strip())

    def __str__(self) -> str:
        return f"{self.pattern} -> {self.replacement}"


DEFAULT_REWRITE_RULES: tuple[RewriteRule, ...] = (
    RewriteRule('"errors"', '"github.com/ddollar/errors"'),
    RewriteRule('"github.com/pkg/errors"', '"github.com/ddollar/errors"'),
    RewriteRule("errors.WithStack", "errors.Wrap"),
    RewriteRule("fmt.Errorf", "errors.Errorf"),
)


@dataclass(frozen=True)
class LineRewrite:
    original: str
    rewritten: str
    status: LineStatus
    wrapped: tuple[WrapCategory, ...] = field(default_factory=tuple)

    @property
    def changed(self) -> bool:
        return self.original != self.rewritten
