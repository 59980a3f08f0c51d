from errwrap.rewrite.classifier import build_wrap_forms, classify, is_wrappable
from errwrap.rewrite.engine import (
    collapse_double_wrap,
    is_suppressed,
    process_line,
    process_line_detailed,
    process_lines,
    rewrite_line,
    rewrite_line_detailed,
)
from errwrap.rewrite.model import (
    DEFAULT_POLICY,
    DEFAULT_REWRITE_RULES,
    DEFAULT_WRAP_FORMS,
    LineRewrite,
    LineStatus,
    RewriteRule,
    WrapCategory,
    WrapForm,
    WrapPolicy,
)
from errwrap.rewrite.tokenizer import (
    ArgumentScan,
    is_balanced,
    scan_args,
    split_trailing_comment,
    tokenize_args,
)

__all__ = [
    "ArgumentScan",
    "DEFAULT_POLICY",
    "DEFAULT_REWRITE_RULES",
    "DEFAULT_WRAP_FORMS",
    "LineRewrite",
    "LineStatus",
    "RewriteRule",
    "WrapCategory",
    "WrapForm",
    "WrapPolicy",
    "build_wrap_forms",
    "classify",
    "collapse_double_wrap",
    "is_balanced",
    "is_suppressed",
    "is_wrappable",
    "process_line",
    "process_line_detailed",
    "process_lines",
    "rewrite_line",
    "rewrite_line_detailed",
    "scan_args",
    "split_trailing_comment",
    "tokenize_args",
]
