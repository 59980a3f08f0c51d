from __future__ import annotations

from typing import List

from pydantic import BaseModel

from errwrap.rewrite.model import DEFAULT_REWRITE_RULES
from errwrap.tooling import DEFAULT_IMPORT_FIXER, DEFAULT_RULE_REWRITER


class WrapSectionDTO(BaseModel):
    call: str = "errors.Wrap"
    family_prefix: str = "errors."
    suppression_marker: str = "nowrap"
    comment_prefix: str = "//"
    error_identifier: str = "err"
    new_error_prefixes: List[str] = ["errors.New"]
    formatted_error_prefixes: List[str] = ["fmt.Errorf"]
    logged_error_prefixes: List[str] = ["log.Error"]


class WalkSectionDTO(BaseModel):
    extension: str = ".go"
    exclude: List[str] = ["vendor"]


class ToolsSectionDTO(BaseModel):
    rule_rewriter: List[str] = list(DEFAULT_RULE_REWRITER)
    import_fixer: List[str] = list(DEFAULT_IMPORT_FIXER)
    rules: List[str] = [str(rule) for rule in DEFAULT_REWRITE_RULES]


class ErrwrapConfigDTO(BaseModel):
    wrap: WrapSectionDTO = WrapSectionDTO()
    walk: WalkSectionDTO = WalkSectionDTO()
    tools: ToolsSectionDTO = ToolsSectionDTO()


class FileSummaryDTO(BaseModel):
    path: str
    changed_lines: int
    written: bool


class RunSummaryDTO(BaseModel):
    root: str
    dry_run: bool
    files_visited: int
    files_changed: int
    lines_changed: int
    files: List[FileSummaryDTO] = []
