from __future__ import annotations

from pathlib import Path

import pytest

from errwrap.exceptions import ExternalToolError
from errwrap.walker import WalkSettings, iter_source_files, walk_tree


def _tree(root: Path, files: dict[str, str]) -> None:
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


_FILES = {
    "b.go": "package b\n\treturn err\n",
    "a/z.go": "package a\n\treturn nil, err\n",
    "a/notes.txt": "return err\n",
    "vendor/dep/v.go": "package dep\n\treturn err\n",
    "sub/vendor/k.go": "package k\n\treturn err\n",
    "c.go": "package c\n",
}


def test_iter_source_files_is_lexical_and_filtered(tmp_path: Path) -> None:
    _tree(tmp_path, _FILES)
    rel = [path.relative_to(tmp_path).as_posix() for path in iter_source_files(tmp_path)]
    assert rel == ["a/z.go", "b.go", "c.go", "sub/vendor/k.go"]


def test_iter_source_files_custom_settings(tmp_path: Path) -> None:
    _tree(tmp_path, _FILES)
    settings = WalkSettings(extension=".txt", exclude=("vendor", "sub"))
    rel = [path.relative_to(tmp_path).as_posix() for path in iter_source_files(tmp_path, settings)]
    assert rel == ["a/notes.txt"]


def test_walk_tree_runs_rules_then_wrap_then_imports(tmp_path: Path) -> None:
    _tree(tmp_path, _FILES)
    events: list[str] = []
    echoed: list[str] = []

    def _rules(path: Path) -> None:
        assert "errors.Wrap" not in path.read_text(encoding="utf-8")
        events.append("rules:" + path.name)

    def _imports(path: Path) -> None:
        events.append("imports:" + path.name)

    results = walk_tree(
        tmp_path,
        rule_rewriter=_rules,
        import_fixer=_imports,
        echo_fn=echoed.append,
    )
    assert echoed == [
        "processing: a/z.go",
        "processing: b.go",
        "processing: c.go",
        "processing: sub/vendor/k.go",
    ]
    assert events[:4] == ["rules:z.go", "imports:z.go", "rules:b.go", "imports:b.go"]
    assert [result.changed_lines for result in results] == [1, 1, 0, 1]
    assert (tmp_path / "b.go").read_text(encoding="utf-8") == "package b\n\treturn errors.Wrap(err)\n"
    assert (tmp_path / "vendor/dep/v.go").read_text(encoding="utf-8") == _FILES["vendor/dep/v.go"]


def test_walk_tree_stops_at_first_failure(tmp_path: Path) -> None:
    _tree(tmp_path, _FILES)

    def _rules(path: Path) -> None:
        raise ExternalToolError(["gofmt"], f"{path.name}: parse error")

    echoed: list[str] = []
    with pytest.raises(ExternalToolError, match="z.go: parse error"):
        walk_tree(tmp_path, rule_rewriter=_rules, echo_fn=echoed.append)
    assert echoed == ["processing: a/z.go"]
    assert (tmp_path / "b.go").read_text(encoding="utf-8") == _FILES["b.go"]


def test_walk_tree_dry_run_skips_tools(tmp_path: Path) -> None:
    _tree(tmp_path, _FILES)
    calls: list[Path] = []
    results = walk_tree(
        tmp_path,
        rule_rewriter=calls.append,
        import_fixer=calls.append,
        dry_run=True,
        echo_fn=lambda _line: None,
    )
    assert calls == []
    assert sum(result.changed_lines for result in results) == 3
    assert (tmp_path / "b.go").read_text(encoding="utf-8") == _FILES["b.go"]


def test_is_excluded_matches_root_relative_prefix() -> None:
    settings = WalkSettings()
    assert settings.is_excluded("vendor")
    assert settings.is_excluded("vendor/x.go")
    assert not settings.is_excluded("vendored/x.go")
    assert not settings.is_excluded("sub/vendor/x.go")
