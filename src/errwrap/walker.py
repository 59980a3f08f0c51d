from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Callable, Iterator

import typer

from errwrap.driver import FileResult, wrap_file
from errwrap.exceptions import SourceFileError
from errwrap.rewrite.model import DEFAULT_POLICY, WrapPolicy
from errwrap.tooling import PathHook

DEFAULT_EXTENSION = ".go"
DEFAULT_EXCLUDE: tuple[str, ...] = ("vendor",)


@dataclass(frozen=True)
class WalkSettings:
    extension: str = DEFAULT_EXTENSION
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE

    def is_excluded(self, rel_path: str) -> bool:
        for prefix in self.exclude:
            prefix = prefix.strip("/")
            if not prefix:
                continue
            if rel_path == prefix or rel_path.startswith(prefix + "/"):
                return True
        return False


def _sorted_entries(directory: Path) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as entries:
            return sorted(entries, key=lambda entry: entry.name)
    except OSError as exc:
        raise SourceFileError("list", directory, str(exc)) from exc


def _walk(root: Path, directory: Path, settings: WalkSettings) -> Iterator[Path]:
    for entry in _sorted_entries(directory):
        path = Path(entry.path)
        rel_path = path.relative_to(root).as_posix()
        if settings.is_excluded(rel_path):
            continue
        if entry.is_dir(follow_symlinks=False):
            yield from _walk(root, path, settings)
            continue
        if path.suffix != settings.extension:
            continue
        yield path


def iter_source_files(root: Path, settings: WalkSettings = WalkSettings()) -> Iterator[Path]:
    """Yield eligible source files under ``root`` in lexical order.

    Entries are sorted by name inside each directory and directories are
    descended where they sort, so ``a/z.go`` comes before ``b.go``.
    """
    yield from _walk(root, root, settings)


def walk_tree(
    root: Path,
    *,
    settings: WalkSettings = WalkSettings(),
    policy: WrapPolicy = DEFAULT_POLICY,
    rule_rewriter: PathHook | None = None,
    import_fixer: PathHook | None = None,
    dry_run: bool = False,
    echo_fn: Callable[[str], None] = typer.echo,
) -> list[FileResult]:
    results: list[FileResult] = []
    for path in iter_source_files(root, settings):
        echo_fn(f"processing: {path.relative_to(root).as_posix()}")
        if rule_rewriter is not None and not dry_run:
            rule_rewriter(path)
        results.append(
            wrap_file(
                path,
                policy=policy,
                import_fixer=import_fixer,
                dry_run=dry_run,
            )
        )
    return results
