from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import stat
import tempfile

from errwrap.exceptions import SourceFileError
from errwrap.rewrite.engine import process_lines
from errwrap.rewrite.model import DEFAULT_POLICY, LineRewrite, WrapPolicy
from errwrap.tooling import PathHook

# Bytes that are not valid UTF-8 round-trip unchanged.
_ENCODING_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class SourceFile:
    path: Path
    lines: tuple[str, ...]
    mode: int

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class FileResult:
    path: Path
    changed_lines: int
    written: bool

    @property
    def changed(self) -> bool:
        return self.changed_lines > 0


def read_source_file(path: Path) -> SourceFile:
    try:
        mode = stat.S_IMODE(os.stat(path).st_mode)
    except OSError as exc:
        raise SourceFileError("stat", path, str(exc)) from exc
    try:
        with open(path, encoding="utf-8", errors=_ENCODING_ERRORS, newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise SourceFileError("read", path, str(exc)) from exc
    return SourceFile(path=path, lines=tuple(text.split("\n")), mode=mode)


def _write_in_place(source: SourceFile, target: Path) -> None:
    try:
        with open(target, "w", encoding="utf-8", errors=_ENCODING_ERRORS, newline="") as handle:
            handle.write(source.text)
        os.chmod(target, source.mode)
    except OSError as exc:
        raise SourceFileError("write", source.path, str(exc)) from exc


def write_source_file(source: SourceFile) -> None:
    """Write ``source`` back over the file it was read from.

    Symlinks are followed so the link target is rewritten. A file with more
    than one hard link is overwritten in place to keep the links shared;
    otherwise the text goes to a sibling temp file that replaces the target.
    """
    target = source.path.resolve()
    try:
        links = os.stat(target).st_nlink
    except OSError as exc:
        raise SourceFileError("write", source.path, str(exc)) from exc
    if links > 1:
        _write_in_place(source, target)
        return
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
    except OSError as exc:
        raise SourceFileError("write", source.path, str(exc)) from exc
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors=_ENCODING_ERRORS, newline="") as handle:
            handle.write(source.text)
        os.chmod(tmp_path, source.mode)
        os.replace(tmp_path, target)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise SourceFileError("write", source.path, str(exc)) from exc


def rewrite_source(
    source: SourceFile, policy: WrapPolicy = DEFAULT_POLICY
) -> tuple[SourceFile, list[LineRewrite]]:
    results = process_lines(list(source.lines), policy)
    rewritten = SourceFile(
        path=source.path,
        lines=tuple(result.rewritten for result in results),
        mode=source.mode,
    )
    return rewritten, results


def wrap_file(
    path: Path,
    *,
    policy: WrapPolicy = DEFAULT_POLICY,
    import_fixer: PathHook | None = None,
    dry_run: bool = False,
) -> FileResult:
    source = read_source_file(path)
    rewritten, results = rewrite_source(source, policy)
    changed_lines = sum(1 for result in results if result.changed)
    if dry_run:
        return FileResult(path=path, changed_lines=changed_lines, written=False)
    write_source_file(rewritten)
    if import_fixer is not None:
        import_fixer(path)
    return FileResult(path=path, changed_lines=changed_lines, written=True)
