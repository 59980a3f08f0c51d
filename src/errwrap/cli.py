from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from errwrap.config import load_settings
from errwrap.driver import FileResult
from errwrap.exceptions import ErrwrapError, SourceFileError
from errwrap.rewrite.engine import process_line_detailed
from errwrap.schema import FileSummaryDTO, RunSummaryDTO
from errwrap.walker import walk_tree

app = typer.Typer(add_completion=False)


def _fail(exc: ErrwrapError) -> typer.Exit:
    typer.echo(f"ERROR: {str(exc).rstrip()}", err=True)
    return typer.Exit(code=1)


def build_run_summary(root: Path, results: list[FileResult], *, dry_run: bool) -> RunSummaryDTO:
    files = [
        FileSummaryDTO(
            path=result.path.relative_to(root).as_posix(),
            changed_lines=result.changed_lines,
            written=result.written,
        )
        for result in results
    ]
    return RunSummaryDTO(
        root=str(root),
        dry_run=dry_run,
        files_visited=len(results),
        files_changed=sum(1 for result in results if result.changed),
        lines_changed=sum(result.changed_lines for result in results),
        files=files,
    )


def write_run_summary(path: Path, summary: RunSummaryDTO) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(summary.model_dump_json(indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise SourceFileError("write", path, str(exc)) from exc


@app.command("run")
def run(
    root: Path = typer.Argument(Path("."), file_okay=False, exists=True),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False),
    extension: Optional[str] = typer.Option(None, "--extension"),
    exclude: List[str] = typer.Option(None, "--exclude"),
    dry_run: bool = typer.Option(False, "--dry-run"),
    skip_rules: bool = typer.Option(False, "--skip-rules"),
    skip_imports: bool = typer.Option(False, "--skip-imports"),
    summary_json: Optional[Path] = typer.Option(None, "--summary-json"),
) -> None:
    """Wrap returned errors in every source file under ROOT."""
    root = root.resolve()
    overrides = {"walk": {"extension": extension, "exclude": list(exclude) if exclude else None}}
    try:
        settings = load_settings(root=root, config_path=config, overrides=overrides)
        results = walk_tree(
            root,
            settings=settings.walk,
            policy=settings.policy,
            rule_rewriter=None if skip_rules else settings.tools.rule_hook(),
            import_fixer=None if skip_imports else settings.tools.import_hook(),
            dry_run=dry_run,
        )
    except ErrwrapError as exc:
        raise _fail(exc) from exc

    summary = build_run_summary(root, results, dry_run=dry_run)
    if dry_run:
        for item in summary.files:
            if item.changed_lines:
                typer.echo(f"would rewrite: {item.path} ({item.changed_lines} lines)")
        typer.echo(f"{summary.files_changed} of {summary.files_visited} files would change")
    if summary_json is not None:
        try:
            write_run_summary(summary_json, summary)
        except ErrwrapError as exc:
            raise _fail(exc) from exc


@app.command("line")
def line(
    text: str = typer.Argument(...),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False),
    explain: bool = typer.Option(False, "--explain"),
) -> None:
    """Print TEXT as it would look after rewriting."""
    try:
        settings = load_settings(config_path=config)
    except ErrwrapError as exc:
        raise _fail(exc) from exc
    result = process_line_detailed(text, settings.policy)
    typer.echo(result.rewritten)
    if explain:
        categories = ", ".join(category.value for category in result.wrapped) or "-"
        typer.echo(f"status: {result.status.value} wrapped: {categories}", err=True)


def main() -> None:
    app()
