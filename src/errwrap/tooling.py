from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import subprocess
from typing import Callable, Iterable, Sequence

from errwrap.exceptions import ExternalToolError
from errwrap.rewrite.model import DEFAULT_REWRITE_RULES, RewriteRule

RunCommand = Callable[..., subprocess.CompletedProcess[str]]
PathHook = Callable[[Path], None]

DEFAULT_RULE_REWRITER: tuple[str, ...] = ("gofmt", "-w", "-r")
DEFAULT_IMPORT_FIXER: tuple[str, ...] = ("goimports", "-w")


def run_tool(command: Sequence[str], *, run_fn: RunCommand = subprocess.run) -> str:
    argv = [str(part) for part in command]
    try:
        proc = run_fn(
            argv,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except FileNotFoundError as exc:
        raise ExternalToolError(argv, f"{argv[0]}: command not found") from exc
    output = proc.stdout or ""
    if proc.returncode != 0:
        raise ExternalToolError(argv, output, returncode=proc.returncode)
    return output


def apply_rewrite_rules(
    path: Path,
    rules: Iterable[RewriteRule] = DEFAULT_REWRITE_RULES,
    *,
    command: Sequence[str] = DEFAULT_RULE_REWRITER,
    run_fn: RunCommand = subprocess.run,
) -> None:
    for rule in rules:
        run_tool([*command, str(rule), str(path)], run_fn=run_fn)


def fix_imports(
    path: Path,
    *,
    command: Sequence[str] = DEFAULT_IMPORT_FIXER,
    run_fn: RunCommand = subprocess.run,
) -> None:
    run_tool([*command, str(path)], run_fn=run_fn)


@dataclass(frozen=True)
class ExternalTools:
    rule_rewriter: tuple[str, ...] = DEFAULT_RULE_REWRITER
    import_fixer: tuple[str, ...] = DEFAULT_IMPORT_FIXER
    rules: tuple[RewriteRule, ...] = DEFAULT_REWRITE_RULES
    run_fn: RunCommand = subprocess.run

    def rule_hook(self) -> PathHook:
        def _apply(path: Path) -> None:
            apply_rewrite_rules(
                path,
                self.rules,
                command=self.rule_rewriter,
                run_fn=self.run_fn,
            )

        return _apply

    def import_hook(self) -> PathHook:
        def _fix(path: Path) -> None:
            fix_imports(path, command=self.import_fixer, run_fn=self.run_fn)

        return _fix
