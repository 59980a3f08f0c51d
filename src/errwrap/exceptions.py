"""Error types raised while rewriting a source tree."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ErrwrapError(RuntimeError):
    """Base class for failures that abort a run."""


class ConfigError(ErrwrapError):
    pass


class SourceFileError(ErrwrapError):
    """A filesystem operation on a source file failed.

    The message carries the operation and the path; the original ``OSError``
    is available as ``__cause__``.
    """

    def __init__(self, operation: str, path: Path | str, detail: str) -> None:
        super().__init__(f"{operation} {path}: {detail}")
        self.operation = operation
        self.path = Path(path)


class ExternalToolError(ErrwrapError):
    """An external formatter exited unsuccessfully.

    ``str()`` is the tool's combined output, unchanged, so it can be shown to
    the user verbatim.
    """

    def __init__(
        self,
        command: Sequence[str],
        output: str,
        *,
        returncode: int | None = None,
    ) -> None:
        super().__init__(output)
        self.command = tuple(command)
        self.output = output
        self.returncode = returncode
