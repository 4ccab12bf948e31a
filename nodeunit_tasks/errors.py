"""Error taxonomy shared by tasks and the command-line entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class TaskError(RuntimeError):
    """Base class for failures that end a task run."""

    def __init__(self, message: str, *, task: Optional[str] = None) -> None:
        super().__init__(message)
        self.task = task


class MissingInputError(TaskError):
    """Raised when a source file referenced by a task cannot be read."""

    def __init__(self, path: Path, *, task: Optional[str] = None, reason: Optional[str] = None) -> None:
        message = f"Cannot read input file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, task=task)
        self.path = path


class ExternalCommandError(TaskError):
    """Raised when an external utility exits with a non-zero status."""

    def __init__(
        self,
        command: Sequence[str],
        *,
        returncode: Optional[int],
        stderr: str = "",
        task: Optional[str] = None,
    ) -> None:
        rendered = " ".join(command)
        if returncode is None:
            message = f"Command could not be started: {rendered}"
        else:
            message = f"Command failed with exit code {returncode}: {rendered}"
        super().__init__(message, task=task)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class MinificationError(TaskError):
    """Raised by minifiers; the browser task logs it and keeps going."""


class UsageError(TaskError):
    """Raised for a missing or unrecognised command."""
