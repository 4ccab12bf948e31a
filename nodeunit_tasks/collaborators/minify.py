"""JavaScript minifiers used for ``nodeunit.min.js``."""

from __future__ import annotations

import shlex
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import rjsmin

from ..errors import MinificationError


@dataclass(frozen=True, slots=True)
class MinifyResult:
    code: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.code is not None

    def unwrap(self) -> str:
        if not self.ok:
            raise MinificationError(self.error or "minifier returned no code", task="browser")
        return self.code  # type: ignore[return-value]


class Minifier(ABC):
    name: str

    @abstractmethod
    def minify(self, code: str) -> MinifyResult:
        ...


class RJSMinMinifier(Minifier):
    """In-process minification with ``rjsmin``."""

    name = "rjsmin"

    def __init__(self, *, keep_bang_comments: bool = True) -> None:
        # Bang comments carry the license header.
        self.keep_bang_comments = keep_bang_comments

    def minify(self, code: str) -> MinifyResult:
        try:
            return MinifyResult(code=rjsmin.jsmin(code, keep_bang_comments=self.keep_bang_comments))
        except Exception as exc:  # noqa: BLE001
            return MinifyResult(error=f"{type(exc).__name__}: {exc}")


class CommandMinifier(Minifier):
    """Pipes code through an external minifier such as ``uglifyjs``."""

    name = "command"

    def __init__(self, command: str) -> None:
        self.command = command

    def minify(self, code: str) -> MinifyResult:
        try:
            proc = subprocess.run(
                shlex.split(self.command),
                input=code,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=False,
            )
        except (OSError, ValueError) as exc:
            return MinifyResult(error=f"Cannot run '{self.command}': {exc}")
        if proc.returncode != 0:
            detail = (proc.stderr or "").strip() or f"exit code {proc.returncode}"
            return MinifyResult(error=detail)
        return MinifyResult(code=proc.stdout)


def build_minifier(name: str, command: Optional[str] = None) -> Minifier:
    if name == RJSMinMinifier.name:
        return RJSMinMinifier()
    if name == CommandMinifier.name:
        if not command:
            raise ValueError("The 'command' minifier requires a minifier command.")
        return CommandMinifier(command)
    raise ValueError(f"Unknown minifier '{name}'")
