"""Filesystem helpers used by the build tasks."""

from __future__ import annotations

import shutil
import stat
from pathlib import Path
from typing import Optional

from ..errors import MissingInputError


def write_text(path: Path, content: str, *, newline: Optional[str] = "") -> None:
    """Write text to file ensuring parent directories exist.

    ``newline=""`` keeps the content byte-for-byte on every platform.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline=newline)


def write_executable(path: Path, content: str) -> None:
    write_text(path, content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def copy_file(source: Path, destination: Path) -> Path:
    """Copy one file, creating the destination directory."""

    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        shutil.copyfile(source, destination)
    except FileNotFoundError as exc:
        raise MissingInputError(source, reason=exc.strerror) from exc
    return destination


def reset_dir(path: Path) -> Path:
    """Remove ``path`` if present and recreate it empty."""

    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
