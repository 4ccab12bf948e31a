"""Recursive copy of source trees into the build directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from ..errors import MissingInputError

logger = logging.getLogger(__name__)


class TreeCopier:
    """Copies files and directories, the way ``cp -R`` would."""

    def copy(self, sources: Iterable[Path], destination: Path) -> list[Path]:
        destination.mkdir(parents=True, exist_ok=True)
        copied: list[Path] = []
        for source in sources:
            target = destination / source.name
            if source.is_dir():
                shutil.copytree(source, target, dirs_exist_ok=True)
            elif source.is_file():
                shutil.copy2(source, target)
            else:
                raise MissingInputError(source, reason="no such file or directory")
            logger.debug("Copied %s -> %s", source, target)
            copied.append(target)
        return copied
