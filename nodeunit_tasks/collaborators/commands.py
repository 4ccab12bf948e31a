"""Thin wrapper around ``subprocess`` for external utilities."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from ..errors import ExternalCommandError

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs one command at a time and raises on failure."""

    def run(
        self,
        args: Sequence[str],
        *,
        task: str,
        cwd: Optional[Path] = None,
        echo: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        """Run ``args`` without a shell.

        ``echo=False`` keeps stdout out of the log, for callers that consume it.
        """

        command = [str(arg) for arg in args]
        logger.info("   -> Executing: %s", shlex.join(command))
        try:
            proc = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise ExternalCommandError(command, returncode=None, stderr=str(exc), task=task) from exc

        if proc.returncode != 0:
            raise ExternalCommandError(
                command,
                returncode=proc.returncode,
                stderr=(proc.stderr or "").strip(),
                task=task,
            )
        if echo and proc.stdout:
            for line in proc.stdout.strip().splitlines():
                logger.info("      | %s", line)
        return proc
