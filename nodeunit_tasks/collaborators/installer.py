"""System install/uninstall steps, run through the system ``install``, ``cp`` and ``rm``."""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import EXECUTABLE, RunnerConfig
from .commands import CommandRunner

logger = logging.getLogger(__name__)


class Installer:
    def __init__(self, runner: CommandRunner, config: RunnerConfig) -> None:
        self.runner = runner
        self.config = config

    def install(self, build_dir: Path, man_page: Path) -> None:
        config = self.config
        run = self.runner.run
        run(["install", "-d", str(config.node_libdir)], task="install")
        run(["cp", "-a", str(build_dir / config.package), str(config.node_libdir)], task="install")
        run(
            ["install", "-m", "0755", str(build_dir / f"{config.package}.sh"), str(config.bindir / EXECUTABLE)],
            task="install",
        )
        run(["install", "-d", str(config.mandir / "man1")], task="install")
        if man_page.exists():
            run(["cp", "-a", str(man_page), f"{config.mandir / 'man1'}/"], task="install")
        else:
            logger.warning("   -> Man page %s not found; run 'doc' first. Skipping.", man_page)

    def uninstall(self) -> None:
        config = self.config
        node_libdir = config.node_libdir
        self.runner.run(
            [
                "rm",
                "-rf",
                str(node_libdir / config.package),
                str(node_libdir / f"{config.package}.js"),
                str(config.bindir / EXECUTABLE),
            ],
            task="uninstall",
        )
        self.runner.run(["rm", "-rf", str(config.mandir / "man1" / f"{EXECUTABLE}.1")], task="uninstall")
