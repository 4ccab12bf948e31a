"""Build targets and the registry the command line dispatches through."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from .assembly import BROWSER, COMMONJS, LEGACY_TEST_SCRIPTS, assemble, legacy_test_plan
from .assembly.utils import copy_file, reset_dir, write_executable, write_text
from .collaborators import CommandRunner, Installer, Minifier, TreeCopier, build_minifier
from .config import EXECUTABLE, RunnerConfig
from .errors import MinificationError

logger = logging.getLogger(__name__)

STAMP_FILE = "stamp-build"
MODULE_SOURCES: Tuple[str, ...] = ("bin", "deps", "index.js", "lib", "package.json", "share")
COMMONJS_DEPS: Tuple[str, ...] = ("deps/json2.js", "deps/async.js")
LINT_GLOBS: Tuple[str, ...] = (
    "index.js",
    "bin/nodeunit",
    "bin/nodeunit.json",
    "lib/*.js",
    "lib/reporters/*.js",
    "test/*.js",
)
MAN_PAGE = Path("man1") / "nodeunit.1"


@dataclass
class TaskContext:
    """Configuration plus the collaborators tasks call out to."""

    config: RunnerConfig
    runner: CommandRunner = field(default_factory=CommandRunner)
    copier: TreeCopier = field(default_factory=TreeCopier)
    minifier: Optional[Minifier] = None
    installer: Optional[Installer] = None
    completed: Set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.minifier is None:
            self.minifier = build_minifier(self.config.minifier, self.config.minifier_command)
        if self.installer is None:
            self.installer = Installer(self.runner, self.config)

    @property
    def root(self) -> Path:
        return self.config.workspace_root


@dataclass(frozen=True)
class TaskSpec:
    slug: str
    description: str
    runner: Callable[[TaskContext], None]
    requires: Tuple[str, ...] = ()


_TASKS: Dict[str, TaskSpec] = {}


def register_task(spec: TaskSpec) -> None:
    if spec.slug in _TASKS:
        raise ValueError(f"Task '{spec.slug}' already registered.")
    _TASKS[spec.slug] = spec


def get_task(slug: str) -> TaskSpec:
    try:
        return _TASKS[slug]
    except KeyError as exc:
        available = ", ".join(_TASKS)
        raise KeyError(f"Unknown task '{slug}'. Available tasks: {available}.") from exc


def list_tasks() -> Iterable[TaskSpec]:
    return _TASKS.values()


def run_task(slug: str, context: TaskContext) -> None:
    """Run ``slug`` after its requirements; each task runs once per context."""

    if slug in context.completed:
        return
    spec = get_task(slug)
    for requirement in spec.requires:
        run_task(requirement, context)
    spec.runner(context)
    context.completed.add(slug)


def run_clean(context: TaskContext) -> None:
    logger.info("Running CLEAN task...")
    build_path = context.config.build_path
    if build_path.exists():
        logger.info("   -> Removing build directory: %s", context.config.build_dir)
        shutil.rmtree(build_path)
    stamp = context.root / STAMP_FILE
    if stamp.exists():
        logger.info("   -> Removing %s file", STAMP_FILE)
        stamp.unlink()
    logger.info("Clean complete!")


def run_build(context: TaskContext) -> None:
    config = context.config
    logger.info("Running BUILD task (Node module)...")
    config.build_path.mkdir(parents=True, exist_ok=True)

    logger.info("   -> Creating dependency marker: %s", STAMP_FILE)
    write_text(context.root / STAMP_FILE, "")

    module_dir = config.build_path / config.package
    logger.info("   -> Copying source files to %s", module_dir)
    context.copier.copy([context.root / name for name in MODULE_SOURCES], module_dir)

    wrapper = config.build_path / f"{config.package}.sh"
    logger.info("   -> Creating shell wrapper script: %s", wrapper.name)
    write_executable(wrapper, wrapper_script(config))
    logger.info("Node module build complete!")


def wrapper_script(config: RunnerConfig) -> str:
    """Launcher installed as ``<bindir>/nodeunit``."""

    return f"#!/bin/sh\n{config.node} {config.node_libdir}/{config.package}/bin/{EXECUTABLE} $@"


def run_browser(context: TaskContext) -> None:
    root = context.root
    logger.info("Running BROWSER build task...")
    browser_dir = reset_dir(context.config.build_path / "browser")

    target = browser_dir / "nodeunit.js"
    logger.info("   -> Concatenating library files into %s...", target)
    bundle = assemble(BROWSER.plan(target), root=root)

    logger.info("   -> Copying nodeunit.css")
    css = copy_file(root / "share" / "nodeunit.css", browser_dir / "nodeunit.css")

    logger.info("   -> Minifying browser bundle with %s...", context.minifier.name)
    try:
        minified = context.minifier.minify(bundle.content).unwrap()
        write_text(browser_dir / "nodeunit.min.js", minified)
    except (MinificationError, OSError) as exc:
        logger.error("ERROR during minification: %s", exc)
    else:
        logger.info("      | Minification successful.")

    test_dir = browser_dir / "test"
    test_dir.mkdir(parents=True, exist_ok=True)
    copy_file(root / "test" / "test.html", test_dir / "test.html")
    for script in LEGACY_TEST_SCRIPTS:
        assemble(legacy_test_plan(script, test_dir / script), root=root)

    copy_file(bundle.path, test_dir / "nodeunit.js")
    copy_file(css, test_dir / "nodeunit.css")
    logger.info("Browser build complete.")


def run_commonjs(context: TaskContext) -> None:
    root = context.root
    logger.info("Running COMMONJS build task...")
    commonjs_dir = reset_dir(context.config.build_path / "commonjs")
    for dependency in COMMONJS_DEPS:
        copy_file(root / dependency, commonjs_dir / dependency)

    target = commonjs_dir / "nodeunit.js"
    logger.info("   -> Concatenating library files into %s...", target)
    assemble(COMMONJS.plan(target), root=root)
    logger.info("CommonJS build complete.")


def run_test(context: TaskContext) -> None:
    logger.info("Running TEST task...")
    context.runner.run([context.config.node, "./bin/nodeunit", "test"], task="test", cwd=context.root)
    logger.info("Tests finished.")


def lint_targets(root: Path) -> List[str]:
    targets: List[str] = []
    for pattern in LINT_GLOBS:
        matches = sorted(path.relative_to(root).as_posix() for path in root.glob(pattern))
        targets.extend(matches)
    return targets


def run_lint(context: TaskContext) -> None:
    logger.info("Running LINT task...")
    command = ["nodelint", "--config", "nodelint.cfg", *lint_targets(context.root)]
    context.runner.run(command, task="lint", cwd=context.root)
    logger.info("Lint complete.")


def run_doc(context: TaskContext) -> None:
    logger.info("Running DOC task (man page generation)...")
    man_page = context.root / MAN_PAGE
    man_page.parent.mkdir(parents=True, exist_ok=True)
    proc = context.runner.run(
        ["ronn", "--roff", "doc/nodeunit.md"], task="doc", cwd=context.root, echo=False
    )
    write_text(man_page, proc.stdout)
    logger.info("Doc generation complete.")


def run_all(context: TaskContext) -> None:
    logger.info("All targets complete.")


def run_install(context: TaskContext) -> None:
    logger.info("Running INSTALL task (requires elevated permissions)...")
    context.installer.install(context.config.build_path, context.root / MAN_PAGE)
    logger.info("Install complete. You may need to run this with sudo.")


def run_uninstall(context: TaskContext) -> None:
    logger.info("Running UNINSTALL task (requires elevated permissions)...")
    context.installer.uninstall()
    logger.info("Uninstall complete. You may need to run this with sudo.")


register_task(TaskSpec("all", "Runs 'build' and 'doc'.", run_all, requires=("build", "doc")))
register_task(TaskSpec("build", "Copies source files and creates installer script.", run_build))
register_task(TaskSpec("browser", "Creates the concatenated browser bundle (.js, .min.js).", run_browser))
register_task(TaskSpec("commonjs", "Creates the CommonJS browser module bundle.", run_commonjs))
register_task(TaskSpec("test", "Runs the unit tests.", run_test))
register_task(TaskSpec("lint", "Runs static analysis.", run_lint))
register_task(TaskSpec("install", "Copies files to {bindir} and {node_libdir}.", run_install, requires=("build",)))
register_task(TaskSpec("uninstall", "Removes installed files.", run_uninstall))
register_task(TaskSpec("clean", "Removes the '{build_dir}' directory and stamp files.", run_clean))
register_task(TaskSpec("doc", "Generates man pages.", run_doc))
