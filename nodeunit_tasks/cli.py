"""Command-line entry point: ``nodeunit-tasks <command> [options]``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import RunnerConfig, load_config
from .errors import ExternalCommandError, TaskError, UsageError
from .tasks import TaskContext, get_task, list_tasks, run_task

PROG = "nodeunit-tasks"
RULE = "=" * 49


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args, _ = parser.parse_known_args(argv)
    package_logger = logging.getLogger("nodeunit_tasks")
    propagate = package_logger.propagate
    handler = _configure_logging(args.verbose)
    package_logger.propagate = False
    try:
        return _dispatch(args)
    finally:
        package_logger.removeHandler(handler)
        package_logger.propagate = propagate


def _dispatch(args: argparse.Namespace) -> int:
    try:
        config = load_config(
            Path(args.workspace_root) if args.workspace_root else None,
            overrides={
                "prefix": args.prefix,
                "build_dir": args.build_dir,
                "minifier": args.minifier,
                "minifier_command": args.minifier_command,
            },
        )
    except ValueError as exc:
        _print_error(f"Invalid configuration: {exc}")
        return 1

    if args.help:
        print(render_help(config, verbose=False))
        return 0
    if args.verbose_help:
        print(render_help(config, verbose=True))
        return 0

    command = (args.command or "").lower()
    try:
        _check_command(command)
        context = TaskContext(config=config)
        run_task(command, context)
    except UsageError as exc:
        _print_error(str(exc))
        print(render_help(config, verbose=False))
        return 1
    except TaskError as exc:
        _report_failure(exc, command)
        return 1
    except (OSError, ValueError) as exc:
        _print_error(str(exc))
        return 1
    return 0


def _check_command(command: str) -> None:
    if not command:
        raise UsageError("No command provided.")
    try:
        get_task(command)
    except KeyError as exc:
        raise UsageError(f"Unknown command: '{command}'", task=command) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("command", nargs="?")
    parser.add_argument("-h", "--help", action="store_true", dest="help")
    parser.add_argument("-hh", action="store_true", dest="verbose_help")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--prefix")
    parser.add_argument("--build-dir")
    parser.add_argument("--workspace-root")
    parser.add_argument("--minifier")
    parser.add_argument("--minifier-command")
    return parser


def render_help(config: RunnerConfig, *, verbose: bool) -> str:
    fields = {
        "bindir": config.bindir,
        "node_libdir": config.node_libdir,
        "build_dir": config.build_dir,
    }
    lines: List[str] = [
        RULE,
        f"       Task Runner Help Menu ({config.package})",
        RULE,
        f"Usage: {PROG} <command> [options]",
        "",
        "Available Commands:",
    ]
    for spec in list_tasks():
        lines.append(f"  {spec.slug:<10} : {spec.description.format(**fields)}")
    lines.append(f"  {'help (-h)':<10} : Shows this simple help message.")
    if verbose:
        lines.extend(
            [
                "",
                "Available Options (Flags):",
                "  -h, --help              : Simple help view.",
                "  -hh                     : Verbose help view.",
                "  -v, --verbose           : Debug logging.",
                f"  --prefix PATH           : Install prefix (default {config.prefix}).",
                f"  --build-dir DIR         : Build directory (default {config.build_dir}).",
                "  --workspace-root PATH   : Project directory (default: current directory).",
                f"  --minifier NAME         : rjsmin or command (default {config.minifier}).",
                "  --minifier-command CMD  : Command for the 'command' minifier, e.g. 'uglifyjs'.",
                "",
                "Environment: NODEUNIT_PREFIX, NODEUNIT_BUILDDIR, NODEUNIT_PACKAGE, NODEUNIT_NODE,",
                "NODEUNIT_MINIFIER, NODEUNIT_MINIFIER_COMMAND (also read from <workspace>/.env).",
            ]
        )
    lines.append(RULE)
    return "\n".join(lines)


def _report_failure(exc: TaskError, command: str) -> None:
    _print_error(f"ERROR in {exc.task or command}: {exc}", prefix=False)
    if isinstance(exc, ExternalCommandError) and exc.stderr:
        print("--- Error output ---", file=sys.stderr)
        print(exc.stderr, file=sys.stderr)
        print("--------------------", file=sys.stderr)


def _print_error(message: str, *, prefix: bool = True) -> None:
    text = f"ERROR: {message}" if prefix else message
    print(text, file=sys.stderr)


def _configure_logging(verbose: bool) -> logging.Handler:
    package_logger = logging.getLogger("nodeunit_tasks")
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    return handler
