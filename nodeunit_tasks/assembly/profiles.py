"""Fragment tables for the browser and CommonJS bundles."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Tuple

from .fragments import AssemblyPlan, FileFragment, Fragment, LiteralFragment

BROWSER_MARKER = "@REMOVE_LINE_FOR_BROWSER"
COMMONJS_MARKER = "@REMOVE_LINE_FOR_COMMONJS"

LEGACY_TEST_SCRIPTS: Tuple[str, ...] = (
    "test-base.js",
    "test-runmodule.js",
    "test-runtest.js",
    "test-testcase.js",
    "test-testcase-legacy.js",
)


def _file(path: str) -> FileFragment:
    return FileFragment(Path(path))


def _text(text: str) -> LiteralFragment:
    return LiteralFragment(text)


def _wrapped(path: str, namespace: str) -> Tuple[Fragment, ...]:
    return (_text("(function(exports){"), _file(path), _text(f"}})({namespace});"))


@dataclass(frozen=True, slots=True)
class AssemblyProfile:
    """Named fragment sequence plus the markers stripped from its output."""

    name: str
    fragments: Tuple[Fragment, ...]
    markers: Tuple[str, ...]

    def plan(self, destination: Path) -> AssemblyPlan:
        return AssemblyPlan(fragments=self.fragments, destination=destination, markers=self.markers)


BROWSER = AssemblyProfile(
    name="browser",
    fragments=(
        _file("share/license.js"),
        _text("nodeunit = (function(){"),
        _file("deps/json2.js"),
        _text("var assert = this.assert = {};"),
        _text("var types = {};"),
        _text("var core = {};"),
        _text("var nodeunit = {};"),
        _text("var reporter = {};"),
        _file("deps/async.js"),
        *_wrapped("lib/assert.js", "assert"),
        *_wrapped("lib/types.js", "types"),
        *_wrapped("lib/core.js", "core"),
        *_wrapped("lib/reporters/browser.js", "reporter"),
        _text("nodeunit = core;"),
        _text("nodeunit.assert = assert;"),
        _text("nodeunit.reporter = reporter;"),
        _text("nodeunit.run = reporter.run;"),
        _text("return nodeunit; })();"),
    ),
    markers=(BROWSER_MARKER,),
)

COMMONJS = AssemblyProfile(
    name="commonjs",
    fragments=(
        _text("var async = require('async');"),
        _text("var assert = {};"),
        _text("var types = {};"),
        _text("var core = {};"),
        _text("var nodeunit = {};"),
        _text("var reporter = {};"),
        *_wrapped("lib/assert.js", "assert"),
        *_wrapped("lib/types.js", "types"),
        *_wrapped("lib/core.js", "core"),
        _text("module.exports = core;"),
        _text("(function(exports, nodeunit){"),
        _file("lib/reporters/browser.js"),
        _text("})(reporter, module.exports);"),
        _text("module.exports.assert = assert;"),
        _text("module.exports.reporter = reporter;"),
        _text("module.exports.run = reporter.run;"),
    ),
    markers=(BROWSER_MARKER, COMMONJS_MARKER),
)


def export_name(script: str) -> str:
    """``test-runmodule.js`` -> ``test_runmodule``."""

    return PurePosixPath(script).stem.replace("-", "_")


def legacy_test_plan(script: str, destination: Path) -> AssemblyPlan:
    """Plan that exposes a legacy test script as ``this.<name>`` in a browser."""

    return AssemblyPlan(
        fragments=(
            _text("(function (exports) {"),
            _file(f"test/{script}"),
            _text(f"}})(this.{export_name(script)} = {{}});"),
        ),
        destination=destination,
        markers=BROWSER.markers,
    )
