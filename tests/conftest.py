from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

from nodeunit_tasks.config import RunnerConfig
from nodeunit_tasks.errors import ExternalCommandError

WORKSPACE_FILES: Dict[str, str] = {
    "share/license.js": "/*! nodeunit license */",
    "share/nodeunit.css": "body { margin: 0; }\n",
    "deps/json2.js": "var JSON = JSON || {};\n",
    "deps/async.js": "var async = {};\n",
    "lib/assert.js": "exports.ok = function (value) { return !!value; };\n",
    "lib/types.js": "exports.options = function () { return {}; };\n",
    "lib/core.js": "var async = require('async'); //@REMOVE_LINE_FOR_BROWSER\nexports.runTest = function () {};\n",
    "lib/reporters/browser.js": "var core = require('../core'); //@REMOVE_LINE_FOR_COMMONJS\nexports.run = function () {};\n",
    "bin/nodeunit": "#!/usr/bin/env node\n",
    "bin/nodeunit.json": "{}\n",
    "index.js": "module.exports = require('./lib/nodeunit');\n",
    "package.json": '{"name": "nodeunit"}\n',
    "test/test.html": "<html></html>\n",
    "test/test-base.js": "exports.testBase = function (test) { test.done(); };\n",
    "test/test-runmodule.js": "exports.testRunModule = function (test) { test.done(); };\n",
    "test/test-runtest.js": "exports.testRunTest = function (test) { test.done(); };\n",
    "test/test-testcase.js": "exports.testCase = function (test) { test.done(); };\n",
    "test/test-testcase-legacy.js": "var nodeunit = require('../lib/nodeunit'); //@REMOVE_LINE_FOR_BROWSER\nexports.legacy = {};\n",
}


class FakeRunner:
    """Records commands instead of spawning processes."""

    def __init__(self, *, fail_on: Optional[str] = None, stdout: str = "") -> None:
        self.calls: List[List[str]] = []
        self.fail_on = fail_on
        self.stdout = stdout

    def run(self, args: Sequence[str], *, task: str, cwd=None, echo=True):
        command = [str(arg) for arg in args]
        self.calls.append(command)
        if self.fail_on and command[0] == self.fail_on:
            raise ExternalCommandError(command, returncode=2, stderr="boom", task=task)
        return subprocess.CompletedProcess(command, 0, stdout=self.stdout, stderr="")


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "nodeunit"
    for relative, content in WORKSPACE_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture()
def config(workspace: Path, tmp_path: Path) -> RunnerConfig:
    return RunnerConfig(workspace_root=workspace, prefix=tmp_path / "prefix")


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def runner_factory():
    return FakeRunner
