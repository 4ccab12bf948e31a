"""Runner configuration: defaults, workspace ``.env`` and ``NODEUNIT_*`` variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "NODEUNIT_"

# Name of the launcher in bin/ of the copied tree and in <prefix>/bin.
EXECUTABLE = "nodeunit"

_ENV_FIELDS = {
    "PREFIX": "prefix",
    "BUILDDIR": "build_dir",
    "PACKAGE": "package",
    "NODE": "node",
    "MINIFIER": "minifier",
    "MINIFIER_COMMAND": "minifier_command",
}


class RunnerConfig(BaseModel):
    """Immutable settings passed to every task."""

    workspace_root: Path = Field(default_factory=Path.cwd)
    build_dir: str = "dist"
    package: str = "nodeunit"
    prefix: Path = Path("/usr/local")
    node: str = "node"
    minifier: str = "rjsmin"
    minifier_command: Optional[str] = Field(
        default=None, description="Command line used by the 'command' minifier, e.g. 'uglifyjs'."
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def bindir(self) -> Path:
        return self.prefix / "bin"

    @property
    def libdir(self) -> Path:
        return self.prefix / "lib"

    @property
    def mandir(self) -> Path:
        return self.prefix / "share" / "man"

    @property
    def node_libdir(self) -> Path:
        return self.libdir / "node"

    @property
    def build_path(self) -> Path:
        return self.workspace_root / self.build_dir


def load_config(
    workspace_root: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, object]] = None,
) -> RunnerConfig:
    """Build a config from, lowest to highest, defaults, ``.env``, environment and overrides."""

    root = Path(workspace_root).resolve() if workspace_root else Path.cwd()
    payload: Dict[str, object] = {"workspace_root": root}

    env_file = root / ".env"
    if env_file.exists():
        payload.update(_from_environment(dotenv_values(env_file)))
    payload.update(_from_environment(os.environ if environ is None else environ))
    for key, value in (overrides or {}).items():
        if value is not None:
            payload[key] = value
    return RunnerConfig.model_validate(payload)


def _from_environment(values: Mapping[str, Optional[str]]) -> Dict[str, object]:
    settings: Dict[str, object] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        value = values.get(f"{ENV_PREFIX}{suffix}")
        if value:
            settings[field_name] = value
    return settings
