"""Value types describing one bundle assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple, Union


@dataclass(frozen=True, slots=True)
class FileFragment:
    """Contents of a file, read as UTF-8 when the plan is assembled."""

    path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))


@dataclass(frozen=True, slots=True)
class LiteralFragment:
    """Inline text such as wrapper boilerplate."""

    text: str


Fragment = Union[FileFragment, LiteralFragment]


@dataclass(frozen=True, slots=True)
class AssemblyPlan:
    """Ordered fragments, the destination file and the markers to strip."""

    fragments: Tuple[Fragment, ...]
    destination: Path
    markers: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fragments", tuple(self.fragments))
        object.__setattr__(self, "destination", Path(self.destination))
        object.__setattr__(self, "markers", tuple(self.markers))


@dataclass(frozen=True, slots=True)
class BuildArtifact:
    path: Path
    content: str
