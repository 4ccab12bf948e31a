"""Concatenate fragments, strip markers and write the bundle."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..errors import MissingInputError
from .fragments import AssemblyPlan, BuildArtifact, FileFragment, Fragment, LiteralFragment
from .utils import write_text

logger = logging.getLogger(__name__)


def render(plan: AssemblyPlan, *, root: Optional[Path] = None) -> str:
    """Return the post-marker-removal text for ``plan`` without writing it."""

    base = root or Path.cwd()
    parts = []
    for fragment in plan.fragments:
        parts.append(_resolve(fragment, base))
        parts.append("\n")
    content = "".join(parts)
    for marker in plan.markers:
        content = content.replace(marker, "")
    return content


def assemble(plan: AssemblyPlan, *, root: Optional[Path] = None) -> BuildArtifact:
    """Render ``plan`` and write it to its destination.

    Nothing is written when a fragment cannot be read.
    """

    content = render(plan, root=root)
    destination = plan.destination
    if root is not None and not destination.is_absolute():
        destination = root / destination
    write_text(destination, content)
    logger.debug("Wrote %d characters to %s", len(content), destination)
    return BuildArtifact(path=destination, content=content)


def _resolve(fragment: Fragment, base: Path) -> str:
    if isinstance(fragment, LiteralFragment):
        return fragment.text
    if isinstance(fragment, FileFragment):
        path = fragment.path if fragment.path.is_absolute() else base / fragment.path
        try:
            with path.open(encoding="utf-8", newline="") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise MissingInputError(path, reason=str(exc)) from exc
    raise TypeError(f"Unsupported fragment type: {type(fragment).__name__}")
