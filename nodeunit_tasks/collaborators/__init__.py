"""External tools the tasks delegate to."""

from .commands import CommandRunner
from .copier import TreeCopier
from .installer import Installer
from .minify import CommandMinifier, Minifier, MinifyResult, RJSMinMinifier, build_minifier

__all__ = [
    "CommandMinifier",
    "CommandRunner",
    "Installer",
    "Minifier",
    "MinifyResult",
    "RJSMinMinifier",
    "TreeCopier",
    "build_minifier",
]
