"""Bundle assembly utilities."""

from .assembler import assemble, render
from .fragments import AssemblyPlan, BuildArtifact, FileFragment, Fragment, LiteralFragment
from .profiles import BROWSER, COMMONJS, LEGACY_TEST_SCRIPTS, AssemblyProfile, export_name, legacy_test_plan

__all__ = [
    "AssemblyPlan",
    "AssemblyProfile",
    "BROWSER",
    "BuildArtifact",
    "COMMONJS",
    "FileFragment",
    "Fragment",
    "LEGACY_TEST_SCRIPTS",
    "LiteralFragment",
    "assemble",
    "export_name",
    "render",
    "legacy_test_plan",
]
