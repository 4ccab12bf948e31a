from __future__ import annotations

from pathlib import Path

import pytest

from nodeunit_tasks.assembly import AssemblyPlan, FileFragment, LiteralFragment, assemble, render
from nodeunit_tasks.errors import MissingInputError


def _plan(tmp_path: Path, *fragments, markers=()) -> AssemblyPlan:
    return AssemblyPlan(fragments=fragments, destination=tmp_path / "out" / "bundle.js", markers=markers)


def test_each_fragment_is_followed_by_one_newline(tmp_path: Path) -> None:
    plan = _plan(tmp_path, LiteralFragment("a"), LiteralFragment("b"))
    assert render(plan) == "a\nb\n"


def test_newline_added_even_when_file_already_ends_with_one(tmp_path: Path) -> None:
    source = tmp_path / "part.js"
    source.write_text("var x = 1;\n", encoding="utf-8")
    plan = _plan(tmp_path, FileFragment(source), LiteralFragment("end"))
    assert render(plan) == "var x = 1;\n\nend\n"


def test_relative_file_fragments_resolve_against_root(tmp_path: Path) -> None:
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "core.js").write_text("core", encoding="utf-8")
    plan = AssemblyPlan(fragments=[FileFragment("lib/core.js")], destination=Path("dist/core.js"))

    artifact = assemble(plan, root=tmp_path)

    assert artifact.path == tmp_path / "dist" / "core.js"
    assert artifact.content == "core\n"


def test_assemble_writes_returned_content(tmp_path: Path) -> None:
    plan = _plan(tmp_path, LiteralFragment("(function(){"), LiteralFragment("})();"))
    artifact = assemble(plan)

    assert artifact.path.read_bytes() == artifact.content.encode("utf-8")
    assert artifact.content == "(function(){\n})();\n"


def test_assemble_overwrites_existing_destination(tmp_path: Path) -> None:
    plan = _plan(tmp_path, LiteralFragment("new"))
    plan.destination.parent.mkdir(parents=True)
    plan.destination.write_text("old content that is longer", encoding="utf-8")

    assemble(plan)

    assert plan.destination.read_text(encoding="utf-8") == "new\n"


def test_output_is_deterministic(tmp_path: Path) -> None:
    source = tmp_path / "part.js"
    source.write_text("alpha //@MARK\nbeta", encoding="utf-8")
    plan = _plan(tmp_path, LiteralFragment("head"), FileFragment(source), markers=("@MARK",))

    first = assemble(plan).content
    second = assemble(plan).content

    assert first == second
    assert plan.destination.read_text(encoding="utf-8") == second


def test_fragment_order_is_preserved(tmp_path: Path) -> None:
    forward = _plan(tmp_path, LiteralFragment("one"), LiteralFragment("two"))
    backward = _plan(tmp_path, LiteralFragment("two"), LiteralFragment("one"))

    assert render(forward) == "one\ntwo\n"
    assert render(backward) == "two\none\n"


def test_duplicate_fragments_are_kept(tmp_path: Path) -> None:
    plan = _plan(tmp_path, LiteralFragment("x"), LiteralFragment("x"))
    assert render(plan) == "x\nx\n"


def test_markers_removed_everywhere(tmp_path: Path) -> None:
    plan = _plan(
        tmp_path,
        LiteralFragment("a @X b @X"),
        LiteralFragment("@X"),
        LiteralFragment("mid@Xline"),
        markers=("@X",),
    )
    assert render(plan) == "a  b \n\nmidline\n"


def test_marker_removal_leaves_text_intact_when_absent(tmp_path: Path) -> None:
    plan = _plan(tmp_path, LiteralFragment("var a = 1;"), markers=("@REMOVE_LINE_FOR_BROWSER",))
    assert render(plan) == "var a = 1;\n"


def test_partial_marker_matches_are_not_removed(tmp_path: Path) -> None:
    plan = _plan(
        tmp_path,
        LiteralFragment("@REMOVE_LINE_FOR foo"),
        LiteralFragment("LINE_FOR_BROWSER"),
        markers=("@REMOVE_LINE_FOR_BROWSER",),
    )
    assert render(plan) == "@REMOVE_LINE_FOR foo\nLINE_FOR_BROWSER\n"


def test_multiple_markers_all_removed(tmp_path: Path) -> None:
    plan = _plan(
        tmp_path,
        LiteralFragment("x //@REMOVE_LINE_FOR_BROWSER"),
        LiteralFragment("y //@REMOVE_LINE_FOR_COMMONJS"),
        markers=("@REMOVE_LINE_FOR_BROWSER", "@REMOVE_LINE_FOR_COMMONJS"),
    )
    assert render(plan) == "x //\ny //\n"


def test_empty_literal_contributes_only_newline(tmp_path: Path) -> None:
    plan = _plan(tmp_path, LiteralFragment(""), LiteralFragment("z"))
    assert render(plan) == "\nz\n"


def test_file_content_is_read_without_newline_translation(tmp_path: Path) -> None:
    source = tmp_path / "crlf.js"
    source.write_bytes(b"a\r\nb")
    plan = _plan(tmp_path, FileFragment(source))

    artifact = assemble(plan)

    assert artifact.content == "a\r\nb\n"
    assert plan.destination.read_bytes() == b"a\r\nb\n"


def test_missing_file_raises_and_writes_nothing(tmp_path: Path) -> None:
    missing = tmp_path / "lib" / "core.js"
    plan = _plan(tmp_path, LiteralFragment("head"), FileFragment(missing), LiteralFragment("tail"))

    with pytest.raises(MissingInputError) as excinfo:
        assemble(plan)

    assert excinfo.value.path == missing
    assert "core.js" in str(excinfo.value)
    assert not plan.destination.exists()
