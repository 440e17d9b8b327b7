"""Tests for the ReferenceEngine facade."""

from pathlib import Path

import pytest

from incontext.lib.references import DirectoryContent
from incontext.lib.references import EmptyReferenceError
from incontext.lib.references import MalformedReferenceError
from incontext.lib.references import NamedRoot
from incontext.lib.references import ReferenceEngine
from incontext.lib.references import ReferenceNotFoundError
from incontext.lib.references import TextContent


def test_requires_roots():
    with pytest.raises(ValueError):
        ReferenceEngine([])


def test_rejects_duplicate_names():
    roots = [NamedRoot(name="a", base_path=Path("/x")), NamedRoot(name="a", base_path=Path("/y"))]
    with pytest.raises(ValueError, match="Duplicate"):
        ReferenceEngine(roots)


def test_default_root_is_first(engine):
    assert engine.default_root.name == "proj"


def test_resolve_reference_text(engine):
    payload = engine.resolve_reference("@proj/src/a.ts:L1:2")
    assert isinstance(payload, TextContent)
    assert payload.excerpt == "line1\nline2"


def test_resolve_reference_adds_at_and_strips(engine):
    payload = engine.resolve_reference("  docs/guide.md \n")
    assert isinstance(payload, TextContent)
    assert payload.reference == "@docs/guide.md"


def test_resolve_reference_directory(engine):
    payload = engine.resolve_reference("@proj/dir/")
    assert isinstance(payload, DirectoryContent)


def test_unknown_root_falls_back_to_default(engine, workspace):
    (workspace["proj"] / "other").mkdir()
    (workspace["proj"] / "other" / "x.ts").write_text("fallback")
    payload = engine.resolve_reference("@other/x.ts")
    assert payload.content == "fallback"


def test_errors_propagate(engine):
    with pytest.raises(ReferenceNotFoundError):
        engine.resolve_reference("@proj/nope.ts")
    with pytest.raises(MalformedReferenceError):
        engine.resolve_reference("@proj/a.ts:Lx")
    with pytest.raises(EmptyReferenceError):
        engine.resolve_reference("@")


def test_spans_for_located_reference(engine):
    line = "see @proj/src/lib/util.ts"
    located = next(engine.find_references(line))
    spans = engine.spans(located)
    assert line[spans[0].start_offset : spans[0].end_offset] == "proj"
    assert line[spans[-1].start_offset : spans[-1].end_offset] == "util.ts"


def test_scan_and_parse(engine):
    matches = list(engine.scan("@proj/a.ts @docs/"))
    assert [engine.parse(m.raw).kind.value for m in matches] == ["file", "directory"]


def test_scan_text(engine):
    assert [r.line for r in engine.scan_text("@a/b\n\n@c/d")] == [0, 2]


def test_format_reference(engine, workspace):
    assert engine.format_reference(workspace["docs"] / "guide.md") == "@docs/guide.md"


def test_load(engine):
    payload = engine.load(engine.parse("@proj/src/lib/util.ts"))
    assert payload.reference == "@proj/src/lib/util.ts"
