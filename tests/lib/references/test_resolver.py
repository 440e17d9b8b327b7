"""Tests for root resolution."""

from pathlib import Path

import pytest

from incontext.lib.references import NamedRoot
from incontext.lib.references import parse
from incontext.lib.references import resolve
from incontext.lib.references.resolver import find_root

ROOTS = [
    NamedRoot(name="proj", base_path=Path("/w/proj")),
    NamedRoot(name="lib", base_path=Path("/w/lib")),
]


def test_named_root_match():
    resolved = resolve(parse("@proj/src/a.ts"), ROOTS)
    assert resolved.root.name == "proj"
    assert resolved.relative_path == "src/a.ts"
    assert resolved.absolute_path == Path("/w/proj/src/a.ts")


def test_second_root_match():
    resolved = resolve(parse("@lib/index.ts:L1:5"), ROOTS)
    assert resolved.absolute_path == Path("/w/lib/index.ts")


def test_unknown_root_falls_back_to_default_with_full_path():
    resolved = resolve(parse("@other/x.ts"), ROOTS)
    assert resolved.root.name == "proj"
    assert resolved.relative_path == "other/x.ts"
    assert resolved.absolute_path == Path("/w/proj/other/x.ts")


def test_single_segment_resolves_under_default_root():
    """A lone segment is a path even when it names a root."""
    resolved = resolve(parse("@lib"), ROOTS)
    assert resolved.root.name == "proj"
    assert resolved.absolute_path == Path("/w/proj/lib")


def test_directory_reference():
    resolved = resolve(parse("@proj/docs/"), ROOTS)
    assert resolved.absolute_path == Path("/w/proj/docs")


def test_resolution_is_pure():
    """Nothing under /w exists; resolution still succeeds."""
    resolved = resolve(parse("@proj/does/not/exist.ts"), ROOTS)
    assert resolved.absolute_path == Path("/w/proj/does/not/exist.ts")


def test_empty_roots_rejected():
    with pytest.raises(ValueError):
        resolve(parse("@proj/a.ts"), [])


def test_find_root():
    assert find_root("lib", ROOTS) is ROOTS[1]
    assert find_root("missing", ROOTS) is None
