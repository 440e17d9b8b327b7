"""Shared fixtures for incontext tests."""

from pathlib import Path

import pytest

from incontext.lib.references import NamedRoot
from incontext.lib.references import ReferenceEngine

# Smallest valid PNG (1x1 transparent pixel)
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


@pytest.fixture
def workspace(tmp_path: Path) -> dict[str, Path]:
    """Two project roots with a few files of each kind."""
    proj = tmp_path / "proj"
    docs = tmp_path / "docs"
    (proj / "src" / "lib").mkdir(parents=True)
    (proj / "dir" / "sub").mkdir(parents=True)
    (proj / "media").mkdir()
    docs.mkdir()

    (proj / "src" / "a.ts").write_text("line1\nline2\nline3\nline4\nline5", encoding="utf-8")
    (proj / "src" / "lib" / "util.ts").write_text("export const x = 1;\n", encoding="utf-8")
    (proj / "dir" / "b.md").write_text("# B\n", encoding="utf-8")
    (proj / "dir" / "A.txt").write_text("a\n", encoding="utf-8")
    (proj / "media" / "new.png").write_bytes(PNG_BYTES)
    (proj / "data.bin").write_bytes(b"\x00\x01\x02\x03")
    (docs / "guide.md").write_text("See @proj/src/a.ts:L2:3 for details.\n", encoding="utf-8")

    return {"root": tmp_path, "proj": proj, "docs": docs}


@pytest.fixture
def roots(workspace: dict[str, Path]) -> list[NamedRoot]:
    return [
        NamedRoot(name="proj", base_path=workspace["proj"]),
        NamedRoot(name="docs", base_path=workspace["docs"]),
    ]


@pytest.fixture
def engine(roots: list[NamedRoot]) -> ReferenceEngine:
    return ReferenceEngine(roots)
