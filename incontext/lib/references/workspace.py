"""Find references across the files of a directory tree."""

import fnmatch
import logging
import os
from collections.abc import Iterator
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict

from .models import Reference
from .parser import find_references
from .parser import split_lines
from .scanner import has_references

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("*.ts", "*.js", "*.md", "*.txt")
DEFAULT_EXCLUDE = ("node_modules",)


class WorkspaceReference(BaseModel):
    """A reference found in a file, with its 0-based line and column range."""

    model_config = ConfigDict(frozen=True)

    file: Path
    line: int
    start: int
    end: int
    reference: Reference


def iter_candidate_files(
    base: Path,
    patterns: Sequence[str] = DEFAULT_PATTERNS,
    exclude: Sequence[str] = DEFAULT_EXCLUDE,
) -> Iterator[Path]:
    """Walk base in sorted order, yielding files whose names match a pattern."""
    for dirpath, dirnames, filenames in os.walk(base):
        dirnames[:] = sorted(d for d in dirnames if d not in exclude)
        for filename in sorted(filenames):
            if any(fnmatch.fnmatch(filename, pattern) for pattern in patterns):
                yield Path(dirpath) / filename


def scan_workspace(
    base: Path,
    patterns: Sequence[str] = DEFAULT_PATTERNS,
    exclude: Sequence[str] = DEFAULT_EXCLUDE,
) -> Iterator[WorkspaceReference]:
    """Yield every parseable reference in matching files under base.

    Files that cannot be read as UTF-8 are logged and skipped.
    """
    for file in iter_candidate_files(base, patterns, exclude):
        try:
            text = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable file {file}: {e}")
            continue

        if not has_references(text):
            continue

        for line_index, line in enumerate(split_lines(text)):
            for located in find_references(line, line_index):
                yield WorkspaceReference(
                    file=file,
                    line=located.line,
                    start=located.start,
                    end=located.end,
                    reference=located.reference,
                )
