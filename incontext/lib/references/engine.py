"""Facade binding a root list to the scan / parse / resolve / load functions."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from collections.abc import Sequence
from pathlib import Path

from .content import load_content
from .formatter import format_reference
from .models import ContentPayload
from .models import LocatedReference
from .models import NamedRoot
from .models import Reference
from .models import ResolvedPath
from .models import Span
from .parser import find_references
from .parser import parse
from .parser import scan_text
from .resolver import resolve
from .scanner import LineScan
from .scanner import scan
from .spans import calculate_spans

logger = logging.getLogger(__name__)


class ReferenceEngine:
    """Reference notation engine for a fixed, ordered set of named roots.

    Stateless apart from the roots: every method only reads its arguments and
    the filesystem, so one engine can serve concurrent callers.
    """

    def __init__(self, roots: Sequence[NamedRoot]):
        """Initialize engine.

        Args:
            roots: Ordered roots; the first is the default root. Names must be unique.

        Raises:
            ValueError: No roots, or duplicate root names
        """
        if not roots:
            raise ValueError("ReferenceEngine needs at least one root")
        names = [root.name for root in roots]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate root names: {', '.join(duplicates)}")
        self.roots: tuple[NamedRoot, ...] = tuple(roots)

    @property
    def default_root(self) -> NamedRoot:
        return self.roots[0]

    def scan(self, line: str) -> LineScan:
        return scan(line)

    def parse(self, raw: str) -> Reference:
        return parse(raw)

    def find_references(self, line: str, line_index: int = 0) -> Iterator[LocatedReference]:
        return find_references(line, line_index)

    def scan_text(self, text: str) -> Iterator[LocatedReference]:
        return scan_text(text)

    def resolve(self, reference: Reference) -> ResolvedPath:
        return resolve(reference, self.roots)

    def spans(self, located: LocatedReference) -> list[Span]:
        return calculate_spans(located.reference, located.start)

    def load(self, reference: Reference) -> ContentPayload:
        """Resolve a parsed reference and load its content."""
        return load_content(self.resolve(reference), reference)

    def resolve_reference(self, reference: str) -> ContentPayload:
        """Resolve reference text (with or without leading @) to content.

        Args:
            reference: e.g. '@proj/src/a.ts', 'proj/docs/' or '@proj/a.ts:L3:9'

        Returns:
            Loaded content payload

        Raises:
            ReferenceParseError: Text is not a valid reference
            ReferenceNotFoundError: Nothing exists at the resolved path
            ReferenceReadError: The path could not be read
        """
        text = reference.strip()
        raw = text if text.startswith("@") else f"@{text}"
        parsed = parse(raw)
        resolved = self.resolve(parsed)
        logger.debug(f"Resolved {raw} -> {resolved.absolute_path} (root '{resolved.root.name}')")
        return load_content(resolved, parsed)

    def format_reference(
        self,
        path: Path,
        line_start: int | None = None,
        line_end: int | None = None,
        directory: bool = False,
    ) -> str | None:
        return format_reference(path, self.roots, line_start, line_end, directory)
