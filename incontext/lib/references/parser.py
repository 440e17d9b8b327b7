"""Convert raw tokens into Reference objects."""

import logging
import re
from collections.abc import Iterator
from re import Pattern

from .errors import EmptyReferenceError
from .errors import MalformedReferenceError
from .errors import ReferenceParseError
from .models import LocatedReference
from .models import Reference
from .models import ReferenceKind
from .scanner import scan

logger = logging.getLogger(__name__)

# Well-formed line suffix: :L<start> or :L<start>:<end>
LINE_SUFFIX_PATTERN: Pattern = re.compile(r":L(\d+)(?::(\d+))?")

LINE_MARKER = ":L"

# Editor line breaks only; str.splitlines also splits on \f, \x1c-\x1e, \x85 and \u2028
LINE_BREAK_PATTERN: Pattern = re.compile(r"\r\n|\r|\n")


def parse(raw: str) -> Reference:
    """Parse a raw token into a Reference.

    Args:
        raw: Token text starting with @ (e.g. '@proj/src/a.ts:L10:20')

    Returns:
        Parsed Reference

    Raises:
        EmptyReferenceError: No path after the @
        MalformedReferenceError: Missing @, empty segment, or a line suffix that
            is not ``:L<digits>`` / ``:L<digits>:<digits>``

    Examples:
        >>> parse("@proj/a.ts:L3").line_end
        3
        >>> parse("@proj/dir/").path_segments
        ('proj', 'dir')
    """
    if not raw.startswith("@"):
        raise MalformedReferenceError(raw, "reference must start with '@'")

    body = raw[1:]
    line_start: int | None = None
    line_end: int | None = None

    if body.endswith("/"):
        kind = ReferenceKind.DIRECTORY
        path = body[:-1]
    else:
        kind = ReferenceKind.FILE
        path = body
        # Only the first :L in the last segment can open a suffix. A bare trailing
        # :L is literal path text; anything else after it must be well formed.
        leaf_start = body.rfind("/") + 1
        marker = body.find(LINE_MARKER, leaf_start)
        if marker != -1 and marker + len(LINE_MARKER) < len(body):
            suffix = LINE_SUFFIX_PATTERN.fullmatch(body, marker)
            if suffix is None:
                raise MalformedReferenceError(raw, "line suffix must be :L<start> or :L<start>:<end>")
            line_start = int(suffix.group(1))
            line_end = int(suffix.group(2)) if suffix.group(2) else line_start
            path = body[:marker]
            if line_start < 1 or line_end < 1:
                raise MalformedReferenceError(raw, "line numbers are 1-based")
            if line_end < line_start:
                raise MalformedReferenceError(raw, f"line range ends before it starts ({line_start}:{line_end})")

    if not path:
        raise EmptyReferenceError(raw)

    segments = tuple(path.split("/"))
    if any(not segment for segment in segments):
        raise MalformedReferenceError(raw, "empty path segment")

    return Reference(
        raw=raw,
        kind=kind,
        path_segments=segments,
        line_start=line_start,
        line_end=line_end,
    )


def try_parse(raw: str) -> Reference | None:
    """Parse a token, returning None instead of raising on parse errors."""
    try:
        return parse(raw)
    except ReferenceParseError as e:
        logger.debug(f"Skipping token: {e}")
        return None


def find_references(line: str, line_index: int = 0) -> Iterator[LocatedReference]:
    """Scan a line and yield every token that parses.

    Tokens that fail to parse are skipped, never raised.

    Args:
        line: Line of text
        line_index: 0-based line number recorded on each result
    """
    for match in scan(line):
        reference = try_parse(match.raw)
        if reference is None:
            continue
        yield LocatedReference(line=line_index, start=match.start, end=match.end, reference=reference)


def split_lines(text: str) -> list[str]:
    """Split a buffer into lines the way an editor numbers them."""
    return LINE_BREAK_PATTERN.split(text)


def scan_text(text: str) -> Iterator[LocatedReference]:
    """Yield parsed references for every line of a buffer."""
    for line_index, line in enumerate(split_lines(text)):
        yield from find_references(line, line_index)
