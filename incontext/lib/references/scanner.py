"""Pure text scanning for reference tokens - no parsing, no file I/O."""

import re
from collections.abc import Iterator
from re import Pattern

from .models import TokenMatch

# A token is @ followed by a run of characters that are neither whitespace nor @.
# Segment structure, line suffixes and the trailing / are validated by the parser.
TOKEN_PATTERN: Pattern = re.compile(r"@[^\s@]+")


class LineScan:
    """Lazy, restartable sequence of token matches for one line.

    Each iteration scans the line again from the start, so the same LineScan can
    be consumed any number of times.

    Examples:
        >>> [m.raw for m in scan("see @proj/a.ts and @proj/dir/")]
        ['@proj/a.ts', '@proj/dir/']
    """

    def __init__(self, line: str):
        self.line = line

    def __iter__(self) -> Iterator[TokenMatch]:
        for match in TOKEN_PATTERN.finditer(self.line):
            yield TokenMatch(start=match.start(), end=match.end(), raw=match.group(0))

    def __repr__(self) -> str:
        return f"LineScan({self.line!r})"


def scan(line: str) -> LineScan:
    """Find candidate reference tokens in a line of text.

    Args:
        line: A single line of text

    Returns:
        LineScan yielding non-overlapping TokenMatch objects left to right
    """
    return LineScan(line)


def has_references(text: str) -> bool:
    """Check whether text contains at least one candidate token."""
    return TOKEN_PATTERN.search(text) is not None
