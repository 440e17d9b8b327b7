"""Build reference text from filesystem paths (the inverse of resolution)."""

from collections.abc import Sequence
from pathlib import Path

from .models import NamedRoot


def find_containing_root(path: Path, roots: Sequence[NamedRoot]) -> tuple[NamedRoot, Path] | None:
    """Return the first root containing path and the path relative to it."""
    for root in roots:
        if path.is_relative_to(root.base_path):
            return root, path.relative_to(root.base_path)
    return None


def format_reference(
    path: Path,
    roots: Sequence[NamedRoot],
    line_start: int | None = None,
    line_end: int | None = None,
    directory: bool = False,
) -> str | None:
    """Format a path as reference text.

    Args:
        path: Absolute file or directory path
        roots: Ordered roots; the first one containing path is used
        line_start: Optional 1-based first line (files only)
        line_end: Optional 1-based last line (defaults to line_start)
        directory: Emit a directory reference (trailing /)

    Returns:
        Reference text, or None if path is outside every root or is a root
        itself (``@root/`` would resolve under the default root instead)

    Raises:
        ValueError: Line range given for a directory, or not 1-based

    Examples:
        >>> roots = [NamedRoot(name="proj", base_path=Path("/w/proj"))]
        >>> format_reference(Path("/w/proj/src/a.ts"), roots, 10, 20)
        '@proj/src/a.ts:L10:20'
        >>> format_reference(Path("/w/proj/src"), roots, directory=True)
        '@proj/src/'
    """
    if directory and line_start is not None:
        raise ValueError("Directory references cannot carry a line range")
    if line_start is not None and (line_start < 1 or (line_end is not None and line_end < line_start)):
        raise ValueError(f"Invalid line range: {line_start}:{line_end}")

    found = find_containing_root(path, roots)
    if found is None:
        return None

    root, relative = found
    relative_str = relative.as_posix()
    if relative_str == ".":
        return None
    reference = f"@{root.name}/{relative_str}"

    if directory:
        return f"{reference}/"
    if line_start is not None:
        return f"{reference}:L{line_start}:{line_end if line_end is not None else line_start}"
    return reference
