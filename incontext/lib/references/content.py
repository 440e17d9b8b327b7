"""Load resolved paths into typed content payloads."""

import base64
import logging
import os
import stat
from pathlib import Path

from .errors import ReferenceNotFoundError
from .errors import ReferenceReadError
from .models import BinaryContent
from .models import ContentPayload
from .models import DirectoryContent
from .models import DirectoryEntry
from .models import ImageContent
from .models import Reference
from .models import ResolvedPath
from .models import TextContent

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".svg", ".webp", ".ico"})

TEXT_EXTENSIONS = frozenset(
    {".txt", ".md", ".js", ".ts", ".json", ".html", ".css", ".xml", ".yaml", ".yml", ".toml", ".ini", ".csv"}
)

MIME_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".ico": "image/x-icon",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".js": "text/javascript",
    ".ts": "text/typescript",
    ".json": "application/json",
    ".html": "text/html",
    ".css": "text/css",
    ".xml": "text/xml",
    ".yaml": "text/yaml",
    ".yml": "text/yaml",
    ".toml": "application/toml",
    ".ini": "text/plain",
    ".csv": "text/csv",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def get_mime_type(path: Path) -> str:
    """MIME type from the fixed extension table (case-insensitive)."""
    return MIME_TYPES.get(path.suffix.lower(), DEFAULT_MIME_TYPE)


def is_image_file(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def is_text_file(path: Path) -> bool:
    return path.suffix.lower() in TEXT_EXTENSIONS


def count_lines(content: str) -> int:
    """Number of lines as ``content.count('\\n') + 1``."""
    return content.count("\n") + 1


def read_line_range(path: Path, start: int, end: int) -> list[str]:
    """Read 1-based inclusive lines from a UTF-8 text file.

    The range is clamped to the file; a range past the end returns [].

    Raises:
        ReferenceNotFoundError: File does not exist
        ReferenceReadError: File could not be read or decoded
    """
    content = _read_text(path, reference=None)
    return _slice_lines(content, start, end)


def _slice_lines(content: str, start: int, end: int) -> list[str]:
    lines = content.split("\n")
    return lines[max(start, 1) - 1 : max(end, 0)]


def format_directory_listing(reference: str, entries: tuple[DirectoryEntry, ...]) -> str:
    """Human-readable directory summary.

    Example output:
        Directory: @proj/src/

          DIR  components
          FILE index.ts
    """
    lines = [f"  {'DIR ' if entry.is_directory else 'FILE'} {entry.name}" for entry in entries]
    listing = "\n".join(lines) if lines else "  (empty directory)"
    return f"Directory: {reference}\n\n{listing}"


def load_content(resolved: ResolvedPath, reference: Reference | str | None = None) -> ContentPayload:
    """Classify and load whatever exists at a resolved path.

    Args:
        resolved: Path produced by the root resolver
        reference: Originating reference (for labels and the optional line range);
            defaults to the absolute path

    Returns:
        DirectoryContent, TextContent, ImageContent or BinaryContent

    Raises:
        ReferenceNotFoundError: Nothing exists at the path
        ReferenceReadError: The path exists but could not be listed or read
    """
    path = resolved.absolute_path
    if isinstance(reference, Reference):
        label = reference.raw
        parsed: Reference | None = reference
    else:
        label = reference or str(path)
        parsed = None

    info = _stat(path, label)
    if stat.S_ISDIR(info.st_mode):
        return _load_directory(path, label)
    if is_image_file(path):
        data = _read_bytes(path, label)
        return ImageContent(
            reference=label,
            path=path,
            mime_type=get_mime_type(path),
            base64=base64.b64encode(data).decode("ascii"),
            byte_size=len(data),
        )
    if is_text_file(path):
        return _load_text(path, label, parsed)

    data = _read_bytes(path, label)
    return BinaryContent(
        reference=label,
        path=path,
        mime_type=get_mime_type(path),
        base64=base64.b64encode(data).decode("ascii"),
        byte_size=len(data),
    )


def _load_directory(path: Path, label: str) -> DirectoryContent:
    try:
        children = list(path.iterdir())
        entries = tuple(
            DirectoryEntry(name=child.name, is_directory=child.is_dir(), path=child)
            for child in sorted(children, key=lambda p: (not p.is_dir(), p.name.lower()))
        )
    except OSError as e:
        raise ReferenceReadError(path, e.strerror or str(e), label) from e

    return DirectoryContent(
        reference=label,
        path=path,
        entries=entries,
        text=format_directory_listing(label, entries),
    )


def _load_text(path: Path, label: str, parsed: Reference | None) -> TextContent:
    content = _read_text(path, label)
    line_start = line_end = excerpt = None
    if parsed is not None and parsed.has_line_range:
        line_start = parsed.line_start
        line_end = parsed.line_end
        excerpt = "\n".join(_slice_lines(content, line_start, line_end))

    return TextContent(
        reference=label,
        path=path,
        mime_type=get_mime_type(path),
        content=content,
        line_count=count_lines(content),
        line_start=line_start,
        line_end=line_end,
        excerpt=excerpt,
    )


def _read_bytes(path: Path, label: str | None) -> bytes:
    # Covers files deleted between the existence check and the read
    try:
        return path.read_bytes()
    except OSError as e:
        raise ReferenceReadError(path, e.strerror or str(e), label) from e


def _stat(path: Path, label: str | None) -> os.stat_result:
    """Stat a path, mapping failures onto the not-found / read-failure errors."""
    try:
        return path.stat()
    except (FileNotFoundError, NotADirectoryError) as e:
        logger.debug(f"Nothing at {path} for {label}")
        raise ReferenceNotFoundError(path, label) from e
    except OSError as e:
        raise ReferenceReadError(path, e.strerror or str(e), label) from e


def _read_text(path: Path, reference: str | None) -> str:
    _stat(path, reference)
    data = _read_bytes(path, reference)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ReferenceReadError(path, f"not valid UTF-8 ({e.reason} at byte {e.start})", reference) from e
