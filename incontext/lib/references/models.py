"""Data models for the reference notation engine.

All models are frozen: a Reference is rebuilt from each scan, a ResolvedPath is
derived on demand and a ContentPayload is produced once per resolution.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated
from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator


class ReferenceKind(str, Enum):
    """What a reference points at."""

    FILE = "file"
    DIRECTORY = "directory"


class SpanRole(str, Enum):
    """How a span should be rendered."""

    EMPHASIZE = "emphasize"
    DEEMPHASIZE = "deemphasize"


class Reference(BaseModel):
    """A parsed ``@project/path[:Lstart[:end]]`` or ``@project/dir/`` token.

    Attributes:
        raw: Token text exactly as it appeared, including the leading @
        kind: FILE or DIRECTORY (DIRECTORY iff raw ends with /)
        path_segments: Path split on /, never empty
        line_start: 1-based first line of the range (files only)
        line_end: 1-based last line of the range, inclusive
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    kind: ReferenceKind
    path_segments: tuple[str, ...] = Field(min_length=1)
    line_start: int | None = Field(default=None, ge=1)
    line_end: int | None = Field(default=None, ge=1)

    @model_validator(mode="before")
    @classmethod
    def _default_line_end(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("line_start") is not None and data.get("line_end") is None:
            data = {**data, "line_end": data["line_start"]}
        return data

    @model_validator(mode="after")
    def _check_invariants(self) -> Reference:
        if (self.kind == ReferenceKind.DIRECTORY) != self.raw.endswith("/"):
            raise ValueError("directory references must end with '/', file references must not")
        if self.kind == ReferenceKind.DIRECTORY and self.line_start is not None:
            raise ValueError("directory references cannot carry a line range")
        if self.line_start is None and self.line_end is not None:
            raise ValueError("line_end given without line_start")
        if self.line_start is not None and self.line_end is not None and self.line_end < self.line_start:
            raise ValueError("line_end must not precede line_start")
        return self

    @property
    def is_directory(self) -> bool:
        return self.kind == ReferenceKind.DIRECTORY

    @property
    def has_line_range(self) -> bool:
        return self.line_start is not None

    @property
    def path(self) -> str:
        """Path portion joined with /, without @, suffix or trailing slash."""
        return "/".join(self.path_segments)

    @property
    def text(self) -> str:
        """Canonical notation for this reference."""
        if self.is_directory:
            return f"@{self.path}/"
        if self.line_start is not None:
            return f"@{self.path}:L{self.line_start}:{self.line_end}"
        return f"@{self.path}"


class NamedRoot(BaseModel):
    """A caller-supplied base directory addressable by name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    base_path: Path

    @model_validator(mode="after")
    def _check_absolute(self) -> NamedRoot:
        if "/" in self.name:
            raise ValueError(f"root name may not contain '/': {self.name!r}")
        if not self.base_path.is_absolute():
            raise ValueError(f"root base path must be absolute: {self.base_path}")
        return self


class ResolvedPath(BaseModel):
    """Absolute filesystem location of a reference under one root."""

    model_config = ConfigDict(frozen=True)

    root: NamedRoot
    relative_path: str
    absolute_path: Path

    @model_validator(mode="after")
    def _check_join(self) -> ResolvedPath:
        if self.absolute_path != self.root.base_path / self.relative_path:
            raise ValueError("absolute_path must equal root.base_path joined with relative_path")
        return self

    @classmethod
    def under(cls, root: NamedRoot, relative_path: str) -> ResolvedPath:
        return cls(root=root, relative_path=relative_path, absolute_path=root.base_path / relative_path)


class Span(BaseModel):
    """Character range within a line to emphasize or de-emphasize."""

    model_config = ConfigDict(frozen=True)

    start_offset: int = Field(ge=0)
    end_offset: int
    role: SpanRole
    annotation: str

    @model_validator(mode="after")
    def _check_range(self) -> Span:
        if self.end_offset <= self.start_offset:
            raise ValueError("span must be non-empty")
        return self

    def overlaps(self, other: Span) -> bool:
        return self.start_offset < other.end_offset and other.start_offset < self.end_offset


class TokenMatch(BaseModel):
    """A candidate token delimited by the scanner."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    raw: str


class LocatedReference(BaseModel):
    """A parsed reference together with its position in a buffer."""

    model_config = ConfigDict(frozen=True)

    line: int
    start: int
    end: int
    reference: Reference


# === Content payloads ===


class DirectoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    is_directory: bool
    path: Path


class DirectoryContent(BaseModel):
    """Immediate entries of a directory."""

    model_config = ConfigDict(frozen=True)

    type: Literal["directory"] = "directory"
    reference: str
    path: Path
    entries: tuple[DirectoryEntry, ...]
    text: str

    def to_wire(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "reference": self.reference,
            "path": str(self.path),
            "contents": [
                {
                    "name": entry.name,
                    "type": "directory" if entry.is_directory else "file",
                    "path": str(entry.path),
                }
                for entry in self.entries
            ],
            "text": self.text,
        }


class TextContent(BaseModel):
    """UTF-8 text file, returned verbatim."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    reference: str
    path: Path
    mime_type: str
    content: str
    line_count: int
    line_start: int | None = None
    line_end: int | None = None
    excerpt: str | None = None

    @property
    def text(self) -> str:
        return self.content

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {
            "type": self.type,
            "reference": self.reference,
            "path": str(self.path),
            "mimeType": self.mime_type,
            "content": self.content,
            "lineCount": self.line_count,
        }
        if self.line_start is not None:
            wire["lineStart"] = self.line_start
            wire["lineEnd"] = self.line_end
            wire["excerpt"] = self.excerpt
        wire["text"] = self.text
        return wire


class _EncodedContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    reference: str
    path: Path
    mime_type: str
    base64: str
    byte_size: int

    def to_wire(self) -> dict[str, Any]:
        return {
            "type": self.type,  # type: ignore[attr-defined]
            "reference": self.reference,
            "path": str(self.path),
            "mimeType": self.mime_type,
            "base64": self.base64,
            "size": self.byte_size,
            "text": self.text,  # type: ignore[attr-defined]
        }


class ImageContent(_EncodedContent):
    """Image file as base64."""

    type: Literal["image"] = "image"

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"

    @property
    def text(self) -> str:
        return f"Image: {self.reference}\nPath: {self.path}\nSize: {self.byte_size} bytes\nMIME: {self.mime_type}"

    def to_wire(self) -> dict[str, Any]:
        wire = super().to_wire()
        wire["dataUrl"] = self.data_url
        return wire


class BinaryContent(_EncodedContent):
    """Any other file as base64."""

    type: Literal["binary"] = "binary"

    @property
    def text(self) -> str:
        return f"Binary file: {self.reference}\nPath: {self.path}\nSize: {self.byte_size} bytes\nMIME: {self.mime_type}"


ContentPayload = Annotated[
    DirectoryContent | TextContent | ImageContent | BinaryContent,
    Field(discriminator="type"),
]


def payload_to_wire(payload: ContentPayload) -> dict[str, Any]:
    """Wire dict for any content payload (type, reference, path, fields, text)."""
    return payload.to_wire()
