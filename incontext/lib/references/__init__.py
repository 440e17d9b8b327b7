"""Reference notation engine.

Recognizes ``@project/path[:Lstart[:end]]`` and ``@project/dir/`` tokens in text,
resolves them against caller-supplied named roots and loads the content they
point at.
"""

from .content import load_content
from .content import read_line_range
from .engine import ReferenceEngine
from .errors import EmptyReferenceError
from .errors import MalformedReferenceError
from .errors import ReferenceNotationError
from .errors import ReferenceNotFoundError
from .errors import ReferenceParseError
from .errors import ReferenceReadError
from .formatter import format_reference
from .models import BinaryContent
from .models import ContentPayload
from .models import DirectoryContent
from .models import DirectoryEntry
from .models import ImageContent
from .models import LocatedReference
from .models import NamedRoot
from .models import Reference
from .models import ReferenceKind
from .models import ResolvedPath
from .models import Span
from .models import SpanRole
from .models import TextContent
from .models import TokenMatch
from .models import payload_to_wire
from .parser import find_references
from .parser import parse
from .parser import scan_text
from .resolver import resolve
from .scanner import scan
from .spans import calculate_spans
from .workspace import WorkspaceReference
from .workspace import scan_workspace

__all__ = [
    "BinaryContent",
    "ContentPayload",
    "DirectoryContent",
    "DirectoryEntry",
    "EmptyReferenceError",
    "ImageContent",
    "LocatedReference",
    "MalformedReferenceError",
    "NamedRoot",
    "Reference",
    "ReferenceEngine",
    "ReferenceKind",
    "ReferenceNotFoundError",
    "ReferenceNotationError",
    "ReferenceParseError",
    "ReferenceReadError",
    "ResolvedPath",
    "Span",
    "SpanRole",
    "TextContent",
    "TokenMatch",
    "WorkspaceReference",
    "calculate_spans",
    "find_references",
    "format_reference",
    "load_content",
    "parse",
    "payload_to_wire",
    "read_line_range",
    "resolve",
    "scan",
    "scan_text",
    "scan_workspace",
]
