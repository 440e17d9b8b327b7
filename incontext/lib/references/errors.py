"""Error taxonomy for the reference notation engine."""

from __future__ import annotations

from pathlib import Path


class ReferenceNotationError(Exception):
    """Base class for all reference engine errors."""


class ReferenceParseError(ReferenceNotationError):
    """Raised when a raw token cannot be parsed into a Reference.

    Parse errors are local: bulk scanners skip the offending token.
    """

    def __init__(self, raw: str, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Invalid reference {raw!r}: {reason}")


class MalformedReferenceError(ReferenceParseError):
    """Line-range suffix or path structure is not well formed."""


class EmptyReferenceError(ReferenceParseError):
    """Reference has no path segments."""

    def __init__(self, raw: str):
        super().__init__(raw, "reference has no path")


class ReferenceNotFoundError(ReferenceNotationError):
    """Nothing exists at the resolved path."""

    def __init__(self, path: Path, reference: str | None = None):
        self.path = path
        self.reference = reference
        label = f"{reference} -> " if reference else ""
        super().__init__(f"File not found: {label}{path}")


class ReferenceReadError(ReferenceNotationError):
    """The resolved path exists but could not be read."""

    def __init__(self, path: Path, detail: str, reference: str | None = None):
        self.path = path
        self.reference = reference
        self.detail = detail
        super().__init__(f"Failed to read {path}: {detail}")
