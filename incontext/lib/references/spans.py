"""Compute emphasis spans for compact rendering of references.

A long reference such as ``@proj/src/lib/util/strings.ts`` is rendered as
``@proj/.../strings.ts``: the project name and the leaf are emphasized and the
middle segments are de-emphasized (collapsed). References with three or fewer
segments keep their middle visible.

Offsets are located directly in the raw token text because the parsed segments
no longer carry character positions.
"""

from .models import Reference
from .models import Span
from .models import SpanRole

# project + one middle segment + leaf are always shown in full
COLLAPSE_THRESHOLD = 3


def leaf_start(reference: Reference) -> int:
    """Offset of the leaf segment within the raw token."""
    raw = reference.raw
    if reference.is_directory:
        # Skip the trailing / and find the separator before the leaf
        return raw.rfind("/", 0, len(raw) - 1) + 1
    return raw.rfind("/") + 1


def calculate_spans(reference: Reference, start_offset: int = 0) -> list[Span]:
    """Compute the spans used to render a reference compactly.

    Args:
        reference: Parsed reference (its raw text is the token as it appears)
        start_offset: Position of the token's @ within the line

    Returns:
        Non-overlapping spans sorted by start offset; empty for single-segment
        references

    Examples:
        >>> [s.role.value for s in calculate_spans(parse("@p/a/b/c.ts"))]
        ['emphasize', 'deemphasize', 'emphasize']
    """
    segments = reference.path_segments
    if len(segments) <= 1:
        return []

    raw = reference.raw
    project = segments[0]
    leaf = segments[-1]

    project_start = 1
    project_end = project_start + len(project)
    leaf_begin = leaf_start(reference)
    leaf_end = leaf_begin + len(leaf)

    spans = [
        Span(
            start_offset=start_offset + project_start,
            end_offset=start_offset + project_end,
            role=SpanRole.EMPHASIZE,
            annotation=f"Project: {project}\nFull path: {raw}",
        )
    ]

    if len(segments) > COLLAPSE_THRESHOLD:
        # Between the separator after the project and the separator before the leaf
        middle_start = project_end + 1
        middle_end = leaf_begin - 1
        if middle_end > middle_start:
            spans.append(
                Span(
                    start_offset=start_offset + middle_start,
                    end_offset=start_offset + middle_end,
                    role=SpanRole.DEEMPHASIZE,
                    annotation=f"Full path: {raw}",
                )
            )

    segment_type = "Directory" if reference.is_directory else "File"
    spans.append(
        Span(
            start_offset=start_offset + leaf_begin,
            end_offset=start_offset + leaf_end,
            role=SpanRole.EMPHASIZE,
            annotation=f"{segment_type}: {leaf}",
        )
    )
    return spans
