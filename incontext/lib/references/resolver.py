"""Map parsed references onto named roots."""

import logging
from collections.abc import Sequence

from .models import NamedRoot
from .models import Reference
from .models import ResolvedPath

logger = logging.getLogger(__name__)


def find_root(name: str, roots: Sequence[NamedRoot]) -> NamedRoot | None:
    """Return the root with the given name, or None."""
    for root in roots:
        if root.name == name:
            return root
    return None


def resolve(reference: Reference, roots: Sequence[NamedRoot]) -> ResolvedPath:
    """Resolve a reference to an absolute path under one of the roots.

    Resolution policy:
    1. Multi-segment reference whose first segment names a root:
       that root, with the remaining segments as the relative path.
    2. Anything else: the default root (roots[0]) with the *entire* path,
       including an unmatched first segment, as the relative path.

    The fallback is not an error: a mistyped root name yields a path under the
    default root that most likely does not exist. Existence is only checked
    when content is loaded.

    Args:
        reference: Parsed reference
        roots: Ordered roots; the first one is the default

    Returns:
        ResolvedPath (the filesystem is not touched)

    Raises:
        ValueError: roots is empty
    """
    if not roots:
        raise ValueError("At least one root is required to resolve references")

    segments = reference.path_segments
    if len(segments) > 1:
        root = find_root(segments[0], roots)
        if root is not None:
            return ResolvedPath.under(root, "/".join(segments[1:]))
        logger.debug(f"No root named '{segments[0]}', resolving {reference.raw} under default root '{roots[0].name}'")

    return ResolvedPath.under(roots[0], reference.path)
