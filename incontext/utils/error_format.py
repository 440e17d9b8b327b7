"""Error message formatting for command line and server output.

Some exceptions stringify to an empty message (TimeoutError(), a bare
PermissionError); these helpers always produce something a user can act on.
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

from ..lib.references import ReferenceNotationError

# Fallback messages for exception types that commonly arrive without one
FRIENDLY_MESSAGES: dict[type, str] = {
    TimeoutError: "Operation timed out.",
    PermissionError: "Permission denied.",
    IsADirectoryError: "Expected a file but found a directory.",
    KeyboardInterrupt: "Operation interrupted by user.",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a non-empty display message.

    Reference engine errors already carry a complete sentence, so their type
    name is never prefixed.

    Examples:
        >>> format_error_message(ValueError("invalid input"))
        'ValueError: invalid input'
        >>> format_error_message(TimeoutError())
        'TimeoutError: Operation timed out.'
    """
    error_str = str(e)
    error_type = type(e).__name__

    if error_str:
        if isinstance(e, ReferenceNotationError) or not include_type or error_type in error_str:
            return error_str
        return f"{error_type}: {error_str}"

    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return f"{error_type}: {friendly_msg}"

    return f"{error_type}: (no additional details)"


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    Reference text such as ``@proj/[draft]/notes.md`` would otherwise be read
    as a markup tag.
    """
    return _escape_markup(str(value))
