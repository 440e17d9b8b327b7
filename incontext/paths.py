"""CLI-specific path policy and dependency injection helpers.

The engine only ever receives an ordered root list; this module decides where
that list comes from for the command line and the tool server.
"""

from collections.abc import Sequence
from pathlib import Path

from .lib.references import NamedRoot
from .lib.references import ReferenceEngine
from .settings import SettingsManager
from .settings import parse_root_option


def get_incontext_dir() -> Path:
    """Project settings directory (.incontext in the current directory)."""
    return Path.cwd() / ".incontext"


def create_settings_manager() -> SettingsManager:
    """Create settings manager with CLI path policy."""
    return SettingsManager(incontext_dir=get_incontext_dir())


def resolve_roots(root_options: Sequence[str] = ()) -> list[NamedRoot]:
    """Roots for this invocation.

    Explicit NAME=PATH options replace settings entirely; otherwise the roots
    come from the settings scopes (or the current directory).

    Raises:
        SettingsError: Malformed option or settings entry
    """
    if root_options:
        return [parse_root_option(value) for value in root_options]
    return create_settings_manager().get_roots()


def create_engine(root_options: Sequence[str] = ()) -> ReferenceEngine:
    """Create a ReferenceEngine with CLI root policy."""
    return ReferenceEngine(resolve_roots(root_options))
