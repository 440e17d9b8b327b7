"""Settings manager for the named roots used to resolve references.

Manages three-scope settings files:
- User global (~/.incontext/settings.yaml)
- Project (.incontext/settings.yaml)
- Local (.incontext/settings.local.yaml)

Only one key matters to the engine:

    roots:
      - name: web
        path: ~/code/web
      - name: api
        path: /srv/api

Order is significant: the first root is the default root.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from .lib.references import NamedRoot

logger = logging.getLogger(__name__)

SCOPES = ("user", "project", "local")


class SettingsError(Exception):
    """Settings content is invalid."""


def make_root(name: str, path: str | Path, base: Path | None = None) -> NamedRoot:
    """Build a NamedRoot, expanding ~ and anchoring relative paths at base (default CWD)."""
    base_path = Path(path).expanduser()
    if not base_path.is_absolute():
        base_path = (base or Path.cwd()) / base_path
    return NamedRoot(name=name, base_path=base_path.resolve())


def default_roots() -> list[NamedRoot]:
    """Single root named after the current directory."""
    cwd = Path.cwd().resolve()
    return [NamedRoot(name=cwd.name or "root", base_path=cwd)]


def parse_root_option(value: str) -> NamedRoot:
    """Parse a NAME=PATH command line value."""
    name, sep, path = value.partition("=")
    if not sep or not name or not path:
        raise SettingsError(f"Expected NAME=PATH, got: {value}")
    return make_root(name.strip(), path.strip())


class SettingsManager:
    """Manages settings across user/project/local scopes."""

    def __init__(self, incontext_dir: Path | None = None, user_dir: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            incontext_dir: Base directory for project/local settings (for testing).
                If None, uses .incontext in the current directory.
            user_dir: Base directory for user settings (for testing).
                If None, uses ~/.incontext.
        """
        if incontext_dir is None:
            incontext_dir = Path(".incontext")
        if user_dir is None:
            user_dir = Path.home() / ".incontext"

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = incontext_dir / "settings.yaml"
        self.local_settings_file = incontext_dir / "settings.local.yaml"

    def _scope_file(self, scope: str) -> Path:
        file_map = {
            "user": self.user_settings_file,
            "project": self.project_settings_file,
            "local": self.local_settings_file,
        }
        if scope not in file_map:
            raise SettingsError(f"Unknown scope '{scope}' (expected one of: {', '.join(SCOPES)})")
        return file_map[scope]

    def get_roots(self) -> list[NamedRoot]:
        """Get the ordered root list.

        The highest-priority scope that defines ``roots`` wins (local, then
        project, then user); lists are never merged across scopes. Falls back to
        default_roots() when no scope defines any.

        Raises:
            SettingsError: An entry is malformed or names repeat
        """
        entries = self.get_merged_settings().get("roots")
        if not entries:
            return default_roots()
        return self._parse_roots(entries)

    def get_scope_roots(self, scope: str) -> list[dict[str, str]]:
        """Raw root entries defined in one scope."""
        settings = self._read_settings(self._scope_file(scope)) or {}
        return list(settings.get("roots") or [])

    def add_root(self, name: str, path: str, scope: str = "project") -> None:
        """Append a root to a scope, replacing an existing entry with the same name.

        Args:
            name: Root name used as the first reference segment
            path: Base directory
            scope: "user", "project", or "local"
        """
        target_file = self._scope_file(scope)
        root = make_root(name, path)
        settings = self._read_settings(target_file) or {}
        roots = [r for r in settings.get("roots") or [] if r.get("name") != name]
        roots.append({"name": root.name, "path": str(root.base_path)})
        settings["roots"] = roots
        self._write_settings(target_file, settings)
        logger.info(f"Added {scope} root {name}: {root.base_path}")

    def remove_root(self, name: str, scope: str = "project") -> bool:
        """Remove a root from a scope.

        Returns:
            True if removed, False if not found
        """
        target_file = self._scope_file(scope)
        settings = self._read_settings(target_file)

        if not settings or not settings.get("roots"):
            return False

        remaining = [r for r in settings["roots"] if r.get("name") != name]
        if len(remaining) == len(settings["roots"]):
            return False

        if remaining:
            settings["roots"] = remaining
        else:
            del settings["roots"]

        self._write_settings(target_file, settings)
        logger.info(f"Removed {scope} root {name}")
        return True

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings from all scopes.

        Merge order (later overrides earlier):
        1. User settings
        2. Project settings
        3. Local settings
        """
        merged: dict[str, Any] = {}
        for path in (self.user_settings_file, self.project_settings_file, self.local_settings_file):
            settings = self._read_settings(path)
            if settings:
                merged = self._deep_merge(merged, settings)
        return merged

    def _parse_roots(self, entries: Any) -> list[NamedRoot]:
        if not isinstance(entries, list):
            raise SettingsError("'roots' must be a list of {name, path} entries")

        roots: list[NamedRoot] = []
        seen: set[str] = set()
        for entry in entries:
            if not isinstance(entry, dict) or "name" not in entry or "path" not in entry:
                raise SettingsError(f"Invalid root entry (expected name and path): {entry}")
            name = str(entry["name"])
            if name in seen:
                raise SettingsError(f"Duplicate root name: {name}")
            seen.add(name)
            try:
                roots.append(make_root(name, str(entry["path"])))
            except ValueError as e:
                raise SettingsError(f"Invalid root '{name}': {e}") from e
        return roots

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Returns:
            Settings dict or None if file doesn't exist or is unreadable
        """
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if not data:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings in {path}: expected a mapping, got {type(data).__name__}")
            return None
        return data

    def _write_settings(self, path: Path, settings: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, "w", encoding="utf-8") as f:
                yaml.dump(settings, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.error(f"Failed to write settings to {path}: {e}")
            raise

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries; lists in overlay replace lists in base."""
        result = base.copy()

        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
