"""JSON backed user settings."""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

from .core.catalog import FilterVariant, parse_variant
from .core.engine import DEFAULT_INTENSITY, DEFAULT_VARIANT
from .core.parameter_mapper import clamp_intensity
from .errors import UnknownFilterError
from .utils.jsonio import read_json, write_json

_LOGGER = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "INSTAFILTER_SETTINGS"

DEFAULT_SETTINGS: dict[str, Any] = {
    "filter": {
        "default": DEFAULT_VARIANT.identifier,
        "intensity": DEFAULT_INTENSITY,
    },
    "export": {
        "directory": "~/Pictures/Instafilter",
        "format": "PNG",
    },
}


def default_settings_path() -> Path:
    """Return the settings file location, honouring ``INSTAFILTER_SETTINGS``."""

    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".instafilter" / "settings.json"


def _lookup(data: dict[str, Any], key: str) -> tuple[bool, Any]:
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return False, None
        node = node[part]
    return True, node


class Settings:
    """Dotted-key access to persisted preferences with built-in defaults."""

    def __init__(self, path: Path | None = None, data: dict[str, Any] | None = None) -> None:
        self._path = path
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Read settings from *path*; a missing file yields the defaults."""

        target = path if path is not None else default_settings_path()
        if not target.exists():
            _LOGGER.debug("No settings file at %s; using defaults", target)
            return cls(target)
        return cls(target, read_json(target))

    @property
    def path(self) -> Path | None:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        found, value = _lookup(self._data, key)
        if found:
            return value
        found, value = _lookup(DEFAULT_SETTINGS, key)
        if found:
            return copy.deepcopy(value)
        return default

    def set(self, key: str, value: Any) -> None:
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def save(self) -> None:
        if self._path is None:
            raise ValueError("Settings were created without a backing file")
        write_json(self._path, self._data)

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------
    def default_variant(self) -> FilterVariant:
        stored = self.get("filter.default", DEFAULT_VARIANT.identifier)
        try:
            return parse_variant(stored)
        except UnknownFilterError:
            _LOGGER.warning("Ignoring unknown default filter %r", stored)
            return DEFAULT_VARIANT

    def default_intensity(self) -> float:
        stored = self.get("filter.intensity", DEFAULT_INTENSITY)
        try:
            return clamp_intensity(float(stored))
        except (TypeError, ValueError):
            _LOGGER.warning("Ignoring non-numeric default intensity %r", stored)
            return DEFAULT_INTENSITY

    def export_directory(self) -> Path:
        return Path(str(self.get("export.directory"))).expanduser()

    def export_format(self) -> str:
        return str(self.get("export.format", "PNG")).strip().upper() or "PNG"


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_ENV_VAR", "Settings", "default_settings_path"]
