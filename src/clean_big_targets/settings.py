"""Validated, JSON-backed user settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

from clean_big_targets.utils import xdg_config_home

log = logging.getLogger(__name__)

SORT_ORDERS = ("size", "path")


def _check_workers(value: Any) -> str | None:
    # bool is an int subclass; "true" must not become one worker
    if value is None or (type(value) is int and value > 0):
        return None
    return "must be a positive integer or null"


def _check_sort(value: Any) -> str | None:
    if value in SORT_ORDERS:
        return None
    return f"must be one of: {', '.join(SORT_ORDERS)}"


# key -> (default, validator returning an error message or None)
KNOWN_KEYS: dict[str, tuple[Any, Callable[[Any], str | None]]] = {
    "scan.workers": (None, _check_workers),
    "display.sort": ("size", _check_sort),
}


class SettingsError(ValueError):
    """A value was rejected for a known settings key."""


class Settings:
    """User settings stored as nested JSON under $XDG_CONFIG_HOME.

    Keys use dot notation (``scan.workers`` lives at
    ``data["scan"]["workers"]``). Values read from disk are validated the
    same way as values written through :meth:`set`; an invalid stored
    value is logged and replaced by the key's default.
    """

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or xdg_config_home() / "clean-big-targets" / "settings.json"
        self._data = self._read()

    @classmethod
    def instance(cls) -> Settings:
        """Process-wide settings, loaded on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def workers(self) -> int | None:
        return self.get("scan.workers")

    @property
    def sort(self) -> str:
        return self.get("display.sort")

    def get(self, key: str, default: Any = None) -> Any:
        if key in KNOWN_KEYS:
            default, check = KNOWN_KEYS[key]
        else:
            check = None
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        if check and check(node) is not None:
            log.warning("Ignoring invalid %s = %r in %s", key, node, self.path)
            return default
        return node

    def set(self, key: str, value: Any) -> None:
        """Validate *value* for a known *key*, then persist it.

        Raises:
            SettingsError: if the key is unknown or the value is rejected.
        """
        if key not in KNOWN_KEYS:
            raise SettingsError(f"unknown setting: {key}")
        problem = KNOWN_KEYS[key][1](value)
        if problem:
            raise SettingsError(problem)

        *parents, leaf = key.split(".")
        node = self._data
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[leaf] = value
        self._write()

    def as_dict(self) -> dict[str, Any]:
        """Effective value of every known key."""
        return {key: self.get(key) for key in KNOWN_KEYS}

    def _read(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring malformed settings file %s", self.path)
            return {}
        return data

    def _write(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._data, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self.path, e)
