from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

from codechat.settings_schema import CodeChatSettings, default_settings, normalize_settings

SETTINGS_FILENAME = "codechat.json"

log = logging.getLogger(__name__)


class SettingsStoreError(RuntimeError):
    """Raised when a settings file cannot be saved."""


def deep_merge_defaults(data: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Merge defaults into data without overwriting explicitly provided values."""
    merged = deepcopy(dict(data))
    for key, default_value in defaults.items():
        if key not in merged:
            merged[key] = deepcopy(default_value)
            continue
        current = merged[key]
        if isinstance(current, dict) and isinstance(default_value, dict):
            merged[key] = deep_merge_defaults(current, default_value)
    return merged


def dot_get(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    if not key:
        return data
    current: Any = data
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current


def dot_set(data: dict[str, Any], key: str, value: Any) -> None:
    if not key:
        raise ValueError("Key cannot be empty.")
    current: dict[str, Any] = data
    parts = key.split(".")
    for part in parts[:-1]:
        next_value = current.get(part)
        if not isinstance(next_value, dict):
            next_value = {}
            current[part] = next_value
        current = next_value
    current[parts[-1]] = value


class JsonSettingsStore:
    """JSON-backed settings with defaults and dot-key helpers.

    A missing file yields the defaults. An unreadable or malformed file also
    yields the defaults and records the problem in ``last_error``.
    """

    def __init__(self, path: Path | str | None, defaults: Mapping[str, Any] | None = None) -> None:
        self.path = Path(path) if path else None
        self.defaults: dict[str, Any] = deepcopy(dict(defaults if defaults is not None else default_settings()))
        self.data: dict[str, Any] = {}
        self.dirty: bool = False
        self.last_error: str | None = None

    def load(self) -> dict[str, Any]:
        self.last_error = None
        loaded: dict[str, Any] = {}
        missing = self.path is None or not self.path.exists()

        if not missing:
            try:
                raw = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                self.last_error = f"Could not read settings file '{self.path}': {exc}"
            else:
                if isinstance(raw, dict):
                    loaded = raw
                else:
                    self.last_error = (
                        f"Settings root in '{self.path}' must be a JSON object, "
                        f"found {type(raw).__name__}."
                    )

        self.data = deep_merge_defaults(loaded, self.defaults)
        self.dirty = False
        return self.data

    def save(self) -> None:
        if self.path is None:
            self.dirty = False
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            raise SettingsStoreError(f"Could not write settings file '{self.path}': {exc}") from exc
        self.dirty = False
        self.last_error = None

    def get(self, key: str, default: Any = None) -> Any:
        return dot_get(self.data, key, default)

    def set(self, key: str, value: Any) -> bool:
        if self.get(key) == value:
            return False
        dot_set(self.data, key, value)
        self.dirty = True
        return True

    def settings(self) -> CodeChatSettings:
        return normalize_settings(self.data)


def load_settings(path: Path | str | None = None) -> CodeChatSettings:
    """Load and normalize settings; ``None`` means built-in defaults."""
    store = JsonSettingsStore(path)
    store.load()
    if store.last_error:
        log.warning("%s Using default settings.", store.last_error)
    return store.settings()
