from __future__ import annotations

import logging
from typing import Any, TypedDict

DEFAULT_MARKDOWN_EXTENSIONS = (
    "tables",
    "toc",
    "footnotes",
    "def_list",
    "admonition",
    "fenced_code",
    "pymdownx.tilde",
    "pymdownx.tasklist",
)

# The HTML-to-Markdown converter on the editing side cannot undo these.
DISABLED_MARKDOWN_EXTENSIONS = frozenset(
    {
        "smarty",
        "markdown.extensions.smarty",
        "pymdownx.smartsymbols",
    }
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class MarkdownSettings(TypedDict, total=False):
    extensions: list[str]
    extension_configs: dict[str, dict[str, Any]]


class LanguageSettings(TypedDict, total=False):
    extension_overrides: dict[str, list[str]]


class LoggingSettings(TypedDict, total=False):
    level: str


class CodeChatSettings(TypedDict, total=False):
    markdown: MarkdownSettings
    languages: LanguageSettings
    logging: LoggingSettings


def default_markdown_settings() -> MarkdownSettings:
    return {
        "extensions": list(DEFAULT_MARKDOWN_EXTENSIONS),
        "extension_configs": {
            "toc": {"permalink": False},
        },
    }


def default_settings() -> CodeChatSettings:
    return {
        "markdown": default_markdown_settings(),
        "languages": {"extension_overrides": {}},
        "logging": {"level": "WARNING"},
    }


def normalize_markdown_settings(raw: Any) -> MarkdownSettings:
    defaults = default_markdown_settings()
    if not isinstance(raw, dict):
        return defaults

    extensions = raw.get("extensions", defaults["extensions"])
    if not isinstance(extensions, (list, tuple)):
        extensions = defaults["extensions"]
    cleaned: list[str] = []
    for item in extensions:
        name = str(item or "").strip()
        if not name or name in DISABLED_MARKDOWN_EXTENSIONS or name in cleaned:
            continue
        cleaned.append(name)

    configs = raw.get("extension_configs", defaults["extension_configs"])
    if not isinstance(configs, dict):
        configs = defaults["extension_configs"]
    extension_configs = {
        str(name): dict(value)
        for name, value in configs.items()
        if isinstance(value, dict) and str(name) in cleaned
    }
    return {"extensions": cleaned, "extension_configs": extension_configs}


def normalize_extension_overrides(raw: Any) -> dict[str, list[str]]:
    if not isinstance(raw, dict):
        return {}
    overrides: dict[str, list[str]] = {}
    for ext, modes in raw.items():
        key = str(ext or "").strip().lower()
        if not key:
            continue
        if isinstance(modes, str):
            modes = [modes]
        if not isinstance(modes, (list, tuple)):
            continue
        names = [str(mode).strip() for mode in modes if str(mode or "").strip()]
        if names:
            overrides[key] = names
    return overrides


def normalize_log_level(raw: Any, fallback: str = "WARNING") -> str:
    level = str(raw or "").strip().upper()
    return level if level in LOG_LEVELS else fallback


def normalize_settings(raw: Any) -> CodeChatSettings:
    data = raw if isinstance(raw, dict) else {}
    languages = data.get("languages")
    log_cfg = data.get("logging")
    return {
        "markdown": normalize_markdown_settings(data.get("markdown")),
        "languages": {
            "extension_overrides": normalize_extension_overrides(
                languages.get("extension_overrides") if isinstance(languages, dict) else None
            )
        },
        "logging": {
            "level": normalize_log_level(log_cfg.get("level") if isinstance(log_cfg, dict) else None)
        },
    }


def log_level_value(settings: CodeChatSettings) -> int:
    name = normalize_log_level(settings.get("logging", {}).get("level"))
    return int(getattr(logging, name, logging.WARNING))
