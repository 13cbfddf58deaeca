"""Markdown to HTML rendering for documentation blocks."""

from __future__ import annotations

import logging

import markdown

from codechat.errors import MarkdownConfigError
from codechat.settings_schema import MarkdownSettings, normalize_markdown_settings

log = logging.getLogger(__name__)


def build_markdown(settings: MarkdownSettings | None = None) -> markdown.Markdown:
    """Build a converter; unloadable extensions raise ``MarkdownConfigError``."""
    cfg = normalize_markdown_settings(settings if settings is not None else {})
    try:
        return markdown.Markdown(
            extensions=list(cfg["extensions"]),
            extension_configs=dict(cfg["extension_configs"]),
            output_format="html",
        )
    except (ImportError, AttributeError, TypeError, ValueError, KeyError) as exc:
        log.error("Could not load Markdown extensions %s: %s", cfg["extensions"], exc)
        raise MarkdownConfigError(f"Could not load Markdown extensions: {exc}") from exc


def markdown_to_html(text: str, settings: MarkdownSettings | None = None) -> str:
    """Render ``text`` to HTML ending in a newline (empty input gives "").

    A fresh converter is built per call, so calls never share state.
    """
    html = build_markdown(settings).convert(text or "")
    return f"{html}\n" if html else html
