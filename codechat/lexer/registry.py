"""Compiled lexer registry: mode and file-extension lookups."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Literal, Mapping

from codechat.languages import LanguageLexer, supported_languages

log = logging.getLogger(__name__)

DelimiterKind = Literal["inline", "block"]


@dataclass(frozen=True, slots=True)
class DelimiterStyle:
    kind: DelimiterKind
    closing: str = ""

    @property
    def is_inline(self) -> bool:
        return self.kind == "inline"


@dataclass(frozen=True, eq=False)
class CompiledLexer:
    language_lexer: LanguageLexer
    # Delimiters sorted longest first so "///" wins over "//".
    inline_delims: tuple[str, ...] = ()
    block_delims: tuple[tuple[str, str], ...] = ()
    line_start_pattern: re.Pattern[str] | None = None
    _styles: dict[str, DelimiterStyle] = field(default_factory=dict, repr=False)

    @property
    def lexer_name(self) -> str:
        return self.language_lexer.lexer_name

    def delimiter_style(self, delimiter: str) -> DelimiterStyle | None:
        return self._styles.get(delimiter)


def normalize_extension(raw: str | None) -> str:
    ext = str(raw or "").strip().lower()
    if not ext:
        return ""
    if not ext.startswith("."):
        ext = f".{ext}"
    return ext


def compile_lexer(language: LanguageLexer) -> CompiledLexer:
    styles: dict[str, DelimiterStyle] = {}
    # Inline delimiters are consulted first when a marker appears in both lists.
    for block in language.block_comment_delims:
        styles.setdefault(block.opening, DelimiterStyle("block", block.closing))
    for delim in language.inline_comment_delims:
        styles[delim] = DelimiterStyle("inline")

    inline = tuple(sorted(language.inline_comment_delims, key=len, reverse=True))
    block = tuple(
        (item.opening, item.closing)
        for item in sorted(language.block_comment_delims, key=lambda b: len(b.opening), reverse=True)
    )
    markers = [*inline, *(opening for opening, _closing in block)]
    pattern = None
    if markers:
        alternatives = "|".join(re.escape(m) for m in sorted(set(markers), key=len, reverse=True))
        pattern = re.compile(rf"(?P<indent>[ \t]*)(?P<delim>{alternatives})")
    return CompiledLexer(
        language_lexer=language,
        inline_delims=inline,
        block_delims=block,
        line_start_pattern=pattern,
        _styles=styles,
    )


class LexerRegistry:
    """Maps mode names and file extensions to compiled lexers.

    Built once, then only read. Extension candidates keep table order; the
    first candidate wins when several languages claim one extension.
    """

    def __init__(
        self,
        lexers: Iterable[CompiledLexer],
        *,
        extension_overrides: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self.map_mode_to_lexer: dict[str, CompiledLexer] = {}
        self.map_ext_to_lexer_vec: dict[str, list[CompiledLexer]] = {}

        for lexer in lexers:
            self.map_mode_to_lexer[lexer.lexer_name] = lexer
            for raw in lexer.language_lexer.extensions:
                ext = normalize_extension(raw)
                if ext:
                    self.map_ext_to_lexer_vec.setdefault(ext, []).append(lexer)

        for raw_ext, modes in dict(extension_overrides or {}).items():
            ext = normalize_extension(raw_ext)
            if not ext:
                continue
            preferred: list[CompiledLexer] = []
            for mode in list(modes or []):
                lexer = self.map_mode_to_lexer.get(str(mode or "").strip())
                if lexer is None:
                    log.warning("Skipping extension override %s -> %r: unknown mode.", ext, mode)
                    continue
                if lexer not in preferred:
                    preferred.append(lexer)
            if not preferred:
                continue
            existing = [lexer for lexer in self.map_ext_to_lexer_vec.get(ext, []) if lexer not in preferred]
            self.map_ext_to_lexer_vec[ext] = preferred + existing

    def lexer_for_mode(self, mode: str) -> CompiledLexer | None:
        return self.map_mode_to_lexer.get(str(mode or ""))

    def lexers_for_extension(self, extension: str) -> list[CompiledLexer]:
        return list(self.map_ext_to_lexer_vec.get(normalize_extension(extension), []))

    def modes(self) -> list[str]:
        return sorted(self.map_mode_to_lexer)


def compile_lexers(
    languages: Iterable[LanguageLexer],
    *,
    extension_overrides: Mapping[str, Iterable[str]] | None = None,
) -> LexerRegistry:
    registry = LexerRegistry(
        (compile_lexer(language) for language in languages),
        extension_overrides=extension_overrides,
    )
    log.debug(
        "Compiled %d lexers covering %d extensions.",
        len(registry.map_mode_to_lexer),
        len(registry.map_ext_to_lexer_vec),
    )
    return registry


@lru_cache(maxsize=1)
def default_registry() -> LexerRegistry:
    """Registry for the built-in language table, compiled once per process."""
    return compile_lexers(supported_languages())
