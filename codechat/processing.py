"""Translate source files to editable documents and back.

Forward: text -> lexer -> segments -> one Markdown pass -> flat buffer + spans.
Reverse: flat buffer + spans -> segments -> literal source text.
Both directions report failures as results instead of raising.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from codechat.doc_merge import Renderer, render_doc_blocks
from codechat.document import Document, assemble, disassemble
from codechat.errors import InvalidModeError, TranslationError, UnknownLexerError
from codechat.languages import MARKDOWN_MODE, supported_languages
from codechat.lexer.registry import CompiledLexer, LexerRegistry, compile_lexers, default_registry
from codechat.lexer.source_lexer import source_lexer
from codechat.markdown_render import markdown_to_html
from codechat.reconstruct import code_doc_blocks_to_source
from codechat.services.file_io import atomic_write_source_text, read_source_text
from codechat.settings_schema import CodeChatSettings, MarkdownSettings

log = logging.getLogger(__name__)

LEXER_DIRECTIVE = re.compile(r"CodeChat Editor lexer: (\w+)")


@dataclass(slots=True)
class TranslationResult:
    status: str  # ok | unknown | error
    document: Document | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def unknown(self) -> bool:
        return self.status == "unknown"


@dataclass(slots=True)
class SourceResult:
    status: str  # ok | error; round-trip checks add mismatch | unknown
    source_text: str = ""
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def registry_for_settings(settings: CodeChatSettings | None) -> LexerRegistry:
    overrides = ((settings or {}).get("languages") or {}).get("extension_overrides") or {}
    if not overrides:
        return default_registry()
    return compile_lexers(supported_languages(), extension_overrides=overrides)


def _markdown_settings(settings: CodeChatSettings | None) -> MarkdownSettings | None:
    if not settings:
        return None
    return settings.get("markdown")


def select_lexer(text: str, extension: str, registry: LexerRegistry) -> CompiledLexer | None:
    """Pick the lexer for a file, or ``None`` when the file is unsupported.

    An embedded directive wins over the extension. A directive naming an
    unregistered mode raises ``UnknownLexerError``; it never falls back to the
    extension.
    """
    match = LEXER_DIRECTIVE.search(text)
    if match is not None:
        mode = match.group(1)
        lexer = registry.lexer_for_mode(mode)
        if lexer is None:
            raise UnknownLexerError(mode)
        log.debug("Selected lexer %s from embedded directive.", mode)
        return lexer

    candidates = registry.lexers_for_extension(extension)
    if not candidates:
        log.debug("No lexer registered for extension %r.", extension)
        return None
    log.debug("Selected lexer %s for extension %r.", candidates[0].lexer_name, extension)
    return candidates[0]


def _translate(
    text: str,
    lexer: CompiledLexer,
    settings: CodeChatSettings | None,
    renderer: Renderer | None,
) -> Document:
    md_settings = _markdown_settings(settings)
    if lexer.lexer_name == MARKDOWN_MODE:
        html = renderer(text) if renderer is not None else markdown_to_html(text, md_settings)
        return Document(mode=MARKDOWN_MODE, doc=html)

    segments = source_lexer(text, lexer)
    rendered = render_doc_blocks(segments, settings=md_settings, renderer=renderer)
    doc, spans = assemble(rendered)
    log.debug("Assembled %s document with %d doc blocks.", lexer.lexer_name, len(spans))
    return Document(mode=lexer.lexer_name, doc=doc, doc_blocks=spans)


def source_to_document(
    text: str,
    extension: str,
    registry: LexerRegistry | None = None,
    *,
    settings: CodeChatSettings | None = None,
    renderer: Renderer | None = None,
) -> TranslationResult:
    """Convert source text into an editable document.

    ``extension`` is the file extension hint, with or without its dot.
    """
    active = registry if registry is not None else registry_for_settings(settings)
    try:
        lexer = select_lexer(text, extension, active)
        if lexer is None:
            return TranslationResult("unknown")
        return TranslationResult("ok", document=_translate(text, lexer, settings, renderer))
    except TranslationError as exc:
        return TranslationResult("error", message=str(exc))


def document_to_source(document: Document, registry: LexerRegistry | None = None) -> SourceResult:
    """Convert an (edited) document back to literal source text."""
    active = registry if registry is not None else default_registry()
    try:
        lexer = active.lexer_for_mode(document.mode)
        if lexer is None:
            raise InvalidModeError(document.mode)
        segments = disassemble(document.doc, document.doc_blocks)
        return SourceResult("ok", source_text=code_doc_blocks_to_source(segments, lexer))
    except TranslationError as exc:
        return SourceResult("error", message=str(exc))


def verify_round_trip(
    text: str,
    extension: str,
    registry: LexerRegistry | None = None,
) -> SourceResult:
    """Check that lexing then reconstructing ``text`` gives it back unchanged.

    Rendering is skipped: the document carries Markdown source instead of HTML,
    so the reverse direction must reproduce the file exactly.
    """
    active = registry if registry is not None else default_registry()
    try:
        lexer = select_lexer(text, extension, active)
        if lexer is None:
            return SourceResult("unknown")
        if lexer.lexer_name == MARKDOWN_MODE:
            return SourceResult("ok", source_text=text)
        doc, spans = assemble(source_lexer(text, lexer))
        rebuilt = code_doc_blocks_to_source(disassemble(doc, spans), lexer)
    except TranslationError as exc:
        return SourceResult("error", message=str(exc))
    if rebuilt != text:
        return SourceResult("mismatch", source_text=rebuilt, message="Reconstructed source differs.")
    return SourceResult("ok", source_text=rebuilt)


def source_file_to_document(
    path: str | Path,
    registry: LexerRegistry | None = None,
    *,
    settings: CodeChatSettings | None = None,
) -> TranslationResult:
    file_path = Path(path)
    try:
        text = read_source_text(file_path)
    except (OSError, UnicodeDecodeError) as exc:
        return TranslationResult("error", message=f"Could not read '{file_path}': {exc}")
    return source_to_document(text, file_path.suffix, registry, settings=settings)


def document_to_source_file(
    document: Document,
    path: str | Path,
    registry: LexerRegistry | None = None,
) -> SourceResult:
    result = document_to_source(document, registry)
    if not result.ok:
        return result
    try:
        atomic_write_source_text(path, result.source_text)
    except OSError as exc:
        return SourceResult("error", message=f"Could not write '{path}': {exc}")
    return result
