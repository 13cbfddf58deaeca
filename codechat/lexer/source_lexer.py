"""Line-oriented source lexer splitting a file into code and doc blocks.

Only comments that start a line (after optional indentation) become doc
blocks. A candidate is kept only when reconstructing it reproduces its raw
text exactly, so concatenating the source of every segment always gives back
the input.
"""

from __future__ import annotations

import logging

from codechat.lexer.registry import CompiledLexer
from codechat.reconstruct import doc_block_to_source, split_lines
from codechat.segments import CodeBlock, DocBlock, Segment, count_lines

log = logging.getLogger(__name__)

_NO_BLOCK = -1


def _line_end(text: str, pos: int) -> int:
    newline = text.find("\n", pos)
    return len(text) if newline < 0 else newline + 1


class _SegmentBuilder:
    def __init__(self) -> None:
        self.segments: list[Segment] = []
        self._code: list[str] = []
        # indent, delimiter, content lines
        self._inline: tuple[str, str, list[str]] | None = None

    def add_code(self, text: str) -> None:
        self._flush_inline()
        self._code.append(text)

    def add_doc(self, doc_block: DocBlock) -> None:
        self._flush_code()
        self._flush_inline()
        self.segments.append(doc_block)

    def add_inline_line(self, indent: str, delimiter: str, content: str) -> None:
        self._flush_code()
        pending = self._inline
        # A bare delimiter ending the text has no newline and cannot follow
        # other lines of the same block.
        if content and pending is not None and pending[0] == indent and pending[1] == delimiter:
            pending[2].append(content)
            return
        self._flush_inline()
        self._inline = (indent, delimiter, [content])

    def finish(self) -> list[Segment]:
        self._flush_code()
        self._flush_inline()
        return self.segments

    def _flush_code(self) -> None:
        if self._code:
            self.segments.append(CodeBlock("".join(self._code)))
            self._code = []

    def _flush_inline(self) -> None:
        if self._inline is None:
            return
        indent, delimiter, lines = self._inline
        self.segments.append(DocBlock(indent, delimiter, "".join(lines), len(lines)))
        self._inline = None


def _match_inline(line: str, indent: str, lexer: CompiledLexer) -> tuple[str, str] | None:
    rest = line[len(indent):]
    for delimiter in lexer.inline_delims:
        if not rest.startswith(delimiter):
            continue
        after = rest[len(delimiter):]
        if after.startswith(" "):
            content = after[1:]
        elif after in ("", "\n"):
            content = after
        else:
            continue
        candidate = DocBlock(indent, delimiter, content, 1)
        if doc_block_to_source(candidate, lexer) == line:
            return delimiter, content
    return None


def _parse_block(raw: str, indent: str, opening: str, inner: str) -> DocBlock:
    body = inner[1:] if inner.startswith(" ") else inner
    if body.endswith(" "):
        body = body[:-1]
    prefix = indent + " " * len(opening) + " "
    lines = split_lines(body)
    kept = [lines[0]]
    for line in lines[1:]:
        if line != "\n" and line.startswith(prefix):
            line = line[len(prefix):]
        kept.append(line)
    if raw.endswith("\n"):
        kept.append("\n")
    return DocBlock(indent, opening, "".join(kept), count_lines(raw))


def _match_block(
    text: str,
    pos: int,
    indent: str,
    lexer: CompiledLexer,
) -> tuple[DocBlock | None, int]:
    """Return ``(doc_block, end)`` for a block comment starting at ``pos``.

    ``doc_block`` is ``None`` when the comment exists but must stay code;
    ``end`` is ``_NO_BLOCK`` when no block comment opens here.
    """
    start = pos + len(indent)
    for opening, closing in lexer.block_delims:
        if not text.startswith(opening, start):
            continue
        open_end = start + len(opening)
        close_at = text.find(closing, open_end)
        if close_at < 0:
            return None, len(text)
        close_end = close_at + len(closing)
        end = _line_end(text, close_end)
        if text[close_end:end] not in ("", "\n"):
            return None, end
        if not text.startswith((" ", "\n"), open_end):
            return None, end
        raw = text[pos:end]
        candidate = _parse_block(raw, indent, opening, text[open_end:close_at])
        if doc_block_to_source(candidate, lexer) != raw:
            return None, end
        return candidate, end
    return None, _NO_BLOCK


def source_lexer(text: str, lexer: CompiledLexer) -> list[Segment]:
    """Decompose ``text`` into an ordered, gapless list of code and doc blocks."""
    builder = _SegmentBuilder()
    pattern = lexer.line_start_pattern
    pos = 0
    length = len(text)
    while pos < length:
        line_end = _line_end(text, pos)
        line = text[pos:line_end]
        match = pattern.match(line) if pattern is not None else None
        if match is None:
            builder.add_code(line)
            pos = line_end
            continue

        indent = match.group("indent")
        inline = _match_inline(line, indent, lexer)
        if inline is not None:
            builder.add_inline_line(indent, *inline)
            pos = line_end
            continue

        doc_block, end = _match_block(text, pos, indent, lexer)
        if end == _NO_BLOCK:
            builder.add_code(line)
            pos = line_end
        elif doc_block is None:
            builder.add_code(text[pos:end])
            pos = end
        else:
            builder.add_doc(doc_block)
            pos = end

    segments = builder.finish()
    log.debug(
        "Lexed %d characters as %s into %d segments.",
        length,
        lexer.lexer_name,
        len(segments),
    )
    return segments
