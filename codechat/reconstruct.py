"""Regenerate literal source text from code/doc segments."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable

from codechat.errors import UnknownDelimiterError
from codechat.segments import CodeBlock, DocBlock, Segment

if TYPE_CHECKING:
    from codechat.lexer.registry import CompiledLexer

_LINE_PATTERN = re.compile(r"[^\n]*\n|[^\n]+")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping terminators; empty text is one empty line."""
    return _LINE_PATTERN.findall(text) or [""]


def _comment_line(indent: str, delimiter: str, line: str) -> str:
    if line in ("", "\n"):
        return f"{indent}{delimiter}{line}"
    return f"{indent}{delimiter} {line}"


def _inline_doc_block(doc_block: DocBlock) -> str:
    return "".join(
        _comment_line(doc_block.indent, doc_block.delimiter, line)
        for line in split_lines(doc_block.contents)
    )


def _block_doc_block(doc_block: DocBlock, closing: str) -> str:
    lines = split_lines(doc_block.contents)
    last_index = len(lines) - 1
    padding = " " * len(doc_block.delimiter)
    out: list[str] = []
    for index, line in enumerate(lines):
        updated = line
        if index == last_index:
            if line.endswith("\n"):
                updated = f"{line[:-1]} {closing}\n"
            else:
                updated = f"{line} {closing}"

        if index == 0:
            out.append(_comment_line(doc_block.indent, doc_block.delimiter, updated))
        elif line == "\n" and index != last_index:
            # Blank lines inside a comment carry no padding.
            out.append("\n")
        else:
            out.append(_comment_line(doc_block.indent, padding, updated))
    return "".join(out)


def doc_block_to_source(doc_block: DocBlock, lexer: CompiledLexer) -> str:
    style = lexer.delimiter_style(doc_block.delimiter)
    if style is None:
        raise UnknownDelimiterError(doc_block.delimiter)
    if style.is_inline:
        return _inline_doc_block(doc_block)
    return _block_doc_block(doc_block, style.closing)


def code_doc_blocks_to_source(segments: Iterable[Segment], lexer: CompiledLexer) -> str:
    """Emit source text for ``segments``.

    Raises ``UnknownDelimiterError`` when a doc block uses a delimiter the
    lexer's language does not define.
    """
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, CodeBlock):
            parts.append(segment.contents)
        else:
            parts.append(doc_block_to_source(segment, lexer))
    return "".join(parts)
