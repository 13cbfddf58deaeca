"""Editable document form: a flat code buffer plus doc block spans.

Each doc block is replaced in the buffer by ``lines`` newline placeholders;
its rendered contents live in a ``DocSpan`` addressed by buffer offsets.
A span's ``end`` is ``start + lines - 1``, one short of the placeholder run,
so an edit at the first character after the run falls outside the span.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, NamedTuple

from codechat.segments import CodeBlock, DocBlock, Segment


class DocSpan(NamedTuple):
    start: int
    end: int
    indent: str
    delimiter: str
    contents: str


@dataclass(slots=True)
class Document:
    mode: str
    doc: str = ""
    doc_blocks: list[DocSpan] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": {"mode": self.mode},
            "source": {
                "doc": self.doc,
                "doc_blocks": [list(span) for span in self.doc_blocks],
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        metadata = data.get("metadata") or {}
        source = data.get("source") or {}
        spans = [
            DocSpan(int(start), int(end), str(indent), str(delimiter), str(contents))
            for start, end, indent, delimiter, contents in source.get("doc_blocks") or []
        ]
        return cls(
            mode=str(metadata.get("mode") or ""),
            doc=str(source.get("doc") or ""),
            doc_blocks=spans,
        )


def assemble(segments: Iterable[Segment]) -> tuple[str, list[DocSpan]]:
    """Build the flat buffer and span list from (rendered) segments."""
    buffer: list[str] = []
    spans: list[DocSpan] = []
    offset = 0
    for segment in segments:
        if isinstance(segment, CodeBlock):
            buffer.append(segment.contents)
            offset += len(segment.contents)
            continue
        spans.append(
            DocSpan(
                start=offset,
                end=offset + segment.lines - 1,
                indent=segment.indent,
                delimiter=segment.delimiter,
                contents=segment.contents,
            )
        )
        buffer.append("\n" * segment.lines)
        offset += segment.lines
    return "".join(buffer), spans


def disassemble(doc: str, doc_blocks: Iterable[DocSpan]) -> list[Segment]:
    """Rebuild the code/doc segment sequence from an (edited) document.

    Spans must be sorted, non-overlapping and inside ``doc``; that is the
    caller's contract and is not checked here.
    """
    segments: list[Segment] = []
    cursor = 0
    for span in doc_blocks:
        code = doc[cursor:span.start]
        if code:
            segments.append(CodeBlock(code))
        segments.append(
            DocBlock(
                indent=span.indent,
                delimiter=span.delimiter,
                contents=span.contents,
                lines=span.end - span.start + 1,
            )
        )
        cursor = span.end + 1
    code = doc[cursor:]
    if code:
        segments.append(CodeBlock(code))
    return segments
