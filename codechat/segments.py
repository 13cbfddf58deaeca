"""Code/doc segment model shared by the lexer, renderer and reconstructor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class CodeBlock:
    contents: str


@dataclass(frozen=True, slots=True)
class DocBlock:
    """One documentation unit extracted from a single comment.

    ``indent`` is the whitespace before the delimiter, ``delimiter`` the exact
    opening comment marker and ``lines`` the number of buffer lines the block
    occupies once placed in an editable document.
    """

    indent: str
    delimiter: str
    contents: str
    lines: int = 1


Segment = Union[CodeBlock, DocBlock]


def count_lines(text: str) -> int:
    """Return how many display lines ``text`` spans."""
    if not text:
        return 1
    newlines = text.count("\n")
    return newlines if text.endswith("\n") else newlines + 1
