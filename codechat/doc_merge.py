"""Render every doc block of a file in one Markdown pass.

Doc blocks are joined with a separator, rendered together so reference-style
links and footnotes defined in one comment resolve in another, then split
back into one HTML fragment per doc block.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Callable, Iterable

from codechat.errors import DocBlockSplitError
from codechat.markdown_render import markdown_to_html
from codechat.segments import DocBlock, Segment
from codechat.settings_schema import MarkdownSettings

log = logging.getLogger(__name__)

# An HTML comment on its own paragraph passes through the renderer untouched.
DOC_BLOCK_SEPARATOR = "<!-- CodeChatEditor-separator -->"
DOC_BLOCK_SEPARATOR_STRING = f"\n\n{DOC_BLOCK_SEPARATOR}\n\n"

# The renderer emits the separator as a raw block followed by a blank line.
# The newline before it stays with the preceding fragment; up to two after it
# are dropped.
_SEPARATOR_SPLIT_PATTERN = re.compile(rf"{re.escape(DOC_BLOCK_SEPARATOR)}\n{{0,2}}")

Renderer = Callable[[str], str]


def join_doc_contents(contents: Iterable[str]) -> str:
    return DOC_BLOCK_SEPARATOR_STRING.join(contents)


def split_rendered(html: str) -> list[str]:
    return _SEPARATOR_SPLIT_PATTERN.split(html)


def render_doc_blocks(
    segments: Iterable[Segment],
    *,
    settings: MarkdownSettings | None = None,
    renderer: Renderer | None = None,
) -> list[Segment]:
    """Return ``segments`` with each doc block's contents replaced by HTML.

    Raises ``DocBlockSplitError`` when the rendered text does not split into
    exactly one fragment per doc block.
    """
    items = list(segments)
    contents = [item.contents for item in items if isinstance(item, DocBlock)]
    if not contents:
        return items

    render = renderer if renderer is not None else (lambda text: markdown_to_html(text, settings))
    parts = split_rendered(render(join_doc_contents(contents)))
    if len(parts) != len(contents):
        log.error(
            "Doc block split mismatch: %d doc blocks rendered into %d parts.",
            len(contents),
            len(parts),
        )
        raise DocBlockSplitError(len(contents), len(parts))

    rendered = iter(parts)
    return [
        replace(item, contents=next(rendered)) if isinstance(item, DocBlock) else item
        for item in items
    ]
