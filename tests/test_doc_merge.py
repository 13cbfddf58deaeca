import pytest

from codechat.doc_merge import (
    DOC_BLOCK_SEPARATOR,
    join_doc_contents,
    render_doc_blocks,
    split_rendered,
)
from codechat.errors import DocBlockSplitError, MarkdownConfigError
from codechat.segments import CodeBlock, DocBlock


def test_split_rendered_handles_empty_fragments():
    html = f"<p>a</p>\n{DOC_BLOCK_SEPARATOR}\n{DOC_BLOCK_SEPARATOR}\n<p>b</p>\n"
    assert split_rendered(html) == ["<p>a</p>\n", "", "<p>b</p>\n"]
    assert split_rendered(f"<p>a</p>\n{DOC_BLOCK_SEPARATOR}") == ["<p>a</p>\n", ""]


def test_split_rendered_drops_the_blank_line_after_the_separator():
    html = f"<p>a</p>\n{DOC_BLOCK_SEPARATOR}\n\n<h1 id=\"h\">H</h1>\n"
    assert split_rendered(html) == ["<p>a</p>\n", '<h1 id="h">H</h1>\n']


def test_code_only_segments_are_returned_unchanged():
    segments = [CodeBlock("x = 1\n")]
    assert render_doc_blocks(segments) == segments


def test_each_doc_block_gets_its_own_html():
    segments = [
        DocBlock("", "#", "First *para*\n", 1),
        CodeBlock("x = 1\n"),
        DocBlock("    ", "#", "# Heading\n", 1),
    ]
    rendered = render_doc_blocks(segments)

    assert rendered[0] == DocBlock("", "#", "<p>First <em>para</em></p>\n", 1)
    assert rendered[1] == CodeBlock("x = 1\n")
    assert rendered[2] == DocBlock("    ", "#", '<h1 id="heading">Heading</h1>\n', 1)


def test_reference_links_resolve_across_doc_blocks():
    segments = [
        DocBlock("", "//", "[Link][1]\n", 1),
        CodeBlock("let a = 1;\n"),
        DocBlock("", "/*", "[1]: http://b.org", 1),
    ]
    rendered = render_doc_blocks(segments)
    assert rendered[0].contents == '<p><a href="http://b.org">Link</a></p>\n'
    assert rendered[2].contents == ""


def test_smart_punctuation_is_not_applied():
    rendered = render_doc_blocks(
        [DocBlock("", "#", '"quoted" -- text...\n', 1)],
        settings={"extensions": ["smarty"]},
    )
    assert rendered[0].contents == '<p>"quoted" -- text...</p>\n'


def test_custom_renderer_receives_joined_contents():
    seen = []

    def renderer(text):
        seen.append(text)
        return text.upper().replace(DOC_BLOCK_SEPARATOR.upper(), DOC_BLOCK_SEPARATOR)

    rendered = render_doc_blocks([DocBlock("", "#", "a", 1), DocBlock("", "#", "b", 1)], renderer=renderer)
    assert seen == [join_doc_contents(["a", "b"])]
    assert [item.contents for item in rendered] == ["A\n\n", "B"]


def test_split_mismatch_is_an_error():
    segments = [DocBlock("", "#", "a", 1), DocBlock("", "#", "b", 1)]
    with pytest.raises(DocBlockSplitError) as excinfo:
        render_doc_blocks(segments, renderer=lambda text: text.replace(DOC_BLOCK_SEPARATOR, ""))
    assert excinfo.value.expected == 2
    assert excinfo.value.actual == 1


def test_unloadable_markdown_extension_is_an_error():
    with pytest.raises(MarkdownConfigError):
        render_doc_blocks([DocBlock("", "#", "a\n", 1)], settings={"extensions": ["no_such_extension_xyz"]})
