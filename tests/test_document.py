from codechat.document import DocSpan, Document, assemble, disassemble
from codechat.lexer.source_lexer import source_lexer
from codechat.segments import CodeBlock, DocBlock


def span(start, end, indent, delimiter, contents) -> DocSpan:
    return DocSpan(start, end, indent, delimiter, contents)


def test_assemble_replaces_doc_blocks_with_placeholders():
    doc, spans = assemble([CodeBlock("a\n"), DocBlock("", "#", "x", 2), CodeBlock("b")])
    assert doc == "a\n\n\nb"
    assert spans == [span(2, 3, "", "#", "x")]


def test_assemble_trailing_doc_block():
    doc, spans = assemble([CodeBlock("let a = 1;\n"), DocBlock("", "//", "<p>Test</p>\n", 1)])
    assert doc == "let a = 1;\n\n"
    assert spans == [span(11, 11, "", "//", "<p>Test</p>\n")]


def test_assemble_empty():
    assert assemble([]) == ("", [])


def test_span_bookkeeping(lexer_for):
    text = "# one\n# two\nx = 1\n\n    # three\ny = 2\n# four"
    segments = source_lexer(text, lexer_for("python"))
    doc, spans = assemble(segments)
    docs = [segment for segment in segments if isinstance(segment, DocBlock)]

    assert len(spans) == len(docs) == 3
    for current, following in zip(spans, spans[1:]):
        assert current.end < following.start
    for item, block in zip(spans, docs):
        assert item.end - item.start + 1 == block.lines
        assert doc[item.start:item.end + 1] == "\n" * block.lines
    assert len(doc) == sum(len(s.contents) for s in segments if isinstance(s, CodeBlock)) + sum(
        block.lines for block in docs
    )


def test_disassemble_python():
    assert disassemble("", []) == []
    assert disassemble("Test", []) == [CodeBlock("Test")]
    assert disassemble("\n", [span(0, 0, "", "#", "Test")]) == [DocBlock("", "#", "Test", 1)]
    assert disassemble("code\n\n", [span(5, 5, "", "#", "doc")]) == [
        CodeBlock("code\n"),
        DocBlock("", "#", "doc", 1),
    ]
    assert disassemble("\ncode\n", [span(0, 0, "", "#", "doc")]) == [
        DocBlock("", "#", "doc", 1),
        CodeBlock("code\n"),
    ]
    assert disassemble("\ncode\n\n", [span(0, 0, "", "#", "doc 1"), span(6, 6, "", "#", "doc 2")]) == [
        DocBlock("", "#", "doc 1", 1),
        CodeBlock("code\n"),
        DocBlock("", "#", "doc 2", 1),
    ]


def test_disassemble_c_cpp():
    assert disassemble("\n", [span(0, 0, "", "//", "Test")]) == [DocBlock("", "//", "Test", 1)]
    assert disassemble("\n", [span(0, 0, "", "/*", "Test")]) == [DocBlock("", "/*", "Test", 1)]
    assert disassemble("\n\n", [span(0, 0, "", "//", "Test 1"), span(1, 1, "", "/*", "Test 2")]) == [
        DocBlock("", "//", "Test 1", 1),
        DocBlock("", "/*", "Test 2", 1),
    ]


def test_disassemble_inverts_assemble():
    segments = [
        CodeBlock("int a;\n"),
        DocBlock("  ", "/*", "One\nTwo\n", 2),
        CodeBlock("int b;\n"),
        DocBlock("", "//", "end", 1),
    ]
    assert disassemble(*assemble(segments)) == segments


def test_disassemble_uses_edited_buffer():
    doc, spans = assemble([CodeBlock("a\n"), DocBlock("", "#", "x\n", 1), CodeBlock("b\n")])
    edited_doc = "a = 10\n" + doc[2:]
    edited_spans = [span(s.start + 5, s.end + 5, s.indent, s.delimiter, "<p>y</p>\n") for s in spans]
    assert disassemble(edited_doc, edited_spans) == [
        CodeBlock("a = 10\n"),
        DocBlock("", "#", "<p>y</p>\n", 1),
        CodeBlock("b\n"),
    ]


def test_document_dict_round_trip():
    document = Document(mode="python", doc="\nx\n", doc_blocks=[span(0, 0, "", "#", "<p>a</p>\n")])
    data = document.to_dict()
    assert data == {
        "metadata": {"mode": "python"},
        "source": {"doc": "\nx\n", "doc_blocks": [[0, 0, "", "#", "<p>a</p>\n"]]},
    }
    assert Document.from_dict(data) == document
