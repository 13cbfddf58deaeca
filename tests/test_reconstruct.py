import pytest

from codechat.errors import UnknownDelimiterError
from codechat.languages import supported_languages
from codechat.reconstruct import code_doc_blocks_to_source, split_lines
from codechat.segments import CodeBlock, DocBlock


def doc(indent: str, delimiter: str, contents: str) -> DocBlock:
    return DocBlock(indent=indent, delimiter=delimiter, contents=contents)


def test_split_lines_keeps_terminators():
    assert split_lines("a\nb") == ["a\n", "b"]
    assert split_lines("a\n\n") == ["a\n", "\n"]
    assert split_lines("a\r\nb") == ["a\r\n", "b"]
    assert split_lines("") == [""]


def test_python_inline_comments(lexer_for):
    py = lexer_for("python")

    assert code_doc_blocks_to_source([], py) == ""
    assert code_doc_blocks_to_source([doc("", "#", "Test")], py) == "# Test"
    assert code_doc_blocks_to_source([doc("", "#", "Test\n")], py) == "# Test\n"
    assert code_doc_blocks_to_source([doc("", "#", "Test 1\n\nTest 2")], py) == "# Test 1\n#\n# Test 2"

    assert code_doc_blocks_to_source([doc(" ", "#", "Test")], py) == " # Test"
    assert code_doc_blocks_to_source([doc("  ", "#", "Test\n")], py) == "  # Test\n"
    assert (
        code_doc_blocks_to_source([doc("   ", "#", "Test 1\n\nTest 2")], py)
        == "   # Test 1\n   #\n   # Test 2"
    )

    assert code_doc_blocks_to_source([CodeBlock("Test")], py) == "Test"


def test_empty_inline_doc_block_keeps_its_delimiter(lexer_for):
    assert code_doc_blocks_to_source([doc("", "#", "")], lexer_for("python")) == "#"


def test_css_block_comments(lexer_for):
    css = lexer_for("css")

    assert code_doc_blocks_to_source([], css) == ""
    assert code_doc_blocks_to_source([doc("", "/*", "Test\n")], css) == "/* Test */\n"
    assert code_doc_blocks_to_source([doc("", "/*", "Test")], css) == "/* Test */"
    assert (
        code_doc_blocks_to_source([CodeBlock("Test_0\n"), doc("", "/*", "Test 1\n\nTest 2\n")], css)
        == "Test_0\n/* Test 1\n\n   Test 2 */\n"
    )

    assert code_doc_blocks_to_source([doc("  ", "/*", "Test\n")], css) == "  /* Test */\n"
    assert (
        code_doc_blocks_to_source([CodeBlock("Test_0\n"), doc("   ", "/*", "Test 1\n\nTest 2\n")], css)
        == "Test_0\n   /* Test 1\n\n      Test 2 */\n"
    )

    assert code_doc_blocks_to_source([CodeBlock("Test")], css) == "Test"


def test_block_comment_blank_last_line_still_closes(lexer_for):
    css = lexer_for("css")
    assert code_doc_blocks_to_source([doc("", "/*", "Test\n\n")], css) == "/* Test\n    */\n"


def test_csharp_mixed_delimiters(lexer_for):
    cs = lexer_for("csharp")

    assert code_doc_blocks_to_source([], cs) == ""
    assert code_doc_blocks_to_source([doc("", "//", "Test\n")], cs) == "// Test\n"
    assert code_doc_blocks_to_source([doc("", "///", "Test\n")], cs) == "/// Test\n"
    assert code_doc_blocks_to_source([doc("", "/*", "Test\n")], cs) == "/* Test */\n"
    assert code_doc_blocks_to_source([doc("", "/**", "Test\n")], cs) == "/** Test */\n"


@pytest.mark.parametrize("mode", [language.lexer_name for language in supported_languages()])
def test_unknown_delimiter_is_rejected(lexer_for, mode):
    with pytest.raises(UnknownDelimiterError) as excinfo:
        code_doc_blocks_to_source([doc("", "?", "Test\n")], lexer_for(mode))
    assert excinfo.value.delimiter == "?"
    assert str(excinfo.value) == "Unknown comment opening delimiter '?'."
