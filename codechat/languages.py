"""Comment delimiter rules for every supported language.

The table is plain data; ``codechat.lexer.registry.compile_lexers`` turns it
into the lookup structures used at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

MARKDOWN_MODE = "markdown"


@dataclass(frozen=True, slots=True)
class BlockDelimiter:
    opening: str
    closing: str


@dataclass(frozen=True, slots=True)
class LanguageLexer:
    lexer_name: str
    extensions: tuple[str, ...] = ()
    inline_comment_delims: tuple[str, ...] = ()
    block_comment_delims: tuple[BlockDelimiter, ...] = ()


_C_BLOCK = BlockDelimiter("/*", "*/")
_DOC_BLOCK = BlockDelimiter("/**", "*/")

# Keep mode names stable; documents store them and send them back.
_LANGUAGE_LEXERS: tuple[LanguageLexer, ...] = (
    LanguageLexer(
        "c_cpp",
        extensions=("c", "cc", "cpp", "cxx", "h", "hh", "hpp", "hxx", "ino"),
        inline_comment_delims=("//",),
        block_comment_delims=(_C_BLOCK,),
    ),
    LanguageLexer(
        "csharp",
        extensions=("cs",),
        inline_comment_delims=("//", "///"),
        block_comment_delims=(_C_BLOCK, _DOC_BLOCK),
    ),
    LanguageLexer("css", extensions=("css",), block_comment_delims=(_C_BLOCK,)),
    LanguageLexer(
        "golang",
        extensions=("go",),
        inline_comment_delims=("//",),
        block_comment_delims=(_C_BLOCK,),
    ),
    LanguageLexer(
        "html",
        extensions=("html", "htm", "xhtml"),
        block_comment_delims=(BlockDelimiter("<!--", "-->"),),
    ),
    LanguageLexer(
        "java",
        extensions=("java",),
        inline_comment_delims=("//",),
        block_comment_delims=(_C_BLOCK, _DOC_BLOCK),
    ),
    LanguageLexer(
        "javascript",
        extensions=("js", "mjs", "cjs", "jsx", "json5"),
        inline_comment_delims=("//",),
        block_comment_delims=(_C_BLOCK,),
    ),
    LanguageLexer(
        "typescript",
        extensions=("ts", "mts", "cts", "tsx"),
        inline_comment_delims=("//",),
        block_comment_delims=(_C_BLOCK,),
    ),
    LanguageLexer(MARKDOWN_MODE, extensions=("md", "markdown")),
    LanguageLexer("matlab", extensions=("m",), inline_comment_delims=("%",)),
    LanguageLexer("python", extensions=("py", "pyw", "pyi"), inline_comment_delims=("#",)),
    LanguageLexer(
        "rust",
        extensions=("rs",),
        inline_comment_delims=("//", "///", "//!"),
        block_comment_delims=(_C_BLOCK,),
    ),
    LanguageLexer("shell", extensions=("sh", "bash", "zsh"), inline_comment_delims=("#",)),
    LanguageLexer(
        "sql",
        extensions=("sql",),
        inline_comment_delims=("--",),
        block_comment_delims=(_C_BLOCK,),
    ),
    LanguageLexer("toml", extensions=("toml",), inline_comment_delims=("#",)),
    LanguageLexer(
        "verilog",
        extensions=("v", "sv", "svh"),
        inline_comment_delims=("//",),
        block_comment_delims=(_C_BLOCK,),
    ),
    LanguageLexer("vhdl", extensions=("vhd", "vhdl"), inline_comment_delims=("--",)),
    LanguageLexer("yaml", extensions=("yaml", "yml"), inline_comment_delims=("#",)),
)


def supported_languages() -> tuple[LanguageLexer, ...]:
    return _LANGUAGE_LEXERS
