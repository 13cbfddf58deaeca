from .registry import (
    CompiledLexer,
    DelimiterStyle,
    LexerRegistry,
    compile_lexer,
    compile_lexers,
    default_registry,
    normalize_extension,
)
from .source_lexer import source_lexer

__all__ = [
    "CompiledLexer",
    "DelimiterStyle",
    "LexerRegistry",
    "compile_lexer",
    "compile_lexers",
    "default_registry",
    "normalize_extension",
    "source_lexer",
]
