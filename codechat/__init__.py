"""Translate source files to web-editable literate documents and back."""

from .document import DocSpan, Document
from .errors import (
    DocBlockSplitError,
    InvalidModeError,
    MarkdownConfigError,
    TranslationError,
    UnknownDelimiterError,
    UnknownLexerError,
)
from .processing import (
    SourceResult,
    TranslationResult,
    document_to_source,
    document_to_source_file,
    source_file_to_document,
    source_to_document,
    verify_round_trip,
)
from .segments import CodeBlock, DocBlock

__all__ = [
    "CodeBlock",
    "DocBlock",
    "DocBlockSplitError",
    "DocSpan",
    "Document",
    "InvalidModeError",
    "MarkdownConfigError",
    "SourceResult",
    "TranslationError",
    "TranslationResult",
    "UnknownDelimiterError",
    "UnknownLexerError",
    "document_to_source",
    "document_to_source_file",
    "source_file_to_document",
    "source_to_document",
    "verify_round_trip",
]
