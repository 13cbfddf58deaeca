from __future__ import annotations


class TranslationError(RuntimeError):
    """Raised when a source file or document cannot be translated."""


class InvalidModeError(TranslationError):
    def __init__(self, mode: str) -> None:
        self.mode = mode
        super().__init__(f"Invalid mode '{mode}'.")


class UnknownLexerError(TranslationError):
    """Raised when an embedded lexer directive names an unregistered mode."""

    def __init__(self, mode: str) -> None:
        self.mode = mode
        super().__init__(f"Unknown lexer type '{mode}'.")


class UnknownDelimiterError(TranslationError):
    """Raised when a doc block's delimiter is not part of its language's rules."""

    def __init__(self, delimiter: str) -> None:
        self.delimiter = delimiter
        super().__init__(f"Unknown comment opening delimiter '{delimiter}'.")


class DocBlockSplitError(TranslationError):
    """Raised when rendered doc blocks cannot be split back one-to-one."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Rendered documentation split into {actual} parts; expected {expected} doc blocks."
        )


class MarkdownConfigError(TranslationError):
    """Raised when the configured Markdown extensions cannot be loaded."""
