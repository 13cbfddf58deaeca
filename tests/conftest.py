import pytest

from codechat.lexer.registry import LexerRegistry, default_registry


@pytest.fixture
def registry() -> LexerRegistry:
    return default_registry()


@pytest.fixture
def lexer_for(registry):
    def _lexer_for(mode: str):
        lexer = registry.lexer_for_mode(mode)
        assert lexer is not None, f"missing lexer {mode}"
        return lexer

    return _lexer_for
