"""Tests for ContextVar-based lexer configuration.

Validates thread isolation, context manager behavior, and that a Lexer
picks up the active config at construction.
"""

from threading import Thread

import pytest

from perlexer import (
    Lexer,
    LexerConfig,
    get_lexer_config,
    lexer_config_context,
    reset_lexer_config,
    set_lexer_config,
)
from perlexer.config import DEFAULT_MAX_NESTING_DEPTH


@pytest.fixture(autouse=True)
def _reset_config():
    reset_lexer_config()
    yield
    reset_lexer_config()


class TestLexerConfigDataclass:
    """Test LexerConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = LexerConfig()
        assert config.max_nesting_depth == DEFAULT_MAX_NESTING_DEPTH
        assert config.indented_heredocs is True

    def test_immutability(self) -> None:
        config = LexerConfig()
        with pytest.raises(AttributeError):
            config.max_nesting_depth = 3  # type: ignore[misc]

    @pytest.mark.parametrize("depth", [0, -1])
    def test_invalid_depth(self, depth: int) -> None:
        with pytest.raises(ValueError, match="max_nesting_depth"):
            LexerConfig(max_nesting_depth=depth)

    def test_from_dict(self) -> None:
        config = LexerConfig.from_dict({"max_nesting_depth": 32, "indented_heredocs": False})
        assert config == LexerConfig(max_nesting_depth=32, indented_heredocs=False)

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = LexerConfig.from_dict({"max_nesting_depth": 8, "colour": "blue"})
        assert config.max_nesting_depth == 8

    def test_from_empty_dict(self) -> None:
        assert LexerConfig.from_dict({}) == LexerConfig()


class TestContextVarConfig:
    """get/set/reset and the context manager."""

    def test_default_config(self) -> None:
        assert get_lexer_config() == LexerConfig()

    def test_set_and_reset(self) -> None:
        custom = LexerConfig(max_nesting_depth=4)
        set_lexer_config(custom)
        assert get_lexer_config() is custom
        reset_lexer_config()
        assert get_lexer_config() == LexerConfig()

    def test_context_manager_restores(self) -> None:
        custom = LexerConfig(indented_heredocs=False)
        with lexer_config_context(custom):
            assert get_lexer_config() is custom
        assert get_lexer_config() == LexerConfig()

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with lexer_config_context(LexerConfig(max_nesting_depth=2)):
                raise RuntimeError("boom")
        assert get_lexer_config() == LexerConfig()

    def test_nested_contexts(self) -> None:
        outer = LexerConfig(max_nesting_depth=10)
        inner = LexerConfig(max_nesting_depth=20)
        with lexer_config_context(outer):
            with lexer_config_context(inner):
                assert get_lexer_config() is inner
            assert get_lexer_config() is outer

    def test_lexer_reads_config_at_construction(self) -> None:
        """Changing the context later does not affect an existing lexer."""
        with lexer_config_context(LexerConfig(max_nesting_depth=1)):
            lexer = Lexer("q{{x}}")
        lexer.tokenize()
        assert lexer.warnings


class TestThreadIsolation:
    """Config set in one thread does not leak into another."""

    def test_threads_tokenize_with_own_config(self) -> None:
        results: dict[str, int] = {}

        def worker(name: str, depth: int) -> None:
            with lexer_config_context(LexerConfig(max_nesting_depth=depth)):
                lexer = Lexer("q{{{x}}}")
                lexer.tokenize()
                results[name] = len(lexer.warnings)

        threads = [
            Thread(target=worker, args=("shallow", 1)),
            Thread(target=worker, args=("deep", 10)),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert results["shallow"] > 0
        assert results["deep"] == 0
