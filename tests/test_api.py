"""Tests for the high-level perlexer API."""

from perlexer.tokens import Token


class TestTokenizeFunction:
    """Tests for the tokenize() function."""

    def test_returns_stream_and_warnings(self) -> None:
        """tokenize() returns the stream and a list of warnings."""
        from perlexer import TokenStream, tokenize

        stream, warnings = tokenize("print 1;")
        assert isinstance(stream, TokenStream)
        assert warnings == []

    def test_with_source_file(self) -> None:
        """Test tokenizing with source file context."""
        from perlexer import tokenize

        stream, _ = tokenize("print 1;", source_file="test.pl")
        assert stream[0].location.source_file == "test.pl"

    def test_with_explicit_config(self) -> None:
        from perlexer import LexerConfig, TokenType, tokenize

        stream, _ = tokenize(
            "print <<~E;\n  x\n  E\n", config=LexerConfig(indented_heredocs=False)
        )
        assert TokenType.HEREDOC not in stream.types()

    def test_uses_context_config(self) -> None:
        """Without an explicit config the active context config applies."""
        from perlexer import LexerConfig, TokenType, lexer_config_context, tokenize

        with lexer_config_context(LexerConfig(indented_heredocs=False)):
            stream, _ = tokenize("print <<~E;\n  x\n  E\n")
        assert TokenType.HEREDOC not in stream.types()


class TestScoringFunctions:
    """identify / obfuscation_score / verdict from the package root."""

    def test_identical_programs_score_zero(self) -> None:
        from perlexer import identify, obfuscation_score, tokenize

        stream, _ = tokenize("my $x = 1;\nprint $x;\n")
        kinds = identify(stream, 1)
        assert obfuscation_score(kinds, kinds) == 0.0

    def test_verdict_line(self) -> None:
        from perlexer import verdict

        assert "baby Perl" in verdict(0.0)


class TestTokenObject:
    """Token helpers."""

    def test_repr_truncates(self) -> None:
        from perlexer import TokenType

        token = Token(TokenType.COMMENT, "#" * 40, 0, 40)
        assert repr(token) == f"Token(comment, {'#' * 17 + '...'!r}, 0:40)"

    def test_retyped_keeps_position(self) -> None:
        from perlexer import TokenType

        token = Token(TokenType.KEYWORD, "print", 4, 9, _lineno=2, _col=5)
        retyped = token.retyped(TokenType.UNQUOTED_STRING)
        assert retyped.type == TokenType.UNQUOTED_STRING
        assert (retyped.start, retyped.end, retyped.lineno, retyped.col) == (4, 9, 2, 5)

    def test_location_is_cached(self) -> None:
        from perlexer import TokenType

        token = Token(TokenType.NUMBER, "1", 0, 1)
        assert token.location is token.location

    def test_tokens_are_immutable(self) -> None:
        import pytest

        from perlexer import TokenType

        token = Token(TokenType.NUMBER, "1", 0, 1)
        with pytest.raises(AttributeError):
            token.value = "2"  # type: ignore[misc]
