"""Tests for quote-like operators, strings and readline."""

import pytest

from perlexer.config import LexerConfig
from perlexer.errors import WarningKind
from perlexer.lexer import tokenize
from perlexer.tokens import TokenType

T = TokenType


def _only(source: str, token_type: TokenType) -> list[str]:
    stream, _ = tokenize(source)
    return [t.value for t in stream.of_type(token_type)]


class TestQuoteOperators:
    """q qq qw qx with every kind of delimiter."""

    @pytest.mark.parametrize(
        ("literal", "token_type"),
        [
            ("q{a{b}c}", T.Q_STRING),
            ("q(a)", T.Q_STRING),
            ("q<a<b>>", T.Q_STRING),
            ("q[a]", T.Q_STRING),
            ("q/a/", T.Q_STRING),
            ("q!a!", T.Q_STRING),
            ("qq{hello $name}", T.QQ_STRING),
            ("qw(a b c)", T.QW_STRING),
            ("qx`ls`", T.QX_STRING),
        ],
    )
    def test_single_token(self, literal: str, token_type: TokenType) -> None:
        stream, warnings = tokenize(f"print {literal};")
        assert warnings == []
        assert [t.value for t in stream.of_type(token_type)] == [literal]

    def test_nested_braces_are_one_token(self) -> None:
        stream, _ = tokenize("q{a{b}c}")
        assert stream.types() == (T.Q_STRING,)

    def test_whitespace_before_delimiter(self) -> None:
        assert _only("qw (a b);", T.QW_STRING) == ["qw (a b)"]

    def test_any_delimiter_after_whitespace(self) -> None:
        """Once whitespace separates them, even a letter delimits."""
        assert _only("q xabcx;", T.Q_STRING) == ["q xabcx"]

    def test_hash_as_delimiter(self) -> None:
        assert _only("q#abc#;", T.Q_STRING) == ["q#abc#"]

    def test_comment_between_operator_and_delimiter(self) -> None:
        source = "qw # words\n(a b);"
        assert _only(source, T.QW_STRING) == ["qw # words\n(a b)"]

    def test_word_after_operator_is_not_a_delimiter(self) -> None:
        """``qabc`` is a bareword: no whitespace and a word character."""
        stream, _ = tokenize("qabc;")
        assert stream[0].type == T.UNQUOTED_STRING

    def test_longer_word_is_not_an_operator(self) -> None:
        """``sort`` and ``quux`` only start like quote-like operators."""
        stream, _ = tokenize("sort { $a <=> $b } @x;")
        assert stream[0].type == T.KEYWORD
        assert T.SUBSTITUTION not in stream.types()


class TestRegexOperators:
    """m qr s tr y and their modifiers."""

    @pytest.mark.parametrize(
        ("literal", "token_type"),
        [
            ("m/foo/i", T.MATCH_REGEX),
            ("m{foo}x", T.MATCH_REGEX),
            ("qr/\\d+/msix", T.COMPILED_REGEX),
            ("s/a/b/g", T.SUBSTITUTION),
            ("s{a}{b}ge", T.SUBSTITUTION),
            ("s{a} {b}", T.SUBSTITUTION),
            ("s(a)[b]", T.SUBSTITUTION),
            ("tr/a-z/A-Z/", T.TRANSLATION),
            ("y/abc/xyz/d", T.TRANSLATION),
            ("tr{a}{b}r", T.TRANSLATION),
        ],
    )
    def test_single_token(self, literal: str, token_type: TokenType) -> None:
        stream, warnings = tokenize(f"$x =~ {literal};")
        assert warnings == []
        assert [t.value for t in stream.of_type(token_type)] == [literal]

    def test_substitution_with_escaped_delimiter(self) -> None:
        assert _only("s/a\\/b/c/;", T.SUBSTITUTION) == ["s/a\\/b/c/"]

    def test_modifiers_stop_at_unknown_letter(self) -> None:
        """Only letters valid for the operator are consumed."""
        stream, _ = tokenize("$x =~ tr/a/b/g;")
        assert [t.value for t in stream.of_type(T.TRANSLATION)] == ["tr/a/b/"]

    def test_bare_slash_pattern(self) -> None:
        assert _only("split /,/, $line;", T.MATCH_REGEX) == ["/,/"]

    def test_split_with_space_pattern(self) -> None:
        """``split / / , $x``: the slash after split starts a pattern."""
        stream, _ = tokenize("split / / , $x")
        kinds = [t.type for t in stream if t.type != T.HORIZONTAL_SPACE]
        assert kinds == [
            T.KEYWORD,
            T.MATCH_REGEX,
            T.COMMA_OPERATOR,
            T.SCALAR_SIGN,
            T.VAR_NAME,
        ]


class TestQuoteLikeExclusions:
    """Places where a quote-like name is just a word."""

    def test_before_fat_comma(self) -> None:
        stream, _ = tokenize("(s => 1, y => 2)")
        assert T.SUBSTITUTION not in stream.types()
        assert T.TRANSLATION not in stream.types()
        assert len(stream.of_type(T.UNQUOTED_STRING)) == 2

    def test_method_call(self) -> None:
        """``$obj->q(1)`` calls a method named q."""
        stream, warnings = tokenize("$obj->q(1);")
        assert T.Q_STRING not in stream.types()
        assert warnings == []


class TestStrings:
    """Quoted string literals."""

    @pytest.mark.parametrize(
        ("literal", "token_type"),
        [
            ('"hello"', T.DOUBLE_QUOTED_STRING),
            ("'hello'", T.SINGLE_QUOTED_STRING),
            ("`ls`", T.BACKTICK),
            ('"a \\" b"', T.DOUBLE_QUOTED_STRING),
            ("'multi\nline'", T.SINGLE_QUOTED_STRING),
        ],
    )
    def test_strings(self, literal: str, token_type: TokenType) -> None:
        assert _only(f"print {literal};", token_type) == [literal]

    def test_division_after_string(self) -> None:
        stream, _ = tokenize('"a" / 2')
        assert T.MATCH_REGEX not in stream.types()
        assert T.OPERATOR in stream.types()

    def test_unterminated_string(self) -> None:
        """The quote is skipped and reported; the rest is still tokenized."""
        stream, warnings = tokenize('print "abc')
        assert len(warnings) == 1
        assert warnings[0].kind == WarningKind.UNTERMINATED
        assert warnings[0].offset == 6
        assert stream.gaps() == [(6, 7)]
        assert stream[-1].value == "abc"


class TestUnterminatedQuoteLike:
    """Quote-like operators whose delimiter never closes."""

    def test_unterminated_q(self) -> None:
        stream, warnings = tokenize("q{abc")
        kinds = [w.kind for w in warnings]
        assert WarningKind.UNTERMINATED in kinds
        assert T.Q_STRING not in stream.types()

    def test_missing_replacement(self) -> None:
        _, warnings = tokenize("s{a}")
        assert any(w.kind == WarningKind.UNTERMINATED for w in warnings)

    def test_too_deep(self) -> None:
        config = LexerConfig(max_nesting_depth=2)
        stream, warnings = tokenize("q{{{x}}}", config=config)
        assert any(w.kind == WarningKind.NESTING for w in warnings)
        assert T.Q_STRING not in stream.types()


class TestReadline:
    """``<FH>`` in operand position."""

    @pytest.mark.parametrize("literal", ["<STDIN>", "<$fh>", "<*.c>", "<>"])
    def test_readline(self, literal: str) -> None:
        assert _only(f"my $line = {literal};", T.READLINE) == [literal]

    def test_less_than_after_value(self) -> None:
        stream, _ = tokenize("$a < $b > $c")
        assert T.READLINE not in stream.types()
        assert len(stream.of_type(T.OPERATOR)) == 2

    def test_unclosed_angle_is_an_operator(self) -> None:
        stream, warnings = tokenize("print <")
        assert T.READLINE not in stream.types()
        assert warnings == []
