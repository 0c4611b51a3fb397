"""Property-based tests for lexer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input: the lexer never raises, never rewinds, and never invents
text that is not in the source.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from perlexer.lexer import Lexer, tokenize
from perlexer.tokens import TokenType

# Characters that drive most of the context-sensitive rules
PERL_ALPHABET = "$@%*&{}[]()<>/\\'\"`#=~!-+.,;:?^|xqsmytrv0123456789abcEOF_ \t\n\r"

WELL_FORMED = [
    "my $x = 1;\n",
    "print <<A, <<B;\nbody of A\nA\nbody of B\nB\n",
    "=head1 NAME\n\ntext\n\n=cut\nprint 1;\n",
    "format STDOUT =\n@<<< $x\n.\n",
    "my @w = qw(a b c);\n$x =~ s{a}{b}g;\n",
    "sub max($$) { $_[0] > $_[1] ? $_[0] : $_[1] }\n",
    "open(my $fh, '<', $file) or die \"no: $!\";\nwhile (<$fh>) { chomp; }\n",
    "print 1;\n__END__\nanything at all {\n",
]


class TestBasicInvariants:
    """Test basic invariants that should always hold."""

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_never_raises(self, source: str) -> None:
        """Any text tokenizes; problems become warnings."""
        stream, warnings = tokenize(source)
        assert isinstance(warnings, list)
        assert stream.source == source

    @given(st.text(alphabet=PERL_ALPHABET, max_size=300))
    @settings(max_examples=300)
    def test_never_raises_on_perlish_text(self, source: str) -> None:
        tokenize(source)

    @given(st.text(alphabet=PERL_ALPHABET, max_size=300))
    @settings(max_examples=200)
    def test_offsets_never_decrease(self, source: str) -> None:
        """Tokens come out in scan order and never overlap."""
        stream, _ = tokenize(source)
        position = 0
        for token in stream:
            assert token.start >= position
            assert token.end >= token.start
            position = token.end
        assert position <= len(source)

    @given(st.text(alphabet=PERL_ALPHABET, max_size=300))
    @settings(max_examples=200)
    def test_values_are_source_slices(self, source: str) -> None:
        stream, _ = tokenize(source)
        for token in stream:
            assert token.value == source[token.start : token.end]

    @given(st.text(alphabet=PERL_ALPHABET, max_size=200))
    @settings(max_examples=100)
    def test_deterministic(self, source: str) -> None:
        """Tokenizing twice gives identical streams and warnings."""
        first = tokenize(source)
        second = tokenize(source)
        assert first[0] == second[0]
        assert first[1] == second[1]

    @given(st.text(alphabet=PERL_ALPHABET, max_size=200))
    @settings(max_examples=100)
    def test_gaps_are_explained_by_warnings(self, source: str) -> None:
        """Uncovered text only appears when something was reported."""
        stream, warnings = tokenize(source)
        if stream.gaps():
            assert warnings

    @given(st.text(alphabet=PERL_ALPHABET, max_size=200))
    @settings(max_examples=100)
    def test_warning_offsets_in_range(self, source: str) -> None:
        _, warnings = tokenize(source)
        for warning in warnings:
            assert 0 <= warning.offset <= len(source)
            assert warning.location is not None
            assert warning.location.lineno >= 1
            assert warning.location.col_offset >= 1

    @given(st.text(max_size=300))
    @settings(max_examples=100)
    def test_position_never_negative(self, source: str) -> None:
        """Token positions should never be negative."""
        stream, _ = tokenize(source)
        for token in stream:
            loc = token.location
            assert loc.lineno >= 1
            assert loc.col_offset >= 1
            assert loc.offset >= 0


class TestWellFormedPrograms:
    """Complete coverage on ordinary programs."""

    def test_well_formed_samples_are_complete(self) -> None:
        for source in WELL_FORMED:
            stream, warnings = tokenize(source)
            assert warnings == [], source
            assert stream.is_complete, source
            assert "".join(t.value for t in stream) == source

    def test_tokenize_is_cached(self) -> None:
        """A second tokenize() call returns the same stream object."""
        lexer = Lexer("print 1;")
        assert lexer.tokenize() is lexer.tokenize()

    def test_empty_source(self) -> None:
        stream, warnings = tokenize("")
        assert len(stream) == 0
        assert warnings == []
        assert stream.is_complete


class TestPathologicalInput:
    """Input that could blow up a naive implementation."""

    def test_deep_nesting_of_brackets(self) -> None:
        source = "(" * 10_000 + ")" * 10_000
        stream, warnings = tokenize(source)
        assert warnings == []
        assert len(stream) == 20_000

    def test_deep_nesting_inside_quote(self) -> None:
        """Nesting within one literal is bounded, not recursive."""
        source = "q" + "{" * 10_000 + "}" * 10_000
        stream, warnings = tokenize(source)
        assert warnings
        assert stream.types()[0] != TokenType.Q_STRING

    def test_many_heredocs(self) -> None:
        names = [f"E{i}" for i in range(200)]
        source = "print " + ", ".join(f"<<{n}" for n in names) + ";\n"
        source += "".join(f"x\n{n}\n" for n in names)
        stream, warnings = tokenize(source)
        assert warnings == []
        assert len(stream.of_type(TokenType.HEREDOC)) == 200
