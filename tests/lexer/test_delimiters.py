"""Tests for the balanced delimiter matcher."""

import pytest

from perlexer.errors import WarningKind
from perlexer.lexer.delimiters import match_balanced, match_modifiers


class TestPairedDelimiters:
    """Paired delimiters nest; only the same pair is counted."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("{abc}", 5),
            ("(a(b)c)", 7),
            ("[a[b[c]]]", 9),
            ("<a<b>c>", 7),
        ],
    )
    def test_nested_pairs(self, text: str, expected: int) -> None:
        """Inner pairs are skipped over; the outer closer ends the span."""
        end, warning = match_balanced(text, 0)
        assert end == expected
        assert warning is None

    def test_other_pairs_ignored(self) -> None:
        """Only the opening pair counts: q{a(b} closes at the brace."""
        end, warning = match_balanced("{a(b}", 0)
        assert end == 5
        assert warning is None

    def test_escaped_closer(self) -> None:
        """A backslash escapes the closer."""
        end, _ = match_balanced(r"{a\}b}", 0)
        assert end == 6

    def test_start_in_middle_of_text(self) -> None:
        """The span starts at the given offset, not at 0."""
        assert match_balanced("q{a{b}c} x", 1) == (8, None)

    def test_unterminated(self) -> None:
        """A pair that never closes reports UNTERMINATED at the opener."""
        end, warning = match_balanced("x{a{b}", 1)
        assert end is None
        assert warning is not None
        assert warning.kind == WarningKind.UNTERMINATED
        assert warning.offset == 1

    def test_nesting_limit(self) -> None:
        """Nesting deeper than max_depth gives up with a NESTING warning."""
        end, warning = match_balanced("{{{x}}}", 0, max_depth=2)
        assert end is None
        assert warning is not None
        assert warning.kind == WarningKind.NESTING

    def test_nesting_at_limit_is_fine(self) -> None:
        end, warning = match_balanced("{{x}}", 0, max_depth=2)
        assert end == 5
        assert warning is None

    def test_deep_nesting_does_not_recurse(self) -> None:
        """Thousands of levels are handled iteratively."""
        depth = 5000
        text = "(" * depth + ")" * depth
        end, warning = match_balanced(text, 0, max_depth=depth)
        assert end == len(text)
        assert warning is None


class TestSameCharDelimiters:
    """Any other character delimits itself."""

    @pytest.mark.parametrize("delim", ["/", "#", "|", "!", "'", '"', ","])
    def test_simple(self, delim: str) -> None:
        text = f"{delim}abc{delim}rest"
        end, warning = match_balanced(text, 0)
        assert end == 5
        assert warning is None

    def test_escaped_delimiter(self) -> None:
        r"""'a\'b' closes at the last quote."""
        end, _ = match_balanced(r"'a\'b'", 0)
        assert end == 6

    def test_escaped_backslash_before_delimiter(self) -> None:
        end, _ = match_balanced(r"/a\\/ rest", 0)
        assert end == 5

    def test_backslash_as_delimiter(self) -> None:
        """With a backslash delimiter there are no escapes."""
        end, warning = match_balanced(r"\abc\ rest", 0)
        assert end == 5
        assert warning is None

    def test_unterminated(self) -> None:
        end, warning = match_balanced("'abc", 0)
        assert end is None
        assert warning is not None
        assert warning.kind == WarningKind.UNTERMINATED

    def test_trailing_backslash(self) -> None:
        """A backslash on the last character cannot escape past the end."""
        end, warning = match_balanced("'abc\\", 0)
        assert end is None
        assert warning is not None

    def test_start_past_end(self) -> None:
        """No delimiter at all is reported, not raised."""
        end, warning = match_balanced("q", 1)
        assert end is None
        assert warning is not None
        assert warning.kind == WarningKind.UNTERMINATED


class TestModifiers:
    """Trailing modifier letters."""

    def test_consumes_allowed_letters(self) -> None:
        assert match_modifiers("/x/gimz", 3, frozenset("gim")) == 6

    def test_no_modifiers(self) -> None:
        assert match_modifiers("/x/;", 3, frozenset("gim")) == 3

    def test_end_of_text(self) -> None:
        assert match_modifiers("/x/", 3, frozenset("gim")) == 3
