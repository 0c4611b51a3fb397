"""Numeric literal classifier mixin.

Recognized forms, tried in order:
    v-string   v5.36  v1  1.2.3
    hex        0x1F_ff
    binary     0b1010
    decimal    42  1_000  3.14  1e10  .5 (operand position only)
"""

from __future__ import annotations

from perlexer.charsets import is_digit, is_word_char
from perlexer.lexer.state import LexerState
from perlexer.tokens import Token, TokenType

_HEX_DIGITS = frozenset("_0123456789abcdefABCDEF")
_BINARY_DIGITS = frozenset("_01")


class NumberClassifierMixin:
    """Mixin providing numeric literal rules."""

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _state: LexerState

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Emit token from cursor to end. Implemented by Lexer."""
        raise NotImplementedError

    def _try_number(self) -> bool:
        source = self._source
        pos = self._pos
        char = source[pos]

        if char == "v" or is_digit(char):
            end = self._vstring_end(pos)
            if end is not None:
                return self._emit_number(TokenType.V_STRING, end)
        if not is_digit(char):
            if not (char == "." and self._state.regex and is_digit(self._char_at(pos + 1))):
                return False

        if source.startswith("0x", pos):
            return self._emit_number(TokenType.HEX_NUMBER, self._run_end(pos + 2, _HEX_DIGITS))
        if source.startswith("0b", pos):
            return self._emit_number(
                TokenType.BINARY_NUMBER, self._run_end(pos + 2, _BINARY_DIGITS)
            )
        return self._emit_number(TokenType.NUMBER, self._decimal_end(pos))

    def _emit_number(self, token_type: TokenType, end: int) -> bool:
        self._emit(token_type, end)
        self._state.regex = False
        self._state.canpod = False
        return True

    def _char_at(self, pos: int) -> str:
        return self._source[pos] if pos < self._source_len else ""

    def _digits_end(self, pos: int, *, underscores: bool = True) -> int:
        source = self._source
        source_len = self._source_len
        while pos < source_len and (
            is_digit(source[pos]) or (underscores and source[pos] == "_")
        ):
            pos += 1
        return pos

    def _run_end(self, pos: int, allowed: frozenset[str]) -> int:
        source = self._source
        source_len = self._source_len
        while pos < source_len and source[pos] in allowed:
            pos += 1
        return pos

    def _vstring_end(self, pos: int) -> int | None:
        """End of a v-string at pos, or None.

        ``v`` plus digits may stand alone; a bare digit form needs at least
        two dotted parts (``1.2.3``). The literal must sit on word
        boundaries; if the longest reading does not end on one, shorter
        dotted readings are tried.
        """
        source = self._source
        if pos > 0 and is_word_char(source[pos - 1]):
            return None

        if source[pos] == "v":
            head_end = self._digits_end(pos + 1, underscores=False)
            if head_end == pos + 1:
                return None
            min_parts = 0
        else:
            head_end = self._digits_end(pos)
            min_parts = 2

        # Candidate ends after the head and after each ".digits" part
        ends = [head_end]
        end = head_end
        while self._char_at(end) == "." and is_digit(self._char_at(end + 1)):
            end = self._digits_end(end + 1)
            ends.append(end)

        for parts in range(len(ends) - 1, min_parts - 1, -1):
            candidate = ends[parts]
            if not is_word_char(self._char_at(candidate)):
                return candidate
        return None

    def _decimal_end(self, pos: int) -> int:
        """End of ``[0-9_]*(\\.[0-9_]*)?([Ee][+-]?[0-9_]+)?`` at pos.

        The fraction is skipped before ``..`` so ``1..10`` is a range.
        """
        end = self._digits_end(pos)
        if self._char_at(end) == "." and self._char_at(end + 1) != ".":
            end = self._digits_end(end + 1)
        if self._char_at(end) in ("E", "e"):
            exp = end + 1
            if self._char_at(exp) in ("+", "-"):
                exp += 1
            exp_end = self._digits_end(exp)
            if exp_end > exp:
                end = exp_end
        return end
