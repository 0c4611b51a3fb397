"""POD documentation block scanner mixin."""

from __future__ import annotations

from collections.abc import Callable

from perlexer.charsets import H_SPACE
from perlexer.errors import WarningKind
from perlexer.lexer.state import LexerState
from perlexer.tokens import Token, TokenType


def _is_cut_line(line: str) -> bool:
    """``=cut`` followed only by horizontal whitespace."""
    return line.startswith("=cut") and all(char in H_SPACE for char in line[4:])


class PodScannerMixin:
    """Mixin providing the POD block scanner.

    A POD block opens at the start of a line (or of the input) with ``=``
    and a letter, where a statement could start. It runs through the next
    ``=cut`` line, or to end of input.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _state: LexerState

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Emit token from cursor to end. Implemented by Lexer."""
        raise NotImplementedError

    def _warn(self, kind: WarningKind, message: str, offset: int | None = None) -> None:
        """Record a warning. Implemented by Lexer."""
        raise NotImplementedError

    def _find_closing_line(self, start: int, is_closing: Callable[[str], bool]) -> int | None:
        """Find the line closing a block. Implemented by Lexer."""
        raise NotImplementedError

    def _try_pod(self) -> bool:
        state = self._state
        source = self._source
        pos = self._pos
        if not state.canpod or source[pos] != "=":
            return False
        if pos > 0 and source[pos - 1] != "\n":
            return False
        letter = source[pos + 1 : pos + 2]
        if not (letter.isascii() and letter.isalpha()):
            return False

        end = None
        first_newline = source.find("\n", pos)
        if first_newline != -1:
            end = self._find_closing_line(first_newline + 1, _is_cut_line)
        if end is None:
            self._warn(WarningKind.UNTERMINATED, "POD block without =cut")
            end = self._source_len

        self._emit(TokenType.POD, end)
        state.regex = True
        state.canpod = True
        return True
