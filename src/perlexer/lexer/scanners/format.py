"""Format body scanner mixin.

``format NAME =`` declares a report format; its picture lines start on the
next line and run through a line holding a lone dot:

    format STDOUT =
    @<<<<< @>>>>>
    $name, $value
    .
"""

from __future__ import annotations

from collections.abc import Callable

from perlexer.charsets import H_SPACE
from perlexer.errors import WarningKind
from perlexer.lexer.state import LexerState
from perlexer.tokens import Token, TokenType


def _is_format_end(line: str) -> bool:
    return line.startswith(".") and all(char in H_SPACE for char in line[1:])


class FormatScannerMixin:
    """Mixin providing the format body scanner."""

    # These will be set by the Lexer class
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

    def _scan_format_body(self, break_len: int) -> bool:
        """Consume a format body starting after the line break at the cursor.

        Without a closing dot line the body is abandoned with a warning and
        the line break is left for the whitespace rule.
        """
        state = self._state
        state.expect_format = False

        body_start = self._pos + break_len
        end = self._find_closing_line(body_start, _is_format_end)
        if end is None:
            self._warn(WarningKind.UNTERMINATED, "format body without a closing '.' line")
            return True

        self._emit(TokenType.VERTICAL_SPACE, body_start)
        self._emit(TokenType.FORMAT, end)
        state.canpod = True
        state.regex = True
        return True
