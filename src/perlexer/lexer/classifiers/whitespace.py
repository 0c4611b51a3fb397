"""Whitespace and comment classifier mixin."""

from __future__ import annotations

from perlexer.charsets import H_SPACE, V_SPACE, is_other_space
from perlexer.lexer.state import LexerState
from perlexer.tokens import Token, TokenType


class WhitespaceClassifierMixin:
    """Mixin providing whitespace and ``#`` comment rules.

    Neither rule touches the context flags: whitespace and comments are
    invisible to disambiguation.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _state: LexerState

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Emit token from cursor to end. Implemented by Lexer."""
        raise NotImplementedError

    def _try_whitespace(self) -> bool:
        """Classify a run of horizontal, vertical or other whitespace.

        While a heredoc or format body is pending, a vertical run stops
        before the next line break so the body rule sees it.
        """
        source = self._source
        source_len = self._source_len
        pos = self._pos
        char = source[pos]

        if char in H_SPACE:
            end = pos + 1
            while end < source_len and source[end] in H_SPACE:
                end += 1
            self._emit(TokenType.HORIZONTAL_SPACE, end)
            return True

        if char in V_SPACE:
            stop_at_break = self._state.has_pending_body
            end = pos + 1
            while end < source_len and source[end] in V_SPACE:
                if stop_at_break and (
                    source[end] == "\n" or source.startswith("\r\n", end)
                ):
                    break
                end += 1
            self._emit(TokenType.VERTICAL_SPACE, end)
            return True

        if is_other_space(char):
            end = pos + 1
            while end < source_len and is_other_space(source[end]):
                end += 1
            self._emit(TokenType.OTHER_SPACE, end)
            return True

        return False

    def _try_comment(self) -> bool:
        """Classify ``#`` through end of line (the line break excluded)."""
        source = self._source
        pos = self._pos
        if source[pos] != "#":
            return False

        end = source.find("\n", pos)
        if end == -1:
            end = self._source_len
        elif end > pos + 1 and source[end - 1] == "\r":
            end -= 1
        self._emit(TokenType.COMMENT, end)
        return True
