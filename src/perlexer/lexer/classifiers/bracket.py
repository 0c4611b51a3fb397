"""Bracket and subroutine prototype classifier mixin."""

from __future__ import annotations

from perlexer.errors import WarningKind
from perlexer.lexer.state import LexerState
from perlexer.tokens import Token, TokenType


class BracketClassifierMixin:
    """Mixin providing bracket and prototype rules.

    Depth counters never go below zero: a closer at depth zero is
    reported and the counter stays put.

    """

    # These will be set by the Lexer class
    _source: str
    _pos: int
    _state: LexerState

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Emit token from cursor to end. Implemented by Lexer."""
        raise NotImplementedError

    def _warn(self, kind: WarningKind, message: str, offset: int | None = None) -> None:
        """Record a warning. Implemented by Lexer."""
        raise NotImplementedError

    def _try_prototype(self) -> bool:
        """Classify ``($$;@)`` after ``sub NAME`` as one sub_proto token."""
        state = self._state
        source = self._source
        pos = self._pos
        if not state.proto or source[pos] != "(":
            return False

        close = source.find(")", pos + 1)
        if close == -1:
            return False

        self._emit(TokenType.SUB_PROTO, close + 1)
        state.proto = False
        state.canpod = False
        state.regex = False
        return True

    def _try_bracket(self) -> bool:
        state = self._state
        char = self._source[self._pos]
        end = self._pos + 1

        if char == "(":
            self._emit(TokenType.PARENTHESE_BEG, end)
            state.parens += 1
            state.regex = True
            state.flat = False
            state.canpod = False
        elif char == ")":
            self._emit(TokenType.PARENTHESE_END, end)
            state.parens = self._close(state.parens, "parentheses", end - 1)
            state.regex = False
            state.flat = False
            state.canpod = False
        elif char == "{":
            self._emit(TokenType.CBRACKET_BEG, end)
            state.curlies += 1
            state.regex = True
            state.proto = False
        elif char == "}":
            self._emit(TokenType.CBRACKET_END, end)
            state.curlies = self._close(state.curlies, "curly brackets", end - 1)
            state.flat = False
        elif char == "[":
            self._emit(TokenType.BRACKET_BEG, end)
            state.brackets += 1
            state.regex = True
            state.flat = False
            state.canpod = False
        elif char == "]":
            self._emit(TokenType.BRACKET_END, end)
            state.brackets = self._close(state.brackets, "square brackets", end - 1)
            state.regex = False
            state.flat = False
            state.canpod = False
        else:
            return False
        return True

    def _close(self, depth: int, name: str, offset: int) -> int:
        """Decrement a depth counter, warning instead of going negative."""
        if depth >= 1:
            return depth - 1
        self._warn(WarningKind.IMBALANCE, f"unbalanced {name}: closer without opener", offset)
        return 0
