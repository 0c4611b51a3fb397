"""Operator and punctuation classifier mixin.

Operators are matched longest-first. Plain ``=`` and compound
assignments are assignment operators; comparisons such as ``==`` and
``<=`` are plain operators.
"""

from __future__ import annotations

from perlexer.charsets import ASSIGNMENT_OPERATORS, OPERATORS, is_digit, is_word_char
from perlexer.lexer.state import LexerState
from perlexer.tokens import KEYWORD_LIKE_TYPES, Token, TokenType


class OperatorClassifierMixin:
    """Mixin providing operator and punctuation rules."""

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _state: LexerState
    _tokens: list[Token]

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Emit token from cursor to end. Implemented by Lexer."""
        raise NotImplementedError

    def _last_significant(self) -> int | None:
        """Index of the last non-trivia token. Implemented by Lexer."""
        raise NotImplementedError

    def _retype(self, index: int, token_type: TokenType) -> None:
        """Change an emitted token's type. Implemented by Lexer."""
        raise NotImplementedError

    def _try_punctuation(self) -> bool:
        """Classify ``;``, ``=>`` and ``,``."""
        state = self._state
        source = self._source
        pos = self._pos

        if source[pos] == ";":
            self._emit(TokenType.END_OF_STATEMENT, pos + 1)
            state.canpod = True
            state.regex = True
            state.proto = False
            state.flat = False
            return True

        if source.startswith("=>", pos):
            # print => 1, -e => 1: the word before a fat comma is a string
            index = self._last_significant()
            if index is not None and self._tokens[index].type in KEYWORD_LIKE_TYPES:
                self._retype(index, TokenType.UNQUOTED_STRING)
                state.proto = False
                state.format = False
            self._emit(TokenType.FAT_COMMA_OPERATOR, pos + 2)
            state.regex = True
            state.canpod = False
            state.flat = False
            return True

        if source[pos] == ",":
            self._emit(TokenType.COMMA_OPERATOR, pos + 1)
            state.regex = True
            state.canpod = False
            state.flat = False
            return True

        return False

    def _try_assignment(self) -> bool:
        """Classify ``=``, ``+=``, ``//=``, ``x=`` and friends.

        A plain ``=`` after ``format NAME`` arms the format body.
        """
        state = self._state
        source = self._source
        pos = self._pos
        next_char = source[pos + 1] if pos + 1 < self._source_len else ""

        end = None
        if source[pos] == "=":
            if next_char not in ("=", "~"):
                end = pos + 1
                if state.format:
                    state.format = False
                    state.expect_format = True
        elif source.startswith("x=", pos) and not state.regex:
            if source[pos + 2 : pos + 3] not in ("=", "~", ">"):
                end = pos + 2
        else:
            for operator in ASSIGNMENT_OPERATORS:
                if source.startswith(operator, pos):
                    end = pos + len(operator)
                    break

        if end is None:
            return False
        self._emit(TokenType.ASSIGNMENT_OPERATOR, end)
        state.regex = True
        state.canpod = False
        state.flat = False
        return True

    def _try_dereference(self) -> bool:
        if not self._source.startswith("->", self._pos):
            return False
        self._emit(TokenType.DEREFERENCE_OPERATOR, self._pos + 2)
        state = self._state
        state.regex = False
        state.canpod = False
        state.flat = True
        return True

    def _try_operator(self) -> bool:
        """Classify an operator; ``x`` repetition only after a value."""
        source = self._source
        pos = self._pos

        end = None
        for operator in OPERATORS:
            if source.startswith(operator, pos):
                end = pos + len(operator)
                break
        if end is None and source[pos] == "x" and not self._state.regex:
            following = source[pos + 1] if pos + 1 < self._source_len else ""
            if following and (is_digit(following) or not is_word_char(following)):
                end = pos + 1

        if end is None:
            return False
        self._emit(TokenType.OPERATOR, end)
        state = self._state
        state.canpod = False
        state.regex = True
        state.flat = False
        return True
