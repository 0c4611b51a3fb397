"""Quote-like operator, string literal and readline classifier mixin.

Quote-like operators take their operand as delimited text:

    q{...}  qq(...)  qw[...]  qx<...>  qr/.../msix  m#...#g  /.../
    s{...}{...}e  s/.../.../g  tr/a-z/A-Z/  y{...}{...}

The operator name may be separated from its delimiter by whitespace and
``#`` comments. Once whitespace separates them any character delimits
(``q xabcx``); otherwise only a non-word character does.
"""

from __future__ import annotations

from perlexer.charsets import (
    COMPILED_REGEX_FLAGS,
    H_SPACE,
    MATCH_FLAGS,
    PAIRED_DELIMITERS,
    QUOTE_LIKE_OPERATORS,
    SUBSTITUTION_FLAGS,
    TRANSLATION_FLAGS,
    is_word_char,
)
from perlexer.config import LexerConfig
from perlexer.errors import LexWarning, WarningKind
from perlexer.lexer.delimiters import match_balanced, match_modifiers
from perlexer.lexer.state import LexerState
from perlexer.tokens import Token, TokenType

# name -> (token type, allowed modifiers, number of delimited spans)
_QUOTE_LIKE: dict[str, tuple[TokenType, frozenset[str], int]] = {
    "s": (TokenType.SUBSTITUTION, SUBSTITUTION_FLAGS, 2),
    "tr": (TokenType.TRANSLATION, TRANSLATION_FLAGS, 2),
    "y": (TokenType.TRANSLATION, TRANSLATION_FLAGS, 2),
    "m": (TokenType.MATCH_REGEX, MATCH_FLAGS, 1),
    "qr": (TokenType.COMPILED_REGEX, COMPILED_REGEX_FLAGS, 1),
    "q": (TokenType.Q_STRING, frozenset(), 1),
    "qq": (TokenType.QQ_STRING, frozenset(), 1),
    "qw": (TokenType.QW_STRING, frozenset(), 1),
    "qx": (TokenType.QX_STRING, frozenset(), 1),
}

_STRING_TYPES: dict[str, TokenType] = {
    '"': TokenType.DOUBLE_QUOTED_STRING,
    "'": TokenType.SINGLE_QUOTED_STRING,
    "`": TokenType.BACKTICK,
}


class QuoteLikeClassifierMixin:
    """Mixin providing quote-like, string and readline rules."""

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _state: LexerState
    _config: LexerConfig

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Emit token from cursor to end. Implemented by Lexer."""
        raise NotImplementedError

    def _skip_to(self, end: int) -> None:
        """Advance cursor without a token. Implemented by Lexer."""
        raise NotImplementedError

    def _warn(self, kind: WarningKind, message: str, offset: int | None = None) -> None:
        """Record a warning. Implemented by Lexer."""
        raise NotImplementedError

    def _add_warning(self, warning: LexWarning) -> None:
        """Record a helper's warning. Implemented by Lexer."""
        raise NotImplementedError

    def _word_end(self, pos: int) -> int:
        """End of word characters at pos. Implemented by Lexer."""
        raise NotImplementedError

    def _after_dereference(self) -> bool:
        """True right after ``->``. Implemented by Lexer."""
        raise NotImplementedError

    def _hash_key_follows(self, pos: int, *, lowercase: bool = False) -> bool:
        """True for ``word }``. Implemented by Lexer."""
        raise NotImplementedError

    def _try_quote_like(self) -> bool:
        """Classify a quote-like operator or a bare ``/pattern/``.

        An operator whose delimiter never closes is reported and left to
        the later rules (it ends up as a bareword).
        """
        source = self._source
        pos = self._pos
        state = self._state

        if source[pos] == "/":
            if not state.regex:
                return False
            return self._emit_quote_like(TokenType.MATCH_REGEX, MATCH_FLAGS, 1, pos)

        if not is_word_char(source[pos]):
            return False
        name_end = self._word_end(pos)
        name = source[pos:name_end]
        if name not in QUOTE_LIKE_OPERATORS:
            return False

        # Hash keys: (s => 1), $h{y}, $obj->q
        if self._fat_comma_follows(name_end):
            return False
        if state.flat and self._hash_key_follows(pos, lowercase=True):
            return False
        if self._after_dereference():
            return False

        delim_pos = self._find_delimiter(name_end)
        if delim_pos is None:
            return False

        token_type, flags, spans = _QUOTE_LIKE[name]
        return self._emit_quote_like(token_type, flags, spans, delim_pos)

    def _emit_quote_like(
        self, token_type: TokenType, flags: frozenset[str], spans: int, delim_pos: int
    ) -> bool:
        source = self._source
        max_depth = self._config.max_nesting_depth

        end, warning = match_balanced(source, delim_pos, max_depth=max_depth)
        if end is None:
            self._add_warning(warning)
            return False

        if spans == 2:
            if source[delim_pos] in PAIRED_DELIMITERS:
                # s{...}{...}: the second part brings its own delimiter
                second = self._find_delimiter(end)
                if second is None:
                    self._warn(
                        WarningKind.UNTERMINATED,
                        "missing replacement part",
                        delim_pos,
                    )
                    return False
            else:
                # s/.../.../: the middle delimiter opens the second part
                second = end - 1
            end, warning = match_balanced(source, second, max_depth=max_depth)
            if end is None:
                self._add_warning(warning)
                return False

        end = match_modifiers(source, end, flags)
        self._emit(token_type, end)
        self._state.regex = False
        self._state.canpod = False
        return True

    def _find_delimiter(self, pos: int) -> int | None:
        """Skip whitespace and comments after an operator name.

        Returns:
            Offset of the delimiter, or None if none can start there.
        """
        source = self._source
        source_len = self._source_len
        while pos < source_len and source[pos].isspace():
            pos += 1
        # Comments count only when whitespace precedes them: q#...# is a delimiter
        while pos < source_len and source[pos] == "#" and source[pos - 1].isspace():
            newline = source.find("\n", pos)
            if newline == -1:
                return None
            pos = newline
            while pos < source_len and source[pos].isspace():
                pos += 1

        if pos >= source_len:
            return None
        if source[pos - 1].isspace():
            return pos
        if is_word_char(source[pos]):
            return None
        return pos

    def _fat_comma_follows(self, pos: int) -> bool:
        """True if ``\\h*=>`` follows pos."""
        source = self._source
        source_len = self._source_len
        while pos < source_len and source[pos] in H_SPACE:
            pos += 1
        return source.startswith("=>", pos)

    def _try_string(self) -> bool:
        """Classify ``"..."``, ``'...'`` and backtick strings.

        An unterminated string is reported and its opening quote skipped.
        """
        source = self._source
        pos = self._pos
        token_type = _STRING_TYPES.get(source[pos])
        if token_type is None:
            return False

        end, warning = match_balanced(source, pos)
        if end is None:
            self._add_warning(warning)
            self._skip_to(pos + 1)
            return True

        self._emit(token_type, end)
        state = self._state
        state.regex = False
        state.canpod = False
        state.flat = False
        return True

    def _try_readline(self) -> bool:
        """Classify ``<FH>``, ``<$fh>`` and ``<*.c>`` where an operand is expected."""
        source = self._source
        pos = self._pos
        state = self._state
        if not state.regex or source[pos] != "<":
            return False

        end, _ = match_balanced(source, pos, max_depth=self._config.max_nesting_depth)
        if end is None:
            # Not a readline after all; the operator rules take it
            return False

        self._emit(TokenType.READLINE, end)
        state.regex = False
        state.canpod = False
        return True
