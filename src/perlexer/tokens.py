"""Token and TokenType definitions for the perlexer tokenizer.

The lexer produces a stream of Token objects that the classifier consumes.
Each Token has a type, the raw source text it covers, and its offsets.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.
Most tokens are only ever compared by type, so their location is never built.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perlexer.location import SourceLocation


class TokenType(Enum):
    """Token kinds produced by the lexer.

    Values are the kind names used in JSON dumps and configuration.
    Organized by category:
    - Whitespace, comments and documentation
    - Variables (sigils and names)
    - Brackets
    - Strings, quote-like operators and regexes
    - Heredocs and formats
    - Numbers
    - Words (keywords, barewords, subroutine names)
    - Operators and punctuation

    """

    # Whitespace, comments, documentation
    HORIZONTAL_SPACE = "horizontal_space"
    VERTICAL_SPACE = "vertical_space"
    OTHER_SPACE = "other_space"
    COMMENT = "comment"  # # to end of line
    POD = "pod"  # =head1 ... =cut
    DATA = "DATA"  # __END__ / __DATA__ to end of input

    # Variables
    SCALAR_SIGN = "scalar_sign"  # $
    ARRAY_SIGN = "array_sign"  # @
    HASH_SIGN = "hash_sign"  # %
    GLOB_SIGN = "glob_sign"  # *
    VAR_NAME = "var_name"  # name after a sigil
    SPECIAL_VAR_NAME = "special_var_name"  # $_ $$ $^W $; ...

    # Brackets
    PARENTHESE_BEG = "parenthese_beg"
    PARENTHESE_END = "parenthese_end"
    CBRACKET_BEG = "cbracket_beg"
    CBRACKET_END = "cbracket_end"
    BRACKET_BEG = "bracket_beg"
    BRACKET_END = "bracket_end"

    # Strings and quote-like operators
    SINGLE_QUOTED_STRING = "single_quoted_string"
    DOUBLE_QUOTED_STRING = "double_quoted_string"
    BACKTICK = "backtick"
    Q_STRING = "q_string"
    QQ_STRING = "qq_string"
    QW_STRING = "qw_string"
    QX_STRING = "qx_string"
    COMPILED_REGEX = "compiled_regex"  # qr//
    MATCH_REGEX = "match_regex"  # m// or //
    SUBSTITUTION = "substitution"  # s///
    TRANSLATION = "translation"  # tr/// or y///
    READLINE = "readline"  # <FH> or <*.glob>

    # Multi-line constructs
    HEREDOC_BEG = "heredoc_beg"  # <<"EOT"
    HEREDOC = "heredoc"  # body through the terminator line
    FORMAT = "format"  # format body through the lone dot

    # Numbers
    NUMBER = "number"
    HEX_NUMBER = "hex_number"
    BINARY_NUMBER = "binary_number"
    V_STRING = "v_string"  # v1.2.3 or 1.2.3

    # Words
    KEYWORD = "keyword"
    UNQUOTED_STRING = "unquoted_string"  # bareword
    SUB_NAME = "sub_name"
    SUB_PROTO = "sub_proto"  # ($$;@)
    FILE_TEST = "file_test"  # -e -f -d ...
    SPECIAL_FH = "special_fh"  # STDIN STDOUT STDERR
    SPECIAL_TOKEN = "special_token"  # __FILE__ __LINE__ ...

    # Operators and punctuation
    OPERATOR = "operator"
    ASSIGNMENT_OPERATOR = "assignment_operator"
    DEREFERENCE_OPERATOR = "dereference_operator"  # ->
    END_OF_STATEMENT = "end_of_statement"  # ;
    COMMA_OPERATOR = "comma_operator"  # ,
    FAT_COMMA_OPERATOR = "fat_comma_operator"  # =>


# Kinds that carry no syntax: skipped when looking back for the previous token
TRIVIA_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.HORIZONTAL_SPACE,
        TokenType.VERTICAL_SPACE,
        TokenType.OTHER_SPACE,
        TokenType.COMMENT,
    }
)

# Word tokens that become plain strings when a fat comma follows
KEYWORD_LIKE_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.KEYWORD,
        TokenType.FILE_TEST,
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        value: The raw source text, always ``source[start:end]``
        start: Absolute start offset (code points)
        end: Absolute end offset (exclusive)
        _lineno: Start line number (1-indexed)
        _col: Start column (1-indexed)
        _end_lineno: End line number
        _end_col: End column
        _source_file: Optional source file path

    Performance:
        SourceLocation is created lazily on first access to `.location`.

    """

    type: TokenType
    value: str
    start: int
    end: int
    _lineno: int = 1
    _col: int = 1
    _end_lineno: int | None = None
    _end_col: int | None = None
    _source_file: str | None = None
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from perlexer.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self.start,
            end_offset=self.end,
            end_lineno=self._end_lineno,
            end_col_offset=self._end_col,
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def retyped(self, token_type: TokenType) -> Token:
        """Return a copy of this token with a different type."""
        return Token(
            type=token_type,
            value=self.value,
            start=self.start,
            end=self.end,
            _lineno=self._lineno,
            _col=self._col,
            _end_lineno=self._end_lineno,
            _end_col=self._end_col,
            _source_file=self._source_file,
        )

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.value}, {val!r}, {self.start}:{self.end})"

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col
