"""perlexer: a context-sensitive Perl tokenizer and code-style analyzer.

Tokenizes Perl source into labeled spans (sigils, quote-like literals,
heredocs, POD, formats, ...) and scores how far a program's token
structure moves under canonicalization.

Usage:
    >>> from perlexer import tokenize
    >>> stream, warnings = tokenize("my $x = 1;\\n")
    >>> [t.type.value for t in stream]
    ['keyword', 'horizontal_space', 'scalar_sign', 'var_name', 'horizontal_space', 'assignment_operator', 'horizontal_space', 'number', 'end_of_statement', 'vertical_space']

"""

from perlexer.classify import (
    identify,
    ignored_types,
    lcs_length,
    obfuscation_score,
    verdict,
)
from perlexer.config import (
    LexerConfig,
    get_lexer_config,
    lexer_config_context,
    reset_lexer_config,
    set_lexer_config,
)
from perlexer.errors import (
    CanonicalizerError,
    EmptyStreamError,
    LexWarning,
    PerlexerError,
    WarningKind,
)
from perlexer.lexer import Lexer, tokenize
from perlexer.location import SourceLocation
from perlexer.stream import TokenStream
from perlexer.tokens import Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "CanonicalizerError",
    "EmptyStreamError",
    "LexWarning",
    "Lexer",
    "LexerConfig",
    "PerlexerError",
    "SourceLocation",
    "Token",
    "TokenStream",
    "TokenType",
    "WarningKind",
    "__version__",
    "get_lexer_config",
    "identify",
    "ignored_types",
    "lcs_length",
    "lexer_config_context",
    "obfuscation_score",
    "reset_lexer_config",
    "set_lexer_config",
    "tokenize",
    "verdict",
]
