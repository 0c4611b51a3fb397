"""Rule classifiers for the perlexer lexer.

Each classifier is a mixin providing one group of rules from the lexer's
priority table. A rule method returns True when it consumed input or
changed state, False to let the next rule try.
"""

from perlexer.lexer.classifiers.bracket import BracketClassifierMixin
from perlexer.lexer.classifiers.number import NumberClassifierMixin
from perlexer.lexer.classifiers.operator import OperatorClassifierMixin
from perlexer.lexer.classifiers.quotelike import QuoteLikeClassifierMixin
from perlexer.lexer.classifiers.variable import VariableClassifierMixin
from perlexer.lexer.classifiers.whitespace import WhitespaceClassifierMixin
from perlexer.lexer.classifiers.word import WordClassifierMixin

__all__ = [
    "BracketClassifierMixin",
    "NumberClassifierMixin",
    "OperatorClassifierMixin",
    "QuoteLikeClassifierMixin",
    "VariableClassifierMixin",
    "WhitespaceClassifierMixin",
    "WordClassifierMixin",
]
