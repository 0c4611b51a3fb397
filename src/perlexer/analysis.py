"""Analysis pipeline: tokenize, canonicalize, tokenize again, score.

Usage:
    >>> from perlexer.analysis import analyze_source
    >>> result = analyze_source(code, strictness=1)
    >>> print(result.verdict)

"""

from __future__ import annotations

from dataclasses import dataclass

from perlexer.canonical import Canonicalizer
from perlexer.classify import identify, obfuscation_score, verdict
from perlexer.config import LexerConfig
from perlexer.errors import EmptyStreamError, LexWarning
from perlexer.lexer import tokenize
from perlexer.stream import TokenStream
from perlexer.tokens import TokenType
from perlexer.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Outcome of scoring one program.

    Attributes:
        source_file: File the program came from (optional)
        strictness: Strictness level used for filtering
        stream: Tokens of the program as written
        canonical_stream: Tokens of the canonicalized program
        types: Filtered kinds of stream
        canonical_types: Filtered kinds of canonical_stream
        score: Obfuscation score (0.0 for unchanged structure)
        warnings: Lexer warnings from the original program

    """

    source_file: str | None
    strictness: int
    stream: TokenStream
    canonical_stream: TokenStream
    types: tuple[TokenType, ...]
    canonical_types: tuple[TokenType, ...]
    score: float
    warnings: tuple[LexWarning, ...] = ()

    @property
    def verdict(self) -> str:
        """Human-readable line for the score."""
        return verdict(self.score)


def analyze_source(
    source: str,
    *,
    strictness: int = 1,
    canonicalizer: Canonicalizer | None = None,
    source_file: str | None = None,
    config: LexerConfig | None = None,
) -> AnalysisResult:
    """Score one Perl program against its canonical form.

    Raises:
        CanonicalizerError: the canonicalizer failed (skip this input)
        EmptyStreamError: nothing is left to compare after filtering
    """
    canonicalizer = canonicalizer if canonicalizer is not None else Canonicalizer()
    canonical_source = canonicalizer.canonicalize(source)

    stream, warnings = tokenize(source, source_file=source_file, config=config)
    canonical_stream, canonical_warnings = tokenize(canonical_source, config=config)
    if canonical_warnings:
        logger.debug("Canonical form produced %d lexer warnings", len(canonical_warnings))

    types = identify(stream, strictness)
    canonical_types = identify(canonical_stream, strictness)
    if not types or not canonical_types:
        raise EmptyStreamError("This script seems to be empty! Skipping...")

    score = obfuscation_score(types, canonical_types)
    logger.debug(
        "Scored %s: %d vs %d kinds -> %.2f",
        source_file or "<string>",
        len(types),
        len(canonical_types),
        score,
    )
    return AnalysisResult(
        source_file=source_file,
        strictness=strictness,
        stream=stream,
        canonical_stream=canonical_stream,
        types=types,
        canonical_types=canonical_types,
        score=score,
        warnings=tuple(warnings),
    )
