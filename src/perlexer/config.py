"""ContextVar-based lexer configuration for perlexer.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A Lexer reads the active config once at construction unless one is passed
explicitly.

Scoring strictness is not part of this config: it is passed
to the classifier as an explicit argument.

Usage:
    from perlexer.config import LexerConfig, lexer_config_context
    from perlexer.lexer import tokenize

    with lexer_config_context(LexerConfig(max_nesting_depth=64)):
        stream, warnings = tokenize(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

DEFAULT_MAX_NESTING_DEPTH = 512


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Immutable lexer configuration.

    Attributes:
        max_nesting_depth: Deepest nesting of one paired delimiter the
            delimiter matcher follows before giving up with a warning
        indented_heredocs: Recognize ``<<~EOT`` heredocs whose terminator
            line may be indented

    """

    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    indented_heredocs: bool = True

    def __post_init__(self) -> None:
        if self.max_nesting_depth < 1:
            raise ValueError(
                f"max_nesting_depth must be at least 1, got {self.max_nesting_depth}"
            )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "LexerConfig":
        """Create LexerConfig from dictionary.

        Only includes keys that are valid LexerConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = LexerConfig.from_dict({
            ...     "max_nesting_depth": 32,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.max_nesting_depth
            32

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LexerConfig = LexerConfig()

_lexer_config: ContextVar[LexerConfig] = ContextVar(
    "lexer_config",
    default=_DEFAULT_CONFIG,
)


def get_lexer_config() -> LexerConfig:
    """Get current lexer configuration (thread-local)."""
    return _lexer_config.get()


def set_lexer_config(config: LexerConfig) -> None:
    """Set lexer configuration for current context."""
    _lexer_config.set(config)


def reset_lexer_config() -> None:
    """Reset to default configuration."""
    _lexer_config.set(_DEFAULT_CONFIG)


@contextmanager
def lexer_config_context(config: LexerConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with lexer_config_context(LexerConfig(indented_heredocs=False)):
        ...     stream, warnings = tokenize("print <<~EOT;\\n  x\\n  EOT\\n")

    """
    previous = _lexer_config.get()
    _lexer_config.set(config)
    try:
        yield
    finally:
        _lexer_config.set(previous)


__all__ = [
    "DEFAULT_MAX_NESTING_DEPTH",
    "LexerConfig",
    "get_lexer_config",
    "lexer_config_context",
    "reset_lexer_config",
    "set_lexer_config",
]
