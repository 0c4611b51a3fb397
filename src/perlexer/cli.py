"""Command-line interface for perlexer.

Scores each Perl file by comparing its token structure with its
B::Deparse canonical form, or dumps its tokens as JSON (``--tokens``).
"""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from perlexer.analysis import analyze_source
from perlexer.canonical import DEFAULT_PERL, DEFAULT_TIMEOUT, Canonicalizer
from perlexer.classify import MAX_STRICTNESS
from perlexer.config import LexerConfig, lexer_config_context
from perlexer.errors import CanonicalizerError, EmptyStreamError, LexWarning
from perlexer.lexer import tokenize
from perlexer.serialization import to_json
from perlexer.utils.logger import configure_cli_logging, get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = "perlexer.toml"
DEFAULT_STRICTNESS = 1


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    files: list[Path]
    strictness: int
    perl: str
    timeout: float
    tokens: bool
    debug: bool
    lexer_config: LexerConfig = field(default_factory=LexerConfig)


def _strictness(value: str) -> int:
    try:
        level = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid strictness level: {value!r}") from None
    if level < 0:
        raise argparse.ArgumentTypeError(f"strictness must be >= 0, got {level}")
    return level


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="perlexer",
        description="Analyze Perl code and see whether it was written by a true Perl hacker",
        epilog=(
            "strictness levels: >=1 ignores strings, POD, comments, spaces and "
            "semicolons; >=2 round parentheses; >=3 heredocs and q/qq/qw/qx "
            f"strings; >={MAX_STRICTNESS} hex and binary numbers; 0 ignores nothing"
        ),
    )
    p.add_argument("files", nargs="+", metavar="FILE", help="Perl files to analyze")
    p.add_argument(
        "--strict",
        type=_strictness,
        default=None,
        metavar="N",
        help=f"Strictness level (default: {DEFAULT_STRICTNESS})",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_FILENAME})",
    )
    p.add_argument(
        "--perl",
        default=None,
        metavar="PATH",
        help=f"Perl interpreter used for B::Deparse (default: {DEFAULT_PERL})",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECS",
        help=f"Deparse timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    p.add_argument(
        "--tokens",
        action="store_true",
        help="Print the tokens of each file as JSON instead of scoring it",
    )
    p.add_argument("--debug", action="store_true", help="Log lexer details to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace, search_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.

    Raises:
        ValueError: a config value has the wrong type or range
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir if search_dir is not None else Path.cwd())

    strictness = DEFAULT_STRICTNESS
    cfg_strict = config.get("strict")
    if cfg_strict is not None:
        if not isinstance(cfg_strict, int) or isinstance(cfg_strict, bool) or cfg_strict < 0:
            raise ValueError(f"'strict' must be a non-negative integer, got {cfg_strict!r}")
        strictness = cfg_strict
    if args.strict is not None:
        strictness = args.strict

    perl = DEFAULT_PERL
    cfg_perl = config.get("perl")
    if isinstance(cfg_perl, str):
        perl = cfg_perl
    if args.perl is not None:
        perl = args.perl

    timeout = DEFAULT_TIMEOUT
    cfg_timeout = config.get("timeout")
    if isinstance(cfg_timeout, (int, float)) and not isinstance(cfg_timeout, bool):
        timeout = float(cfg_timeout)
    if args.timeout is not None:
        timeout = args.timeout

    lexer_config = LexerConfig()
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        lexer_config = LexerConfig.from_dict(cfg_lexer)

    return CliOptions(
        files=[Path(f) for f in args.files],
        strictness=strictness,
        perl=perl,
        timeout=timeout,
        tokens=args.tokens,
        debug=args.debug,
        lexer_config=lexer_config,
    )


def _log_warnings(warnings: list[LexWarning] | tuple[LexWarning, ...]) -> None:
    for warning in warnings:
        logger.warning("%s", warning)


def dump_tokens(path: Path, source: str) -> None:
    """Print the JSON token dump of one file on stdout."""
    stream, warnings = tokenize(source, source_file=str(path))
    _log_warnings(warnings)
    print(to_json(stream, warnings=warnings, source_file=str(path), indent=2))


def analyze_file(path: Path, options: CliOptions, canonicalizer: Canonicalizer) -> bool:
    """Analyze one file, printing its verdict. Returns False if it was skipped."""
    print(f"=> Analyzing: {path}", file=sys.stderr)

    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("cannot read %s: %s", path, exc)
        return False

    if options.tokens:
        dump_tokens(path, source)
        return True

    try:
        result = analyze_source(
            source,
            strictness=options.strictness,
            canonicalizer=canonicalizer,
            source_file=str(path),
        )
    except CanonicalizerError as exc:
        logger.error("%s", exc)
        return False
    except EmptyStreamError:
        print("This script seems to be empty! Skipping...", file=sys.stderr)
        return False

    _log_warnings(result.warnings)
    print(result.verdict)
    return True


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (ValueError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    configure_cli_logging(debug=options.debug)
    canonicalizer = Canonicalizer(perl=options.perl, timeout=options.timeout)

    status = 0
    with lexer_config_context(options.lexer_config):
        for path in options.files:
            if not analyze_file(path, options, canonicalizer):
                status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
