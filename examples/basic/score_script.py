"""Score a Perl file against its B::Deparse canonical form.

Requires a perl interpreter on PATH.

Usage:
    python examples/basic/score_script.py script.pl [strictness]
"""

import sys
from pathlib import Path

from perlexer.analysis import analyze_source
from perlexer.errors import CanonicalizerError, EmptyStreamError

path = Path(sys.argv[1])
strictness = int(sys.argv[2]) if len(sys.argv) > 2 else 1

try:
    result = analyze_source(
        path.read_text(encoding="utf-8"),
        strictness=strictness,
        source_file=str(path),
    )
except (CanonicalizerError, EmptyStreamError) as exc:
    sys.exit(f"{path}: {exc}")

print(f"{len(result.types)} kinds as written, {len(result.canonical_types)} after deparse")
for warning in result.warnings:
    print("warning:", warning)
print(result.verdict)
