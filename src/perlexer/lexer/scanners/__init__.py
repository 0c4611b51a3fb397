"""Multi-line construct scanners for the perlexer lexer.

Each scanner is a mixin that consumes one kind of block whose extent is
decided by a later line: POD, heredoc bodies and format bodies.
"""

from __future__ import annotations

from perlexer.lexer.scanners.format import FormatScannerMixin
from perlexer.lexer.scanners.heredoc import HeredocScannerMixin
from perlexer.lexer.scanners.pod import PodScannerMixin

__all__ = [
    "FormatScannerMixin",
    "HeredocScannerMixin",
    "PodScannerMixin",
]
