"""Canonicalizer adapter: re-serialize Perl through B::Deparse.

Runs ``perl -MO=Deparse -T -`` as a child process with the program on
stdin and returns the deparsed program. Stdin has no argument-length
limit, so large files deparse too. The tokenizer never calls this; the
analysis pipeline does, and skips the input when it fails.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass

from perlexer.errors import CanonicalizerError
from perlexer.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PERL = "perl"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True, slots=True)
class Canonicalizer:
    """Invokes the external deparser.

    Attributes:
        perl: Perl interpreter to run (name on PATH or a path)
        timeout: Seconds to wait for the child before giving up

    """

    perl: str = DEFAULT_PERL
    timeout: float = DEFAULT_TIMEOUT

    def command(self) -> list[str]:
        """Argument vector for deparsing a program read from stdin."""
        return [self.perl, "-MO=Deparse", "-T", "-"]

    def canonicalize(self, code: str) -> str:
        """Return the deparsed form of code.

        Raises:
            CanonicalizerError: the interpreter is missing, times out, or
                exits with a non-zero status
        """
        logger.debug("Deparsing %d characters with %s", len(code), self.perl)
        try:
            result = subprocess.run(
                self.command(),
                input=code.encode("utf-8"),
                capture_output=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise CanonicalizerError(f"perl interpreter not found: {self.perl}") from None
        except subprocess.TimeoutExpired:
            raise CanonicalizerError(
                f"B::Deparse timed out after {self.timeout}s"
            ) from None
        except OSError as exc:
            raise CanonicalizerError(f"cannot run {self.perl}: {exc}") from exc

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            msg = f"B::Deparse failed with code: {result.returncode}"
            if stderr:
                msg += f": {stderr}"
            raise CanonicalizerError(msg, returncode=result.returncode, stderr=stderr)

        return result.stdout.decode("utf-8", errors="replace")
