"""Benchmark perlexer by Perl construct.

Times tokenization of generated programs dominated by one construct
(heredocs, quote-likes, POD, ...) to show which rules are slowest.

Run with:
    python benchmarks/benchmark_by_construct.py
"""

import time
from dataclasses import dataclass


@dataclass
class ConstructTiming:
    """Timing data for one construct."""

    construct: str
    chars: int
    avg_time_us: float

    @property
    def mb_per_s(self) -> float:
        return self.chars / self.avg_time_us if self.avg_time_us else 0.0


def build_corpus(repeat: int = 200) -> dict[str, str]:
    """One generated program per construct, each ``repeat`` statements long."""
    return {
        "statements": "my $x = $y + 1; print $x, \"\\n\";\n" * repeat,
        "regex": "$s =~ s{(\\w+)}{<$1>}g if $s =~ m/^\\s*#/x;\n" * repeat,
        "quote-like": "my @w = qw(a b c); my $q = qq{x {$y} z};\n" * repeat,
        "heredoc": "print <<A, <<B;\nalpha\nA\nbeta\nB\n" * repeat,
        "pod": "=pod\n\nSome documentation text.\n\n=cut\n1;\n" * repeat,
        "hash": "my %h = (print => 1, sort => 2); $h{key}{sub} = $r->{x};\n" * repeat,
        "numbers": "my @n = (0x1F, 0b101, 1_000, 3.14e-2, v5.36, 1..10);\n" * repeat,
        "nesting": "q" + "{" * repeat + "}" * repeat + ";\n",
    }


def benchmark_construct(source: str, iterations: int = 20) -> float:
    """Average tokenize() time for source in microseconds."""
    from perlexer import tokenize

    # Warmup
    tokenize(source)

    start = time.perf_counter()
    for _ in range(iterations):
        tokenize(source)
    elapsed = time.perf_counter() - start
    return (elapsed / iterations) * 1_000_000


def main() -> None:
    """Run construct-by-construct benchmarks."""
    import sys

    print("perlexer Construct Benchmark")
    print("=" * 60)
    print(f"Python {sys.version.split()[0]}\n")

    results: list[ConstructTiming] = []
    for name, source in build_corpus().items():
        avg = benchmark_construct(source)
        results.append(ConstructTiming(construct=name, chars=len(source), avg_time_us=avg))
        print(f"  {name:12} {avg:10.1f}µs ({len(source):6} chars)")

    results.sort(key=lambda r: r.mb_per_s)

    print("\n" + "=" * 60)
    print("RESULTS: Sorted by throughput (slowest first)")
    print("=" * 60)
    for r in results:
        print(f"{r.construct:12} {r.mb_per_s:8.2f} MB/s")


if __name__ == "__main__":
    main()
