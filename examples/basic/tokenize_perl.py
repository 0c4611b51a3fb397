"""Tokenize a Perl snippet and print each token with its location."""

from perlexer import tokenize

source = """\
my %h = (print => 1);
print <<EOT;
Hello, $h{print}!
EOT
"""

stream, warnings = tokenize(source, source_file="snippet.pl")
for token in stream:
    print(f"{token.location!s:16} {token.type.value:22} {token.value!r}")
for warning in warnings:
    print("warning:", warning)
