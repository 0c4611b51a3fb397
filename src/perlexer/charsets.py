"""Character sets and word tables for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Operator tuples are ordered longest-first so that the first prefix match
is also the longest one.

Usage:
    from perlexer.charsets import KEYWORDS, is_word_char

    if word in KEYWORDS:  # O(1) lookup
        ...
"""

# Horizontal whitespace (Perl \h)
H_SPACE: frozenset[str] = frozenset(
    " \t\xa0\u1680\u180e\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u202f\u205f\u3000"
)

# Vertical whitespace (Perl \v)
V_SPACE: frozenset[str] = frozenset("\n\x0b\x0c\r\x85\u2028\u2029")

SIGILS: frozenset[str] = frozenset("$@%*")

# Paired delimiters: opener -> closer
PAIRED_DELIMITERS: dict[str, str] = {
    "<": ">",
    "(": ")",
    "{": "}",
    "[": "]",
}

# One-character punctuation variables: $_ is a word, these are not
SPECIAL_VAR_NAMES: frozenset[str] = frozenset("\\|+/~!@$%^&*()}<>:;\"`'?=-[].#,")

# Letters accepted after "-" for file test operators (-e, -f, -d, ...)
FILE_TEST_LETTERS: frozenset[str] = frozenset("ABCMORSTWXbcdefgkloprstuwxz")

# Trailing modifier letters per quote-like operator
SUBSTITUTION_FLAGS: frozenset[str] = frozenset("msixpogcerdual")
MATCH_FLAGS: frozenset[str] = frozenset("msixpogcdual")
COMPILED_REGEX_FLAGS: frozenset[str] = frozenset("msixpodual")
TRANSLATION_FLAGS: frozenset[str] = frozenset("rcds")

QUOTE_LIKE_OPERATORS: frozenset[str] = frozenset(
    {"s", "tr", "y", "m", "qr", "q", "qq", "qw", "qx"}
)

SPECIAL_FILEHANDLES: frozenset[str] = frozenset({"STDIN", "STDOUT", "STDERR"})

DATA_MARKERS: frozenset[str] = frozenset({"__END__", "__DATA__"})
SPECIAL_TOKENS: frozenset[str] = frozenset(
    {"__FILE__", "__LINE__", "__PACKAGE__", "__SUB__"}
)

# Compound assignments; plain "=" is handled separately (it must not
# swallow "==", "=~" or "=>").
ASSIGNMENT_OPERATORS: tuple[str, ...] = (
    "**=",
    "&&=",
    "||=",
    "//=",
    "<<=",
    ">>=",
    "+=",
    "-=",
    "*=",
    "/=",
    ".=",
    "%=",
    "^=",
    "&=",
    "|=",
)

OPERATORS: tuple[str, ...] = (
    "<=>",
    "...",
    "**",
    "++",
    "--",
    "=~",
    "!~",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "//",
    "..",
    "<<",
    ">>",
    "~~",
    "\\",
    "?",
    "~",
    ":",
    "!",
    "%",
    "^",
    "&",
    "*",
    "+",
    "-",
    "=",
    "|",
    "/",
    ".",
    "<",
    ">",
)

# Perl builtins, named operators and block keywords
KEYWORDS: frozenset[str] = frozenset(
    """
    abs accept alarm and atan2
    binmode bind bless break
    caller chdir chmod chomp chown chop chr chroot close closedir cmp connect
    continue cos crypt
    dbmclose dbmopen default defined delete die dump do
    each elsif else endgrent endhostent endnetent endprotoent endpwent
    endservent eof eval exec exists exit exp eq
    fc fcntl fileno flock for foreach format formline fork
    ge getc getgrent getgrgid getgrnam gethostbyaddr gethostbyname gethostent
    getlogin getnetbyaddr getnetbyname getnetent getpeername getpgrp getppid
    getpriority getprotobyname getprotobynumber getprotoent getpwent getpwnam
    getpwuid getservbyname getservbyport getservent getsockname getsockopt
    given glob gmtime goto grep gt
    hex
    import index int ioctl isa if
    join
    keys kill
    last lc lcfirst le length link listen local localtime lock log lstat lt
    map mkdir msgctl msgget msgrcv msgsnd my
    ne next no not
    oct open opendir or ord our
    pack package pipe pop pos print printf prototype push
    quotemeta
    rand read readdir readline readlink readpipe recv redo rename require
    reset return reverse rewinddir ref rindex rmdir
    say scalar seek seekdir select semctl semget semop send setgrent
    sethostent setnetent setpgrp setpriority setprotoent setpwent setservent
    setsockopt shift shmctl shmget shmread shmwrite shutdown sin sleep socket
    socketpair sort splice split sprintf sqrt srand stat state study sub
    substr symlink syscall sysopen sysread sysseek system syswrite
    tell telldir tie tied time times truncate
    uc ucfirst umask undef unless unlink unpack unshift untie until use utime
    values vec
    wait waitpid wantarray warn when while write
    xor
    BEGIN END INIT CHECK
    """.split()
)


def is_word_char(char: str) -> bool:
    """Check if character matches Perl's \\w (letters, digits, underscore).

    The empty string (end of input) is not a word character.
    """
    return char == "_" or char.isalnum()


def is_digit(char: str) -> bool:
    """Check for an ASCII digit.

    str.isdigit accepts superscripts and other non-ASCII digits, which Perl
    number literals do not.
    """
    return "0" <= char <= "9" and len(char) == 1


def is_other_space(char: str) -> bool:
    """Whitespace that is neither horizontal nor vertical (e.g. \\x1c)."""
    return char.isspace() and char not in H_SPACE and char not in V_SPACE
