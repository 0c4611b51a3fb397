"""Shared fixtures: stand-in perl interpreters for canonicalizer tests."""

import os
import sys
from pathlib import Path

import pytest


def _script(tmp_path: Path, name: str, body: str) -> str:
    path = tmp_path / name
    path.write_text("#!/bin/sh\n" + body)
    os.chmod(path, 0o755)
    return str(path)


@pytest.fixture
def echo_perl(tmp_path: Path) -> str:
    """A 'perl' that prints back the program read from stdin."""
    if sys.platform == "win32":
        pytest.skip("needs a POSIX shell")
    return _script(tmp_path, "echo-perl", "cat\n")


@pytest.fixture
def failing_perl(tmp_path: Path) -> str:
    """A 'perl' that rejects every program."""
    if sys.platform == "win32":
        pytest.skip("needs a POSIX shell")
    return _script(tmp_path, "bad-perl", 'echo "syntax error at -e line 1" >&2\nexit 255\n')


@pytest.fixture
def slow_perl(tmp_path: Path) -> str:
    """A 'perl' that never finishes in time."""
    if sys.platform == "win32":
        pytest.skip("needs a POSIX shell")
    return _script(tmp_path, "slow-perl", "exec sleep 5\n")


@pytest.fixture
def rewriting_perl(tmp_path: Path) -> str:
    """A 'perl' whose canonical form of anything is one fixed program."""
    if sys.platform == "win32":
        pytest.skip("needs a POSIX shell")
    return _script(
        tmp_path,
        "rewrite-perl",
        "printf '%s\\n' 'my $x = 1;' 'print $x;' 'foo($x, 2, 3);'\n",
    )
