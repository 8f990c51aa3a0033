"""Recursion head-room for the recursive-descent parser and tree walker.

Both walk the program with ordinary Python recursion, several frames per
source-level nesting level or call, so the interpreter's default limit of
1000 frames is reached by modest, valid programs. `recursion_limit` raises
the limit for the duration of a parse or evaluation and restores it after.
"""

import sys
from contextlib import contextmanager
from typing import Iterator

MAX_RECURSION_DEPTH = 8000


@contextmanager
def recursion_limit(limit: int = MAX_RECURSION_DEPTH) -> Iterator[None]:
    """Temporarily raise `sys.getrecursionlimit()` to at least `limit`."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous, limit))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
