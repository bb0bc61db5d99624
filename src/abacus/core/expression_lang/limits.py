"""Nesting bounds shared by the parser and evaluator."""

from __future__ import annotations

import sys

# Parenthesis, negation, and power levels the parser accepts
MAX_NESTING_DEPTH = 1000

# One nesting level costs at most four parser frames, plus headroom for the caller
RECURSION_LIMIT = 1000 + MAX_NESTING_DEPTH * 6


def ensure_recursion_limit(limit: int = RECURSION_LIMIT) -> None:
    """Raise the interpreter recursion limit to at least ``limit``.

    Never lowers it, so concurrent callers cannot undo each other.
    """
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)
