"""
ABACUS - arithmetic formula interpreter.

Turns formula text such as ``"(3*3)!-1"`` into a number, or into a
categorized error message for display.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.calculator import evaluate_text, run_self_test
from .core.errors import AbacusError, FormulaSyntaxError, InternalError, MathError

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "AbacusError",
    "FormulaSyntaxError",
    "InternalError",
    "MathError",
    "evaluate_text",
    "run_self_test",
]
