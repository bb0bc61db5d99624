"""
Text boundary between ABACUS and its host.

The host hands over a formula and displays whatever text comes back, so
``evaluate_text`` is the one place where typed failures collapse into
display strings. ``run_self_test`` replays a fixed table of formulas
through that same boundary.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from abacus.core.errors import AbacusError
from abacus.core.expression_lang import evaluate, parse_expr
from abacus.core.strings import format_number

logger = logging.getLogger(__name__)

# Exact comparison; a positive value opts into math.isclose at that relative tolerance
DEFAULT_TOLERANCE = 0.0

SELF_TEST_CASES: tuple[tuple[str, float], ...] = (
    ("1+1", 2.0),
    ("1+2*2", 5.0),
    ("1+2*3^2", 19.0),
    ("3!", 6.0),
    ("5!", 120.0),
    ("3!!", 720.0),
    ("3*3!+1", 19.0),
    ("(3*3)!-1", 362879.0),
    ("-2*((1+3)*3)", -24.0),
    ("5/2", 2.5),
    ("1.1 + 9.6", 10.7),
)


@dataclass(frozen=True)
class SelfTestFailure:
    """A self-test case whose output did not match."""

    source: str
    expected: float
    output: str


def calculate(source: str, *, strict: bool = False) -> float:
    """Lex, parse, and evaluate a formula.

    Raises:
        AbacusError: On any syntax, math, or internal failure.
    """
    return evaluate(parse_expr(source, strict=strict))


def evaluate_text(source: str, *, strict: bool = False) -> str:
    """Evaluate a formula and return the display text.

    Returns the formatted number on success (e.g. "2.5", "120", "inf"),
    otherwise the error's display text (e.g. "Syntax error: ...",
    "Math error: overflow").
    """
    try:
        value = calculate(source, strict=strict)
    except AbacusError as e:
        logger.debug("Evaluation of %r failed: %s", source, e.display())
        return e.display()
    return format_number(value)


def run_self_test(tolerance: float = DEFAULT_TOLERANCE) -> list[SelfTestFailure]:
    """Run SELF_TEST_CASES through evaluate_text.

    Each output is parsed back to a float and compared with the expected
    value. A zero tolerance demands equality; a positive one compares with
    ``math.isclose`` at that relative tolerance. Outputs that are not
    numbers count as failures.

    Returns:
        The mismatching cases; empty when everything passes.
    """
    failures: list[SelfTestFailure] = []
    for source, expected in SELF_TEST_CASES:
        output = evaluate_text(source)
        try:
            actual = float(output)
        except ValueError:
            failures.append(SelfTestFailure(source, expected, output))
            continue
        if tolerance == 0:
            matched = actual == expected
        else:
            matched = math.isclose(actual, expected, rel_tol=tolerance)
        if not matched:
            failures.append(SelfTestFailure(source, expected, output))

    logger.info(
        "Self-test: %d/%d cases passed",
        len(SELF_TEST_CASES) - len(failures),
        len(SELF_TEST_CASES),
    )
    return failures
