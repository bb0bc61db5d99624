"""
Expression evaluator for the ABACUS formula language.

Folds an expression AST bottom-up into a single float. Pure evaluation, no
I/O, no side effects. Does NOT use Python's eval().

Arithmetic follows IEEE 754: division by zero and out-of-domain powers
produce inf or NaN instead of raising. Only factorial can fail, and only
with a MathError.
"""

from __future__ import annotations

import logging
import math

from abacus.core.errors import InternalError, MathError, OperatorMismatchError
from abacus.core.expression_lang.limits import ensure_recursion_limit
from abacus.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    NumberLiteral,
    UnaryExpr,
    UnaryOp,
)

logger = logging.getLogger(__name__)

# Factorials are accumulated in a checked signed 128-bit range: 33! fits, 34! does not
FACTORIAL_LIMIT = 2**127 - 1


def evaluate(expr: Expr) -> float:
    """Evaluate an expression AST to a float.

    Args:
        expr: Parsed expression AST.

    Returns:
        The computed value, possibly inf or NaN.

    Raises:
        MathError: If a factorial operand is not an integer or overflows.
        InternalError: If the tree holds a node or operator the evaluator
            does not know, or is nested too deeply.
    """
    ensure_recursion_limit()
    try:
        return _interpret(expr)
    except RecursionError as e:
        raise InternalError("expression nested too deeply") from e


def _interpret(expr: Expr) -> float:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, NumberLiteral):
        return expr.value

    if isinstance(expr, BinaryExpr):
        return _interpret_binary(expr)

    if isinstance(expr, UnaryExpr):
        return _interpret_unary(expr)

    raise InternalError(f"unknown expression type: {type(expr).__name__}")


def _interpret_binary(expr: BinaryExpr) -> float:
    """Evaluate a binary expression, left operand first."""
    # UnaryOp.NEG compares equal to BinaryOp.SUB, so check the enum type
    if not isinstance(expr.op, BinaryOp):
        raise OperatorMismatchError(f"operator {expr.op!r} in a binary expression")

    left = _interpret(expr.left)
    right = _interpret(expr.right)

    if expr.op == BinaryOp.ADD:
        return left + right
    if expr.op == BinaryOp.SUB:
        return left - right
    if expr.op == BinaryOp.MUL:
        return left * right
    if expr.op == BinaryOp.DIV:
        return _divide(left, right)
    if expr.op == BinaryOp.POW:
        return _power(left, right)

    raise OperatorMismatchError(f"unknown binary op: {expr.op!r}")


def _interpret_unary(expr: UnaryExpr) -> float:
    """Evaluate a unary expression."""
    if not isinstance(expr.op, UnaryOp):
        raise OperatorMismatchError(f"operator {expr.op!r} in a unary expression")

    val = _interpret(expr.operand)
    if expr.op == UnaryOp.NEG:
        return -val
    if expr.op == UnaryOp.FACT:
        return factorial(val)

    raise OperatorMismatchError(f"unknown unary op: {expr.op!r}")


def _divide(left: float, right: float) -> float:
    """IEEE division: x/0 is a signed infinity and 0/0 is NaN."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and int(value) % 2 == 1


def _power(base: float, exponent: float) -> float:
    """IEEE pow: overflow gives a signed infinity, domain errors give NaN."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        negative = base < 0 and _is_odd_integer(exponent)
        return -math.inf if negative else math.inf
    except ValueError:
        # Zero to a negative power, or a negative base to a fractional power
        if base == 0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


def factorial(value: float) -> float:
    """Integer factorial of a float with checked overflow.

    Operands below 1 yield 1 (the product over an empty range).

    Raises:
        MathError: If ``value`` has a fractional part, is not finite, or the
            product leaves the 128-bit range.
    """
    if not math.isfinite(value) or value != math.trunc(value):
        raise MathError("factorial of non-integer")

    result = 1
    for i in range(1, int(value) + 1):
        if result > FACTORIAL_LIMIT // i:
            logger.debug("Factorial of %s overflows at step %d", value, i)
            raise MathError("overflow")
        result *= i
    return float(result)
