"""
ABACUS Intermediate Representation (IR) types.

The expression tree built by the parser and walked by the evaluator.
"""

from .expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    NumberLiteral,
    UnaryExpr,
    UnaryOp,
)

__all__ = [
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "NumberLiteral",
    "UnaryExpr",
    "UnaryOp",
]
