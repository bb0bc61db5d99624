"""
ABACUS formula language.

Tokenizer, parser, and evaluator for arithmetic formulas with +, -, *, /,
^, unary minus, postfix factorial, and parentheses.

Usage:
    from abacus.core.expression_lang import evaluate, parse_expr

    expr = parse_expr("(3*3)!-1")
    result = evaluate(expr)
    # result == 362879.0
"""

from abacus.core.expression_lang.evaluator import evaluate
from abacus.core.expression_lang.parser import parse, parse_expr
from abacus.core.expression_lang.tokenizer import tokenize

__all__ = ["evaluate", "parse", "parse_expr", "tokenize"]
