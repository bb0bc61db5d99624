"""
Recursive descent parser for the ABACUS formula language.

Grammar (precedence low to high):
    start       → expression EOF
    expression  → term (("+"|"-") term)*
    term        → factor (("*"|"/") factor)*
    factor      → primary ("^" factor)?
    primary     → (NUMBER | "(" expression ")" | "-" factor) "!"*

Power is right-associative (2^3^2 is 2^(3^2)). Negation takes a whole
factor, so -2^2 is -(2^2). Factorial is postfix and stackable, binding
tighter than every binary operator (3!! is (3!)!).
"""

from __future__ import annotations

import logging

from abacus.core.errors import (
    AbacusError,
    IndexOutOfRangeError,
    InternalError,
    NestingTooDeepError,
    TrailingInputError,
    UnclosedParenthesisError,
    UnexpectedTokenError,
    attach_context,
)
from abacus.core.expression_lang.limits import MAX_NESTING_DEPTH, ensure_recursion_limit
from abacus.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from abacus.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    NumberLiteral,
    UnaryExpr,
    UnaryOp,
)

logger = logging.getLogger(__name__)

_ADDITIVE_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MULTIPLICATIVE_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.EOF:
        return "end of input"
    if tok.kind == TokenKind.NUMBER:
        return f"number {tok.value!r}"
    return repr(tok.value)


class _Parser:
    """Recursive descent parser over a token list and a cursor."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        if self.pos >= len(self.tokens):
            raise IndexOutOfRangeError(
                f"token index {self.pos} out of range ({len(self.tokens)} tokens)"
            )
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.current
        self.pos += 1
        return tok

    # -- Grammar rules --

    def parse_start(self) -> Expr:
        """expression EOF"""
        expr = self.parse_expression()
        tok = self.current
        if tok.kind != TokenKind.EOF:
            raise TrailingInputError(
                f"unexpected {_describe(tok)} after expression", pos=tok.pos
            )
        return expr

    def parse_expression(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.current.kind in _ADDITIVE_OPS:
            op = _ADDITIVE_OPS[self.advance().kind]
            right = self.parse_term()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """factor (('*' | '/') factor)*"""
        left = self.parse_factor()
        while self.current.kind in _MULTIPLICATIVE_OPS:
            op = _MULTIPLICATIVE_OPS[self.advance().kind]
            right = self.parse_factor()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """primary ('^' factor)?"""
        # Every nested '(', '-' and '^' passes through here
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise NestingTooDeepError(
                f"expression nested deeper than {MAX_NESTING_DEPTH} levels",
                pos=self.current.pos,
            )
        try:
            base = self.parse_primary()
            if self.current.kind == TokenKind.CARET:
                self.advance()
                exponent = self.parse_factor()
                return BinaryExpr(op=BinaryOp.POW, left=base, right=exponent)
            return base
        finally:
            self.depth -= 1

    def parse_primary(self) -> Expr:
        """(NUMBER | '(' expression ')' | '-' factor) '!'*"""
        tok = self.current
        expr: Expr

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            expr = NumberLiteral(value=tok.value)
        elif tok.kind == TokenKind.LPAREN:
            self.advance()
            expr = self.parse_expression()
            closing = self.current
            if closing.kind != TokenKind.RPAREN:
                raise UnclosedParenthesisError(
                    f"expected ')' but found {_describe(closing)}", pos=closing.pos
                )
            self.advance()
        elif tok.kind == TokenKind.MINUS:
            self.advance()
            expr = UnaryExpr(op=UnaryOp.NEG, operand=self.parse_factor())
        else:
            raise UnexpectedTokenError(f"unexpected {_describe(tok)}", pos=tok.pos)

        while self.current.kind == TokenKind.BANG:
            self.advance()
            expr = UnaryExpr(op=UnaryOp.FACT, operand=expr)
        return expr


def parse(tokens: list[Token]) -> Expr:
    """Parse a token list into an AST.

    The list must end with an EOF token; every token has to be consumed.

    Raises:
        ParseError: If the tokens do not form a single expression, or nest
            deeper than MAX_NESTING_DEPTH.
        InternalError: If the token list is not EOF-terminated, or the
            interpreter still runs out of stack.
    """
    ensure_recursion_limit()
    try:
        return _Parser(tokens).parse_start()
    except RecursionError as e:
        raise InternalError("expression nested too deeply") from e


def parse_expr(source: str, *, strict: bool = False) -> Expr:
    """Parse a formula string into an AST.

    Args:
        source: Formula text (e.g., "(3*3)!-1")
        strict: Reject unrecognized characters instead of dropping them

    Returns:
        Parsed expression AST.

    Raises:
        FormulaSyntaxError: If the formula is malformed. Errors raised at a
            known offset carry an ErrorContext pointing into ``source``.
        InternalError: If parsing breaks its own invariants.
    """
    try:
        tokens = tokenize(source, strict=strict)
        expr = parse(tokens)
    except AbacusError as e:
        attach_context(e, source)
        raise

    logger.debug("Parsed %r as %s", source, expr)
    return expr
