"""
Error types for ABACUS formula lexing, parsing, and evaluation.

Every failure is an ``AbacusError``. Its ``category`` decides the display
prefix the host sees, so callers can collapse any failure into text with
``error.display()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorCategory(StrEnum):
    """Display prefixes for the error taxonomy."""

    SYNTAX = "Syntax error"
    MATH = "Math error"
    INTERNAL = "Internal error"
    CONFIG = "Configuration error"


class AbacusError(Exception):
    """Base exception for all ABACUS errors."""

    category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        detail: str = "",
        pos: int | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        self.detail = detail
        self.pos = pos
        self.context = context
        super().__init__(detail)

    def __str__(self) -> str:
        return self._format_message()

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.display()}"
        return self.display()

    def display(self) -> str:
        """Text shown to the user: the category, then the detail if any."""
        if self.detail:
            return f"{self.category}: {self.detail}"
        return str(self.category)


# ---------------------------------------------------------------------------
# Syntax errors
# ---------------------------------------------------------------------------


class FormulaSyntaxError(AbacusError):
    """
    Raised when formula text is malformed.

    Examples:
    - Malformed numerals (1.2.3)
    - Stray operators
    - Unmatched parentheses
    - Tokens left over after a complete expression
    """

    category = ErrorCategory.SYNTAX


class LexError(FormulaSyntaxError):
    """Raised by the tokenizer."""

    pass


class MalformedNumberError(LexError):
    pass


class UnexpectedCharacterError(LexError):
    """Raised for unrecognized characters when the tokenizer runs strict."""

    pass


class ParseError(FormulaSyntaxError):
    """Raised by the parser."""

    pass


class UnexpectedTokenError(ParseError):
    pass


class UnclosedParenthesisError(ParseError):
    pass


class TrailingInputError(ParseError):
    pass


class NestingTooDeepError(ParseError):
    """Raised when parentheses, negations, or powers nest past MAX_NESTING_DEPTH."""

    pass


# ---------------------------------------------------------------------------
# Evaluation errors
# ---------------------------------------------------------------------------


class MathError(AbacusError):
    """
    Raised when a value is a valid float but not valid for the operation.

    Examples:
    - Factorial of a non-integer
    - Factorial overflowing the checked accumulator
    """

    category = ErrorCategory.MATH


class InternalError(AbacusError):
    """
    Raised when the lexer/parser/evaluator contract is broken.

    These indicate a bug rather than bad user input.
    """

    category = ErrorCategory.INTERNAL


class IndexOutOfRangeError(InternalError):
    pass


class OperatorMismatchError(InternalError):
    pass


class ConfigError(AbacusError):
    """Raised when abacus.toml cannot be read or holds invalid values."""

    category = ErrorCategory.CONFIG


@dataclass
class ErrorContext:
    """
    Source location of an error inside a formula.

    Attributes:
        source: The formula text being processed
        column: Column number (1-indexed)
    """

    source: str
    column: int

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like "column 3" followed by the formula with
            a marker under the failing column.
        """
        return f"column {self.column}\n{self._format_snippet()}"

    def _format_snippet(self) -> str:
        prefix = "    | "
        marker_pos = len(prefix) + self.column - 1
        return f"{prefix}{self.source}\n" + " " * marker_pos + "^^^"


def attach_context(error: AbacusError, source: str) -> AbacusError:
    """
    Attach an ErrorContext to an error that knows its source offset.

    Errors without a position, or that already carry context, are returned
    unchanged.
    """
    if error.pos is not None and error.context is None:
        error.context = ErrorContext(source=source, column=error.pos + 1)
    return error
