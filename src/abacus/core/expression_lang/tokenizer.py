"""
Tokenizer for the ABACUS formula language.

Converts a formula string into a sequence of typed tokens ending in EOF.

Whitespace is not significant anywhere, not even between digits, so
``"1 2"`` lexes as the single number 12. Characters that are neither
whitespace, numeral characters, nor operators are dropped unless the
tokenizer runs strict.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum, auto

from abacus.core.errors import MalformedNumberError, UnexpectedCharacterError

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the formula language."""

    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    CARET = auto()
    BANG = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # End of input
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token from the formula tokenizer.

    ``value`` is the parsed float for NUMBER tokens and the source
    character for everything else.
    """

    kind: TokenKind
    value: float | str
    pos: int


# ASCII only; str.isdigit() also accepts superscripts that float() rejects
_NUMERAL_CHARS = frozenset("0123456789.")

_OPERATORS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "^": TokenKind.CARET,
    "!": TokenKind.BANG,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


def tokenize(source: str, *, strict: bool = False) -> list[Token]:
    """Tokenize a formula string into a list of tokens.

    Args:
        source: Formula text (e.g., "1 + 2 * 3^2")
        strict: Reject unrecognized characters instead of dropping them

    Returns:
        Tokens in source order, always terminated by an EOF token.

    Raises:
        MalformedNumberError: If a numeral does not parse as a float.
        UnexpectedCharacterError: If strict and a character is unrecognized.
    """
    tokens: list[Token] = []
    numeral: list[str] = []
    numeral_start = 0

    for i, c in enumerate(source):
        if c.isspace():
            continue

        if c in _NUMERAL_CHARS:
            if not numeral:
                numeral_start = i
            numeral.append(c)
            continue

        # Flush before classifying the character that ended the numeral
        if numeral:
            tokens.append(_read_number("".join(numeral), numeral_start))
            numeral.clear()

        kind = _OPERATORS.get(c)
        if kind is not None:
            tokens.append(Token(kind, c, i))
        elif strict:
            raise UnexpectedCharacterError(f"unexpected character {c!r}", pos=i)
        else:
            logger.debug("Dropping unrecognized character %r at %d", c, i)

    if numeral:
        tokens.append(_read_number("".join(numeral), numeral_start))

    tokens.append(Token(TokenKind.EOF, "", len(source)))
    logger.debug("Tokenized %r into %d tokens", source, len(tokens))
    return tokens


def _read_number(text: str, pos: int) -> Token:
    """Convert a buffered numeral into a NUMBER token."""
    try:
        value = float(text)
    except ValueError as e:
        raise MalformedNumberError(f"malformed number {text!r}", pos=pos) from e
    return Token(TokenKind.NUMBER, value, pos)
