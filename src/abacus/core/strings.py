"""
String utility functions for ABACUS.

Provides the number-to-text conversion shared by the expression tree and
the calculator boundary.
"""

from __future__ import annotations

import math
from decimal import Decimal


def format_number(value: float) -> str:
    """
    Render a float as plain decimal text.

    Uses the shortest digits that round-trip through ``float()``, never an
    exponent, and drops the fractional part of integral values. Special
    values render as ``inf``, ``-inf`` and ``NaN``.

    Args:
        value: Number to render

    Returns:
        Decimal text for the number

    Examples:
        >>> format_number(2.5)
        '2.5'
        >>> format_number(120.0)
        '120'
        >>> format_number(1e-7)
        '0.0000001'
        >>> format_number(float("inf"))
        'inf'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        text = str(int(value))
        if text == "0" and math.copysign(1.0, value) < 0:
            return "-0"
        return text
    return format(Decimal(repr(value)), "f")
