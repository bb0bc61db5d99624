"""Tests for number formatting."""

from __future__ import annotations

import math

import pytest

from abacus.core.strings import format_number


class TestFormatNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (2.5, "2.5"),
            (120.0, "120"),
            (-24.0, "-24"),
            (0.0, "0"),
            (-0.0, "-0"),
            (0.1, "0.1"),
            (1e-7, "0.0000001"),
            (1e20, "100000000000000000000"),
            (2.0**70, "1180591620717411303424"),
            (math.inf, "inf"),
            (-math.inf, "-inf"),
            (math.nan, "NaN"),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    @pytest.mark.parametrize("value", [1 / 3, 10.700000000000001, 1.5e-300, 1.7976931348623157e308])
    def test_round_trip(self, value: float) -> None:
        text = format_number(value)
        assert "e" not in text.lower()
        assert float(text) == value

    def test_specials_parse_back(self) -> None:
        assert float(format_number(math.inf)) == math.inf
        assert math.isnan(float(format_number(math.nan)))
