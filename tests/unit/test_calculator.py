"""Tests for the calculator text boundary and self-test."""

from __future__ import annotations

import pytest

from abacus.core import calculator
from abacus.core.calculator import (
    DEFAULT_TOLERANCE,
    SELF_TEST_CASES,
    SelfTestFailure,
    calculate,
    evaluate_text,
    run_self_test,
)
from abacus.core.errors import MathError, TrailingInputError, UnexpectedCharacterError


class TestEvaluateText:
    """evaluate_text returns display text for every outcome."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("1+2*2", "5"),
            ("1+2*3^2", "19"),
            ("2^3^2", "512"),
            ("3!", "6"),
            ("5!", "120"),
            ("3!!", "720"),
            ("3*3!+1", "19"),
            ("(3*3)!-1", "362879"),
            ("-2*((1+3)*3)", "-24"),
            ("5/2", "2.5"),
            ("1/0", "inf"),
            ("-1/0", "-inf"),
            ("0/0", "NaN"),
            ("-0", "-0"),
            ("10^20", "100000000000000000000"),
            ("1/10000000", "0.0000001"),
        ],
    )
    def test_success(self, source: str, expected: str) -> None:
        assert evaluate_text(source) == expected

    def test_fractional_round_trip(self) -> None:
        assert float(evaluate_text("1.1 + 9.6")) == pytest.approx(10.7)

    @pytest.mark.parametrize(
        "source",
        ["1+1", "1.1 + 9.6", "2/3", "0.1*3", "2^0.5", "-7/3", "33!", "10^-5", "1e"],
    )
    def test_output_round_trips(self, source: str) -> None:
        value = calculate(source)
        assert float(evaluate_text(source)) == value

    @pytest.mark.parametrize("source", ["1.2.3", "(1+2", "6(1+1)", "2 + + 3", ""])
    def test_syntax_errors(self, source: str) -> None:
        assert evaluate_text(source).startswith("Syntax error")

    def test_syntax_error_detail(self) -> None:
        assert evaluate_text("(1+2") == "Syntax error: expected ')' but found end of input"

    def test_non_integer_factorial(self) -> None:
        assert evaluate_text("1.5!") == "Math error: factorial of non-integer"

    def test_factorial_overflow(self) -> None:
        assert evaluate_text("34!") == "Math error: overflow"

    def test_nesting_limit(self) -> None:
        source = "(" * 5000 + "1" + ")" * 5000
        assert evaluate_text(source) == "Syntax error: expression nested deeper than 1000 levels"

    def test_moderate_nesting(self) -> None:
        source = "(" * 300 + "1" + ")" * 300
        assert evaluate_text(source) == "1"

    def test_long_negation_chain(self) -> None:
        assert evaluate_text("-" * 999 + "2") == "-2"

    def test_display_omits_context(self) -> None:
        assert "^^^" not in evaluate_text("6(1+1)")

    def test_permissive_by_default(self) -> None:
        assert evaluate_text("2 + x3") == "5"

    def test_strict(self) -> None:
        assert evaluate_text("2 + x3", strict=True) == "Syntax error: unexpected character 'x'"


class TestCalculate:
    """calculate raises typed errors instead of returning text."""

    def test_value(self) -> None:
        assert calculate("(3*3)!-1") == 362879.0

    def test_raises_math_error(self) -> None:
        with pytest.raises(MathError):
            calculate("1.5!")

    def test_raises_syntax_error(self) -> None:
        with pytest.raises(TrailingInputError):
            calculate("6(1+1)")

    def test_strict_flag_forwarded(self) -> None:
        with pytest.raises(UnexpectedCharacterError):
            calculate("1 = 1", strict=True)


class TestSelfTest:
    """run_self_test replays the case table through evaluate_text."""

    def test_all_cases_pass(self) -> None:
        assert run_self_test() == []

    def test_case_table(self) -> None:
        assert len(SELF_TEST_CASES) == 11
        assert ("(3*3)!-1", 362879.0) in SELF_TEST_CASES
        assert ("1.1 + 9.6", 10.7) in SELF_TEST_CASES

    def test_default_comparison_is_exact(self) -> None:
        assert DEFAULT_TOLERANCE == 0.0
        assert run_self_test(tolerance=0.0) == []

    def test_decimal_sum_matches_exactly(self) -> None:
        assert calculate("1.1 + 9.6") == 10.7
        assert evaluate_text("1.1 + 9.6") == "10.7"

    def test_exact_comparison_flags_rounding(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(calculator, "SELF_TEST_CASES", (("0.1+0.2", 0.3),))
        assert run_self_test() == [SelfTestFailure("0.1+0.2", 0.3, "0.30000000000000004")]

    def test_tolerance_accepts_near_miss(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(calculator, "SELF_TEST_CASES", (("0.1+0.2", 0.3),))
        assert run_self_test(tolerance=1e-9) == []

    def test_mismatch_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(calculator, "SELF_TEST_CASES", (("1+1", 3.0), ("2*2", 4.0)))
        assert run_self_test() == [SelfTestFailure("1+1", 3.0, "2")]

    def test_error_output_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(calculator, "SELF_TEST_CASES", (("1.5!", 1.0),))
        failures = run_self_test()
        assert len(failures) == 1
        assert failures[0].output == "Math error: factorial of non-integer"

    def test_nan_output_is_mismatch(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(calculator, "SELF_TEST_CASES", (("0/0", 0.0),))
        assert run_self_test()[0].output == "NaN"
