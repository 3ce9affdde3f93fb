"""Tests for shopbook.domain.calculator pure functions."""

import math

import pytest

from shopbook.domain.calculator import (
    CalculatorState,
    apply_operator,
    clear,
    commit,
    evaluate,
    format_number,
    input_decimal_point,
    input_digit,
    input_operator,
    parse_number,
    press_key,
    tokenize_keys,
)
from shopbook.domain.models import TransactionKind


def press_all(keys: str) -> CalculatorState:
    state = CalculatorState()
    for key in tokenize_keys(keys):
        state = press_key(state, key)
    return state


class TestInputDigit:
    """Tests for input_digit and input_decimal_point."""

    def test_replaces_initial_zero(self) -> None:
        """Should replace the initial "0" rather than append to it."""
        state = input_digit(CalculatorState(), "7")
        assert state.display == "7"

    def test_appends_digits(self) -> None:
        """Should append digits to a non-zero display."""
        state = input_digit(input_digit(CalculatorState(), "4"), "2")
        assert state.display == "42"

    def test_fresh_digit_replaces_display(self) -> None:
        """Should start a new number after an operator."""
        state = CalculatorState(display="12", accumulator=12.0, pending_operator="+", awaiting_fresh_digit=True)
        state = input_digit(state, "3")

        assert state.display == "3"
        assert state.awaiting_fresh_digit is False
        assert state.accumulator == 12.0

    def test_decimal_point_appends(self) -> None:
        """Should append a decimal point to the display."""
        state = input_decimal_point(input_digit(CalculatorState(), "3"))
        state = input_digit(state, "5")
        assert state.display == "3.5"

    def test_decimal_point_replaces_zero(self) -> None:
        """Should follow the same replace-zero rule as digits."""
        state = input_decimal_point(CalculatorState())
        assert state.display == "."

    def test_multiple_decimal_points_are_not_guarded(self) -> None:
        """Should allow a second decimal point and parse the numeric prefix."""
        state = press_all("1.2.3")

        assert state.display == "1.2.3"
        assert parse_number(state.display) == pytest.approx(1.2)

    def test_does_not_mutate_input_state(self) -> None:
        """Should return a new state and leave the original untouched."""
        original = CalculatorState()
        input_digit(original, "9")
        assert original.display == "0"


class TestApplyOperator:
    """Tests for apply_operator."""

    def test_basic_operations(self) -> None:
        """Should add, subtract, multiply and divide."""
        assert apply_operator("+", 5, 3) == 8
        assert apply_operator("-", 5, 3) == 2
        assert apply_operator("×", 5, 3) == 15
        assert apply_operator("÷", 6, 3) == 2

    def test_equals_returns_second_operand(self) -> None:
        """Should return the entered value for "="."""
        assert apply_operator("=", 5, 3) == 3

    def test_divide_by_zero_is_infinite(self) -> None:
        """Should yield infinity instead of raising."""
        assert apply_operator("÷", 6, 0) == math.inf
        assert apply_operator("÷", -6, 0) == -math.inf

    def test_zero_divided_by_zero_is_nan(self) -> None:
        """Should yield NaN for 0 ÷ 0."""
        assert math.isnan(apply_operator("÷", 0, 0))


class TestChainedCalculation:
    """Tests for input_operator, evaluate and clear."""

    def test_simple_addition(self) -> None:
        """Should compute 5 + 3 = 8."""
        state = clear()
        state = input_digit(state, "5")
        state = input_operator(state, "+")
        state = input_digit(state, "3")
        state = evaluate(state)

        assert state.display == "8"
        assert state.accumulator is None
        assert state.pending_operator is None
        assert state.awaiting_fresh_digit is True

    def test_nan_accumulator_propagates(self) -> None:
        """Should keep NaN when the first operand has no numeric value."""
        state = press_all(". + 5 =")

        assert state.display == "NaN"
        assert commit(state, "income", lambda amount, kind: None) is None

    def test_divide_by_zero_displays_infinity(self) -> None:
        """Should display Infinity for 6 ÷ 0 rather than raising."""
        state = press_all("6 ÷ 0 =")
        assert state.display == "Infinity"

    def test_chained_operations_ignore_precedence(self) -> None:
        """Should evaluate left to right: 2 + 3 × 4 = 20."""
        state = press_all("2 + 3 × 4 =")
        assert state.display == "20"

    def test_operator_shows_running_result(self) -> None:
        """Should display the intermediate result when chaining."""
        state = press_all("2 + 3 ×")

        assert state.display == "5"
        assert state.accumulator == 5
        assert state.pending_operator == "×"

    def test_first_operator_stores_accumulator(self) -> None:
        """Should hold the display as the accumulator on the first operator."""
        state = press_all("12 -")

        assert state.accumulator == 12
        assert state.display == "12"
        assert state.awaiting_fresh_digit is True

    def test_repeated_operator_reapplies_pending(self) -> None:
        """Should fold the display into the accumulator on each operator press."""
        state = press_all("5 + +")

        assert state.accumulator == 10
        assert state.display == "10"

    def test_equals_operator_keeps_entered_value(self) -> None:
        """Should treat "=" used as an operator as "take the entered value"."""
        state = input_operator(press_all("5 + 3"), "=")
        state = input_digit(state, "9")
        state = input_operator(state, "+")

        assert state.accumulator == 9

    def test_evaluate_without_pending_is_noop(self) -> None:
        """Should leave the state unchanged when nothing is pending."""
        state = press_all("42")
        assert evaluate(state) == state

    def test_decimal_results(self) -> None:
        """Should format fractional results without trailing zeros."""
        state = press_all("7 ÷ 2 =")
        assert state.display == "3.5"

    def test_clear_resets_everything(self) -> None:
        """Should reset all fields to their initial values."""
        state = press_all("5 + 3")
        assert clear(state) == CalculatorState()


class TestFormatNumber:
    """Tests for format_number and parse_number."""

    def test_integral_values_have_no_fraction(self) -> None:
        """Should print 8 rather than 8.0."""
        assert format_number(8.0) == "8"
        assert format_number(-3.0) == "-3"

    def test_non_finite_values(self) -> None:
        """Should print Infinity, -Infinity and NaN."""
        assert format_number(math.inf) == "Infinity"
        assert format_number(-math.inf) == "-Infinity"
        assert format_number(math.nan) == "NaN"

    def test_small_values_positional(self) -> None:
        """Should print small values without an exponent down to 1e-6."""
        assert format_number(0.0001) == "0.0001"
        assert format_number(0.00001) == "0.00001"

    def test_tiny_values_exponent(self) -> None:
        """Should print values below 1e-6 with a compact exponent."""
        assert format_number(1e-7) == "1e-7"

    def test_parse_infinity_display(self) -> None:
        """Should parse an Infinity display back to infinity."""
        assert parse_number("Infinity") == math.inf
        assert parse_number("-Infinity") == -math.inf

    def test_parse_garbage_is_nan(self) -> None:
        """Should return NaN for text without a numeric prefix."""
        assert math.isnan(parse_number("."))
        assert math.isnan(parse_number("NaN"))


class TestCommit:
    """Tests for commit."""

    def _sink(self) -> tuple[list[tuple[float, TransactionKind]], object]:
        recorded: list[tuple[float, TransactionKind]] = []

        def record(amount: float, kind: TransactionKind) -> None:
            recorded.append((amount, kind))

        return recorded, record

    def test_zero_is_declined(self) -> None:
        """Should not record anything for a display of 0."""
        recorded, record = self._sink()
        assert commit(CalculatorState(), "income", record) is None  # type: ignore[arg-type]
        assert recorded == []

    def test_positive_value_records_one_transaction(self) -> None:
        """Should record exactly one transaction of the display value."""
        recorded, record = self._sink()
        state = CalculatorState(display="42.5")

        assert commit(state, "income", record) == 42.5  # type: ignore[arg-type]
        assert recorded == [(42.5, "income")]

    def test_negative_value_is_declined(self) -> None:
        """Should decline a negative result."""
        recorded, record = self._sink()
        state = press_all("3 - 5 =")

        assert state.display == "-2"
        assert commit(state, "expense", record) is None  # type: ignore[arg-type]
        assert recorded == []

    def test_infinity_is_declined(self) -> None:
        """Should decline a non-finite result."""
        recorded, record = self._sink()
        assert commit(press_all("6 ÷ 0 ="), "expense", record) is None  # type: ignore[arg-type]
        assert recorded == []

    def test_commit_leaves_state_untouched(self) -> None:
        """Should not clear the calculator after committing."""
        _, record = self._sink()
        state = press_all("5 + 3 =")
        commit(state, "expense", record)  # type: ignore[arg-type]

        assert state.display == "8"


class TestPressKey:
    """Tests for press_key and tokenize_keys."""

    def test_aliases(self) -> None:
        """Should accept *, x and / as keyboard aliases."""
        assert press_all("6 * 7 =").display == "42"
        assert press_all("6 x 7 =").display == "42"
        assert press_all("9 / 3 =").display == "3"

    def test_clear_key(self) -> None:
        """Should clear on C."""
        assert press_all("5 + 3 C") == CalculatorState()

    def test_unknown_key_raises(self) -> None:
        """Should reject keys that are not on the keypad."""
        with pytest.raises(ValueError, match="Unknown calculator key"):
            press_key(CalculatorState(), "%")

    def test_tokenize_splits_characters(self) -> None:
        """Should split compact expressions into single keys."""
        assert tokenize_keys("12+3.5=") == ["1", "2", "+", "3", ".", "5", "="]
