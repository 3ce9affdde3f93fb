"""Pure functions for the chained four-function calculator.

This module contains the functional core for the calculator:
- No I/O operations (no database, no console, no files)
- No side effects; every operation returns a new CalculatorState
- Chained semantics: "2 + 3 × 4 =" is ((2 + 3) × 4), no operator precedence

Numbers follow the lenient rules of a pocket calculator display: the longest
numeric prefix of the display is used, division by zero yields Infinity/NaN
instead of raising, and integral results print without a fractional part.
"""

import math
import re
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable

from shopbook.domain.models import TransactionKind

OPERATORS = ("+", "-", "×", "÷", "=")

# Keyboard-friendly spellings accepted by the CLI
OPERATOR_ALIASES = {
    "*": "×",
    "x": "×",
    "X": "×",
    "/": "÷",
}

_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


@dataclass(frozen=True)
class CalculatorState:
    """Immutable calculator state."""

    display: str = "0"
    accumulator: float | None = None
    pending_operator: str | None = None
    awaiting_fresh_digit: bool = False


def parse_number(text: str) -> float:
    """Parse the leading numeric prefix of a display string.

    Args:
        text: Display string (e.g., "42.5", "1.2.3", "Infinity").

    Returns:
        Parsed value, or NaN when the string has no numeric prefix.
    """
    match = _NUMBER_PREFIX.match(text)
    if not match:
        return math.nan
    return float(match.group(1))


def format_number(value: float) -> str:
    """Format a number for the calculator display.

    Args:
        value: Number to format.

    Returns:
        Display string: "8" rather than "8.0", "0.5", "Infinity", "NaN", "1e-7".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == int(value) and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text

    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")

    mantissa, exponent = text.split("e")
    sign = "-" if exponent.startswith("-") else "+"
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def apply_operator(operator: str, a: float, b: float) -> float:
    """Apply a binary operator to the accumulator and the entered value.

    Args:
        operator: One of "+", "-", "×", "÷", "=".
        a: Accumulated value.
        b: Newly entered value.

    Returns:
        Result of the operation. "=" (and any unknown operator) yields b.
    """
    if operator == "+":
        return a + b
    elif operator == "-":
        return a - b
    elif operator == "×":
        return a * b
    elif operator == "÷":
        return _divide(a, b)
    else:
        return b


def input_digit(state: CalculatorState, digit: str) -> CalculatorState:
    """Enter a digit (or any single display character) into the display.

    Args:
        state: Current calculator state.
        digit: Character to enter.

    Returns:
        New calculator state.
    """
    if state.awaiting_fresh_digit:
        return replace(state, display=digit, awaiting_fresh_digit=False)
    if state.display == "0":
        return replace(state, display=digit)
    return replace(state, display=state.display + digit)


def input_decimal_point(state: CalculatorState) -> CalculatorState:
    """Enter a decimal point. Repeated points are not guarded against."""
    return input_digit(state, ".")


def input_operator(state: CalculatorState, operator: str) -> CalculatorState:
    """Press an operator key, folding any pending operation into the accumulator.

    Args:
        state: Current calculator state.
        operator: One of OPERATORS.

    Returns:
        New calculator state awaiting the next operand.
    """
    input_value = parse_number(state.display)
    display = state.display
    accumulator = state.accumulator

    if accumulator is None:
        accumulator = input_value
    elif state.pending_operator:
        result = apply_operator(state.pending_operator, accumulator, input_value)
        display = format_number(result)
        accumulator = result

    return CalculatorState(
        display=display,
        accumulator=accumulator,
        pending_operator=operator,
        awaiting_fresh_digit=True,
    )


def evaluate(state: CalculatorState) -> CalculatorState:
    """Press "=": resolve the pending operation, if there is one.

    Args:
        state: Current calculator state.

    Returns:
        New state with the result displayed and the accumulator cleared,
        or the same state when nothing is pending.
    """
    if state.accumulator is None or not state.pending_operator:
        return state

    result = apply_operator(state.pending_operator, state.accumulator, parse_number(state.display))
    return CalculatorState(
        display=format_number(result),
        accumulator=None,
        pending_operator=None,
        awaiting_fresh_digit=True,
    )


def clear(state: CalculatorState | None = None) -> CalculatorState:
    """Reset the calculator to its initial state."""
    return CalculatorState()


def committable_amount(state: CalculatorState) -> float | None:
    """Get the display value if it can be recorded as a transaction.

    Args:
        state: Current calculator state.

    Returns:
        The display value when it is finite and positive, otherwise None.
    """
    value = parse_number(state.display)
    if math.isfinite(value) and value > 0:
        return value
    return None


def commit(
    state: CalculatorState,
    kind: TransactionKind,
    record: Callable[[float, TransactionKind], object],
) -> float | None:
    """Record the display value as an income or expense transaction.

    Invalid values (non-numeric, zero, negative, non-finite) are declined
    silently. The calculator state is not cleared.

    Args:
        state: Current calculator state.
        kind: "income" or "expense".
        record: Sink receiving (amount, kind) for exactly one new transaction.

    Returns:
        The committed amount, or None when the value was declined.
    """
    amount = committable_amount(state)
    if amount is None:
        return None
    record(amount, kind)
    return amount


def press_key(state: CalculatorState, key: str) -> CalculatorState:
    """Apply a single keypad key to the calculator.

    Args:
        state: Current calculator state.
        key: A digit, ".", an operator (or alias), "=" or "C".

    Returns:
        New calculator state.

    Raises:
        ValueError: If the key is not on the keypad.
    """
    key = OPERATOR_ALIASES.get(key, key)

    if len(key) == 1 and key in "0123456789":
        return input_digit(state, key)
    if key == ".":
        return input_decimal_point(state)
    if key == "=":
        return evaluate(state)
    if key in OPERATORS:
        return input_operator(state, key)
    if key.upper() in ("C", "AC"):
        return clear(state)

    raise ValueError(f"Unknown calculator key: {key!r}")


def tokenize_keys(expression: str) -> list[str]:
    """Split a typed expression into keypad keys.

    Args:
        expression: Text such as "12+3.5=" or "12 + 3.5 =".

    Returns:
        List of single keys, e.g. ["1", "2", "+", "3", ".", "5", "="].
    """
    keys: list[str] = []
    for part in expression.split():
        if part.upper() == "AC":
            keys.append("AC")
            continue
        keys.extend(part)
    return keys
