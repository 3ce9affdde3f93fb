"""Calculator command with commit-to-ledger support."""

import sys

import typer
from rich.panel import Panel

from shopbook.commands.common import (
    console,
    currency_symbol,
    format_money,
    load_store_or_exit,
    save_store_or_exit,
)
from shopbook.commands.transactions import record_transaction
from shopbook.domain.calculator import (
    CalculatorState,
    commit,
    press_key,
    tokenize_keys,
)
from shopbook.domain.models import TransactionKind


def run_keys(state: CalculatorState, keys: list[str]) -> CalculatorState:
    """Press each key in turn.

    Raises:
        ValueError: If a key is not on the keypad.
    """
    for key in keys:
        state = press_key(state, key)
    return state


def render_display(state: CalculatorState, currency: str) -> None:
    pending = f"[dim]{state.pending_operator}[/dim] " if state.pending_operator else ""
    console.print(Panel(f"{pending}[bold]{currency}{state.display}[/bold]", expand=False))


def commit_display(state: CalculatorState, kind: TransactionKind, name: str) -> bool:
    """Record the display as a transaction and persist it.

    Returns:
        True if a transaction was recorded, False if the value was declined.
    """
    store = load_store_or_exit()
    errors: list[str] = []

    def record(amount: float, txn_kind: TransactionKind) -> None:
        _, error = record_transaction(store, name, amount, txn_kind)
        if error:
            errors.append(error)

    amount = commit(state, kind, record)
    if amount is None:
        return False
    if errors:
        console.print(f"[red]Invalid input: {errors[0]}[/red]")
        sys.exit(1)

    save_store_or_exit(store)
    label = "Income" if kind == "income" else "Expense"
    console.print(f"[green]✓[/green] {label} added: {format_money(amount, currency_symbol())}")
    return True


def interactive_session(state: CalculatorState, name: str, currency: str) -> CalculatorState:
    """Read keys from the prompt until the user quits."""
    console.print("[cyan]Keys:[/cyan] 0-9 . + - × ÷ (or * / x) = C")
    console.print("[dim]i: add as income, e: add as expense, q: quit[/dim]")

    while True:
        render_display(state, currency)
        entry: str = typer.prompt("Key(s)", type=str)
        command = entry.strip().lower()

        if command == "q":
            return state
        if command in ("i", "e"):
            kind: TransactionKind = "income" if command == "i" else "expense"
            if not commit_display(state, kind, name):
                console.print("[dim]Nothing to add (value must be a positive number)[/dim]")
            continue

        try:
            state = run_keys(state, tokenize_keys(entry))
        except ValueError as e:
            console.print(f"[red]{e}[/red]")


def calc_command(
    keys: list[str] | None = None,
    income: bool = False,
    expense: bool = False,
    name: str = "Calculator",
) -> None:
    """Run the calculator on the given keys, or interactively."""
    if income and expense:
        console.print("[red]Choose either --income or --expense, not both[/red]")
        sys.exit(1)

    currency = currency_symbol()
    state = CalculatorState()

    if keys:
        try:
            state = run_keys(state, tokenize_keys(" ".join(keys)))
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            sys.exit(1)
        render_display(state, currency)
    else:
        state = interactive_session(state, name, currency)

    if income or expense:
        kind: TransactionKind = "income" if income else "expense"
        if not commit_display(state, kind, name):
            console.print("[yellow]Nothing added: the result must be a positive number[/yellow]")
