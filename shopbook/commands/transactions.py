"""Transaction management commands (add, delete, list, summary)."""

import sys
from datetime import datetime

import typer
from rich.table import Table

from shopbook.commands.common import (
    console,
    currency_symbol,
    format_money,
    load_store_or_exit,
    save_store_or_exit,
)
from shopbook.dates import date_stamp, format_date_display, normalize_date, normalize_time, time_stamp
from shopbook.domain.ledger import Transaction, create_transaction, summarize_transactions
from shopbook.domain.models import TransactionKind
from shopbook.store import Store


def record_transaction(
    store: Store,
    name: str,
    amount: float,
    kind: str,
    date: str | None = None,
    time: str | None = None,
    audio: str | None = None,
    photo: str | None = None,
) -> tuple[Transaction | None, str | None]:
    """Validate and add a transaction to the store (without saving).

    Args:
        store: Store to add to.
        name: Transaction name.
        amount: Positive amount.
        kind: "income" or "expense".
        date: Date in any accepted format. If None, uses today.
        time: Time (HH:MM). If None, uses the current time.
        audio: Optional audio note reference.
        photo: Optional photo reference.

    Returns:
        Tuple of (transaction, error) where exactly one is None.
    """
    now = datetime.now()
    if date:
        try:
            date = normalize_date(date)
        except ValueError as e:
            return None, str(e)
    else:
        date = date_stamp(now)

    if time:
        try:
            time = normalize_time(time)
        except ValueError as e:
            return None, str(e)
    else:
        time = time_stamp(now)

    txn, error = create_transaction(
        store.new_transaction_id(),
        name,
        amount,
        date,
        time,
        kind,
        audio=audio,
        photo=photo,
    )
    if txn is not None:
        store.add_transaction(txn)
    return txn, error


def format_signed_amount(txn: Transaction, currency: str) -> str:
    if txn.kind == "income":
        return f"[green]+{format_money(txn.amount, currency)}[/green]"
    return f"[red]-{format_money(txn.amount, currency)}[/red]"


def add_command(
    name: str,
    amount: float,
    kind: TransactionKind,
    date: str | None = None,
    time: str | None = None,
    audio: str | None = None,
    photo: str | None = None,
) -> None:
    """Add an income or expense transaction manually."""
    store = load_store_or_exit()

    txn, error = record_transaction(store, name, amount, kind, date, time, audio, photo)
    if txn is None:
        console.print(f"[red]Invalid input: {error}[/red]")
        console.print("[dim]Please fill in all required fields[/dim]")
        sys.exit(1)

    save_store_or_exit(store)

    currency = currency_symbol()
    console.print(f"[green]✓[/green] {txn.kind.capitalize()} added:")
    console.print(f"  ID: {txn.id}")
    console.print(f"  Name: {txn.name}")
    console.print(f"  Amount: {format_money(txn.amount, currency)}")
    console.print(f"  Date: {format_date_display(txn.date)} {txn.time}")


def delete_command(transaction_id: str, yes: bool = False) -> None:
    """Delete a transaction."""
    store = load_store_or_exit()

    txn = next((t for t in store.transactions if t.id == transaction_id), None)
    if txn is None:
        console.print(f"[red]Transaction {transaction_id} not found[/red]")
        sys.exit(1)

    if not yes and not typer.confirm(f"Delete '{txn.name}'?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    store.delete_transaction(transaction_id)
    save_store_or_exit(store)
    console.print("[green]✓[/green] Transaction has been removed")


def list_command(
    limit: int = 50,
    all: bool = False,
) -> None:
    """List transactions, newest first."""
    store = load_store_or_exit()
    currency = currency_symbol()

    transactions = store.transactions if all else store.transactions[:limit]

    if not transactions:
        console.print("[yellow]No transactions yet[/yellow]")
        console.print("[dim]Start by adding your first income or expense with 'shopbook add'[/dim]")
        return

    total = len(store.transactions)
    title = f"Transactions (showing {len(transactions)} of {total})"
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Time", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Media", justify="center")

    for txn in transactions:
        media = " ".join(mark for mark, ref in (("📷", txn.photo), ("🎤", txn.audio)) if ref)
        table.add_row(
            txn.id,
            format_date_display(txn.date),
            txn.time,
            txn.name,
            format_signed_amount(txn, currency),
            media,
        )

    console.print(table)


def summary_command() -> None:
    """Show total income, total expense and net profit or loss."""
    store = load_store_or_exit()
    currency = currency_symbol()

    summary = summarize_transactions(store.transactions)
    style = "green" if summary.is_profit else "red"
    label = "Profit" if summary.is_profit else "Loss"

    console.print(f"[bold]Total Income:[/bold]  [green]{format_money(summary.total_income, currency)}[/green]")
    console.print(f"[bold]Total Expense:[/bold] [red]{format_money(summary.total_expense, currency)}[/red]")
    console.print("─" * 40, style="dim")
    console.print(f"[bold]Net Amount:[/bold]    [{style}]{format_money(abs(summary.net), currency)} ({label})[/{style}]")
