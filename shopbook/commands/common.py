"""Helpers shared by command implementations."""

import sqlite3
import sys
import tomllib

from rich.console import Console

from shopbook.config import load_config
from shopbook.store import Store, database_exists, get_db_path

console = Console()


def load_store_or_exit() -> Store:
    """Load the store, exiting with an error message if it is unavailable."""
    db_path = get_db_path()

    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'shopbook init' first.[/red]", style="bold")
        sys.exit(1)

    try:
        return Store.load(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Store is corrupt: {e}[/red]", style="bold")
        sys.exit(1)


def save_store_or_exit(store: Store) -> None:
    """Persist the store, exiting with an error message on failure."""
    try:
        store.save()
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def currency_symbol() -> str:
    """Get the configured currency symbol."""
    try:
        return str(load_config().get("currency", "₹"))
    except tomllib.TOMLDecodeError as e:
        console.print(f"[yellow]Ignoring invalid config: {e}[/yellow]")
        return "₹"


def format_money(amount: float, currency: str) -> str:
    """Format an amount for display (e.g., "₹1,234.50")."""
    if amount < 0:
        return f"-{currency}{abs(amount):,.2f}"
    return f"{currency}{amount:,.2f}"
