"""Admin command for init."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from shopbook.config import create_default_config, get_config_path
from shopbook.store.schema import get_db_path, init_database

console = Console()


def run_full_init(db_path: Path, config_path: Path, currency: str | None, seed_samples: bool) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    if db_path.exists():
        db_path.unlink()
    init_database(db_path, seed_samples=seed_samples)
    console.print("[green]✓[/green] Database initialized")
    if seed_samples:
        console.print("[dim]Catalog seeded with sample products[/dim]")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    overrides: dict[str, object] = {}
    if currency:
        overrides["currency"] = currency
    create_default_config(config_path, **overrides)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False, currency: str | None = None, seed_samples: bool = True) -> None:
    """Initialize shopbook database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'shopbook init --force' to overwrite[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path, currency, seed_samples)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
