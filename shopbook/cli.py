"""CLI entry point for shopbook."""

import logging

import typer
from rich.logging import RichHandler

from shopbook.commands.admin import init_command
from shopbook.commands.calculator import calc_command
from shopbook.commands.catalog import (
    add_product_command,
    buy_command,
    catalog_command,
    categories_command,
    cost_command,
    delete_product_command,
)
from shopbook.commands.transactions import add_command, delete_command, list_command, summary_command

app = typer.Typer(
    name="shopbook",
    help="Shopbook - inventory and expense tracking for a small shop",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Shopbook - inventory and expense tracking for a small shop."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    currency: str = typer.Option(None, "--currency", help="Currency symbol (default: ₹)"),
    samples: bool = typer.Option(True, "--samples/--no-samples", help="Seed the catalog with sample products"),
) -> None:
    """Initialize shopbook database and configuration."""
    init_command(force, currency, samples)


@app.command()
def catalog(
    search: str = typer.Option("", "--search", "-s", help="Match product name or brand"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    subcategory: str = typer.Option(None, "--subcategory", help="Only this subcategory"),
    brand: str = typer.Option(None, "--brand", "-b", help="Only this brand"),
    min_price: str = typer.Option(None, "--min", help="Minimum price"),
    max_price: str = typer.Option(None, "--max", help="Maximum price"),
) -> None:
    """Browse your product catalog with business analytics."""
    catalog_command(search, category, subcategory, brand, min_price, max_price)


@app.command()
def categories() -> None:
    """List product categories, subcategories and brands."""
    categories_command()


@app.command(name="add-product")
def add_product(
    name: str,
    price: float,
    category: str = typer.Option(..., "--category", "-c", help="Product category"),
    subcategory: str = typer.Option("", "--subcategory", help="Subcategory within the category"),
    brand: str = typer.Option("", "--brand", "-b", help="Brand name"),
    description: str = typer.Option("", "--description", "-d", help="Product description"),
    in_stock: bool = typer.Option(True, "--in-stock/--out-of-stock", help="Stock status"),
    image: str = typer.Option(None, "--image", help="Photo path or URI"),
    audio: str = typer.Option(None, "--audio", help="Audio note path or URI"),
) -> None:
    """Add a product to your catalog."""
    add_product_command(name, price, category, subcategory, brand, description, in_stock, image, audio)


@app.command(name="delete-product")
def delete_product(
    product_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a product from your catalog."""
    delete_product_command(product_id, yes)


@app.command()
def buy(product_id: str) -> None:
    """Record buying a product as an expense."""
    buy_command(product_id)


@app.command()
def cost(
    product_id: str,
    amount: float = typer.Argument(None, help="Cost price to set"),
    clear: bool = typer.Option(False, "--clear", help="Remove the cost override"),
) -> None:
    """Show or set the cost price used for profit/loss."""
    cost_command(product_id, amount, clear)


@app.command()
def add(
    name: str,
    amount: float,
    expense: bool = typer.Option(False, "--expense", "-e", help="Record as an expense (default: income)"),
    date: str = typer.Option(None, "--date", help="Date (default: today)"),
    time: str = typer.Option(None, "--time", help="Time HH:MM (default: now)"),
    audio: str = typer.Option(None, "--audio", help="Audio note path or URI"),
    photo: str = typer.Option(None, "--photo", help="Photo path or URI"),
) -> None:
    """Add an income or expense transaction."""
    add_command(name, amount, "expense" if expense else "income", date, time, audio, photo)


@app.command()
def delete(
    transaction_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a transaction."""
    delete_command(transaction_id, yes)


@app.command(name="list")
def list_transactions(
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
) -> None:
    """List your transactions."""
    list_command(limit, all)


@app.command()
def summary() -> None:
    """Show total income, expense and profit or loss."""
    summary_command()


@app.command()
def calc(
    keys: list[str] = typer.Argument(None, help="Keys to press, e.g. 5 + 3 ="),
    income: bool = typer.Option(False, "--income", help="Add the result as income"),
    expense: bool = typer.Option(False, "--expense", help="Add the result as an expense"),
    name: str = typer.Option("Calculator", "--name", "-n", help="Name for the added transaction"),
) -> None:
    """Use the calculator, optionally adding the result as a transaction."""
    calc_command(keys, income, expense, name)


if __name__ == "__main__":
    app()
