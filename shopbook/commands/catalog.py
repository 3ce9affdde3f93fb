"""Catalog commands (browse, add, delete, buy, cost)."""

import sys
import tomllib
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
from shopbook.config import load_config
from shopbook.dates import date_stamp, time_stamp
from shopbook.domain.catalog import (
    BRANDS,
    CATEGORIES,
    DEFAULT_COST_RATIO,
    CatalogSummary,
    FilterSpec,
    Product,
    aggregate_products,
    filter_products,
    group_products,
    product_cost,
    validate_product,
)
from shopbook.domain.ledger import purchase_transaction
from shopbook.domain.models import CategoryName


def configured_cost_ratio() -> float:
    """Get the configured default cost ratio."""
    try:
        return float(load_config().get("default_cost_ratio", DEFAULT_COST_RATIO))
    except (tomllib.TOMLDecodeError, TypeError, ValueError):
        return DEFAULT_COST_RATIO


def render_summary(summary: CatalogSummary, currency: str) -> None:
    """Render the overall business analytics table.

    Args:
        summary: Aggregated catalog analytics.
        currency: Currency symbol.
    """
    table = Table(title="Overall Business Analytics")
    table.add_column("Revenue", justify="right", style="cyan")
    table.add_column("Cost", justify="right", style="yellow")
    table.add_column("Profit", justify="right", style="green")
    table.add_column("Loss", justify="right", style="red")
    table.add_column("Margin %", justify="right")
    table.add_column("Products", justify="right", style="blue")
    table.add_column("In Stock", justify="right", style="green")
    table.add_column("Out of Stock", justify="right", style="red")
    table.add_column("Avg Price", justify="right")

    margin_style = "green" if summary.profit_margin >= 0 else "red"
    table.add_row(
        format_money(summary.total_value, currency),
        format_money(summary.total_cost, currency),
        format_money(summary.total_profit, currency),
        format_money(summary.total_loss, currency),
        f"[{margin_style}]{summary.profit_margin:.1f}%[/{margin_style}]",
        str(summary.total_products),
        str(summary.in_stock_products),
        str(summary.out_of_stock_products),
        format_money(summary.avg_price, currency),
    )
    console.print(table)


def render_group(
    category: CategoryName,
    products: list[Product],
    costs: dict[str, float],
    cost_ratio: float,
    currency: str,
) -> None:
    """Render the products of one category.

    Args:
        category: Category name.
        products: Products in the category.
        costs: Cost overrides keyed by product id.
        cost_ratio: Default cost ratio.
        currency: Currency symbol.
    """
    table = Table(title=f"{category} ({len(products)})", title_justify="left")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="white")
    table.add_column("Subcategory", style="magenta")
    table.add_column("Brand", style="cyan")
    table.add_column("Price", justify="right")
    table.add_column("Cost", justify="right", style="yellow")
    table.add_column("Stock", justify="center")
    table.add_column("Media", justify="center")

    for product in products:
        cost = product_cost(product, costs, cost_ratio)
        cost_display = format_money(cost, currency)
        if product.id not in costs:
            cost_display = f"[dim]{cost_display}[/dim]"

        stock = "[green]✓[/green]" if product.in_stock else "[red]✗[/red]"
        media = " ".join(mark for mark, ref in (("📷", product.image), ("🎤", product.audio)) if ref)

        table.add_row(
            product.id,
            product.name,
            product.subcategory or "[dim]-[/dim]",
            product.brand or "[dim]-[/dim]",
            format_money(product.price, currency),
            cost_display,
            stock,
            media,
        )

    console.print(table)


def catalog_command(
    search: str = "",
    category: str | None = None,
    subcategory: str | None = None,
    brand: str | None = None,
    min_price: str | None = None,
    max_price: str | None = None,
) -> None:
    """Show the filtered catalog grouped by category, with analytics."""
    store = load_store_or_exit()
    currency = currency_symbol()
    cost_ratio = configured_cost_ratio()

    filters = FilterSpec(
        search=search,
        category=category,
        subcategory=subcategory,
        brand=brand,
        min_price=min_price,
        max_price=max_price,
    )
    filtered = filter_products(store.products, filters)

    render_summary(aggregate_products(filtered, store.product_costs, cost_ratio), currency)

    if not filtered:
        if store.products:
            console.print("[yellow]No products match your filters[/yellow]")
        else:
            console.print("[yellow]No products yet (use 'shopbook add-product')[/yellow]")
        return

    for group_name, products in group_products(filtered).items():
        console.print()
        render_group(group_name, products, store.product_costs, cost_ratio, currency)


def categories_command() -> None:
    """List categories with their subcategories, and suggested brands."""
    table = Table(title="Categories")
    table.add_column("Category", style="cyan")
    table.add_column("Subcategories", style="white")
    for category, subcategories in CATEGORIES.items():
        table.add_row(category, ", ".join(subcategories))
    console.print(table)
    console.print(f"[dim]Brands: {', '.join(BRANDS)}[/dim]")


def add_product_command(
    name: str,
    price: float,
    category: str,
    subcategory: str = "",
    brand: str = "",
    description: str = "",
    in_stock: bool = True,
    image: str | None = None,
    audio: str | None = None,
) -> None:
    """Add a product to the catalog."""
    error = validate_product(name, price, category, subcategory)
    if error:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    if brand and brand not in BRANDS:
        console.print(f"[dim]Note: '{brand}' is not one of the usual brands[/dim]")

    store = load_store_or_exit()
    product = Product(
        id=store.new_product_id(),
        name=name.strip(),
        price=price,
        category=CategoryName(category),
        subcategory=subcategory,
        brand=brand,
        in_stock=in_stock,
        description=description,
        image=image,
        audio=audio,
    )
    store.add_product(product)
    save_store_or_exit(store)

    currency = currency_symbol()
    console.print(f"[green]✓[/green] Product added: {product.name}")
    console.print(f"  ID: {product.id}")
    console.print(f"  Price: {format_money(product.price, currency)}")
    console.print(f"  Category: {product.category}" + (f" / {subcategory}" if subcategory else ""))


def delete_product_command(product_id: str, yes: bool = False) -> None:
    """Delete a product from the catalog."""
    store = load_store_or_exit()

    product = store.get_product(product_id)
    if product is None:
        console.print(f"[red]Product {product_id} not found[/red]")
        sys.exit(1)

    if not yes and not typer.confirm(f"Delete '{product.name}'?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    store.delete_product(product_id)
    save_store_or_exit(store)
    console.print(f"[green]✓[/green] Product deleted: {product.name}")


def buy_command(product_id: str) -> None:
    """Record the purchase of a product as an expense."""
    store = load_store_or_exit()

    product = store.get_product(product_id)
    if product is None:
        console.print(f"[red]Product {product_id} not found[/red]")
        sys.exit(1)

    now = datetime.now()
    txn = purchase_transaction(store.new_transaction_id(), product, date_stamp(now), time_stamp(now))
    store.add_transaction(txn)
    save_store_or_exit(store)

    console.print(f"[green]✓[/green] {product.name} has been added to your expenses")
    console.print(f"  Amount: {format_money(txn.amount, currency_symbol())}")


def cost_command(product_id: str, cost: float | None = None, clear: bool = False) -> None:
    """Show, set or clear the assumed cost price of a product."""
    store = load_store_or_exit()
    currency = currency_symbol()

    product = store.get_product(product_id)
    if product is None:
        console.print(f"[red]Product {product_id} not found[/red]")
        sys.exit(1)

    if clear:
        if store.clear_cost(product_id):
            save_store_or_exit(store)
            console.print(f"[green]✓[/green] Cost override cleared for {product.name}")
        else:
            console.print(f"[dim]{product.name} has no cost override[/dim]")
        return

    if cost is None:
        cost_ratio = configured_cost_ratio()
        current = product_cost(product, store.product_costs, cost_ratio)
        source = "override" if product_id in store.product_costs else f"{cost_ratio:.0%} of price"
        console.print(f"{product.name}: {format_money(current, currency)} [dim]({source})[/dim]")
        return

    try:
        store.set_cost(product_id, cost)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    save_store_or_exit(store)
    console.print(f"[green]✓[/green] Cost of {product.name} set to {format_money(cost, currency)}")
