"""Pure functions for the product catalog: validation, filtering, grouping, analytics.

This module contains the functional core for catalog operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Prices are decimal amounts in the shop's currency (e.g., 25.0 rupees).
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from shopbook.domain.calculator import parse_number
from shopbook.domain.models import CategoryName, ProductId

UNCATEGORIZED = CategoryName("Uncategorized")

# Assumed cost price as a fraction of the listed price when no override exists
DEFAULT_COST_RATIO = 0.7

# Allowed subcategories for each category
CATEGORIES: dict[CategoryName, tuple[str, ...]] = {
    CategoryName("Biscuit"): (
        "Good Day",
        "Butter & Bake",
        "Monaco Magic",
        "Dream Lite",
        "Hide & Seek",
        "Marie Gold",
        "Parle-G",
    ),
    CategoryName("Kurkura"): (
        "Rude Bhujia",
        "Bhujia Dal",
        "Moon Dal",
        "Mastana Khush",
        "Kacha Aam",
        "Royal Use",
        "Tooya Chips",
        "Lage",
    ),
    CategoryName("Cigarette"): (
        "Gold Flake",
        "Super Star",
        "Advance",
        "Four Square",
        "Indie Mint",
        "Indie Clove",
        "Gold Flake King",
        "Charm",
        "Charm King",
        "Editions",
        "Black Fite",
        "Royal White",
    ),
    CategoryName("Pani"): ("Bisleri", "Kinley", "Aquafina", "Local Water"),
    CategoryName("Karga Diye Hai"): ("Zeera", "Sprite", "Thums Up", "Other"),
}

# Suggested brands; brand is open-ended
BRANDS: tuple[str, ...] = (
    "Britannia",
    "Parle",
    "Cadbury",
    "ITC",
    "PepsiCo",
    "Coca Cola",
    "Bisleri",
    "Local",
)


@dataclass(frozen=True)
class Product:
    """Immutable catalog product."""

    id: ProductId
    name: str
    price: float
    category: CategoryName | str = ""
    subcategory: str = ""
    brand: str = ""
    in_stock: bool = True
    description: str = ""
    image: str | None = None
    audio: str | None = None


@dataclass(frozen=True)
class FilterSpec:
    """Optional predicates narrowing a product list.

    Price bounds may be given as numbers or as raw text from user input;
    text that does not parse as a number means "no bound".
    """

    search: str = ""
    category: str | None = None
    subcategory: str | None = None
    brand: str | None = None
    min_price: float | str | None = None
    max_price: float | str | None = None


@dataclass(frozen=True)
class CatalogSummary:
    """Immutable catalog analytics."""

    total_value: float
    total_cost: float
    total_profit: float
    total_loss: float
    total_products: int
    in_stock_products: int
    out_of_stock_products: int
    avg_price: float
    profit_margin: float


SAMPLE_PRODUCTS: tuple[dict[str, Any], ...] = (
    {
        "name": "Good Day",
        "price": 25.0,
        "category": "Biscuit",
        "subcategory": "",
        "brand": "Britannia",
        "description": "Delicious coconut cookies",
        "in_stock": True,
    },
)


def validate_product(
    name: str,
    price: float,
    category: str,
    subcategory: str = "",
) -> str | None:
    """Check product fields before creation.

    Args:
        name: Product name.
        price: Listed price.
        category: Category name, must be in CATEGORIES.
        subcategory: Optional subcategory, must belong to the category when given.

    Returns:
        Error message, or None if the product is valid.
    """
    if not name or not name.strip():
        return "Product name is required"
    if not math.isfinite(price) or price <= 0:
        return "Price must be positive"
    if not category:
        return "Category is required"
    if category not in CATEGORIES:
        return f"Unknown category '{category}' (choose from: {', '.join(CATEGORIES)})"
    if subcategory and subcategory not in CATEGORIES[CategoryName(category)]:
        return f"Subcategory '{subcategory}' does not belong to {category}"
    return None


def parse_price_bound(bound: float | str | None) -> float | None:
    """Convert a filter price bound to a number.

    Args:
        bound: Number, text, or None. Text is read by its leading numeric
            part, so "30abc" is 30.

    Returns:
        The bound as a float, or None when absent or without a numeric prefix.
    """
    if bound is None:
        return None
    if isinstance(bound, (int, float)):
        return None if math.isnan(bound) else float(bound)

    value = parse_number(bound)
    return None if math.isnan(value) else value


def matches_filter(product: Product, filters: FilterSpec) -> bool:
    """Check whether a product satisfies every predicate of a filter.

    Subcategory is tested on its own, independently of the category predicate.

    Args:
        product: Product to test.
        filters: Filter criteria.

    Returns:
        True if all set predicates hold.
    """
    term = filters.search.lower()
    if term and term not in product.name.lower() and term not in product.brand.lower():
        return False
    if filters.category and product.category != filters.category:
        return False
    if filters.subcategory and product.subcategory != filters.subcategory:
        return False
    if filters.brand and product.brand != filters.brand:
        return False

    min_price = parse_price_bound(filters.min_price)
    if min_price is not None and product.price < min_price:
        return False

    max_price = parse_price_bound(filters.max_price)
    if max_price is not None and product.price > max_price:
        return False

    return True


def filter_products(products: Iterable[Product], filters: FilterSpec | None = None) -> list[Product]:
    """Filter products, preserving their original order.

    Args:
        products: Products to filter.
        filters: Filter criteria. None matches everything.

    Returns:
        Products matching all predicates.
    """
    if filters is None:
        filters = FilterSpec()
    return [product for product in products if matches_filter(product, filters)]


def group_products(products: Iterable[Product]) -> dict[CategoryName, list[Product]]:
    """Group products by category.

    Args:
        products: Products to group (typically already filtered).

    Returns:
        Mapping of category to products, in order of each category's first
        appearance. Products without a category go under "Uncategorized".
    """
    groups: dict[CategoryName, list[Product]] = {}
    for product in products:
        category = CategoryName(product.category or UNCATEGORIZED)
        groups.setdefault(category, []).append(product)
    return groups


def product_cost(
    product: Product,
    cost_map: Mapping[str, float],
    cost_ratio: float = DEFAULT_COST_RATIO,
) -> float:
    """Get the assumed cost price of a product.

    Args:
        product: Product to cost.
        cost_map: Cost overrides keyed by product id.
        cost_ratio: Fraction of the listed price used when no override exists.

    Returns:
        Cost price.
    """
    if product.id in cost_map:
        return cost_map[product.id]
    return product.price * cost_ratio


def aggregate_products(
    products: Sequence[Product],
    cost_map: Mapping[str, float] | None = None,
    cost_ratio: float = DEFAULT_COST_RATIO,
) -> CatalogSummary:
    """Compute revenue, cost, profit/loss and stock analytics.

    Args:
        products: Products to aggregate (typically already filtered).
        cost_map: Cost overrides keyed by product id.
        cost_ratio: Fraction of the listed price used when no override exists.

    Returns:
        CatalogSummary. Profit and loss are never both positive.
    """
    if cost_map is None:
        cost_map = {}

    total_value = sum(product.price for product in products)
    total_cost = sum(product_cost(product, cost_map, cost_ratio) for product in products)
    total_products = len(products)
    in_stock = sum(1 for product in products if product.in_stock)

    return CatalogSummary(
        total_value=total_value,
        total_cost=total_cost,
        total_profit=max(0.0, total_value - total_cost),
        total_loss=max(0.0, total_cost - total_value),
        total_products=total_products,
        in_stock_products=in_stock,
        out_of_stock_products=total_products - in_stock,
        avg_price=total_value / total_products if total_products > 0 else 0.0,
        profit_margin=(total_value - total_cost) / total_value * 100 if total_value > 0 else 0.0,
    )


def product_to_dict(product: Product) -> dict[str, Any]:
    """Serialize a product to a JSON-compatible dictionary."""
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "category": product.category,
        "subcategory": product.subcategory,
        "brand": product.brand,
        "inStock": product.in_stock,
        "description": product.description,
        "image": product.image,
        "audioRecording": product.audio,
    }


def product_from_dict(data: Mapping[str, Any]) -> Product:
    """Deserialize a product from a stored dictionary.

    Args:
        data: Stored product document.

    Returns:
        Product.

    Raises:
        KeyError: If the id, name or price is missing.
        ValueError: If the price is not numeric.
    """
    return Product(
        id=ProductId(str(data["id"])),
        name=str(data["name"]),
        price=float(data["price"]),
        category=data.get("category") or "",
        subcategory=data.get("subcategory") or "",
        brand=data.get("brand") or "",
        in_stock=bool(data.get("inStock", True)),
        description=data.get("description") or "",
        image=data.get("image") or None,
        audio=data.get("audioRecording") or None,
    )
