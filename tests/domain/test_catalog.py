"""Tests for shopbook.domain.catalog pure functions."""

import pytest

from shopbook.domain.catalog import (
    UNCATEGORIZED,
    FilterSpec,
    Product,
    aggregate_products,
    filter_products,
    group_products,
    parse_price_bound,
    product_cost,
    product_from_dict,
    product_to_dict,
    validate_product,
)
from shopbook.domain.models import CategoryName, ProductId


def make_product(
    product_id: str,
    name: str,
    price: float,
    category: str = "",
    subcategory: str = "",
    brand: str = "",
    in_stock: bool = True,
) -> Product:
    return Product(
        id=ProductId(product_id),
        name=name,
        price=price,
        category=category,
        subcategory=subcategory,
        brand=brand,
        in_stock=in_stock,
    )


GOOD_DAY = make_product("1", "Good Day", 25, "Biscuit", "Good Day", "Britannia", True)
GOLD_FLAKE = make_product("2", "Gold Flake", 150, "Cigarette", "Gold Flake", "ITC", False)
BISLERI = make_product("3", "Bisleri 1L", 20, "Pani", "Bisleri", "Bisleri", True)
MARIE = make_product("4", "Marie Gold", 30, "Biscuit", "Marie Gold", "Britannia", True)
LOOSE = make_product("5", "Loose Toffee", 1, "", "", "Local", True)

PRODUCTS = [GOOD_DAY, GOLD_FLAKE, BISLERI, MARIE, LOOSE]


class TestFilterProducts:
    """Tests for filter_products."""

    def test_empty_filter_is_identity(self) -> None:
        """Should return every product, in order, for an empty filter."""
        assert filter_products(PRODUCTS, FilterSpec()) == PRODUCTS
        assert filter_products(PRODUCTS) == PRODUCTS

    def test_search_matches_name_case_insensitively(self) -> None:
        """Should match search text against product names ignoring case."""
        result = filter_products(PRODUCTS, FilterSpec(search="GOLD"))
        assert result == [GOLD_FLAKE, MARIE]

    def test_search_matches_brand(self) -> None:
        """Should match search text against brands."""
        result = filter_products(PRODUCTS, FilterSpec(search="britannia"))
        assert result == [GOOD_DAY, MARIE]

    def test_category_filter(self) -> None:
        """Should keep only products in the category."""
        result = filter_products(PRODUCTS, FilterSpec(category="Biscuit"))
        assert result == [GOOD_DAY, MARIE]

    def test_subcategory_filter_is_independent_of_category(self) -> None:
        """Should match subcategory without requiring a category filter."""
        result = filter_products(PRODUCTS, FilterSpec(subcategory="Bisleri"))
        assert result == [BISLERI]

    def test_subcategory_and_category_must_both_match(self) -> None:
        """Should AND the category and subcategory predicates."""
        result = filter_products(PRODUCTS, FilterSpec(category="Biscuit", subcategory="Bisleri"))
        assert result == []

    def test_brand_filter(self) -> None:
        """Should keep only products of the brand."""
        result = filter_products(PRODUCTS, FilterSpec(brand="ITC"))
        assert result == [GOLD_FLAKE]

    def test_price_range_is_inclusive(self) -> None:
        """Should include products priced exactly at the bounds."""
        result = filter_products(PRODUCTS, FilterSpec(min_price=20, max_price=30))
        assert result == [GOOD_DAY, BISLERI, MARIE]

    def test_price_bounds_as_text(self) -> None:
        """Should accept numeric text for price bounds."""
        result = filter_products(PRODUCTS, FilterSpec(min_price="100"))
        assert result == [GOLD_FLAKE]

    def test_unparseable_bounds_are_ignored(self) -> None:
        """Should treat bounds without a numeric prefix as absent, not as zero."""
        result = filter_products(PRODUCTS, FilterSpec(min_price="abc", max_price="cheap"))
        assert result == PRODUCTS

    def test_bound_uses_leading_number(self) -> None:
        """Should read "30abc" as a minimum price of 30."""
        result = filter_products([GOOD_DAY, GOLD_FLAKE], FilterSpec(min_price="30abc"))
        assert result == [GOLD_FLAKE]

    def test_result_is_ordered_subsequence(self) -> None:
        """Should preserve the relative order of the input."""
        result = filter_products(PRODUCTS, FilterSpec(search="o"))
        positions = [PRODUCTS.index(product) for product in result]
        assert positions == sorted(positions)

    def test_example_min_price(self) -> None:
        """Should keep only Gold Flake for a minimum price of 30 over the sample pair."""
        result = filter_products([GOOD_DAY, GOLD_FLAKE], FilterSpec(search="", min_price=30))
        assert result == [GOLD_FLAKE]


class TestParsePriceBound:
    """Tests for parse_price_bound."""

    @pytest.mark.parametrize("bound", [None, "", "   ", "abc", "NaN", float("nan")])
    def test_absent_bounds(self, bound: float | str | None) -> None:
        """Should return None for absent or unparseable bounds."""
        assert parse_price_bound(bound) is None

    def test_numeric_bounds(self) -> None:
        """Should pass numbers through and parse numeric text."""
        assert parse_price_bound(0) == 0.0
        assert parse_price_bound(" 12.5 ") == 12.5

    @pytest.mark.parametrize(("bound", "expected"), [("30abc", 30.0), ("12.5.3", 12.5), ("1e2x", 100.0)])
    def test_leading_numeric_part(self, bound: str, expected: float) -> None:
        """Should parse the longest leading numeric part of the text."""
        assert parse_price_bound(bound) == expected


class TestGroupProducts:
    """Tests for group_products."""

    def test_groups_in_first_occurrence_order(self) -> None:
        """Should key groups by category in order of first appearance."""
        groups = group_products(PRODUCTS)

        assert list(groups) == ["Biscuit", "Cigarette", "Pani", UNCATEGORIZED]
        assert groups[CategoryName("Biscuit")] == [GOOD_DAY, MARIE]

    def test_missing_category_goes_to_uncategorized(self) -> None:
        """Should place products without a category in "Uncategorized"."""
        groups = group_products([LOOSE])
        assert groups == {UNCATEGORIZED: [LOOSE]}

    def test_partition_is_exhaustive_and_disjoint(self) -> None:
        """Should place every product in exactly one group."""
        groups = group_products(PRODUCTS)
        grouped = [product for members in groups.values() for product in members]

        assert sorted(p.id for p in grouped) == sorted(p.id for p in PRODUCTS)
        assert len(grouped) == len(PRODUCTS)

    def test_empty_input(self) -> None:
        """Should return no groups for no products."""
        assert group_products([]) == {}


class TestAggregateProducts:
    """Tests for aggregate_products and product_cost."""

    def test_example_single_product(self) -> None:
        """Should compute value 150, cost 105, profit 45 and margin 30% for Gold Flake."""
        summary = aggregate_products([GOLD_FLAKE], {})

        assert summary.total_value == pytest.approx(150)
        assert summary.total_cost == pytest.approx(105)
        assert summary.total_profit == pytest.approx(45)
        assert summary.total_loss == 0
        assert summary.profit_margin == pytest.approx(30.0)
        assert summary.total_products == 1
        assert summary.in_stock_products == 0
        assert summary.out_of_stock_products == 1

    def test_empty_input_guards_division(self) -> None:
        """Should report zero average price and margin for no products."""
        summary = aggregate_products([], {"1": 10.0})

        assert summary.avg_price == 0
        assert summary.profit_margin == 0
        assert summary.total_products == 0

    def test_cost_override_used(self) -> None:
        """Should prefer the cost map over the default ratio."""
        summary = aggregate_products([GOOD_DAY], {"1": 30.0})

        assert summary.total_cost == pytest.approx(30)
        assert summary.total_profit == 0
        assert summary.total_loss == pytest.approx(5)
        assert summary.profit_margin == pytest.approx(-20.0)

    def test_zero_cost_override_is_respected(self) -> None:
        """Should use an explicit zero cost rather than the default."""
        assert product_cost(GOOD_DAY, {"1": 0.0}) == 0.0

    def test_profit_and_loss_are_exclusive(self) -> None:
        """Should never report both profit and loss."""
        for costs in ({}, {"1": 100.0}, {"2": 10.0}, {"1": 25.0}):
            summary = aggregate_products(PRODUCTS, costs)
            assert summary.total_profit == 0 or summary.total_loss == 0

    def test_stock_counts_and_average(self) -> None:
        """Should count stock status and average the prices."""
        summary = aggregate_products(PRODUCTS)

        assert summary.total_products == 5
        assert summary.in_stock_products == 4
        assert summary.out_of_stock_products == 1
        assert summary.avg_price == pytest.approx(226 / 5)

    def test_custom_cost_ratio(self) -> None:
        """Should apply a custom default cost ratio."""
        summary = aggregate_products([GOLD_FLAKE], cost_ratio=0.5)
        assert summary.total_cost == pytest.approx(75)


class TestValidateProduct:
    """Tests for validate_product."""

    def test_valid_product(self) -> None:
        """Should accept a complete product."""
        assert validate_product("Good Day", 25, "Biscuit", "Good Day") is None

    def test_valid_without_subcategory(self) -> None:
        """Should accept an empty subcategory."""
        assert validate_product("Good Day", 25, "Biscuit") is None

    def test_requires_name(self) -> None:
        """Should reject a blank name."""
        assert validate_product("  ", 25, "Biscuit") == "Product name is required"

    def test_requires_positive_price(self) -> None:
        """Should reject zero prices."""
        assert validate_product("Good Day", 0, "Biscuit") == "Price must be positive"

    def test_rejects_unknown_category(self) -> None:
        """Should reject categories outside the table."""
        error = validate_product("Good Day", 25, "Sweets")
        assert error is not None
        assert "Unknown category" in error

    def test_rejects_subcategory_from_other_category(self) -> None:
        """Should reject a subcategory that belongs to another category."""
        error = validate_product("Gold Flake", 150, "Biscuit", "Gold Flake")
        assert error == "Subcategory 'Gold Flake' does not belong to Biscuit"


class TestProductSerialization:
    """Tests for product_to_dict and product_from_dict."""

    def test_reads_stored_document(self) -> None:
        """Should read the stored camelCase document with optional fields missing."""
        product = product_from_dict({"id": 7, "name": "Kinley", "price": "20", "category": "Pani", "inStock": False})

        assert product.id == "7"
        assert product.price == 20.0
        assert product.in_stock is False
        assert product.image is None
        assert product.subcategory == ""

    def test_writes_media_references(self) -> None:
        """Should keep opaque media references."""
        product = Product(id=ProductId("1"), name="A", price=1.0, image="photo.jpg", audio="note.webm")
        data = product_to_dict(product)

        assert data["image"] == "photo.jpg"
        assert data["audioRecording"] == "note.webm"
