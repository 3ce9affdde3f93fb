"""The owned in-memory store with explicit load/save lifecycle."""

import logging
import math
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from shopbook.domain.catalog import Product, product_from_dict, product_to_dict
from shopbook.domain.ledger import Transaction, transaction_from_dict, transaction_to_dict
from shopbook.domain.models import ProductId, TransactionId
from shopbook.store.queries import get_document, set_documents
from shopbook.store.schema import LAST_ID_KEY, PRODUCT_COSTS_KEY, PRODUCTS_KEY, TRANSACTIONS_KEY, get_db_path

logger = logging.getLogger(__name__)


def next_id(existing: Iterable[str], now_ms: int | None = None, floor: int = 0) -> str:
    """Generate a timestamp-derived identifier that is never reused.

    Args:
        existing: Identifiers already in use.
        now_ms: Current time in milliseconds. If None, uses the system clock.
        floor: Highest identifier ever issued, including deleted records.

    Returns:
        The current millisecond timestamp, bumped past the floor and the largest
        numeric existing identifier when the clock has not moved beyond them.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    highest = max([floor, *(int(value) for value in existing if value.isdigit())])
    if highest >= now_ms:
        return str(highest + 1)
    return str(now_ms)


@dataclass
class Store:
    """Products, transactions and cost overrides held in memory.

    Mutating methods only change the in-memory collections; call save() to
    persist them. New records are placed first (newest first).
    """

    products: list[Product] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    product_costs: dict[str, float] = field(default_factory=dict)
    last_id: int = 0
    db_path: Path | None = None

    @classmethod
    def load(cls, db_path: Path | None = None) -> "Store":
        """Load all collections from the database.

        Args:
            db_path: Path to the database file. If None, uses default location.

        Returns:
            Loaded store.

        Raises:
            sqlite3.Error: If database operation fails.
            ValueError: If a stored document is malformed.
        """
        if db_path is None:
            db_path = get_db_path()

        raw_products = get_document(PRODUCTS_KEY, [], db_path)
        raw_transactions = get_document(TRANSACTIONS_KEY, [], db_path)
        raw_costs = get_document(PRODUCT_COSTS_KEY, {}, db_path)
        raw_last_id = get_document(LAST_ID_KEY, 0, db_path)

        try:
            products = [product_from_dict(item) for item in raw_products]
            transactions = [transaction_from_dict(item) for item in raw_transactions]
            costs = {str(key): float(value) for key, value in raw_costs.items()}
            last_id = int(raw_last_id)
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed stored record: {e}") from e

        logger.debug(
            "Loaded %d products, %d transactions, %d cost overrides from %s",
            len(products),
            len(transactions),
            len(costs),
            db_path,
        )
        return cls(
            products=products,
            transactions=transactions,
            product_costs=costs,
            last_id=last_id,
            db_path=db_path,
        )

    def save(self) -> None:
        """Persist all collections in a single database transaction.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        set_documents(
            {
                PRODUCTS_KEY: [product_to_dict(product) for product in self.products],
                TRANSACTIONS_KEY: [transaction_to_dict(txn) for txn in self.transactions],
                PRODUCT_COSTS_KEY: self.product_costs,
                LAST_ID_KEY: self.last_id,
            },
            self.db_path,
        )
        logger.debug("Saved store to %s", self.db_path or get_db_path())

    def _issue_id(self, existing: Iterable[str], now_ms: int | None) -> str:
        new_id = next_id(existing, now_ms, self.last_id)
        self.last_id = int(new_id)
        return new_id

    def new_product_id(self, now_ms: int | None = None) -> ProductId:
        return ProductId(self._issue_id((product.id for product in self.products), now_ms))

    def new_transaction_id(self, now_ms: int | None = None) -> TransactionId:
        return TransactionId(self._issue_id((txn.id for txn in self.transactions), now_ms))

    def get_product(self, product_id: str) -> Product | None:
        return next((product for product in self.products if product.id == product_id), None)

    def add_product(self, product: Product) -> None:
        """Add a product to the front of the catalog.

        Raises:
            ValueError: If the identifier is already in use.
        """
        if self.get_product(product.id) is not None:
            raise ValueError(f"Product {product.id} already exists")
        self.products.insert(0, product)

    def delete_product(self, product_id: str) -> Product:
        """Remove a product and its cost override.

        Returns:
            The removed product.

        Raises:
            KeyError: If no product has this identifier.
        """
        product = self.get_product(product_id)
        if product is None:
            raise KeyError(product_id)
        self.products = [p for p in self.products if p.id != product_id]
        self.product_costs.pop(product_id, None)
        return product

    def add_transaction(self, txn: Transaction) -> None:
        """Add a transaction to the front of the ledger.

        Raises:
            ValueError: If the identifier is already in use.
        """
        if any(existing.id == txn.id for existing in self.transactions):
            raise ValueError(f"Transaction {txn.id} already exists")
        self.transactions.insert(0, txn)

    def delete_transaction(self, txn_id: str) -> Transaction:
        """Remove a transaction.

        Returns:
            The removed transaction.

        Raises:
            KeyError: If no transaction has this identifier.
        """
        txn = next((t for t in self.transactions if t.id == txn_id), None)
        if txn is None:
            raise KeyError(txn_id)
        self.transactions = [t for t in self.transactions if t.id != txn_id]
        return txn

    def set_cost(self, product_id: str, cost: float) -> None:
        """Set the assumed cost price of a product.

        Raises:
            KeyError: If no product has this identifier.
            ValueError: If the cost is negative or not a finite number.
        """
        if self.get_product(product_id) is None:
            raise KeyError(product_id)
        if not math.isfinite(cost):
            raise ValueError("Cost must be a finite number")
        if cost < 0:
            raise ValueError("Cost must not be negative")
        self.product_costs[product_id] = cost

    def clear_cost(self, product_id: str) -> bool:
        """Remove a cost override.

        Returns:
            True if an override was removed.
        """
        return self.product_costs.pop(product_id, None) is not None
