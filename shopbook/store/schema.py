"""Database schema initialization."""

import json
import logging
import os
import sqlite3
from pathlib import Path
from typing import Any

from shopbook.domain.catalog import SAMPLE_PRODUCTS, Product, product_to_dict
from shopbook.domain.models import ProductId

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "products"
TRANSACTIONS_KEY = "transactions"
PRODUCT_COSTS_KEY = "product-costs"
LAST_ID_KEY = "last-id"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "shopbook" / "shopbook.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def sample_product_documents() -> list[dict[str, Any]]:
    """Build stored documents for the sample catalog, numbering ids from 1."""
    return [
        product_to_dict(Product(id=ProductId(str(index)), **product))
        for index, product in enumerate(SAMPLE_PRODUCTS, 1)
    ]


def init_database(db_path: Path | None = None, seed_samples: bool = True) -> None:
    """Initialize the database with the key/value schema and default documents.

    Existing documents are never overwritten.

    Args:
        db_path: Path to the database file. If None, uses default location.
        seed_samples: Whether a new catalog starts with the sample products.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS documents (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        defaults = {
            PRODUCTS_KEY: sample_product_documents() if seed_samples else [],
            TRANSACTIONS_KEY: [],
            PRODUCT_COSTS_KEY: {},
            LAST_ID_KEY: 0,
        }
        for key, value in defaults.items():
            cursor.execute(
                "INSERT OR IGNORE INTO documents (key, value) VALUES (?, ?)",
                (key, json.dumps(value)),
            )

        conn.commit()
        logger.debug("Initialized database at %s", db_path)

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
