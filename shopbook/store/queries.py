"""Database query functions for the key/value document table."""

import json
import sqlite3
from pathlib import Path
from typing import Any

from shopbook.store.schema import get_db_path


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def get_document(key: str, default: Any = None, db_path: Path | None = None) -> Any:
    """Get a stored JSON document.

    Args:
        key: Document key (e.g., "products").
        default: Value returned when the key is missing.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Decoded document or default.

    Raises:
        sqlite3.Error: If database operation fails.
        ValueError: If the stored document is not valid JSON.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM documents WHERE key = ?", (key,))
        row = cursor.fetchone()
        if row is None:
            return default
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt document '{key}': {e}") from e


def set_documents(documents: dict[str, Any], db_path: Path | None = None) -> None:
    """Store several JSON documents in a single transaction.

    Args:
        documents: Mapping of key to JSON-compatible value.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            for key, value in documents.items():
                cursor.execute(
                    """
                    INSERT INTO documents (key, value, updated_at) VALUES (?, ?, datetime('now'))
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, json.dumps(value)),
                )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

