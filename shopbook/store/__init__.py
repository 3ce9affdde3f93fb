"""Store layer - provides persistence for the application.

This module re-exports the public store API for easy importing.
"""

from shopbook.store.queries import get_document, set_documents
from shopbook.store.repository import Store, next_id
from shopbook.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "get_document",
    "set_documents",
    # Repository
    "Store",
    "next_id",
]
