"""Domain models and types for shopbook.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from shopbook.domain.models import TRANSACTION_KINDS, CategoryName, ProductId, TransactionId, TransactionKind

__all__ = ["ProductId", "TransactionId", "CategoryName", "TransactionKind", "TRANSACTION_KINDS"]
