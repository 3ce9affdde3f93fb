"""Domain type definitions for shopbook.

These NewTypes provide semantic clarity and help with type checking:
- ProductId: Identifier of a catalog product
- TransactionId: Identifier of an income/expense transaction
- CategoryName: Name of a product category
- TransactionKind: Either "income" or "expense"
"""

from typing import Literal, NewType

# Identifiers are millisecond timestamps rendered as strings (e.g., "1718000000000")
ProductId = NewType("ProductId", str)

TransactionId = NewType("TransactionId", str)

# Category name from the fixed category table
CategoryName = NewType("CategoryName", str)

TransactionKind = Literal["income", "expense"]

TRANSACTION_KINDS: tuple[TransactionKind, ...] = ("income", "expense")
