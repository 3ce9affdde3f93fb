"""Pure functions for income/expense transactions.

This module contains the functional core for ledger operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Amounts are positive decimals; the transaction kind carries the direction.
"""

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from shopbook.domain.catalog import Product
from shopbook.domain.models import TRANSACTION_KINDS, TransactionId, TransactionKind

_TIME_PATTERN = re.compile(r"(?:[01]\d|2[0-3]):[0-5]\d")


@dataclass(frozen=True)
class Transaction:
    """Immutable income or expense record."""

    id: TransactionId
    name: str
    amount: float
    date: str
    time: str
    kind: TransactionKind
    audio: str | None = None
    photo: str | None = None


@dataclass(frozen=True)
class LedgerSummary:
    """Immutable totals over a set of transactions."""

    total_income: float
    total_expense: float
    net: float

    @property
    def is_profit(self) -> bool:
        return self.net >= 0


def create_transaction(
    txn_id: TransactionId,
    name: str,
    amount: float,
    date: str,
    time: str,
    kind: str,
    audio: str | None = None,
    photo: str | None = None,
) -> tuple[Transaction | None, str | None]:
    """Validate input and build a transaction.

    Args:
        txn_id: New transaction identifier.
        name: Transaction name (required, surrounding whitespace is stripped).
        amount: Amount, must be positive.
        date: Date (YYYY-MM-DD).
        time: Local time (HH:MM).
        kind: "income" or "expense".
        audio: Optional audio note reference.
        photo: Optional photo reference.

    Returns:
        Tuple of (transaction, error) where exactly one is None.
    """
    if not name or not name.strip():
        return None, "Transaction name is required"
    if not math.isfinite(amount) or amount <= 0:
        return None, "Amount must be positive"
    if kind not in TRANSACTION_KINDS:
        return None, f"Type must be 'income' or 'expense', not '{kind}'"
    if not _TIME_PATTERN.fullmatch(time):
        return None, f"Time must be HH:MM, not '{time}'"

    return (
        Transaction(
            id=txn_id,
            name=name.strip(),
            amount=amount,
            date=date,
            time=time,
            kind=kind,  # type: ignore[arg-type]
            audio=audio,
            photo=photo,
        ),
        None,
    )


def purchase_transaction(txn_id: TransactionId, product: Product, date: str, time: str) -> Transaction:
    """Build the expense recorded when a product is bought.

    Args:
        txn_id: New transaction identifier.
        product: Product being bought.
        date: Date (YYYY-MM-DD).
        time: Local time (HH:MM).

    Returns:
        Expense transaction for the product's price.
    """
    return Transaction(
        id=txn_id,
        name=f"Purchase: {product.name}",
        amount=product.price,
        date=date,
        time=time,
        kind="expense",
    )


def summarize_transactions(transactions: Iterable[Transaction]) -> LedgerSummary:
    """Total income and expense and compute the net amount.

    Args:
        transactions: Transactions to total.

    Returns:
        LedgerSummary; a net of exactly zero counts as profit.
    """
    income = 0.0
    expense = 0.0
    for txn in transactions:
        if txn.kind == "income":
            income += txn.amount
        else:
            expense += txn.amount
    return LedgerSummary(total_income=income, total_expense=expense, net=income - expense)


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    """Serialize a transaction to a JSON-compatible dictionary."""
    return {
        "id": txn.id,
        "name": txn.name,
        "amount": txn.amount,
        "date": txn.date,
        "time": txn.time,
        "type": txn.kind,
        "audioUrl": txn.audio,
        "photoUrl": txn.photo,
    }


def transaction_from_dict(data: Mapping[str, Any]) -> Transaction:
    """Deserialize a transaction from a stored dictionary.

    Args:
        data: Stored transaction document.

    Returns:
        Transaction.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If the amount is not numeric or the type is unknown.
    """
    kind = data["type"]
    if kind not in TRANSACTION_KINDS:
        raise ValueError(f"Unknown transaction type: {kind!r}")

    return Transaction(
        id=TransactionId(str(data["id"])),
        name=str(data["name"]),
        amount=float(data["amount"]),
        date=str(data["date"]),
        time=str(data.get("time") or ""),
        kind=kind,
        audio=data.get("audioUrl") or None,
        photo=data.get("photoUrl") or None,
    )
