"""Transaction recording with capped history."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from personal_bank.models import (
    Ledger,
    Transaction,
    TransactionCategory,
    TransactionScope,
)


DEFAULT_HISTORY_LIMIT = 25


def record_transaction(
    ledger: Ledger,
    description: str,
    amount: Decimal,
    category: TransactionCategory,
    scope: TransactionScope = TransactionScope.BOTH,
    on: Optional[dt.date] = None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> tuple[Ledger, Transaction]:
    """
    Put a new transaction at the front of the history.

    The history is then cut to `limit` entries, dropping the oldest.
    There is no deduplication and no date sorting: the list is newest
    first because every insert goes to the front.

    Returns:
        (new_ledger, transaction)
    """
    transaction = Transaction(
        date=on or dt.date.today(),
        description=description,
        amount=amount,
        category=category,
        scope=scope,
    )
    history = (transaction, *ledger.transactions)[:limit]
    return ledger.model_copy(update={"transactions": history}), transaction
