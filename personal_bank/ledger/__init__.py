"""Ledger logic: amount parsing, transaction recording, operations and views."""

from personal_bank.ledger.amounts import parse_amount
from personal_bank.ledger.history import (
    checking_history,
    find_transaction,
    goal_history,
    goal_progress,
    matches_scope,
    recent_activity,
    savings_history,
    total_balance,
)
from personal_bank.ledger.operations import (
    AmountTooLargeError,
    InsufficientFundsError,
    InvalidAmountError,
    LedgerOperationError,
    LedgerService,
    MissingDescriptionError,
)
from personal_bank.ledger.recorder import DEFAULT_HISTORY_LIMIT, record_transaction

__all__ = [
    "AmountTooLargeError",
    "DEFAULT_HISTORY_LIMIT",
    "InsufficientFundsError",
    "InvalidAmountError",
    "LedgerOperationError",
    "LedgerService",
    "MissingDescriptionError",
    "checking_history",
    "find_transaction",
    "goal_history",
    "goal_progress",
    "matches_scope",
    "parse_amount",
    "recent_activity",
    "record_transaction",
    "savings_history",
    "total_balance",
]
