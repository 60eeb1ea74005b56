"""
History views and derived figures shown on the dashboard.

These are read-only helpers over a Ledger snapshot.
"""

from decimal import Decimal
from typing import Optional

from personal_bank.models import (
    GoalProgress,
    Ledger,
    Transaction,
    TransactionCategory,
    TransactionScope,
)


CHECKING_CATEGORIES = frozenset({
    TransactionCategory.TRANSFER,
    TransactionCategory.BILLS,
    TransactionCategory.ADJUSTMENT,
})

SAVINGS_CATEGORIES = frozenset({
    TransactionCategory.TRANSFER,
    TransactionCategory.INCOME,
    TransactionCategory.GOAL,
    TransactionCategory.ADJUSTMENT,
})


def matches_scope(transaction: Transaction, scope: TransactionScope) -> bool:
    """A transaction scoped to both accounts matches every scope."""
    return transaction.scope in (TransactionScope.BOTH, scope)


def checking_history(ledger: Ledger) -> list[Transaction]:
    """Transfers, bill payments and corrections touching checking."""
    return [
        t for t in ledger.transactions
        if t.category in CHECKING_CATEGORIES and matches_scope(t, TransactionScope.CHECKING)
    ]


def savings_history(ledger: Ledger) -> list[Transaction]:
    """Transfers, deposits, goal changes and corrections touching savings."""
    return [
        t for t in ledger.transactions
        if t.category in SAVINGS_CATEGORIES and matches_scope(t, TransactionScope.SAVINGS)
    ]


def goal_history(ledger: Ledger) -> list[Transaction]:
    return [t for t in ledger.transactions if t.category is TransactionCategory.GOAL]


def recent_activity(ledger: Ledger, limit: int = 5) -> list[Transaction]:
    return list(ledger.transactions[:limit])


def find_transaction(ledger: Ledger, transaction_id: str) -> Optional[Transaction]:
    for t in ledger.transactions:
        if t.id == transaction_id:
            return t
    return None


def total_balance(ledger: Ledger) -> Decimal:
    return ledger.checking_balance + ledger.savings_balance


def goal_progress(ledger: Ledger) -> Optional[GoalProgress]:
    """
    Savings balance as a share of the savings goal.

    Returns None when no goal is set. A negative savings balance counts
    as no progress and anything past the goal is capped at 100%.
    """
    goal = ledger.savings_goal
    if goal is None or goal <= 0:
        return None

    ratio = ledger.savings_balance / goal * 100
    percent = float(min(Decimal(100), max(Decimal(0), ratio)))
    return GoalProgress(goal=goal, saved=ledger.savings_balance, percent=percent)
