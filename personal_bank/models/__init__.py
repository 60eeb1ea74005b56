"""
Data Models Package

This package contains all Pydantic models used in Personal Bank.
All state flowing through the system must conform to these schemas.
"""

from personal_bank.models.ledger import (
    CENT,
    MAX_MONEY,
    ZERO,
    Account,
    GoalProgress,
    Ledger,
    LoginResult,
    OperationResult,
    SessionUser,
    Transaction,
    TransactionCategory,
    TransactionScope,
    TransferDirection,
    round_money,
)

__all__ = [
    "CENT",
    "MAX_MONEY",
    "ZERO",
    "Account",
    "GoalProgress",
    "Ledger",
    "LoginResult",
    "OperationResult",
    "SessionUser",
    "Transaction",
    "TransactionCategory",
    "TransactionScope",
    "TransferDirection",
    "round_money",
]
