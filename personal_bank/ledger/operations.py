"""
Balance Operations

Every user action on the ledger goes through here:
transfer, pay bill, add money, set goal, edit a balance, clear all data.

Each operation is a validate-then-commit step:
1. Parse and validate the raw form input
2. Check funds against the pre-mutation balance of the debited account
3. Build the new ledger snapshot and record one transaction
4. Persist the full snapshot, then make it current

Module-level functions are pure: they take a ledger and return a new one,
raising a LedgerOperationError when the input is rejected. LedgerService
owns the current snapshot and turns those errors into an OperationResult
with a displayable message. Validation errors never escape the service.
"""

import datetime as dt
from decimal import Decimal
from typing import Callable, Optional

from personal_bank.config import get_settings
from personal_bank.ledger.amounts import parse_amount
from personal_bank.ledger.recorder import DEFAULT_HISTORY_LIMIT, record_transaction
from personal_bank.logger import get_logger
from personal_bank.models import (
    MAX_MONEY,
    ZERO,
    Account,
    Ledger,
    OperationResult,
    Transaction,
    TransactionCategory,
    TransactionScope,
    TransferDirection,
    round_money,
)
from personal_bank.services.storage import LedgerStore


logger = get_logger(__name__)


# =============================================================================
# ERRORS
# =============================================================================

class LedgerOperationError(Exception):
    """Base exception for a rejected ledger operation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAmountError(LedgerOperationError):
    """Amount is not a finite number greater than zero."""
    pass


class AmountTooLargeError(InvalidAmountError):
    """A balance would grow past MAX_MONEY."""
    pass


class MissingDescriptionError(LedgerOperationError):
    """A required description was left empty."""
    pass


class InsufficientFundsError(LedgerOperationError):
    """Amount exceeds the balance of the account being debited."""

    def __init__(self, account: Account, requested: Decimal, available: Decimal):
        super().__init__(f"Not enough funds in {account.label}.")
        self.account = account
        self.requested = requested
        self.available = available


# =============================================================================
# PURE OPERATIONS
# =============================================================================

Outcome = tuple[Ledger, Transaction]


def _require_amount(raw: Optional[str], message: str = "Enter a valid amount.") -> Decimal:
    amount = parse_amount(raw)
    if amount is None:
        raise InvalidAmountError(message)
    return amount


def _require_funds(ledger: Ledger, account: Account, amount: Decimal) -> None:
    available = ledger.balance(account)
    if amount > available:
        raise InsufficientFundsError(account, amount, available)


def _credit(ledger: Ledger, account: Account, amount: Decimal) -> Ledger:
    balance = ledger.balance(account) + amount
    if balance > MAX_MONEY:
        raise AmountTooLargeError("Amount too large.")
    return ledger.with_balance(account, balance)


def transfer(
    ledger: Ledger,
    direction: TransferDirection,
    raw_amount: Optional[str],
    *,
    on: Optional[dt.date] = None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> Outcome:
    """Move money between checking and savings."""
    amount = _require_amount(raw_amount)
    source, target = direction.source, direction.target
    _require_funds(ledger, source, amount)

    updated = _credit(ledger, target, amount)
    updated = updated.with_balance(source, ledger.balance(source) - amount)
    if direction is TransferDirection.CHECKING_TO_SAVINGS:
        description, signed = "Transfer to Savings", -amount
    else:
        description, signed = "Transfer to Checking", amount

    return record_transaction(
        updated,
        description=description,
        amount=signed,
        category=TransactionCategory.TRANSFER,
        scope=TransactionScope.BOTH,
        on=on,
        limit=limit,
    )


def pay_bill(
    ledger: Ledger,
    description: Optional[str],
    raw_amount: Optional[str],
    *,
    on: Optional[dt.date] = None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> Outcome:
    """Pay a bill out of checking."""
    name = (description or "").strip()
    if not name:
        raise MissingDescriptionError("Enter a bill name/description.")
    amount = _require_amount(raw_amount)
    _require_funds(ledger, Account.CHECKING, amount)

    updated = ledger.with_balance(Account.CHECKING, ledger.checking_balance - amount)
    return record_transaction(
        updated,
        description=f"Bill Payment: {name}",
        amount=-amount,
        category=TransactionCategory.BILLS,
        scope=TransactionScope.CHECKING,
        on=on,
        limit=limit,
    )


def add_money(
    ledger: Ledger,
    raw_amount: Optional[str],
    *,
    on: Optional[dt.date] = None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> Outcome:
    """Deposit money into savings."""
    amount = _require_amount(raw_amount)
    updated = _credit(ledger, Account.SAVINGS, amount)
    return record_transaction(
        updated,
        description="Add Money to Savings",
        amount=amount,
        category=TransactionCategory.INCOME,
        scope=TransactionScope.SAVINGS,
        on=on,
        limit=limit,
    )


def set_goal(
    ledger: Ledger,
    raw_amount: Optional[str],
    *,
    on: Optional[dt.date] = None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> Outcome:
    """Set the savings goal. Balances are untouched."""
    amount = _require_amount(raw_amount, "Enter a valid goal amount.")
    updated = ledger.model_copy(update={"savings_goal": amount})
    return record_transaction(
        updated,
        description="Set savings goal",
        amount=ZERO,
        category=TransactionCategory.GOAL,
        scope=TransactionScope.SAVINGS,
        on=on,
        limit=limit,
    )


def edit_balance(
    ledger: Ledger,
    account: Account,
    raw_amount: Optional[str],
    *,
    on: Optional[dt.date] = None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> Outcome:
    """
    Overwrite one balance with a corrected value.

    The recorded amount is the difference from the balance in `ledger`,
    the snapshot being replaced.
    """
    amount = _require_amount(raw_amount, "Enter a valid balance.")
    delta = round_money(amount - ledger.balance(account))
    updated = ledger.with_balance(account, amount)
    scope = (
        TransactionScope.CHECKING if account is Account.CHECKING
        else TransactionScope.SAVINGS
    )
    return record_transaction(
        updated,
        description="Balance correction",
        amount=delta,
        category=TransactionCategory.ADJUSTMENT,
        scope=scope,
        on=on,
        limit=limit,
    )


# =============================================================================
# SERVICE
# =============================================================================

class LedgerService:
    """
    Owns the current ledger snapshot and applies operations to it.

    Every accepted operation replaces the snapshot and rewrites it to
    storage immediately. Rejected operations leave both untouched and
    report a message instead of raising.
    """

    def __init__(
        self,
        store: LedgerStore,
        ledger: Optional[Ledger] = None,
        history_limit: Optional[int] = None,
    ):
        """
        Initialize the service.

        Args:
            store: Where snapshots are persisted.
            ledger: Starting snapshot. If None, it is loaded from the store.
            history_limit: Maximum history length. Defaults to settings.
        """
        self._store = store
        self._ledger = ledger if ledger is not None else store.load()
        self._limit = (
            history_limit if history_limit is not None
            else get_settings().app.history_limit
        )

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def history_limit(self) -> int:
        return self._limit

    def reload(self) -> Ledger:
        """Re-read the persisted snapshot, e.g. after another tab wrote it."""
        self._ledger = self._store.load()
        return self._ledger

    def _apply(
        self,
        operation: str,
        step: Callable[[Ledger], Outcome],
    ) -> OperationResult:
        before = self._ledger
        try:
            after, transaction = step(before)
        except LedgerOperationError as e:
            logger.warning(
                "ledger_operation_rejected",
                operation=operation,
                reason=type(e).__name__,
                message=e.message,
            )
            return OperationResult(success=False, ledger=before, message=e.message)

        self._store.save(after)
        self._ledger = after
        logger.info(
            "ledger_operation_applied",
            operation=operation,
            transaction_id=transaction.id,
            amount=str(transaction.amount),
            checking=str(after.checking_balance),
            savings=str(after.savings_balance),
        )
        return OperationResult(success=True, ledger=after, transaction=transaction)

    def transfer(self, direction: TransferDirection, raw_amount: Optional[str]) -> OperationResult:
        return self._apply(
            f"transfer_{direction.value}",
            lambda ledger: transfer(ledger, direction, raw_amount, limit=self._limit),
        )

    def transfer_to_savings(self, raw_amount: Optional[str]) -> OperationResult:
        return self.transfer(TransferDirection.CHECKING_TO_SAVINGS, raw_amount)

    def transfer_to_checking(self, raw_amount: Optional[str]) -> OperationResult:
        return self.transfer(TransferDirection.SAVINGS_TO_CHECKING, raw_amount)

    def pay_bill(self, description: Optional[str], raw_amount: Optional[str]) -> OperationResult:
        return self._apply(
            "pay_bill",
            lambda ledger: pay_bill(ledger, description, raw_amount, limit=self._limit),
        )

    def add_money(self, raw_amount: Optional[str]) -> OperationResult:
        return self._apply(
            "add_money",
            lambda ledger: add_money(ledger, raw_amount, limit=self._limit),
        )

    def set_goal(self, raw_amount: Optional[str]) -> OperationResult:
        return self._apply(
            "set_goal",
            lambda ledger: set_goal(ledger, raw_amount, limit=self._limit),
        )

    def edit_balance(self, account: Account, raw_amount: Optional[str]) -> OperationResult:
        return self._apply(
            f"edit_{account.value}_balance",
            lambda ledger: edit_balance(ledger, account, raw_amount, limit=self._limit),
        )

    def edit_checking_balance(self, raw_amount: Optional[str]) -> OperationResult:
        return self.edit_balance(Account.CHECKING, raw_amount)

    def edit_savings_balance(self, raw_amount: Optional[str]) -> OperationResult:
        return self.edit_balance(Account.SAVINGS, raw_amount)

    def clear_all_data(self) -> OperationResult:
        """Reset to the empty ledger and persist it right away."""
        self._ledger = self._store.clear()
        logger.info("ledger_operation_applied", operation="clear_all_data")
        return OperationResult(success=True, ledger=self._ledger)

    def replace(self, ledger: Ledger) -> OperationResult:
        """Make an imported snapshot current and persist it."""
        self._store.save(ledger)
        self._ledger = ledger
        logger.info(
            "ledger_replaced",
            transactions=len(ledger.transactions),
        )
        return OperationResult(success=True, ledger=ledger)
