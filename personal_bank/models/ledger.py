"""
Core Data Models for Personal Bank

These models define the schemas for all state flowing through the system.
They are designed to:
1. Keep every monetary value at exactly two decimal places
2. Be immutable, so each operation produces a new snapshot
3. Serialize to the same camelCase JSON document that is persisted and exported

Money is held as Decimal and rounded half away from zero at the cent.
In JSON it is written as a plain number.
"""

import math
import datetime as dt
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel


CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Largest amount or balance accepted. Fifteen significant digits survive
# the JSON number round trip exactly.
MAX_MONEY = Decimal("9999999999999.99")


def round_money(value: Any) -> Decimal:
    """
    Round a numeric value to two decimal places, half away from zero.

    Floats go through their shortest repr so that 0.1 stays 0.1.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be a number")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("Amount must be finite")
        value = Decimal(repr(value))
    elif isinstance(value, int):
        value = Decimal(value)
    elif not isinstance(value, Decimal):
        raise ValueError("Amount must be a number")

    if not value.is_finite():
        raise ValueError("Amount must be finite")
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Amount out of range: {value}") from e


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionCategory(str, Enum):
    """Kind of activity a transaction records."""
    TRANSFER = "Transfer"
    BILLS = "Bills"
    INCOME = "Income"
    GOAL = "Goal"
    ADJUSTMENT = "Adjustment"


class TransactionScope(str, Enum):
    """
    Which account a transaction is attributed to in history views.

    BOTH transactions show up under checking and savings.
    """
    CHECKING = "checking"
    SAVINGS = "savings"
    BOTH = "both"


class Account(str, Enum):
    """The two balances a ledger holds."""
    CHECKING = "checking"
    SAVINGS = "savings"

    @property
    def label(self) -> str:
        return self.value.title()


class TransferDirection(str, Enum):
    """Direction of a transfer between the two accounts."""
    CHECKING_TO_SAVINGS = "checking_to_savings"
    SAVINGS_TO_CHECKING = "savings_to_checking"

    @property
    def source(self) -> Account:
        if self is TransferDirection.CHECKING_TO_SAVINGS:
            return Account.CHECKING
        return Account.SAVINGS

    @property
    def target(self) -> Account:
        if self is TransferDirection.CHECKING_TO_SAVINGS:
            return Account.SAVINGS
        return Account.CHECKING


# =============================================================================
# LEDGER MODELS
# =============================================================================

class _CamelModel(BaseModel):
    """Frozen model that reads and writes camelCase field names."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Transaction(_CamelModel):
    """
    A single recorded activity.

    Created only by balance operations and never modified afterwards.
    """

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        min_length=1,
        description="Opaque unique identifier"
    )
    date: dt.date = Field(
        default_factory=dt.date.today,
        description="Calendar date the transaction was recorded"
    )
    description: str = Field(
        ...,
        description="Human-readable description"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount; negative for money leaving an account"
    )
    category: TransactionCategory
    scope: TransactionScope = Field(
        default=TransactionScope.BOTH,
        description="Account the transaction is attributed to"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        return round_money(v)

    @field_validator('scope', mode='before')
    @classmethod
    def default_scope(cls, v: Any) -> Any:
        """Records written without a scope belong to both accounts."""
        return TransactionScope.BOTH if v is None else v

    @field_serializer('amount', when_used='json')
    def serialize_amount(self, v: Decimal) -> float:
        return float(v)


class Ledger(_CamelModel):
    """
    The complete financial state: two balances, an optional goal and
    the most recent transactions (newest first).

    A ledger is a snapshot. Operations return a new ledger rather than
    mutating this one.
    """

    checking_balance: Decimal = Field(
        default=ZERO,
        description="Checking account balance"
    )
    savings_balance: Decimal = Field(
        default=ZERO,
        description="Savings account balance"
    )
    savings_goal: Optional[Decimal] = Field(
        default=None,
        description="Savings target, if one has been set"
    )
    transactions: tuple[Transaction, ...] = Field(
        default=(),
        description="Transaction history, newest first"
    )

    @field_validator('checking_balance', 'savings_balance', mode='before')
    @classmethod
    def validate_balance(cls, v: Any) -> Decimal:
        return round_money(v)

    @field_validator('savings_goal', mode='before')
    @classmethod
    def validate_goal(cls, v: Any) -> Optional[Decimal]:
        """A goal that is not a number is treated as no goal."""
        try:
            return round_money(v)
        except ValueError:
            return None

    @field_serializer('checking_balance', 'savings_balance', when_used='json')
    def serialize_balance(self, v: Decimal) -> float:
        return float(v)

    @field_serializer('savings_goal', when_used='json')
    def serialize_goal(self, v: Optional[Decimal]) -> Optional[float]:
        return None if v is None else float(v)

    @classmethod
    def empty(cls) -> "Ledger":
        """A ledger with zero balances, no goal and no history."""
        return cls()

    def balance(self, account: Account) -> Decimal:
        if account is Account.CHECKING:
            return self.checking_balance
        return self.savings_balance

    def with_balance(self, account: Account, amount: Decimal) -> "Ledger":
        """Return a copy with one balance replaced (re-rounded)."""
        field = "checking_balance" if account is Account.CHECKING else "savings_balance"
        return self.model_copy(update={field: round_money(amount)})

    def to_document(self) -> dict:
        """JSON-ready dict in the persisted/exported shape."""
        return self.model_dump(mode="json", by_alias=True)


class SessionUser(_CamelModel):
    """
    The persisted session marker.

    Its presence means a user is logged in. There is no token and no expiry.
    """

    name: str = Field(
        ...,
        min_length=1,
        description="Display name of the logged-in user"
    )


# =============================================================================
# RESULT MODELS
# =============================================================================

class OperationResult(BaseModel):
    """
    Outcome of a balance operation.

    Failed operations carry a displayable message and the unchanged ledger.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    ledger: Ledger
    message: Optional[str] = None
    transaction: Optional[Transaction] = Field(
        default=None,
        description="The transaction recorded by a successful operation"
    )


class LoginResult(BaseModel):
    """Outcome of a login attempt."""

    model_config = ConfigDict(frozen=True)

    success: bool
    user: Optional[SessionUser] = None
    message: Optional[str] = None


class GoalProgress(BaseModel):
    """How far the savings balance is towards the savings goal."""

    model_config = ConfigDict(frozen=True)

    goal: Decimal
    saved: Decimal
    percent: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Share of the goal reached, capped at 100"
    )

    @property
    def display_percent(self) -> int:
        """Percent rounded to a whole number for badges."""
        return int(Decimal(str(self.percent)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @property
    def is_reached(self) -> bool:
        return self.saved >= self.goal
