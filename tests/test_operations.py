"""Tests for balance operations, the transaction recorder and LedgerService."""

import datetime as dt
import json
from decimal import Decimal

import pytest

from personal_bank.ledger import (
    DEFAULT_HISTORY_LIMIT,
    AmountTooLargeError,
    InsufficientFundsError,
    InvalidAmountError,
    LedgerService,
    MissingDescriptionError,
    record_transaction,
)
from personal_bank.ledger.operations import add_money, edit_balance, pay_bill, transfer
from personal_bank.models import (
    Account,
    Ledger,
    TransactionCategory,
    TransactionScope,
    TransferDirection,
)
from tests.conftest import DATA_KEY


class TestRecordTransaction:
    """Tests for the transaction recorder."""

    def test_inserts_at_front(self):
        ledger = Ledger.empty()
        ledger, first = record_transaction(ledger, "first", Decimal("1"), TransactionCategory.INCOME)
        ledger, second = record_transaction(ledger, "second", Decimal("2"), TransactionCategory.INCOME)
        assert [t.id for t in ledger.transactions] == [second.id, first.id]

    def test_caps_history(self):
        """Only the newest `limit` transactions are kept."""
        ledger = Ledger.empty()
        ids = []
        for i in range(30):
            ledger, tx = record_transaction(
                ledger, f"tx {i}", Decimal("1"), TransactionCategory.INCOME, limit=25,
            )
            ids.append(tx.id)
        assert len(ledger.transactions) == 25
        assert [t.id for t in ledger.transactions] == list(reversed(ids))[:25]

    def test_uses_given_date(self):
        ledger, tx = record_transaction(
            Ledger.empty(), "x", Decimal("1"), TransactionCategory.GOAL, on=dt.date(2024, 1, 2),
        )
        assert tx.date == dt.date(2024, 1, 2)

    def test_does_not_touch_balances(self, starting_ledger):
        updated, _ = record_transaction(starting_ledger, "x", Decimal("5"), TransactionCategory.INCOME)
        assert updated.checking_balance == starting_ledger.checking_balance
        assert updated.savings_balance == starting_ledger.savings_balance
        assert starting_ledger.transactions == ()


class TestPureOperations:
    """The module-level operations raise instead of returning results."""

    def test_transfer_insufficient_funds(self, starting_ledger):
        with pytest.raises(InsufficientFundsError) as exc_info:
            transfer(starting_ledger, TransferDirection.CHECKING_TO_SAVINGS, "500.01")
        error = exc_info.value
        assert error.account is Account.CHECKING
        assert error.requested == Decimal("500.01")
        assert error.available == Decimal("500.00")
        assert error.message == "Not enough funds in Checking."

    def test_pay_bill_missing_description(self, starting_ledger):
        with pytest.raises(MissingDescriptionError):
            pay_bill(starting_ledger, "   ", "10")

    def test_edit_balance_invalid_amount(self, starting_ledger):
        with pytest.raises(InvalidAmountError, match="Enter a valid balance."):
            edit_balance(starting_ledger, Account.SAVINGS, "zero")

    def test_add_money_past_maximum(self):
        full = Ledger(savings_balance=Decimal("9999999999999.99"))
        with pytest.raises(AmountTooLargeError, match="Amount too large."):
            add_money(full, "0.01")

    def test_default_limit(self):
        ledger = Ledger.empty()
        for _ in range(DEFAULT_HISTORY_LIMIT + 3):
            ledger, _ = add_money(ledger, "1")
        assert len(ledger.transactions) == DEFAULT_HISTORY_LIMIT


class TestTransfer:
    """Tests for transfers between checking and savings."""

    def test_checking_to_savings(self, service):
        result = service.transfer(TransferDirection.CHECKING_TO_SAVINGS, "100")

        assert result.success is True
        assert service.ledger.checking_balance == Decimal("400.00")
        assert service.ledger.savings_balance == Decimal("1100.00")

        tx = service.ledger.transactions[0]
        assert tx == result.transaction
        assert tx.description == "Transfer to Savings"
        assert tx.amount == Decimal("-100.00")
        assert tx.category == TransactionCategory.TRANSFER
        assert tx.scope == TransactionScope.BOTH

    def test_savings_to_checking(self, service):
        result = service.transfer_to_checking("250.505")

        assert result.success is True
        assert service.ledger.savings_balance == Decimal("749.49")
        assert service.ledger.checking_balance == Decimal("750.51")
        tx = service.ledger.transactions[0]
        assert tx.description == "Transfer to Checking"
        assert tx.amount == Decimal("250.51")

    def test_whole_balance_can_be_moved(self, service):
        result = service.transfer_to_savings("500")
        assert result.success is True
        assert service.ledger.checking_balance == Decimal("0.00")

    def test_insufficient_funds_changes_nothing(self, service, starting_ledger, kv_store):
        result = service.transfer_to_savings("500.01")

        assert result.success is False
        assert result.message == "Not enough funds in Checking."
        assert result.ledger == starting_ledger
        assert service.ledger == starting_ledger
        assert kv_store.get_item(DATA_KEY) is None

    def test_insufficient_savings(self, service):
        result = service.transfer_to_checking("1,000.01")
        assert result.success is False
        assert result.message == "Not enough funds in Savings."

    def test_invalid_amount(self, service, starting_ledger):
        result = service.transfer_to_savings("-5")
        assert result.success is False
        assert result.message == "Enter a valid amount."
        assert service.ledger == starting_ledger


class TestPayBill:
    """Tests for paying bills from checking."""

    def test_pay_electricity(self, service):
        """Paying 75 from 500 leaves 425 and records one Bills transaction."""
        result = service.pay_bill("Electricity", "75")

        assert result.success is True
        assert service.ledger.checking_balance == Decimal("425.00")
        assert service.ledger.savings_balance == Decimal("1000.00")
        assert len(service.ledger.transactions) == 1

        tx = service.ledger.transactions[0]
        assert tx.description == "Bill Payment: Electricity"
        assert tx.amount == Decimal("-75.00")
        assert tx.category == TransactionCategory.BILLS
        assert tx.scope == TransactionScope.CHECKING

    def test_extra_decimals_are_rounded(self, service):
        result = service.pay_bill("Electricity", "75.004")
        assert result.success is True
        assert service.ledger.checking_balance == Decimal("425.00")

    def test_description_is_trimmed(self, service):
        service.pay_bill("  Water  ", "10")
        assert service.ledger.transactions[0].description == "Bill Payment: Water"

    def test_description_checked_first(self, service):
        """An empty description is reported even when the amount is also bad."""
        result = service.pay_bill("", "not a number")
        assert result.success is False
        assert result.message == "Enter a bill name/description."

    def test_invalid_amount(self, service):
        result = service.pay_bill("Rent", "0")
        assert result.message == "Enter a valid amount."

    def test_insufficient_funds(self, service, starting_ledger):
        result = service.pay_bill("Rent", "600")
        assert result.success is False
        assert result.message == "Not enough funds in Checking."
        assert service.ledger == starting_ledger


class TestAddMoneyAndGoal:
    """Tests for deposits and the savings goal."""

    def test_add_money(self, service):
        result = service.add_money("1,000")

        assert result.success is True
        assert service.ledger.savings_balance == Decimal("2000.00")
        assert service.ledger.checking_balance == Decimal("500.00")
        tx = service.ledger.transactions[0]
        assert tx.description == "Add Money to Savings"
        assert tx.amount == Decimal("1000.00")
        assert tx.category == TransactionCategory.INCOME
        assert tx.scope == TransactionScope.SAVINGS

    def test_add_money_invalid(self, service):
        result = service.add_money("")
        assert result.success is False
        assert result.message == "Enter a valid amount."

    def test_set_goal(self, service):
        result = service.set_goal("5,000")

        assert result.success is True
        assert service.ledger.savings_goal == Decimal("5000.00")
        assert service.ledger.checking_balance == Decimal("500.00")
        assert service.ledger.savings_balance == Decimal("1000.00")
        tx = service.ledger.transactions[0]
        assert tx.description == "Set savings goal"
        assert tx.amount == Decimal("0")
        assert tx.category == TransactionCategory.GOAL
        assert tx.scope == TransactionScope.SAVINGS

    def test_set_goal_invalid(self, service):
        result = service.set_goal("-1")
        assert result.success is False
        assert result.message == "Enter a valid goal amount."
        assert service.ledger.savings_goal is None

    def test_largest_amount_is_accepted(self, service):
        result = service.set_goal("9,999,999,999,999.99")
        assert result.success is True
        assert service.ledger.savings_goal == Decimal("9999999999999.99")

    def test_balance_cannot_grow_past_maximum(self, service, ledger_store):
        """Repeated deposits stop at the largest balance instead of raising."""
        service.edit_savings_balance("9,999,999,999,999.99")
        before = service.ledger

        result = service.add_money("0.01")

        assert result.success is False
        assert result.message == "Amount too large."
        assert service.ledger == before
        assert ledger_store.load() == before

    def test_transfer_cannot_overfill_target(self, service):
        service.edit_savings_balance("9,999,999,999,999.99")
        before = service.ledger

        result = service.transfer_to_savings("1")

        assert result.success is False
        assert result.message == "Amount too large."
        assert service.ledger == before

    def test_oversized_input_is_invalid(self, service, starting_ledger):
        result = service.add_money("99999999999999999999999999.99")
        assert result.success is False
        assert result.message == "Enter a valid amount."
        assert service.ledger == starting_ledger


class TestEditBalance:
    """Tests for balance corrections."""

    def test_edit_checking_records_delta(self, service):
        result = service.edit_checking_balance("450")

        assert result.success is True
        assert service.ledger.checking_balance == Decimal("450.00")
        tx = service.ledger.transactions[0]
        assert tx.description == "Balance correction"
        assert tx.amount == Decimal("-50.00")
        assert tx.category == TransactionCategory.ADJUSTMENT
        assert tx.scope == TransactionScope.CHECKING

    def test_edit_savings_records_delta(self, service):
        service.edit_savings_balance("1200.5")

        assert service.ledger.savings_balance == Decimal("1200.50")
        tx = service.ledger.transactions[0]
        assert tx.amount == Decimal("200.50")
        assert tx.scope == TransactionScope.SAVINGS

    def test_consecutive_edits_use_current_balance(self, service):
        """Each delta is taken from the balance the edit replaces."""
        service.edit_checking_balance("600")
        service.edit_checking_balance("550")
        deltas = [t.amount for t in service.ledger.transactions]
        assert deltas == [Decimal("-50.00"), Decimal("100.00")]

    def test_edit_invalid(self, service, starting_ledger):
        result = service.edit_savings_balance("0")
        assert result.success is False
        assert result.message == "Enter a valid balance."
        assert service.ledger == starting_ledger


class TestLedgerService:
    """Tests for persistence and history handling in LedgerService."""

    def test_every_change_is_persisted(self, service, ledger_store):
        service.pay_bill("Electricity", "75")
        assert ledger_store.load() == service.ledger

        service.add_money("10")
        assert ledger_store.load() == service.ledger

    def test_persisted_document(self, service, kv_store):
        service.pay_bill("Electricity", "75")
        document = json.loads(kv_store.get_item(DATA_KEY))
        assert document["checkingBalance"] == 425
        assert document["savingsBalance"] == 1000
        assert document["savingsGoal"] is None
        assert document["transactions"][0]["description"] == "Bill Payment: Electricity"
        assert document["transactions"][0]["amount"] == -75

    def test_history_keeps_newest_25(self, service):
        """After 26 operations the oldest entry is gone."""
        first = service.add_money("1").transaction
        for _ in range(25):
            service.add_money("1")

        transactions = service.ledger.transactions
        assert len(transactions) == 25
        assert first.id not in {t.id for t in transactions}
        assert service.ledger.savings_balance == Decimal("1026.00")

    def test_most_recent_first(self, service):
        service.add_money("1")
        service.pay_bill("Phone", "2")
        service.set_goal("3")
        descriptions = [t.description for t in service.ledger.transactions]
        assert descriptions == ["Set savings goal", "Bill Payment: Phone", "Add Money to Savings"]

    def test_clear_all_data(self, service, kv_store):
        service.pay_bill("Electricity", "75")
        result = service.clear_all_data()

        assert result.success is True
        assert service.ledger == Ledger.empty()
        assert json.loads(kv_store.get_item(DATA_KEY)) == {
            "checkingBalance": 0.0,
            "savingsBalance": 0.0,
            "savingsGoal": None,
            "transactions": [],
        }

    def test_loads_from_store_when_no_ledger_given(self, ledger_store, starting_ledger):
        ledger_store.save(starting_ledger)
        service = LedgerService(ledger_store, history_limit=25)
        assert service.ledger == starting_ledger

    def test_reload(self, service, ledger_store):
        other = LedgerService(ledger_store, ledger=service.ledger, history_limit=25)
        other.add_money("5")
        assert service.reload() == other.ledger

    def test_replace(self, service, ledger_store):
        imported = Ledger(checking_balance=Decimal("1"), savings_balance=Decimal("2"))
        service.replace(imported)
        assert service.ledger == imported
        assert ledger_store.load() == imported

    def test_history_limit_defaults_to_settings(self, ledger_store):
        service = LedgerService(ledger_store, ledger=Ledger.empty())
        assert service.history_limit == 25

    def test_custom_history_limit(self, ledger_store):
        service = LedgerService(ledger_store, ledger=Ledger.empty(), history_limit=3)
        for _ in range(5):
            service.add_money("1")
        assert len(service.ledger.transactions) == 3
