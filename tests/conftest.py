"""Shared fixtures for Personal Bank tests."""

from decimal import Decimal

import pytest

from personal_bank.ledger import LedgerService
from personal_bank.models import Ledger
from personal_bank.services.storage import InMemoryKeyValueStore, LedgerStore


DATA_KEY = "mpb.data.v1"
SESSION_KEY = "mpb.session.v1"


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def ledger_store(kv_store) -> LedgerStore:
    return LedgerStore(kv_store, key=DATA_KEY)


@pytest.fixture
def starting_ledger() -> Ledger:
    return Ledger(
        checking_balance=Decimal("500"),
        savings_balance=Decimal("1000"),
    )


@pytest.fixture
def service(ledger_store, starting_ledger) -> LedgerService:
    return LedgerService(ledger_store, ledger=starting_ledger, history_limit=25)
