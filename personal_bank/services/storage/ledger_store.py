"""
Ledger Persistence

The whole ledger is stored as a single JSON document under one key.
Every accepted mutation rewrites the full document; there is no
batching and no partial update.

Loading never fails: a missing record yields an empty ledger, and a
record that cannot be parsed or has the wrong shape is discarded and
replaced by an empty ledger.
"""

import json
from typing import Any, Optional

from pydantic import ValidationError

from personal_bank.config import get_settings
from personal_bank.logger import get_logger
from personal_bank.models import Ledger
from personal_bank.services.storage.interface import KeyValueStore, StorageError


logger = get_logger(__name__)

REQUIRED_NUMBER_FIELDS = ("checkingBalance", "savingsBalance")


class LedgerFormatError(StorageError):
    """A ledger document does not have the expected shape."""
    pass


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_ledger_document(document: Any) -> Ledger:
    """
    Validate a decoded JSON document and build a Ledger from it.

    Balances must be JSON numbers and transactions must be a list of
    well-formed transactions. A savings goal that is not a number is
    read as no goal.

    Raises:
        LedgerFormatError: If the document has the wrong shape.
    """
    if not isinstance(document, dict):
        raise LedgerFormatError("Ledger document must be a JSON object")

    for field in REQUIRED_NUMBER_FIELDS:
        if not _is_number(document.get(field)):
            raise LedgerFormatError(f"'{field}' must be a number")

    if not isinstance(document.get("transactions"), list):
        raise LedgerFormatError("'transactions' must be a list")

    try:
        return Ledger.model_validate(document)
    except ValidationError as e:
        raise LedgerFormatError(f"Invalid ledger document: {e.error_count()} error(s)") from e


def dump_ledger_document(ledger: Ledger, indent: Optional[int] = None) -> str:
    """Encode a ledger in its persisted JSON shape."""
    return json.dumps(ledger.to_document(), indent=indent)


class LedgerStore:
    """
    Reads and writes the ledger snapshot in a key-value store.
    """

    def __init__(self, store: KeyValueStore, key: Optional[str] = None):
        self._store = store
        self._key = key or get_settings().storage.data_key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Ledger:
        """
        Rehydrate the persisted ledger.

        Returns an empty ledger when nothing is stored or the stored
        record is corrupt; a corrupt record is removed.
        """
        raw = self._store.get_item(self._key)
        if raw is None:
            logger.debug("ledger_not_found", key=self._key)
            return Ledger.empty()

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("ledger_unparsable_discarded", key=self._key, error=str(e))
            self._store.remove_item(self._key)
            return Ledger.empty()

        try:
            ledger = parse_ledger_document(document)
        except LedgerFormatError as e:
            logger.warning("ledger_invalid_shape_discarded", key=self._key, error=str(e))
            self._store.remove_item(self._key)
            return Ledger.empty()

        logger.debug(
            "ledger_loaded",
            key=self._key,
            transactions=len(ledger.transactions),
        )
        return ledger

    def save(self, ledger: Ledger) -> None:
        """Rewrite the full persisted snapshot."""
        self._store.set_item(self._key, dump_ledger_document(ledger))
        logger.debug("ledger_saved", key=self._key, transactions=len(ledger.transactions))

    def clear(self) -> Ledger:
        """
        Reset to the empty ledger and persist it immediately.

        Returns the empty ledger.
        """
        empty = Ledger.empty()
        self.save(empty)
        logger.info("ledger_cleared", key=self._key)
        return empty
