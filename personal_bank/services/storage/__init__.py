"""
Storage Services Package

Provides the abstract key-value interface, its file-backed and in-memory
implementations, and the ledger persistence built on top of them.
"""

from personal_bank.services.storage.interface import (
    InvalidKeyError,
    KeyValueStore,
    StorageError,
    StorageUnavailableError,
)
from personal_bank.services.storage.json_file import JsonFileKeyValueStore
from personal_bank.services.storage.memory import InMemoryKeyValueStore
from personal_bank.services.storage.ledger_store import (
    LedgerFormatError,
    LedgerStore,
    dump_ledger_document,
    parse_ledger_document,
)

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "InvalidKeyError",
    "LedgerFormatError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Ledger persistence
    "LedgerStore",
    "dump_ledger_document",
    "parse_ledger_document",
]
