"""Services package."""

from personal_bank.services.assets import (
    AssetCache,
    AssetLoadError,
    FileAssetLoader,
)
from personal_bank.services.export import (
    ImportFormatError,
    export_filename,
    export_ledger,
    import_ledger,
)
from personal_bank.services.storage import (
    InMemoryKeyValueStore,
    InvalidKeyError,
    JsonFileKeyValueStore,
    KeyValueStore,
    LedgerFormatError,
    LedgerStore,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    # Assets
    "AssetCache",
    "AssetLoadError",
    "FileAssetLoader",
    # Export
    "ImportFormatError",
    "export_filename",
    "export_ledger",
    "import_ledger",
    # Storage
    "InMemoryKeyValueStore",
    "InvalidKeyError",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "LedgerFormatError",
    "LedgerStore",
    "StorageError",
    "StorageUnavailableError",
]
