"""
Application Wiring for Personal Bank

Builds the components the UI talks to:
1. LedgerService (balances, history, persistence)
2. SessionGate (login / logout)
3. AssetCache (offline shell assets)

The ledger and the session marker live side by side in one key-value
store, under separate keys.
"""

from typing import Optional

from personal_bank.auth import SessionGate
from personal_bank.config import get_settings
from personal_bank.ledger import LedgerService
from personal_bank.logger import configure_logging, get_logger, is_configured
from personal_bank.services.assets import AssetCache, AssetLoadError, FileAssetLoader
from personal_bank.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    LedgerStore,
    StorageError,
)


logger = get_logger(__name__)


def create_store(use_disk: bool = True) -> KeyValueStore:
    """
    Create the key-value store.

    Falls back to an in-memory store (data lost on exit) if the data
    directory cannot be created.
    """
    if not use_disk:
        return InMemoryKeyValueStore()

    directory = get_settings().storage.data_dir
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("data_dir_unavailable", path=str(directory), error=str(e))
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(directory)


def create_asset_cache() -> AssetCache:
    """Create the asset cache and pre-populate it with the app shell."""
    settings = get_settings().app
    cache = AssetCache(
        loader=FileAssetLoader(settings.assets_dir),
        version=settings.cache_version,
    )
    try:
        cache.install()
    except AssetLoadError as e:
        # The app works without its shell assets; lookups fall back to the loader
        logger.warning("asset_cache_install_failed", error=str(e))
    cache.activate()
    return cache


def create_app_components(
    store: Optional[KeyValueStore] = None,
    use_disk: bool = True,
) -> tuple[LedgerService, SessionGate, AssetCache]:
    """
    Factory function to create all application components.

    Args:
        store: Key-value store to use. Created from settings if None.
        use_disk: When creating the store, persist to the data directory.
                  Set to False for an in-memory store.

    Returns:
        (ledger_service, session_gate, asset_cache)
    """
    if not is_configured():
        configure_logging()

    store = store or create_store(use_disk=use_disk)

    try:
        ledger_service = LedgerService(LedgerStore(store))
    except StorageError as e:
        logger.error("ledger_store_unavailable", error=str(e))
        store = InMemoryKeyValueStore()
        ledger_service = LedgerService(LedgerStore(store))

    session_gate = SessionGate(store)
    asset_cache = create_asset_cache()

    logger.info(
        "app_components_created",
        store=type(store).__name__,
        stored_keys=store.keys(),
        asset_cache=asset_cache.name,
        transactions=len(ledger_service.ledger.transactions),
    )
    return ledger_service, session_gate, asset_cache
