"""
Offline Asset Cache

A small read-through cache for the app shell (logo, manifest, landing
page), so the UI still has its assets when the loader cannot reach them.

Lookup order for GET requests:
1. cached copy
2. loader; a successful load is stored in the cache
3. for navigations only, the cached root document "/"

Caches are named with a version suffix. `activate()` drops every cache
whose name differs from the current one.
"""

from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Optional

from personal_bank.logger import get_logger


CACHE_PREFIX = "mypersonalbank-cache"
ROOT_PATH = "/"
DEFAULT_SHELL_ASSETS = (
    "/",
    "/index.html",
    "/manifest.webmanifest",
    "/images/logo.svg",
)

logger = get_logger(__name__)

Loader = Callable[[str], bytes]


class AssetLoadError(Exception):
    """An asset could not be loaded from its source."""
    pass


class FileAssetLoader:
    """
    Loads assets from a directory. "/" maps to index.html.

    Paths that would leave the directory are refused.
    """

    def __init__(self, root: Path, index: str = "index.html"):
        self._root = Path(root).resolve()
        self._index = index

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path.lstrip("/")) if path != ROOT_PATH else PurePosixPath(self._index)
        target = (self._root / relative).resolve()
        if target != self._root and self._root not in target.parents:
            raise AssetLoadError(f"Asset path escapes asset root: {path}")
        return target

    def __call__(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except OSError as e:
            raise AssetLoadError(f"Cannot load asset {path}: {e}") from e


class AssetCache:
    """
    Versioned cache-first store for shell assets.

    All versions share one `caches` mapping of cache name to entries, so
    an upgraded cache can clean up the ones it replaces.
    """

    def __init__(
        self,
        loader: Loader,
        version: str = "v1",
        shell_assets: Iterable[str] = DEFAULT_SHELL_ASSETS,
        caches: Optional[dict[str, dict[str, bytes]]] = None,
    ):
        self._loader = loader
        self._name = f"{CACHE_PREFIX}-{version}"
        self._shell_assets = tuple(shell_assets)
        self._caches = caches if caches is not None else {}

    @property
    def name(self) -> str:
        return self._name

    def _entries(self) -> dict[str, bytes]:
        return self._caches.setdefault(self._name, {})

    def install(self) -> None:
        """
        Pre-populate the cache with every shell asset.

        Raises:
            AssetLoadError: If any shell asset fails to load. Nothing is
                cached in that case.
        """
        loaded = {path: self._loader(path) for path in self._shell_assets}
        self._entries().update(loaded)
        logger.info("asset_cache_installed", cache=self._name, assets=len(loaded))

    def activate(self) -> list[str]:
        """Delete caches of other versions. Returns the deleted names."""
        stale = [name for name in self._caches if name != self._name]
        for name in stale:
            del self._caches[name]
        if stale:
            logger.info("asset_cache_pruned", cache=self._name, removed=stale)
        return stale

    def match(self, path: str) -> Optional[bytes]:
        return self._entries().get(path)

    def fetch(self, path: str, navigate: bool = False, method: str = "GET") -> Optional[bytes]:
        """
        Serve an asset.

        Non-GET requests bypass the cache entirely.

        Returns:
            The asset bytes, or None if it is neither cached nor loadable
            (and, for navigations, no root document is cached).
        """
        if method.upper() != "GET":
            return self._loader(path)

        cached = self.match(path)
        if cached is not None:
            return cached

        try:
            body = self._loader(path)
        except AssetLoadError as e:
            logger.debug("asset_load_failed", path=path, error=str(e))
            if navigate:
                return self.match(ROOT_PATH)
            return None

        self._entries()[path] = body
        return body
