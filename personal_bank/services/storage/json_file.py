"""
File-backed Key-Value Store

Each key is stored as its own file, `<data_dir>/<key>.json`, so a
person can open their data in any text editor.

TRADEOFFS:
- No locking. Two processes writing the same key: last writer wins.
- Writes go to a temporary file first and are then moved into place,
  so a crash mid-write leaves the previous value intact.
- Transient OS errors on write (e.g. a file briefly locked by a virus
  scanner or sync client) are retried a few times before giving up.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from personal_bank.logger import get_logger
from personal_bank.services.storage.interface import (
    InvalidKeyError,
    KeyValueStore,
    StorageUnavailableError,
)


FILE_SUFFIX = ".json"
_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9._-]*$")

logger = get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Key-value store that keeps one UTF-8 file per key in a directory.

    The directory is created on first write.
    """

    def __init__(self, directory: Path):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise InvalidKeyError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{FILE_SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError:
            # Not text at all; callers treat this like a corrupt record
            logger.warning("storage_undecodable_item", key=key, path=str(path))
            return ""
        except OSError as e:
            raise StorageUnavailableError(f"Failed to read {path}: {e}") from e

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, max=0.5),
        reraise=True,
    )
    def _write_atomic(self, path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self._write_atomic(path, value)
        except OSError as e:
            logger.error("storage_write_failed", key=key, path=str(path), error=str(e))
            raise StorageUnavailableError(f"Failed to write {path}: {e}") from e

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageUnavailableError(f"Failed to remove {path}: {e}") from e

    def keys(self) -> list[str]:
        if not self._directory.is_dir():
            return []
        return sorted(
            p.name[: -len(FILE_SUFFIX)]
            for p in self._directory.iterdir()
            if p.is_file() and p.name.endswith(FILE_SUFFIX) and not p.name.startswith(".")
        )
