"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON document on disk is the whole database:
1. The user can open and back up their data with any text editor
2. No database setup required
3. Every key is written back as soon as it changes

TRADEOFFS:
- The full document is rewritten on every change (fine for personal volumes)
- No transactions and no partial-write recovery beyond an atomic replace
- A second process writing the same file is not protected against
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from spendwise.audit import get_logger
from spendwise.config import get_settings
from spendwise.services.storage.interface import KeyValueStore, StorageError


logger = get_logger(__name__)


class JSONFileStore(KeyValueStore):
    """
    File-backed key-value store.

    The document is loaded once at construction and written back
    on every set/remove.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path else get_settings().storage.data_path
        self._data: dict[str, Any] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupted JSON data in {self._path}") from e
        except OSError as e:
            raise StorageError(f"Unable to read from {self._path}") from e

        if not isinstance(payload, dict):
            raise StorageError(f"Expected a JSON object in {self._path}")
        return payload

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write(self, serialized: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with temp_path.open("w", encoding="utf-8") as handle:
            handle.write(serialized)
            handle.flush()
            os.fsync(handle.fileno())
        temp_path.replace(self._path)

    def _flush(self) -> None:
        try:
            serialized = json.dumps(self._data, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value is not JSON-serializable: {e}") from e
        try:
            self._write(serialized)
        except OSError as e:
            logger.error("storage_write_failed", path=str(self._path), error=str(e))
            raise StorageError(f"Unable to write to {self._path}") from e

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        previous = self._data.get(key)
        had_key = key in self._data
        self._data[key] = copy.deepcopy(value)
        try:
            self._flush()
        except StorageError:
            # Keep memory consistent with what is on disk
            if had_key:
                self._data[key] = previous
            else:
                self._data.pop(key, None)
            raise

    def remove(self, key: str) -> None:
        if key not in self._data:
            return
        previous = self._data.pop(key)
        try:
            self._flush()
        except StorageError:
            self._data[key] = previous
            raise
