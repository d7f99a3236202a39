"""
Key-value stores for persisting analyzed transactions.

The pipeline itself never touches a store; callers inject one to cache the
parsed transaction list for later reloads. Writes are last-write-wins.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from spendlens.core.exceptions import StoreError

logger = logging.getLogger(__name__)


class TransactionStore(ABC):
    """Abstract get/set-by-key store."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the JSON-compatible value stored under key, or default."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value under key, replacing any previous value."""


class InMemoryStore(TransactionStore):
    """Dictionary-backed store, mainly for tests and single-process use."""

    def __init__(self):
        self._data: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value


class JsonFileStore(TransactionStore):
    """
    Store backed by a single JSON object on disk.

    Usage:
        store = JsonFileStore(Path("~/.spendlens/store.json").expanduser())
        store.set("transactions", [...])
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to read store {self.path}: {e}")
        if not isinstance(data, dict):
            raise StoreError(f"Store {self.path} does not contain a JSON object")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            try:
                with open(tmp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2)
                tmp_path.replace(self.path)
            except (OSError, TypeError) as e:
                raise StoreError(f"Failed to write key '{key}' to {self.path}: {e}", key=key)

        logger.debug(f"Wrote key '{key}' to {self.path}")
