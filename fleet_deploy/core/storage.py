"""Locally persisted state (stored credentials, release history)"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional, Union

from .config import Config, Key
from ..api.exceptions import ConfigError

logger = logging.getLogger(__name__)


class LocalStorage(Config):
    """JSON file backed key/value store, saved on every write

    Without a path the storage only lives in memory.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._lock = threading.Lock()
        path = Path(path) if path else None
        super().__init__(self._read(path), path=path)

    @staticmethod
    def _read(path: Optional[Path]) -> dict:
        if path is None or not path.exists():
            return {}

        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Corrupted storage file {path}: {e}")

        return data if isinstance(data, dict) else {}

    def set(self, key: Key, value: Any) -> None:
        with self._lock:
            super().set(key, value)
            self._save()

    def forget(self, key: Key) -> None:
        with self._lock:
            super().forget(key)
            self._save()

    def _save(self) -> None:
        if self.path is None:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(self._data, f, indent=2, sort_keys=True)

        logger.debug(f"Saved storage to {self.path}")
