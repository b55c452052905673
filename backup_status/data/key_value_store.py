"""Shared key-value store — a JSON file both processes can read and write."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any

from loguru import logger

from backup_status.errors import StoreUnreadable


class KeyValueStore:
    """
    Minimal defaults-style store backed by a single JSON file.

    The file is re-read on every access so values written by another process
    are observed. Writes replace the whole file atomically (temp file +
    ``replace``); the last writer wins.
    """

    FILE_NAME = "shared_defaults.json"

    def __init__(self, shared_dir: Path) -> None:
        self._dir = shared_dir
        self._path = shared_dir / self.FILE_NAME
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise StoreUnreadable(f"{self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreUnreadable(f"{self._path}: root is {type(data).__name__}, expected object")
        return data

    def _read(self) -> dict[str, Any]:
        # Writers start over from an empty store when the file is unreadable
        try:
            return self._load()
        except StoreUnreadable as e:
            logger.warning(f"Failed to read shared store, replacing it: {e}")
            return {}

    def _write(self, data: dict[str, Any]) -> bool:
        self._dir.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            tmp_path.replace(self._path)
        except OSError as e:
            logger.error(f"Failed to write shared store: {e}")
            tmp_path.unlink(missing_ok=True)
            return False
        return True

    def get(self, key: str, default: Any = None) -> Any:
        """Raises StoreUnreadable when the file exists but cannot be parsed."""
        return self._load().get(key, default)

    def contains(self, key: str) -> bool:
        return key in self._load()

    def set(self, key: str, value: Any) -> bool:
        with self._lock:
            data = self._read()
            data[key] = value
            return self._write(data)

    def remove(self, key: str) -> bool:
        with self._lock:
            data = self._read()
            if key not in data:
                return True
            del data[key]
            return self._write(data)
