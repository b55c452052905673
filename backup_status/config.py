"""Application configuration — JSON-based, with file locking and batch update support."""

from __future__ import annotations

import json
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

_instance: "Config | None" = None

# Default data directory
_DEFAULT_DATA_DIR = Path.home() / "Library" / "Application Support" / "BackupStatus"


def get_config() -> Config:
    """Module-level factory — single global Config instance."""
    global _instance
    if _instance is None:
        _instance = Config()
    return _instance


def reset_config() -> None:
    """Reset the global config instance (for testing)."""
    global _instance
    _instance = None


class Config:
    """JSON-based application configuration with file locking."""

    _DEFAULTS: dict[str, Any] = {
        "language": "en_US",
        "theme": "auto",
        # Granted path to com.apple.TimeMachine.plist; empty when not granted
        "bookmark": "",
        # Directory shared by the menu app and the widget
        "shared_dir": "",
        "refresh_interval_minutes": 30,
        "start_at_launch": False,
        "widget": {
            "position": [],
            "stay_on_top": True,
        },
    }

    def __init__(self, data_dir: Path | None = None) -> None:
        self._data: dict[str, Any] = {}
        self._dir = data_dir or _DEFAULT_DATA_DIR
        self._path = self._dir / "config.json"
        self._lock = threading.Lock()
        self._defer_save = False
        self._load()

    def _load(self) -> None:
        """Load config from disk, merging with defaults."""
        self._data = json.loads(json.dumps(self._DEFAULTS))  # deep copy defaults
        if self._path.exists():
            try:
                with open(self._path, encoding="utf-8") as f:
                    user_data = json.load(f)
                self._deep_merge(self._data, user_data)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to load config, using defaults: {e}")

    def reload(self) -> None:
        """Re-read the file; the other process may have changed it."""
        self._load()

    def _deep_merge(self, base: dict, override: dict) -> None:
        """Recursively merge override into base."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _save(self) -> None:
        """Persist config to disk with file locking."""
        if self._defer_save:
            return
        with self._lock:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(".tmp")
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(self._data, f, ensure_ascii=False, indent=2)
                tmp_path.replace(self._path)
            except OSError as e:
                logger.error(f"Failed to save config: {e}")
                if tmp_path.exists():
                    tmp_path.unlink(missing_ok=True)

    @contextmanager
    def batch_update(self) -> Iterator[None]:
        """Context manager for batching multiple config changes into a single write."""
        self._defer_save = True
        try:
            yield
        finally:
            self._defer_save = False
            self._save()

    # ── Generic access ──

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-separated key path."""
        parts = key.split(".")
        node = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def set(self, key: str, value: Any) -> None:
        """Set a config value by dot-separated key path."""
        if not self._defer_save:
            # The widget process writes the same file; start from its latest state
            self._load()
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            if part not in node or not isinstance(node[part], dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value
        self._save()

    # ── Typed properties ──

    @property
    def data_dir(self) -> Path:
        return self._dir

    @property
    def log_dir(self) -> Path:
        return self._dir / "logs"

    @property
    def language(self) -> str:
        return self._data.get("language", "en_US")

    @language.setter
    def language(self, value: str) -> None:
        self.set("language", value)

    @property
    def theme(self) -> str:
        return self._data.get("theme", "auto")

    @property
    def bookmark(self) -> Path | None:
        raw = self._data.get("bookmark", "")
        return Path(raw) if raw else None

    @bookmark.setter
    def bookmark(self, value: Path | None) -> None:
        self.set("bookmark", str(value) if value else "")

    @property
    def shared_dir(self) -> Path:
        raw = self._data.get("shared_dir", "")
        if raw:
            return Path(raw)
        return self._dir / "shared"

    @property
    def refresh_interval_minutes(self) -> int:
        raw = self._data.get("refresh_interval_minutes", 30)
        try:
            return max(1, int(raw))
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Invalid refresh_interval_minutes {raw!r}, using 30")
            return 30

    @property
    def start_at_launch(self) -> bool:
        return bool(self._data.get("start_at_launch", False))

    @start_at_launch.setter
    def start_at_launch(self, value: bool) -> None:
        self.set("start_at_launch", value)

    @property
    def widget_position(self) -> tuple[int, int] | None:
        raw = self.get("widget.position", [])
        if isinstance(raw, list) and len(raw) == 2:
            try:
                return int(raw[0]), int(raw[1])
            except (TypeError, ValueError, OverflowError):
                logger.warning(f"Invalid widget.position {raw!r}, ignoring")
        return None

    @widget_position.setter
    def widget_position(self, value: tuple[int, int] | None) -> None:
        self.set("widget.position", list(value) if value else [])

    @property
    def widget_stay_on_top(self) -> bool:
        return bool(self.get("widget.stay_on_top", True))
