"""Status monitor — re-reads the Time Machine plist and refreshes the shared slot."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from PySide6.QtCore import QFileSystemWatcher, QObject, QTimer, Signal

from backup_status.core.reader import read_preferences

if TYPE_CHECKING:
    from backup_status.core.grant import GrantManager
    from backup_status.data.preferences_store import PreferencesStore


class StatusRefresher:
    """One read-and-store cycle: grant → Reader → Store."""

    def __init__(self, grants: GrantManager, store: PreferencesStore) -> None:
        self._grants = grants
        self._store = store

    def refresh(self) -> bool:
        """Returns True when fresh preferences were stored."""
        preferences = read_preferences(self._grants.grant)
        if preferences is None:
            return False
        return self._store.store(preferences)


class StatusMonitor(QObject):
    """
    Runs :class:`StatusRefresher` when the granted file changes and on a
    fixed interval, on the Qt event loop.
    """

    refreshed = Signal(bool)

    def __init__(
        self,
        refresher: StatusRefresher,
        grants: GrantManager,
        interval_minutes: int,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._refresher = refresher
        self._grants = grants

        self._watcher = QFileSystemWatcher(self)
        self._watcher.fileChanged.connect(self._on_file_changed)
        self._watcher.directoryChanged.connect(self._on_file_changed)

        self._timer = QTimer(self)
        self._timer.setInterval(interval_minutes * 60 * 1000)
        self._timer.timeout.connect(self.refresh)

    def start(self) -> None:
        self._watch()
        self._timer.start()
        self.refresh()

    @property
    def watched_paths(self) -> list[str]:
        return self._watcher.files() + self._watcher.directories()

    def stop(self) -> None:
        self._timer.stop()
        watched = self.watched_paths
        if watched:
            self._watcher.removePaths(watched)

    def _watch(self) -> None:
        grant = self._grants.grant
        if grant is None:
            return
        # Preferences are saved by replacing the file, which drops the file
        # watch; the parent directory watch catches the replacement.
        for path in (str(grant.path), str(grant.path.parent)):
            if grant.path.exists() and path not in self.watched_paths:
                self._watcher.addPath(path)

    def _on_file_changed(self, path: str) -> None:
        logger.debug(f"Change observed: {path}")
        self._watch()
        self.refresh()

    def refresh(self) -> None:
        self._watch()
        self.refreshed.emit(self._refresher.refresh())
