"""File grants — revocable, scoped read access to the Time Machine plist."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

from loguru import logger

from backup_status.errors import AccessDenied

if TYPE_CHECKING:
    from backup_status.config import Config

PREFERENCES_DIR = Path("/Library/Preferences")
PREFERENCES_FILE_NAME = "com.apple.TimeMachine.plist"
PREFERENCES_FILE = PREFERENCES_DIR / PREFERENCES_FILE_NAME


class FileGrant:
    """
    Access grant for a single file location.

    Reads must happen between ``start_access()`` and ``stop_access()``;
    use :meth:`access` so the release runs on every exit path.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._active = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_active(self) -> bool:
        return self._active

    def start_access(self) -> bool:
        """Begin scoped access. Returns False when the file cannot be read."""
        if not self._path.is_file() or not os.access(self._path, os.R_OK):
            return False
        self._active = True
        return True

    def stop_access(self) -> None:
        self._active = False

    @contextmanager
    def access(self) -> Iterator[Path]:
        """Scope guard yielding the granted path; raises AccessDenied if unusable."""
        if not self.start_access():
            raise AccessDenied(f"Cannot access {self._path}")
        try:
            yield self._path
        finally:
            self.stop_access()

    def __repr__(self) -> str:
        return f"FileGrant({str(self._path)!r})"


class GrantManager:
    """Persists the user's grant (a bookmark to the plist path) in the config."""

    def __init__(self, config: Config) -> None:
        self._config = config

    @property
    def grant(self) -> FileGrant | None:
        bookmark = self._config.bookmark
        return FileGrant(bookmark) if bookmark else None

    @property
    def is_granted(self) -> bool:
        return self._config.bookmark is not None

    def grant_access(self, path: str | Path) -> FileGrant | None:
        """Validate a user-picked path and persist it as the bookmark."""
        path = Path(path)
        if path.name != PREFERENCES_FILE_NAME:
            logger.warning(f"Rejected grant for unexpected file: {path}")
            return None
        grant = FileGrant(path)
        if not grant.start_access():
            logger.error(f"Failed accessing preferences file: {path}")
            return None
        grant.stop_access()
        self._config.bookmark = path
        logger.info(f"Granted access to {path}")
        return grant

    def revoke(self) -> None:
        self._config.bookmark = None
        logger.info("Revoked preferences file access")
