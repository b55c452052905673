"""Widget refresh signal — marker files watched by display surfaces."""

from __future__ import annotations

import time
from pathlib import Path

from loguru import logger

WIDGET_KIND = "BackupStatusWidget"


class WidgetCenter:
    """
    Asks display surfaces of a given kind to reload.

    ``reload_timelines(kind)`` rewrites ``<shared_dir>/<kind>.reload``;
    widgets watch that directory and re-render when their marker changes.
    """

    def __init__(self, shared_dir: Path) -> None:
        self._dir = shared_dir

    def marker_path(self, kind: str) -> Path:
        return self._dir / f"{kind}.reload"

    def reload_timelines(self, kind: str) -> None:
        """Fire-and-forget reload request."""
        marker = self.marker_path(kind)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp = marker.with_suffix(".tmp")
            tmp.write_text(f"{time.time():.6f}", encoding="utf-8")
            tmp.replace(marker)
        except OSError as e:
            logger.warning(f"Failed to signal {kind} reload: {e}")
            return
        logger.debug(f"Requested timeline reload for {kind}")
