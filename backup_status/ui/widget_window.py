"""Desktop widget — small always-on-top card showing the Time Machine status."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from loguru import logger
from PySide6.QtCore import QFileSystemWatcher, QPoint, Qt, QTimer
from PySide6.QtWidgets import QHBoxLayout, QVBoxLayout, QWidget
from qfluentwidgets import BodyLabel, CaptionLabel, CardWidget, StrongBodyLabel, TitleLabel

from backup_status.core.presenter import DisplayFacts, compute_facts, next_refresh_points
from backup_status.core.widget_center import WIDGET_KIND
from backup_status.i18n import t
from backup_status.models.preferences import Preferences
from backup_status.ui.components.status_badge import StatusBadge
from backup_status.ui.components.usage_bar import UsageBar
from backup_status.ui.constants import WIDGET_MARGIN, WIDGET_SIZE

if TYPE_CHECKING:
    from backup_status.context import AppContext


class WidgetWindow(QWidget):
    """
    Display surface for the shared slot.

    Reloads when the menu app signals ``BackupStatusWidget`` and re-renders
    at the start of the next two days so relative labels stay correct.
    """

    def __init__(self, ctx: AppContext, demo: bool = False, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._ctx = ctx
        self._demo = demo
        self._preferences: Preferences | None = None
        self._marker_mtime: int | None = None
        self._drag_offset: QPoint | None = None
        self._timers: list[QTimer] = []

        flags = Qt.WindowType.FramelessWindowHint | Qt.WindowType.Tool
        if ctx.config.widget_stay_on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setFixedSize(WIDGET_SIZE, WIDGET_SIZE)

        self._init_ui()

        position = ctx.config.widget_position
        if position:
            self.move(*position)

        # Refresh signal from the menu app
        shared_dir = ctx.config.shared_dir
        shared_dir.mkdir(parents=True, exist_ok=True)
        self._watcher = QFileSystemWatcher([str(shared_dir)], self)
        self._watcher.directoryChanged.connect(self._on_shared_dir_changed)
        self._marker_mtime = self._read_marker_mtime()

        self.reload()
        self._schedule_renders()

    def _init_ui(self) -> None:
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        card = CardWidget(self)
        layout = QVBoxLayout(card)
        layout.setContentsMargins(WIDGET_MARGIN, WIDGET_MARGIN, WIDGET_MARGIN, WIDGET_MARGIN)
        layout.setSpacing(4)

        self._volume_label = StrongBodyLabel(t("widget.title"), card)
        layout.addWidget(self._volume_label)

        self._caption = CaptionLabel(t("widget.last_backup"), card)
        layout.addWidget(self._caption)

        self._age_label = TitleLabel("", card)
        self._age_label.setWordWrap(True)
        layout.addWidget(self._age_label)

        layout.addStretch()

        self._usage_bar = UsageBar(card)
        layout.addWidget(self._usage_bar)

        self._usage_label = CaptionLabel("", card)
        layout.addWidget(self._usage_label)

        self._badge_row = QHBoxLayout()
        self._badge_row.setSpacing(4)
        layout.addLayout(self._badge_row)

        self._hint_label = BodyLabel(t("widget.placeholder_hint"), card)
        self._hint_label.setWordWrap(True)
        layout.addWidget(self._hint_label)

        outer.addWidget(card)

    # ── Data ──

    def reload(self) -> None:
        """Re-read the shared slot and render."""
        if self._demo:
            self._preferences = Preferences.demo()
        else:
            self._preferences = self._ctx.preferences_store.load()
        self.render()

    def render(self) -> None:
        facts = compute_facts(self._preferences, datetime.now().astimezone())
        self._apply(facts)

    def _apply(self, facts: DisplayFacts) -> None:
        self._volume_label.setText(facts.volume_name or t("widget.title"))
        self._age_label.setText(facts.last_snapshot_label if not facts.placeholder else t("widget.placeholder"))
        self._caption.setVisible(not facts.placeholder)
        self._usage_bar.setVisible(not facts.placeholder)
        self._usage_bar.set_fraction(facts.usage_fraction)
        self._usage_label.setVisible(not facts.placeholder)
        self._usage_label.setText(facts.usage_label)
        self._hint_label.setVisible(facts.placeholder)

        while self._badge_row.count():
            item = self._badge_row.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        if not facts.placeholder:
            if facts.is_encrypted:
                self._badge_row.addWidget(StatusBadge(t("widget.encrypted"), "encrypted", self))
            if facts.is_network:
                self._badge_row.addWidget(StatusBadge(t("widget.network"), "network", self))
            else:
                self._badge_row.addWidget(StatusBadge(t("widget.local"), "local", self))
            self._badge_row.addStretch()

    # ── Scheduling ──

    def _schedule_renders(self) -> None:
        """Arm single-shot renders at the next refresh points, then re-arm."""
        for timer in self._timers:
            timer.stop()
        self._timers.clear()

        now = datetime.now().astimezone()
        points = next_refresh_points(now)
        for index, point in enumerate(points[1:], start=1):
            timer = QTimer(self)
            timer.setSingleShot(True)
            timer.setInterval(max(0, int((point - now).total_seconds() * 1000)))
            if index == len(points) - 1:
                timer.timeout.connect(self._on_last_point)
            else:
                timer.timeout.connect(self.render)
            timer.start()
            self._timers.append(timer)
        logger.debug(f"Widget renders scheduled at {[p.isoformat() for p in points]}")

    def _on_last_point(self) -> None:
        self.render()
        self._schedule_renders()

    def _read_marker_mtime(self) -> int | None:
        marker = self._ctx.widget_center.marker_path(WIDGET_KIND)
        try:
            return marker.stat().st_mtime_ns
        except OSError:
            return None

    def _on_shared_dir_changed(self, _path: str) -> None:
        mtime = self._read_marker_mtime()
        if mtime is not None and mtime != self._marker_mtime:
            self._marker_mtime = mtime
            logger.info("Widget reload requested")
            self.reload()

    # ── Dragging ──

    def mousePressEvent(self, event) -> None:  # noqa: N802
        if event.button() == Qt.MouseButton.LeftButton:
            self._drag_offset = event.globalPosition().toPoint() - self.frameGeometry().topLeft()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:  # noqa: N802
        if self._drag_offset is not None:
            self.move(event.globalPosition().toPoint() - self._drag_offset)
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:  # noqa: N802
        if self._drag_offset is not None:
            self._drag_offset = None
            pos = self.pos()
            self._ctx.config.widget_position = (pos.x(), pos.y())
        super().mouseReleaseEvent(event)
