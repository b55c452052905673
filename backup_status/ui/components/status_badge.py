"""StatusBadge component — small colored badge for destination flags."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont, QPainter
from PySide6.QtWidgets import QWidget

from backup_status.ui.constants import BADGE_COLORS


class StatusBadge(QWidget):
    """A small colored badge displaying a flag such as "Encrypted"."""

    def __init__(
        self,
        label: str,
        kind: str,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._label = label.upper()
        self._color = QColor(BADGE_COLORS.get(kind, "#666666"))
        self.setFixedHeight(18)

        fm = self.fontMetrics()
        self.setFixedWidth(fm.horizontalAdvance(self._label) + 14)

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        painter.setBrush(self._color)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.drawRoundedRect(self.rect(), 4, 4)

        font = QFont()
        font.setPointSize(7)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QColor("#FFFFFF"))
        painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, self._label)

        painter.end()
