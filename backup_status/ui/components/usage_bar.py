"""UsageBar component — rounded capacity bar for a backup destination."""

from __future__ import annotations

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QWidget
from qfluentwidgets import isDarkTheme

from backup_status.ui.constants import (
    USAGE_BAR_HEIGHT,
    USAGE_NORMAL_COLOR,
    USAGE_WARNING_COLOR,
    USAGE_WARNING_FRACTION,
)


class UsageBar(QWidget):
    """Horizontal bar filled to the used fraction of a destination."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._fraction = 0.0
        self.setFixedHeight(USAGE_BAR_HEIGHT)

    @property
    def fraction(self) -> float:
        return self._fraction

    def set_fraction(self, fraction: float) -> None:
        self._fraction = min(max(fraction, 0.0), 1.0)
        self.update()

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)

        rect = QRectF(self.rect())
        radius = rect.height() / 2

        # Track
        painter.setBrush(QColor(255, 255, 255, 40) if isDarkTheme() else QColor(0, 0, 0, 25))
        painter.drawRoundedRect(rect, radius, radius)

        # Fill
        if self._fraction > 0:
            color = USAGE_WARNING_COLOR if self._fraction >= USAGE_WARNING_FRACTION else USAGE_NORMAL_COLOR
            painter.setBrush(QColor(color))
            fill = QRectF(rect.x(), rect.y(), max(rect.width() * self._fraction, rect.height()), rect.height())
            painter.drawRoundedRect(fill, radius, radius)

        painter.end()
