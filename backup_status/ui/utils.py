"""UI utility functions — shared helpers for the UI layer."""

from __future__ import annotations

from PySide6.QtWidgets import QGraphicsOpacityEffect, QWidget
from qfluentwidgets import InfoBar, InfoBarPosition


def show_success(parent: QWidget, title: str, content: str = "") -> None:
    """Show a success InfoBar."""
    InfoBar.success(
        title=title,
        content=content,
        orient=1,  # Vertical
        isClosable=True,
        position=InfoBarPosition.TOP_RIGHT,
        duration=3000,
        parent=parent,
    )


def show_error(parent: QWidget, title: str, content: str = "") -> None:
    """Show an error InfoBar."""
    InfoBar.error(
        title=title,
        content=content,
        orient=1,
        isClosable=True,
        position=InfoBarPosition.TOP_RIGHT,
        duration=5000,
        parent=parent,
    )


def set_dimmed(widget: QWidget, dimmed: bool) -> None:
    """Fade a finished setup step to half opacity."""
    effect = QGraphicsOpacityEffect(widget)
    effect.setOpacity(0.5 if dimmed else 1.0)
    widget.setGraphicsEffect(effect)
