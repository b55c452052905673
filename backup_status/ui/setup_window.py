"""Setup window — grant permission, start at launch, add the widget."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QFileDialog, QHBoxLayout, QVBoxLayout, QWidget
from qfluentwidgets import (
    BodyLabel,
    CardWidget,
    MessageBox,
    PrimaryPushButton,
    SubtitleLabel,
    TitleLabel,
    TransparentPushButton,
)
from qfluentwidgets import FluentIcon as FIF

from backup_status.core.grant import PREFERENCES_DIR, PREFERENCES_FILE_NAME
from backup_status.i18n import t
from backup_status.ui.constants import APP_HEIGHT, APP_WIDTH
from backup_status.ui.utils import set_dimmed, show_error, show_success

if TYPE_CHECKING:
    from backup_status.context import AppContext


class _StepCard(CardWidget):
    """One numbered setup step: title, explanation and an action button."""

    def __init__(self, title: str, body: str, button: QWidget, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(6)

        layout.addWidget(SubtitleLabel(title, self))
        body_label = BodyLabel(body, self)
        body_label.setWordWrap(True)
        layout.addWidget(body_label)

        button.setParent(self)
        layout.addWidget(button, 0, Qt.AlignmentFlag.AlignLeft)


class SetupWindow(QWidget):
    """First-run window of the menu app."""

    granted = Signal()
    widget_requested = Signal()
    uninstall_requested = Signal()

    def __init__(self, ctx: AppContext, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._ctx = ctx

        self.setWindowTitle(t("app.title"))
        self.setFixedSize(APP_WIDTH, APP_HEIGHT)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 16)
        layout.setSpacing(12)

        layout.addWidget(TitleLabel(t("app.title"), self), 0, Qt.AlignmentFlag.AlignHCenter)
        intro = BodyLabel(f"{t('app.intro')} {t('app.instructions')}", self)
        intro.setWordWrap(True)
        layout.addWidget(intro)

        # Step 1
        self._grant_btn = PrimaryPushButton(FIF.FOLDER, t("setup.grant_button"))
        self._grant_btn.clicked.connect(self._on_grant)
        self._grant_card = _StepCard(
            t("setup.grant_title"),
            t("setup.grant_body", file_name=PREFERENCES_FILE_NAME),
            self._grant_btn,
            self,
        )
        layout.addWidget(self._grant_card)

        # Step 2
        self._launch_btn = PrimaryPushButton(FIF.PLAY, t("setup.launch_button"))
        self._launch_btn.clicked.connect(self._on_start_at_launch)
        self._launch_card = _StepCard(
            t("setup.launch_title"), t("setup.launch_body"), self._launch_btn, self
        )
        layout.addWidget(self._launch_card)

        # Step 3
        self._widget_btn = PrimaryPushButton(FIF.VIEW, t("setup.widget_button"))
        self._widget_btn.clicked.connect(self.widget_requested.emit)
        layout.addWidget(
            _StepCard(t("setup.widget_title"), t("setup.widget_body"), self._widget_btn, self)
        )

        layout.addStretch()

        footer = QHBoxLayout()
        footer.addStretch()
        self._uninstall_btn = TransparentPushButton(t("setup.uninstall"), self)
        self._uninstall_btn.clicked.connect(self._on_uninstall)
        footer.addWidget(self._uninstall_btn)
        footer.addStretch()
        layout.addLayout(footer)

        self.update_state()

    def update_state(self) -> None:
        """Disable and fade the steps that are already done."""
        granted = self._ctx.grants.is_granted
        self._grant_btn.setEnabled(not granted)
        set_dimmed(self._grant_card, granted)

        launching = self._ctx.launch_agent.enabled
        self._launch_btn.setEnabled(not launching)
        set_dimmed(self._launch_card, launching)

    def _on_grant(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            t("setup.grant_button"),
            str(PREFERENCES_DIR / PREFERENCES_FILE_NAME),
            "Property List (*.plist)",
        )
        if not path:
            return
        if Path(path).name != PREFERENCES_FILE_NAME:
            show_error(self, t("setup.grant_wrong_file", file_name=PREFERENCES_FILE_NAME))
            return
        if self._ctx.grants.grant_access(path) is None:
            show_error(self, t("setup.grant_failed"), path)
            return
        self.granted.emit()
        show_success(self, t("setup.done"))
        self.update_state()

    def _on_start_at_launch(self) -> None:
        if not self._ctx.launch_agent.enable():
            show_error(self, t("setup.launch_failed"))
            return
        self._ctx.config.start_at_launch = True
        show_success(self, t("setup.done"))
        self.update_state()

    def _on_uninstall(self) -> None:
        box = MessageBox(t("setup.uninstall"), t("setup.uninstall_confirm"), self)
        if box.exec():
            self.uninstall_requested.emit()
