"""Menu bar (system tray) icon of the menu app."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMenu, QSystemTrayIcon, QWidget
from qfluentwidgets import FluentIcon as FIF

from backup_status.core.presenter import compute_facts
from backup_status.i18n import t
from backup_status.utils import open_folder

if TYPE_CHECKING:
    from backup_status.context import AppContext


class TrayIcon(QSystemTrayIcon):
    """Tray icon whose tooltip mirrors the widget's headline."""

    def __init__(self, ctx: AppContext, window: QWidget, parent: QWidget | None = None) -> None:
        super().__init__(FIF.HISTORY.icon(), parent)
        self._ctx = ctx
        self._window = window

        menu = QMenu()
        show_action = QAction(t("tray.show"), menu)
        show_action.triggered.connect(self._show_window)
        menu.addAction(show_action)

        self.refresh_action = QAction(t("tray.refresh"), menu)
        menu.addAction(self.refresh_action)

        logs_action = QAction(t("tray.logs"), menu)
        logs_action.triggered.connect(lambda: open_folder(ctx.config.log_dir))
        menu.addAction(logs_action)

        menu.addSeparator()
        self.quit_action = QAction(t("tray.quit"), menu)
        menu.addAction(self.quit_action)

        self._menu = menu
        self.setContextMenu(menu)
        self.update_tooltip()

    def _show_window(self) -> None:
        self._window.show()
        self._window.raise_()
        self._window.activateWindow()

    def update_tooltip(self, _stored: bool = True) -> None:
        facts = compute_facts(self._ctx.preferences_store.load(), datetime.now().astimezone())
        if facts.placeholder:
            self.setToolTip(f"{t('app.title')}: {t('widget.placeholder')}")
        else:
            self.setToolTip(f"{facts.volume_name}: {t('widget.last_backup')} {facts.last_snapshot_label}")
