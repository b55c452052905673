"""Application entry point — wires services and launches the menu app or the widget."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger
from PySide6.QtCore import QProcess
from PySide6.QtWidgets import QApplication

from backup_status.config import Config, get_config
from backup_status.context import AppContext
from backup_status.core.grant import GrantManager
from backup_status.core.launch_agent import LaunchAgent
from backup_status.core.status_monitor import StatusMonitor, StatusRefresher
from backup_status.core.uninstall import uninstall
from backup_status.core.widget_center import WidgetCenter
from backup_status.data.key_value_store import KeyValueStore
from backup_status.data.preferences_store import PreferencesStore
from backup_status.i18n import set_language
from backup_status.logger import setup_logger

_MAIN_SCRIPT = Path(__file__).resolve()


def create_context(config: Config | None = None) -> AppContext:
    """Wire all services and return an AppContext."""
    config = config or get_config()

    # Shared slot
    kv_store = KeyValueStore(config.shared_dir)
    widget_center = WidgetCenter(config.shared_dir)
    preferences_store = PreferencesStore(kv_store, widget_center)

    grants = GrantManager(config)
    launch_agent = LaunchAgent([sys.executable, str(_MAIN_SCRIPT), "--background"])
    refresher = StatusRefresher(grants, preferences_store)

    return AppContext(
        config=config,
        grants=grants,
        launch_agent=launch_agent,
        widget_center=widget_center,
        preferences_store=preferences_store,
        refresher=refresher,
    )


def launch_widget(demo: bool = False) -> None:
    """Start the widget as its own process."""
    args = [str(_MAIN_SCRIPT), "--widget"]
    if demo:
        args.append("--demo")
    if not QProcess.startDetached(sys.executable, args):
        logger.error("Failed to start the widget process")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Time Machine status widget")
    parser.add_argument("--widget", action="store_true", help="Run the desktop widget process")
    parser.add_argument("--demo", action="store_true", help="Show sample data instead of the shared slot")
    parser.add_argument(
        "--background",
        action="store_true",
        help="Start the menu app without opening the setup window (used at login)",
    )
    return parser.parse_args(argv)


def connect_menu_app(app, ctx: AppContext, window, tray, monitor: StatusMonitor, demo: bool) -> None:
    """Wire setup window, tray and monitor signals of the menu app."""

    def on_uninstall() -> None:
        monitor.stop()
        uninstall(ctx)
        app.quit()

    # A new grant goes through the monitor so the file watch is armed at once
    window.granted.connect(monitor.refresh)
    window.widget_requested.connect(lambda: launch_widget(demo))
    window.uninstall_requested.connect(on_uninstall)
    monitor.refreshed.connect(tray.update_tooltip)
    monitor.refreshed.connect(lambda _stored: window.update_state())
    tray.refresh_action.triggered.connect(monitor.refresh)
    tray.quit_action.triggered.connect(app.quit)


def run_menu_app(app: QApplication, ctx: AppContext, background: bool, demo: bool) -> int:
    from backup_status.ui.setup_window import SetupWindow
    from backup_status.ui.tray import TrayIcon

    app.setQuitOnLastWindowClosed(False)

    window = SetupWindow(ctx)
    tray = TrayIcon(ctx, window)
    monitor = StatusMonitor(ctx.refresher, ctx.grants, ctx.config.refresh_interval_minutes)
    connect_menu_app(app, ctx, window, tray, monitor, demo)

    tray.show()
    monitor.start()
    if not background or not ctx.grants.is_granted:
        window.show()

    return app.exec()


def run_widget(app: QApplication, ctx: AppContext, demo: bool) -> int:
    from backup_status.ui.widget_window import WidgetWindow

    widget = WidgetWindow(ctx, demo=demo)
    widget.show()
    return app.exec()


def main(argv: list[str] | None = None) -> int:
    """Application entry point."""
    args = parse_args(argv)
    config = get_config()

    # Logger
    setup_logger(config.log_dir, "backup-status-widget" if args.widget else "backup-status")

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Backup Status")
    app.setOrganizationName("BackupStatus")

    from backup_status.ui.theme import apply_theme

    apply_theme(config.theme)
    set_language(config.language)

    ctx = create_context(config)
    if args.widget:
        return run_widget(app, ctx, args.demo)
    return run_menu_app(app, ctx, args.background, args.demo)


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
