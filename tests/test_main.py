"""Tests for the menu app signal wiring."""

from __future__ import annotations

from unittest.mock import MagicMock

from main import connect_menu_app


class TestConnectMenuApp:
    def test_grant_refreshes_through_monitor(self) -> None:
        ctx, window, tray, monitor = MagicMock(), MagicMock(), MagicMock(), MagicMock()
        connect_menu_app(MagicMock(), ctx, window, tray, monitor, demo=False)
        window.granted.connect.assert_called_once_with(monitor.refresh)
        ctx.refresher.refresh.assert_not_called()

    def test_refresh_updates_tray(self) -> None:
        window, tray, monitor = MagicMock(), MagicMock(), MagicMock()
        connect_menu_app(MagicMock(), MagicMock(), window, tray, monitor, demo=False)
        monitor.refreshed.connect.assert_any_call(tray.update_tooltip)
        tray.refresh_action.triggered.connect.assert_called_once_with(monitor.refresh)

    def test_uninstall_stops_monitor_and_quits(self) -> None:
        app, ctx, window, monitor = MagicMock(), MagicMock(), MagicMock(), MagicMock()
        connect_menu_app(app, ctx, window, MagicMock(), monitor, demo=False)
        on_uninstall = window.uninstall_requested.connect.call_args.args[0]
        on_uninstall()
        monitor.stop.assert_called_once()
        ctx.preferences_store.clear.assert_called_once()
        app.quit.assert_called_once()
