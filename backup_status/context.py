"""Application context — service container for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from backup_status.config import Config
    from backup_status.core.grant import GrantManager
    from backup_status.core.launch_agent import LaunchAgent
    from backup_status.core.status_monitor import StatusRefresher
    from backup_status.core.widget_center import WidgetCenter
    from backup_status.data.preferences_store import PreferencesStore


@dataclass
class AppContext:
    """
    Central service container.

    Both processes build one from the same config, so the menu app and the
    widget share the slot through ``preferences_store`` without any global state.
    """

    config: Config
    grants: GrantManager
    launch_agent: LaunchAgent

    # Shared slot
    widget_center: WidgetCenter
    preferences_store: PreferencesStore

    refresher: StatusRefresher
