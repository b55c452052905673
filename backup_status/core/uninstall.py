"""Uninstall flow — removes everything Backup Status left on the system."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from backup_status.context import AppContext


def uninstall(ctx: AppContext) -> None:
    """Clear the shared slot, revoke the grant and remove the login item."""
    ctx.preferences_store.clear()
    ctx.grants.revoke()
    ctx.launch_agent.disable()
    ctx.config.start_at_launch = False
    logger.info("Backup Status uninstalled")
