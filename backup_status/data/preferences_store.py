"""Preferences store — moves a Preferences snapshot through the shared slot."""

from __future__ import annotations

import json
from datetime import datetime
from typing import TYPE_CHECKING, Any

from loguru import logger

from backup_status.core.widget_center import WIDGET_KIND
from backup_status.errors import SerializationFailure, StoreUnreadable
from backup_status.models.preferences import Destination, Preferences

if TYPE_CHECKING:
    from backup_status.core.widget_center import WidgetCenter
    from backup_status.data.key_value_store import KeyValueStore

PREFERENCES_KEY = "preferences"


def _destination_to_dict(destination: Destination) -> dict[str, Any]:
    return {
        "id": destination.id,
        "is_encrypted": destination.is_encrypted,
        "is_network": destination.is_network,
        "bytes_available": destination.bytes_available,
        "bytes_used": destination.bytes_used,
        "volume_name": destination.volume_name,
        "snapshots": [s.isoformat() for s in destination.snapshots],
    }


def _destination_from_dict(data: dict[str, Any]) -> Destination:
    return Destination(
        id=data["id"],
        is_encrypted=data["is_encrypted"],
        is_network=data["is_network"],
        bytes_available=data["bytes_available"],
        bytes_used=data["bytes_used"],
        volume_name=data["volume_name"],
        snapshots=tuple(datetime.fromisoformat(s) for s in data["snapshots"]),
    )


def encode_preferences(preferences: Preferences) -> str:
    """Serialize to the JSON interchange format stored in the slot."""
    try:
        last = preferences.last_destination
        data = {
            "destinations": [_destination_to_dict(d) for d in preferences.destinations],
            "last_destination": _destination_to_dict(last) if last is not None else None,
        }
        return json.dumps(data, ensure_ascii=False)
    except (TypeError, ValueError, AttributeError) as e:
        raise SerializationFailure(str(e)) from e


def decode_preferences(payload: Any) -> Preferences:
    """Inverse of :func:`encode_preferences`. Raises ValueError on bad payloads."""
    if not isinstance(payload, str):
        raise ValueError(f"expected JSON text, got {type(payload).__name__}")
    try:
        data = json.loads(payload)
        last = data["last_destination"]
        return Preferences(
            destinations=tuple(_destination_from_dict(d) for d in data["destinations"]),
            last_destination=_destination_from_dict(last) if last is not None else None,
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"malformed preferences payload: {e!r}") from e


class PreferencesStore:
    """
    Shared-slot access for both the producer (menu app) and the widget.

    Both dependencies are injected so each process builds its own store over
    the same shared directory.
    """

    def __init__(self, kv_store: KeyValueStore, widget_center: WidgetCenter) -> None:
        self._kv = kv_store
        self._widget_center = widget_center

    def store(self, preferences: Preferences) -> bool:
        """Overwrite the slot and ask widgets to reload. Returns success."""
        try:
            payload = encode_preferences(preferences)
        except SerializationFailure as e:
            logger.error(f"Failed storing preferences: {e}")
            return False
        if not self._kv.set(PREFERENCES_KEY, payload):
            logger.error("Failed storing preferences: shared store not writable")
            return False
        self._widget_center.reload_timelines(WIDGET_KIND)
        logger.info("Preferences stored")
        return True

    def load(self) -> Preferences | None:
        """Read the slot. None when not configured yet or undecodable."""
        try:
            payload = self._kv.get(PREFERENCES_KEY)
        except StoreUnreadable as e:
            logger.error(f"Failed loading preferences: {e}")
            return None
        if payload is None:
            logger.info("Preferences not available")
            return None
        try:
            preferences = decode_preferences(payload)
        except ValueError as e:
            logger.error(f"Failed loading preferences: {e}")
            return None
        logger.info("Preferences loaded")
        return preferences

    def clear(self) -> None:
        self._kv.remove(PREFERENCES_KEY)
        self._widget_center.reload_timelines(WIDGET_KIND)
        logger.info("Preferences cleared")
