"""Tests for the shared-slot PreferencesStore."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from loguru import logger

from backup_status.core.widget_center import WIDGET_KIND, WidgetCenter
from backup_status.data.key_value_store import KeyValueStore
from backup_status.data.preferences_store import (
    PREFERENCES_KEY,
    PreferencesStore,
    decode_preferences,
    encode_preferences,
)
from backup_status.models.preferences import Destination, Preferences

NOW = datetime(2024, 5, 10, 15, 0, 0, 123456, tzinfo=timezone.utc)


@pytest.fixture
def kv(tmp_path: Path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "shared")


@pytest.fixture
def widget_center(tmp_path: Path) -> WidgetCenter:
    return WidgetCenter(tmp_path / "shared")


@pytest.fixture
def store(kv: KeyValueStore, widget_center: WidgetCenter) -> PreferencesStore:
    return PreferencesStore(kv, widget_center)


@pytest.fixture
def two_destinations() -> Preferences:
    local = Destination(
        id="A",
        is_encrypted=True,
        bytes_available=10,
        bytes_used=5,
        volume_name="Local",
        snapshots=(NOW, NOW - timedelta(hours=3), NOW),
    )
    nas = Destination(id="B", is_network=True, volume_name="NAS")
    return Preferences(destinations=(local, nas), last_destination=nas)


class TestRoundTrip:
    def test_demo(self, store: PreferencesStore) -> None:
        prefs = Preferences.demo(NOW)
        assert store.store(prefs)
        assert store.load() == prefs

    def test_two_destinations(self, store: PreferencesStore, two_destinations: Preferences) -> None:
        assert store.store(two_destinations)
        loaded = store.load()
        assert loaded == two_destinations
        assert loaded.last_destination.id == "B"

    def test_empty(self, store: PreferencesStore) -> None:
        assert store.store(Preferences())
        assert store.load() == Preferences()

    def test_other_timezone_preserved(self, store: PreferencesStore) -> None:
        zone = timezone(timedelta(hours=-5))
        dest = Destination(id="A", snapshots=(datetime(2024, 1, 1, 8, 0, tzinfo=zone),))
        prefs = Preferences(destinations=(dest,), last_destination=dest)
        store.store(prefs)
        loaded = store.load()
        assert loaded.last_destination.snapshots[0].utcoffset() == timedelta(hours=-5)

    def test_payload_is_json(self, kv: KeyValueStore, store: PreferencesStore) -> None:
        store.store(Preferences.demo(NOW))
        data = json.loads(kv.get(PREFERENCES_KEY))
        assert data["last_destination"]["volume_name"] == "Time Machine"

    def test_codec_functions(self, two_destinations: Preferences) -> None:
        assert decode_preferences(encode_preferences(two_destinations)) == two_destinations


class TestLoad:
    def test_absent_slot(self, store: PreferencesStore) -> None:
        assert store.load() is None

    def test_undecodable_slot(self, kv: KeyValueStore, store: PreferencesStore) -> None:
        kv.set(PREFERENCES_KEY, "{not json")
        assert store.load() is None

    def test_wrong_shape(self, kv: KeyValueStore, store: PreferencesStore) -> None:
        kv.set(PREFERENCES_KEY, json.dumps({"destinations": [{"id": "A"}]}))
        assert store.load() is None

    def test_non_string_payload(self, kv: KeyValueStore, store: PreferencesStore) -> None:
        kv.set(PREFERENCES_KEY, 42)
        assert store.load() is None

    def test_corrupt_store_file_logged_as_error(self, kv: KeyValueStore, store: PreferencesStore) -> None:
        kv.path.parent.mkdir(parents=True)
        kv.path.write_text("{oops", encoding="utf-8")
        errors: list[str] = []
        sink = logger.add(errors.append, level="ERROR", format="{message}")
        try:
            assert store.load() is None
        finally:
            logger.remove(sink)
        assert len(errors) == 1
        assert "Failed loading preferences" in errors[0]

    def test_absent_slot_is_not_an_error(self, store: PreferencesStore) -> None:
        errors: list[str] = []
        sink = logger.add(errors.append, level="ERROR", format="{message}")
        try:
            assert store.load() is None
        finally:
            logger.remove(sink)
        assert errors == []


class TestStoreAndClear:
    def test_clear_then_load(self, store: PreferencesStore) -> None:
        store.store(Preferences.demo(NOW))
        store.clear()
        assert store.load() is None

    def test_clear_when_empty(self, store: PreferencesStore) -> None:
        store.clear()
        assert store.load() is None

    def test_overwrites_wholesale(self, store: PreferencesStore, two_destinations: Preferences) -> None:
        store.store(two_destinations)
        store.store(Preferences.demo(NOW))
        assert store.load() == Preferences.demo(NOW)

    def test_serialization_failure_leaves_slot(self, store: PreferencesStore) -> None:
        good = Preferences.demo(NOW)
        store.store(good)
        bad_dest = Destination(id="X", snapshots=("not a date",))  # type: ignore[arg-type]
        assert store.store(Preferences(destinations=(bad_dest,))) is False
        assert store.load() == good

    def test_store_signals_widget(self, store: PreferencesStore, widget_center: WidgetCenter) -> None:
        store.store(Preferences.demo(NOW))
        assert widget_center.marker_path(WIDGET_KIND).exists()

    def test_clear_signals_widget(self, kv: KeyValueStore) -> None:
        center = MagicMock()
        PreferencesStore(kv, center).clear()
        center.reload_timelines.assert_called_once_with(WIDGET_KIND)

    def test_failed_store_does_not_signal(self, kv: KeyValueStore) -> None:
        center = MagicMock()
        bad_dest = Destination(snapshots=(object(),))  # type: ignore[arg-type]
        assert PreferencesStore(kv, center).store(Preferences(destinations=(bad_dest,))) is False
        center.reload_timelines.assert_not_called()

    def test_two_stores_share_slot(self, tmp_path: Path) -> None:
        shared = tmp_path / "shared"
        producer = PreferencesStore(KeyValueStore(shared), WidgetCenter(shared))
        consumer = PreferencesStore(KeyValueStore(shared), WidgetCenter(shared))
        producer.store(Preferences.demo(NOW))
        assert consumer.load() == Preferences.demo(NOW)
