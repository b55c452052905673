"""Tests for the Preferences / Destination models."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from backup_status.models.preferences import Destination, Preferences

NOW = datetime(2024, 5, 10, 15, 0, tzinfo=timezone.utc)


class TestLastSnapshot:
    def test_empty_is_none(self) -> None:
        assert Destination().last_snapshot is None

    def test_maximum(self) -> None:
        snapshots = (
            NOW - timedelta(minutes=130),
            NOW - timedelta(minutes=590),
            NOW - timedelta(minutes=150),
        )
        assert Destination(snapshots=snapshots).last_snapshot == NOW - timedelta(minutes=130)

    def test_order_irrelevant(self) -> None:
        a, b = NOW - timedelta(days=1), NOW
        assert Destination(snapshots=(a, b)).last_snapshot == Destination(snapshots=(b, a)).last_snapshot


class TestPreferences:
    def test_immutable(self) -> None:
        prefs = Preferences()
        with pytest.raises(dataclasses.FrozenInstanceError):
            prefs.last_destination = Destination()  # type: ignore[misc]

    def test_resolve_last_destination(self) -> None:
        dests = (Destination(id="A"), Destination(id="B"))
        assert Preferences.resolve_last_destination(dests, "B") is dests[1]
        assert Preferences.resolve_last_destination(dests, "C") is None
        assert Preferences.resolve_last_destination(dests, None) is None

    def test_resolve_ignores_empty_id(self) -> None:
        assert Preferences.resolve_last_destination((Destination(id=""),), "") is None


class TestDemo:
    def test_demo_shape(self) -> None:
        prefs = Preferences.demo(NOW)
        assert len(prefs.destinations) == 1
        dest = prefs.last_destination
        assert dest is prefs.destinations[0]
        assert dest.is_encrypted and not dest.is_network
        assert dest.volume_name == "Time Machine"
        assert len(dest.snapshots) == 25

    def test_demo_last_snapshot(self) -> None:
        dest = Preferences.demo(NOW).last_destination
        assert dest.last_snapshot == NOW - timedelta(minutes=130) + timedelta(seconds=31)
