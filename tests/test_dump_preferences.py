"""Tests for the dump_preferences tool."""

from __future__ import annotations

from datetime import datetime, timezone

from backup_status.i18n import set_language
from backup_status.models.preferences import Destination, Preferences
from tools.dump_preferences import dump

NOW = datetime(2024, 5, 10, 15, 0, tzinfo=timezone.utc)


def test_dump_demo(capsys) -> None:
    set_language("en_US")
    dump(Preferences.demo(NOW), NOW)
    out = capsys.readouterr().out
    assert "* Time Machine [0F051871-0C44-4856-83C6-4852661B2BF7]" in out
    assert "snapshots=25" in out
    assert "Widget: Time Machine | 2 hours ago | 454.0 GB of 1.77 TB used" in out


def test_dump_without_last_destination(capsys) -> None:
    dump(Preferences(destinations=(Destination(id="A"),)), NOW)
    out = capsys.readouterr().out
    assert "  (unnamed) [A]" in out
    assert "no last-used destination" in out
