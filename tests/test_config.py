"""Tests for the Config system."""

from __future__ import annotations

from pathlib import Path

import pytest

from backup_status.config import Config, reset_config


@pytest.fixture(autouse=True)
def _clean_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(data_dir=tmp_path)


class TestConfig:
    def test_default_values(self, config: Config, tmp_path: Path) -> None:
        assert config.language == "en_US"
        assert config.bookmark is None
        assert config.shared_dir == tmp_path / "shared"
        assert config.log_dir == tmp_path / "logs"
        assert config.refresh_interval_minutes == 30
        assert config.start_at_launch is False
        assert config.widget_position is None
        assert config.widget_stay_on_top is True

    def test_bookmark_round_trip(self, config: Config) -> None:
        config.bookmark = Path("/Library/Preferences/com.apple.TimeMachine.plist")
        assert config.bookmark == Path("/Library/Preferences/com.apple.TimeMachine.plist")
        config.bookmark = None
        assert config.bookmark is None

    def test_persisted(self, config: Config, tmp_path: Path) -> None:
        config.start_at_launch = True
        config.widget_position = (10, 20)
        reloaded = Config(data_dir=tmp_path)
        assert reloaded.start_at_launch is True
        assert reloaded.widget_position == (10, 20)

    def test_batch_update_atomic(self, config: Config, tmp_path: Path) -> None:
        with config.batch_update():
            config.set("refresh_interval_minutes", 5)
            config.set("shared_dir", str(tmp_path / "group"))
            assert not (tmp_path / "config.json").exists()
        assert config.refresh_interval_minutes == 5
        assert config.shared_dir == tmp_path / "group"

    def test_nested_defaults_merged(self, config: Config, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text('{"widget": {"stay_on_top": false}}', encoding="utf-8")
        config.reload()
        assert config.widget_stay_on_top is False
        assert config.get("widget.position") == []

    def test_corrupt_file_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text("{broken", encoding="utf-8")
        assert Config(data_dir=tmp_path).language == "en_US"

    def test_refresh_interval_floor(self, config: Config) -> None:
        config.set("refresh_interval_minutes", 0)
        assert config.refresh_interval_minutes == 1

    def test_set_keeps_other_writer_changes(self, tmp_path: Path) -> None:
        menu_app = Config(data_dir=tmp_path)
        widget = Config(data_dir=tmp_path)
        menu_app.bookmark = Path("/Library/Preferences/com.apple.TimeMachine.plist")
        widget.widget_position = (5, 6)
        reloaded = Config(data_dir=tmp_path)
        assert reloaded.bookmark is not None
        assert reloaded.widget_position == (5, 6)

    def test_non_numeric_values_use_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text(
            '{"refresh_interval_minutes": "often", "widget": {"position": ["left", null]}}',
            encoding="utf-8",
        )
        config = Config(data_dir=tmp_path)
        assert config.refresh_interval_minutes == 30
        assert config.widget_position is None
