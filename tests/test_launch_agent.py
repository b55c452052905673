"""Tests for the start-at-launch agent."""

from __future__ import annotations

import plistlib
from pathlib import Path

import pytest

from backup_status.core.launch_agent import LaunchAgent


@pytest.fixture
def agent(tmp_path: Path) -> LaunchAgent:
    return LaunchAgent(["/usr/bin/python3", "/opt/bs/main.py", "--background"], agents_dir=tmp_path)


class TestLaunchAgent:
    def test_disabled_initially(self, agent: LaunchAgent) -> None:
        assert not agent.enabled

    def test_enable_writes_plist(self, agent: LaunchAgent) -> None:
        assert agent.enable()
        assert agent.enabled
        with open(agent.path, "rb") as f:
            data = plistlib.load(f)
        assert data["Label"] == "com.backupstatus.agent"
        assert data["ProgramArguments"][-1] == "--background"
        assert data["RunAtLoad"] is True

    def test_disable(self, agent: LaunchAgent) -> None:
        agent.enable()
        assert agent.disable()
        assert not agent.enabled

    def test_disable_when_absent(self, agent: LaunchAgent) -> None:
        assert agent.disable()
