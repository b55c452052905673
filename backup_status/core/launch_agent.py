"""Start at launch — a per-user launchd agent that runs the menu app at login."""

from __future__ import annotations

import plistlib
from pathlib import Path

from loguru import logger

DEFAULT_LABEL = "com.backupstatus.agent"
DEFAULT_AGENTS_DIR = Path.home() / "Library" / "LaunchAgents"


class LaunchAgent:
    """Writes or removes ``~/Library/LaunchAgents/<label>.plist``."""

    def __init__(
        self,
        program_arguments: list[str],
        label: str = DEFAULT_LABEL,
        agents_dir: Path | None = None,
    ) -> None:
        self._label = label
        self._program_arguments = list(program_arguments)
        self._path = (agents_dir or DEFAULT_AGENTS_DIR) / f"{label}.plist"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def enabled(self) -> bool:
        return self._path.exists()

    def definition(self) -> dict:
        return {
            "Label": self._label,
            "ProgramArguments": self._program_arguments,
            "RunAtLoad": True,
            "ProcessType": "Interactive",
            "LimitLoadToSessionType": "Aqua",
        }

    def enable(self) -> bool:
        """Install the agent plist. Takes effect at next login."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        try:
            with open(tmp, "wb") as f:
                plistlib.dump(self.definition(), f)
            tmp.replace(self._path)
        except OSError as e:
            logger.error(f"Failed to enable start at launch: {e}")
            tmp.unlink(missing_ok=True)
            return False
        logger.info(f"Start at launch enabled: {self._path}")
        return True

    def disable(self) -> bool:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to disable start at launch: {e}")
            return False
        logger.info("Start at launch disabled")
        return True
