"""Shared utility functions."""

from __future__ import annotations

import os
import platform
import subprocess
from pathlib import Path


def format_size(size_bytes: int) -> str:
    """Format byte count to human-readable string (decimal units, as Finder does)."""
    if size_bytes < 1000:
        return f"{size_bytes} B"
    elif size_bytes < 1000**2:
        return f"{size_bytes / 1000:.1f} KB"
    elif size_bytes < 1000**3:
        return f"{size_bytes / 1000**2:.1f} MB"
    elif size_bytes < 1000**4:
        return f"{size_bytes / 1000**3:.1f} GB"
    else:
        return f"{size_bytes / 1000**4:.2f} TB"


def open_folder(path: str | Path) -> None:
    """Open a folder in the system file manager."""
    path = Path(path)
    target = path if path.is_dir() else path.parent

    system = platform.system()
    if system == "Windows":
        os.startfile(str(target))  # noqa: S606
    elif system == "Darwin":
        subprocess.Popen(["open", str(target)])  # noqa: S603, S607
    else:
        subprocess.Popen(["xdg-open", str(target)])  # noqa: S603, S607
