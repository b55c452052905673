"""Theme configuration — Fluent Design theme and accent color."""

from __future__ import annotations

from qfluentwidgets import setTheme, setThemeColor, Theme

_THEMES = {"auto": Theme.AUTO, "dark": Theme.DARK, "light": Theme.LIGHT}


def apply_theme(theme: str = "auto", accent_color: str = "#0078D4") -> None:
    """Apply the application theme ("auto", "dark" or "light")."""
    setTheme(_THEMES.get(theme, Theme.AUTO))
    setThemeColor(accent_color)
