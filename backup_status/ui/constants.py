"""UI constants — window dimensions and status colors."""

from __future__ import annotations

# Setup window
APP_WIDTH = 480
APP_HEIGHT = 560

# Desktop widget (roughly a small macOS widget)
WIDGET_SIZE = 170
WIDGET_MARGIN = 14
USAGE_BAR_HEIGHT = 8

# Badge colors
BADGE_COLORS: dict[str, str] = {
    "encrypted": "#107C10",
    "network": "#0078D4",
    "local": "#7A7574",
}

# Usage bar fill: normal / nearly full
USAGE_NORMAL_COLOR = "#0078D4"
USAGE_WARNING_COLOR = "#D83B01"
USAGE_WARNING_FRACTION = 0.9
