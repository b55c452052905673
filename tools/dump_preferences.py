"""Print the widget's display facts for a Time Machine plist or the shared slot.

Usage:
    python -m tools.dump_preferences [plist]
    python -m tools.dump_preferences --slot [--data-dir DIR]

Examples:
    python -m tools.dump_preferences /Library/Preferences/com.apple.TimeMachine.plist
    python -m tools.dump_preferences --slot

Without arguments the default plist location is read. Exit status is 1 when
no preferences could be produced.
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from backup_status.config import Config
from backup_status.core.grant import PREFERENCES_FILE, FileGrant
from backup_status.core.presenter import compute_facts, next_refresh_points
from backup_status.core.reader import read_preferences
from backup_status.core.widget_center import WidgetCenter
from backup_status.data.key_value_store import KeyValueStore
from backup_status.data.preferences_store import PreferencesStore
from backup_status.logger import setup_logger
from backup_status.models.preferences import Preferences
from backup_status.utils import format_size


def load_preferences(args: argparse.Namespace) -> Preferences | None:
    if args.slot:
        config = Config(Path(args.data_dir)) if args.data_dir else Config()
        store = PreferencesStore(KeyValueStore(config.shared_dir), WidgetCenter(config.shared_dir))
        return store.load()
    return read_preferences(FileGrant(Path(args.plist)))


def dump(preferences: Preferences, now: datetime) -> None:
    for destination in preferences.destinations:
        marker = "*" if destination == preferences.last_destination else " "
        last = destination.last_snapshot
        print(f"{marker} {destination.volume_name or '(unnamed)'} [{destination.id}]")
        print(f"    encrypted={destination.is_encrypted} network={destination.is_network}")
        print(
            f"    used={format_size(destination.bytes_used)} "
            f"available={format_size(destination.bytes_available)}"
        )
        print(f"    snapshots={len(destination.snapshots)} last={last.isoformat() if last else '-'}")

    facts = compute_facts(preferences, now)
    print()
    if facts.placeholder:
        print("Widget: no last-used destination")
    else:
        print(f"Widget: {facts.volume_name} | {facts.last_snapshot_label} | {facts.usage_label}")
    print("Refresh points: " + ", ".join(p.isoformat(timespec="minutes") for p in next_refresh_points(now)))


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("plist", nargs="?", default=str(PREFERENCES_FILE), help="Path to the plist")
    parser.add_argument("--slot", action="store_true", help="Read the shared slot instead of a plist")
    parser.add_argument("--data-dir", default="", help="Application data directory (with --slot)")
    args = parser.parse_args()

    setup_logger()
    preferences = load_preferences(args)
    if preferences is None:
        print("No preferences available.", file=sys.stderr)
        return 1
    dump(preferences, datetime.now().astimezone())
    return 0


if __name__ == "__main__":
    sys.exit(main())
