"""Time Machine preferences models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

# (minutes, seconds) before "now" for each demo snapshot
_DEMO_SNAPSHOT_OFFSETS: tuple[tuple[int, int], ...] = (
    (130, 31), (590, 15), (150, 18), (904, 27), (200, 45),
    (360, 10), (480, 55), (720, 30), (210, 20), (320, 40),
    (430, 50), (540, 60), (650, 35), (760, 45), (870, 55),
    (980, 25), (1030, 30), (1100, 40), (1170, 50), (1240, 60),
    (1310, 35), (1380, 45), (1450, 55), (1520, 25), (1590, 30),
)


@dataclass(frozen=True)
class Destination:
    """One configured Time Machine backup target."""

    id: str = ""
    is_encrypted: bool = False
    is_network: bool = False
    bytes_available: int = 0
    bytes_used: int = 0
    volume_name: str = ""
    snapshots: tuple[datetime, ...] = field(default_factory=tuple)

    @property
    def last_snapshot(self) -> datetime | None:
        """Most recent snapshot date, or None when no snapshot was recorded."""
        return max(self.snapshots, default=None)


@dataclass(frozen=True)
class Preferences:
    """Parsed snapshot of the Time Machine preferences file."""

    destinations: tuple[Destination, ...] = field(default_factory=tuple)
    last_destination: Destination | None = None

    @staticmethod
    def resolve_last_destination(
        destinations: tuple[Destination, ...], destination_id: str | None
    ) -> Destination | None:
        """Find the destination matching *destination_id*, or None."""
        if not destination_id:
            return None
        for destination in destinations:
            if destination.id == destination_id:
                return destination
        return None

    @classmethod
    def demo(cls, now: datetime | None = None) -> Preferences:
        """Sample preferences used for widget previews and ``--demo``."""
        now = now or datetime.now(tz=timezone.utc)
        snapshots = tuple(
            now - timedelta(minutes=minutes) + timedelta(seconds=seconds)
            for minutes, seconds in _DEMO_SNAPSHOT_OFFSETS
        )
        destination = Destination(
            id="0F051871-0C44-4856-83C6-4852661B2BF7",
            is_encrypted=True,
            is_network=False,
            bytes_available=1311960657920,
            bytes_used=454036393984,
            volume_name="Time Machine",
            snapshots=snapshots,
        )
        return cls(destinations=(destination,), last_destination=destination)
