"""Presenter — derives the facts a display surface renders from Preferences.

Nothing here is cached: the only input that changes between two renders is
the wall clock, so callers pass ``now`` on every tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone, tzinfo

from backup_status.i18n import t
from backup_status.models.preferences import Destination, Preferences
from backup_status.utils import format_size


@dataclass(frozen=True)
class DisplayFacts:
    """Everything a widget needs for one render."""

    placeholder: bool = True
    volume_name: str = ""
    last_snapshot: datetime | None = None
    last_snapshot_label: str = ""
    bytes_used: int = 0
    bytes_available: int = 0
    usage_fraction: float = 0.0
    usage_label: str = ""
    is_encrypted: bool = False
    is_network: bool = False


def selected_destination(preferences: Preferences | None) -> Destination | None:
    """The last-used destination. There is no fallback to another destination."""
    if preferences is None:
        return None
    return preferences.last_destination


def usage_fraction(bytes_used: int, bytes_available: int) -> float:
    """Used share of the destination's capacity; 0.0 when capacity is unknown."""
    total = bytes_used + bytes_available
    if total <= 0:
        return 0.0
    return bytes_used / total


def usage_label(bytes_used: int, bytes_available: int) -> str:
    total = bytes_used + bytes_available
    if total <= 0:
        return t("widget.usage_unknown")
    return t("widget.usage", used=format_size(bytes_used), total=format_size(total))


def _zone_of(moment: datetime) -> tzinfo:
    return moment.tzinfo or timezone.utc


def _in_zone(moment: datetime, zone: tzinfo) -> datetime:
    # Naive datetimes in the model are UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(zone)


def relative_label(then: datetime | None, now: datetime) -> str:
    """Human label for how long ago *then* was, relative to *now*.

    Under an hour counts minutes; later the same calendar day counts hours;
    older values count calendar days in *now*'s timezone.
    """
    if then is None:
        return t("time.never")
    zone = _zone_of(now)
    now = _in_zone(now, zone)
    then = _in_zone(then, zone)

    seconds = (now - then).total_seconds()
    if seconds < 60:
        return t("time.just_now")
    if seconds < 3600:
        minutes = int(seconds // 60)
        return t("time.minute_ago") if minutes == 1 else t("time.minutes_ago", count=minutes)

    days = (now.date() - then.date()).days
    if days == 0:
        hours = int(seconds // 3600)
        return t("time.hour_ago") if hours == 1 else t("time.hours_ago", count=hours)
    if days == 1:
        return t("time.yesterday")
    return t("time.days_ago", count=days)


def compute_facts(preferences: Preferences | None, now: datetime) -> DisplayFacts:
    """Derive display facts; a missing destination yields the placeholder state."""
    destination = selected_destination(preferences)
    if destination is None:
        return DisplayFacts(
            placeholder=True,
            last_snapshot_label=t("time.never"),
            usage_label=t("widget.usage_unknown"),
        )
    last = destination.last_snapshot
    return DisplayFacts(
        placeholder=False,
        volume_name=destination.volume_name,
        last_snapshot=last,
        last_snapshot_label=relative_label(last, now),
        bytes_used=destination.bytes_used,
        bytes_available=destination.bytes_available,
        usage_fraction=usage_fraction(destination.bytes_used, destination.bytes_available),
        usage_label=usage_label(destination.bytes_used, destination.bytes_available),
        is_encrypted=destination.is_encrypted,
        is_network=destination.is_network,
    )


def _start_of_day(day_offset: int, now: datetime) -> datetime:
    day = now.date() + timedelta(days=day_offset)
    return datetime.combine(day, time.min, tzinfo=now.tzinfo)


def next_refresh_points(now: datetime) -> list[datetime]:
    """``[now, start of tomorrow, start of the day after tomorrow]`` in now's zone.

    Relative labels change at midnight, so widgets re-render at these points.
    """
    return [now, _start_of_day(1, now), _start_of_day(2, now)]
