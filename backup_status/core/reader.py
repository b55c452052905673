"""Preferences reader — decodes the Time Machine plist into a Preferences snapshot.

Decoding is split in two phases so the defaulting rules can be tested
without touching the file system:

1. :func:`decode_document` turns raw bytes into a generic mapping.
2. :func:`preferences_from_mapping` extracts the typed model field by field.
"""

from __future__ import annotations

import plistlib
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Mapping
from xml.parsers.expat import ExpatError

from loguru import logger

from backup_status.errors import AccessDenied, DecodeFailure, StructuralInvalid
from backup_status.models.preferences import Destination, Preferences

if TYPE_CHECKING:
    from backup_status.core.grant import FileGrant

# Source plist keys
KEY_DESTINATIONS = "Destinations"
KEY_LAST_DESTINATION_ID = "LastDestinationID"
KEY_DESTINATION_ID = "DestinationID"
KEY_ENCRYPTION_STATE = "LastKnownEncryptionState"
KEY_NETWORK_URL = "NetworkURL"
KEY_BYTES_AVAILABLE = "BytesAvailable"
KEY_BYTES_USED = "BytesUsed"
KEY_VOLUME_NAME = "LastKnownVolumeName"
KEY_SNAPSHOT_DATES = "SnapshotDates"

ENCRYPTED_STATE = "Encrypted"


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_byte_count(value: Any) -> int:
    # bool is an int subclass; plist booleans are not byte counts
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


def _as_utc(value: datetime) -> datetime:
    # plistlib yields naive datetimes that are UTC by definition
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _as_dates(value: Any) -> tuple[datetime, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(_as_utc(v) for v in value if isinstance(v, datetime))


def decode_document(data: bytes) -> dict[str, Any]:
    """Decode plist bytes (binary or XML) into a dict."""
    try:
        document = plistlib.loads(data)
    except (
        plistlib.InvalidFileException,
        ExpatError,
        ValueError,
        TypeError,
        OverflowError,
        AttributeError,  # unparseable <date> in XML plists
        RecursionError,
    ) as e:
        raise DecodeFailure(f"Failed serializing preferences file: {e}") from e
    if not isinstance(document, dict):
        raise DecodeFailure(
            f"Failed serializing preferences file: root is {type(document).__name__}, expected dict"
        )
    return document


def destination_from_mapping(mapping: Mapping[str, Any]) -> Destination:
    """Build a Destination; missing or mistyped fields fall back to defaults."""
    return Destination(
        id=_as_str(mapping.get(KEY_DESTINATION_ID)),
        is_encrypted=mapping.get(KEY_ENCRYPTION_STATE) == ENCRYPTED_STATE,
        is_network=KEY_NETWORK_URL in mapping,
        bytes_available=_as_byte_count(mapping.get(KEY_BYTES_AVAILABLE)),
        bytes_used=_as_byte_count(mapping.get(KEY_BYTES_USED)),
        volume_name=_as_str(mapping.get(KEY_VOLUME_NAME)),
        snapshots=_as_dates(mapping.get(KEY_SNAPSHOT_DATES)),
    )


def preferences_from_mapping(mapping: Mapping[str, Any]) -> Preferences:
    """Build Preferences from a decoded plist mapping.

    Raises StructuralInvalid when ``Destinations`` is missing or not a list.
    Entries that are not mappings are skipped; every mapping entry is kept.
    """
    if KEY_DESTINATIONS not in mapping:
        raise StructuralInvalid(f"Missing {KEY_DESTINATIONS} attribute in preferences file")
    raw_destinations = mapping[KEY_DESTINATIONS]
    if not isinstance(raw_destinations, list):
        raise StructuralInvalid(
            f"Invalid {KEY_DESTINATIONS} attribute in preferences file: "
            f"expected array, got {type(raw_destinations).__name__}"
        )

    destinations: list[Destination] = []
    for index, raw in enumerate(raw_destinations):
        if not isinstance(raw, dict):
            logger.warning(f"Skipping malformed destination #{index}: {type(raw).__name__}")
            continue
        destinations.append(destination_from_mapping(raw))

    built = tuple(destinations)
    last_id = mapping.get(KEY_LAST_DESTINATION_ID)
    last_destination = Preferences.resolve_last_destination(
        built, last_id if isinstance(last_id, str) else None
    )
    return Preferences(destinations=built, last_destination=last_destination)


def read_preferences(grant: FileGrant | None) -> Preferences | None:
    """Read the granted plist. Returns None on any failure; never raises."""
    if grant is None:
        logger.error("Failed accessing preferences file: no access granted")
        return None
    try:
        with grant.access() as path:
            data = path.read_bytes()
        preferences = preferences_from_mapping(decode_document(data))
    except AccessDenied as e:
        logger.error(f"Failed accessing preferences file: {e}")
    except OSError as e:
        logger.error(f"Failed reading content from preferences file: {e}")
    except DecodeFailure as e:
        logger.error(str(e))
    except StructuralInvalid as e:
        logger.error(str(e))
    else:
        logger.info(f"Preferences read: {len(preferences.destinations)} destination(s)")
        return preferences
    return None
