"""Error taxonomy for the reader/store boundary.

These are raised inside a single read or store attempt and caught at the
boundary of that operation, where they become a ``None``/``False`` result
plus a log entry. They never escape :mod:`backup_status.core.reader` or
:mod:`backup_status.data.preferences_store`.
"""

from __future__ import annotations


class BackupStatusError(Exception):
    """Base class for all Backup Status failures."""


class AccessDenied(BackupStatusError):
    """The grant for the preferences file is missing, revoked or unusable."""


class DecodeFailure(BackupStatusError):
    """The bytes are not a valid property list (or the root is not a dict)."""


class StructuralInvalid(BackupStatusError):
    """A required top-level field is missing or has the wrong type."""


class SerializationFailure(BackupStatusError):
    """A Preferences snapshot could not be encoded for the shared slot."""


class StoreUnreadable(BackupStatusError):
    """The shared store file exists but cannot be read or parsed."""
