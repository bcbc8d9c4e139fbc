"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.

Two datetime conventions meet here:
    - The store keeps timezone-naive datetimes, assumed to be UTC.
    - Application code (the Note projection, reminders, the CLI) uses
      timezone-aware UTC datetimes.

Only the note service converts between the two, using
to_store_timestamp() and from_store_timestamp().
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    This is the store-native timestamp representation.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def aware_utc_now() -> datetime:
    """Return current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def to_store_timestamp(value: datetime) -> datetime:
    """
    Convert an application datetime into a store timestamp.

    Naive input is taken to already be UTC.

    Args:
        value: Aware or naive datetime

    Returns:
        Timezone-naive UTC datetime
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_store_timestamp(value: datetime) -> datetime:
    """
    Convert a store timestamp into an application datetime.

    Args:
        value: Timezone-naive UTC datetime as read from the store

    Returns:
        Timezone-aware UTC datetime
    """
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc)
    return value.replace(tzinfo=timezone.utc)
