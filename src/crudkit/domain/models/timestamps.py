"""Conversions between aware UTC datetimes and epoch milliseconds.

Entity timestamps are stored as epoch milliseconds and exposed as datetimes,
so every datetime that enters the domain is normalised to UTC and truncated
to millisecond precision.  Naive datetimes are taken to be UTC.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def normalise(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def utc_now() -> datetime:
    return normalise(datetime.now(timezone.utc))


def to_epoch_millis(value: datetime) -> int:
    return (normalise(value) - EPOCH) // _ONE_MS


def from_epoch_millis(millis: int) -> datetime:
    return EPOCH + millis * _ONE_MS
