"""Helpers for working with UTC timestamps."""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def now_utc_naive() -> datetime:
    """Return the current UTC time without ``tzinfo``.

    Timestamps are stored as naive UTC values so SQLite and PostgreSQL
    ``TIMESTAMP`` columns behave the same way.
    """

    return now_utc().replace(tzinfo=None)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive values read back from the database."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_utc_naive(value: datetime | None) -> datetime | None:
    """Return ``value`` converted to UTC with ``tzinfo`` removed."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)
