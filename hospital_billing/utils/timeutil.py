"""Timestamp helpers shared by the duration-based charge models."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

Timestamp = Union[str, datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Timestamp) -> datetime:
    """Parse an ISO-8601 string (or pass a datetime through) as an aware UTC instant.

    Naive values are read as UTC. A trailing ``Z`` is accepted on every
    supported interpreter.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            raise ValueError(f"Invalid ISO-8601 timestamp: {value!r}") from None
    else:
        raise ValueError(f"Expected an ISO-8601 string or datetime, got {type(value).__name__}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def resolve_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError):
        raise ValueError(f"Unknown timezone: {name!r}") from None


def local_date(instant: datetime, tz: ZoneInfo) -> date:
    return instant.astimezone(tz).date()


__all__ = ["Timestamp", "utc_now", "parse_timestamp", "resolve_timezone", "local_date"]
