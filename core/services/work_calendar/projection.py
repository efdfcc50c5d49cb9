from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.exceptions import InvalidCalendarError

_ONE_MICROSECOND = timedelta(microseconds=1)


@lru_cache(maxsize=64)
def resolve_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as exc:
        raise InvalidCalendarError(
            f"Unknown time zone {name!r}.",
            code="INVALID_TIMEZONE",
        ) from exc


def ensure_aware(instant: datetime) -> datetime:
    """Naive instants are read as UTC."""
    if instant.tzinfo is None or instant.utcoffset() is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def to_local(instant: datetime, tz: str) -> datetime:
    """Project an absolute instant onto the naive wall clock of ``tz``."""
    local = ensure_aware(instant).astimezone(resolve_zone(tz))
    return local.replace(tzinfo=None, fold=0)


def _offset_change_between(earlier: datetime, later: datetime, zone: ZoneInfo) -> datetime:
    """First instant in (earlier, later] that carries ``later``'s offset."""
    before = earlier.astimezone(zone).utcoffset()
    while later - earlier > _ONE_MICROSECOND:
        middle = earlier + (later - earlier) / 2
        if middle.astimezone(zone).utcoffset() == before:
            earlier = middle
        else:
            later = middle
    return later


def to_instant(wall_clock: datetime, tz: str) -> datetime:
    """
    Inverse of to_local: read a naive wall clock of ``tz`` as a UTC instant.

    The zone offset is taken at the wall clock's naive-UTC reading and then
    corrected once, which is enough because an offset changes at most once
    around that reading. A repeated wall clock resolves to its first
    occurrence. A wall clock skipped by a forward offset change resolves to
    the change itself, the first real instant after the gap, so later wall
    clocks never map to earlier instants.
    """
    zone = resolve_zone(tz)
    naive_utc = wall_clock.replace(tzinfo=timezone.utc)
    offset = naive_utc.astimezone(zone).utcoffset()
    candidate = naive_utc - offset
    corrected = candidate.astimezone(zone).utcoffset()
    if corrected == offset:
        return candidate

    retry = naive_utc - corrected
    if retry.astimezone(zone).utcoffset() == corrected:
        return retry
    # neither offset reproduces the wall clock: it falls in a gap
    return _offset_change_between(min(candidate, retry), max(candidate, retry), zone)


__all__ = ["resolve_zone", "ensure_aware", "to_local", "to_instant"]
