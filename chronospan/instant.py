"""Instant and duration helpers for chronospan.

Aware ``datetime`` values sharing one ``tzinfo`` compare and subtract by wall
clock. Everything here goes through UTC instead so that spans measure and
shift absolute time, while results stay in the zone of the input instant.
"""

from datetime import datetime, timedelta, timezone, tzinfo

from dateutil.relativedelta import relativedelta


def is_aware(value: datetime) -> bool:
    """True if the datetime carries a usable UTC offset."""
    if value.tzinfo is None:
        return False
    return value.tzinfo.utcoffset(value) is not None


def to_utc(value: datetime) -> datetime:
    """Return the same instant expressed in UTC."""
    return value.astimezone(timezone.utc)


def attach_tz(value: datetime, tz: tzinfo) -> datetime:
    """Interpret a naive datetime as wall clock time in the given zone."""
    return value.replace(tzinfo=tz)


def shift(value: datetime, delta: timedelta) -> datetime:
    """Move an instant by an absolute duration, keeping its zone."""
    return (to_utc(value) + delta).astimezone(value.tzinfo)


def shift_calendar(
    value: datetime, years: int = 0, months: int = 0, days: int = 0
) -> datetime:
    """
    Move an instant by calendar units in its own zone.

    Years and months are applied before days, and a day-of-month that does
    not exist in the target month is clamped to the month's last day
    (``relativedelta`` semantics). The fold is kept, so a time in a repeated
    hour stays on the same side of the transition.
    """
    shifted = value + relativedelta(years=years, months=months, days=days)
    return shifted.replace(fold=value.fold)
