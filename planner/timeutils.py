# -*- coding: utf-8 -*-
"""Time arithmetic shared by the synthesizer, the block operations and the
generative response parser.

All instants inside the planner are timezone-aware UTC datetimes. Strings only
exist at the edges: `parse_instant` on the way in, `format_instant` on the way
out.
"""
from __future__ import annotations

import typing as t
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from shared.errors import InvalidTimestampError

if t.TYPE_CHECKING:
    from planner.models import Preferences


def parse_instant(value: t.Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    A trailing "Z" means UTC. Naive values are taken as UTC.

    :param value: ISO string or datetime.
    :return: Timezone-aware datetime in UTC.
    :raises InvalidTimestampError: If the value is not a parsable timestamp.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidTimestampError(value) from None
    else:
        raise InvalidTimestampError(value)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_instant(dt: datetime) -> str:
    """Format an instant as UTC ISO-8601 with milliseconds, e.g. 2024-01-01T08:00:00.000Z."""
    utc = parse_instant(dt)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def add_minutes(dt: datetime, minutes: float) -> datetime:
    return dt + timedelta(minutes=minutes)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_clock(value: str) -> tuple[int, int]:
    """Parse a "HH:MM" time of day.

    :raises ValueError: If the string is not a valid 24h clock time.
    """
    try:
        hour_text, minute_text = value.strip().split(":")
        hour, minute = int(hour_text), int(minute_text)
    except (AttributeError, ValueError):
        raise ValueError(f"Expected HH:MM time of day, got {value!r}") from None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Expected HH:MM time of day, got {value!r}")
    return hour, minute


def resolve_timezone(name: t.Optional[str]) -> t.Optional[tzinfo]:
    """Return the zone for an IANA name, or None for the machine's local zone."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone: {name!r}") from None


def _at_clock(day: date, clock: tuple[int, int], tz: t.Optional[tzinfo]) -> datetime:
    naive = datetime.combine(day, time(*clock))
    # astimezone() on a naive value interprets it as system local time
    return naive.astimezone() if tz is None else naive.replace(tzinfo=tz)


def clamp_to_focus(dt: datetime, preferences: "Preferences") -> datetime:
    """Clamp an instant into the focus window of its calendar day.

    Before the window start snaps to that day's start; at or after the window
    end snaps to the start of the following day. Days are taken in the
    preferences' timezone.

    :param dt: Instant to clamp.
    :param preferences: Supplies focus_start, focus_end and timezone.
    :return: Aware UTC datetime.
    """
    tz = resolve_timezone(preferences.timezone)
    start_clock = parse_clock(preferences.focus_start)
    end_clock = parse_clock(preferences.focus_end)

    local = dt.astimezone(tz)
    day = local.date()
    window_start = _at_clock(day, start_clock, tz)
    window_end = _at_clock(day, end_clock, tz)

    if local < window_start:
        return window_start.astimezone(timezone.utc)
    if local >= window_end:
        next_start = _at_clock(day + timedelta(days=1), start_clock, tz)
        return next_start.astimezone(timezone.utc)
    return dt.astimezone(timezone.utc)


def format_local(dt: datetime, tz_name: t.Optional[str] = None) -> str:
    """Human-readable local time, e.g. 'Mon 1/15/2024, 2:30 PM'."""
    local = dt.astimezone(resolve_timezone(tz_name))
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{local:%a} {local.month}/{local.day}/{local.year}, {hour}:{local.minute:02d} {suffix}"
