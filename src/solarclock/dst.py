"""Simplified European Union daylight-saving rule.

Summer time starts on the last Sunday of March and ends on the last Sunday of
October. The switch is taken at a fixed hour of the base-timezone clock, not at
01:00 UTC as the real rule does.
"""

from datetime import date, datetime, timedelta

import pytz

_SUNDAY = 6  # date.weekday()
_SWITCH_HOUR = 1  # Transition applies once the local hour is past this


def last_sunday(year: int, month: int) -> date:
    """Last Sunday of a 31-day month, found by stepping back from the 31st."""
    d = date(year, month, 31)
    while d.weekday() != _SUNDAY:
        d -= timedelta(days=1)
    return d


def european_dst_offset_hours(today: date, local_hour: int) -> int:
    """Return the DST offset (0 or 1 hour) in effect on ``today``.

    Args:
        today: Calendar date in the location's base timezone.
        local_hour: Hour of day (0-23) in the location's base timezone.

    Returns:
        1 between the March and October transitions, otherwise 0.
    """
    start = last_sunday(today.year, 3)
    end = last_sunday(today.year, 10)

    offset = 0
    if today == start and local_hour > _SWITCH_HOUR:
        offset = 1
    if today > start:
        offset = 1
    if today == end and local_hour > _SWITCH_HOUR:
        offset = 0
    if today > end:
        offset = 0
    return offset


def local_now(timezone_hr: float, now: datetime | None = None) -> datetime:
    """Current time on a fixed-offset clock ``timezone_hr`` hours from UTC.

    A naive ``now`` is taken to be UTC.
    """
    if now is None:
        now = datetime.now(pytz.utc)
    elif now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(pytz.FixedOffset(round(timezone_hr * 60)))


def dst_offset_now(timezone_hr: float, now: datetime | None = None) -> int:
    """EU DST offset for the present moment at a location in ``timezone_hr``."""
    local = local_now(timezone_hr, now)
    return european_dst_offset_hours(local.date(), local.hour)
