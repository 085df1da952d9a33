"""Day table computation layer — per-minute solar positions and the current sample."""

import logging
from datetime import date, datetime
from pathlib import Path

from solarclock.dst import local_now
from solarclock.locations import resolve
from solarclock.models import (
    MINUTES_PER_DAY,
    ClockState,
    DayTable,
    GeoLocation,
    QueryInput,
    SolarPosition,
)
from solarclock.solar import compute_solar_position, day_number

log = logging.getLogger(__name__)


def build_day_table(location: GeoLocation, today: date) -> DayTable:
    """Compute one SolarPosition per base-timezone minute of ``today``.

    Args:
        location: Resolved observer location.
        today: Calendar date in the location's base timezone.

    Returns:
        DayTable of 1440 samples; index i is day fraction i / 1440.
    """
    day_num = day_number(today)
    samples = tuple(
        compute_solar_position(
            location.lat,
            location.lng,
            location.timezone_hr,
            day_num,
            i / MINUTES_PER_DAY,
        )
        for i in range(MINUTES_PER_DAY)
    )
    return DayTable(samples=samples)


def current_minute(location: GeoLocation, now: datetime | None = None) -> int:
    """Minute of day (0-1439) of ``now`` on the location's base-timezone clock."""
    local = local_now(location.timezone_hr, now)
    return 60 * local.hour + local.minute


def current_sample(table: DayTable, minute: int) -> SolarPosition:
    """Table entry for a base-timezone minute of day."""
    if not 0 <= minute < MINUTES_PER_DAY:
        raise ValueError(f"minute must be in [0, {MINUTES_PER_DAY}), got {minute}")
    return table[minute]


def solar_minute_index(table: DayTable, solar_minute: float) -> int:
    """Index of the sample whose true solar time is closest to ``solar_minute``.

    The table is indexed by clock minutes, so solar time has to be searched for.
    Distance wraps around midnight.
    """
    best_index = 0
    best_distance = float("inf")
    for i, sample in enumerate(table):
        distance = abs(sample.true_solar_time_min - solar_minute) % MINUTES_PER_DAY
        distance = min(distance, MINUTES_PER_DAY - distance)
        if distance < best_distance:
            best_index, best_distance = i, distance
    return best_index


def refresh(
    location: GeoLocation,
    now: datetime | None = None,
    today: date | None = None,
) -> ClockState:
    """Rebuild the day table from scratch and pick the current sample.

    Args:
        location: Resolved observer location.
        now: Present instant (UTC if naive). Defaults to now.
        today: Date to tabulate; defaults to the base-timezone date of ``now``.

    Returns:
        A new ClockState. Nothing from a previous refresh is reused.
    """
    local = local_now(location.timezone_hr, now)
    table = build_day_table(location, today or local.date())
    minute = current_minute(location, local)
    log.debug("Refreshed day table for %s, minute %d", today or local.date(), minute)
    return ClockState(
        location=location,
        table=table,
        minute=minute,
        current=current_sample(table, minute),
    )


def locate(
    query: QueryInput,
    records_path: Path | str | None = None,
    now: datetime | None = None,
) -> GeoLocation:
    """Turn a QueryInput into a GeoLocation.

    Named queries go through the location resolver; numeric ones bypass it.

    Raises:
        UnknownLocationError: When a named location cannot be resolved.
    """
    if query.name is not None:
        return resolve(
            query.name,
            observer_timezone_hr=query.observer_timezone_hr,
            records_path=records_path,
            now=now,
        )
    assert query.lat is not None and query.lng is not None
    assert query.timezone_hr is not None
    observer_tz = query.observer_timezone_hr
    return GeoLocation(
        lat=query.lat,
        lng=query.lng,
        timezone_hr=query.timezone_hr,
        observer_timezone_hr=query.timezone_hr if observer_tz is None else observer_tz,
    )


def run(
    query: QueryInput,
    records_path: Path | str | None = None,
    now: datetime | None = None,
    today: date | None = None,
) -> ClockState:
    """Top-level entry point: takes a QueryInput and returns a ClockState.

    Args:
        query: Command-line request (name or coordinates).
        records_path: Record list file for named queries.
        now: Present instant. Defaults to now.
        today: Date to tabulate instead of the current one.

    Returns:
        Fully computed ClockState.
    """
    location = locate(query, records_path=records_path, now=now)
    return refresh(location, now=now, today=today)
