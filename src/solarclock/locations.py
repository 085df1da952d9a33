"""Location resolution — record list file, built-in table, and EU DST adjustment."""

import logging
from collections.abc import Iterable, Iterator
from datetime import datetime
from pathlib import Path

from solarclock.config import DEFAULT_LOCATIONS_FILE
from solarclock.dst import dst_offset_now
from solarclock.models import DstPolicy, GeoLocation, LocationRecord

log = logging.getLogger(__name__)

_SENTINEL = "*"

_BUILTIN_RECORDS: tuple[LocationRecord, ...] = (
    LocationRecord("Helsinki", 60.16, 24.83, 2, DstPolicy.EU),
    LocationRecord("Riihimäki", 60.739, 24.772, 2, DstPolicy.EU),
    LocationRecord("Tampere", 61.498, 23.761, 2, DstPolicy.EU),
    LocationRecord("Ylöjärvi", 61.55, 23.583, 2, DstPolicy.EU),
    LocationRecord("Rovaniemi", 66.5, 25.733, 2, DstPolicy.EU),
    LocationRecord("Inari", 68.905, 27.03, 2, DstPolicy.EU),
    LocationRecord("Utsjoki", 69.9, 27.017, 2, DstPolicy.EU),
    LocationRecord("Tukholma", 59.329, 18.069, 1, DstPolicy.EU),
    LocationRecord("Stockholm", 59.329, 18.069, 1, DstPolicy.EU),
    LocationRecord("Vargön", 58.35, 12.4, 1, DstPolicy.EU),
    LocationRecord("Reykjavik", 64.135, -21.895, 0),
    LocationRecord("Longyearbyen", 78.22, 15.65, 1, DstPolicy.EU),
    LocationRecord("Tallinna", 59.437, 24.745, 2, DstPolicy.EU),
    LocationRecord("Tallinn", 59.437, 24.745, 2, DstPolicy.EU),
    LocationRecord("Moskova", 55.75, 37.617, 2, DstPolicy.EU),
    LocationRecord("Moscow", 55.75, 37.617, 2, DstPolicy.EU),
    LocationRecord("Lontoo", 51.5, -0.126, 0, DstPolicy.EU),
    LocationRecord("London", 51.5, -0.126, 0, DstPolicy.EU),
    LocationRecord("Hampuri", 53.553, 9.992, 1, DstPolicy.EU),
    LocationRecord("Hamburg", 53.553, 9.992, 1, DstPolicy.EU),
    LocationRecord("Rooma", 41.895, 12.482, 1, DstPolicy.EU),
    LocationRecord("Roma", 41.895, 12.482, 1, DstPolicy.EU),
    LocationRecord("Tokio", 35.683, 139.767, 9),
    LocationRecord("Tokyo", 35.683, 139.767, 9),
    LocationRecord("Teheran", 35.696, 51.423, 3.5),
    LocationRecord("Tehran", 35.696, 51.423, 3.5),
)

# Casefolded name → record, used when the record list has no match
BUILTIN_LOCATIONS: dict[str, LocationRecord] = {
    r.name.casefold(): r for r in _BUILTIN_RECORDS
}


class UnknownLocationError(LookupError):
    """Location name found in neither the record list nor the built-in table."""

    def __init__(self, name: str, known_names: tuple[str, ...]) -> None:
        super().__init__(f"'{name}' is an unknown location.")
        self.name = name
        self.known_names = known_names


def _parse_record(line: str) -> LocationRecord | None:
    """Parse ``name lat lon timezone [dstTag]``. Returns None for a malformed line."""
    fields = line.split()
    if len(fields) < 4:
        return None
    try:
        lat, lng, tz = (float(f) for f in fields[1:4])
    except ValueError:
        return None
    policy = DstPolicy.NONE
    if len(fields) > 4 and fields[4].upper() == DstPolicy.EU.value:
        policy = DstPolicy.EU
    return LocationRecord(
        name=fields[0], lat=lat, lng=lng, timezone_hr=tz, dst_policy=policy
    )


def iter_location_records(
    lines: Iterable[str | bytes],
) -> Iterator[LocationRecord]:
    """Yield records lazily until a line containing ``*`` or end of input.

    Blank lines are ignored. Malformed lines, including byte lines that are not
    valid UTF-8, are logged and skipped.
    """
    for lineno, raw in enumerate(lines, start=1):
        if isinstance(raw, bytes):
            if b"*" in raw:
                return
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError:
                log.debug("Skipping undecodable record line %d: %r", lineno, raw)
                continue
        if _SENTINEL in raw:
            return
        if not raw.strip():
            continue
        record = _parse_record(raw)
        if record is None:
            log.debug("Skipping malformed record line %d: %r", lineno, raw.rstrip())
            continue
        yield record


def load_location_records(path: Path | str) -> tuple[LocationRecord, ...]:
    """Read all records from a record list file. Empty if the file does not exist."""
    path = Path(path)
    if not path.is_file():
        log.debug("No record list at %s", path)
        return ()
    with path.open("rb") as f:
        records = tuple(iter_location_records(f))
    log.debug("Loaded %d location records from %s", len(records), path)
    return records


def find_record(
    name: str, records: Iterable[LocationRecord]
) -> LocationRecord | None:
    """First record whose name matches ``name`` case-insensitively."""
    key = name.casefold()
    for record in records:
        if record.name.casefold() == key:
            return record
    return None


def known_names(records_path: Path | str | None = None) -> tuple[str, ...]:
    """Names from the record list followed by the built-in names, without duplicates."""
    path = DEFAULT_LOCATIONS_FILE if records_path is None else records_path
    names = [r.name for r in load_location_records(path)]
    names += [r.name for r in _BUILTIN_RECORDS]
    return tuple(dict.fromkeys(names))


def to_geo_location(
    record: LocationRecord,
    observer_timezone_hr: float | None = None,
    now: datetime | None = None,
) -> GeoLocation:
    """Apply the record's DST rule for ``now`` and build a GeoLocation.

    The observer timezone defaults to the resulting (DST-adjusted) timezone.
    """
    tz = record.timezone_hr
    if record.dst_policy is DstPolicy.EU:
        tz += dst_offset_now(record.timezone_hr, now)
    return GeoLocation(
        lat=record.lat,
        lng=record.lng,
        timezone_hr=tz,
        observer_timezone_hr=(
            tz if observer_timezone_hr is None else observer_timezone_hr
        ),
        name=record.name,
    )


def resolve(
    name: str,
    observer_timezone_hr: float | None = None,
    records_path: Path | str | None = None,
    now: datetime | None = None,
) -> GeoLocation:
    """Resolve a location name to a GeoLocation.

    Tries the record list first, then the built-in table.

    Args:
        name: Location name, matched case-insensitively.
        observer_timezone_hr: Viewer's timezone; defaults to the location's.
        records_path: Record list file; defaults to ``solarclock.cnf`` in the
            working directory.
        now: Instant used for the DST decision (UTC if naive). Defaults to now.

    Returns:
        Resolved GeoLocation.

    Raises:
        UnknownLocationError: When neither source knows the name.
    """
    path = DEFAULT_LOCATIONS_FILE if records_path is None else records_path
    record = find_record(name, load_location_records(path))
    if record is None:
        record = BUILTIN_LOCATIONS.get(name.casefold())
    if record is None:
        raise UnknownLocationError(name, known_names(path))

    location = to_geo_location(record, observer_timezone_hr, now)
    log.info(
        "Resolved %s: lat=%s lng=%s tz=%s",
        record.name,
        location.lat,
        location.lng,
        location.timezone_hr,
    )
    return location
