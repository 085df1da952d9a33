"""CLI entry point for the solar clock.

    solarclock Helsinki
    solarclock Helsinki 3
    solarclock 60.16 24.83 3
    solarclock 60.16 24.83 3 2 --follow
"""

import argparse
import logging
import math
import sys
import time
from datetime import date

from dotenv import load_dotenv

from solarclock.compute import locate, refresh
from solarclock.config import Settings
from solarclock.locations import UnknownLocationError
from solarclock.models import MINUTES_PER_DAY, ClockState, QueryInput

log = logging.getLogger(__name__)

_USAGE = (
    "Use: %(prog)s latitude longitude timezone [mytimezone]\n"
    "Or:  %(prog)s locationname [mytimezone]\n\n"
    "Longitude is positive east, timezone must include the daylight saving time."
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solarclock",
        usage=_USAGE,
        description="Solar time, Sun elevation and azimuth for a location.",
    )
    parser.add_argument("location", nargs="*", help=argparse.SUPPRESS)
    parser.add_argument(
        "--follow",
        action="store_true",
        help="Rebuild and print the report every refresh interval",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Tabulate this date (YYYY-MM-DD) instead of today",
    )
    return parser


def parse_query(values: list[str]) -> QueryInput | None:
    """Map positional arguments to a QueryInput. None if the form is invalid."""
    try:
        if len(values) == 1:
            return QueryInput(name=values[0])
        if len(values) == 2:
            return QueryInput(name=values[0], observer_timezone_hr=float(values[1]))
        if len(values) in (3, 4):
            lat, lng, tz = (float(v) for v in values[:3])
            observer = float(values[3]) if len(values) == 4 else None
            return QueryInput(
                lat=lat, lng=lng, timezone_hr=tz, observer_timezone_hr=observer
            )
    except ValueError:
        return None
    return None


def _clock(minutes: float) -> str:
    if math.isnan(minutes):
        return "--:--"
    m = int(round(minutes)) % MINUTES_PER_DAY
    return f"{m // 60:02d}:{m % 60:02d}"


def format_report(state: ClockState) -> str:
    """Plain-text summary of a ClockState."""
    loc = state.location
    cur = state.current
    where = loc.name or f"{loc.lat:.3f} {loc.lng:.3f}"
    lines = [
        f"Location:        {where} (lat {loc.lat:+.3f}, lng {loc.lng:+.3f}, "
        f"UTC{loc.timezone_hr:+g}, observer UTC{loc.observer_timezone_hr:+g})",
        f"Clock time:      {_clock(state.minute)}",
        f"Solar time:      {_clock(cur.true_solar_time_min)}",
        f"Elevation:       {cur.corrected_elevation_deg:+5.1f} "
        f"(geometric {cur.elevation_deg:+5.1f})",
        f"Azimuth:         {cur.azimuth_deg:5.1f}",
        f"Sun longitude:   {cur.true_longitude_deg % 360:5.1f}",
        f"Declination:     {cur.declination_deg:+5.2f}",
        f"Equation of time:{cur.equation_of_time_min:+6.2f} min",
        f"Sunrise:         {_clock(cur.sunrise_fraction * MINUTES_PER_DAY)}",
        f"Solar noon:      {_clock(cur.noon_fraction * MINUTES_PER_DAY)}",
        f"Sunset:          {_clock(cur.sunset_fraction * MINUTES_PER_DAY)}",
        f"Day length:      {_clock(cur.day_length_min)}",
    ]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level, format="[%(levelname)s] %(name)s: %(message)s"
    )

    parser = _build_parser()
    args = parser.parse_args(argv)
    query = parse_query(args.location)
    if query is None:
        parser.print_usage(sys.stderr)
        return 1

    try:
        location = locate(query, records_path=settings.locations_path)
    except UnknownLocationError as e:
        print(f"{e}\n", file=sys.stderr)
        parser.print_usage(sys.stderr)
        print(
            "Currently known locations are: " + " ".join(e.known_names) + "\n",
            file=sys.stderr,
        )
        return 1

    print(format_report(refresh(location, today=args.date)))
    if not args.follow:
        return 0

    try:
        while True:
            time.sleep(settings.refresh_seconds)
            print()
            print(format_report(refresh(location, today=args.date)))
    except KeyboardInterrupt:
        log.debug("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
