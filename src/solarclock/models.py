"""Data model definitions — explicit boundaries between input, compute, and presentation layers."""

from dataclasses import dataclass
from enum import Enum

import numpy as np

MINUTES_PER_DAY = 1440


class DstPolicy(str, Enum):
    """Daylight-saving rule attached to a location record."""

    NONE = "none"
    EU = "EU"


@dataclass(frozen=True)
class QueryInput:
    """Raw command-line request. Not yet resolved."""

    name: str | None = None  # Location name ("Helsinki"); None for numeric input
    lat: float | None = None  # Latitude (decimal degrees)
    lng: float | None = None  # Longitude (decimal degrees, positive east)
    timezone_hr: float | None = None  # Base timezone, DST included
    observer_timezone_hr: float | None = None  # Viewer's own timezone


@dataclass(frozen=True)
class LocationRecord:
    """A single named location from the record list or the built-in table."""

    name: str
    lat: float
    lng: float
    timezone_hr: float  # Standard time, before any DST offset
    dst_policy: DstPolicy = DstPolicy.NONE


@dataclass(frozen=True)
class GeoLocation:
    """Resolved observer location. Input to the solar computation."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees, positive east)
    timezone_hr: float  # Base timezone with DST offset already applied
    observer_timezone_hr: float  # Only used to shift the observer's wall clock
    name: str | None = None  # Record name when resolved by name


@dataclass(frozen=True)
class SolarPosition:
    """Sun position for one instant. All angles in degrees."""

    elevation_deg: float
    corrected_elevation_deg: float  # Elevation + atmospheric refraction
    azimuth_deg: float  # [0, 360), clockwise from true north
    declination_deg: float
    equation_of_time_min: float
    true_solar_time_min: float  # [0, 1440)
    true_longitude_deg: float
    right_ascension_deg: float
    apparent_longitude_deg: float
    radius_vector_au: float
    hour_angle_deg: float
    zenith_deg: float
    refraction_deg: float
    noon_fraction: float  # Solar noon as a fraction of the base-timezone day
    sunrise_fraction: float
    sunset_fraction: float
    day_length_min: float


@dataclass(frozen=True)
class DayTable:
    """Per-minute solar positions for one base-timezone day.

    Index i holds the sample for day fraction i / 1440. The index axis is
    clock minutes in the location's base timezone, not solar time.
    """

    samples: tuple[SolarPosition, ...]

    def __post_init__(self) -> None:
        if len(self.samples) != MINUTES_PER_DAY:
            raise ValueError(
                f"DayTable needs {MINUTES_PER_DAY} samples, got {len(self.samples)}"
            )

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, minute: int) -> SolarPosition:
        return self.samples[minute]

    def __iter__(self):
        return iter(self.samples)

    @property
    def elevations(self) -> np.ndarray:
        return np.array([s.elevation_deg for s in self.samples])

    @property
    def corrected_elevations(self) -> np.ndarray:
        return np.array([s.corrected_elevation_deg for s in self.samples])

    @property
    def azimuths(self) -> np.ndarray:
        return np.array([s.azimuth_deg for s in self.samples])

    @property
    def solar_minutes(self) -> np.ndarray:
        return np.array([s.true_solar_time_min for s in self.samples])

    @property
    def true_longitudes(self) -> np.ndarray:
        return np.array([s.true_longitude_deg for s in self.samples])


@dataclass(frozen=True)
class ClockState:
    """The sole input to a presentation layer. Replaced wholesale on each refresh."""

    location: GeoLocation
    table: DayTable
    minute: int  # Current base-timezone minute of day
    current: SolarPosition  # table[minute]
