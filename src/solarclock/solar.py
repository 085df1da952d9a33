"""NOAA low-precision solar position equations.

Reproduces the spreadsheet model published by the NOAA Global Monitoring
Laboratory (https://gml.noaa.gov/grad/solcalc/calcdetails.html).

Inverse trigonometric functions go through numpy so that an argument outside
[-1, 1] (polar day or night) yields NaN instead of raising. NaN then flows into
every dependent field; callers are expected to cope with it.
"""

import math
from datetime import date

import numpy as np

from solarclock.angles import to_degrees, to_radians
from solarclock.models import MINUTES_PER_DAY, SolarPosition

_EPOCH = date(1900, 1, 1)
_SUNRISE_ZENITH_DEG = 90.833


def _sin(deg: float) -> float:
    return np.sin(to_radians(deg))


def _cos(deg: float) -> float:
    return np.cos(to_radians(deg))


def _tan(deg: float) -> float:
    return np.tan(to_radians(deg))


def _acos_deg(x: float) -> float:
    return to_degrees(np.arccos(x))


def day_number(today: date) -> int:
    """Days since 1900-01-01 plus the two-day epoch correction.

    Adding 2415018.5 gives the Julian day at 00:00 of ``today``.
    """
    return (today - _EPOCH).days + 2


def refraction_deg(elevation_deg: float) -> float:
    """Atmospheric refraction correction for a geometric elevation, in degrees."""
    e = elevation_deg
    if e > 85:
        arcsec = 0.0
    elif e > 5:
        t = _tan(e)
        arcsec = 58.1 / t - 0.07 / t**3 + 0.000086 / t**5
    elif e > -0.575:
        arcsec = 1735 + e * (-518.2 + e * (103.4 + e * (-12.79 + e * 0.711)))
    else:
        arcsec = -20.772 / _tan(e)
    return arcsec / 3600


def _wrap_minutes(minutes: float) -> float:
    if minutes < 0:
        minutes += MINUTES_PER_DAY
    if minutes >= MINUTES_PER_DAY:
        minutes -= MINUTES_PER_DAY
    return minutes


def compute_solar_position(
    lat_deg: float,
    lng_deg: float,
    timezone_hr: float,
    day_num: float,
    day_fraction: float,
) -> SolarPosition:
    """Compute the Sun's position for one instant.

    Args:
        lat_deg: Latitude (decimal degrees).
        lng_deg: Longitude (decimal degrees, positive east).
        timezone_hr: Base timezone of the location, DST included.
        day_num: Day number as returned by ``day_number``.
        day_fraction: Time of day in [0, 1) in the base timezone.

    Returns:
        SolarPosition. Fields derived from an out-of-range inverse cosine are NaN.
    """
    with np.errstate(invalid="ignore", divide="ignore"):
        jday = day_num + 2415018.5 + day_fraction - timezone_hr / 24
        jcen = (jday - 2451545) / 36525

        gmlong = math.fmod(280.46646 + jcen * (36000.76983 + jcen * 0.0003032), 360.0)
        gmanom = 357.52911 + jcen * (35999.05029 - 0.0001537 * jcen)
        eccent = 0.016708634 - jcen * (0.000042037 + 0.0000001267 * jcen)
        eqofctr = (
            _sin(gmanom) * (1.914602 - jcen * (0.004817 + 0.000014 * jcen))
            + _sin(2 * gmanom) * (0.019993 - 0.000101 * jcen)
            + _sin(3 * gmanom) * 0.000289
        )
        truelong = gmlong + eqofctr
        trueanom = gmanom + eqofctr
        radvect = (1.000001018 * (1 - eccent * eccent)) / (1 + eccent * _cos(trueanom))

        omega = 125.04 - 1934.136 * jcen
        applong = truelong - 0.00569 - 0.00478 * _sin(omega)
        mean_obliq = (
            23
            + (26 + (21.448 - jcen * (46.815 + jcen * (0.00059 - jcen * 0.001813))) / 60)
            / 60
        )
        obliq = mean_obliq + 0.00256 * _cos(omega)

        rtasc = to_degrees(np.arctan2(_cos(applong), _cos(obliq) * _sin(applong)))
        decl = to_degrees(np.arcsin(_sin(obliq) * _sin(applong)))

        var_y = _tan(obliq / 2) ** 2
        eqoftime = 4 * to_degrees(
            var_y * np.sin(2 * to_radians(gmlong))
            - 2 * eccent * _sin(gmanom)
            + 4 * eccent * var_y * _sin(gmanom) * np.cos(2 * to_radians(gmlong))
            - 0.5 * var_y * var_y * np.sin(4 * to_radians(gmlong))
            - 1.25 * eccent * eccent * np.sin(2 * to_radians(gmanom))
        )

        # NaN near the poles when the Sun never crosses the horizon
        ha_rise = _acos_deg(
            _cos(_SUNRISE_ZENITH_DEG) / (_cos(lat_deg) * _cos(decl))
            - _tan(lat_deg) * _tan(decl)
        )
        noon = (720 - 4 * lng_deg - eqoftime + timezone_hr * 60) / MINUTES_PER_DAY
        rise = noon - ha_rise * 4 / MINUTES_PER_DAY
        sunset = noon + ha_rise * 4 / MINUTES_PER_DAY
        daylength = 8 * ha_rise

        # fmod keeps the sign of the dividend; the hour angle fold relies on it
        soltime = math.fmod(
            day_fraction * MINUTES_PER_DAY + eqoftime + 4 * lng_deg - 60 * timezone_hr,
            float(MINUTES_PER_DAY),
        )
        hrangle = soltime / 4 + 180 if soltime / 4 < 0 else soltime / 4 - 180

        zenith = _acos_deg(
            _sin(lat_deg) * _sin(decl) + _cos(lat_deg) * _cos(decl) * _cos(hrangle)
        )
        elev = 90 - zenith
        refract = refraction_deg(elev)

        az_cos = _acos_deg(
            (_sin(lat_deg) * _cos(zenith) - _sin(decl)) / (_cos(lat_deg) * _sin(zenith))
        )
        if hrangle > 0:
            azimuth = np.fmod(az_cos + 180, 360.0)
        else:
            azimuth = np.fmod(540 - az_cos, 360.0)

    return SolarPosition(
        elevation_deg=float(elev),
        corrected_elevation_deg=float(elev + refract),
        azimuth_deg=float(azimuth),
        declination_deg=float(decl),
        equation_of_time_min=float(eqoftime),
        true_solar_time_min=_wrap_minutes(float(soltime)),
        true_longitude_deg=float(truelong),
        right_ascension_deg=float(rtasc),
        apparent_longitude_deg=float(applong),
        radius_vector_au=float(radvect),
        hour_angle_deg=float(hrangle),
        zenith_deg=float(zenith),
        refraction_deg=float(refract),
        noon_fraction=float(noon),
        sunrise_fraction=float(rise),
        sunset_fraction=float(sunset),
        day_length_min=float(daylength),
    )
