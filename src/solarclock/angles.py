"""Degree/radian conversion helpers."""

import math

_TWO_PI = 2.0 * math.pi


def to_radians(degrees: float) -> float:
    return _TWO_PI * degrees / 360.0


def to_degrees(radians: float) -> float:
    return 360.0 * radians / _TWO_PI
