# reference/coordinates.py
"""
Ecliptic -> equatorial -> horizontal transformation chain.

All angles are degrees; sidereal time is hours. Results are normalized to
[0,360) for longitudes and [-90,90] for latitudes.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Tuple, Union

from ..core.types import EclipticCoordinate, EquatorialCoordinate, HorizontalCoordinate, Observer
from . import astro_args as aa
from .time_scales import julian_century, local_sidereal_time
from .trigonometry import acos_deg, asin_deg, atan2_deg, cos_deg, sin_deg, tan_deg

# Below this, cos(alt)*cos(lat) is treated as zero and azimuth is undefined.
_DEGENERATE_EPS = 1e-7

Coordinate = Union[EquatorialCoordinate, EclipticCoordinate, HorizontalCoordinate]


def hour_angle(right_ascension: float, lst_hours: float) -> float:
    """H = LST*15 - RA, in [0,360)."""
    return aa.wrap_deg(lst_hours * 15.0 - right_ascension)


# ------------------------------------------------------------
# Ecliptic -> equatorial
# ------------------------------------------------------------

def ecliptic_to_equatorial(
    dt: datetime,
    ecliptic: EclipticCoordinate,
    *,
    obliquity: Optional[float] = None,
) -> EquatorialCoordinate:
    """
    Rotate ecliptic (lambda, beta) about the equinox by the obliquity:

      alpha = atan2(sin(lambda) cos(eps) - tan(beta) sin(eps), cos(lambda))
      delta = asin(sin(beta) cos(eps) + cos(beta) sin(eps) sin(lambda))

    eps defaults to the mean obliquity of date plus nutation in obliquity.
    """
    eps = aa.true_obliquity_deg(julian_century(dt)) if obliquity is None else obliquity
    lam = ecliptic.longitude
    beta = ecliptic.latitude

    y = sin_deg(lam) * cos_deg(eps) - tan_deg(beta) * sin_deg(eps)
    x = cos_deg(lam)
    ra = aa.wrap_deg(atan2_deg(y, x))
    dec = asin_deg(sin_deg(beta) * cos_deg(eps) + cos_deg(beta) * sin_deg(eps) * sin_deg(lam))
    return EquatorialCoordinate(right_ascension=ra, declination=dec)


# ------------------------------------------------------------
# Equatorial <-> horizontal
# ------------------------------------------------------------

def equatorial_to_horizontal(
    dt: datetime,
    observer: Observer,
    equatorial: EquatorialCoordinate,
) -> HorizontalCoordinate:
    """
    Altitude and azimuth (measured from north through east).

      sin(a) = sin(d) sin(p) + cos(d) cos(p) cos(H)
      cos(A) = (sin(d) - sin(a) sin(p)) / (cos(a) cos(p)),  A = 360 - A if sin(H) > 0

    Azimuth is None when cos(a) cos(p) vanishes (zenith, nadir, or an
    observer at a pole).
    """
    lat = observer.latitude
    dec = equatorial.declination
    H = hour_angle(equatorial.right_ascension, local_sidereal_time(dt, observer.longitude))

    alt = asin_deg(sin_deg(dec) * sin_deg(lat) + cos_deg(dec) * cos_deg(lat) * cos_deg(H))

    denom = cos_deg(alt) * cos_deg(lat)
    if abs(denom) < _DEGENERATE_EPS:
        return HorizontalCoordinate(altitude=alt, azimuth=None)

    az = acos_deg((sin_deg(dec) - sin_deg(alt) * sin_deg(lat)) / denom)
    if sin_deg(H) > 0:
        az = 360.0 - az
    return HorizontalCoordinate(altitude=alt, azimuth=aa.wrap_deg(az))


def horizontal_to_equatorial(
    dt: datetime,
    observer: Observer,
    horizontal: HorizontalCoordinate,
) -> Optional[EquatorialCoordinate]:
    """
    Inverse of equatorial_to_horizontal() for the same instant and observer.

    Returns None when the direction is not recoverable: missing azimuth, or
    the hour angle is undefined (observer at a pole, target at a celestial pole).
    """
    if horizontal.azimuth is None:
        return None

    lat = observer.latitude
    alt = horizontal.altitude
    az = horizontal.azimuth

    dec = asin_deg(sin_deg(alt) * sin_deg(lat) + cos_deg(alt) * cos_deg(lat) * cos_deg(az))

    denom = cos_deg(lat) * cos_deg(dec)
    if abs(denom) < _DEGENERATE_EPS:
        return None

    H = acos_deg((sin_deg(alt) - sin_deg(lat) * sin_deg(dec)) / denom)
    if sin_deg(az) > 0:
        H = 360.0 - H

    lst = local_sidereal_time(dt, observer.longitude)
    ra = aa.wrap_deg(lst * 15.0 - H)
    return EquatorialCoordinate(right_ascension=ra, declination=dec)


# ------------------------------------------------------------
# Angular separation
# ------------------------------------------------------------

def _lon_lat(c: Coordinate) -> Tuple[float, float]:
    if isinstance(c, EquatorialCoordinate):
        return c.right_ascension, c.declination
    if isinstance(c, EclipticCoordinate):
        return c.longitude, c.latitude
    if isinstance(c, HorizontalCoordinate):
        if c.azimuth is None:
            raise ValueError("horizontal coordinate has no azimuth")
        return c.azimuth, c.altitude
    raise TypeError(f"Unsupported coordinate type: {type(c)}")


def angular_separation(a: Coordinate, b: Coordinate) -> float:
    """
    Great-circle distance in degrees [0,180] between two directions of the
    same frame (Vincenty form, stable near 0 and 180):

      x = cos(d1) sin(d2) - sin(d1) cos(d2) cos(da)
      y = cos(d2) sin(da)
      z = sin(d1) sin(d2) + cos(d1) cos(d2) cos(da)
      sep = atan2(sqrt(x^2 + y^2), z)
    """
    if type(a) is not type(b):
        raise TypeError("coordinates must be of the same frame")
    lon1, lat1 = _lon_lat(a)
    lon2, lat2 = _lon_lat(b)
    dlon = lon2 - lon1

    x = cos_deg(lat1) * sin_deg(lat2) - sin_deg(lat1) * cos_deg(lat2) * cos_deg(dlon)
    y = cos_deg(lat2) * sin_deg(dlon)
    z = sin_deg(lat1) * sin_deg(lat2) + cos_deg(lat1) * cos_deg(lat2) * cos_deg(dlon)
    return math.degrees(math.atan2(math.hypot(x, y), z))
