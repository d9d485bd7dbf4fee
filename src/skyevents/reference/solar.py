# reference/solar.py

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.types import EclipticCoordinate, Observer
from . import astro_args as aa
from . import time_scales as ts
from .trigonometry import acos_deg, asin_deg, cos_deg, sin_deg

SUN_STANDARD_ALTITUDE_DEG = -0.833

# Perihelion longitude and orbital eccentricity used by both models.
_PERIHELION_SERIES_DEG = 102.9372
_PERIHELION_CLOSED_FORM_DEG = 282.938346
_ECCENTRICITY = 0.016708


# ============================================================
# Series model (sunrise equation; J = days since J2000.0)
# ============================================================

def mean_anomaly(J: float) -> float:
    """M = 357.5291092 + 0.98560028 J, wrapped to [0,360)."""
    return aa.wrap_deg(357.5291092 + 0.98560028 * J)


def equation_of_center(M: float) -> float:
    """C = 1.9148 sin M + 0.0200 sin 2M + 0.0003 sin 3M."""
    return 1.9148 * sin_deg(M) + 0.0200 * sin_deg(2.0 * M) + 0.0003 * sin_deg(3.0 * M)


def ecliptic_longitude(M: float, C: float) -> float:
    """lambda = M + C + 180 + 102.9372, wrapped to [0,360)."""
    return aa.wrap_deg(M + C + 180.0 + _PERIHELION_SERIES_DEG)


def declination(ecliptic_lon: float) -> float:
    """delta = asin(sin(lambda) sin(23.44))."""
    return asin_deg(sin_deg(ecliptic_lon) * sin_deg(aa.MEAN_AXIAL_TILT_DEG))


def transit_julian_date(J: float, M: float, ecliptic_lon: float) -> float:
    """J_transit = 2451545 + J + 0.0053 sin M - 0.0069 sin 2 lambda."""
    return aa.J2000 + J + 0.0053 * sin_deg(M) - 0.0069 * sin_deg(2.0 * ecliptic_lon)


def horizon_dip_deg(elevation_m: float) -> float:
    """Depression of the horizon for an elevated observer, 2.076 sqrt(h) / 60 degrees."""
    if elevation_m <= 0:
        return 0.0
    return 2.076 * math.sqrt(elevation_m) / 60.0


def hour_angle(
    dec: float,
    latitude: float,
    *,
    elevation_m: float = 0.0,
    altitude: float = SUN_STANDARD_ALTITUDE_DEG,
) -> Optional[float]:
    """
    Hour angle (degrees) at which the Sun's centre reaches the given altitude:

      cos w = (sin(h0 - dip) - sin(p) sin(d)) / (cos(p) cos(d))

    Returns None if the Sun never reaches that altitude (polar day/night).
    """
    h0 = altitude - horizon_dip_deg(elevation_m)
    denom = cos_deg(latitude) * cos_deg(dec)
    if abs(denom) < 1e-12:
        return None
    cos_w = (sin_deg(h0) - sin_deg(latitude) * sin_deg(dec)) / denom
    if cos_w < -1.0 or cos_w > 1.0:
        return None
    return acos_deg(cos_w)


def ecliptic_position_series(dt: datetime) -> EclipticCoordinate:
    """Solar ecliptic position from the series model, clocked by continuous days since J2000.0."""
    J = ts.days_since_j2000(dt)
    M = mean_anomaly(J)
    return EclipticCoordinate(longitude=ecliptic_longitude(M, equation_of_center(M)), latitude=0.0)


@dataclass(frozen=True)
class SunriseEquation:
    """Sunrise equation solution as Julian Dates (UTC)."""
    transit_jd: float
    rise_jd: Optional[float]
    set_jd: Optional[float]
    declination: float
    hour_angle: Optional[float]


def sunrise_equation(
    dt: datetime,
    observer: Observer,
    *,
    altitude: float = SUN_STANDARD_ALTITUDE_DEG,
) -> SunriseEquation:
    """
    Sunrise, solar transit and sunset for the day containing dt.

      J* = ceil(JD - 2451545 + 0.0008) - lon/360
      rise/set = J_transit -/+ w/360
    """
    J = ts.mean_solar_time(dt, observer.longitude)
    M = mean_anomaly(J)
    lam = ecliptic_longitude(M, equation_of_center(M))
    dec = declination(lam)
    transit = transit_julian_date(J, M, lam)

    w = hour_angle(dec, observer.latitude, elevation_m=observer.elevation, altitude=altitude)
    if w is None:
        return SunriseEquation(transit, None, None, dec, None)
    return SunriseEquation(
        transit_jd=transit,
        rise_jd=transit - w / 360.0,
        set_jd=transit + w / 360.0,
        declination=dec,
        hour_angle=w,
    )


# ============================================================
# Closed-form model (Lawrence, "Celestial Calculations" ch. 6)
# ============================================================

def mean_anomaly_closed_form(days: float) -> float:
    """M = 360 De / 365.242191 + 280.466069 - 282.938346, wrapped to [0,360)."""
    return aa.wrap_deg(360.0 * days / 365.242191 + 280.466069 - _PERIHELION_CLOSED_FORM_DEG)


def equation_of_center_closed_form(M: float) -> float:
    """Ec = (360 / pi) e sin M."""
    return (360.0 / math.pi) * _ECCENTRICITY * sin_deg(M)


def ecliptic_longitude_closed_form(M: float, Ec: float) -> float:
    """lambda = M + Ec + 282.938346, wrapped to [0,360)."""
    return aa.wrap_deg(M + Ec + _PERIHELION_CLOSED_FORM_DEG)


def ecliptic_position_closed_form(dt: datetime) -> EclipticCoordinate:
    M = mean_anomaly_closed_form(ts.days_since_j2000(dt))
    return EclipticCoordinate(
        longitude=ecliptic_longitude_closed_form(M, equation_of_center_closed_form(M)),
        latitude=0.0,
    )
