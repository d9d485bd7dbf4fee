# reference/time_scales.py
"""
Time axes used by the position models.

UTC stands in for TT and UT1 everywhere: the sub-minute difference is below
the accuracy the models aim for.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone

from . import astro_args as aa


# ============================================================
# Calendar date <-> Julian Day Number (Gregorian)
# ============================================================

def date_to_jdn(d: date) -> int:
    """
    Gregorian date -> JDN (integer day number at noon).
    Fliegel-Van Flandern style.
    """
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def date_to_jd(d: date) -> float:
    """JD at 0h UTC of the given civil date."""
    return date_to_jdn(d) - 0.5


# ============================================================
# Datetime <-> JD
# ============================================================

_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MS_PER_DAY = 86400000.0
_ONE_MS = timedelta(milliseconds=1)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt.astimezone(timezone.utc)


def unix_milliseconds(dt: datetime) -> int:
    """Whole UTC milliseconds since 1970-01-01, floored."""
    return (_as_utc(dt) - _UNIX_EPOCH) // _ONE_MS


def julian_date(dt: datetime) -> float:
    """
    datetime -> JD (UTC), from whole UTC milliseconds.

    2021-05-14T00:00:00Z -> 2459348.5
    """
    return unix_milliseconds(dt) / _MS_PER_DAY + _JD_UNIX_EPOCH


def jd_to_datetime(jd: float) -> datetime:
    """
    JD (UTC) -> timezone-aware datetime in UTC, rounded to the millisecond.
    Inverse of julian_date().
    """
    ms = int(round((jd - _JD_UNIX_EPOCH) * _MS_PER_DAY))
    return _UNIX_EPOCH + timedelta(milliseconds=ms)


def julian_century(dt: datetime) -> float:
    """Julian centuries since J2000.0."""
    return aa.T_centuries(julian_date(dt))


def days_since_j2000(dt: datetime) -> float:
    """Fractional days since J2000.0, the clock of the closed-form models."""
    return julian_date(dt) - aa.J2000


def mean_solar_time(dt: datetime, longitude: float) -> float:
    """
    Days since J2000.0 for the local mean solar noon (sunrise equation):
      J* = ceil(JD - 2451545 + 0.0008) - longitude/360
    with longitude positive east.
    """
    n = math.ceil(julian_date(dt) - aa.J2000 + 0.0008)
    return n - longitude / 360.0


def universal_time_hours(dt: datetime) -> float:
    """Decimal hours since 0h UTC."""
    u = _as_utc(dt)
    return u.hour + u.minute / 60.0 + (u.second + u.microsecond / 1e6) / 3600.0


# ============================================================
# Sidereal time
# ============================================================

_SIDEREAL_RATE = 1.002738
_SOLAR_PER_SIDEREAL = 0.9972695663


def _sidereal_offset_hours(d: date) -> float:
    """
    T0 for the given UTC date (Lawrence, "Celestial Calculations" ch. 4):
      JD0 = JD of Jan 0.0 of the year
      T   = (JD0 - 2415020) / 36525
      R   = 6.6460656 + 2400.051262 T + 0.00002581 T^2
      B   = 24 - R + 24 (year - 1900)
      T0  = 0.0657098 (JD - JD0) - B
    """
    jd0 = date_to_jd(date(d.year, 1, 1)) - 1.0
    days = date_to_jd(d) - jd0
    T = (jd0 - 2415020.0) / 36525.0
    R = 6.6460656 + 2400.051262 * T + 0.00002581 * (T * T)
    B = 24.0 - R + 24.0 * (d.year - 1900)
    return 0.0657098 * days - B


def greenwich_sidereal_time(dt: datetime) -> float:
    """Greenwich mean sidereal time in hours [0,24)."""
    u = _as_utc(dt)
    t0 = _sidereal_offset_hours(u.date())
    return aa.wrap_hours(t0 + _SIDEREAL_RATE * universal_time_hours(u))


def apparent_greenwich_sidereal_time(dt: datetime) -> float:
    """GMST corrected by the equation of the equinoxes, dpsi cos(eps) / 15."""
    T = julian_century(dt)
    eps = aa.true_obliquity_deg(T)
    dpsi = aa.nutation_in_longitude_deg(T)
    return aa.wrap_hours(greenwich_sidereal_time(dt) + dpsi * math.cos(math.radians(eps)) / 15.0)


def local_sidereal_time(dt: datetime, longitude: float) -> float:
    """Local mean sidereal time in hours [0,24), longitude positive east."""
    return aa.wrap_hours(greenwich_sidereal_time(dt) + longitude / 15.0)


def local_to_greenwich_sidereal_time(lst_hours: float, longitude: float) -> float:
    return aa.wrap_hours(lst_hours - longitude / 15.0)


def greenwich_sidereal_to_universal_time(dt: datetime, gst_hours: float) -> float:
    """
    UT hours [0,24) on the instant's UTC date at which GMST equals gst_hours.

    Within one sidereal day there are two solutions for ~4 minutes each day;
    the first one is returned.
    """
    t0 = _sidereal_offset_hours(_as_utc(dt).date())
    return aa.wrap_hours(gst_hours - t0) * _SOLAR_PER_SIDEREAL
