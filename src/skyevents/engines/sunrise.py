"""
skyevents.engines.sunrise
-------------------------
Sunrise, solar transit and sunset from the sunrise equation (series model).

The equation is anchored at 0h UTC of the observer's calendar date: J* then
lands on the local solar noon of that date for any longitude in [-180,180].
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional

from ..core.types import Observer, TransitResult
from ..reference import solar
from ..reference.time_scales import jd_to_datetime

logger = logging.getLogger(__name__)


def local_date(dt: datetime, observer: Observer, tz: Optional[tzinfo] = None) -> date:
    """
    Calendar date of dt for the observer: the date in tz when given, else the
    date on the observer's mean solar clock (UTC + longitude/15 hours).
    """
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    if tz is not None:
        return dt.astimezone(tz).date()
    return (dt.astimezone(timezone.utc) + timedelta(hours=observer.longitude / 15.0)).date()


def sun_rise_set(
    dt: datetime,
    observer: Observer,
    *,
    tz: Optional[tzinfo] = None,
    altitude: float = solar.SUN_STANDARD_ALTITUDE_DEG,
) -> TransitResult:
    """
    Sunrise (rise), solar transit (maximum) and sunset (set) on the observer's
    calendar day containing dt. Polar day and polar night give an empty result.
    """
    day = local_date(dt, observer, tz)
    anchor = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)

    sol = solar.sunrise_equation(anchor, observer, altitude=altitude)
    if sol.rise_jd is None or sol.set_jd is None:
        logger.debug("sun does not reach %s deg at lat=%s (dec=%.4f)", altitude, observer.latitude, sol.declination)
        return TransitResult()

    rise = jd_to_datetime(sol.rise_jd)
    set_ = jd_to_datetime(sol.set_jd)
    transit = jd_to_datetime(sol.transit_jd)
    if tz is not None:
        rise, set_, transit = rise.astimezone(tz), set_.astimezone(tz), transit.astimezone(tz)
    return TransitResult(rise=rise, set=set_, maximum=transit, duration=set_ - rise)
