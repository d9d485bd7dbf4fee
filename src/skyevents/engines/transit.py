"""
skyevents.engines.transit
-------------------------
Rise, set and transit search.

Two algorithms:

1. Closed form, for directions fixed in the equatorial frame (stars). The
   rise/set local sidereal times follow from the hour angle
   H1 = acos(-tan(lat) tan(dec)) and are mapped back to UTC on the calendar
   date of the instant as given. A set that lands before the rise belongs to
   the next day and is recomputed there.

2. A one-minute altitude scan over the observer's local calendar day, for
   bodies that move during the day (Moon, Sun). A crossing of the model's
   standard altitude between consecutive samples flags a rise or set.

"No event" (circumpolar, never visible) is a normal result with every field
set to None, never an exception.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import List, Optional, Sequence

import numpy as np

from ..core.config import DEFAULT_SEARCH_CONFIG, EventSearchConfig
from ..core.timezones import local_midnight
from ..core.types import (
    EquatorialCoordinate,
    Observer,
    TemporalHorizontalCoordinate,
    TransitResult,
)
from ..reference import astro_args as aa
from ..reference.coordinates import equatorial_to_horizontal
from ..reference.time_scales import (
    greenwich_sidereal_to_universal_time,
    local_to_greenwich_sidereal_time,
)
from ..reference.trigonometry import acos_deg, cos_deg, sin_deg, tan_deg
from .factory import make_position_model
from .interfaces import PositionModel
from .positions import FixedPosition

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


def _last_argmax(values: np.ndarray) -> int:
    """Index of the greatest value; ties resolve to the latest sample."""
    return len(values) - 1 - int(np.argmax(values[::-1]))


def _in_zone(dt: Optional[datetime], tz: Optional[tzinfo]) -> Optional[datetime]:
    if dt is None or tz is None:
        return dt
    return dt.astimezone(tz)


# ============================================================
# Closed form (fixed equatorial coordinate)
# ============================================================

def does_object_rise_or_set(equatorial: EquatorialCoordinate, latitude: float) -> bool:
    """
    False for circumpolar directions (always above or always below the horizon):
      |sin(d) / cos(p)| >= 1  or  |tan(p) tan(d)| >= 1
    An observer at a pole sees nothing rise or set.
    """
    cos_lat = cos_deg(latitude)
    if abs(cos_lat) < 1e-12:
        return False
    dec = equatorial.declination
    if abs(sin_deg(dec) / cos_lat) >= 1.0:
        return False
    return abs(tan_deg(latitude) * tan_deg(dec)) < 1.0


def rise_set_hour_angle(equatorial: EquatorialCoordinate, latitude: float) -> float:
    """H1 = acos(-tan(p) tan(d)), degrees."""
    return acos_deg(-tan_deg(latitude) * tan_deg(equatorial.declination))


def _rise_set_on(day_utc: datetime, equatorial: EquatorialCoordinate, observer: Observer, h1: float):
    ra_hours = equatorial.right_ascension / 15.0
    lst_rise = aa.wrap_hours(24.0 + ra_hours - h1 / 15.0)
    lst_set = aa.wrap_hours(ra_hours + h1 / 15.0)

    ut_rise = greenwich_sidereal_to_universal_time(
        day_utc, local_to_greenwich_sidereal_time(lst_rise, observer.longitude))
    ut_set = greenwich_sidereal_to_universal_time(
        day_utc, local_to_greenwich_sidereal_time(lst_set, observer.longitude))
    return day_utc + timedelta(hours=ut_rise), day_utc + timedelta(hours=ut_set)


def _maximum_between(
    model: PositionModel,
    observer: Observer,
    start: datetime,
    end: datetime,
    step: timedelta,
) -> datetime:
    n = int((end - start) / step) + 1
    times = [start + k * step for k in range(n)]
    alts = np.array([equatorial_to_horizontal(t, observer, model.equatorial(t)).altitude for t in times])
    return times[_last_argmax(alts)]


def object_rise_set(
    dt: datetime,
    equatorial: EquatorialCoordinate,
    observer: Observer,
    *,
    tz: Optional[tzinfo] = None,
    config: EventSearchConfig = DEFAULT_SEARCH_CONFIG,
) -> TransitResult:
    """
    Rise, set and transit maximum of a fixed direction, starting from the
    calendar date of dt as given (its own zone). Times are UTC, or in tz when
    given.
    """
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    if not does_object_rise_or_set(equatorial, observer.latitude):
        logger.debug("circumpolar: dec=%s lat=%s", equatorial.declination, observer.latitude)
        return TransitResult()

    h1 = rise_set_hour_angle(equatorial, observer.latitude)
    day = datetime(dt.year, dt.month, dt.day, tzinfo=timezone.utc)
    rise, set_ = _rise_set_on(day, equatorial, observer, h1)
    if set_ < rise:
        _, set_ = _rise_set_on(day + _ONE_DAY, equatorial, observer, h1)

    maximum = _maximum_between(FixedPosition(equatorial), observer, rise, set_, config.step)
    return TransitResult(
        rise=_in_zone(rise, tz),
        set=_in_zone(set_, tz),
        maximum=_in_zone(maximum, tz),
        duration=set_ - rise,
    )


# ============================================================
# Discretized scan (moving bodies)
# ============================================================

def scan_local_day(
    day: date,
    model: PositionModel,
    observer: Observer,
    *,
    tz: tzinfo,
    config: EventSearchConfig = DEFAULT_SEARCH_CONFIG,
) -> List[TemporalHorizontalCoordinate]:
    """
    Sample the horizontal position once per step from local midnight of day.

    One extra sample on each side (the leading one catches an event at minute
    zero) is evaluated and dropped, so config.samples samples are returned.
    """
    start = local_midnight(day, tz).astimezone(timezone.utc) - config.step
    n = config.samples + 2
    times = [start + k * config.step for k in range(n)]

    horizontal = [equatorial_to_horizontal(t, observer, model.equatorial(t)) for t in times]
    alts = np.array([h.altitude for h in horizontal])
    h0 = np.array([model.standard_altitude(t) for t in times])
    rel = alts - h0

    prev, cur = rel[:-1], rel[1:]
    rises = np.concatenate(([False], (prev <= 0.0) & (cur > 0.0)))
    sets = np.concatenate(([False], (prev >= 0.0) & (cur < 0.0)))

    return [
        TemporalHorizontalCoordinate(
            when=times[k].astimezone(tz),
            altitude=horizontal[k].altitude,
            azimuth=horizontal[k].azimuth,
            is_rise=bool(rises[k]),
            is_set=bool(sets[k]),
        )
        for k in range(1, n - 1)
    ]


def scan_horizontal(
    dt: datetime,
    model: PositionModel,
    observer: Observer,
    *,
    tz: tzinfo,
    config: EventSearchConfig = DEFAULT_SEARCH_CONFIG,
) -> List[TemporalHorizontalCoordinate]:
    """Scan the local calendar day (in tz) that contains dt."""
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return scan_local_day(dt.astimezone(tz).date(), model, observer, tz=tz, config=config)


def first_rise(samples: Sequence[TemporalHorizontalCoordinate]) -> Optional[int]:
    return next((i for i, s in enumerate(samples) if s.is_rise), None)


def first_set(samples: Sequence[TemporalHorizontalCoordinate]) -> Optional[int]:
    return next((i for i, s in enumerate(samples) if s.is_set), None)


def rise_set_from_scan(samples: Sequence[TemporalHorizontalCoordinate]) -> TransitResult:
    """
    Collapse a scan into a TransitResult.

    The maximum is the highest sample between rise and set when the body
    rises and then sets within the day, else the highest sample of the whole
    day. Without any crossing there is no maximum either.
    """
    i_rise = first_rise(samples)
    i_set = first_set(samples)
    if i_rise is None and i_set is None:
        return TransitResult()

    alts = np.array([s.altitude for s in samples])
    if i_rise is not None and i_set is not None and i_rise < i_set:
        lo, hi = i_rise, i_set
        duration = samples[i_set].when - samples[i_rise].when
    else:
        lo, hi = 0, len(samples) - 1
        duration = timedelta(0)
    i_max = lo + _last_argmax(alts[lo:hi + 1])

    return TransitResult(
        rise=samples[i_rise].when if i_rise is not None else None,
        set=samples[i_set].when if i_set is not None else None,
        maximum=samples[i_max].when,
        duration=duration,
    )


def body_rise_set(
    dt: datetime,
    model: PositionModel,
    observer: Observer,
    *,
    tz: tzinfo,
    config: EventSearchConfig = DEFAULT_SEARCH_CONFIG,
) -> TransitResult:
    result = rise_set_from_scan(scan_horizontal(dt, model, observer, tz=tz, config=config))
    logger.debug("%s rise=%s set=%s max=%s", model.name, result.rise, result.set, result.maximum)
    return result


def moon_rise_set(
    dt: datetime,
    observer: Observer,
    *,
    tz: tzinfo,
    config: EventSearchConfig = DEFAULT_SEARCH_CONFIG,
) -> TransitResult:
    """Moonrise, moonset and upper culmination on the local calendar day containing dt."""
    model = make_position_model("moon", config.lunar_model)
    return body_rise_set(dt, model, observer, tz=tz, config=config)
