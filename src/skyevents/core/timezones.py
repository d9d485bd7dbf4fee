"""
Time-zone collaborator: geographic position -> IANA zone -> tzinfo.

A failed lookup raises LocationResolutionError. Nothing here retries or falls
back to UTC.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from functools import lru_cache

import pytz
from timezonefinder import TimezoneFinder

from .errors import LocationResolutionError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _finder() -> TimezoneFinder:
    return TimezoneFinder()


def timezone_name_at(latitude: float, longitude: float) -> str:
    try:
        name = _finder().timezone_at(lat=latitude, lng=longitude)
    except ValueError as e:
        # out-of-range coordinates
        raise LocationResolutionError(f"cannot resolve a time zone for ({latitude}, {longitude})") from e
    if name is None:
        raise LocationResolutionError(f"no time zone found for ({latitude}, {longitude})")
    logger.debug("resolved (%s, %s) -> %s", latitude, longitude, name)
    return name


def load_timezone(name: str) -> tzinfo:
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise LocationResolutionError(f"unknown time zone '{name}'") from e


def timezone_at(latitude: float, longitude: float) -> tzinfo:
    return load_timezone(timezone_name_at(latitude, longitude))


def localize(naive: datetime, tz: tzinfo) -> datetime:
    """Attach tz to a naive wall-clock datetime."""
    if naive.tzinfo is not None:
        raise ValueError("datetime is already timezone-aware")
    loc = getattr(tz, "localize", None)
    if loc is not None:
        # pytz zones need localize() to pick the right offset
        return loc(naive)
    return naive.replace(tzinfo=tz)


def local_midnight(day: date, tz: tzinfo) -> datetime:
    """Aware datetime for 00:00 local time on day in tz."""
    return localize(datetime(day.year, day.month, day.day), tz)
