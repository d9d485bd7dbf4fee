"""
skyevents.engines.twilight
--------------------------
Civil, nautical and astronomical twilight from the Sun's altitude scan.

Twilight runs from today's crossing of the twilight altitude on the way down
to tomorrow's crossing on the way up.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo

from ..core.config import DEFAULT_SEARCH_CONFIG, TWILIGHT_ALTITUDES, EventSearchConfig
from ..core.types import Observer, TwilightKind, TwilightResult
from .interfaces import PositionModel
from .positions import SolarClosedFormPosition, SolarSeriesPosition
from .transit import first_rise, first_set, scan_local_day

logger = logging.getLogger(__name__)


def _sun_at(altitude: float, config: EventSearchConfig) -> PositionModel:
    if config.solar_model == "series":
        return SolarSeriesPosition(altitude=altitude)
    return SolarClosedFormPosition(altitude=altitude)


def twilight(
    dt: datetime,
    observer: Observer,
    kind: TwilightKind = "civil",
    *,
    tz: tzinfo,
    config: EventSearchConfig = DEFAULT_SEARCH_CONFIG,
) -> TwilightResult:
    """
    Evening-to-morning twilight starting on the local calendar day of dt.

    start is today's descending crossing, end is tomorrow's ascending one;
    either is None where the Sun never crosses that altitude.
    """
    if kind not in TWILIGHT_ALTITUDES:
        raise ValueError(f"kind must be one of: {', '.join(TWILIGHT_ALTITUDES)}")
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")

    sun = _sun_at(TWILIGHT_ALTITUDES[kind], config)
    today = dt.astimezone(tz).date()

    tonight = scan_local_day(today, sun, observer, tz=tz, config=config)
    tomorrow = scan_local_day(today + timedelta(days=1), sun, observer, tz=tz, config=config)

    i_set = first_set(tonight)
    i_rise = first_rise(tomorrow)
    start = tonight[i_set].when if i_set is not None else None
    end = tomorrow[i_rise].when if i_rise is not None else None
    duration = end - start if (start is not None and end is not None) else None

    logger.debug("%s twilight %s -> %s", kind, start, end)
    return TwilightResult(kind=kind, start=start, end=end, duration=duration)
