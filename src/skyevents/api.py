from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional

from .core.config import DEFAULT_SEARCH_CONFIG, EventSearchConfig
from .core.timezones import timezone_at
from .core.types import (
    EquatorialCoordinate,
    HorizontalCoordinate,
    LunarPhase,
    Observer,
    TransitResult,
    TwilightKind,
    TwilightResult,
)
from .engines.factory import make_position_model
from .engines.sunrise import sun_rise_set
from .engines.transit import moon_rise_set, object_rise_set
from .engines.twilight import twilight as _twilight
from .reference import lunar
from .reference.coordinates import equatorial_to_horizontal

logger = logging.getLogger(__name__)


def _zone(observer: Observer, tz: Optional[tzinfo]) -> tzinfo:
    # Lookup failures propagate as LocationResolutionError.
    if tz is not None:
        return tz
    return timezone_at(observer.latitude, observer.longitude)


def sun_events(when: datetime, observer: Observer, *, tz: Optional[tzinfo] = None) -> TransitResult:
    """Sunrise, solar transit (maximum) and sunset in the observer's local time."""
    return sun_rise_set(when, observer, tz=_zone(observer, tz))


def twilight(
    when: datetime,
    observer: Observer,
    kind: TwilightKind = "civil",
    *,
    tz: Optional[tzinfo] = None,
    config: EventSearchConfig = DEFAULT_SEARCH_CONFIG,
) -> TwilightResult:
    return _twilight(when, observer, kind, tz=_zone(observer, tz), config=config)


def moon_events(
    when: datetime,
    observer: Observer,
    *,
    tz: Optional[tzinfo] = None,
    config: EventSearchConfig = DEFAULT_SEARCH_CONFIG,
) -> TransitResult:
    """Moonrise, moonset and culmination on the observer's local calendar day."""
    return moon_rise_set(when, observer, tz=_zone(observer, tz), config=config)


def star_events(
    when: datetime,
    coordinate: EquatorialCoordinate,
    observer: Observer,
    *,
    tz: Optional[tzinfo] = None,
    config: EventSearchConfig = DEFAULT_SEARCH_CONFIG,
) -> TransitResult:
    return object_rise_set(when, coordinate, observer, tz=_zone(observer, tz), config=config)


def moon_phase(when: datetime, observer: Observer, *, model: str = "series") -> LunarPhase:
    if model == "series":
        moon = lunar.ecliptic_position_series(when)
    elif model == "closed-form":
        moon = lunar.ecliptic_position_closed_form(when)
    else:
        raise ValueError("model must be one of: series, closed-form")
    return lunar.phase(when, observer.longitude, moon)


def body_position(body: str, when: datetime, observer: Observer, *, model: str = "series") -> HorizontalCoordinate:
    """Altitude/azimuth of 'sun' or 'moon' for the observer."""
    pm = make_position_model(body, model)
    hz = equatorial_to_horizontal(when, observer, pm.equatorial(when))
    logger.debug("%s at %s: alt=%.4f az=%s", pm.name, when.isoformat(), hz.altitude, hz.azimuth)
    return hz
