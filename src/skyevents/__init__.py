"""skyevents public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    body_position,
    moon_events,
    moon_phase,
    star_events,
    sun_events,
    twilight,
)
from .core.errors import LocationResolutionError, ModelUnavailableError, SkyEventsError
from .core.types import (
    EclipticCoordinate,
    EquatorialCoordinate,
    HorizontalCoordinate,
    LunarPhase,
    Observer,
    TransitResult,
    TwilightResult,
)
from .engines.factory import available_models, make_position_model

__all__ = [
    "body_position",
    "moon_events",
    "moon_phase",
    "star_events",
    "sun_events",
    "twilight",
    "available_models",
    "make_position_model",
    "SkyEventsError",
    "LocationResolutionError",
    "ModelUnavailableError",
    "Observer",
    "EquatorialCoordinate",
    "EclipticCoordinate",
    "HorizontalCoordinate",
    "TransitResult",
    "TwilightResult",
    "LunarPhase",
]
