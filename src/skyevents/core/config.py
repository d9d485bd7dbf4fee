from __future__ import annotations
from dataclasses import dataclass
from datetime import timedelta
from types import MappingProxyType
from typing import Literal, Mapping

from .types import TwilightKind

ModelName = Literal["series", "closed-form"]

# Sun centre altitude (degrees) bounding each twilight.
TWILIGHT_ALTITUDES: Mapping[TwilightKind, float] = MappingProxyType({
    "civil": -6.0,
    "nautical": -12.0,
    "astronomical": -18.0,
})

@dataclass(frozen=True)
class EventSearchConfig:
    """Knobs for the discretized rise/set scan."""
    step: timedelta = timedelta(minutes=1)
    samples: int = 1440
    lunar_model: ModelName = "closed-form"
    solar_model: ModelName = "closed-form"

    def __post_init__(self) -> None:
        if self.step <= timedelta(0):
            raise ValueError("step must be positive")
        if self.samples < 2:
            raise ValueError("samples must be at least 2")

DEFAULT_SEARCH_CONFIG = EventSearchConfig()
