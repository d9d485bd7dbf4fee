from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal, Optional

TwilightKind = Literal["civil", "nautical", "astronomical"]

@dataclass(frozen=True)
class Observer:
    """Geographic position: degrees north, degrees east, metres above sea level."""
    latitude: float
    longitude: float
    elevation: float = 0.0

@dataclass(frozen=True)
class EquatorialCoordinate:
    right_ascension: float  # degrees, [0,360)
    declination: float      # degrees, [-90,90]

@dataclass(frozen=True)
class EclipticCoordinate:
    longitude: float                  # degrees, [0,360)
    latitude: float                   # degrees, [-90,90]
    distance: Optional[float] = None  # km

@dataclass(frozen=True)
class HorizontalCoordinate:
    altitude: float
    azimuth: Optional[float]  # None at the zenith, nadir or a pole

@dataclass(frozen=True)
class TemporalHorizontalCoordinate:
    """One sample of a discretized altitude scan."""
    when: datetime
    altitude: float
    azimuth: Optional[float]
    is_rise: bool = False
    is_set: bool = False

@dataclass(frozen=True)
class TransitResult:
    rise: Optional[datetime] = None
    set: Optional[datetime] = None
    maximum: Optional[datetime] = None
    duration: timedelta = timedelta(0)

    @property
    def rises_and_sets(self) -> bool:
        return self.rise is not None and self.set is not None

@dataclass(frozen=True)
class TwilightResult:
    kind: TwilightKind
    start: Optional[datetime] = None   # today's set-equivalent
    end: Optional[datetime] = None     # tomorrow's rise-equivalent
    duration: Optional[timedelta] = None

@dataclass(frozen=True)
class LunarPhase:
    age: float       # Sun-Moon elongation, degrees [0,360)
    angle: float     # phase angle, degrees [0,360)
    days: float      # fraction * synodic month
    fraction: float  # illuminated fraction [0,1]
    percent: float   # illuminated percent [0,100]
