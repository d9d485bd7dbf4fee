"""
skyevents.engines.positions
---------------------------
Concrete position models for the Sun, the Moon and fixed objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.types import EquatorialCoordinate
from ..reference import astro_args as aa
from ..reference import lunar, solar
from ..reference.coordinates import ecliptic_to_equatorial
from ..reference.time_scales import julian_century


@dataclass(frozen=True)
class FixedPosition:
    """A star or any direction fixed in the equatorial frame."""
    coordinate: EquatorialCoordinate
    altitude: float = 0.0
    name: str = "fixed"

    def equatorial(self, dt: datetime) -> EquatorialCoordinate:
        return self.coordinate

    def standard_altitude(self, dt: datetime) -> float:
        return self.altitude


@dataclass(frozen=True)
class SolarSeriesPosition:
    altitude: float = solar.SUN_STANDARD_ALTITUDE_DEG
    name: str = "sun/series"

    def equatorial(self, dt: datetime) -> EquatorialCoordinate:
        return ecliptic_to_equatorial(dt, solar.ecliptic_position_series(dt))

    def standard_altitude(self, dt: datetime) -> float:
        return self.altitude


@dataclass(frozen=True)
class SolarClosedFormPosition:
    altitude: float = solar.SUN_STANDARD_ALTITUDE_DEG
    name: str = "sun/closed-form"

    def equatorial(self, dt: datetime) -> EquatorialCoordinate:
        eps = aa.mean_obliquity_deg(julian_century(dt), model="lawrence")
        return ecliptic_to_equatorial(dt, solar.ecliptic_position_closed_form(dt), obliquity=eps)

    def standard_altitude(self, dt: datetime) -> float:
        return self.altitude


@dataclass(frozen=True)
class LunarSeriesPosition:
    name: str = "moon/series"

    def equatorial(self, dt: datetime) -> EquatorialCoordinate:
        return ecliptic_to_equatorial(dt, lunar.ecliptic_position_series(dt))

    def standard_altitude(self, dt: datetime) -> float:
        dist = lunar.ecliptic_position_series(dt).distance
        if dist is None:
            raise ValueError("lunar model returned no distance")
        return lunar.standard_altitude(dist)


@dataclass(frozen=True)
class LunarClosedFormPosition:
    name: str = "moon/closed-form"

    def equatorial(self, dt: datetime) -> EquatorialCoordinate:
        return lunar.equatorial_position_closed_form(dt)

    def standard_altitude(self, dt: datetime) -> float:
        dist = lunar.ecliptic_position_closed_form(dt).distance
        if dist is None:
            raise ValueError("lunar model returned no distance")
        return lunar.standard_altitude(dist)
