"""
skyevents.engines.interfaces
----------------------------
The seam between ephemeris models and the event search.

Event search only needs two things from a body: where it is on the sky at a
given instant, and the altitude at which it counts as risen. Sun and Moon each
ship two models (periodic series and closed form); callers pick one
explicitly and the search never mixes them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ..core.types import EquatorialCoordinate


class PositionModel(Protocol):
    @property
    def name(self) -> str:
        """Registry name, e.g. 'moon/closed-form'."""
        ...

    def equatorial(self, dt: datetime) -> EquatorialCoordinate:
        """Geocentric right ascension and declination at dt."""
        ...

    def standard_altitude(self, dt: datetime) -> float:
        """Geometric altitude (degrees) of the body's centre at rise and set."""
        ...
