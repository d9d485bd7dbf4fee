"""
skyevents.engines.factory
-------------------------
Maps (body, model) names to live PositionModel objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List

from ..core.errors import ModelUnavailableError
from ..core.types import EquatorialCoordinate
from .interfaces import PositionModel
from .positions import (
    FixedPosition,
    LunarClosedFormPosition,
    LunarSeriesPosition,
    SolarClosedFormPosition,
    SolarSeriesPosition,
)

ModelFactory = Callable[[], PositionModel]


@dataclass
class PositionModelRegistry:
    _factories: Dict[str, ModelFactory] = field(default_factory=dict)

    def get(self, body: str, model: str) -> PositionModel:
        key = f"{body}/{model}"
        if key not in self._factories:
            raise ModelUnavailableError(f"Unknown position model '{key}'. Available: {self.list()}")
        return self._factories[key]()

    def list(self) -> List[str]:
        return sorted(self._factories.keys())

    def register(self, body: str, model: str, factory: ModelFactory, *, overwrite: bool = False) -> None:
        key = f"{body}/{model}"
        if (not overwrite) and (key in self._factories):
            raise KeyError(f"Position model '{key}' already exists. Use overwrite=True to replace.")
        self._factories[key] = factory


def default_registry() -> PositionModelRegistry:
    reg = PositionModelRegistry()
    reg.register("sun", "series", SolarSeriesPosition)
    reg.register("sun", "closed-form", SolarClosedFormPosition)
    reg.register("moon", "series", LunarSeriesPosition)
    reg.register("moon", "closed-form", LunarClosedFormPosition)
    return reg


_REGISTRY = default_registry()


def make_position_model(body: str, model: str = "series") -> PositionModel:
    """The universal entry point for Sun and Moon models."""
    return _REGISTRY.get(body, model)


def make_fixed_model(coordinate: EquatorialCoordinate, *, altitude: float = 0.0) -> PositionModel:
    return FixedPosition(coordinate=coordinate, altitude=altitude)


def available_models() -> List[str]:
    return _REGISTRY.list()
