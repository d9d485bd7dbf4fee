# reference/trigonometry.py
"""
Degree-based trigonometry.

Every astronomical formula in this package is written in degrees; these thin
wrappers keep the radian conversion in one place. The inverse functions clamp
their argument to [-1, 1] so values a few ulps outside the domain (rounding in
the spherical-trig products) do not raise.
"""

from __future__ import annotations

import math


def _clamp_unit(x: float) -> float:
    if x > 1.0:
        return 1.0
    if x < -1.0:
        return -1.0
    return x


def sin_deg(x: float) -> float:
    return math.sin(math.radians(x))


def cos_deg(x: float) -> float:
    return math.cos(math.radians(x))


def tan_deg(x: float) -> float:
    return math.tan(math.radians(x))


def asin_deg(x: float) -> float:
    """Inverse sine in degrees, range [-90, 90]."""
    return math.degrees(math.asin(_clamp_unit(x)))


def acos_deg(x: float) -> float:
    """Inverse cosine in degrees, range [0, 180]."""
    return math.degrees(math.acos(_clamp_unit(x)))


def atan2_deg(y: float, x: float) -> float:
    """Quadrant-correct arctangent of y/x in degrees, range (-180, 180]."""
    return math.degrees(math.atan2(y, x))
