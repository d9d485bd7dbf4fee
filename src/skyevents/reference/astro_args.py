from __future__ import annotations

from dataclasses import dataclass
from math import fmod
from typing import Literal

from .trigonometry import cos_deg, sin_deg


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    # fmod of a tiny negative value can round up to exactly 360
    if y >= 360.0:
        y -= 360.0
    return y

def wrap180(deg: float) -> float:
    """Wraps an angle in degrees to the range [-180.0, 180.0)."""
    return (deg + 180.0) % 360.0 - 180.0

def wrap_hours(x_hours: float) -> float:
    """Wrap hours to [0,24)."""
    y = fmod(x_hours, 24.0)
    if y < 0:
        y += 24.0
    if y >= 24.0:
        y -= 24.0
    return y

def arcsec_to_deg(arcsec: float) -> float:
    return arcsec / 3600.0


# ------------------------------------------------------------
# Epochs & constants
# ------------------------------------------------------------

J2000 = 2451545.0  # JD at J2000.0 (UTC is used in place of TT throughout)
JULIAN_CENTURY_DAYS = 36525.0

SYNODIC_MONTH_DAYS = 29.530588853
MEAN_AXIAL_TILT_DEG = 23.44
EARTH_EQUATORIAL_RADIUS_KM = 6378.14

# Lawrence, "Celestial Calculations", ch. 7 (epoch J2010 elements re-based to J2000)
LUNAR_INCLINATION_DEG = 5.1453964
LUNAR_SEMI_MAJOR_AXIS_KM = 384401.0
LUNAR_ECCENTRICITY = 0.0549


def T_centuries(jd: float) -> float:
    """Julian centuries from J2000.0."""
    return (jd - J2000) / JULIAN_CENTURY_DAYS


# ------------------------------------------------------------
# Fundamental arguments (Meeus ch. 47; degrees)
# ------------------------------------------------------------

def lunar_mean_longitude(T: float) -> float:
    """L' = 218.3164477 + 481267.88123421 T - 0.0015786 T^2 + T^3/538841 - T^4/65194000"""
    T2 = T * T
    return wrap_deg(
        218.3164477
        + 481267.88123421 * T
        - 0.0015786 * T2
        + (T2 * T / 538841.0)
        - (T2 * T2 / 65194000.0)
    )

def lunar_mean_elongation(T: float) -> float:
    """D = 297.8501921 + 445267.1114034 T - 0.0018819 T^2 + T^3/545868 - T^4/113065000"""
    T2 = T * T
    return wrap_deg(
        297.8501921
        + 445267.1114034 * T
        - 0.0018819 * T2
        + (T2 * T / 545868.0)
        - (T2 * T2 / 113065000.0)
    )

def solar_mean_anomaly(T: float) -> float:
    """M = 357.5291092 + 35999.0502909 T - 0.0001536 T^2 + T^3/24490000"""
    T2 = T * T
    return wrap_deg(
        357.5291092
        + 35999.0502909 * T
        - 0.0001536 * T2
        + (T2 * T / 24490000.0)
    )

def lunar_mean_anomaly(T: float) -> float:
    """M' = 134.9633964 + 477198.8675055 T + 0.0087414 T^2 + T^3/69699 - T^4/14712000"""
    T2 = T * T
    return wrap_deg(
        134.9633964
        + 477198.8675055 * T
        + 0.0087414 * T2
        + (T2 * T / 69699.0)
        - (T2 * T2 / 14712000.0)
    )

def lunar_argument_of_latitude(T: float) -> float:
    """F = 93.2720950 + 483202.0175233 T - 0.0036539 T^2 - T^3/3526000 + T^4/863310000"""
    T2 = T * T
    return wrap_deg(
        93.2720950
        + 483202.0175233 * T
        - 0.0036539 * T2
        - (T2 * T / 3526000.0)
        + (T2 * T2 / 863310000.0)
    )

def lunar_ascending_node(T: float) -> float:
    """Omega = 125.04452 - 1934.136261 T + 0.0020708 T^2 + T^3/450000"""
    T2 = T * T
    return wrap_deg(125.04452 - 1934.136261 * T + 0.0020708 * T2 + (T2 * T / 450000.0))

def solar_mean_longitude(T: float) -> float:
    """Low-precision mean longitude of the Sun, L = 280.4665 + 36000.7698 T."""
    return wrap_deg(280.4665 + 36000.7698 * T)


@dataclass(frozen=True)
class FundamentalArgs:
    """Fundamental arguments in degrees, each wrapped to [0,360)."""
    Lp_deg: float
    D_deg: float
    M_deg: float
    Mp_deg: float
    F_deg: float
    Omega_deg: float


def fundamental_args(T: float) -> FundamentalArgs:
    return FundamentalArgs(
        Lp_deg=lunar_mean_longitude(T),
        D_deg=lunar_mean_elongation(T),
        M_deg=solar_mean_anomaly(T),
        Mp_deg=lunar_mean_anomaly(T),
        F_deg=lunar_argument_of_latitude(T),
        Omega_deg=lunar_ascending_node(T),
    )


# ------------------------------------------------------------
# Obliquity & nutation
# ------------------------------------------------------------

ObliquityModel = Literal["iau1980", "iau2000", "lawrence"]


def mean_obliquity_deg(T: float, model: ObliquityModel = "iau1980") -> float:
    """
    Mean obliquity of the ecliptic (degrees).

    - 'iau1980' (Meeus 22.2):
        eps = 23°26'21.448" - 46.8150"T - 0.00059"T^2 + 0.001813"T^3
    - 'iau2000':
        eps = 84381.406"
            - 46.836769"T - 0.0001831"T^2 + 0.00200340"T^3
            - 0.000000576"T^4 - 0.0000000434"T^5
    - 'lawrence' (used with the closed-form lunar model):
        eps = 23.439292 - (46.815 T + 0.0006 T^2 - 0.00181 T^3) / 3600
    """
    if model == "iau1980":
        eps0 = 23.0 + 26.0 / 60.0 + 21.448 / 3600.0
        return eps0 - arcsec_to_deg(46.8150 * T + 0.00059 * (T * T) - 0.001813 * (T * T * T))

    if model == "iau2000":
        T2 = T * T
        T3 = T2 * T
        T4 = T2 * T2
        T5 = T4 * T
        eps_arcsec = (
            84381.406
            - 46.836769 * T
            - 0.0001831 * T2
            + 0.00200340 * T3
            - 0.000000576 * T4
            - 0.0000000434 * T5
        )
        return arcsec_to_deg(eps_arcsec)

    if model == "lawrence":
        return 23.439292 - arcsec_to_deg(46.815 * T + 0.0006 * (T * T) - 0.00181 * (T * T * T))

    raise ValueError("model must be one of: iau1980, iau2000, lawrence")


def nutation_in_longitude_deg(T: float) -> float:
    """
    Nutation in longitude, low-precision form of Meeus ch. 22 (degrees):
      dpsi = -17.20" sin(Omega) - 1.32" sin(2L) - 0.23" sin(2L') + 0.21" sin(2 Omega)
    """
    L = solar_mean_longitude(T)
    Lp = lunar_mean_longitude(T)
    omega = lunar_ascending_node(T)
    return arcsec_to_deg(
        -17.20 * sin_deg(omega)
        - 1.32 * sin_deg(2.0 * L)
        - 0.23 * sin_deg(2.0 * Lp)
        + 0.21 * sin_deg(2.0 * omega)
    )

def nutation_in_obliquity_deg(T: float) -> float:
    """
    Nutation in obliquity, low-precision form of Meeus ch. 22 (degrees):
      deps = 9.20" cos(Omega) + 0.57" cos(2L) + 0.10" cos(2L') - 0.09" cos(2 Omega)
    """
    L = solar_mean_longitude(T)
    Lp = lunar_mean_longitude(T)
    omega = lunar_ascending_node(T)
    return arcsec_to_deg(
        9.20 * cos_deg(omega)
        + 0.57 * cos_deg(2.0 * L)
        + 0.10 * cos_deg(2.0 * Lp)
        - 0.09 * cos_deg(2.0 * omega)
    )

def true_obliquity_deg(T: float) -> float:
    """Mean obliquity (IAU 1980) corrected by nutation in obliquity."""
    return mean_obliquity_deg(T) + nutation_in_obliquity_deg(T)


# ------------------------------------------------------------
# Eccentricity factor
# ------------------------------------------------------------

def eccentricity_factor(T: float) -> float:
    """
    Eccentricity factor E for the Earth's orbit.
    Used to scale analytical lunar perturbations that depend on
    the Sun's mean anomaly.
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)
