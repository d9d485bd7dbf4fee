# reference/lunar.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.types import EclipticCoordinate, EquatorialCoordinate, LunarPhase
from . import astro_args as aa
from . import solar
from . import time_scales as ts
from .coordinates import ecliptic_to_equatorial
from .trigonometry import asin_deg, atan2_deg, cos_deg, sin_deg


# (d, m, m', f, sum_l in microdegrees, sum_r in metres)
# Meeus, "Astronomical Algorithms" table 47.A
LUNAR_LON_DIST_TERMS = (
    (0, 0, 1, 0, 6288774, -20905355),
    (2, 0, -1, 0, 1274027, -3699111),
    (2, 0, 0, 0, 658314, -2955968),
    (0, 0, 2, 0, 213618, -569925),
    (0, 1, 0, 0, -185116, 48888),
    (0, 0, 0, 2, -114332, -3149),
    (2, 0, -2, 0, 58793, 246158),
    (2, -1, -1, 0, 57066, -152138),
    (2, 0, 1, 0, 53322, -170733),
    (2, -1, 0, 0, 45758, -204586),
    (0, 1, -1, 0, -40923, -129620),
    (1, 0, 0, 0, -34720, 108743),
    (0, 1, 1, 0, -30383, 104755),
    (2, 0, 0, -2, 15327, 10321),
    (0, 0, 1, 2, -12528, 0),
    (0, 0, 1, -2, 10980, 79661),
    (4, 0, -1, 0, 10675, -34782),
    (0, 0, 3, 0, 10034, -23210),
    (4, 0, -2, 0, 8548, -21636),
    (2, 1, -1, 0, -7888, 24208),
    (2, 1, 0, 0, -6766, 30824),
    (1, 0, -1, 0, -5163, -8379),
    (1, 1, 0, 0, 4987, -16675),
    (2, -1, 1, 0, 4036, -12831),
    (2, 0, 2, 0, 3994, -10445),
    (4, 0, 0, 0, 3861, -11650),
    (2, 0, -3, 0, 3665, 14403),
    (0, 1, -2, 0, -2689, -7003),
    (2, 0, -1, 2, -2602, 0),
    (2, -1, -2, 0, 2390, 10056),
    (1, 0, 1, 0, -2348, 6322),
    (2, -2, 0, 0, 2236, -9884),
    (0, 1, 2, 0, -2120, 5751),
    (0, 2, 0, 0, -2069, 0),
    (2, -2, -1, 0, 2048, -4950),
    (2, 0, 1, -2, -1773, 4130),
    (2, 0, 0, 2, -1595, 0),
    (4, -1, -1, 0, 1215, -3958),
    (0, 0, 2, 2, -1110, 0),
    (3, 0, -1, 0, -892, 3258),
    (2, 1, 1, 0, -810, 2616),
    (4, -1, -2, 0, 759, -1897),
    (0, 2, -1, 0, -713, -2117),
    (2, 2, -1, 0, -700, 2354),
    (2, 1, -2, 0, 691, 0),
    (2, -1, 0, -2, 596, 0),
    (4, 0, 1, 0, 549, -1423),
    (0, 0, 4, 0, 537, -1117),
    (4, -1, 0, 0, 520, -1571),
    (1, 0, -2, 0, -487, -1739),
    (2, 1, 0, -2, -399, 0),
    (0, 0, 2, -2, -381, -4421),
    (1, 1, 1, 0, 351, 0),
    (3, 0, -2, 0, -340, 0),
    (4, 0, -3, 0, 330, 0),
    (2, -1, 2, 0, 327, 0),
    (0, 2, 1, 0, -323, 1165),
    (1, 1, -1, 0, 299, 0),
    (2, 0, 3, 0, 294, 0),
    (2, 0, -1, -2, 0, 8752),
)

# (d, m, m', f, sum_b in microdegrees)
# Meeus table 47.B
LUNAR_LAT_TERMS = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
    (0, 0, 0, 3, -1749),
    (0, 1, -1, 1, -1565),
    (1, 0, 0, 1, -1491),
    (0, 1, 1, 1, -1475),
    (0, 1, 1, -1, -1410),
    (0, 1, 0, -1, -1344),
    (1, 0, 0, -1, -1335),
    (0, 0, 3, 1, 1107),
    (4, 0, 0, -1, 1021),
    (4, 0, -1, 1, 833),
    (0, 0, 1, -3, 777),
    (4, 0, -2, 1, 671),
    (2, 0, 0, -3, 607),
    (2, 0, 2, -1, 596),
    (2, -1, 1, -1, 491),
    (2, 0, -2, 1, -451),
    (0, 0, 3, -1, 439),
    (2, 0, 2, 1, 422),
    (2, 0, -3, -1, 421),
    (2, 1, -1, 1, -366),
    (2, 1, 0, 1, -351),
    (4, 0, 0, 1, 331),
    (2, -1, 1, 1, 315),
    (2, -2, 0, -1, 302),
    (0, 0, 1, 3, -283),
    (2, 1, 1, -1, -229),
    (1, 1, 0, -1, 223),
    (1, 1, 0, 1, 223),
    (0, 1, -2, -1, -220),
    (2, 1, -1, -1, -220),
    (1, 0, 1, 1, -185),
    (2, -1, -2, -1, 181),
    (0, 1, 2, 1, -177),
    (4, 0, -2, -1, 176),
    (4, -1, -1, -1, 166),
    (1, 0, 1, -1, -164),
    (4, 0, 1, -1, 132),
    (1, 0, -1, -1, -119),
    (4, -1, 0, -1, 115),
    (2, -2, 0, 1, 107),
)

_MEAN_DISTANCE_KM = 385000.56


def _e_scale(m: int, E: float) -> float:
    if abs(m) == 1:
        return E
    if abs(m) == 2:
        return E * E
    return 1.0


# ============================================================
# Periodic-series model (Meeus ch. 47)
# ============================================================

def ecliptic_position_series(dt: datetime) -> EclipticCoordinate:
    """
    Geometric lunar longitude, latitude and distance from the 60-term
    tables 47.A / 47.B plus the additive Venus, Jupiter and flattening terms.
    """
    T = ts.julian_century(dt)
    fa = aa.fundamental_args(T)
    E = aa.eccentricity_factor(T)
    Lp, D, M, Mp, F = fa.Lp_deg, fa.D_deg, fa.M_deg, fa.Mp_deg, fa.F_deg

    sum_l = 0.0
    sum_r = 0.0
    for d, m, mp, f, coef_l, coef_r in LUNAR_LON_DIST_TERMS:
        arg = d * D + m * M + mp * Mp + f * F
        scale = _e_scale(m, E)
        sum_l += scale * coef_l * sin_deg(arg)
        sum_r += scale * coef_r * cos_deg(arg)

    sum_b = 0.0
    for d, m, mp, f, coef_b in LUNAR_LAT_TERMS:
        arg = d * D + m * M + mp * Mp + f * F
        sum_b += _e_scale(m, E) * coef_b * sin_deg(arg)

    A1 = aa.wrap_deg(119.75 + 131.849 * T)
    A2 = aa.wrap_deg(53.09 + 479264.290 * T)
    A3 = aa.wrap_deg(313.45 + 481266.484 * T)

    sum_l += 3958.0 * sin_deg(A1) + 1962.0 * sin_deg(Lp - F) + 318.0 * sin_deg(A2)
    sum_b += (
        -2235.0 * sin_deg(Lp)
        + 382.0 * sin_deg(A3)
        + 175.0 * sin_deg(A1 - F)
        + 175.0 * sin_deg(A1 + F)
        + 127.0 * sin_deg(Lp - Mp)
        - 115.0 * sin_deg(Lp + Mp)
    )

    return EclipticCoordinate(
        longitude=aa.wrap_deg(Lp + sum_l / 1e6),
        latitude=sum_b / 1e6,
        distance=_MEAN_DISTANCE_KM + sum_r / 1000.0,
    )


def horizontal_parallax(distance_km: float) -> float:
    """Equatorial horizontal parallax, asin(6378.14 / distance) in degrees."""
    return asin_deg(aa.EARTH_EQUATORIAL_RADIUS_KM / distance_km)


def standard_altitude(distance_km: float) -> float:
    """Rise/set altitude of the Moon's upper limb: 0.7275 pi - 0.5667 degrees."""
    return 0.7275 * horizontal_parallax(distance_km) - 0.5667


def approximate_longitude(Lp: float, Mp: float) -> float:
    """Largest-term longitude, L' + 6.289 sin M'."""
    return aa.wrap_deg(Lp + 6.289 * sin_deg(Mp))


def approximate_latitude(F: float) -> float:
    """Largest-term latitude, 5.128 sin F."""
    return 5.128 * sin_deg(F)


# ============================================================
# Closed-form model (Lawrence, "Celestial Calculations" ch. 7)
# ============================================================

def mean_ecliptic_longitude(days: float) -> float:
    """lambda = 218.316433 + 13.176339686 De."""
    return aa.wrap_deg(218.316433 + 13.176339686 * days)


def mean_ascending_node(days: float) -> float:
    """Omega = 125.044522 - 0.0529539 De."""
    return aa.wrap_deg(125.044522 - 0.0529539 * days)


def mean_anomaly_closed_form(mean_lon: float, days: float) -> float:
    """Mm = lambda - 0.1114041 De - 83.353451."""
    return aa.wrap_deg(mean_lon - 0.1114041 * days - 83.353451)


def annual_equation(sun_mean_anomaly: float) -> float:
    return 0.1858 * sin_deg(sun_mean_anomaly)


def evection(mean_lon: float, sun_lon: float, moon_mean_anomaly: float) -> float:
    return 1.2739 * sin_deg(2.0 * (mean_lon - sun_lon) - moon_mean_anomaly)


def corrected_mean_anomaly(moon_mean_anomaly: float, ev: float, ae: float, sun_mean_anomaly: float) -> float:
    """Mm' = Mm + Ev - Ae - 0.37 sin Msun."""
    return moon_mean_anomaly + ev - ae - 0.37 * sin_deg(sun_mean_anomaly)


def corrected_ascending_node(node: float, sun_mean_anomaly: float) -> float:
    return aa.wrap_deg(node - 0.16 * sin_deg(sun_mean_anomaly))


@dataclass(frozen=True)
class ClosedFormTerms:
    """Intermediate quantities of the closed-form lunar model (degrees)."""
    mean_longitude: float
    node: float
    corrected_node: float
    mean_anomaly: float
    annual_equation: float
    evection: float
    corrected_anomaly: float
    equation_of_center: float
    true_longitude: float
    sun_longitude: float


def closed_form_terms(dt: datetime) -> ClosedFormTerms:
    days = ts.days_since_j2000(dt)

    sun_M = solar.mean_anomaly_closed_form(days)
    sun_lon = solar.ecliptic_longitude_closed_form(sun_M, solar.equation_of_center_closed_form(sun_M))

    lam = mean_ecliptic_longitude(days)
    node = mean_ascending_node(days)
    Mm = mean_anomaly_closed_form(lam, days)

    ae = annual_equation(sun_M)
    ev = evection(lam, sun_lon, Mm)
    Mm_c = corrected_mean_anomaly(Mm, ev, ae, sun_M)

    Ec = 6.2886 * sin_deg(Mm_c)
    A4 = 0.214 * sin_deg(2.0 * Mm_c)
    lam_c = lam + ev + Ec - ae + A4
    variation = 0.6583 * sin_deg(2.0 * (lam_c - sun_lon))

    return ClosedFormTerms(
        mean_longitude=lam,
        node=node,
        corrected_node=corrected_ascending_node(node, sun_M),
        mean_anomaly=Mm,
        annual_equation=ae,
        evection=ev,
        corrected_anomaly=Mm_c,
        equation_of_center=Ec,
        true_longitude=aa.wrap_deg(lam_c + variation),
        sun_longitude=sun_lon,
    )


def ecliptic_position_closed_form(dt: datetime) -> EclipticCoordinate:
    """
    Project the true orbital longitude onto the ecliptic:

      lambda_m = Omega' + atan2(sin(lambda_t - Omega') cos i, cos(lambda_t - Omega'))
      beta_m   = asin(sin(lambda_t - Omega') sin i)
      r        = a (1 - e^2) / (1 + e cos(Mm' + Ec))
    """
    t = closed_form_terms(dt)
    i = aa.LUNAR_INCLINATION_DEG
    u = t.true_longitude - t.corrected_node

    lon = aa.wrap_deg(t.corrected_node + atan2_deg(sin_deg(u) * cos_deg(i), cos_deg(u)))
    lat = asin_deg(sin_deg(u) * sin_deg(i))

    e = aa.LUNAR_ECCENTRICITY
    dist = aa.LUNAR_SEMI_MAJOR_AXIS_KM * (1.0 - e * e) / (1.0 + e * cos_deg(t.corrected_anomaly + t.equation_of_center))
    return EclipticCoordinate(longitude=lon, latitude=lat, distance=dist)


def equatorial_position_closed_form(dt: datetime) -> EquatorialCoordinate:
    """Closed-form position rotated by the matching (Lawrence) mean obliquity."""
    eps = aa.mean_obliquity_deg(ts.julian_century(dt), model="lawrence")
    return ecliptic_to_equatorial(dt, ecliptic_position_closed_form(dt), obliquity=eps)


# ============================================================
# Phase
# ============================================================

def phase(dt: datetime, longitude: float, moon: EclipticCoordinate) -> LunarPhase:
    """
    Lunar phase from the Sun-Moon elongation. The Sun comes from the series
    model evaluated at the observer's mean solar time.

      age      = lambda_moon - lambda_sun          in [0,360)
      angle    = 180 - age                         in [0,360)
      fraction = (1 - cos age) / 2
      days     = fraction * synodic month
    """
    J = ts.mean_solar_time(dt, longitude)
    M = solar.mean_anomaly(J)
    sun_lon = solar.ecliptic_longitude(M, solar.equation_of_center(M))

    age = aa.wrap_deg(moon.longitude - sun_lon)
    fraction = (1.0 - cos_deg(age)) / 2.0
    return LunarPhase(
        age=age,
        angle=aa.wrap_deg(180.0 - age),
        days=fraction * aa.SYNODIC_MONTH_DAYS,
        fraction=fraction,
        percent=fraction * 100.0,
    )
