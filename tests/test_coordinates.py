# tests/test_coordinates.py

import random
from datetime import datetime, timedelta, timezone

import pytest

from skyevents.core.types import EclipticCoordinate, EquatorialCoordinate, HorizontalCoordinate, Observer
from skyevents.reference import coordinates as co
from skyevents.reference import time_scales as ts

HONOLULU = Observer(latitude=19.798484, longitude=-155.468094, elevation=0.0)
BETELGEUSE = EquatorialCoordinate(right_ascension=88.7929583, declination=7.4070639)


@pytest.mark.parametrize("dt, expected", [
    (datetime(2021, 5, 14, tzinfo=timezone.utc), 347.698366),
    (datetime(1992, 4, 12, tzinfo=timezone.utc), 316.180845),
])
def test_hour_angle_of_betelgeuse(dt, expected):
    lst = ts.local_sidereal_time(dt, HONOLULU.longitude)
    assert co.hour_angle(BETELGEUSE.right_ascension, lst) == pytest.approx(expected, abs=1e-4)

def test_hour_angle_is_normalized():
    assert co.hour_angle(350.0, 1.0) == pytest.approx(25.0)
    assert co.hour_angle(10.0, 0.0) == pytest.approx(350.0)
    assert 0.0 <= co.hour_angle(0.0, 0.0) < 360.0

def test_betelgeuse_altitude_azimuth():
    dt = datetime(2021, 5, 14, tzinfo=timezone.utc)
    hz = co.equatorial_to_horizontal(dt, HONOLULU, BETELGEUSE)
    assert hz.altitude == pytest.approx(72.800588, abs=1e-3)
    assert hz.azimuth == pytest.approx(134.396672, abs=1e-3)

def test_meeus_example_13a_pollux():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 13.a (inverted).
    Pollux: lambda = 113.215630, beta = 6.684170, eps = 23.4392911
    -> alpha = 116.328942, delta = 28.026183
    """
    dt = datetime(2000, 1, 1, 12, tzinfo=timezone.utc)
    ec = EclipticCoordinate(longitude=113.215630, latitude=6.684170)
    eq = co.ecliptic_to_equatorial(dt, ec, obliquity=23.4392911)
    assert eq.right_ascension == pytest.approx(116.328942, abs=1e-5)
    assert eq.declination == pytest.approx(28.026183, abs=1e-5)

def test_meeus_example_47a_moon_to_equatorial():
    """
    Meeus 47.a: geometric lambda = 133.162655, beta = -3.229126 on 1992-04-12.
    Meeus (apparent, with nutation in longitude) gives alpha = 134.688470, delta = 13.768368.
    """
    dt = datetime(1992, 4, 12, tzinfo=timezone.utc)
    ec = EclipticCoordinate(longitude=133.162655, latitude=-3.229126)
    eq = co.ecliptic_to_equatorial(dt, ec)
    assert eq.right_ascension == pytest.approx(134.688470, abs=0.02)
    assert eq.declination == pytest.approx(13.768368, abs=0.01)

def test_ecliptic_to_equatorial_quadrants():
    dt = datetime(2000, 1, 1, 12, tzinfo=timezone.utc)
    for lon in (10.0, 100.0, 190.0, 280.0, 359.5):
        eq = co.ecliptic_to_equatorial(dt, EclipticCoordinate(longitude=lon, latitude=0.0))
        # RA stays in the same quadrant as the ecliptic longitude near the equinoxes
        assert abs(((eq.right_ascension - lon) + 180.0) % 360.0 - 180.0) < 3.0
        assert 0.0 <= eq.right_ascension < 360.0

def test_equatorial_horizontal_round_trip():
    rng = random.Random(42)
    base = datetime(1990, 1, 1, tzinfo=timezone.utc)
    checked = 0
    for _ in range(500):
        dt = base + timedelta(seconds=rng.uniform(0, 40 * 365.25 * 86400))
        obs = Observer(latitude=rng.uniform(-80.0, 80.0), longitude=rng.uniform(-180.0, 180.0))
        eq = EquatorialCoordinate(right_ascension=rng.uniform(0.0, 360.0), declination=rng.uniform(-80.0, 80.0))

        hz = co.equatorial_to_horizontal(dt, obs, eq)
        back = co.horizontal_to_equatorial(dt, obs, hz)
        if back is None:
            continue
        checked += 1
        assert co.angular_separation(eq, back) < 1e-5
        assert back.declination == pytest.approx(eq.declination, abs=1e-6)
    assert checked > 450

def test_azimuth_undefined_at_zenith():
    dt = datetime(2021, 5, 14, tzinfo=timezone.utc)
    obs = Observer(latitude=0.0, longitude=10.0)
    lst = ts.local_sidereal_time(dt, obs.longitude)
    overhead = EquatorialCoordinate(right_ascension=lst * 15.0, declination=0.0)

    hz = co.equatorial_to_horizontal(dt, obs, overhead)
    assert hz.altitude == pytest.approx(90.0, abs=1e-9)
    assert hz.azimuth is None
    assert co.horizontal_to_equatorial(dt, obs, hz) is None

def test_azimuth_undefined_at_pole():
    dt = datetime(2021, 5, 14, tzinfo=timezone.utc)
    obs = Observer(latitude=90.0, longitude=0.0)
    hz = co.equatorial_to_horizontal(dt, obs, BETELGEUSE)
    # From the pole, altitude equals declination
    assert hz.altitude == pytest.approx(BETELGEUSE.declination, abs=1e-9)
    assert hz.azimuth is None

def test_altitude_in_range():
    rng = random.Random(42)
    dt = datetime(2015, 6, 6, tzinfo=timezone.utc)
    for _ in range(300):
        obs = Observer(latitude=rng.uniform(-90.0, 90.0), longitude=rng.uniform(-180.0, 180.0))
        eq = EquatorialCoordinate(rng.uniform(0.0, 360.0), rng.uniform(-90.0, 90.0))
        hz = co.equatorial_to_horizontal(dt, obs, eq)
        assert -90.0 <= hz.altitude <= 90.0
        if hz.azimuth is not None:
            assert 0.0 <= hz.azimuth < 360.0

def test_angular_separation_meeus_example_17a():
    """Arcturus to Spica, Meeus Example 17.a: 32.7930 degrees."""
    arcturus = EquatorialCoordinate(213.9154, 19.1825)
    spica = EquatorialCoordinate(201.2983, -11.1614)
    assert co.angular_separation(arcturus, spica) == pytest.approx(32.7930, abs=1e-3)

def test_angular_separation_properties():
    rng = random.Random(42)
    for _ in range(300):
        a = EquatorialCoordinate(rng.uniform(0.0, 360.0), rng.uniform(-90.0, 90.0))
        b = EquatorialCoordinate(rng.uniform(0.0, 360.0), rng.uniform(-90.0, 90.0))
        assert co.angular_separation(a, a) == 0.0
        assert co.angular_separation(a, b) == pytest.approx(co.angular_separation(b, a), abs=1e-9)
        assert 0.0 <= co.angular_separation(a, b) <= 180.0

def test_angular_separation_extremes():
    assert co.angular_separation(EquatorialCoordinate(0.0, 90.0), EquatorialCoordinate(0.0, -90.0)) == pytest.approx(180.0)
    assert co.angular_separation(EquatorialCoordinate(0.0, 0.0), EquatorialCoordinate(90.0, 0.0)) == pytest.approx(90.0)
    assert co.angular_separation(EquatorialCoordinate(0.0, 0.0), EquatorialCoordinate(180.0, 0.0)) == pytest.approx(180.0)
    tiny = co.angular_separation(EquatorialCoordinate(10.0, 20.0), EquatorialCoordinate(10.0, 20.0 + 1e-9))
    assert tiny == pytest.approx(1e-9, rel=1e-3)

def test_angular_separation_other_frames():
    a = EclipticCoordinate(10.0, 0.0)
    b = EclipticCoordinate(40.0, 0.0)
    assert co.angular_separation(a, b) == pytest.approx(30.0)
    h1 = HorizontalCoordinate(altitude=0.0, azimuth=0.0)
    h2 = HorizontalCoordinate(altitude=90.0, azimuth=123.0)
    assert co.angular_separation(h1, h2) == pytest.approx(90.0)

def test_angular_separation_rejects_mixed_frames():
    with pytest.raises(TypeError):
        co.angular_separation(EquatorialCoordinate(0.0, 0.0), EclipticCoordinate(0.0, 0.0))
    with pytest.raises(ValueError):
        co.angular_separation(HorizontalCoordinate(90.0, None), HorizontalCoordinate(0.0, 0.0))
