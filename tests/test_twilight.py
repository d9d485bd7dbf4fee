# tests/test_twilight.py

from datetime import datetime, timedelta

import pytest
import pytz

from skyevents.core.config import EventSearchConfig
from skyevents.core.types import Observer
from skyevents.engines.twilight import twilight

HST = pytz.timezone("Pacific/Honolulu")
HONOLULU = Observer(latitude=19.798484, longitude=-155.468094)
WHEN = HST.localize(datetime(1992, 4, 12, 12))


def _near(actual, expected, tolerance):
    return abs(actual - expected) <= tolerance


def test_civil_twilight_honolulu():
    res = twilight(WHEN, HONOLULU, "civil", tz=HST)
    assert res.kind == "civil"
    assert _near(res.start, HST.localize(datetime(1992, 4, 12, 19, 1, 21)), timedelta(minutes=5))
    assert _near(res.end, HST.localize(datetime(1992, 4, 13, 5, 42, 11)), timedelta(minutes=5))
    assert res.duration == res.end - res.start
    assert res.start.date().day == 12
    assert res.end.date().day == 13

def test_twilight_kinds_are_nested():
    civil = twilight(WHEN, HONOLULU, "civil", tz=HST)
    nautical = twilight(WHEN, HONOLULU, "nautical", tz=HST)
    astro = twilight(WHEN, HONOLULU, "astronomical", tz=HST)

    # Deeper twilight starts later in the evening and ends earlier in the morning
    assert civil.start < nautical.start < astro.start
    assert civil.end > nautical.end > astro.end
    assert civil.duration > nautical.duration > astro.duration

def test_series_sun_agrees_with_closed_form():
    a = twilight(WHEN, HONOLULU, "nautical", tz=HST)
    b = twilight(WHEN, HONOLULU, "nautical", tz=HST, config=EventSearchConfig(solar_model="series"))
    assert _near(a.start, b.start, timedelta(minutes=2))
    assert _near(a.end, b.end, timedelta(minutes=2))

def test_sun_never_low_enough():
    # Midsummer at 60N: the Sun stays above -18 deg all night
    obs = Observer(latitude=60.0, longitude=10.75)
    tz = pytz.timezone("Europe/Oslo")
    res = twilight(tz.localize(datetime(2015, 6, 21, 12)), obs, "astronomical", tz=tz)
    assert res.start is None
    assert res.end is None
    assert res.duration is None

def test_unknown_kind():
    with pytest.raises(ValueError):
        twilight(WHEN, HONOLULU, "golden", tz=HST)

def test_naive_datetime_rejected():
    with pytest.raises(ValueError):
        twilight(datetime(1992, 4, 12, 12), HONOLULU, "civil", tz=HST)
