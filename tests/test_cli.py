# tests/test_cli.py

import pytest

from skyevents import cli


def test_epoch(capsys):
    assert cli.main(["epoch", "2021-05-14"]) == 0
    out = capsys.readouterr().out
    assert "JD        = 2459348.500000" in out
    assert "GMST      = 15.46" in out

def test_separation(capsys):
    assert cli.main(["separation", "213.9154", "19.1825", "201.2983", "-11.1614"]) == 0
    assert capsys.readouterr().out.strip().startswith("32.79")

def test_sun_with_explicit_zone(capsys):
    argv = ["sun", "1992-04-12", "--lat", "19.798484", "--lon", "-155.468094", "--tz", "Pacific/Honolulu"]
    assert cli.main(argv) == 0
    out = capsys.readouterr().out
    assert "rise     = 1992-04-12T06:0" in out
    assert "-10:00" in out

def test_star_circumpolar(capsys):
    argv = ["star", "2015-06-06", "--ra", "90", "--dec", "-60", "--lat", "45.250132", "--lon", "0", "--tz", "UTC"]
    assert cli.main(argv) == 0
    out = capsys.readouterr().out
    assert "rise     = -" in out

def test_missing_subcommand():
    with pytest.raises(SystemExit):
        cli.main([])
