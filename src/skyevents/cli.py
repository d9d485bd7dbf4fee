from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import sys
from datetime import datetime, timezone
from typing import Optional


def _parse_instant(s: str) -> datetime:
    """YYYY-MM-DD or ISO 8601; naive values are taken as UTC."""
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _observer_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, required=True, help="Latitude, degrees north")
    p.add_argument("--lon", type=float, required=True, help="Longitude, degrees east")
    p.add_argument("--elevation", type=float, default=0.0, help="Metres above sea level")
    p.add_argument("--tz", default=None, help="IANA zone (default: looked up from --lat/--lon)")


def _observer_and_zone(args):
    from skyevents.core.timezones import load_timezone, timezone_at
    from skyevents.core.types import Observer

    obs = Observer(latitude=args.lat, longitude=args.lon, elevation=args.elevation)
    tz = load_timezone(args.tz) if args.tz else timezone_at(args.lat, args.lon)
    return obs, tz


def _parse_local(s: str, tz) -> datetime:
    """YYYY-MM-DD or ISO 8601; naive values are wall-clock time in tz."""
    from skyevents.core.timezones import localize

    dt = datetime.fromisoformat(s)
    return localize(dt, tz) if dt.tzinfo is None else dt


def _fmt(dt: Optional[datetime]) -> str:
    return dt.isoformat(timespec="seconds") if dt is not None else "-"


def _print_transit(label: str, r) -> None:
    print(f"{label}")
    print(f"  rise     = {_fmt(r.rise)}")
    print(f"  maximum  = {_fmt(r.maximum)}")
    print(f"  set      = {_fmt(r.set)}")
    print(f"  duration = {r.duration}")


def cmd_epoch(argv: list[str]) -> int:
    from skyevents.reference import time_scales as ts

    p = argparse.ArgumentParser(prog="skyevents epoch", description="Print Julian Date, century and sidereal times.")
    p.add_argument("when", help="YYYY-MM-DD or ISO 8601 instant (UTC if naive)")
    p.add_argument("--lon", type=float, default=0.0, help="Longitude, degrees east")
    args = p.parse_args(argv)

    dt = _parse_instant(args.when)
    print(f"JD        = {ts.julian_date(dt):.6f}")
    print(f"T         = {ts.julian_century(dt):.12f}")
    print(f"J*        = {ts.mean_solar_time(dt, args.lon):.6f}")
    print(f"GMST      = {ts.greenwich_sidereal_time(dt):.7f} h")
    print(f"GAST      = {ts.apparent_greenwich_sidereal_time(dt):.7f} h")
    print(f"LMST      = {ts.local_sidereal_time(dt, args.lon):.7f} h")
    return 0


def cmd_sun(argv: list[str]) -> int:
    import skyevents

    p = argparse.ArgumentParser(prog="skyevents sun", description="Sunrise, solar transit and sunset.")
    p.add_argument("when", help="YYYY-MM-DD or ISO 8601 instant (observer-local if naive)")
    _observer_args(p)
    args = p.parse_args(argv)

    obs, tz = _observer_and_zone(args)
    dt = _parse_local(args.when, tz)
    _print_transit("Sun", skyevents.sun_events(dt, obs, tz=tz))
    hz = skyevents.body_position("sun", dt, obs)
    print(f"  altitude = {hz.altitude:.4f}  azimuth = {hz.azimuth if hz.azimuth is None else round(hz.azimuth, 4)}")
    return 0


def cmd_twilight(argv: list[str]) -> int:
    import skyevents

    p = argparse.ArgumentParser(prog="skyevents twilight", description="Evening-to-morning twilight intervals.")
    p.add_argument("when", help="YYYY-MM-DD or ISO 8601 instant (observer-local if naive)")
    _observer_args(p)
    p.add_argument("--kind", choices=["civil", "nautical", "astronomical", "all"], default="all")
    args = p.parse_args(argv)

    obs, tz = _observer_and_zone(args)
    dt = _parse_local(args.when, tz)
    kinds = ["civil", "nautical", "astronomical"] if args.kind == "all" else [args.kind]
    for kind in kinds:
        r = skyevents.twilight(dt, obs, kind, tz=tz)
        print(f"{kind:<13} from {_fmt(r.start)}  until {_fmt(r.end)}  ({r.duration if r.duration is not None else '-'})")
    return 0


def cmd_moon(argv: list[str]) -> int:
    import skyevents
    from skyevents.core.config import EventSearchConfig

    p = argparse.ArgumentParser(prog="skyevents moon", description="Moonrise, moonset, position and phase.")
    p.add_argument("when", help="YYYY-MM-DD or ISO 8601 instant (observer-local if naive)")
    _observer_args(p)
    p.add_argument("--model", choices=["series", "closed-form"], default="closed-form")
    args = p.parse_args(argv)

    obs, tz = _observer_and_zone(args)
    dt = _parse_local(args.when, tz)
    _print_transit("Moon", skyevents.moon_events(dt, obs, tz=tz, config=EventSearchConfig(lunar_model=args.model)))

    hz = skyevents.body_position("moon", dt, obs, model=args.model)
    ph = skyevents.moon_phase(dt, obs, model=args.model)
    print(f"  altitude = {hz.altitude:.4f}  azimuth = {hz.azimuth if hz.azimuth is None else round(hz.azimuth, 4)}")
    print(f"  phase    : age={ph.age:.3f} deg  days={ph.days:.2f}  illuminated={ph.percent:.1f}%")
    return 0


def cmd_star(argv: list[str]) -> int:
    import skyevents

    p = argparse.ArgumentParser(prog="skyevents star", description="Rise, transit and set of a fixed RA/Dec.")
    p.add_argument("when", help="YYYY-MM-DD or ISO 8601 instant (its calendar date is used)")
    p.add_argument("--ra", type=float, required=True, help="Right ascension, degrees")
    p.add_argument("--dec", type=float, required=True, help="Declination, degrees")
    _observer_args(p)
    args = p.parse_args(argv)

    obs, tz = _observer_and_zone(args)
    eq = skyevents.EquatorialCoordinate(right_ascension=args.ra, declination=args.dec)
    _print_transit(f"RA {args.ra} / Dec {args.dec}", skyevents.star_events(_parse_local(args.when, tz), eq, obs, tz=tz))
    return 0


def cmd_separation(argv: list[str]) -> int:
    from skyevents.core.types import EquatorialCoordinate
    from skyevents.reference.coordinates import angular_separation

    p = argparse.ArgumentParser(prog="skyevents separation", description="Great-circle distance between two RA/Dec pairs.")
    p.add_argument("ra1", type=float)
    p.add_argument("dec1", type=float)
    p.add_argument("ra2", type=float)
    p.add_argument("dec2", type=float)
    args = p.parse_args(argv)

    a = EquatorialCoordinate(args.ra1, args.dec1)
    b = EquatorialCoordinate(args.ra2, args.dec2)
    print(f"{angular_separation(a, b):.6f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="skyevents")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("epoch", help="Julian Date, century and sidereal times.")
    sub.add_parser("sun", help="Sunrise, solar transit and sunset.")
    sub.add_parser("twilight", help="Civil, nautical and astronomical twilight.")
    sub.add_parser("moon", help="Moonrise, moonset, position and phase.")
    sub.add_parser("star", help="Rise, transit and set of a fixed RA/Dec.")
    sub.add_parser("separation", help="Angular separation of two RA/Dec pairs.")
    sub.add_parser("validate-ref", help="Compare analytical models to a JPL ephemeris (needs extras).")

    args, rest = p.parse_known_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.cmd == "epoch":
        return cmd_epoch(rest)

    if args.cmd == "sun":
        return cmd_sun(rest)

    if args.cmd == "twilight":
        return cmd_twilight(rest)

    if args.cmd == "moon":
        return cmd_moon(rest)

    if args.cmd == "star":
        return cmd_star(rest)

    if args.cmd == "separation":
        return cmd_separation(rest)

    if args.cmd == "validate-ref":
        return _run_module_main("skyevents.diagnostics.validate_reference", rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
