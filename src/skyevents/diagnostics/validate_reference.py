#!/usr/bin/env python3
from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import numpy as np

from skyevents.core.errors import ModelUnavailableError
from skyevents.reference import astro_args as aa
from skyevents.reference import lunar, solar


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise ModelUnavailableError('Need matplotlib. Install: pip install "skyevents[diagnostics]"') from e


def _need_skyfield():
    try:
        from skyfield.api import load
        return load
    except ImportError as e:
        raise ModelUnavailableError('Ephemeris support requires: pip install "skyevents[ephemeris]"') from e


def _parse_ymd(s: str) -> datetime:
    y, m, d = map(int, s.split("-"))
    return datetime(y, m, d, tzinfo=timezone.utc)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate analytical solar/lunar models against a JPL ephemeris.")
    p.add_argument("--start", default="1990-01-01", help="YYYY-MM-DD (UTC)")
    p.add_argument("--end", default="2030-01-01", help="YYYY-MM-DD (UTC)")
    p.add_argument("--step-days", type=float, default=5.0)
    p.add_argument("--bsp", default="de421.bsp", help="SPK kernel loaded through skyfield")
    p.add_argument("--out-png", default="reference_validation.png")
    p.add_argument("--no-plot", action="store_true")
    args = p.parse_args(argv)

    load = _need_skyfield()

    start = _parse_ymd(args.start)
    end = _parse_ymd(args.end)
    if end <= start:
        raise ValueError("--end must be after --start")

    step = timedelta(days=args.step_days)
    n = int((end - start) / step) + 1
    dts = [start + k * step for k in range(n)]

    print(f"Loading {args.bsp}...")
    ts = load.timescale()
    eph = load(args.bsp)
    earth, sun, moon = eph["earth"], eph["sun"], eph["moon"]
    t = ts.from_datetimes(dts)

    _, sun_lon, _ = earth.at(t).observe(sun).apparent().ecliptic_latlon(epoch="date")
    moon_lat, moon_lon, moon_dist = earth.at(t).observe(moon).apparent().ecliptic_latlon(epoch="date")

    ref_sun = sun_lon.degrees
    ref_moon_lon = moon_lon.degrees
    ref_moon_lat = moon_lat.degrees
    ref_moon_km = moon_dist.km

    print(f"Validating {n} points from {args.start} to {args.end}...")

    def residuals(model_fn, ref_lon):
        out = np.empty(n)
        for i, dt in enumerate(dts):
            out[i] = aa.wrap180(model_fn(dt).longitude - ref_lon[i]) * 3600.0
        return out

    series = {
        "Sun (series)": residuals(solar.ecliptic_position_series, ref_sun),
        "Sun (closed form)": residuals(solar.ecliptic_position_closed_form, ref_sun),
        "Moon (series)": residuals(lunar.ecliptic_position_series, ref_moon_lon),
        "Moon (closed form)": residuals(lunar.ecliptic_position_closed_form, ref_moon_lon),
    }
    lat_err = np.array([lunar.ecliptic_position_series(dt).latitude for dt in dts]) - ref_moon_lat
    dist_err = np.array([lunar.ecliptic_position_series(dt).distance for dt in dts]) - ref_moon_km

    print("Longitude residuals (arcsec):")
    for label, err in series.items():
        rms = float(np.sqrt(np.mean(err * err)))
        print(f"  {label:<20} rms={rms:10.2f}  max={float(np.max(np.abs(err))):10.2f}")
    print(f"  Moon latitude (series) rms={float(np.sqrt(np.mean(lat_err ** 2))) * 3600.0:.2f} arcsec")
    print(f"  Moon distance (series) max={float(np.max(np.abs(dist_err))):.1f} km")

    if args.no_plot:
        return 0

    plt = _need_matplotlib()
    years = np.array([dt.year + (dt.timetuple().tm_yday - 1) / 365.25 for dt in dts])

    fig, axs = plt.subplots(len(series), 1, figsize=(12, 10), sharex=True)
    for ax, (label, err) in zip(axs, series.items()):
        ax.scatter(years, err, s=1, alpha=0.5)
        ax.set_title(f"{label} longitude error (analytical - ephemeris)")
        ax.set_ylabel("Error (arcsec)")
        ax.grid(True, alpha=0.3)
    axs[-1].set_xlabel("Year")

    plt.suptitle(f"Reference model validation against {args.bsp} ({args.start} to {args.end})", fontsize=14)
    plt.tight_layout()
    plt.savefig(args.out_png, dpi=200)
    print(f"Validation complete. Plot saved to {args.out_png}")

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
