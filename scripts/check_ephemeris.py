"""
Compare the planner's low-precision sun and moon altitudes against astropy.

Prints the altitude difference at hourly steps across one day for a site,
plus the twilight instants computed for that day.

Requires the optional tools dependencies (install with `pip install -e .[tools]`).
"""
import argparse
import datetime
import sys

import astropy.units as u
import numpy as np
from astropy.coordinates import AltAz, EarthLocation, get_body, get_sun
from astropy.time import Time

from deepsky.planner.moon import moon_altitude
from deepsky.planner.sun import compute_sun_events, sun_altitude
from deepsky.planner.types import Location


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--lat", type=float, default=41.833)
    parser.add_argument("--lon", type=float, default=-87.872)
    parser.add_argument("--tz", default="America/Chicago")
    parser.add_argument("--date", default="2023-06-21")
    args = parser.parse_args()

    location = Location.current(args.lat, args.lon, args.tz)
    date = datetime.date.fromisoformat(args.date)
    site = EarthLocation(lat=args.lat * u.deg, lon=args.lon * u.deg)

    start = datetime.datetime.combine(date, datetime.time(0, 0), tzinfo=location.tzinfo)
    instants = [start + datetime.timedelta(hours=h) for h in range(25)]
    times = Time([t.astimezone(datetime.timezone.utc) for t in instants])
    frame = AltAz(obstime=times, location=site)
    sun_ref = get_sun(times).transform_to(frame).alt.deg
    moon_ref = get_body("moon", times, site).transform_to(frame).alt.deg

    sun_ours = np.array([sun_altitude(location, t) for t in instants])
    moon_ours = np.array([moon_altitude(location, t) for t in instants])

    print(f"{'local':16}  {'sun':>7}  {'d_sun':>6}  {'moon':>7}  {'d_moon':>6}")
    for t, s, ds, m, dm in zip(instants, sun_ours, sun_ours - sun_ref, moon_ours, moon_ours - moon_ref):
        print(f"{t:%Y-%m-%d %H:%M}  {s:7.2f}  {ds:6.2f}  {m:7.2f}  {dm:6.2f}")
    print(f"max |d_sun|  = {np.max(np.abs(sun_ours - sun_ref)):.3f} deg")
    print(f"max |d_moon| = {np.max(np.abs(moon_ours - moon_ref)):.3f} deg")

    events = compute_sun_events(location, date)
    print()
    for field in ("astronomical_dawn", "sunrise", "solar_noon", "sunset", "astronomical_dusk"):
        value = getattr(events, field)
        shown = value.astimezone(location.tzinfo).strftime("%H:%M:%S") if value else "--"
        print(f"{field:18} {shown}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
