"""Low-precision solar position and the day's twilight instants."""

import datetime
import logging
from typing import Callable

from .astro import altitude_deg, bisect_crossing, sample_times, sun_ra_dec_deg
from .types import Location, SunEvents

logger = logging.getLogger(__name__)

SUNRISE_ALT_DEG = 0.0
CIVIL_ALT_DEG = -6.0
NAUTICAL_ALT_DEG = -12.0
ASTRONOMICAL_ALT_DEG = -18.0

HALF_DAY = datetime.timedelta(hours=12)


def sun_altitude(location: Location, dt: datetime.datetime) -> float:
    ra, dec = sun_ra_dec_deg(dt)
    return altitude_deg(ra, dec, location.latitude_deg, location.longitude_deg, dt)


def local_day_bounds(location: Location, date: datetime.date) -> tuple[datetime.datetime, datetime.datetime]:
    """UTC instants of local midnight opening and closing ``date``."""
    tz = location.tzinfo
    start = datetime.datetime.combine(date, datetime.time(0, 0), tzinfo=tz)
    end = datetime.datetime.combine(date + datetime.timedelta(days=1), datetime.time(0, 0), tzinfo=tz)
    return start.astimezone(datetime.timezone.utc), end.astimezone(datetime.timezone.utc)


def _refine_extremum(
    fn: Callable[[datetime.datetime], float],
    start: datetime.datetime,
    end: datetime.datetime,
    maximize: bool,
    tolerance_s: float = 1.0,
) -> datetime.datetime:
    sign = 1.0 if maximize else -1.0
    lo, hi = start, end
    while (hi - lo).total_seconds() > tolerance_s:
        third = (hi - lo) / 3
        m1 = lo + third
        m2 = hi - third
        if sign * fn(m1) < sign * fn(m2):
            lo = m1
        else:
            hi = m2
    return lo + (hi - lo) / 2


def solar_noon(location: Location, date: datetime.date) -> datetime.datetime:
    """Instant of the sun's highest altitude during the local calendar day."""
    start, end = local_day_bounds(location, date)
    samples = sample_times(start, end, cadence_min=10)
    altitudes = [sun_altitude(location, t) for t in samples]
    best = max(range(len(samples)), key=lambda i: altitudes[i])
    lo = samples[max(0, best - 1)]
    hi = samples[min(len(samples) - 1, best + 1)]
    return _refine_extremum(lambda t: sun_altitude(location, t), lo, hi, maximize=True)


def solar_midnight_before(location: Location, noon: datetime.datetime) -> datetime.datetime:
    approx = noon - HALF_DAY
    window = datetime.timedelta(minutes=30)
    return _refine_extremum(
        lambda t: sun_altitude(location, t),
        approx - window,
        approx + window,
        maximize=False,
    )


def compute_sun_events(location: Location, date: datetime.date) -> SunEvents:
    """Twilight and solar instants for ``date`` at ``location``.

    Each morning event is the threshold crossing between the preceding solar
    midnight and solar noon, and each evening event the crossing between
    solar noon and the following solar midnight. Thresholds the sun never
    crosses that day come back as None.
    """
    noon = solar_noon(location, date)
    midnight = solar_midnight_before(location, noon)

    def alt(t: datetime.datetime) -> float:
        return sun_altitude(location, t)

    def morning(threshold: float) -> datetime.datetime | None:
        return bisect_crossing(alt, noon - HALF_DAY, noon, threshold)

    def evening(threshold: float) -> datetime.datetime | None:
        return bisect_crossing(alt, noon, noon + HALF_DAY, threshold)

    events = SunEvents(
        solar_noon=noon,
        solar_midnight=midnight,
        sunrise=morning(SUNRISE_ALT_DEG),
        sunset=evening(SUNRISE_ALT_DEG),
        civil_dawn=morning(CIVIL_ALT_DEG),
        civil_dusk=evening(CIVIL_ALT_DEG),
        nautical_dawn=morning(NAUTICAL_ALT_DEG),
        nautical_dusk=evening(NAUTICAL_ALT_DEG),
        astronomical_dawn=morning(ASTRONOMICAL_ALT_DEG),
        astronomical_dusk=evening(ASTRONOMICAL_ALT_DEG),
    )
    logger.debug("Sun events for %s at %s: %s", date, location, events)
    return events
