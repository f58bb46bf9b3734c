"""Moon phase, position and the overnight "moon is up" interval."""

import datetime
import logging
import math

from .astro import altitude_deg, bisect_crossing, moon_ra_dec_deg, positive_mod, sample_times
from .sun import local_day_bounds
from .types import DateInterval, Location, MoonData, MoonEvents, SunData

logger = logging.getLogger(__name__)

REFERENCE_NEW_MOON = datetime.datetime(2000, 1, 6, 18, 14, tzinfo=datetime.timezone.utc)
SYNODIC_MONTH_DAYS = 29.53058770576
ILLUMINATION_PERIOD_DAYS = 29.86
MOON_HORIZON_DEG = 0.0

_PHASE_NAMES = (
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
)


def moon_age_days(dt: datetime.datetime) -> float:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    elapsed = (dt - REFERENCE_NEW_MOON).total_seconds() / 86400.0
    return positive_mod(elapsed, SYNODIC_MONTH_DAYS)


def moon_illumination(dt: datetime.datetime) -> float:
    age = moon_age_days(dt)
    return math.sin(math.pi * age / ILLUMINATION_PERIOD_DAYS) ** 2


def moon_phase_name(dt: datetime.datetime) -> str:
    eighth = SYNODIC_MONTH_DAYS / 8.0
    index = int((moon_age_days(dt) + eighth / 2.0) // eighth) % 8
    return _PHASE_NAMES[index]


def moon_altitude(location: Location, dt: datetime.datetime) -> float:
    ra, dec = moon_ra_dec_deg(dt)
    return altitude_deg(ra, dec, location.latitude_deg, location.longitude_deg, dt)


def compute_moon_events(location: Location, date: datetime.date) -> MoonEvents:
    """First moonrise and moonset within the local calendar day, if any."""
    start, end = local_day_bounds(location, date)
    samples = sample_times(start, end, cadence_min=10)

    def alt(t: datetime.datetime) -> float:
        return moon_altitude(location, t)

    altitudes = [alt(t) for t in samples]
    rise = None
    set_ = None
    for i in range(len(samples) - 1):
        above_before = altitudes[i] >= MOON_HORIZON_DEG
        above_after = altitudes[i + 1] >= MOON_HORIZON_DEG
        if above_before == above_after:
            continue
        crossing = bisect_crossing(alt, samples[i], samples[i + 1], MOON_HORIZON_DEG)
        if not above_before and rise is None:
            rise = crossing
        elif above_before and set_ is None:
            set_ = crossing
    return MoonEvents(rise=rise, set=set_)


def moon_interval(today: MoonEvents, tomorrow: MoonEvents, sun_data: SunData) -> DateInterval:
    """Single rise-to-set span of the moon overlapping tonight.

    The three cases are evaluated in order and each assumes the previous
    ones did not match.
    """
    reference = sun_data.astronomical_twilight_begin

    if today.set is None or (today.rise is not None and today.set < today.rise):
        # Today's set (if any) closes the previous up-period; tonight's moon
        # rises today and sets tomorrow.
        start, end = today.rise, tomorrow.set
    elif today.rise is None or (today.rise < today.set and today.rise < reference):
        # Today's rise-set pair is over before the dark hours begin.
        start, end = tomorrow.rise, tomorrow.set
    else:
        start, end = today.rise, today.set

    if start is None:
        return DateInterval.at(reference)
    if end is None:
        return DateInterval(start, max(start, sun_data.night_interval.end))
    return DateInterval(start, max(start, end))


def assemble_moon_data(today: MoonEvents, tomorrow: MoonEvents, sun_data: SunData) -> MoonData:
    interval = moon_interval(today, tomorrow, sun_data)
    representative = today.rise or today.set or sun_data.solar_midnight
    if today.illuminated is not None:
        illuminated = today.illuminated
    else:
        illuminated = moon_illumination(representative)
    illuminated = max(0.0, min(1.0, illuminated))
    phase = today.phase or moon_phase_name(representative)
    logger.debug("Moon %s (%.2f) up %s -> %s", phase, illuminated, interval.start, interval.end)
    return MoonData(phase=phase, illuminated=illuminated, moon_interval=interval)
