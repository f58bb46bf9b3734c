import datetime

from .astro import altitude_deg, bisect_crossing, hour_angle_deg, sample_times
from .enums import TargetVisibility
from .sun import local_day_bounds
from .types import DateInterval, DeepSkyTarget, Location, SunData, TargetInterval

SAMPLE_CADENCE_MIN = 10
# Sidereal rate of hour angle, degrees per hour of clock time.
SIDEREAL_DEG_PER_HOUR = 15.041069
HALF_SIDEREAL_DAY = datetime.timedelta(seconds=43080)


def target_altitude(target: DeepSkyTarget, location: Location, dt: datetime.datetime) -> float:
    return altitude_deg(target.ra_deg, target.dec_deg, location.latitude_deg, location.longitude_deg, dt)


def culmination_altitude(target: DeepSkyTarget, location: Location) -> float:
    return 90.0 - abs(location.latitude_deg - target.dec_deg)


def never_rises(target: DeepSkyTarget, location: Location, limiting_altitude_deg: float = 0.0) -> bool:
    return culmination_altitude(target, location) < limiting_altitude_deg


def visibility_score(
    target: DeepSkyTarget,
    location: Location,
    viewing_interval: DateInterval,
    limiting_altitude_deg: float = 0.0,
) -> float:
    """Fraction of the viewing interval the target spends at or above the floor.

    Sampled every ten minutes across the interval, endpoints included. An
    empty interval scores 0.
    """
    if viewing_interval.is_empty:
        return 0.0
    if never_rises(target, location, limiting_altitude_deg):
        return 0.0
    samples = sample_times(viewing_interval.start, viewing_interval.end, cadence_min=SAMPLE_CADENCE_MIN)
    above = sum(1 for t in samples if target_altitude(target, location, t) >= limiting_altitude_deg)
    return above / len(samples)


def transit_time(target: DeepSkyTarget, location: Location, near: datetime.datetime) -> datetime.datetime:
    """Upper meridian transit closest to ``near``."""
    ha = hour_angle_deg(target.ra_deg, location.longitude_deg, near)
    return near - datetime.timedelta(hours=ha / SIDEREAL_DEG_PER_HOUR)


def meridian_score(target: DeepSkyTarget, location: Location, viewing_interval: DateInterval) -> float:
    """1 for a transit at the middle of the interval, falling to 0 at either edge."""
    if viewing_interval.is_empty:
        return 0.0
    mid = viewing_interval.midpoint
    transit = transit_time(target, location, mid)
    half = viewing_interval.duration.total_seconds() / 2.0
    offset = abs((transit - mid).total_seconds())
    return max(0.0, 1.0 - offset / half)



def culmination_time(target: DeepSkyTarget, location: Location, date: datetime.date) -> datetime.datetime:
    """Upper transit nearest the local midnight closing ``date``."""
    _, midnight = local_day_bounds(location, date)
    return transit_time(target, location, midnight)


def target_interval(
    target: DeepSkyTarget,
    location: Location,
    date: datetime.date,
    limiting_altitude_deg: float = 0.0,
) -> TargetInterval:
    """Whether the target clears the floor on the night of ``date``, and when.

    Rise is searched between the anti-culmination and the culmination, set
    between the culmination and half a sidereal day later.
    """
    culmination = culmination_time(target, location, date)
    anti_culmination = culmination - HALF_SIDEREAL_DAY

    def alt(t: datetime.datetime) -> float:
        return target_altitude(target, location, t)

    if alt(culmination) <= limiting_altitude_deg:
        return TargetInterval(TargetVisibility.NEVER, culmination, anti_culmination)
    if alt(anti_culmination) >= limiting_altitude_deg:
        return TargetInterval(TargetVisibility.ALWAYS, culmination, anti_culmination)

    next_anti = culmination + HALF_SIDEREAL_DAY
    # Falls back to the lower culmination when the floor sits right on it.
    rise = bisect_crossing(alt, anti_culmination, culmination, limiting_altitude_deg) or anti_culmination
    set_ = bisect_crossing(alt, culmination, next_anti, limiting_altitude_deg) or next_anti
    return TargetInterval(TargetVisibility.SOMETIMES, culmination, anti_culmination, DateInterval(rise, set_))


def season_score(target: DeepSkyTarget, location: Location, sun_data: SunData) -> float:
    """1 when the target culminates at solar midnight, 0 when it culminates twelve hours away."""
    midnight = sun_data.solar_midnight
    culmination = transit_time(target, location, midnight)
    offset_days = abs((culmination - midnight).total_seconds()) / 86400.0
    return max(0.0, 1.0 - offset_days / 0.5)
