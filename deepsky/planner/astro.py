import datetime
import math
from typing import Callable

J2000_EPOCH = datetime.datetime(2000, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)
SECONDS_PER_DAY = 86400.0


def _ensure_utc(dt: datetime.datetime) -> datetime.datetime:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def positive_mod(value: float, divisor: float) -> float:
    """``value mod divisor`` folded into ``[0, divisor)``."""
    result = math.fmod(value, divisor)
    if result < 0:
        result += divisor
    if result >= divisor:
        result -= divisor
    return result


def days_since_j2000(dt: datetime.datetime) -> float:
    return (_ensure_utc(dt) - J2000_EPOCH).total_seconds() / SECONDS_PER_DAY


def utc_hours(dt: datetime.datetime) -> float:
    dt = _ensure_utc(dt)
    return dt.hour + (dt.minute + (dt.second + dt.microsecond / 1e6) / 60.0) / 60.0


def local_sidereal_time_deg(dt: datetime.datetime, longitude_deg: float) -> float:
    d = days_since_j2000(dt)
    return positive_mod(100.46 + 0.985647 * d + longitude_deg + 15.0 * utc_hours(dt), 360.0)


def hour_angle_deg(ra_deg: float, longitude_deg: float, dt: datetime.datetime) -> float:
    """Hour angle in ``[-180, 180)``; negative east of the meridian."""
    ha = positive_mod(local_sidereal_time_deg(dt, longitude_deg) - ra_deg, 360.0)
    if ha >= 180.0:
        ha -= 360.0
    return ha


def altitude_deg(
    ra_deg: float,
    dec_deg: float,
    latitude_deg: float,
    longitude_deg: float,
    dt: datetime.datetime,
) -> float:
    ha = math.radians(local_sidereal_time_deg(dt, longitude_deg) - ra_deg)
    dec = math.radians(dec_deg)
    lat = math.radians(latitude_deg)
    sin_alt = math.sin(dec) * math.sin(lat) + math.cos(dec) * math.cos(lat) * math.cos(ha)
    return math.degrees(math.asin(max(-1.0, min(1.0, sin_alt))))


def sun_ra_dec_deg(dt: datetime.datetime) -> tuple[float, float]:
    d = days_since_j2000(dt)
    l = positive_mod(280.461 + 0.985647 * d, 360.0)
    g = math.radians(positive_mod(357.528 + 0.985647 * d, 360.0))
    lam = math.radians(l + 1.915 * math.sin(g) + 0.02 * math.sin(2 * g))
    eps = math.radians(23.439 - 0.0000004 * d)
    ra = math.atan2(math.cos(eps) * math.sin(lam), math.cos(lam))
    dec = math.asin(math.sin(eps) * math.sin(lam))
    return positive_mod(math.degrees(ra), 360.0), math.degrees(dec)


def moon_ra_dec_deg(dt: datetime.datetime) -> tuple[float, float]:
    d = days_since_j2000(dt)
    l = math.radians(positive_mod(218.316 + 13.176396 * d, 360.0))
    m = math.radians(positive_mod(134.963 + 13.064993 * d, 360.0))
    f = math.radians(positive_mod(93.272 + 13.229350 * d, 360.0))
    lam = l + math.radians(6.289) * math.sin(m)
    beta = math.radians(5.128) * math.sin(f)
    eps = math.radians(23.439 - 0.0000004 * d)
    sin_dec = math.sin(beta) * math.cos(eps) + math.cos(beta) * math.sin(eps) * math.sin(lam)
    dec = math.asin(max(-1.0, min(1.0, sin_dec)))
    y = math.sin(lam) * math.cos(eps) - math.tan(beta) * math.sin(eps)
    x = math.cos(lam)
    ra = math.atan2(y, x)
    return positive_mod(math.degrees(ra), 360.0), math.degrees(dec)


def sample_times(
    start: datetime.datetime,
    end: datetime.datetime,
    cadence_min: int,
) -> list[datetime.datetime]:
    total_min = (end - start).total_seconds() / 60.0
    if total_min <= cadence_min:
        return [start, end]
    steps = max(1, math.ceil(total_min / cadence_min))
    delta = (end - start) / steps
    return [start + delta * i for i in range(steps + 1)]


def bisect_crossing(
    altitude_fn: Callable[[datetime.datetime], float],
    start: datetime.datetime,
    end: datetime.datetime,
    threshold_deg: float,
    tolerance_s: float = 30.0,
) -> datetime.datetime | None:
    """Instant in ``[start, end]`` where ``altitude_fn`` crosses the threshold.

    Returns None when the altitudes at the two ends do not bracket the
    threshold. Assumes a single crossing inside the bracket.
    """
    lo, hi = start, end
    lo_above = altitude_fn(lo) >= threshold_deg
    hi_above = altitude_fn(hi) >= threshold_deg
    if lo_above == hi_above:
        return None
    while (hi - lo).total_seconds() > tolerance_s:
        mid = lo + (hi - lo) / 2
        if (altitude_fn(mid) >= threshold_deg) == lo_above:
            lo = mid
        else:
            hi = mid
    return lo + (hi - lo) / 2
