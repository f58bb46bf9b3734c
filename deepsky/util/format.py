import datetime
from typing import Tuple


def _wrap_hours(hours: float) -> float:
    return hours % 24.0


def _split_dms(angle_deg: float, precision: int) -> Tuple[int, int, int, float]:
    sign = -1 if angle_deg < 0 else 1
    a = abs(angle_deg)
    total_seconds = round(a * 3600.0, precision)
    deg = int(total_seconds // 3600)
    rem = total_seconds - deg * 3600
    minutes = int(rem // 60)
    seconds = rem - minutes * 60
    return sign, deg, minutes, seconds


def _split_hms(hours: float, precision: int) -> Tuple[int, int, float]:
    h = _wrap_hours(hours)
    total_seconds = round(h * 3600.0, precision) % (24.0 * 3600.0)
    hours_int = int(total_seconds // 3600)
    rem = total_seconds - hours_int * 3600
    minutes = int(rem // 60)
    seconds = rem - minutes * 60
    return hours_int, minutes, seconds


def deg_to_hms(deg: float, precision: int = 0) -> str:
    """Right ascension in degrees as HH:MM:SS."""
    h, m, s = _split_hms(deg / 15.0, precision)
    width = 2 if precision == 0 else 3 + precision
    s_fmt = f"{s:0{width}.{precision}f}"
    return f"{h:02d}:{m:02d}:{s_fmt}"


def deg_to_dms(deg: float, precision: int = 0) -> str:
    sign_val, d, m, s = _split_dms(deg, precision)
    sign = "-" if sign_val < 0 else "+"
    width = 2 if precision == 0 else 3 + precision
    s_fmt = f"{s:0{width}.{precision}f}"
    return f"{sign}{d:02d}:{m:02d}:{s_fmt}"


def format_percent(fraction: float, precision: int = 0) -> str:
    return f"{fraction * 100.0:.{precision}f}%"


def format_duration(delta: datetime.timedelta) -> str:
    total_min = int(round(delta.total_seconds() / 60.0))
    if total_min < 0:
        total_min = 0
    hours, minutes = divmod(total_min, 60)
    return f"{hours}h {minutes:02d}m"
