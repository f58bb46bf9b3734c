import datetime

from deepsky.util.format import (
    deg_to_dms,
    deg_to_hms,
    format_duration,
    format_percent,
)


def test_deg_to_hms_zero():
    assert deg_to_hms(0.0) == "00:00:00"


def test_deg_to_hms_wrap():
    # 360 degrees -> 24h -> wrapped to 00
    assert deg_to_hms(360.0) == "00:00:00"


def test_deg_to_hms_precision():
    # 15 degrees = 1 hour
    assert deg_to_hms(15.0, precision=1) == "01:00:00.0"


def test_deg_to_hms_andromeda():
    assert deg_to_hms(10.685) == "00:42:44"


def test_deg_to_dms_positive():
    assert deg_to_dms(10.0) == "+10:00:00"


def test_deg_to_dms_negative():
    assert deg_to_dms(-10.5, precision=2) == "-10:30:00.00"


def test_format_percent():
    assert format_percent(0.874) == "87%"
    assert format_percent(0.874, precision=1) == "87.4%"


def test_format_duration():
    assert format_duration(datetime.timedelta(hours=7, minutes=5)) == "7h 05m"
    assert format_duration(datetime.timedelta(0)) == "0h 00m"
