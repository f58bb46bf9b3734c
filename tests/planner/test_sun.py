import datetime

import pytest

from deepsky.planner.sun import compute_sun_events, solar_noon, sun_altitude
from deepsky.planner.types import Location

CHICAGO = Location.saved("Chicago", 41.833, -87.872, "America/Chicago")
TROMSO = Location.saved("Tromso", 69.65, 18.96, "Europe/Oslo")


def _local(dt, location):
    return dt.astimezone(location.tzinfo)


def test_solar_noon_chicago_summer():
    noon = _local(solar_noon(CHICAGO, datetime.date(2023, 6, 21)), CHICAGO)
    assert noon.date() == datetime.date(2023, 6, 21)
    assert datetime.time(12, 40) <= noon.time() <= datetime.time(13, 5)


def test_sun_altitude_peaks_at_noon():
    noon = solar_noon(CHICAGO, datetime.date(2023, 6, 21))
    assert sun_altitude(CHICAGO, noon) == pytest.approx(90.0 - 41.833 + 23.44, abs=0.2)
    for minutes in (-30, 30):
        assert sun_altitude(CHICAGO, noon + datetime.timedelta(minutes=minutes)) < sun_altitude(CHICAGO, noon)


def test_sun_altitude_nearly_repeats_after_a_day():
    t = datetime.datetime(2023, 3, 20, 15, 0, tzinfo=datetime.timezone.utc)
    later = t + datetime.timedelta(days=1)
    assert sun_altitude(CHICAGO, later) == pytest.approx(sun_altitude(CHICAGO, t), abs=1.0)


def test_chicago_events_are_ordered():
    events = compute_sun_events(CHICAGO, datetime.date(2023, 6, 21))
    morning = [
        events.solar_midnight,
        events.astronomical_dawn,
        events.nautical_dawn,
        events.civil_dawn,
        events.sunrise,
        events.solar_noon,
    ]
    evening = [
        events.solar_noon,
        events.sunset,
        events.civil_dusk,
        events.nautical_dusk,
        events.astronomical_dusk,
    ]
    assert None not in morning
    assert None not in evening
    assert morning == sorted(morning)
    assert evening == sorted(evening)

    sunset = _local(events.sunset, CHICAGO)
    assert datetime.time(20, 10) <= sunset.time() <= datetime.time(20, 45)


def test_threshold_crossings_hit_their_altitude():
    events = compute_sun_events(CHICAGO, datetime.date(2023, 12, 21))
    assert sun_altitude(CHICAGO, events.sunrise) == pytest.approx(0.0, abs=0.1)
    assert sun_altitude(CHICAGO, events.civil_dusk) == pytest.approx(-6.0, abs=0.1)
    assert sun_altitude(CHICAGO, events.nautical_dawn) == pytest.approx(-12.0, abs=0.1)
    assert sun_altitude(CHICAGO, events.astronomical_dusk) == pytest.approx(-18.0, abs=0.1)


def test_solar_midnight_is_local_minimum():
    events = compute_sun_events(CHICAGO, datetime.date(2023, 9, 1))
    low = sun_altitude(CHICAGO, events.solar_midnight)
    for minutes in (-20, 20):
        assert low <= sun_altitude(CHICAGO, events.solar_midnight + datetime.timedelta(minutes=minutes))
    gap = events.solar_noon - events.solar_midnight
    assert abs(gap - datetime.timedelta(hours=12)) < datetime.timedelta(minutes=2)


def test_midnight_sun_has_no_events():
    events = compute_sun_events(TROMSO, datetime.date(2023, 6, 21))
    assert events.sunrise is None
    assert events.sunset is None
    assert events.civil_dusk is None
    assert events.astronomical_dawn is None


def test_polar_night_keeps_civil_twilight():
    events = compute_sun_events(TROMSO, datetime.date(2023, 12, 21))
    assert events.sunrise is None
    assert events.sunset is None
    assert events.civil_dawn is not None
    assert events.civil_dusk is not None
    assert events.civil_dawn < events.solar_noon < events.civil_dusk
