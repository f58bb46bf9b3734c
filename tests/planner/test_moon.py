import datetime

import pytest

from deepsky.planner.moon import (
    REFERENCE_NEW_MOON,
    SYNODIC_MONTH_DAYS,
    assemble_moon_data,
    compute_moon_events,
    moon_altitude,
    moon_illumination,
    moon_interval,
    moon_phase_name,
)
from deepsky.planner.types import DateInterval, Location, MoonEvents, SunData

CHICAGO = Location.saved("Chicago", 41.833, -87.872, "America/Chicago")
TZ = CHICAGO.tzinfo


def _at(day, hour, minute=0):
    return datetime.datetime(2023, 6, day, hour, minute, tzinfo=TZ).astimezone(datetime.timezone.utc)


def _sun_data():
    # Night of 2023-06-10 with astronomical dawn at 03:30 that morning.
    night = DateInterval(_at(10, 20, 30), _at(11, 5, 15))
    return SunData(
        night_interval=night,
        civil_interval=night,
        nautical_interval=night,
        astronomical_interval=DateInterval(_at(10, 22, 40), _at(11, 3, 10)),
        solar_midnight=_at(11, 0, 50),
        astronomical_twilight_begin=_at(10, 3, 30),
    )


def test_illumination_at_reference_new_moon():
    assert moon_illumination(REFERENCE_NEW_MOON) == pytest.approx(0.0, abs=1e-9)


def test_illumination_at_half_synodic_month():
    full = REFERENCE_NEW_MOON + datetime.timedelta(days=SYNODIC_MONTH_DAYS / 2)
    assert moon_illumination(full) > 0.99


def test_illumination_stays_in_unit_range():
    start = datetime.datetime(2023, 1, 1, tzinfo=datetime.timezone.utc)
    for hours in range(0, 24 * 60, 7):
        value = moon_illumination(start + datetime.timedelta(hours=hours))
        assert 0.0 <= value <= 1.0


def test_phase_names():
    assert moon_phase_name(REFERENCE_NEW_MOON) == "New Moon"
    assert moon_phase_name(REFERENCE_NEW_MOON + datetime.timedelta(days=SYNODIC_MONTH_DAYS / 4)) == "First Quarter"
    assert moon_phase_name(REFERENCE_NEW_MOON + datetime.timedelta(days=SYNODIC_MONTH_DAYS / 2)) == "Full Moon"


def test_rises_tonight_sets_tomorrow():
    today = MoonEvents(rise=_at(10, 23, 10), set=None)
    tomorrow = MoonEvents(rise=None, set=_at(11, 10, 40))
    assert moon_interval(today, tomorrow, _sun_data()) == DateInterval(_at(10, 23, 10), _at(11, 10, 40))


def test_set_before_rise_belongs_to_previous_night():
    today = MoonEvents(rise=_at(10, 21, 0), set=_at(10, 9, 0))
    tomorrow = MoonEvents(rise=_at(11, 21, 50), set=_at(11, 9, 45))
    assert moon_interval(today, tomorrow, _sun_data()) == DateInterval(_at(10, 21, 0), _at(11, 9, 45))


def test_early_morning_rise_uses_tomorrow():
    today = MoonEvents(rise=_at(10, 2, 0), set=_at(10, 14, 0))
    tomorrow = MoonEvents(rise=_at(11, 2, 50), set=_at(11, 15, 0))
    assert moon_interval(today, tomorrow, _sun_data()) == DateInterval(_at(11, 2, 50), _at(11, 15, 0))


def test_no_rise_today_uses_tomorrow():
    today = MoonEvents(rise=None, set=_at(10, 8, 0))
    tomorrow = MoonEvents(rise=_at(11, 0, 30), set=_at(11, 9, 0))
    assert moon_interval(today, tomorrow, _sun_data()) == DateInterval(_at(11, 0, 30), _at(11, 9, 0))


def test_rise_and_set_today():
    today = MoonEvents(rise=_at(10, 16, 0), set=_at(10, 23, 30))
    tomorrow = MoonEvents(rise=_at(11, 17, 0), set=_at(12, 0, 10))
    assert moon_interval(today, tomorrow, _sun_data()) == DateInterval(_at(10, 16, 0), _at(10, 23, 30))


def test_missing_set_tomorrow_ends_with_night():
    sun_data = _sun_data()
    today = MoonEvents(rise=_at(10, 23, 10), set=None)
    interval = moon_interval(today, MoonEvents(), sun_data)
    assert interval == DateInterval(_at(10, 23, 10), sun_data.night_interval.end)


def test_missing_rise_tomorrow_is_zero_duration():
    sun_data = _sun_data()
    today = MoonEvents(rise=None, set=_at(10, 8, 0))
    interval = moon_interval(today, MoonEvents(set=_at(11, 9, 0)), sun_data)
    assert interval == DateInterval.at(sun_data.astronomical_twilight_begin)


def test_assemble_prefers_feed_values():
    today = MoonEvents(rise=_at(10, 23, 10), set=None, phase="Waning Gibbous", illuminated=0.87)
    tomorrow = MoonEvents(set=_at(11, 10, 40))
    data = assemble_moon_data(today, tomorrow, _sun_data())
    assert data.phase == "Waning Gibbous"
    assert data.illuminated == 0.87
    assert data.moon_interval.start == _at(10, 23, 10)


def test_assemble_computes_illumination_at_moonrise():
    rise = _at(10, 23, 10)
    data = assemble_moon_data(MoonEvents(rise=rise), MoonEvents(set=_at(11, 10, 40)), _sun_data())
    assert data.illuminated == pytest.approx(moon_illumination(rise))
    assert data.phase == moon_phase_name(rise)
    assert 0.0 <= data.illuminated <= 1.0


def test_computed_events_sit_on_the_horizon():
    start = datetime.date(2023, 6, 1)
    for offset in range(7):
        events = compute_moon_events(CHICAGO, start + datetime.timedelta(days=offset))
        assert events.rise is not None or events.set is not None
        for instant in (events.rise, events.set):
            if instant is not None:
                assert moon_altitude(CHICAGO, instant) == pytest.approx(0.0, abs=0.5)
