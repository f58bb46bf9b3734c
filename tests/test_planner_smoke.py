import datetime

import pytest

from deepsky.config import Config
from deepsky.errors import FeedUnfetchable
from deepsky.planner import LocalEphemerisSource, Location, Planner
from deepsky.planner.sorting import SortMethod

DATE = datetime.date(2023, 6, 21)


@pytest.fixture
def config():
    return Config(
        {
            "site": {
                "name": "Chicago",
                "latitude_deg": 41.833,
                "longitude_deg": -87.872,
                "timezone": "America/Chicago",
                "bortle": 7,
            }
        }
    )


class FlakySource:
    """Serves the local ephemeris once, then fails like an unreachable feed."""

    name = "flaky"

    def __init__(self):
        self._local = LocalEphemerisSource()
        self.calls = 0

    def night_events(self, location, date):
        self.calls += 1
        if self.calls > 1:
            raise FeedUnfetchable("feed host unreachable")
        return self._local.night_events(location, date)


def test_planner_smoke(config):
    planner = Planner(config, source=LocalEphemerisSource())
    report = planner.plan(date=DATE)

    night = planner.night_data
    assert report.viewing_interval == night.sun.astronomical_interval
    assert not report.viewing_interval.is_empty
    assert report.location.name == "Chicago"
    assert 0.0 <= report.moon_illuminated <= 1.0

    assert report.top_five
    assert len(report.top_five) <= 5
    for entries in (report.top_ten_nebulae, report.top_ten_galaxies, report.top_ten_star_clusters):
        assert len(entries) <= 10
    for entries in (report.top_five, report.top_ten_nebulae, report.top_ten_galaxies, report.top_ten_star_clusters):
        keys = [(entry.visibility, entry.meridian) for entry in entries]
        assert keys == sorted(keys, reverse=True)
        for entry in entries:
            assert 0.6 <= entry.visibility <= 1.0
            assert 0.0 <= entry.meridian <= 1.0


def test_night_ordering(config):
    planner = Planner(config, source=LocalEphemerisSource())
    location = planner.default_location(config)
    sun = planner.night(location, DATE).sun
    assert sun.night_interval.start <= sun.civil_interval.start <= sun.nautical_interval.start
    assert sun.nautical_interval.start <= sun.astronomical_interval.start
    assert sun.astronomical_interval.end <= sun.nautical_interval.end <= sun.civil_interval.end
    assert sun.civil_interval.end <= sun.night_interval.end
    assert sun.astronomical_interval.contains(sun.solar_midnight)


def test_list_targets_sorted_by_visibility(config):
    planner = Planner(config, source=LocalEphemerisSource())
    targets, scores = planner.list_targets(date=DATE, sort_method=SortMethod.VISIBILITY)
    visibilities = [scores[t.id].visibility for t in targets]
    assert visibilities == sorted(visibilities, reverse=True)
    assert len(scores) == len(targets)


def test_refresh_keeps_previous_night_on_feed_error(config):
    source = FlakySource()
    planner = Planner(config, source=source)
    location = planner.default_location(config)

    first = planner.refresh(location, DATE)
    second = planner.refresh(location, DATE)
    assert source.calls == 2
    assert second is first
    assert planner.night_data is first


def test_refresh_for_another_date_raises_on_feed_error(config):
    source = FlakySource()
    planner = Planner(config, source=source)
    location = planner.default_location(config)

    first = planner.refresh(location, DATE)
    with pytest.raises(FeedUnfetchable):
        planner.refresh(location, DATE + datetime.timedelta(days=1))
    assert planner.night_data is first


def test_plan_for_another_site_raises_on_feed_error(config):
    planner = Planner(config, source=FlakySource())
    planner.plan(date=DATE)
    held = planner.night_data

    sydney = Location.current(-33.87, 151.21, "Australia/Sydney")
    with pytest.raises(FeedUnfetchable):
        planner.plan(location=sydney, date=datetime.date(2023, 12, 21))
    assert planner.night_data is held


def test_refresh_without_previous_night_raises(config):
    source = FlakySource()
    source.calls = 1
    planner = Planner(config, source=source)
    with pytest.raises(FeedUnfetchable):
        planner.refresh(planner.default_location(config), DATE)
    assert planner.night_data is None
