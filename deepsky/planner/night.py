import datetime

from .sun import (
    ASTRONOMICAL_ALT_DEG,
    CIVIL_ALT_DEG,
    NAUTICAL_ALT_DEG,
    SUNRISE_ALT_DEG,
    sun_altitude,
)
from .types import DateInterval, Location, SunData, SunEvents


def _dark_interval(
    location: Location,
    today: SunEvents,
    tomorrow: SunEvents,
    dusk: datetime.datetime | None,
    dawn: datetime.datetime | None,
    threshold_deg: float,
) -> DateInterval:
    if dusk is not None and dawn is not None:
        return DateInterval(dusk, dawn)
    # Polar day or night for this threshold only.
    if sun_altitude(location, tomorrow.solar_midnight) > threshold_deg:
        return DateInterval.at(today.solar_noon)
    return DateInterval(today.solar_noon, tomorrow.solar_noon)


def assemble_sun_data(location: Location, today: SunEvents, tomorrow: SunEvents) -> SunData:
    """Stitch today's dusk and tomorrow's dawn into the night's four intervals."""
    night = _dark_interval(location, today, tomorrow, today.sunset, tomorrow.sunrise, SUNRISE_ALT_DEG)
    civil = _dark_interval(location, today, tomorrow, today.civil_dusk, tomorrow.civil_dawn, CIVIL_ALT_DEG)
    nautical = _dark_interval(
        location, today, tomorrow, today.nautical_dusk, tomorrow.nautical_dawn, NAUTICAL_ALT_DEG
    )
    astronomical = _dark_interval(
        location,
        today,
        tomorrow,
        today.astronomical_dusk,
        tomorrow.astronomical_dawn,
        ASTRONOMICAL_ALT_DEG,
    )
    return SunData(
        night_interval=night,
        civil_interval=civil,
        nautical_interval=nautical,
        astronomical_interval=astronomical,
        solar_midnight=tomorrow.solar_midnight,
        astronomical_twilight_begin=today.astronomical_dawn or today.solar_noon,
    )
