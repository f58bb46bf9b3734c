import copy

import pytest

SUN_PAYLOAD = {
    "results": {
        "sunrise": "2023-06-21T05:15:38-05:00",
        "sunset": "2023-06-21T20:29:31-05:00",
        "solar_noon": "2023-06-21T12:52:35-05:00",
        "day_length": 54233,
        "civil_twilight_begin": "2023-06-21T04:41:10-05:00",
        "civil_twilight_end": "2023-06-21T21:03:59-05:00",
        "nautical_twilight_begin": "2023-06-21T03:57:38-05:00",
        "nautical_twilight_end": "2023-06-21T21:47:31-05:00",
        "astronomical_twilight_begin": "2023-06-21T03:05:01-05:00",
        "astronomical_twilight_end": "2023-06-21T22:40:08-05:00",
    },
    "status": "OK",
    "tzid": "America/Chicago",
}

MOON_PAYLOAD = {
    "apiversion": "4.0.1",
    "geometry": {"coordinates": [-87.872, 41.833], "type": "Point"},
    "properties": {
        "data": {
            "curphase": "Waxing Crescent",
            "day": 21,
            "fracillum": "13%",
            "isdst": False,
            "month": 6,
            "moondata": [
                {"phen": "Rise", "time": "09:05"},
                {"phen": "Upper Transit", "time": "16:25"},
                {"phen": "Set", "time": "23:35"},
            ],
            "tz": -5.0,
            "year": 2023,
        }
    },
    "type": "Feature",
}


@pytest.fixture
def sun_payload():
    return copy.deepcopy(SUN_PAYLOAD)


@pytest.fixture
def moon_payload():
    return copy.deepcopy(MOON_PAYLOAD)
