from .client import fetch_moon_events, fetch_night_events, fetch_sun_events
from .decode import decode_moon_payload, decode_sun_payload

__all__ = [
    "decode_moon_payload",
    "decode_sun_payload",
    "fetch_moon_events",
    "fetch_night_events",
    "fetch_sun_events",
]
