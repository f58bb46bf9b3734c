import datetime
import json
import logging
import socket
from concurrent.futures import ThreadPoolExecutor, as_completed
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import urlopen

from deepsky.errors import FeedError, FeedUnaddressable, FeedUndecodable, FeedUnfetchable
from deepsky.planner.types import Location, MoonEvents, SunEvents

from .decode import decode_moon_payload, decode_sun_payload

logger = logging.getLogger(__name__)

SUN_API_URL = "https://api.sunrise-sunset.org/json"
MOON_API_URL = "https://aa.usno.navy.mil/api/rstt/oneday"
DEFAULT_TIMEOUT_S = 15


def _check_location(location: Location) -> None:
    if not -90.0 <= location.latitude_deg <= 90.0:
        raise FeedUnaddressable(f"Latitude out of range: {location.latitude_deg}")
    if not -180.0 <= location.longitude_deg <= 180.0:
        raise FeedUnaddressable(f"Longitude out of range: {location.longitude_deg}")


def sun_url(location: Location, date: datetime.date) -> str:
    _check_location(location)
    query = urlencode(
        {
            "lat": f"{location.latitude_deg:.4f}",
            "lng": f"{location.longitude_deg:.4f}",
            "date": date.isoformat(),
            "formatted": 0,
            "tzid": location.timezone,
        }
    )
    return f"{SUN_API_URL}?{query}"


def feed_timezone(location: Location, date: datetime.date) -> datetime.timezone:
    """Fixed UTC offset in force at local noon, as sent to the moon feed."""
    noon = datetime.datetime.combine(date, datetime.time(12, 0), tzinfo=location.tzinfo)
    return datetime.timezone(noon.utcoffset())


def moon_url(location: Location, date: datetime.date) -> str:
    _check_location(location)
    offset_h = feed_timezone(location, date).utcoffset(None).total_seconds() / 3600.0
    query = urlencode(
        {
            "date": date.isoformat(),
            "coords": f"{location.latitude_deg:.4f},{location.longitude_deg:.4f}",
            "tz": f"{offset_h:g}",
            "dst": "false",
        }
    )
    return f"{MOON_API_URL}?{query}"


def _get_json(url: str, timeout: float) -> dict:
    try:
        with urlopen(url, timeout=timeout) as resp:
            body = resp.read()
    except HTTPError as e:
        if e.code == 400:
            raise FeedUnaddressable(f"Feed rejected {url}: HTTP {e.code}") from e
        raise FeedUnfetchable(f"Feed request failed: HTTP {e.code}") from e
    except (URLError, socket.timeout, ConnectionError) as e:
        raise FeedUnfetchable(f"Feed unreachable: {e}") from e
    try:
        return json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise FeedUndecodable(f"Feed returned invalid JSON from {url}") from e


def fetch_sun_events(location: Location, date: datetime.date, timeout: float = DEFAULT_TIMEOUT_S) -> SunEvents:
    return decode_sun_payload(_get_json(sun_url(location, date), timeout))


def fetch_moon_events(location: Location, date: datetime.date, timeout: float = DEFAULT_TIMEOUT_S) -> MoonEvents:
    payload = _get_json(moon_url(location, date), timeout)
    return decode_moon_payload(payload, date, feed_timezone(location, date))


def fetch_night_events(
    location: Location,
    date: datetime.date,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> tuple[SunEvents, SunEvents, MoonEvents, MoonEvents]:
    """Today's and tomorrow's sun and moon events, fetched concurrently.

    All four requests must succeed; the first failure is raised once every
    request has finished.
    """
    tomorrow = date + datetime.timedelta(days=1)
    jobs = {
        "sun_today": (fetch_sun_events, date),
        "sun_tomorrow": (fetch_sun_events, tomorrow),
        "moon_today": (fetch_moon_events, date),
        "moon_tomorrow": (fetch_moon_events, tomorrow),
    }
    results = {}
    errors: list[FeedError] = []
    with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
        futures = {pool.submit(fn, location, day, timeout): name for name, (fn, day) in jobs.items()}
        for future in as_completed(futures):
            name = futures[future]
            try:
                results[name] = future.result()
            except FeedError as e:
                logger.warning("Fetching %s failed: %s", name, e)
                errors.append(e)
    if errors:
        raise errors[0]
    return results["sun_today"], results["sun_tomorrow"], results["moon_today"], results["moon_tomorrow"]
