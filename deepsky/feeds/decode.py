"""Decoding of raw sun and moon feed payloads.

Sun payloads follow the sunrise-sunset.org ``/json`` shape (ISO-8601
instants, ``formatted=0``); moon payloads follow the USNO ``rstt/oneday``
shape, whose event times are local ``HH:MM`` strings.
"""

import datetime
import logging

from deepsky.errors import (
    FeedEmptyResult,
    FeedOutOfRange,
    FeedUnaddressable,
    FeedUndecodable,
    FeedUnfetchable,
)
from deepsky.planner.types import MoonEvents, SunEvents

logger = logging.getLogger(__name__)

# Instant the sun feed reports for events that do not happen that day.
ABSENT_EVENT = datetime.datetime(1970, 1, 1, 0, 0, 1, tzinfo=datetime.timezone.utc)

_SUN_STATUS_ERRORS = {
    "INVALID_REQUEST": FeedUnaddressable,
    "INVALID_TZID": FeedUnaddressable,
    "INVALID_DATE": FeedOutOfRange,
    "UNKNOWN_ERROR": FeedUnfetchable,
}


def _parse_instant(value) -> datetime.datetime | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise FeedUndecodable(f"Expected ISO-8601 string, got {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.datetime.fromisoformat(text)
    except ValueError as e:
        raise FeedUndecodable(f"Invalid instant {value!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    dt = dt.astimezone(datetime.timezone.utc)
    if dt <= ABSENT_EVENT:
        return None
    return dt


def decode_sun_payload(payload: dict) -> SunEvents:
    if not isinstance(payload, dict):
        raise FeedUndecodable("Sun payload is not an object")
    status = payload.get("status", "OK")
    if status != "OK":
        error_cls = _SUN_STATUS_ERRORS.get(status, FeedUndecodable)
        raise error_cls(f"Sun feed returned status {status}")
    results = payload.get("results")
    if not isinstance(results, dict):
        raise FeedUndecodable("Sun payload has no results object")
    if "solar_noon" not in results:
        raise FeedUndecodable("Sun payload is missing solar_noon")

    noon = _parse_instant(results["solar_noon"])
    if noon is None:
        raise FeedEmptyResult("Sun feed returned no solar noon")
    midnight = _parse_instant(results.get("solar_midnight")) or noon - datetime.timedelta(hours=12)

    return SunEvents(
        solar_noon=noon,
        solar_midnight=midnight,
        sunrise=_parse_instant(results.get("sunrise")),
        sunset=_parse_instant(results.get("sunset")),
        civil_dawn=_parse_instant(results.get("civil_twilight_begin")),
        civil_dusk=_parse_instant(results.get("civil_twilight_end")),
        nautical_dawn=_parse_instant(results.get("nautical_twilight_begin")),
        nautical_dusk=_parse_instant(results.get("nautical_twilight_end")),
        astronomical_dawn=_parse_instant(results.get("astronomical_twilight_begin")),
        astronomical_dusk=_parse_instant(results.get("astronomical_twilight_end")),
    )


def _parse_fraction(value) -> float | None:
    if value is None:
        return None
    text = str(value).strip().rstrip("%")
    if not text:
        return None
    try:
        return max(0.0, min(1.0, float(text) / 100.0))
    except ValueError as e:
        raise FeedUndecodable(f"Invalid illuminated fraction {value!r}") from e


def _parse_local_time(value, date: datetime.date, tz: datetime.tzinfo) -> datetime.datetime:
    try:
        hours, minutes = (int(part) for part in str(value).split(":")[:2])
        local = datetime.datetime.combine(date, datetime.time(hours, minutes), tzinfo=tz)
    except (TypeError, ValueError) as e:
        raise FeedUndecodable(f"Invalid local time {value!r}") from e
    return local.astimezone(datetime.timezone.utc)


def decode_moon_payload(payload: dict, date: datetime.date, tz: datetime.tzinfo) -> MoonEvents:
    """Moon rise/set for ``date``; ``tz`` is the zone the feed times are in.

    A day without a rise or set entry is valid and leaves that field None.
    """
    if not isinstance(payload, dict):
        raise FeedUndecodable("Moon payload is not an object")
    if payload.get("error"):
        message = str(payload.get("error"))
        if "date" in message.lower():
            raise FeedOutOfRange(f"Moon feed rejected the date: {message}")
        raise FeedUnaddressable(f"Moon feed rejected the request: {message}")
    try:
        data = payload["properties"]["data"]
    except (KeyError, TypeError) as e:
        raise FeedUndecodable("Moon payload has no properties.data object") from e
    if not isinstance(data, dict):
        raise FeedUndecodable("Moon payload data is not an object")

    rise = None
    set_ = None
    for entry in data.get("moondata") or []:
        phen = str(entry.get("phen", "")).strip().lower()
        if phen == "rise" and rise is None:
            rise = _parse_local_time(entry.get("time"), date, tz)
        elif phen == "set" and set_ is None:
            set_ = _parse_local_time(entry.get("time"), date, tz)

    phase = data.get("curphase") or None
    illuminated = _parse_fraction(data.get("fracillum"))
    if phase is None and illuminated is None and rise is None and set_ is None:
        raise FeedEmptyResult(f"Moon feed returned nothing for {date}")
    return MoonEvents(rise=rise, set=set_, phase=phase, illuminated=illuminated)
