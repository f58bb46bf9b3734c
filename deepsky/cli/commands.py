import datetime
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from deepsky.config import load_config
from deepsky.errors import FeedError
from deepsky.planner import Location, Planner
from deepsky.planner.enums import Constellation, DarknessThreshold, DSOCatalog, DSOType
from deepsky.planner.filters import TargetFilter
from deepsky.planner.formatters import (
    format_night_text,
    format_report_text,
    format_targets_text,
    to_json_data,
)
from deepsky.planner.planner import get_data_source
from deepsky.planner.sorting import SortMethod


def _json_envelope(command: str, ok: bool, data=None, error=None) -> dict:
    return {
        "ok": ok,
        "command": command,
        "timestamp_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "data": data,
        "error": error,
    }


def _init_logging(level: str | None) -> None:
    if not level:
        return
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "error": logging.ERROR,
    }
    logging.basicConfig(level=level_map.get(level, logging.INFO))


def _config_path_from_args(args) -> Path | None:
    if args is None:
        return None
    path = getattr(args, "config", None)
    return Path(path) if path else None


def _parse_date_arg(value: str | None) -> datetime.date | None:
    if not value:
        return None
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Date must be YYYY-MM-DD, got {value!r}") from None


def _parse_location_args(args) -> Location | None:
    lat = getattr(args, "latitude_deg", None)
    lon = getattr(args, "longitude_deg", None)
    tz = getattr(args, "timezone", None)
    if lat is None and lon is None:
        return None
    if lat is None or lon is None:
        raise ValueError("Both latitude and longitude are required when specifying location")
    return Location.current(latitude_deg=lat, longitude_deg=lon, timezone=tz or "UTC")


def _build_planner(args) -> Planner:
    config = load_config(_config_path_from_args(args))
    source = get_data_source(config, getattr(args, "source", None))
    return Planner(config, source=source)


def _emit_error(command: str, args, code: str, exc: Exception) -> None:
    if getattr(args, "json", False):
        payload = _json_envelope(
            command=command,
            ok=False,
            data=None,
            error={"code": code, "message": str(exc), "details": None},
        )
        print(json.dumps(payload, indent=2))
    else:
        print(str(exc), file=sys.stderr)


def _emit(command: str, args, data: dict, text: str) -> None:
    if getattr(args, "json", False):
        payload = _json_envelope(command=command, ok=True, data=data, error=None)
        print(json.dumps(payload, indent=2, default=str))
    else:
        print(text)


def _run(command: str, args, body) -> int:
    _init_logging(getattr(args, "log_level", None))
    try:
        body()
        return 0
    except ValueError as e:
        _emit_error(command, args, "invalid_argument", e)
        return 2
    except FileNotFoundError as e:
        _emit_error(command, args, "not_found", e)
        return 2
    except FeedError as e:
        _emit_error(command, args, e.code, e)
        return 1


def run_night(args) -> int:
    def body():
        planner = _build_planner(args)
        location = _parse_location_args(args) or planner.default_location(planner.config)
        date = _parse_date_arg(args.date) or datetime.datetime.now(location.tzinfo).date()
        night = planner.refresh(location, date)
        _emit("night", args, to_json_data(night), format_night_text(night, location))

    return _run("night", args, body)


def run_report(args) -> int:
    def body():
        planner = _build_planner(args)
        config = planner.config
        settings = planner.default_report_settings(config)
        if args.darkness:
            settings = replace(settings, darkness_threshold=DarknessThreshold.from_name(args.darkness))
        if args.prefer_broadband:
            settings = replace(settings, prefer_broadband=True)
        report = planner.plan(
            location=_parse_location_args(args),
            date=_parse_date_arg(args.date),
            report_settings=settings,
        )
        _emit("report", args, to_json_data(report), format_report_text(report))

    return _run("report", args, body)


def _target_filter_from_args(args) -> TargetFilter:
    return TargetFilter(
        search=args.search,
        catalogs=frozenset(DSOCatalog.from_key(k) for k in args.catalog or []),
        constellations=frozenset(Constellation.from_key(k) for k in args.constellation or []),
        types=frozenset(DSOType.from_key(k) for k in args.type or []),
        brightest=args.brightest,
        dimmest=args.dimmest,
        min_size_arcmin=args.min_size,
        max_size_arcmin=args.max_size,
        min_visibility=args.min_visibility,
        min_meridian=args.min_meridian,
        min_season=args.min_season,
    )


def run_targets(args) -> int:
    def body():
        planner = _build_planner(args)
        config = planner.config
        location = _parse_location_args(args) or planner.default_location(config)
        date = _parse_date_arg(args.date) or datetime.datetime.now(location.tzinfo).date()
        target_filter = _target_filter_from_args(args)
        sort_method = SortMethod(args.sort) if args.sort else None
        targets, scores = planner.list_targets(
            location=location,
            date=date,
            target_filter=target_filter,
            sort_method=sort_method,
            descending=not args.ascending,
        )
        if args.limit is not None:
            if args.limit <= 0:
                raise ValueError("Limit must be positive")
            targets = targets[: args.limit]
        intervals = planner.target_intervals(targets, location, date)
        window = planner.night_data.sun.interval_for(planner.default_report_settings(config).darkness_threshold)
        data = {"targets": []}
        for t in targets:
            tonight = intervals[t.id].overlap(window)
            data["targets"].append(
                {
                    **to_json_data(t),
                    "scores": to_json_data(scores[t.id]),
                    "interval": to_json_data(intervals[t.id]),
                    "tonight": to_json_data(tonight) if tonight is not None else None,
                }
            )
        text = format_targets_text(targets, scores, intervals=intervals, tz=location.tzinfo)
        _emit("targets", args, data, text)

    return _run("targets", args, body)
