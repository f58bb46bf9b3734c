import json
import datetime
from dataclasses import asdict
from enum import Enum

from deepsky.util.format import deg_to_dms, deg_to_hms, format_duration, format_percent

from .enums import TargetVisibility
from .types import DailyReport, DateInterval, DeepSkyTarget, Location, NightData, ReportEntry, TargetInterval


def _json_default(value):
    if isinstance(value, Enum):
        return getattr(value, "key", value.name.lower())
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return str(value)


def to_json_data(value) -> dict:
    """Dataclass as plain JSON-compatible data."""
    return json.loads(json.dumps(asdict(value), default=_json_default))


def format_report_text(report: DailyReport) -> str:
    tz = report.location.tzinfo
    lines: list[str] = []
    lines.append(f"Daily Report {report.date.isoformat()}")
    lines.append("=" * len(lines[0]))
    lines.extend(_location_lines(report.location))
    lines.append(f"Viewing window: {_format_interval(report.viewing_interval, tz)}")
    lines.append(f"Moon: {format_percent(report.moon_illuminated)} illuminated")
    if report.message:
        lines.append("")
        lines.append(report.message)

    sections = (
        ("Top Five", report.top_five),
        ("Top Ten Nebulae", report.top_ten_nebulae),
        ("Top Ten Galaxies", report.top_ten_galaxies),
        ("Top Ten Star Clusters", report.top_ten_star_clusters),
    )
    for name, entries in sections:
        lines.append("")
        lines.append(name)
        lines.append("-" * len(name))
        if not entries:
            lines.append("  none")
            continue
        lines.extend(_entry_lines(entries))
    return "\n".join(lines)


def format_night_text(night: NightData, location: Location) -> str:
    tz = location.tzinfo
    sun = night.sun
    lines: list[str] = []
    lines.append("Night")
    lines.append("=====")
    lines.extend(_location_lines(location))
    rows = (
        ("Night", sun.night_interval),
        ("Civil", sun.civil_interval),
        ("Nautical", sun.nautical_interval),
        ("Astronomical", sun.astronomical_interval),
    )
    for label, interval in rows:
        lines.append(f"{_pad(label, 13)} {_format_interval(interval, tz)}")
    lines.append(f"{_pad('Solar midnight', 13)} {_local(sun.solar_midnight, tz)}")
    moon = night.moon
    lines.append(
        f"{_pad('Moon', 13)} {_format_interval(moon.moon_interval, tz)}  "
        f"{moon.phase}, {format_percent(moon.illuminated)}"
    )
    return "\n".join(lines)


def format_targets_text(
    targets: list[DeepSkyTarget],
    scores: dict | None = None,
    intervals: dict | None = None,
    tz: datetime.tzinfo = datetime.timezone.utc,
) -> str:
    if not targets:
        return "No targets match."
    name_w = min(32, max(len(t.default_name) for t in targets))
    lines = []
    for idx, target in enumerate(targets, start=1):
        name = _pad(_truncate(target.default_name, name_w), name_w)
        designation = target.designations[0].short_description if target.designations else target.id
        line = (
            f"{idx:>3}. {name}  {_pad(designation, 9)}  "
            f"{deg_to_hms(target.ra_deg)}  {deg_to_dms(target.dec_deg)}  {_format_mag(target.apparent_mag)}"
        )
        if scores is not None and target.id in scores:
            score = scores[target.id]
            line += (
                f"  vis {format_percent(score.visibility)}  mer {format_percent(score.meridian)}"
                f"  sea {format_percent(score.season)}"
            )
        if intervals is not None and target.id in intervals:
            line += f"  {_format_target_interval(intervals[target.id], tz)}"
        lines.append(line)
    return "\n".join(lines)


def _entry_lines(entries: list[ReportEntry]) -> list[str]:
    name_w = min(32, max(len(e.target.default_name) for e in entries))
    lines = []
    for idx, entry in enumerate(entries, start=1):
        target = entry.target
        name = _pad(_truncate(target.default_name, name_w), name_w)
        kind = _truncate(target.types[0].label, 22)
        lines.append(
            f"{idx:>2}. {name}  {_pad(kind, 22)}  "
            f"vis {format_percent(entry.visibility):>4}  mer {format_percent(entry.meridian):>4}"
        )
    return lines


def _location_lines(location: Location) -> list[str]:
    lines = []
    if location.is_saved:
        lines.append(f"Site: {location.name}")
    lines.append(
        f"Location: lat {location.latitude_deg:.3f}°, lon {location.longitude_deg:.3f}° ({location.timezone})"
    )
    if location.bortle is not None:
        lines.append(f"Sky: Bortle {location.bortle}")
    return lines


def _format_target_interval(interval: TargetInterval, tz: datetime.tzinfo) -> str:
    if interval.visibility == TargetVisibility.NEVER:
        return "never rises"
    if interval.visibility == TargetVisibility.ALWAYS:
        return f"always up, culminates {_clock(interval.culmination, tz)}"
    span = interval.interval
    return f"up {_clock(span.start, tz)} → {_clock(span.end, tz)}, culminates {_clock(interval.culmination, tz)}"


def _format_interval(interval: DateInterval, tz: datetime.tzinfo) -> str:
    if interval.is_empty:
        return "none"
    return f"{_local(interval.start, tz)} → {_local(interval.end, tz)} ({format_duration(interval.duration)})"


def _local(dt: datetime.datetime, tz: datetime.tzinfo) -> str:
    return dt.astimezone(tz).strftime("%Y-%m-%d %H:%M")


def _clock(dt: datetime.datetime, tz: datetime.tzinfo) -> str:
    return dt.astimezone(tz).strftime("%H:%M")


def _format_mag(mag: float | None) -> str:
    if mag is None:
        return "  --"
    return f"{mag:4.1f}"


def _truncate(value: str, width: int) -> str:
    if width <= 0:
        return ""
    if len(value) <= width:
        return value
    if width <= 3:
        return value[:width]
    return value[: width - 3] + "..."


def _pad(value: str, width: int) -> str:
    if len(value) >= width:
        return value
    return value + (" " * (width - len(value)))
