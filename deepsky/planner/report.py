import datetime
import logging
from typing import Iterable

from .enums import GALAXIES, NEBULAE, STAR_CLUSTERS
from .filters import filter_by_visibility, filter_hidden, filter_never_rises
from .scoring import ScoreComponents, rank_targets, score_targets
from .types import (
    DailyReport,
    DateInterval,
    DeepSkyTarget,
    ImagingPreset,
    Location,
    MoonData,
    ReportEntry,
    ReportSettings,
    SunData,
    TargetSettings,
)

logger = logging.getLogger(__name__)

TOP_OVERALL = 5
TOP_PER_CATEGORY = 10


def fov_coverage(target: DeepSkyTarget, preset: ImagingPreset) -> float:
    """How much of the frame length the target spans."""
    return target.arc_length / preset.fov_length


def _fits_frame(target: DeepSkyTarget, preset: ImagingPreset, settings: ReportSettings) -> bool:
    coverage = fov_coverage(target, preset)
    return settings.min_fov_coverage <= coverage <= settings.max_fov_coverage


def _entries(targets: Iterable[DeepSkyTarget], scores: dict[str, ScoreComponents], limit: int) -> tuple:
    entries = []
    for target in list(targets)[:limit]:
        score = scores[target.id]
        entries.append(ReportEntry(target=target, visibility=score.visibility, meridian=score.meridian))
    return tuple(entries)


def generate_report(
    targets: Iterable[DeepSkyTarget],
    location: Location,
    date: datetime.date,
    sun_data: SunData,
    moon_data: MoonData,
    report_settings: ReportSettings,
    target_settings: TargetSettings,
    preset: ImagingPreset | None = None,
    viewing_interval: DateInterval | None = None,
) -> DailyReport:
    """Rank tonight's candidates into the top-five and per-category lists."""
    interval = viewing_interval or sun_data.interval_for(report_settings.darkness_threshold)

    candidates = filter_hidden(targets, target_settings.hidden_targets)
    if target_settings.hide_never_rises:
        candidates = filter_never_rises(candidates, location, target_settings.limiting_altitude_deg)
    if preset is not None:
        candidates = [t for t in candidates if _fits_frame(t, preset, report_settings)]

    scores = score_targets(candidates, location, interval, target_settings.limiting_altitude_deg)
    candidates = filter_by_visibility(candidates, scores, report_settings.min_visibility)

    bright_moon = moon_data.illuminated > report_settings.max_allowed_moon
    prefer_broadband = bright_moon and report_settings.prefer_broadband
    ranked = rank_targets(candidates, scores, prefer_broadband=False)
    top_five = rank_targets(candidates, scores, prefer_broadband=True) if prefer_broadband else ranked

    def category(types) -> tuple:
        members = [t for t in ranked if any(kind in types for kind in t.types)]
        return _entries(members, scores, TOP_PER_CATEGORY)

    report = DailyReport(
        location=location,
        date=date,
        viewing_interval=interval,
        moon_illuminated=moon_data.illuminated,
        top_five=_entries(top_five, scores, TOP_OVERALL),
        top_ten_nebulae=category(NEBULAE),
        top_ten_galaxies=category(GALAXIES),
        top_ten_star_clusters=category(STAR_CLUSTERS),
    )
    if not report.top_five:
        report.message = _build_empty_message(interval, report_settings)
    logger.info(
        "Report for %s: %d candidates, broadband preference %s",
        date,
        len(candidates),
        "on" if prefer_broadband else "off",
    )
    return report


def _build_empty_message(interval: DateInterval, settings: ReportSettings) -> str:
    if interval.is_empty:
        return (
            f"No {settings.darkness_threshold.name.lower()} darkness tonight at this location; "
            "try a lighter darkness threshold."
        )
    return "No targets meet the visibility and framing thresholds tonight."
