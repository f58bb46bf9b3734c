import datetime
import logging

from deepsky.errors import FeedError
from deepsky.feeds import client as feed_client
from .enums import DarknessThreshold
from .filters import TargetFilter, filter_hidden, filter_never_rises
from .moon import assemble_moon_data, compute_moon_events
from .night import assemble_sun_data
from .providers import get_catalog_providers
from .report import generate_report
from .scoring import ScoreComponents, score_targets
from .sorting import SortMethod, sort_targets
from .sun import compute_sun_events
from .visibility import target_interval
from .types import (
    DailyReport,
    DateInterval,
    DeepSkyTarget,
    ImagingPreset,
    Location,
    MoonEvents,
    NightData,
    ReportSettings,
    SunEvents,
    TargetInterval,
    TargetSettings,
)

logger = logging.getLogger(__name__)

NightEvents = tuple[SunEvents, SunEvents, MoonEvents, MoonEvents]


class LocalEphemerisSource:
    """Computes the night's sun and moon events offline."""

    name = "local"

    def night_events(self, location: Location, date: datetime.date) -> NightEvents:
        tomorrow = date + datetime.timedelta(days=1)
        return (
            compute_sun_events(location, date),
            compute_sun_events(location, tomorrow),
            compute_moon_events(location, date),
            compute_moon_events(location, tomorrow),
        )


class FeedSource:
    """Fetches the night's sun and moon events from the online feeds."""

    name = "feed"

    def __init__(self, timeout_s: float | None = None):
        self._timeout_s = timeout_s or feed_client.DEFAULT_TIMEOUT_S

    def night_events(self, location: Location, date: datetime.date) -> NightEvents:
        return feed_client.fetch_night_events(location, date, timeout=self._timeout_s)


def get_data_source(config, name: str | None = None):
    name = (name or config.feeds_source or "local").lower()
    if name == "local":
        return LocalEphemerisSource()
    if name == "feed":
        return FeedSource(timeout_s=config.feeds_timeout_s)
    raise ValueError(f"Unknown data source: {name} (expected local or feed)")


class Planner:
    def __init__(self, config, providers=None, source=None):
        self._config = config
        self._providers = providers if providers is not None else get_catalog_providers(config.catalog_path)
        self._source = source or get_data_source(config)
        self._night: NightData | None = None
        self._night_key: tuple[Location, datetime.date] | None = None

    @property
    def config(self):
        return self._config

    @property
    def night_data(self) -> NightData | None:
        return self._night

    def night(self, location: Location, date: datetime.date) -> NightData:
        """Sun and moon data for the night starting on ``date``."""
        sun_today, sun_tomorrow, moon_today, moon_tomorrow = self._source.night_events(location, date)
        sun = assemble_sun_data(location, sun_today, sun_tomorrow)
        moon = assemble_moon_data(moon_today, moon_tomorrow, sun)
        return NightData(sun=sun, moon=moon)

    def refresh(self, location: Location, date: datetime.date) -> NightData:
        """Replace the held night data, keeping the previous one if a feed fails.

        The held data is only reused for the same location and date; for any
        other request the feed error propagates.
        """
        try:
            night = self.night(location, date)
        except FeedError as e:
            if self._night is None or self._night_key != (location, date):
                raise
            logger.warning("Keeping previous night data for %s: %s", self._night_key, e)
            return self._night
        self._night = night
        self._night_key = (location, date)
        return night

    def plan(
        self,
        location: Location | None = None,
        date: datetime.date | None = None,
        report_settings: ReportSettings | None = None,
        target_settings: TargetSettings | None = None,
        preset: ImagingPreset | None = None,
        viewing_interval: DateInterval | None = None,
    ) -> DailyReport:
        location = location or self.default_location(self._config)
        date = date or _local_today(location)
        report_settings = report_settings or self.default_report_settings(self._config)
        target_settings = target_settings or self.default_target_settings(self._config)
        preset = preset or self.default_preset(self._config)

        night = self.refresh(location, date)
        return generate_report(
            self._load_targets(),
            location,
            date,
            night.sun,
            night.moon,
            report_settings,
            target_settings,
            preset=preset,
            viewing_interval=viewing_interval,
        )

    def list_targets(
        self,
        location: Location | None = None,
        date: datetime.date | None = None,
        target_filter: TargetFilter | None = None,
        sort_method: SortMethod | None = None,
        descending: bool = True,
        report_settings: ReportSettings | None = None,
        target_settings: TargetSettings | None = None,
    ) -> tuple[list[DeepSkyTarget], dict[str, ScoreComponents]]:
        """Filtered and sorted catalog with tonight's scores."""
        location = location or self.default_location(self._config)
        date = date or _local_today(location)
        report_settings = report_settings or self.default_report_settings(self._config)
        target_settings = target_settings or self.default_target_settings(self._config)

        night = self.refresh(location, date)
        interval = night.sun.interval_for(report_settings.darkness_threshold)
        targets = filter_hidden(self._load_targets(), target_settings.hidden_targets)
        if target_settings.hide_never_rises:
            targets = filter_never_rises(targets, location, target_settings.limiting_altitude_deg)
        scores = score_targets(targets, location, interval, target_settings.limiting_altitude_deg, night.sun)
        if target_filter is not None:
            targets = target_filter.apply(targets, scores)
        if sort_method is not None:
            targets = sort_targets(targets, sort_method, descending=descending, scores=scores)
        return targets, scores

    def target_intervals(
        self,
        targets: list[DeepSkyTarget],
        location: Location,
        date: datetime.date,
        target_settings: TargetSettings | None = None,
    ) -> dict[str, TargetInterval]:
        """Rise, culmination and set of each target on the night of ``date``."""
        target_settings = target_settings or self.default_target_settings(self._config)
        limit = target_settings.limiting_altitude_deg
        return {t.id: target_interval(t, location, date, limit) for t in targets}

    @staticmethod
    def default_location(config) -> Location:
        if config.site_latitude_deg is None or config.site_longitude_deg is None:
            raise ValueError("Location is required; set [site] latitude_deg/longitude_deg or pass --lat/--lon")
        kwargs = dict(
            latitude_deg=config.site_latitude_deg,
            longitude_deg=config.site_longitude_deg,
            timezone=config.site_timezone,
            elevation_m=config.site_elevation_m,
            bortle=config.site_bortle,
        )
        if config.site_name:
            return Location.saved(config.site_name, **kwargs)
        return Location.current(**kwargs)

    @staticmethod
    def default_report_settings(config) -> ReportSettings:
        return ReportSettings(
            darkness_threshold=DarknessThreshold.from_name(config.report_darkness_threshold),
            max_allowed_moon=config.report_max_allowed_moon,
            min_fov_coverage=config.report_min_fov_coverage,
            max_fov_coverage=config.report_max_fov_coverage,
            min_visibility=config.report_min_visibility,
            prefer_broadband=config.report_prefer_broadband,
        )

    @staticmethod
    def default_target_settings(config) -> TargetSettings:
        return TargetSettings(
            limiting_altitude_deg=config.targets_limiting_altitude_deg,
            hide_never_rises=config.targets_hide_never_rises,
            hidden_targets=frozenset(config.targets_hidden),
        )

    @staticmethod
    def default_preset(config) -> ImagingPreset | None:
        preset = config.preset
        if preset is None:
            return None
        try:
            result = ImagingPreset(
                focal_length_mm=float(preset["focal_length_mm"]),
                pixel_size_um=float(preset["pixel_size_um"]),
                resolution_length=int(preset["resolution_length"]),
                resolution_width=int(preset["resolution_width"]),
                name=preset.get("name"),
            )
        except KeyError as e:
            raise ValueError(f"[preset] is missing {e.args[0]}") from e
        for key in ("focal_length_mm", "pixel_size_um", "resolution_length", "resolution_width"):
            if getattr(result, key) <= 0:
                raise ValueError(f"[preset] {key} must be positive, got {preset[key]!r}")
        return result

    def _load_targets(self) -> list[DeepSkyTarget]:
        targets: list[DeepSkyTarget] = []
        for provider in self._providers:
            targets.extend(provider.list_targets())
        return targets


def _local_today(location: Location) -> datetime.date:
    return datetime.datetime.now(location.tzinfo).date()
