from dataclasses import dataclass, field
import datetime
from typing import Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .enums import Constellation, DarknessThreshold, DSOCatalog, DSOType, TargetVisibility

UNIX_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


@dataclass(frozen=True)
class Location:
    """Observer site. ``name`` is None for the device's current location."""

    latitude_deg: float
    longitude_deg: float
    timezone: str = "UTC"
    elevation_m: float | None = None
    bortle: int | None = None
    name: str | None = None

    def __post_init__(self):
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, OSError, ValueError, TypeError):
            raise ValueError(f"Unknown time zone: {self.timezone!r}") from None

    @classmethod
    def current(cls, latitude_deg: float, longitude_deg: float, timezone: str = "UTC", **kwargs) -> "Location":
        return cls(latitude_deg, longitude_deg, timezone, name=None, **kwargs)

    @classmethod
    def saved(cls, name: str, latitude_deg: float, longitude_deg: float, timezone: str = "UTC", **kwargs) -> "Location":
        return cls(latitude_deg, longitude_deg, timezone, name=name, **kwargs)

    @property
    def is_saved(self) -> bool:
        return self.name is not None

    @property
    def tzinfo(self) -> datetime.tzinfo:
        return ZoneInfo(self.timezone)


@dataclass(frozen=True)
class DateInterval:
    """Half-open span ``[start, end)`` of UTC-aware instants."""

    start: datetime.datetime
    end: datetime.datetime

    @classmethod
    def at(cls, instant: datetime.datetime) -> "DateInterval":
        return cls(instant, instant)

    @property
    def duration(self) -> datetime.timedelta:
        return self.end - self.start

    @property
    def midpoint(self) -> datetime.datetime:
        return self.start + (self.end - self.start) / 2

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def contains(self, instant: datetime.datetime) -> bool:
        return self.start <= instant < self.end

    def intersection(self, other: "DateInterval") -> Optional["DateInterval"]:
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if end <= start:
            return None
        return DateInterval(start, end)


@dataclass(frozen=True)
class TargetInterval:
    """A target's pass around the culmination following local noon.

    ``interval`` is the rise-to-set span and is only set for
    ``TargetVisibility.SOMETIMES``.
    """

    visibility: TargetVisibility
    culmination: datetime.datetime
    anti_culmination: datetime.datetime
    interval: DateInterval | None = None

    def overlap(self, window: DateInterval) -> DateInterval | None:
        """Part of ``window`` the target spends above the altitude floor."""
        if window.is_empty or self.visibility == TargetVisibility.NEVER:
            return None
        if self.visibility == TargetVisibility.ALWAYS:
            return window
        return self.interval.intersection(window)


@dataclass(frozen=True)
class SunEvents:
    """Solar instants for one local calendar day; None means no such event."""

    solar_noon: datetime.datetime
    solar_midnight: datetime.datetime
    sunrise: datetime.datetime | None = None
    sunset: datetime.datetime | None = None
    civil_dawn: datetime.datetime | None = None
    civil_dusk: datetime.datetime | None = None
    nautical_dawn: datetime.datetime | None = None
    nautical_dusk: datetime.datetime | None = None
    astronomical_dawn: datetime.datetime | None = None
    astronomical_dusk: datetime.datetime | None = None


@dataclass(frozen=True)
class SunData:
    night_interval: DateInterval
    civil_interval: DateInterval
    nautical_interval: DateInterval
    astronomical_interval: DateInterval
    solar_midnight: datetime.datetime
    astronomical_twilight_begin: datetime.datetime

    @classmethod
    def default(cls) -> "SunData":
        empty = DateInterval.at(UNIX_EPOCH)
        return cls(empty, empty, empty, empty, UNIX_EPOCH, UNIX_EPOCH)

    @property
    def is_default(self) -> bool:
        return self == SunData.default()

    def interval_for(self, threshold: DarknessThreshold) -> DateInterval:
        if threshold == DarknessThreshold.CIVIL:
            return self.civil_interval
        if threshold == DarknessThreshold.NAUTICAL:
            return self.nautical_interval
        return self.astronomical_interval


@dataclass(frozen=True)
class MoonEvents:
    rise: datetime.datetime | None = None
    set: datetime.datetime | None = None
    phase: str | None = None
    illuminated: float | None = None


@dataclass(frozen=True)
class MoonData:
    phase: str
    illuminated: float
    moon_interval: DateInterval

    @classmethod
    def default(cls) -> "MoonData":
        return cls(phase="", illuminated=0.0, moon_interval=DateInterval.at(UNIX_EPOCH))


@dataclass(frozen=True)
class NightData:
    sun: SunData
    moon: MoonData


@dataclass(frozen=True)
class Designation:
    catalog: DSOCatalog
    number: int

    @property
    def long_description(self) -> str:
        return f"{self.catalog.label} {self.number}"

    @property
    def short_description(self) -> str:
        return f"{self.catalog.prefix}{self.number}"


@dataclass(frozen=True)
class DeepSkyTarget:
    id: str
    designations: tuple[Designation, ...]
    ra_deg: float
    dec_deg: float
    arc_length: float
    arc_width: float
    types: tuple[DSOType, ...]
    constellation: Constellation
    names: tuple[str, ...] = ()
    sub_designations: tuple[Designation, ...] = ()
    apparent_mag: float | None = None
    description: str = ""

    @property
    def default_name(self) -> str:
        if self.names:
            return self.names[0]
        designation = self.designations[0].short_description if self.designations else self.id
        return f"{self.types[0].label} {designation}"

    def search_terms(self) -> list[str]:
        terms = [self.id, self.default_name, *self.names]
        for designation in (*self.designations, *self.sub_designations):
            terms.append(designation.long_description)
            terms.append(designation.short_description)
        return terms


@dataclass(frozen=True)
class ReportSettings:
    darkness_threshold: DarknessThreshold = DarknessThreshold.ASTRONOMICAL
    max_allowed_moon: float = 0.2
    min_fov_coverage: float = 0.1
    max_fov_coverage: float = 0.9
    min_visibility: float = 0.6
    prefer_broadband: bool = False


@dataclass(frozen=True)
class TargetSettings:
    limiting_altitude_deg: float = 0.0
    hide_never_rises: bool = False
    hidden_targets: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ImagingPreset:
    focal_length_mm: float
    pixel_size_um: float
    resolution_length: int
    resolution_width: int
    name: str | None = None

    @property
    def pixel_scale(self) -> float:
        """Arcseconds per pixel."""
        return self.pixel_size_um / self.focal_length_mm * 206.2648

    @property
    def fov_length(self) -> float:
        """Frame length in arcminutes."""
        return self.pixel_scale * self.resolution_length / 60.0

    @property
    def fov_width(self) -> float:
        return self.pixel_scale * self.resolution_width / 60.0


@dataclass(frozen=True)
class ReportEntry:
    target: DeepSkyTarget
    visibility: float
    meridian: float


@dataclass
class DailyReport:
    location: Location
    date: datetime.date
    viewing_interval: DateInterval
    moon_illuminated: float
    top_five: Sequence[ReportEntry]
    top_ten_nebulae: Sequence[ReportEntry]
    top_ten_galaxies: Sequence[ReportEntry]
    top_ten_star_clusters: Sequence[ReportEntry]
    message: Optional[str] = None
