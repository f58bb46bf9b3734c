from .planner import FeedSource, LocalEphemerisSource, Planner
from .types import (
    DailyReport,
    DateInterval,
    DeepSkyTarget,
    ImagingPreset,
    Location,
    MoonData,
    NightData,
    ReportSettings,
    SunData,
    TargetInterval,
    TargetSettings,
)

__all__ = [
    "Planner",
    "FeedSource",
    "LocalEphemerisSource",
    "DailyReport",
    "DateInterval",
    "DeepSkyTarget",
    "ImagingPreset",
    "Location",
    "MoonData",
    "NightData",
    "ReportSettings",
    "SunData",
    "TargetInterval",
    "TargetSettings",
]
