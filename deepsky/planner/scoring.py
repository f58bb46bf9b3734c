from dataclasses import dataclass
from typing import Iterable, Sequence

from .enums import BROADBAND
from .types import DateInterval, DeepSkyTarget, Location, SunData
from .visibility import meridian_score, season_score, visibility_score


@dataclass(frozen=True)
class ScoreComponents:
    visibility: float
    meridian: float
    season: float = 0.0

    def rank_key(self) -> tuple[float, float]:
        """Sort key placing higher visibility first, meridian as tie-break."""
        return (-self.visibility, -self.meridian)


def score_target(
    target: DeepSkyTarget,
    location: Location,
    viewing_interval: DateInterval,
    limiting_altitude_deg: float = 0.0,
    sun_data: SunData | None = None,
) -> ScoreComponents:
    """Scores for one target; the season score needs ``sun_data`` and is 0 without it."""
    season = season_score(target, location, sun_data) if sun_data is not None else 0.0
    return ScoreComponents(
        visibility=_clamp(visibility_score(target, location, viewing_interval, limiting_altitude_deg)),
        meridian=_clamp(meridian_score(target, location, viewing_interval)),
        season=_clamp(season),
    )


def score_targets(
    targets: Iterable[DeepSkyTarget],
    location: Location,
    viewing_interval: DateInterval,
    limiting_altitude_deg: float = 0.0,
    sun_data: SunData | None = None,
) -> dict[str, ScoreComponents]:
    return {
        target.id: score_target(target, location, viewing_interval, limiting_altitude_deg, sun_data)
        for target in targets
    }


def is_broadband(target: DeepSkyTarget) -> bool:
    return any(t in BROADBAND for t in target.types)


def rank_targets(
    targets: Sequence[DeepSkyTarget],
    scores: dict[str, ScoreComponents],
    prefer_broadband: bool = False,
) -> list[DeepSkyTarget]:
    """Order targets by visibility then meridian score.

    With ``prefer_broadband`` all broadband targets come before the rest.
    Equal keys keep their input order.
    """

    def key(target: DeepSkyTarget):
        base = scores[target.id].rank_key()
        if prefer_broadband:
            return (0 if is_broadband(target) else 1, *base)
        return base

    return sorted(targets, key=key)


def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))
