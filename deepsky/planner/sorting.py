from enum import Enum
from typing import Iterable, Mapping

from .scoring import ScoreComponents
from .types import DeepSkyTarget


class SortMethod(Enum):
    VISIBILITY = "visibility"
    MERIDIAN = "meridian"
    SEASON = "season"
    DEC = "dec"
    RA = "ra"
    MAGNITUDE = "magnitude"
    SIZE = "size"

    @property
    def needs_scores(self) -> bool:
        return self in (SortMethod.VISIBILITY, SortMethod.MERIDIAN, SortMethod.SEASON)


def _sort_value(
    target: DeepSkyTarget,
    method: SortMethod,
    scores: Mapping[str, ScoreComponents] | None,
) -> float:
    if method == SortMethod.VISIBILITY:
        return scores[target.id].visibility
    if method == SortMethod.MERIDIAN:
        return scores[target.id].meridian
    if method == SortMethod.SEASON:
        return scores[target.id].season
    if method == SortMethod.DEC:
        return target.dec_deg
    if method == SortMethod.RA:
        return target.ra_deg
    if method == SortMethod.MAGNITUDE:
        return float("inf") if target.apparent_mag is None else target.apparent_mag
    return target.arc_length


def sort_targets(
    targets: Iterable[DeepSkyTarget],
    method: SortMethod,
    descending: bool = True,
    scores: Mapping[str, ScoreComponents] | None = None,
) -> list[DeepSkyTarget]:
    """Stable sort; targets with equal values keep catalog order."""
    if method.needs_scores and scores is None:
        raise ValueError(f"Sorting by {method.value} requires scores")
    # sorted(reverse=True) keeps ties in input order as well.
    return sorted(targets, key=lambda t: _sort_value(t, method, scores), reverse=descending)
