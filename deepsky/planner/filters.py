"""Composable target predicates.

Every bound is optional: None (or an empty selection) leaves the list
untouched, so clearing a bound restores the unfiltered set.
"""

from dataclasses import dataclass, field
import math
from typing import Collection, Iterable, Mapping

from .enums import Constellation, DSOCatalog, DSOType
from .scoring import ScoreComponents
from .types import DeepSkyTarget, Location
from .visibility import never_rises


def _normalize(text: str) -> str:
    return "".join(text.lower().split())


def filter_by_search(targets: Iterable[DeepSkyTarget], text: str | None) -> list[DeepSkyTarget]:
    targets = list(targets)
    if not text or not text.strip():
        return targets
    needle = _normalize(text)
    return [t for t in targets if any(needle in _normalize(term) for term in t.search_terms())]


def filter_by_catalog(
    targets: Iterable[DeepSkyTarget], catalogs: Collection[DSOCatalog] | None
) -> list[DeepSkyTarget]:
    targets = list(targets)
    if not catalogs:
        return targets
    return [t for t in targets if any(d.catalog in catalogs for d in t.designations)]


def filter_by_constellation(
    targets: Iterable[DeepSkyTarget], constellations: Collection[Constellation] | None
) -> list[DeepSkyTarget]:
    targets = list(targets)
    if not constellations:
        return targets
    return [t for t in targets if t.constellation in constellations]


def filter_by_type(targets: Iterable[DeepSkyTarget], types: Collection[DSOType] | None) -> list[DeepSkyTarget]:
    targets = list(targets)
    if not types:
        return targets
    return [t for t in targets if any(kind in types for kind in t.types)]


def filter_by_magnitude(
    targets: Iterable[DeepSkyTarget],
    brightest: float | None = None,
    dimmest: float | None = None,
) -> list[DeepSkyTarget]:
    """Keep targets with ``brightest <= mag <= dimmest``.

    A target with no catalogued magnitude counts as infinitely faint.
    """
    result = []
    for target in targets:
        mag = math.inf if target.apparent_mag is None else target.apparent_mag
        if brightest is not None and mag < brightest:
            continue
        if dimmest is not None and mag > dimmest:
            continue
        result.append(target)
    return result


def filter_by_size(
    targets: Iterable[DeepSkyTarget],
    min_arcmin: float | None = None,
    max_arcmin: float | None = None,
) -> list[DeepSkyTarget]:
    result = []
    for target in targets:
        if min_arcmin is not None and target.arc_length < min_arcmin:
            continue
        if max_arcmin is not None and target.arc_length > max_arcmin:
            continue
        result.append(target)
    return result


def filter_by_visibility(
    targets: Iterable[DeepSkyTarget],
    scores: Mapping[str, ScoreComponents],
    min_score: float | None,
) -> list[DeepSkyTarget]:
    targets = list(targets)
    if min_score is None:
        return targets
    return [t for t in targets if scores[t.id].visibility >= min_score]


def filter_by_meridian(
    targets: Iterable[DeepSkyTarget],
    scores: Mapping[str, ScoreComponents],
    min_score: float | None,
) -> list[DeepSkyTarget]:
    targets = list(targets)
    if min_score is None:
        return targets
    return [t for t in targets if scores[t.id].meridian >= min_score]


def filter_by_season(
    targets: Iterable[DeepSkyTarget],
    scores: Mapping[str, ScoreComponents],
    min_score: float | None,
) -> list[DeepSkyTarget]:
    targets = list(targets)
    if min_score is None:
        return targets
    return [t for t in targets if scores[t.id].season >= min_score]


def filter_hidden(targets: Iterable[DeepSkyTarget], hidden: Collection[str] | None) -> list[DeepSkyTarget]:
    targets = list(targets)
    if not hidden:
        return targets
    return [t for t in targets if t.id not in hidden]


def filter_never_rises(
    targets: Iterable[DeepSkyTarget],
    location: Location,
    limiting_altitude_deg: float = 0.0,
) -> list[DeepSkyTarget]:
    return [t for t in targets if not never_rises(t, location, limiting_altitude_deg)]


@dataclass
class TargetFilter:
    search: str | None = None
    catalogs: frozenset[DSOCatalog] = field(default_factory=frozenset)
    constellations: frozenset[Constellation] = field(default_factory=frozenset)
    types: frozenset[DSOType] = field(default_factory=frozenset)
    brightest: float | None = None
    dimmest: float | None = None
    min_size_arcmin: float | None = None
    max_size_arcmin: float | None = None
    min_visibility: float | None = None
    min_meridian: float | None = None
    min_season: float | None = None

    def apply(
        self,
        targets: Iterable[DeepSkyTarget],
        scores: Mapping[str, ScoreComponents] | None = None,
    ) -> list[DeepSkyTarget]:
        """Targets passing every predicate, in input order.

        Score bounds are skipped when no scores are supplied.
        """
        result = filter_by_search(targets, self.search)
        result = filter_by_catalog(result, self.catalogs)
        result = filter_by_constellation(result, self.constellations)
        result = filter_by_type(result, self.types)
        result = filter_by_magnitude(result, self.brightest, self.dimmest)
        result = filter_by_size(result, self.min_size_arcmin, self.max_size_arcmin)
        if scores is not None:
            result = filter_by_visibility(result, scores, self.min_visibility)
            result = filter_by_meridian(result, scores, self.min_meridian)
            result = filter_by_season(result, scores, self.min_season)
        return result
