from dataclasses import dataclass
import csv
from functools import lru_cache
import logging
from pathlib import Path

from .base import CatalogProvider
from deepsky.planner.enums import Constellation, DSOCatalog, DSOType
from deepsky.planner.types import DeepSkyTarget, Designation

logger = logging.getLogger(__name__)

BUNDLED_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "catalog.csv"


@dataclass
class BundledCatalogProvider(CatalogProvider):
    name: str = "bundled"
    catalog_path: Path | None = None

    def _resolve_path(self) -> Path:
        if self.catalog_path is not None:
            return Path(self.catalog_path)
        return BUNDLED_CATALOG_PATH

    def list_targets(self):
        path = self._resolve_path()
        if not path.exists():
            raise FileNotFoundError(f"Target catalog not found: {path}")
        return list(_load_catalog(path.resolve()))


@lru_cache(maxsize=None)
def _load_catalog(path: Path) -> tuple[DeepSkyTarget, ...]:
    targets: list[DeepSkyTarget] = []
    with open(path, "r", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            try:
                targets.append(_parse_row(row))
            except (KeyError, ValueError) as e:
                raise ValueError(f"{path}:{line_no}: {e}") from e
    logger.debug("Loaded %d targets from %s", len(targets), path)
    return tuple(targets)


def _parse_row(row: dict) -> DeepSkyTarget:
    return DeepSkyTarget(
        id=row["id"].strip(),
        names=tuple(_split(row.get("names"))),
        designations=tuple(_parse_designation(d) for d in _split(row.get("designations"))),
        sub_designations=tuple(_parse_designation(d) for d in _split(row.get("sub_designations"))),
        ra_deg=float(row["ra_deg"]),
        dec_deg=float(row["dec_deg"]),
        arc_length=float(row["arc_length"]),
        arc_width=float(row["arc_width"]),
        apparent_mag=_parse_float(row.get("apparent_mag")),
        types=tuple(DSOType.from_key(t) for t in _split(row.get("types"))),
        constellation=Constellation.from_key(row["constellation"]),
        description=_parse_optional(row.get("description")) or "",
    )


def _parse_designation(value: str) -> Designation:
    catalog, _, number = value.partition(":")
    if not number:
        raise ValueError(f"Designation must be catalog:number, got {value!r}")
    return Designation(catalog=DSOCatalog.from_key(catalog), number=int(number))


def _split(value: str | None) -> list[str]:
    return [part.strip() for part in (value or "").split(";") if part.strip()]


def _parse_float(value: str | None) -> float | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    return float(value)


def _parse_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
