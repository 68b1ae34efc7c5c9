"""Data access helpers for loading the evacuation point catalogue."""

from __future__ import annotations

import csv
import functools
import logging
from pathlib import Path
from typing import Iterable, Optional

from ..config import settings
from ..models.domain import Coordinate, EvacuationTarget

DEFAULT_CATEGORY = "Evacuation Point"


def _coerce_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        return float(value.replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


@functools.lru_cache(maxsize=1)
def load_evacuation_points(source: Optional[Path] = None) -> tuple[EvacuationTarget, ...]:
    """Load evacuation points from the configured CSV file."""

    csv_path = (source or settings.evacuation_points_file)
    if not csv_path.exists():
        raise FileNotFoundError(f"Evacuation points file not found: {csv_path}")

    points: list[EvacuationTarget] = []
    with csv_path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Evacuation points file '{csv_path}' is missing a header row.")
        for row in reader:
            name = (row.get("Name") or row.get("name") or "").strip()
            lat = _coerce_float(row.get("Latitude") or row.get("latitude"))
            lon = _coerce_float(row.get("Longitude") or row.get("longitude"))
            if not name or lat is None or lon is None:
                continue  # ignore records without a name or coordinates
            try:
                coordinate = Coordinate(longitude=lon, latitude=lat)
            except ValueError as exc:
                logging.warning(f"Skipping evacuation point '{name}': {exc}")
                continue
            points.append(
                EvacuationTarget(
                    name=name,
                    coordinate=coordinate,
                    category=(row.get("Type") or row.get("type") or "").strip() or DEFAULT_CATEGORY,
                )
            )
    return tuple(points)


def find_evacuation_points(names: Iterable[str] | None = None, source: Optional[Path] = None) -> list[EvacuationTarget]:
    """Catalogue entries matching ``names`` (case-insensitive), or all of them."""

    points = load_evacuation_points(source)
    if not names:
        return list(points)
    wanted = {name.strip().lower() for name in names}
    return [point for point in points if point.name.lower() in wanted]
