"""Domain models for locations, evacuation points and danger zones."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A (longitude, latitude) pair in decimal degrees."""

    longitude: float
    latitude: float

    def __post_init__(self) -> None:
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude {self.longitude} is outside [-180, 180].")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude {self.latitude} is outside [-90, 90].")

    def as_lon_lat(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)


@dataclass(frozen=True, slots=True)
class EvacuationTarget:
    """Represents a named evacuation destination such as a shelter or hospital."""

    name: str
    coordinate: Coordinate
    category: str = "Evacuation Point"


@dataclass(frozen=True, slots=True)
class DangerZone:
    """Area to avoid. Circular around ``center`` unless a polygon outline is given."""

    zone_type: str
    center: Coordinate
    radius_km: float
    polygon: Optional[tuple[Coordinate, ...]] = None
