"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Tuple

from ...models.domain import Coordinate, EvacuationTarget

METERS_TO_MILES = 0.000621371
SECONDS_PER_MINUTE = 60


def meters_to_miles(meters: float) -> float:
    return round(meters * METERS_TO_MILES, 1)


def seconds_to_minutes(seconds: float) -> float:
    return round(seconds / SECONDS_PER_MINUTE, 1)


class Overview(str, Enum):
    FULL = "full"
    SIMPLIFIED = "simplified"


@dataclass(frozen=True, slots=True)
class RouteOptions:
    """Request flags sent to the directions provider.

    alternatives: ask for more than one distinct path (default True).
    include_steps: ask for turn-by-turn maneuvers (default True).
    overview: geometry detail, full or simplified (default full).
    geometries: geometry encoding, geojson or polyline (default geojson).
    annotations: per-segment metadata requested alongside the route.
    """

    alternatives: bool = True
    include_steps: bool = True
    overview: Overview = Overview.FULL
    geometries: Literal["geojson", "polyline"] = "geojson"
    annotations: Tuple[str, ...] = ("duration", "distance", "speed")


@dataclass(frozen=True, slots=True)
class RouteStep:
    instruction: str
    distance_meters: float
    duration_seconds: float
    maneuver_type: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RouteCandidate:
    """One computed path between two coordinates.

    SI values are kept unrounded; display units are derived on access.
    """

    route_id: int
    geometry: Tuple[Coordinate, ...]
    distance_meters: float
    duration_seconds: float
    steps: Tuple[RouteStep, ...]
    is_primary: bool
    traffic_aware: bool = False
    summary: Optional[str] = None

    @property
    def distance_miles(self) -> float:
        return meters_to_miles(self.distance_meters)

    @property
    def duration_minutes(self) -> float:
        return seconds_to_minutes(self.duration_seconds)


@dataclass(frozen=True, slots=True)
class InstructionStep:
    step: int
    instruction: str
    distance_miles: float
    duration_minutes: float

    @property
    def distance_text(self) -> str:
        return f"{self.distance_miles} mi"

    @property
    def duration_text(self) -> str:
        return f"{self.duration_minutes} min"


@dataclass(frozen=True, slots=True)
class RankedDestination:
    target: EvacuationTarget
    routes: Tuple[RouteCandidate, ...]
    unsafe_route_ids: Tuple[int, ...] = ()

    @property
    def destination(self) -> str:
        return self.target.name

    @property
    def primary(self) -> RouteCandidate:
        return self.routes[0]


@dataclass(frozen=True, slots=True)
class DroppedDestination:
    """Report handed to the failure reporter when a destination lookup fails."""

    destination: str
    error: Exception
