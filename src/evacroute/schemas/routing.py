"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import Coordinate, DangerZone, EvacuationTarget
from ..services.routing.models import Overview, RouteOptions


class CoordinateModel(BaseModel):
    lng: float = Field(..., ge=-180, le=180)
    lat: float = Field(..., ge=-90, le=90)

    def to_domain(self) -> Coordinate:
        return Coordinate(longitude=self.lng, latitude=self.lat)


class RouteOptionsModel(BaseModel):
    alternatives: bool = True
    include_steps: bool = True
    overview: Overview = Overview.FULL
    geometries: Literal["geojson", "polyline"] = "geojson"

    def to_domain(self) -> RouteOptions:
        return RouteOptions(
            alternatives=self.alternatives,
            include_steps=self.include_steps,
            overview=self.overview,
            geometries=self.geometries,
        )


class RouteRequest(BaseModel):
    start: CoordinateModel
    end: CoordinateModel
    options: Optional[RouteOptionsModel] = None


class InstructionsRequest(RouteRequest):
    route_id: int = Field(default=0, ge=0, description="Candidate to describe (0 = primary).")


class EvacuationPointModel(BaseModel):
    name: str
    lng: float = Field(..., ge=-180, le=180)
    lat: float = Field(..., ge=-90, le=90)
    type: str = "Evacuation Point"

    def to_domain(self) -> EvacuationTarget:
        return EvacuationTarget(
            name=self.name,
            coordinate=Coordinate(longitude=self.lng, latitude=self.lat),
            category=self.type,
        )


class DangerZoneModel(BaseModel):
    type: str = "Unknown"
    center: CoordinateModel
    radius: float = Field(..., ge=0, description="Radius in kilometres.")
    polygon: Optional[List[CoordinateModel]] = Field(
        default=None,
        description="Optional outline; when given it replaces the radius check.",
    )

    def to_domain(self) -> DangerZone:
        return DangerZone(
            zone_type=self.type,
            center=self.center.to_domain(),
            radius_km=self.radius,
            polygon=tuple(point.to_domain() for point in self.polygon) if self.polygon else None,
        )


class EvacuationRequest(BaseModel):
    current_location: CoordinateModel
    evacuation_points: Optional[List[EvacuationPointModel]] = Field(
        default=None,
        description="Candidate destinations. Defaults to the configured catalogue.",
    )
    point_names: Optional[List[str]] = Field(
        default=None,
        description="Restrict the catalogue to these names when no points are given inline.",
    )
    danger_zones: List[DangerZoneModel] = Field(default_factory=list)


class RouteStepModel(BaseModel):
    instruction: str
    distance: float
    duration: float
    maneuver_type: Optional[str] = None
    name: Optional[str] = None


class RouteCandidateModel(BaseModel):
    id: int
    geometry: dict
    distance: float
    duration: float
    distance_miles: float
    duration_minutes: float
    steps: List[RouteStepModel]
    is_primary: bool
    traffic_aware: bool
    summary: Optional[str] = None
    crosses_danger_zone: bool = False


class RouteResponse(BaseModel):
    routes: List[RouteCandidateModel]


class InstructionStepModel(BaseModel):
    step: int
    instruction: str
    distance_miles: float
    duration_minutes: float
    distance: str
    duration: str


class InstructionsResponse(BaseModel):
    route_id: int
    instructions: List[InstructionStepModel]


class RankedDestinationModel(BaseModel):
    destination: str
    type: str
    location: CoordinateModel
    routes: List[RouteCandidateModel]


class EvacuationResponse(BaseModel):
    status: Literal["ok", "partial", "none"]
    requested: int
    dropped: int
    destinations: List[RankedDestinationModel]
