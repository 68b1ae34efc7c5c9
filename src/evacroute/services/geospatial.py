"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from shapely.geometry import Point, Polygon

from ..models.domain import Coordinate, DangerZone

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def point_in_polygon(point: Coordinate, polygon_coords: Sequence[Coordinate]) -> bool:
    """Return True if the point is inside the polygon outline."""

    polygon = Polygon([coord.as_lon_lat() for coord in polygon_coords])
    return polygon.contains(Point(point.longitude, point.latitude))


def point_in_danger_zone(point: Coordinate, zone: DangerZone) -> bool:
    """Polygon containment when the zone has an outline, radius check otherwise."""

    if zone.polygon:
        return point_in_polygon(point, zone.polygon)
    return distance_km(point, zone.center) <= zone.radius_km


def route_intersects_danger_zones(geometry: Iterable[Coordinate], zones: Sequence[DangerZone]) -> bool:
    """Return True if any vertex of the route lies inside any zone.

    Only vertices are tested, so a straight segment crossing a small zone
    without a vertex inside is not detected.
    """

    if not zones:
        return False
    for coord in geometry:
        for zone in zones:
            if point_in_danger_zone(coord, zone):
                return True
    return False
