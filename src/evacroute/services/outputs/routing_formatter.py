"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io
from typing import Sequence

from ..routing.models import InstructionStep, RankedDestination, RouteCandidate


def geometry_to_geojson(route: RouteCandidate) -> dict:
    return {
        "type": "LineString",
        "coordinates": [list(point.as_lon_lat()) for point in route.geometry],
    }


def route_candidate_to_json(route: RouteCandidate, unsafe_route_ids: Sequence[int] = ()) -> dict:
    return {
        "id": route.route_id,
        "geometry": geometry_to_geojson(route),
        "distance": route.distance_meters,
        "duration": route.duration_seconds,
        "distance_miles": route.distance_miles,
        "duration_minutes": route.duration_minutes,
        "steps": [
            {
                "instruction": step.instruction,
                "distance": step.distance_meters,
                "duration": step.duration_seconds,
                "maneuver_type": step.maneuver_type,
                "name": step.name,
            }
            for step in route.steps
        ],
        "is_primary": route.is_primary,
        "traffic_aware": route.traffic_aware,
        "summary": route.summary,
        "crosses_danger_zone": route.route_id in unsafe_route_ids,
    }


def instructions_to_json(instructions: Sequence[InstructionStep]) -> list[dict]:
    return [
        {
            "step": item.step,
            "instruction": item.instruction,
            "distance_miles": item.distance_miles,
            "duration_minutes": item.duration_minutes,
            "distance": item.distance_text,
            "duration": item.duration_text,
        }
        for item in instructions
    ]


def ranked_destinations_to_json(ranked: Sequence[RankedDestination]) -> list[dict]:
    return [
        {
            "destination": item.destination,
            "type": item.target.category,
            "location": {
                "lng": item.target.coordinate.longitude,
                "lat": item.target.coordinate.latitude,
            },
            "routes": [route_candidate_to_json(route, item.unsafe_route_ids) for route in item.routes],
        }
        for item in ranked
    ]


def ranked_destinations_to_geojson(ranked: Sequence[RankedDestination]) -> dict:
    """FeatureCollection with one LineString feature per candidate route."""
    features = []
    for rank, item in enumerate(ranked, start=1):
        for route in item.routes:
            features.append(
                {
                    "type": "Feature",
                    "geometry": geometry_to_geojson(route),
                    "properties": {
                        "destination": item.destination,
                        "rank": rank,
                        "route_id": route.route_id,
                        "is_primary": route.is_primary,
                        "distance_miles": route.distance_miles,
                        "duration_minutes": route.duration_minutes,
                        "crosses_danger_zone": route.route_id in item.unsafe_route_ids,
                    },
                }
            )
    return {"type": "FeatureCollection", "features": features}


def ranked_destinations_to_csv(ranked: Sequence[RankedDestination]) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "rank",
        "destination",
        "type",
        "route_id",
        "is_primary",
        "distance_miles",
        "duration_minutes",
        "crosses_danger_zone",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for rank, item in enumerate(ranked, start=1):
        for route in item.routes:
            writer.writerow(
                {
                    "rank": rank,
                    "destination": item.destination,
                    "type": item.target.category,
                    "route_id": route.route_id,
                    "is_primary": route.is_primary,
                    "distance_miles": route.distance_miles,
                    "duration_minutes": route.duration_minutes,
                    "crosses_danger_zone": route.route_id in item.unsafe_route_ids,
                }
            )
    return buffer.getvalue()
