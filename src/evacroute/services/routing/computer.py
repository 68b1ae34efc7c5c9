"""Turn directions provider answers into ranked route candidates."""

from __future__ import annotations

import logging
from typing import Any

from ...models.domain import Coordinate
from .directions_client import DirectionsClient, decode_polyline
from .errors import NoRouteFound, ProviderError
from .models import (
    InstructionStep,
    RouteCandidate,
    RouteOptions,
    RouteStep,
    meters_to_miles,
    seconds_to_minutes,
)

logger = logging.getLogger(__name__)


def _parse_geometry(geometry: Any) -> tuple[Coordinate, ...]:
    if not geometry:
        return ()
    if isinstance(geometry, str):
        return tuple(decode_polyline(geometry))
    if isinstance(geometry, dict):
        return tuple(Coordinate(longitude=float(lon), latitude=float(lat)) for lon, lat, *_ in geometry.get("coordinates", []))
    raise ProviderError(None, f"Unsupported route geometry type: {type(geometry).__name__}")


def _parse_steps(raw_route: dict) -> tuple[RouteStep, ...]:
    legs = raw_route.get("legs") or []
    if not legs:
        return ()
    steps: list[RouteStep] = []
    for raw_step in legs[0].get("steps") or []:
        maneuver = raw_step.get("maneuver") or {}
        steps.append(
            RouteStep(
                instruction=maneuver.get("instruction", ""),
                distance_meters=float(raw_step.get("distance", 0.0)),
                duration_seconds=float(raw_step.get("duration", 0.0)),
                maneuver_type=maneuver.get("type"),
                name=raw_step.get("name") or None,
            )
        )
    return tuple(steps)


def _to_candidate(index: int, raw_route: dict, traffic_aware: bool) -> RouteCandidate:
    try:
        legs = raw_route.get("legs") or []
        summary = legs[0].get("summary") if legs else None
        distance = float(raw_route["distance"])
        duration = float(raw_route["duration"])
        if distance < 0 or duration < 0:
            raise ValueError(f"negative distance {distance} or duration {duration}")
        return RouteCandidate(
            route_id=index,
            geometry=_parse_geometry(raw_route.get("geometry")),
            distance_meters=distance,
            duration_seconds=duration,
            steps=_parse_steps(raw_route),
            # Provider order is trusted: the first route is the recommended one.
            is_primary=index == 0,
            traffic_aware=traffic_aware,
            summary=summary or None,
        )
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        raise ProviderError(None, f"Malformed route {index} in provider response: {exc}") from exc


class RouteComputer:
    """Computes candidate routes between two points through a directions client."""

    def __init__(self, client: DirectionsClient | None = None) -> None:
        self.client = client or DirectionsClient()

    def compute_routes(
        self,
        start: Coordinate,
        end: Coordinate,
        options: RouteOptions | None = None,
    ) -> list[RouteCandidate]:
        """Return the provider's routes as candidates, primary first.

        Raises:
            ProviderUnavailable: the provider could not be reached
            ProviderError: the provider answered with a failure
            NoRouteFound: the provider answered with zero routes
        """
        data = self.client.route(start, end, options or RouteOptions())
        raw_routes = data.get("routes") or []
        if not isinstance(raw_routes, list):
            raise ProviderError(None, f"Malformed provider response: routes is a {type(raw_routes).__name__}")
        if not raw_routes:
            raise NoRouteFound(f"No routes found from {start.as_lon_lat()} to {end.as_lon_lat()}")

        traffic_aware = bool(getattr(self.client, "traffic_aware", False))
        candidates = [_to_candidate(index, raw, traffic_aware) for index, raw in enumerate(raw_routes)]
        logger.debug(f"Computed {len(candidates)} route candidate(s) to {end.as_lon_lat()}")
        return candidates

    @staticmethod
    def derive_instructions(route: RouteCandidate) -> list[InstructionStep]:
        return [
            InstructionStep(
                step=index,
                instruction=step.instruction,
                distance_miles=meters_to_miles(step.distance_meters),
                duration_minutes=seconds_to_minutes(step.duration_seconds),
            )
            for index, step in enumerate(route.steps, start=1)
        ]


def derive_instructions(route: RouteCandidate) -> list[InstructionStep]:
    """Turn-by-turn instructions for one candidate, 1-indexed, in route order."""
    return RouteComputer.derive_instructions(route)

