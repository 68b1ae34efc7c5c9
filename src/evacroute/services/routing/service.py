"""Routing orchestration service used by the HTTP endpoints."""

from __future__ import annotations

import logging

from ...data.evacuation_points import find_evacuation_points
from ...models.domain import EvacuationTarget
from ...schemas.routing import (
    EvacuationRequest,
    EvacuationResponse,
    InstructionsRequest,
    InstructionsResponse,
    InstructionStepModel,
    RankedDestinationModel,
    RouteCandidateModel,
    RouteRequest,
    RouteResponse,
)
from ..outputs.routing_formatter import (
    instructions_to_json,
    ranked_destinations_to_json,
    route_candidate_to_json,
)
from .computer import RouteComputer
from .directions_client import DirectionsClient
from .models import RankedDestination, RouteOptions
from .selector import EvacuationSelector

logger = logging.getLogger(__name__)


class RouteIndexError(LookupError):
    """Requested candidate index does not exist in the computed result."""


def _build_computer() -> RouteComputer:
    try:
        client = DirectionsClient()
    except ValueError as e:
        logger.error(f"Directions client initialization failed: {e}")
        raise ValueError(
            "Directions provider is not configured. Please check EVAC_DIRECTIONS_BASE_URL "
            "and EVAC_DIRECTIONS_ACCESS_TOKEN settings."
        ) from e
    return RouteComputer(client)


def _request_options(payload: RouteRequest) -> RouteOptions:
    return payload.options.to_domain() if payload.options else RouteOptions()


def compute_routes(payload: RouteRequest) -> RouteResponse:
    computer = _build_computer()
    routes = computer.compute_routes(payload.start.to_domain(), payload.end.to_domain(), _request_options(payload))
    return RouteResponse(routes=[RouteCandidateModel(**route_candidate_to_json(route)) for route in routes])


def route_instructions(payload: InstructionsRequest) -> InstructionsResponse:
    computer = _build_computer()
    routes = computer.compute_routes(payload.start.to_domain(), payload.end.to_domain(), _request_options(payload))
    if payload.route_id >= len(routes):
        raise RouteIndexError(f"Route {payload.route_id} not found; provider returned {len(routes)} route(s).")
    instructions = computer.derive_instructions(routes[payload.route_id])
    return InstructionsResponse(
        route_id=payload.route_id,
        instructions=[InstructionStepModel(**item) for item in instructions_to_json(instructions)],
    )


def _resolve_targets(payload: EvacuationRequest) -> list[EvacuationTarget]:
    if payload.evacuation_points is not None:
        return [point.to_domain() for point in payload.evacuation_points]
    targets = find_evacuation_points(payload.point_names)
    if not targets:
        raise ValueError("No evacuation points available for the request.")
    return targets


def _rank(payload: EvacuationRequest) -> tuple[list[EvacuationTarget], list[RankedDestination]]:
    targets = _resolve_targets(payload)
    if not targets:
        return targets, []
    selector = EvacuationSelector(computer=_build_computer())
    ranked = selector.rank_destinations(
        payload.current_location.to_domain(),
        targets,
        [zone.to_domain() for zone in payload.danger_zones],
    )
    return targets, ranked


def rank_evacuation_points(payload: EvacuationRequest) -> EvacuationResponse:
    targets, ranked = _rank(payload)
    dropped = len(targets) - len(ranked)
    if not ranked:
        status = "none"
    elif dropped:
        status = "partial"
    else:
        status = "ok"
    return EvacuationResponse(
        status=status,
        requested=len(targets),
        dropped=dropped,
        destinations=[RankedDestinationModel(**item) for item in ranked_destinations_to_json(ranked)],
    )


def ranked_evacuation_points(payload: EvacuationRequest) -> list[RankedDestination]:
    return _rank(payload)[1]


def nearest_evacuation_point(payload: EvacuationRequest) -> RankedDestinationModel | None:
    targets = _resolve_targets(payload)
    if not targets:
        return None
    selector = EvacuationSelector(computer=_build_computer())
    nearest = selector.nearest_to(
        payload.current_location.to_domain(),
        targets,
        [zone.to_domain() for zone in payload.danger_zones],
    )
    if nearest is None:
        return None
    return RankedDestinationModel(**ranked_destinations_to_json([nearest])[0])
