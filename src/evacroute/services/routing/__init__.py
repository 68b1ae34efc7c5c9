"""Evacuation routing services."""

from .computer import RouteComputer, derive_instructions
from .directions_client import DirectionsClient
from .errors import NoRouteFound, ProviderError, ProviderUnavailable, RoutingError
from .models import (
    DroppedDestination,
    InstructionStep,
    Overview,
    RankedDestination,
    RouteCandidate,
    RouteOptions,
    RouteStep,
)
from .selector import EvacuationSelector

__all__ = [
    "DirectionsClient",
    "DroppedDestination",
    "EvacuationSelector",
    "InstructionStep",
    "NoRouteFound",
    "Overview",
    "ProviderError",
    "ProviderUnavailable",
    "RankedDestination",
    "RouteCandidate",
    "RouteComputer",
    "RouteOptions",
    "RouteStep",
    "RoutingError",
    "derive_instructions",
]
