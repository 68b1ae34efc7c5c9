"""Pick the fastest reachable evacuation points."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence

from ...config import settings
from ...models.domain import Coordinate, DangerZone, EvacuationTarget
from ..geospatial import route_intersects_danger_zones
from .computer import RouteComputer
from .errors import RoutingError
from .models import DroppedDestination, RankedDestination, RouteCandidate, RouteOptions

logger = logging.getLogger(__name__)

FailureReporter = Callable[[DroppedDestination], None]


def log_dropped_destination(report: DroppedDestination) -> None:
    logger.warning(f"Failed to calculate route to {report.destination}: {report.error}")


class EvacuationSelector:
    """Ranks evacuation targets by the duration of their primary route.

    A failed lookup only removes that target from the ranking; it is reported
    to ``on_failure`` and the remaining targets are still processed.
    """

    def __init__(
        self,
        computer: RouteComputer | None = None,
        on_failure: FailureReporter | None = None,
        max_workers: int | None = None,
        options: RouteOptions | None = None,
    ) -> None:
        self.computer = computer or RouteComputer()
        self.on_failure = on_failure or log_dropped_destination
        self.max_workers = max_workers if max_workers is not None else settings.max_parallel_lookups
        self.options = options

    def _lookup(self, current: Coordinate, target: EvacuationTarget) -> list[RouteCandidate] | None:
        try:
            return self.computer.compute_routes(current, target.coordinate, self.options)
        except RoutingError as exc:
            self.on_failure(DroppedDestination(destination=target.name, error=exc))
            return None

    def rank_destinations(
        self,
        current: Coordinate,
        targets: Sequence[EvacuationTarget],
        danger_zones: Sequence[DangerZone] = (),
    ) -> list[RankedDestination]:
        """Return reachable targets sorted by fastest primary route.

        Targets whose lookup fails are dropped. An empty list means no target
        was reachable. Equal durations keep their input order.
        """
        if not targets:
            return []

        workers = min(self.max_workers, len(targets))
        if workers <= 1:
            outcomes = [self._lookup(current, target) for target in targets]
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() yields in submission order, whatever the completion order
                outcomes = list(executor.map(lambda target: self._lookup(current, target), targets))

        ranked: list[RankedDestination] = []
        for target, routes in zip(targets, outcomes):
            if not routes:
                continue
            unsafe = tuple(
                route.route_id
                for route in routes
                if route_intersects_danger_zones(route.geometry, danger_zones)
            )
            ranked.append(RankedDestination(target=target, routes=tuple(routes), unsafe_route_ids=unsafe))

        ranked.sort(key=lambda item: item.primary.duration_seconds)
        logger.info(f"Ranked {len(ranked)}/{len(targets)} evacuation destination(s)")
        return ranked

    def nearest_to(
        self,
        current: Coordinate,
        targets: Sequence[EvacuationTarget],
        danger_zones: Sequence[DangerZone] = (),
    ) -> Optional[RankedDestination]:
        """Fastest reachable target, or None when nothing is reachable."""
        ranked = self.rank_destinations(current, targets, danger_zones)
        return ranked[0] if ranked else None
