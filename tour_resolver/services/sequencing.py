"""Waypoint sequencer - applies an externally computed visiting order.

The first stop stays the origin and the last stop stays the destination;
only the stops in between are reordered, using the permutation returned
by the route computation service. Any routing failure falls back to the
original order with an advisory message.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..domain.errors import RouteOptimizationError
from ..domain.models import (
    ResolvedStop,
    SequenceResult,
    TravelMode,
    TripStats,
)
from ..ports.routing import RouteOptimizerPort

_DURATION = re.compile(r"^\s*(\d+)(?:\.\d+)?s\s*$")

FALLBACK_MESSAGE = "Optimization failed, using original order"


def parse_duration(value: Optional[str]) -> Optional[int]:
    """Parse a '<n>s' duration string into whole seconds.

    >>> parse_duration("1830s")
    1830
    """
    if not value:
        return None
    match = _DURATION.match(value)
    return int(match.group(1)) if match else None


def is_permutation(order: Sequence[int], size: int) -> bool:
    """True when `order` is a bijection over range(size)."""
    return len(order) == size and sorted(order) == list(range(size))


@dataclass
class WaypointSequencer:
    """Reorders resolved stops along the optimal route.

    Attributes:
        router: Route computation service
    """

    router: RouteOptimizerPort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def sequence(
        self,
        stops: Sequence[ResolvedStop],
        travel_mode: TravelMode = TravelMode.WALK,
    ) -> SequenceResult:
        """Reorder intermediate stops along the optimal route.

        Args:
            stops: Resolved stops in proposal order.
            travel_mode: How the route is travelled.

        Returns:
            The final ordering; `optimized` is False whenever the original
            order was kept.
        """
        identified = tuple(stop for stop in stops if stop.place_id)

        if len(identified) < 2:
            self._logger.warning(
                "Not enough places with an identifier, keeping original order",
                extra={"stops": len(stops), "identified": len(identified)},
            )
            return SequenceResult(
                stops=tuple(stops),
                message="Insufficient place IDs for optimization",
            )

        if len(identified) == 2:
            return SequenceResult(
                stops=identified,
                message="Only 2 places, no optimization needed",
            )

        origin, destination = identified[0], identified[-1]
        intermediates = identified[1:-1]
        original_order = tuple(range(len(intermediates)))

        try:
            optimization = await self.router.compute_optimal_order(
                origin, destination, intermediates, travel_mode
            )
        except RouteOptimizationError as e:
            self._logger.warning("Route optimization failed", extra={"error": str(e)})
            return self._fallback(identified, original_order, error=str(e))
        except Exception as e:
            self._logger.exception("Unexpected error during route optimization")
            return self._fallback(identified, original_order, error=str(e) or type(e).__name__)

        permutation = optimization.permutation
        if not permutation:
            return SequenceResult(
                stops=identified,
                message="No optimization performed by API",
                original_order=original_order,
            )

        if not is_permutation(permutation, len(intermediates)):
            return self._fallback(
                identified,
                original_order,
                error=f"Invalid waypoint permutation: {list(permutation)}",
            )

        ordered = (origin, *(intermediates[i] for i in permutation), destination)
        stats = TripStats(
            duration_seconds=parse_duration(optimization.duration),
            distance_meters=optimization.distance_meters,
        )
        self._logger.info(
            "Route optimized",
            extra={
                "order": " -> ".join(str(i) for i in permutation),
                "minutes": stats.minutes,
                "distance_km": stats.distance_km,
            },
        )
        return SequenceResult(
            stops=ordered,
            optimized=True,
            stats=stats,
            message="Route order optimized",
            original_order=original_order,
            optimized_order=tuple(permutation),
        )

    @staticmethod
    def _fallback(
        stops: tuple[ResolvedStop, ...],
        original_order: tuple[int, ...],
        error: str,
    ) -> SequenceResult:
        return SequenceResult(
            stops=stops,
            message=FALLBACK_MESSAGE,
            error=error,
            original_order=original_order,
        )
