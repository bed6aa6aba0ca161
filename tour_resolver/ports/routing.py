"""Route optimization port - Abstraction over the route computation service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import ResolvedStop, RouteOptimization, TravelMode


class RouteOptimizerPort(Protocol):
    """Port for computing the optimal visiting order of intermediate stops.

    Implementation: adapters/routing/google_routes_adapter.py
    """

    async def compute_optimal_order(
        self,
        origin: ResolvedStop,
        destination: ResolvedStop,
        intermediates: Sequence[ResolvedStop],
        travel_mode: TravelMode,
    ) -> RouteOptimization:
        """Ask for the optimal permutation of the intermediate stops.

        Args:
            origin: First stop, fixed.
            destination: Last stop, fixed.
            intermediates: Stops in between, in their current order.
            travel_mode: How the route is travelled.

        Returns:
            Permutation of intermediate indices plus duration and distance.

        Raises:
            RouteOptimizationError: If the service failed or returned no route.
        """
        ...
