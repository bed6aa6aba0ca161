"""Google Routes API adapter for waypoint order optimization.

Implements RouteOptimizerPort over `directions/v2:computeRoutes` with
`optimizeWaypointOrder` set. Stops are addressed by place id only; the
sequencer never calls this adapter with stops lacking one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

import httpx

from ...config import RoutesConfig, get_config
from ...domain.errors import ConfigurationError, RouteOptimizationError
from ...domain.models import ResolvedStop, RouteOptimization, TravelMode

FIELD_MASK = ",".join(
    [
        "routes.optimizedIntermediateWaypointIndex",
        "routes.duration",
        "routes.distanceMeters",
        "routes.legs",
    ]
)


def build_routes_request(
    origin: ResolvedStop,
    destination: ResolvedStop,
    intermediates: Sequence[ResolvedStop],
    travel_mode: TravelMode,
    language_code: str = "en-US",
    units: str = "METRIC",
) -> Dict[str, Any]:
    """Build the computeRoutes request body.

    Routing preference is only accepted for DRIVE and TRANSIT, and route
    modifiers only for DRIVE.
    """
    body: Dict[str, Any] = {
        "origin": {"placeId": origin.place_id},
        "destination": {"placeId": destination.place_id},
        "intermediates": [
            {"placeId": stop.place_id, "via": False} for stop in intermediates
        ],
        "travelMode": travel_mode.value,
        "optimizeWaypointOrder": True,
        "computeAlternativeRoutes": False,
        "languageCode": language_code,
        "units": units,
    }
    if travel_mode in (TravelMode.DRIVE, TravelMode.TRANSIT):
        body["routingPreference"] = "TRAFFIC_UNAWARE"
    if travel_mode is TravelMode.DRIVE:
        body["routeModifiers"] = {
            "avoidTolls": True,
            "avoidHighways": False,
            "avoidFerries": False,
        }
    return body


@dataclass
class GoogleRoutesOptimizerAdapter:
    """Route optimizer backed by the Google Routes API.

    Attributes:
        config: Routes configuration
        client: Shared HTTP client; a short-lived one is opened per call if None
    """

    config: RoutesConfig = field(default_factory=lambda: get_config().routes)
    client: Optional[httpx.AsyncClient] = field(default=None, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def _post(self, body: Dict[str, Any]) -> httpx.Response:
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.config.api_key,
            "X-Goog-FieldMask": FIELD_MASK,
        }
        if self.client is not None:
            return await self.client.post(self.config.compute_url, json=body, headers=headers)
        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            return await client.post(self.config.compute_url, json=body, headers=headers)

    async def compute_optimal_order(
        self,
        origin: ResolvedStop,
        destination: ResolvedStop,
        intermediates: Sequence[ResolvedStop],
        travel_mode: TravelMode,
    ) -> RouteOptimization:
        """Ask the Routes API for the optimal intermediate order.

        Raises:
            ConfigurationError: If no API key is configured.
            RouteOptimizationError: On non-success status, transport failure
                or an empty route list.
        """
        if not self.config.api_key:
            raise ConfigurationError(
                "Routes API key is not configured",
                setting_name="TOUR_ROUTES_API_KEY",
            )

        body = build_routes_request(
            origin,
            destination,
            intermediates,
            travel_mode,
            language_code=self.config.language_code,
            units=self.config.units,
        )
        self._logger.debug("Routes optimization request", extra={"body": body})

        try:
            response = await self._post(body)
        except httpx.HTTPError as e:
            raise RouteOptimizationError("Routes request failed", cause=e) from e

        if response.is_error:
            raise RouteOptimizationError(
                f"Routes API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        routes = (response.json() or {}).get("routes") or []
        if not routes:
            raise RouteOptimizationError("No routes returned from API")

        route = routes[0]
        permutation = route.get("optimizedIntermediateWaypointIndex")
        distance = route.get("distanceMeters")
        return RouteOptimization(
            permutation=tuple(int(i) for i in permutation) if permutation else None,
            duration=route.get("duration"),
            distance_meters=int(distance) if distance is not None else None,
        )
