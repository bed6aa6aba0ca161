"""Navigation deep links for the final itinerary.

Builds a Google Maps directions URL: origin and destination from the
first and last stops, the stops in between as waypoints (capped), place
ids when known, and campaign parameters. When the full URL exceeds the
length ceiling, a simplified URL with only origin and destination is
returned instead.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union
from urllib.parse import quote

from ..config import LinkConfig, get_config
from ..domain.models import ResolvedStop, TravelMode

logger = logging.getLogger(__name__)

LINK_TRAVEL_MODES = {
    TravelMode.WALK: "walking",
    TravelMode.DRIVE: "driving",
    TravelMode.TRANSIT: "transit",
    TravelMode.BICYCLE: "bicycling",
}

# Encoded separators
COMMA = "%2C"
PIPE = "%7C"


def encode_component(value: str) -> str:
    """Percent-encode a query value, leaving only unreserved characters and '!'."""
    return quote(value, safe="!")


def stop_location_param(stop: ResolvedStop) -> Optional[str]:
    """Encoded address of a stop, falling back to its raw coordinates."""
    if stop.address:
        return encode_component(stop.address)
    if stop.coordinates is not None:
        return f"{stop.coordinates.latitude}{COMMA}{stop.coordinates.longitude}"
    return None


def _endpoint_params(origin: ResolvedStop, destination: ResolvedStop) -> List[str]:
    params = []
    origin_value = stop_location_param(origin)
    if origin_value:
        params.append(f"origin={origin_value}")
    destination_value = stop_location_param(destination)
    if destination_value:
        params.append(f"destination={destination_value}")
    return params


def build_maps_url(
    stops: Sequence[ResolvedStop],
    travel_mode: Union[TravelMode, str] = TravelMode.WALK,
    optimized: bool = False,
    config: Optional[LinkConfig] = None,
) -> Optional[str]:
    """Build the navigation deep link for ordered stops.

    Args:
        stops: Final ordered stops.
        travel_mode: Travel mode, routing name or link name.
        optimized: Whether the order came from route optimization; selects
            the campaign parameter.
        config: Link configuration, global config when None.

    Returns:
        The URL, or None when there are no stops.
    """
    if not stops:
        return None

    config = config or get_config().link
    mode = travel_mode if isinstance(travel_mode, TravelMode) else TravelMode.parse(travel_mode)
    campaign = config.optimized_utm_campaign if optimized else config.utm_campaign
    tracking = f"utm_source={config.utm_source}&utm_campaign={campaign}"

    origin, destination = stops[0], stops[-1]
    waypoints = list(stops[1:-1])
    if len(waypoints) > config.max_waypoints:
        logger.warning(
            "Too many waypoints for a navigation link, truncating",
            extra={"waypoints": len(waypoints), "limit": config.max_waypoints},
        )
        waypoints = waypoints[: config.max_waypoints]

    params = [f"travelmode={LINK_TRAVEL_MODES[mode]}"]
    endpoints = _endpoint_params(origin, destination)
    params.extend(endpoints)

    waypoint_values = [v for v in (stop_location_param(s) for s in waypoints) if v]
    if waypoint_values:
        params.append(f"waypoints={PIPE.join(waypoint_values)}")

    if origin.place_id:
        params.append(f"origin_place_id={encode_component(origin.place_id)}")
    if destination.place_id:
        params.append(f"destination_place_id={encode_component(destination.place_id)}")
    waypoint_ids = [encode_component(s.place_id) for s in waypoints if s.place_id]
    if waypoint_ids:
        params.append(f"waypoint_place_ids={PIPE.join(waypoint_ids)}")

    url = "&".join([config.base_url, *params, tracking])
    if len(url) <= config.max_length:
        return url

    logger.warning(
        "Navigation link exceeds length limit, keeping origin and destination only",
        extra={"length": len(url), "limit": config.max_length},
    )
    return "&".join(
        [config.base_url, f"travelmode={LINK_TRAVEL_MODES[mode]}", *endpoints, tracking]
    )
