"""Nominatim (OpenStreetMap) place search adapter.

Alternative PlaceSearchPort implementation for deployments without a
Places API key. geopy's client is blocking, so each call runs in a worker
thread; the shared RateLimiter keeps concurrent searches within the
public instance's one-request-per-second policy.

Nominatim carries no ratings or business status, so candidates from this
adapter only score on name and locale signals.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from geopy.exc import GeocoderServiceError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from ...config import PlacesConfig, get_config
from ...domain.errors import PlaceSearchError
from ...domain.models import (
    Coordinates,
    OperatingStatus,
    SearchCandidate,
    SearchConstraints,
)


def location_to_candidate(location: Any) -> SearchCandidate:
    """Convert a geopy Location into a SearchCandidate."""
    raw = location.raw or {}
    osm_type = raw.get("osm_type")
    osm_id = raw.get("osm_id")
    if osm_type and osm_id:
        place_id = f"{osm_type}/{osm_id}"
    else:
        place_id = str(raw.get("place_id") or "")

    address = str(location.address or raw.get("display_name") or "")
    name = raw.get("name") or address.split(",")[0]
    tags = [t for t in (raw.get("category") or raw.get("class"), raw.get("type")) if t]

    return SearchCandidate(
        id=place_id,
        display_name=str(name),
        formatted_address=address,
        coordinates=Coordinates(
            latitude=float(location.latitude),
            longitude=float(location.longitude),
        ),
        operating_status=OperatingStatus.UNKNOWN,
        category_tags=tuple(str(t) for t in tags),
    )


@dataclass
class NominatimSearchAdapter:
    """Place search backed by OpenStreetMap Nominatim via geopy.

    Attributes:
        config: Places configuration
    """

    config: PlacesConfig = field(default_factory=lambda: get_config().places)

    _geocode_fn: Optional[Any] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_geocoder(self) -> Any:
        """Get or initialize the geocoder with rate limiting."""
        if self._geocode_fn is not None:
            return self._geocode_fn

        geolocator = Nominatim(
            user_agent=self.config.nominatim_user_agent,
            timeout=self.config.timeout_seconds,
        )
        self._geocode_fn = RateLimiter(
            geolocator.geocode,
            min_delay_seconds=self.config.nominatim_rate_limit_delay,
            max_retries=1,
            swallow_exceptions=False,
        )
        return self._geocode_fn

    def _search_blocking(
        self, query: str, constraints: SearchConstraints
    ) -> List[SearchCandidate]:
        geocode = self._get_geocoder()
        locations = geocode(
            query,
            exactly_one=False,
            limit=constraints.max_results,
            language=constraints.language_code,
            addressdetails=True,
            namedetails=True,
        )
        return [location_to_candidate(loc) for loc in locations or []]

    async def search(
        self,
        query: str,
        constraints: SearchConstraints,
    ) -> Sequence[SearchCandidate]:
        """Search places matching a free-text query.

        Raises:
            PlaceSearchError: If Nominatim is unavailable or refused the query.
        """
        try:
            candidates = await asyncio.to_thread(self._search_blocking, query, constraints)
        except GeocoderServiceError as e:
            self._logger.warning(
                "Nominatim search error",
                extra={"query": query, "error": str(e)},
            )
            raise PlaceSearchError(
                f"Nominatim error for '{query}'",
                query=query,
                cause=e,
            ) from e

        self._logger.info(
            "Nominatim search done",
            extra={"query": query, "results": len(candidates)},
        )
        return tuple(candidates)
