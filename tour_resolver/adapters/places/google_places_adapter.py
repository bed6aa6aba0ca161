"""Google Places (New) text search adapter.

Implements PlaceSearchPort over the `places:searchText` endpoint with:
- An explicit field mask, so each call is billed for the fields we score on
- Per-query caching via CachePort
- Non-success statuses and transport failures raised as PlaceSearchError
- Photo media download for the photo references carried by candidates
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence

import httpx

from ...config import PlacesConfig, get_config
from ...domain.errors import ConfigurationError, PlaceSearchError
from ...domain.models import (
    Coordinates,
    OperatingStatus,
    PlacePhoto,
    SearchCandidate,
    SearchConstraints,
)
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache

FIELD_MASK = ",".join(
    [
        "places.displayName",
        "places.formattedAddress",
        "places.location",
        "places.rating",
        "places.userRatingCount",
        "places.businessStatus",
        "places.types",
        "places.id",
        "places.photos",
    ]
)


def _display_name(record: Mapping[str, Any]) -> str:
    raw = record.get("displayName")
    if isinstance(raw, Mapping):
        return str(raw.get("text") or "")
    return str(raw or "")


def _coordinates(record: Mapping[str, Any]) -> Optional[Coordinates]:
    location = record.get("location")
    if not isinstance(location, Mapping):
        return None
    try:
        return Coordinates(
            latitude=float(location["latitude"]),
            longitude=float(location["longitude"]),
        )
    except (KeyError, TypeError, ValueError):
        return None


def parse_place(record: Mapping[str, Any]) -> SearchCandidate:
    """Convert one Places API record into a SearchCandidate."""
    rating = record.get("rating")
    rating_count = record.get("userRatingCount")
    photos = record.get("photos") or []
    return SearchCandidate(
        id=str(record.get("id") or ""),
        display_name=_display_name(record),
        formatted_address=str(record.get("formattedAddress") or ""),
        coordinates=_coordinates(record),
        rating=float(rating) if rating is not None else None,
        rating_count=int(rating_count) if rating_count is not None else None,
        operating_status=OperatingStatus.parse(record.get("businessStatus")),
        category_tags=tuple(str(t) for t in record.get("types") or []),
        photo_refs=tuple(
            str(p["name"]) for p in photos if isinstance(p, Mapping) and p.get("name")
        ),
    )


@dataclass
class GooglePlacesSearchAdapter:
    """Place search backed by the Google Places text search API.

    Attributes:
        config: Places configuration
        cache: Cache of candidate lists keyed by normalized query
        client: Shared HTTP client; a short-lived one is opened per call if None
    """

    config: PlacesConfig = field(default_factory=lambda: get_config().places)
    cache: Optional[CachePort[tuple[SearchCandidate, ...]]] = None
    client: Optional[httpx.AsyncClient] = field(default=None, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.cache is None:
            self.cache = InMemoryCache(
                name="places",
                default_ttl_seconds=self.config.cache_ttl_seconds,
            )

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.config.api_key,
            "X-Goog-FieldMask": FIELD_MASK,
        }

    async def _post(self, body: Dict[str, Any]) -> httpx.Response:
        if self.client is not None:
            return await self.client.post(
                self.config.search_url, json=body, headers=self._headers()
            )
        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            return await client.post(
                self.config.search_url, json=body, headers=self._headers()
            )

    def _require_key(self) -> None:
        if not self.config.api_key:
            raise ConfigurationError(
                "Places API key is not configured",
                setting_name="TOUR_PLACES_API_KEY",
            )

    async def search(
        self,
        query: str,
        constraints: SearchConstraints,
    ) -> Sequence[SearchCandidate]:
        """Search places matching a free-text query.

        Args:
            query: Free-text query.
            constraints: Result count, language and region hints.

        Returns:
            Candidates in the service's ranking order.

        Raises:
            ConfigurationError: If no API key is configured.
            PlaceSearchError: On non-success status or transport failure.
        """
        self._require_key()

        cache_key = (
            f"{query.strip().lower()}:{constraints.max_results}:"
            f"{constraints.language_code}:{constraints.region_code}"
        )
        assert self.cache is not None
        cached = self.cache.get(cache_key)
        if cached is not None:
            self._logger.debug("Places cache hit", extra={"query": query})
            return cached

        body = {
            "textQuery": query,
            "maxResultCount": constraints.max_results,
            "languageCode": constraints.language_code,
            "regionCode": constraints.region_code,
        }
        self._logger.debug("Places search request", extra={"body": body})

        try:
            response = await self._post(body)
        except httpx.HTTPError as e:
            raise PlaceSearchError(
                f"Places request failed for '{query}'",
                query=query,
                cause=e,
            ) from e

        if response.is_error:
            self._logger.warning(
                "Places search error",
                extra={"query": query, "status": response.status_code},
            )
            raise PlaceSearchError(
                f"API Error: {response.status_code} - {response.text}",
                query=query,
                status_code=response.status_code,
            )

        data = response.json() or {}
        candidates = tuple(
            parse_place(record)
            for record in data.get("places") or []
            if isinstance(record, Mapping)
        )
        self._logger.info(
            "Places search done",
            extra={"query": query, "results": len(candidates)},
        )

        self.cache.set(cache_key, candidates)
        return candidates

    async def fetch_photo(
        self,
        name: str,
        max_width_px: Optional[int] = None,
        max_height_px: Optional[int] = None,
    ) -> PlacePhoto:
        """Download the image behind a photo reference.

        Args:
            name: Photo reference from `SearchCandidate.photo_refs`,
                e.g. 'places/<place id>/photos/<photo id>'.
            max_width_px: Maximum width, `photo_max_px` when None.
            max_height_px: Maximum height, `photo_max_px` when None.

        Raises:
            ConfigurationError: If no API key is configured.
            PlaceSearchError: If the name is empty, or on non-success status
                or transport failure.
        """
        name = (name or "").strip().strip("/")
        if not name:
            raise PlaceSearchError("Photo name is required")
        self._require_key()

        url = f"{self.config.photo_base_url.rstrip('/')}/{name}/media"
        params = {
            "maxWidthPx": max_width_px or self.config.photo_max_px,
            "maxHeightPx": max_height_px or self.config.photo_max_px,
            "key": self.config.api_key,
        }

        try:
            if self.client is not None:
                response = await self.client.get(url, params=params, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                    response = await client.get(url, params=params, follow_redirects=True)
        except httpx.HTTPError as e:
            raise PlaceSearchError(
                f"Photo request failed for '{name}'", query=name, cause=e
            ) from e

        if response.is_error:
            self._logger.warning(
                "Failed to fetch photo",
                extra={"photo": name, "status": response.status_code},
            )
            raise PlaceSearchError(
                "Failed to fetch photo",
                query=name,
                status_code=response.status_code,
            )

        return PlacePhoto(
            name=name,
            content=response.content,
            content_type=response.headers.get("content-type", "image/jpeg"),
        )
