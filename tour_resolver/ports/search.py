"""Place search port - Abstraction over the geospatial search index.

Implementations:
- adapters/places/google_places_adapter.py (GooglePlacesSearchAdapter)
- adapters/places/nominatim_adapter.py (NominatimSearchAdapter)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import SearchCandidate, SearchConstraints


class PlaceSearchPort(Protocol):
    """Port for free-text place search.

    Candidates are returned in the service's own ranking order, which the
    resolver relies on as a tie-break.
    """

    async def search(
        self,
        query: str,
        constraints: SearchConstraints,
    ) -> Sequence[SearchCandidate]:
        """Search places matching a free-text query.

        Args:
            query: Free-text query, usually '<place name> <city>'.
            constraints: Result count, language and region hints.

        Returns:
            Candidates in ranking order; empty when nothing matched.

        Raises:
            PlaceSearchError: If the service answered with a non-success status.
        """
        ...
