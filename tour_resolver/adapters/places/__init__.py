"""Place search adapters - Implementations of PlaceSearchPort.

Available implementations:
- GooglePlacesSearchAdapter: Google Places (New) text search
- NominatimSearchAdapter: OpenStreetMap Nominatim geocoding
"""

from .google_places_adapter import GooglePlacesSearchAdapter
from .nominatim_adapter import NominatimSearchAdapter

__all__ = ["GooglePlacesSearchAdapter", "NominatimSearchAdapter"]
