"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters: the proposal model, the place search index, the route
computation service, caching and map rendering.
"""

from .cache import CachePort
from .proposal import PlaceProposerPort
from .rendering import MapRendererPort
from .routing import RouteOptimizerPort
from .search import PlaceSearchPort

__all__ = [
    "PlaceProposerPort",
    "PlaceSearchPort",
    "RouteOptimizerPort",
    "MapRendererPort",
    "CachePort",
]
