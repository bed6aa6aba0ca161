"""Routing adapters - Implementations of RouteOptimizerPort.

Available implementations:
- GoogleRoutesOptimizerAdapter: Google Routes API waypoint optimization
"""

from .google_routes_adapter import GoogleRoutesOptimizerAdapter, build_routes_request

__all__ = ["GoogleRoutesOptimizerAdapter", "build_routes_request"]
