"""Rendering adapters - Implementations of MapRendererPort.

Available implementations:
- FoliumItineraryRenderer: Interactive HTML maps with Folium
"""

from .folium_adapter import FoliumItineraryRenderer

__all__ = ["FoliumItineraryRenderer"]
