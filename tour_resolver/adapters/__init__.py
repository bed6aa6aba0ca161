"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems:
- Place search (Google Places, Nominatim)
- Route optimization (Google Routes)
- Place proposal (Gemini)
- Rendering engines (Folium)
- Caching (in-memory)
"""
