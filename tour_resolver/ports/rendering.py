"""Rendering port - Abstraction for itinerary map generation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import ResolvedStop


class MapRendererPort(Protocol):
    """Port for map rendering.

    Implementation: adapters/rendering/folium_adapter.py
    """

    def render(
        self,
        stops: Sequence[ResolvedStop],
        output_path: Path,
    ) -> Path:
        """Render the itinerary on a map and save to file.

        Args:
            stops: Ordered stops of the itinerary.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.
        """
        ...
