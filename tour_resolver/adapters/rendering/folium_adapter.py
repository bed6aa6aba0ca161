"""Folium itinerary map renderer.

Draws the ordered stops as markers (green origin, red destination, blue
in between) joined by a straight polyline. Stops without coordinates are
left off the map but keep their place in the numbering.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

import folium

from ...domain.errors import RenderingError
from ...domain.models import ResolvedStop


def _popup_html(index: int, stop: ResolvedStop) -> str:
    lines = [f"<b>{index}. {html.escape(stop.display_name or stop.name)}</b>"]
    if stop.address:
        lines.append(html.escape(stop.address))
    if stop.rating is not None:
        lines.append(f"Rating: {stop.rating:.1f} ({stop.rating_count or 0})")
    return "<br>".join(lines)


@dataclass
class FoliumItineraryRenderer:
    """Folium-based interactive map renderer.

    Implements MapRendererPort.

    Attributes:
        zoom_start: Initial zoom level, street level by default
    """

    zoom_start: int = 14

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render(
        self,
        stops: Sequence[ResolvedStop],
        output_path: Path,
    ) -> Path:
        """Render the itinerary on a map and save it as HTML.

        Raises:
            RenderingError: If no stop has coordinates or saving fails.
        """
        located = [
            (i, stop) for i, stop in enumerate(stops, start=1) if stop.coordinates is not None
        ]
        if not located:
            raise RenderingError(
                "Cannot render an itinerary without coordinates",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering itinerary map",
            extra={"stops": len(located), "output_path": str(output_path)},
        )

        points = [
            [stop.coordinates.latitude, stop.coordinates.longitude]  # type: ignore[union-attr]
            for _, stop in located
        ]
        center = [
            sum(p[0] for p in points) / len(points),
            sum(p[1] for p in points) / len(points),
        ]

        try:
            m = folium.Map(location=center, zoom_start=self.zoom_start)

            last = len(stops)
            for (index, stop), point in zip(located, points):
                icon_color = "green" if index == 1 else "red" if index == last else "blue"
                folium.Marker(
                    location=point,
                    popup=_popup_html(index, stop),
                    tooltip=f"{index}. {stop.name}",
                    icon=folium.Icon(color=icon_color),
                ).add_to(m)

            if len(points) >= 2:
                folium.PolyLine(points, weight=3, color="blue", opacity=0.8).add_to(m)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))
        except OSError as e:
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            ) from e

        return output_path
