"""Command-line launcher for the walking tour resolver.

Reads the request from the command line (or asks for it), plans the tour
and prints the itinerary. `--map PATH` also saves an interactive map.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from tour_resolver.container import get_container
from tour_resolver.domain.errors import RenderingError
from tour_resolver.observability import configure_logging
from tour_resolver.ports.rendering import MapRendererPort
from tour_resolver.services import TourPlannerService


def main() -> None:
    parser = argparse.ArgumentParser(description="Plan a verified walking tour.")
    parser.add_argument("request", nargs="*", help="Free-text tour request")
    parser.add_argument("--map", type=Path, default=None, help="Save an HTML map here")
    args = parser.parse_args()

    request = " ".join(args.request).strip()
    if not request:
        request = input("Describe your walking tour: ").strip()

    container = get_container()
    configure_logging(container.config.observability)
    planner: TourPlannerService = container.resolve(TourPlannerService)

    itinerary, error = asyncio.run(planner.plan_safe(request))
    if itinerary is None:
        print(error)
        sys.exit(1)

    print(planner.format_itinerary(itinerary))

    if args.map is not None:
        renderer: MapRendererPort = container.resolve(MapRendererPort)
        try:
            path = renderer.render(itinerary.stops, args.map)
        except RenderingError as e:
            print(f"Map not saved: {e}")
            sys.exit(1)
        print(f"Map saved to {path}")


if __name__ == "__main__":
    main()
