"""Services layer - Application orchestration.

Available services:
- TourPlannerService: Main service turning a request into an itinerary
- VerificationOrchestrator: Concurrent verification of place mentions
- WaypointSequencer: Re-sequencing of stops along the optimal route
"""

from .navigation import build_maps_url
from .sequencing import WaypointSequencer, parse_duration
from .tour_planner import TourPlannerService
from .verification import VerificationOrchestrator

__all__ = [
    "TourPlannerService",
    "VerificationOrchestrator",
    "WaypointSequencer",
    "build_maps_url",
    "parse_duration",
]
