"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    InvalidMentionsError,
    InvalidRequestError,
    NothingVerifiedError,
    PlaceSearchError,
    ProposalError,
    RenderingError,
    RouteOptimizationError,
    TourResolverError,
)
from .models import (
    BatchResult,
    BatchSummary,
    Coordinates,
    Itinerary,
    OperatingStatus,
    PlaceMention,
    Resolution,
    ResolvedStop,
    RouteOptimization,
    PlacePhoto,
    ScoredCandidate,
    SearchCandidate,
    SearchConstraints,
    SequenceResult,
    TourProposal,
    TravelMode,
    TripStats,
    VerificationOutcome,
)

__all__ = [
    # Models
    "Coordinates",
    "PlaceMention",
    "SearchCandidate",
    "SearchConstraints",
    "PlacePhoto",
    "ScoredCandidate",
    "Resolution",
    "VerificationOutcome",
    "BatchSummary",
    "BatchResult",
    "ResolvedStop",
    "RouteOptimization",
    "TripStats",
    "SequenceResult",
    "TourProposal",
    "Itinerary",
    "OperatingStatus",
    "TravelMode",
    # Errors
    "TourResolverError",
    "InvalidRequestError",
    "InvalidMentionsError",
    "ProposalError",
    "PlaceSearchError",
    "RouteOptimizationError",
    "NothingVerifiedError",
    "ConfigurationError",
    "RenderingError",
]
