"""Immutable domain models for the walking tour resolver.

All models are frozen dataclasses with slots. They carry no external
dependencies and describe the core concepts: what the proposal step
mentions, what the search service returns, how a mention was resolved,
and the ordered itinerary built from the resolved stops.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class OperatingStatus(Enum):
    """Business status reported by the place search service."""

    OPERATIONAL = "OPERATIONAL"
    CLOSED_TEMPORARILY = "CLOSED_TEMPORARILY"
    CLOSED_PERMANENTLY = "CLOSED_PERMANENTLY"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Optional[str]) -> OperatingStatus:
        """Map a raw status string to a member, defaulting to UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.UNKNOWN


class TravelMode(Enum):
    """Travel modes understood by the routing service."""

    WALK = "WALK"
    DRIVE = "DRIVE"
    TRANSIT = "TRANSIT"
    BICYCLE = "BICYCLE"

    @classmethod
    def parse(cls, value: Optional[str]) -> TravelMode:
        """Accept routing names (WALK) and link names (walking)."""
        aliases = {
            "walking": cls.WALK,
            "driving": cls.DRIVE,
            "transit": cls.TRANSIT,
            "bicycling": cls.BICYCLE,
        }
        if not value:
            return cls.WALK
        raw = value.strip()
        if raw.lower() in aliases:
            return aliases[raw.lower()]
        try:
            return cls(raw.upper())
        except ValueError:
            return cls.WALK


@dataclass(frozen=True, slots=True)
class Coordinates:
    """GPS coordinates of a resolved place."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )


@dataclass(frozen=True, slots=True)
class PlaceMention:
    """An unverified place reference produced by the proposal step.

    Attributes:
        name: Place name as proposed
        category: Free-form category (museum, park, restaurant...)
        description: Short description of the place
        reasoning: Why the place fits the request
    """

    name: str
    category: str = ""
    description: str = ""
    reasoning: str = ""


@dataclass(frozen=True, slots=True)
class SearchCandidate:
    """One real-world place returned by the search service.

    Attributes:
        id: Stable identifier from the search service
        display_name: Name as displayed by the search service
        formatted_address: Full postal address
        coordinates: Location of the place, if known
        rating: Average user rating, if known
        rating_count: Number of user ratings, if known
        operating_status: Business status
        category_tags: Category tags (e.g. 'museum', 'tourist_attraction')
        photo_refs: Opaque photo references
    """

    id: str
    display_name: str
    formatted_address: str = ""
    coordinates: Optional[Coordinates] = None
    rating: Optional[float] = None
    rating_count: Optional[int] = None
    operating_status: OperatingStatus = OperatingStatus.UNKNOWN
    category_tags: tuple[str, ...] = field(default_factory=tuple)
    photo_refs: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class PlacePhoto:
    """Image bytes of one place photo, as served by the search service."""

    name: str
    content: bytes = field(repr=False)
    content_type: str = "image/jpeg"


@dataclass(frozen=True, slots=True)
class ScoredCandidate:
    """A candidate paired with its match confidence in [0, 1]."""

    candidate: SearchCandidate
    score: float


@dataclass(frozen=True, slots=True)
class SearchConstraints:
    """Constraints sent along with every search query."""

    max_results: int = 5
    language_code: str = "en"
    region_code: str = "US"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of picking the best candidate for one mention.

    Attributes:
        best: Highest-scoring candidate, None when there were no candidates
        alternatives: Up to N candidates in search-service order
    """

    best: Optional[ScoredCandidate] = None
    alternatives: tuple[SearchCandidate, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class VerificationOutcome:
    """Verification result for a single mention.

    `resolved` is present iff the search returned at least one candidate,
    regardless of `verified`.

    Attributes:
        mention: The mention that was verified
        verified: Whether confidence cleared the acceptance threshold
        confidence: Confidence of the best candidate (0 on failure)
        resolved: Best candidate, if any
        alternatives: Manual fallbacks in search-service order
        failure_reason: Why the mention could not be verified
    """

    mention: PlaceMention
    verified: bool
    confidence: float
    resolved: Optional[SearchCandidate] = None
    alternatives: tuple[SearchCandidate, ...] = field(default_factory=tuple)
    failure_reason: Optional[str] = None

    @classmethod
    def failed(cls, mention: PlaceMention, reason: str) -> VerificationOutcome:
        """Build the soft-failure outcome for a mention."""
        return cls(mention=mention, verified=False, confidence=0.0, failure_reason=reason)


@dataclass(frozen=True, slots=True)
class BatchSummary:
    """Aggregate over the outcomes of one verification batch.

    Attributes:
        total: Number of mentions in the batch
        verified_count: Mentions that cleared the threshold
        unverified_count: Mentions that did not
        verification_rate: Percentage of verified mentions, 0.0 when empty
    """

    total: int
    verified_count: int
    unverified_count: int
    verification_rate: float

    @property
    def is_empty(self) -> bool:
        """True when the batch held no mentions at all."""
        return self.total == 0

    @property
    def nothing_verified(self) -> bool:
        """True when not a single mention was verified."""
        return self.verified_count == 0

    @classmethod
    def from_outcomes(cls, outcomes: tuple[VerificationOutcome, ...]) -> BatchSummary:
        total = len(outcomes)
        verified = sum(1 for outcome in outcomes if outcome.verified)
        rate = (verified / total * 100) if total > 0 else 0.0
        return cls(
            total=total,
            verified_count=verified,
            unverified_count=total - verified,
            verification_rate=rate,
        )


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Summary plus per-mention outcomes, in input order."""

    summary: BatchSummary
    outcomes: tuple[VerificationOutcome, ...] = field(default_factory=tuple)

    @property
    def verified_outcomes(self) -> tuple[VerificationOutcome, ...]:
        return tuple(o for o in self.outcomes if o.verified)


@dataclass(frozen=True, slots=True)
class ResolvedStop:
    """A proposed place merged with its authoritative record.

    Attributes:
        name: Proposed name
        category: Proposed category
        description: Proposed description
        reasoning: Proposed reasoning
        address: Formatted address of the resolved place
        coordinates: Location of the resolved place
        place_id: Identifier of the resolved place
        display_name: Name of the resolved place
        rating: Rating of the resolved place
        rating_count: Rating count of the resolved place
        operating_status: Business status of the resolved place
        category_tags: Category tags of the resolved place
        photo_refs: Photo references of the resolved place
        verification: The outcome this stop was built from
    """

    name: str
    category: str = ""
    description: str = ""
    reasoning: str = ""
    address: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    place_id: Optional[str] = None
    display_name: Optional[str] = None
    rating: Optional[float] = None
    rating_count: Optional[int] = None
    operating_status: OperatingStatus = OperatingStatus.UNKNOWN
    category_tags: tuple[str, ...] = field(default_factory=tuple)
    photo_refs: tuple[str, ...] = field(default_factory=tuple)
    verification: Optional[VerificationOutcome] = field(default=None, repr=False)

    @classmethod
    def from_outcome(cls, outcome: VerificationOutcome) -> ResolvedStop:
        mention = outcome.mention
        place = outcome.resolved
        if place is None:
            return cls(
                name=mention.name,
                category=mention.category,
                description=mention.description,
                reasoning=mention.reasoning,
                verification=outcome,
            )
        return cls(
            name=mention.name,
            category=mention.category,
            description=mention.description,
            reasoning=mention.reasoning,
            address=place.formatted_address or None,
            coordinates=place.coordinates,
            place_id=place.id or None,
            display_name=place.display_name,
            rating=place.rating,
            rating_count=place.rating_count,
            operating_status=place.operating_status,
            category_tags=place.category_tags,
            photo_refs=place.photo_refs,
            verification=outcome,
        )


@dataclass(frozen=True, slots=True)
class RouteOptimization:
    """Response of the route-computation service.

    Attributes:
        permutation: Optimal order of intermediate indices, if computed
        duration: Total duration as '<n>s', if given
        distance_meters: Total distance in meters, if given
    """

    permutation: Optional[tuple[int, ...]] = None
    duration: Optional[str] = None
    distance_meters: Optional[int] = None


@dataclass(frozen=True, slots=True)
class TripStats:
    """Human-readable statistics of a sequenced trip."""

    duration_seconds: Optional[int] = None
    distance_meters: Optional[int] = None

    @property
    def minutes(self) -> Optional[int]:
        """Duration in whole minutes, halves rounded up."""
        if self.duration_seconds is None:
            return None
        return (self.duration_seconds + 30) // 60

    @property
    def distance_km(self) -> Optional[float]:
        if self.distance_meters is None:
            return None
        return round(self.distance_meters / 1000, 2)

    @property
    def estimated_time(self) -> Optional[str]:
        minutes = self.minutes
        return f"{minutes} minutes" if minutes is not None else None


@dataclass(frozen=True, slots=True)
class SequenceResult:
    """Result of re-sequencing the resolved stops.

    Attributes:
        stops: Final ordered stops (origin first, destination last)
        optimized: Whether an external permutation was applied
        stats: Trip statistics when the routing service provided them
        message: Advisory message describing what happened
        error: Failure detail when the routing service failed
        original_order: Intermediate indices before optimization
        optimized_order: Intermediate indices after optimization
    """

    stops: tuple[ResolvedStop, ...]
    optimized: bool = False
    stats: Optional[TripStats] = None
    message: str = ""
    error: Optional[str] = None
    original_order: tuple[int, ...] = field(default_factory=tuple)
    optimized_order: tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class TourProposal:
    """Parsed output of the proposal step.

    Attributes:
        city: City the tour takes place in
        mentions: Proposed places, in the proposed visiting order
        total_estimated_walking_time: Model's own estimate, free text
        notes: Route considerations from the model
        travel_mode: Requested travel mode
    """

    city: str
    mentions: tuple[PlaceMention, ...] = field(default_factory=tuple)
    total_estimated_walking_time: str = ""
    notes: str = ""
    travel_mode: TravelMode = TravelMode.WALK


@dataclass(frozen=True, slots=True)
class Itinerary:
    """Final annotated itinerary handed to the presentation layer."""

    city: str
    stops: tuple[ResolvedStop, ...]
    summary: BatchSummary
    sequence: SequenceResult
    maps_url: Optional[str] = None
    notes: str = ""
    total_estimated_walking_time: str = ""

    @property
    def num_stops(self) -> int:
        return len(self.stops)
