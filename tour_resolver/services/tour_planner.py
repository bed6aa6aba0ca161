"""Tour planner service - Main orchestrator.

Turns a free-text request into a verified, sequenced walking itinerary:
1. Request validation
2. Place proposal
3. Concurrent verification of every proposed place
4. Re-sequencing of the verified stops
5. Navigation link
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config import LinkConfig, get_config
from ..domain.errors import (
    InvalidRequestError,
    NothingVerifiedError,
    ProposalError,
    TourResolverError,
)
from ..domain.models import Itinerary, ResolvedStop, TravelMode
from ..ports.proposal import PlaceProposerPort
from .navigation import build_maps_url
from .sequencing import WaypointSequencer
from .verification import VerificationOrchestrator


@dataclass
class TourPlannerService:
    """Main service for planning walking tours.

    Attributes:
        proposer: Proposes places for a request
        verifier: Verifies proposed places against the search service
        sequencer: Reorders verified stops along the optimal route
        link_config: Navigation link settings
        max_input_length: Longest accepted request, in characters
        travel_mode: Default travel mode when the proposal has none
    """

    proposer: PlaceProposerPort
    verifier: VerificationOrchestrator
    sequencer: WaypointSequencer
    link_config: LinkConfig = field(default_factory=lambda: get_config().link)
    max_input_length: int = 500
    travel_mode: Optional[TravelMode] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def validate_request(self, intent: str) -> str:
        """Return the stripped request or raise InvalidRequestError."""
        text = (intent or "").strip()
        if not text:
            raise InvalidRequestError("User input is required", length=0)
        if len(text) > self.max_input_length:
            raise InvalidRequestError(
                f"Input too long. Please keep it under {self.max_input_length} characters.",
                length=len(text),
            )
        return text

    async def plan(self, intent: str) -> Itinerary:
        """Plan a walking tour from natural language.

        Args:
            intent: The user's free-text request.

        Returns:
            The verified, sequenced itinerary.

        Raises:
            InvalidRequestError: If the request is empty or too long.
            ProposalError: If the proposal model failed.
            NothingVerifiedError: If no proposed place could be verified.
        """
        text = self.validate_request(intent)
        self._logger.info("Starting tour planning", extra={"request_length": len(text)})

        proposal = await self.proposer.propose(text)
        if not proposal.mentions:
            raise ProposalError("AI response contained no places")

        batch = await self.verifier.verify_batch(list(proposal.mentions), proposal.city)
        if batch.summary.nothing_verified:
            raise NothingVerifiedError(
                "No places could be verified. Please try a different search or be more specific.",
                summary=batch.summary,
            )

        stops = [ResolvedStop.from_outcome(o) for o in batch.verified_outcomes]
        travel_mode = self.travel_mode or proposal.travel_mode
        sequence = await self.sequencer.sequence(stops, travel_mode)
        if not sequence.optimized:
            self._logger.info(
                "Route order not optimized",
                extra={"reason": sequence.message, "error": sequence.error},
            )

        maps_url = build_maps_url(
            sequence.stops,
            travel_mode,
            optimized=sequence.optimized,
            config=self.link_config,
        )

        self._logger.info(
            "Tour planned",
            extra={
                "city": proposal.city,
                "verified": batch.summary.verified_count,
                "total": batch.summary.total,
                "optimized": sequence.optimized,
            },
        )
        return Itinerary(
            city=proposal.city,
            stops=sequence.stops,
            summary=batch.summary,
            sequence=sequence,
            maps_url=maps_url,
            notes=proposal.notes,
            total_estimated_walking_time=proposal.total_estimated_walking_time,
        )

    async def plan_safe(self, intent: str) -> tuple[Optional[Itinerary], Optional[str]]:
        """Plan a tour, returning an error message instead of raising.

        Returns:
            Tuple of (Itinerary or None, error message or None).
        """
        try:
            return await self.plan(intent), None
        except InvalidRequestError as e:
            return None, f"Error: {e.message}"
        except ProposalError as e:
            return None, f"Proposal error: {e}"
        except NothingVerifiedError as e:
            return None, e.message
        except TourResolverError as e:
            return None, f"Error: {e}"
        except Exception as e:
            self._logger.exception("Unexpected error in tour planning")
            return None, f"Error: {e}"

    def format_itinerary(self, itinerary: Itinerary) -> str:
        """Format an itinerary as human-readable text."""
        summary = itinerary.summary
        lines = [
            f"Walking tour in {itinerary.city}",
            f"Verified places: {summary.verified_count}/{summary.total} "
            f"({summary.verification_rate:.0f}%)",
        ]
        for index, stop in enumerate(itinerary.stops, start=1):
            confidence = stop.verification.confidence if stop.verification else 0.0
            lines.append(
                f"{index}. {stop.display_name or stop.name} - "
                f"{stop.address or 'Address not found'} ({confidence:.0%})"
            )

        stats = itinerary.sequence.stats
        if itinerary.sequence.optimized and stats is not None:
            if stats.estimated_time:
                lines.append(f"Estimated time: {stats.estimated_time}")
            if stats.distance_km is not None:
                lines.append(f"Total distance: {stats.distance_km} km")
        elif itinerary.total_estimated_walking_time:
            lines.append(f"Estimated time: {itinerary.total_estimated_walking_time}")

        if itinerary.notes:
            lines.append(f"Notes: {itinerary.notes}")
        if itinerary.maps_url:
            lines.append(f"Map: {itinerary.maps_url}")
        return "\n".join(lines)
