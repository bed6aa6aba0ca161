"""Verification orchestrator - concurrent resolution of place mentions.

One search is issued per mention, all of them concurrently, and every
mention is resolved independently. A failed search only marks its own
mention as unverified; the batch itself fails only when its input is
malformed.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..domain.errors import ConfigurationError, InvalidMentionsError, PlaceSearchError
from ..domain.models import (
    BatchResult,
    BatchSummary,
    PlaceMention,
    SearchConstraints,
    VerificationOutcome,
)
from ..matching.resolver import CandidateResolver
from ..ports.search import PlaceSearchPort

DEFAULT_THRESHOLD = 0.3


@dataclass
class VerificationOrchestrator:
    """Verifies a batch of place mentions against the search service.

    Attributes:
        search: Place search service
        resolver: Candidate selection for a single mention
        constraints: Constraints sent with every search
        threshold: Confidence a mention must exceed to be verified
        max_concurrency: Maximum number of searches in flight at once
    """

    search: PlaceSearchPort
    resolver: CandidateResolver = field(default_factory=CandidateResolver)
    constraints: SearchConstraints = field(default_factory=SearchConstraints)
    threshold: float = DEFAULT_THRESHOLD
    max_concurrency: Optional[int] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def verify_batch(
        self,
        mentions: Sequence[PlaceMention],
        city: str,
    ) -> BatchResult:
        """Verify every mention concurrently.

        Args:
            mentions: Mentions to verify, in proposal order.
            city: City context appended to every query and used for scoring.

        Returns:
            Outcomes in input order and their summary.

        Raises:
            InvalidMentionsError: If `mentions` is not a list of PlaceMention.
            ConfigurationError: If the search service is not configured.
        """
        self._validate(mentions)

        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        async def bounded(mention: PlaceMention) -> VerificationOutcome:
            if semaphore is None:
                return await self.verify_one(mention, city)
            async with semaphore:
                return await self.verify_one(mention, city)

        outcomes = tuple(await asyncio.gather(*(bounded(m) for m in mentions)))
        summary = BatchSummary.from_outcomes(outcomes)

        self._logger.info(
            "Verification batch done",
            extra={
                "city": city,
                "total": summary.total,
                "verified": summary.verified_count,
                "rate": round(summary.verification_rate, 1),
            },
        )
        return BatchResult(summary=summary, outcomes=outcomes)

    async def verify_one(self, mention: PlaceMention, city: str) -> VerificationOutcome:
        """Search and resolve a single mention.

        Search failures become an unverified outcome for this mention only.

        Raises:
            ConfigurationError: If the search service is not configured.
        """
        query = f"{mention.name} {city}".strip()

        try:
            candidates = await self.search.search(query, self.constraints)
        except PlaceSearchError as e:
            self._logger.warning(
                "Search failed for mention",
                extra={"mention": mention.name, "status": e.status_code},
            )
            return VerificationOutcome.failed(mention, str(e))
        except ConfigurationError:
            raise
        except Exception as e:
            self._logger.exception(
                "Unexpected error while searching mention",
                extra={"mention": mention.name},
            )
            return VerificationOutcome.failed(mention, str(e) or type(e).__name__)

        if not candidates:
            return VerificationOutcome.failed(mention, "No matching places found")

        resolution = self.resolver.resolve(mention, candidates, city)
        assert resolution.best is not None

        confidence = resolution.best.score
        verified = confidence > self.threshold
        self._logger.info(
            "Mention resolved",
            extra={
                "mention": mention.name,
                "match": resolution.best.candidate.display_name,
                "confidence": round(confidence, 3),
                "verdict": "VERIFIED" if verified else "UNVERIFIED",
            },
        )
        return VerificationOutcome(
            mention=mention,
            verified=verified,
            confidence=confidence,
            resolved=resolution.best.candidate,
            alternatives=resolution.alternatives,
        )

    @staticmethod
    def _validate(mentions: object) -> None:
        if not isinstance(mentions, (list, tuple)):
            raise InvalidMentionsError(
                "Mentions must be a list",
                received_type=type(mentions).__name__,
            )
        for item in mentions:
            if not isinstance(item, PlaceMention):
                raise InvalidMentionsError(
                    "Every mention must be a PlaceMention",
                    received_type=type(item).__name__,
                )
