"""Confidence scoring between a proposed place and a search candidate.

The score is an additive combination of independent signals, capped at
1.0. Name agreement dominates because the coordinates produced by the
proposal step are unreliable and never used; presence of the city in the
candidate address is the strongest independent cross-check; business
status and popularity only break near-ties.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Sequence

from ..domain.models import OperatingStatus, PlaceMention, SearchCandidate
from .similarity import similarity, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringWeights:
    """Weights and cut-offs of every scoring signal."""

    exact_name: float = 0.60
    contains_name: float = 0.50
    similar_name: float = 0.60
    token_overlap: float = 0.15
    token_similarity_cutoff: float = 0.8
    city_in_address: float = 0.30
    region_hint: float = 0.15
    operational: float = 0.05
    temporarily_closed: float = 0.025
    high_rating: float = 0.03
    high_rating_threshold: float = 4.0
    many_ratings: float = 0.02
    many_ratings_threshold: int = 1000


@dataclass
class ConfidenceScorer:
    """Scores how well a search candidate matches a place mention.

    Attributes:
        weights: Signal weights
        region_aliases: Regional names granting partial locale credit when
            the city itself is absent from the address
    """

    weights: ScoringWeights = field(default_factory=ScoringWeights)
    region_aliases: Sequence[str] = ()

    def score(
        self,
        mention: PlaceMention,
        candidate: SearchCandidate,
        city: str,
    ) -> float:
        """Return the match confidence in [0, 1]."""
        total = sum(self.breakdown(mention, candidate, city).values())
        return min(total, 1.0)

    def breakdown(
        self,
        mention: PlaceMention,
        candidate: SearchCandidate,
        city: str,
    ) -> Dict[str, float]:
        """Return the contribution of each signal, before capping."""
        contributions: Dict[str, float] = {}
        contributions.update(self._name_signals(mention.name, candidate.display_name))
        contributions["locale"] = self._locale_signal(candidate.formatted_address, city)
        contributions["status"] = self._status_signal(candidate.operating_status)
        contributions["quality"] = self._quality_signal(candidate)

        logger.debug(
            "Scored candidate",
            extra={
                "mention": mention.name,
                "candidate": candidate.display_name,
                "contributions": contributions,
            },
        )
        return contributions

    def _name_signals(self, mention_name: str, candidate_name: str) -> Dict[str, float]:
        w = self.weights
        proposed = mention_name.strip().casefold()
        found = candidate_name.strip().casefold()

        if proposed == found:
            return {"name": w.exact_name}
        if not proposed or not found:
            return {"name": 0.0}
        if proposed in found or found in proposed:
            return {"name": w.contains_name}

        return {
            "name": similarity(proposed, found) * w.similar_name,
            "tokens": self._token_overlap(proposed, found),
        }

    def _token_overlap(self, proposed: str, found: str) -> float:
        proposed_tokens = tokenize(proposed)
        if not proposed_tokens:
            return 0.0
        found_tokens = tokenize(found)

        cutoff = self.weights.token_similarity_cutoff
        matched = 0
        for token in proposed_tokens:
            if any(
                token in other
                or other in token
                or similarity(token, other) > cutoff
                for other in found_tokens
            ):
                matched += 1

        return matched / len(proposed_tokens) * self.weights.token_overlap

    def _locale_signal(self, address: str, city: str) -> float:
        address = (address or "").casefold()
        if not address:
            return 0.0

        city = (city or "").strip().casefold()
        if city and city in address:
            return self.weights.city_in_address
        if any(alias.casefold() in address for alias in self.region_aliases if alias):
            return self.weights.region_hint
        return 0.0

    def _status_signal(self, status: OperatingStatus) -> float:
        if status is OperatingStatus.OPERATIONAL:
            return self.weights.operational
        if status is OperatingStatus.CLOSED_TEMPORARILY:
            return self.weights.temporarily_closed
        return 0.0

    def _quality_signal(self, candidate: SearchCandidate) -> float:
        w = self.weights
        bonus = 0.0
        if candidate.rating is not None and candidate.rating >= w.high_rating_threshold:
            bonus += w.high_rating
        if (
            candidate.rating_count is not None
            and candidate.rating_count >= w.many_ratings_threshold
        ):
            bonus += w.many_ratings
        return bonus
