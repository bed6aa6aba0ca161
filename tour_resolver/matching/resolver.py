"""Best-candidate selection for a single place mention."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..domain.models import (
    PlaceMention,
    Resolution,
    ScoredCandidate,
    SearchCandidate,
)
from .scoring import ConfidenceScorer


@dataclass
class CandidateResolver:
    """Picks the highest-scoring candidate for a mention.

    Candidates arrive in the search service's ranking order. On an exact
    score tie the first candidate wins, so that ranking acts as the
    tie-break. Alternatives are the first `alternatives_limit` candidates
    in that same order, not re-ranked.
    """

    scorer: ConfidenceScorer = field(default_factory=ConfidenceScorer)
    alternatives_limit: int = 3

    def resolve(
        self,
        mention: PlaceMention,
        candidates: Sequence[SearchCandidate],
        city: str,
    ) -> Resolution:
        if not candidates:
            return Resolution()

        best: Optional[ScoredCandidate] = None
        for candidate in candidates:
            score = self.scorer.score(mention, candidate, city)
            if best is None or score > best.score:
                best = ScoredCandidate(candidate=candidate, score=score)

        return Resolution(
            best=best,
            alternatives=tuple(candidates[: self.alternatives_limit]),
        )
