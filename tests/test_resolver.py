"""Tests for best-candidate selection."""

from conftest import make_candidate
from tour_resolver.domain.models import OperatingStatus, PlaceMention
from tour_resolver.matching import CandidateResolver, ConfidenceScorer


class TestCandidateResolver:
    def test_no_candidates(self):
        resolution = CandidateResolver().resolve(PlaceMention(name="X"), [], "Lisbon")
        assert resolution.best is None
        assert resolution.alternatives == ()

    def test_picks_highest_score_not_first(self):
        candidates = [
            make_candidate("a", "Unrelated Cafe"),
            make_candidate("b", "Belém Tower", "Lisbon"),
        ]
        resolution = CandidateResolver().resolve(PlaceMention(name="Belém Tower"), candidates, "Lisbon")
        assert resolution.best.candidate.id == "b"

    def test_tie_keeps_first_candidate(self):
        candidates = [make_candidate("first", "Belém Tower"), make_candidate("second", "Belém Tower")]
        resolution = CandidateResolver().resolve(PlaceMention(name="Belém Tower"), candidates, "")
        assert resolution.best.candidate.id == "first"

    def test_alternatives_keep_service_order(self):
        candidates = [
            make_candidate("1", "Other"),
            make_candidate("2", "Belém Tower", status=OperatingStatus.OPERATIONAL),
            make_candidate("3", "Another"),
            make_candidate("4", "More"),
        ]
        resolution = CandidateResolver(alternatives_limit=3).resolve(
            PlaceMention(name="Belém Tower"), candidates, ""
        )
        assert [c.id for c in resolution.alternatives] == ["1", "2", "3"]

    def test_best_score_matches_scorer(self):
        scorer = ConfidenceScorer()
        mention = PlaceMention(name="Museu")
        candidate = make_candidate("1", "Museum")
        resolution = CandidateResolver(scorer=scorer).resolve(mention, [candidate], "")
        assert resolution.best.score == scorer.score(mention, candidate, "")
