"""Tests for the confidence scorer."""

import pytest

from conftest import make_candidate
from tour_resolver.config import VerificationConfig
from tour_resolver.domain.models import OperatingStatus, PlaceMention
from tour_resolver.matching.scoring import ConfidenceScorer, ScoringWeights


@pytest.fixture
def scorer():
    return ConfidenceScorer(region_aliases=("portugal", "lisboa", "lisbon"))


class TestNameSignals:
    def test_exact_name_match_scores_at_least_exact_weight(self, scorer):
        mention = PlaceMention(name="Belém Tower")
        candidate = make_candidate("1", "belém tower")
        assert scorer.score(mention, candidate, "") >= 0.6

    def test_containment_scores_contains_weight(self, scorer):
        mention = PlaceMention(name="Jerónimos")
        candidate = make_candidate("1", "Jerónimos Monastery")
        breakdown = scorer.breakdown(mention, candidate, "")
        assert breakdown["name"] == pytest.approx(0.5)
        assert "tokens" not in breakdown

    def test_similarity_path_adds_token_overlap(self, scorer):
        mention = PlaceMention(name="Museum of Art")
        candidate = make_candidate("1", "Museu de Arte")
        breakdown = scorer.breakdown(mention, candidate, "")
        assert 0 < breakdown["name"] < 0.6
        # "museum" ~ "museu"; "art" is contained in "arte"
        assert breakdown["tokens"] == pytest.approx(0.15)

    def test_empty_mention_name_gets_no_name_credit(self, scorer):
        breakdown = scorer.breakdown(PlaceMention(name=""), make_candidate("1", "Anything"), "")
        assert breakdown["name"] == 0.0


class TestLocaleSignal:
    def test_city_in_address(self, scorer):
        candidate = make_candidate("1", "X", "Rua Augusta, Lisbon, Portugal")
        assert scorer.breakdown(PlaceMention(name="Y"), candidate, "Lisbon")["locale"] == 0.3

    def test_region_alias_gives_partial_credit(self, scorer):
        candidate = make_candidate("1", "X", "1400-038 Lisboa")
        assert scorer.breakdown(PlaceMention(name="Y"), candidate, "Porto")["locale"] == 0.15

    def test_no_alias_configured(self):
        candidate = make_candidate("1", "X", "1400-038 Lisboa")
        assert ConfidenceScorer().breakdown(PlaceMention(name="Y"), candidate, "Porto")["locale"] == 0.0

    def test_empty_city_gets_no_city_credit(self):
        candidate = make_candidate("1", "X", "Somewhere")
        assert ConfidenceScorer().breakdown(PlaceMention(name="Y"), candidate, "")["locale"] == 0.0


class TestStatusAndQuality:
    @pytest.mark.parametrize(
        "status,expected",
        [
            (OperatingStatus.OPERATIONAL, 0.05),
            (OperatingStatus.CLOSED_TEMPORARILY, 0.025),
            (OperatingStatus.CLOSED_PERMANENTLY, 0.0),
            (OperatingStatus.UNKNOWN, 0.0),
        ],
    )
    def test_status_bonus(self, scorer, status, expected):
        candidate = make_candidate("1", "X", status=status)
        assert scorer.breakdown(PlaceMention(name="Y"), candidate, "")["status"] == pytest.approx(expected)

    def test_quality_bonus(self, scorer):
        candidate = make_candidate("1", "X", rating=4.0, rating_count=1000)
        assert scorer.breakdown(PlaceMention(name="Y"), candidate, "")["quality"] == pytest.approx(0.05)

    def test_quality_below_thresholds(self, scorer):
        candidate = make_candidate("1", "X", rating=3.9, rating_count=999)
        assert scorer.breakdown(PlaceMention(name="Y"), candidate, "")["quality"] == 0.0


class TestScore:
    def test_score_is_capped_at_one(self, scorer):
        mention = PlaceMention(name="Belém Tower")
        candidate = make_candidate(
            "1",
            "Belém Tower",
            "Lisbon, Portugal",
            rating=4.8,
            rating_count=90000,
            status=OperatingStatus.OPERATIONAL,
        )
        assert scorer.score(mention, candidate, "Lisbon") == pytest.approx(1.0)
        assert sum(scorer.breakdown(mention, candidate, "Lisbon").values()) == pytest.approx(1.0)

    def test_score_within_bounds(self, scorer):
        score = scorer.score(PlaceMention(name="abc"), make_candidate("1", "xyz"), "")
        assert 0.0 <= score <= 1.0

    def test_lisbon_spelling_variant_clears_threshold(self, scorer):
        mention = PlaceMention(name="Time Out Market")
        candidate = make_candidate(
            "1",
            "Time Out Market Lisboa",
            "Av. 24 de Julho 49, 1200-479 Lisboa, Portugal",
            status=OperatingStatus.OPERATIONAL,
        )
        assert scorer.score(mention, candidate, "Lisbon") > 0.3

    def test_custom_weights(self):
        scorer = ConfidenceScorer(weights=ScoringWeights(exact_name=0.9))
        assert scorer.score(PlaceMention(name="A Place"), make_candidate("1", "a place"), "") == pytest.approx(0.9)


class TestWorkedExamples:
    def test_translated_name_in_lisbon_clears_threshold(self):
        scorer = ConfidenceScorer(region_aliases=VerificationConfig().region_aliases)
        mention = PlaceMention(name="National Museum")
        candidate = make_candidate(
            "1",
            "Museu Nacional",
            "Lisboa, Portugal",
            status=OperatingStatus.OPERATIONAL,
        )
        breakdown = scorer.breakdown(mention, candidate, "Lisbon")

        assert breakdown["tokens"] == pytest.approx(0.15)
        assert breakdown["locale"] == pytest.approx(0.15)
        assert breakdown["status"] == pytest.approx(0.05)
        assert scorer.score(mention, candidate, "Lisbon") > 0.3

    def test_two_empty_names_are_an_exact_match(self):
        score = ConfidenceScorer().score(PlaceMention(name=""), make_candidate("1", ""), "Lisbon")
        assert score >= 0.6

    def test_blank_names_are_an_exact_match(self):
        breakdown = ConfidenceScorer().breakdown(PlaceMention(name="  "), make_candidate("1", ""), "")
        assert breakdown["name"] == pytest.approx(0.6)
