"""Tests for the tour planner service."""

import asyncio

import pytest

from conftest import FakeProposer, FakeRouter, FakeSearch
from tour_resolver.adapters.places import GooglePlacesSearchAdapter
from tour_resolver.config import LinkConfig, PlacesConfig
from tour_resolver.domain.errors import InvalidRequestError, NothingVerifiedError, ProposalError
from tour_resolver.domain.models import RouteOptimization, TourProposal, TravelMode
from tour_resolver.services import TourPlannerService, VerificationOrchestrator, WaypointSequencer


def run(coro):
    return asyncio.run(coro)


def make_planner(proposal, search, router=None, **kwargs):
    return TourPlannerService(
        proposer=FakeProposer(proposal),
        verifier=VerificationOrchestrator(search=search),
        sequencer=WaypointSequencer(router=router or FakeRouter()),
        link_config=LinkConfig(),
        **kwargs,
    )


class TestValidateRequest:
    def test_strips_input(self):
        planner = make_planner(TourProposal(city="Lisbon"), FakeSearch({}))
        assert planner.validate_request("  museums in Lisbon ") == "museums in Lisbon"

    @pytest.mark.parametrize("intent", ["", "   ", None])
    def test_empty_request(self, intent):
        planner = make_planner(TourProposal(city="Lisbon"), FakeSearch({}))
        with pytest.raises(InvalidRequestError):
            planner.validate_request(intent)

    def test_too_long_request(self):
        planner = make_planner(TourProposal(city="Lisbon"), FakeSearch({}), max_input_length=10)
        with pytest.raises(InvalidRequestError) as excinfo:
            planner.validate_request("x" * 11)
        assert excinfo.value.length == 11


class TestPlan:
    def test_full_plan(self, lisbon_mentions, lisbon_search):
        proposal = TourProposal(city="Lisbon", mentions=tuple(lisbon_mentions), notes="Wear good shoes")
        planner = make_planner(proposal, lisbon_search)

        itinerary = run(planner.plan("A day of monuments in Lisbon"))

        assert itinerary.city == "Lisbon"
        assert itinerary.num_stops == 2
        assert [s.place_id for s in itinerary.stops] == ["ChIJ-belem", "ChIJ-jeronimos"]
        assert itinerary.summary.verified_count == 2
        assert itinerary.summary.total == 3
        assert itinerary.sequence.message == "Only 2 places, no optimization needed"
        assert itinerary.maps_url.startswith("https://www.google.com/maps/dir/?api=1")
        assert itinerary.stops[0].verification.verified is True

    def test_empty_proposal_raises(self):
        proposal = TourProposal(city="Atlantis", mentions=tuple())
        planner = make_planner(proposal, FakeSearch({}))
        with pytest.raises(ProposalError):
            run(planner.plan("lost city"))

    def test_nothing_verified_error_carries_summary(self, lisbon_mentions):
        proposal = TourProposal(city="Lisbon", mentions=tuple(lisbon_mentions))
        planner = make_planner(proposal, FakeSearch({}))
        with pytest.raises(NothingVerifiedError) as excinfo:
            run(planner.plan("monuments"))
        assert excinfo.value.summary.total == 3
        assert excinfo.value.summary.verified_count == 0

    def test_proposal_travel_mode_is_used(self, lisbon_mentions, lisbon_search):
        proposal = TourProposal(city="Lisbon", mentions=tuple(lisbon_mentions), travel_mode=TravelMode.DRIVE)
        itinerary = run(make_planner(proposal, lisbon_search).plan("drive around"))
        assert "travelmode=driving" in itinerary.maps_url

    def test_configured_travel_mode_wins(self, lisbon_mentions, lisbon_search):
        proposal = TourProposal(city="Lisbon", mentions=tuple(lisbon_mentions), travel_mode=TravelMode.DRIVE)
        planner = make_planner(proposal, lisbon_search, travel_mode=TravelMode.WALK)
        itinerary = run(planner.plan("walk around"))
        assert "travelmode=walking" in itinerary.maps_url


class TestPlanSafe:
    def test_error_message_on_invalid_request(self):
        planner = make_planner(TourProposal(city="Lisbon"), FakeSearch({}))
        itinerary, error = run(planner.plan_safe(""))
        assert itinerary is None
        assert error == "Error: User input is required"

    def test_nothing_verified_message(self, lisbon_mentions):
        planner = make_planner(TourProposal(city="Lisbon", mentions=tuple(lisbon_mentions)), FakeSearch({}))
        itinerary, error = run(planner.plan_safe("monuments"))
        assert itinerary is None
        assert error.startswith("No places could be verified")

    def test_success_has_no_error(self, lisbon_mentions, lisbon_search):
        planner = make_planner(TourProposal(city="Lisbon", mentions=tuple(lisbon_mentions)), lisbon_search)
        itinerary, error = run(planner.plan_safe("monuments"))
        assert error is None
        assert itinerary is not None

    def test_missing_search_configuration_is_reported(self, lisbon_mentions):
        search = GooglePlacesSearchAdapter(config=PlacesConfig(api_key=""))
        planner = make_planner(TourProposal(city="Lisbon", mentions=tuple(lisbon_mentions)), search)
        itinerary, error = run(planner.plan_safe("monuments"))
        assert itinerary is None
        assert error == "Error: Places API key is not configured"


class TestFormatItinerary:
    def test_optimized_stats_are_printed(self, lisbon_search):
        from tour_resolver.domain.models import PlaceMention

        mentions = (
            PlaceMention(name="Belém Tower"),
            PlaceMention(name="Jerónimos Monastery"),
            PlaceMention(name="Belém Tower"),
        )
        router = FakeRouter(RouteOptimization(permutation=(0,), duration="1830s", distance_meters=2500))
        planner = make_planner(TourProposal(city="Lisbon", mentions=mentions), lisbon_search, router=router)
        itinerary = run(planner.plan("monuments"))

        text = planner.format_itinerary(itinerary)
        assert text.splitlines()[0] == "Walking tour in Lisbon"
        assert "Verified places: 3/3 (100%)" in text
        assert "Estimated time: 31 minutes" in text
        assert "Total distance: 2.5 km" in text
        assert "Map: https://www.google.com/maps/dir/" in text

