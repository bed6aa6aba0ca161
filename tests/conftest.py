"""Shared fixtures and fakes for the tour resolver tests."""

import os
import sys
from typing import Dict, List, Optional, Sequence

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tour_resolver.config import reset_config
from tour_resolver.container import reset_container
from tour_resolver.domain.errors import PlaceSearchError
from tour_resolver.domain.models import (
    Coordinates,
    OperatingStatus,
    PlaceMention,
    ResolvedStop,
    RouteOptimization,
    SearchCandidate,
    SearchConstraints,
    TourProposal,
)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate every test from the caller's TOUR_* environment."""
    for key in list(os.environ):
        if key.startswith("TOUR_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


def make_candidate(
    place_id: str,
    name: str,
    address: str = "",
    rating: Optional[float] = None,
    rating_count: Optional[int] = None,
    status: OperatingStatus = OperatingStatus.UNKNOWN,
    coordinates: Optional[Coordinates] = None,
) -> SearchCandidate:
    return SearchCandidate(
        id=place_id,
        display_name=name,
        formatted_address=address,
        coordinates=coordinates,
        rating=rating,
        rating_count=rating_count,
        operating_status=status,
    )


def make_stop(name: str, place_id: Optional[str] = None, address: Optional[str] = None) -> ResolvedStop:
    return ResolvedStop(name=name, place_id=place_id, address=address, display_name=name)


class FakeSearch:
    """PlaceSearchPort answering from a dict of query -> candidates or error."""

    def __init__(self, results: Dict[str, object]):
        self.results = results
        self.queries: List[str] = []

    async def search(self, query: str, constraints: SearchConstraints) -> Sequence[SearchCandidate]:
        self.queries.append(query)
        result = self.results.get(query, ())
        if isinstance(result, Exception):
            raise result
        return result


class FakeRouter:
    """RouteOptimizerPort returning a canned optimization or raising."""

    def __init__(self, result=None, error: Optional[Exception] = None):
        self.result = result or RouteOptimization()
        self.error = error
        self.calls: List[tuple] = []

    async def compute_optimal_order(self, origin, destination, intermediates, travel_mode):
        self.calls.append((origin, destination, tuple(intermediates), travel_mode))
        if self.error is not None:
            raise self.error
        return self.result


class FakeProposer:
    """PlaceProposerPort returning a canned proposal."""

    def __init__(self, proposal: TourProposal):
        self.proposal = proposal
        self.requests: List[str] = []

    async def propose(self, intent: str) -> TourProposal:
        self.requests.append(intent)
        return self.proposal


@pytest.fixture
def lisbon_mentions():
    return [
        PlaceMention(name="Belém Tower", category="monument"),
        PlaceMention(name="Jerónimos Monastery", category="monument"),
        PlaceMention(name="Atlantis Lost Museum", category="museum"),
    ]


@pytest.fixture
def lisbon_search():
    return FakeSearch(
        {
            "Belém Tower Lisbon": (
                make_candidate(
                    "ChIJ-belem",
                    "Belém Tower",
                    "Av. Brasília, 1400-038 Lisboa, Portugal",
                    rating=4.6,
                    rating_count=80000,
                    status=OperatingStatus.OPERATIONAL,
                    coordinates=Coordinates(38.6916, -9.2160),
                ),
            ),
            "Jerónimos Monastery Lisbon": (
                make_candidate(
                    "ChIJ-jeronimos",
                    "Jerónimos Monastery",
                    "Praça do Império 1400-206 Lisboa, Lisbon, Portugal",
                    rating=4.7,
                    rating_count=100000,
                    status=OperatingStatus.OPERATIONAL,
                    coordinates=Coordinates(38.6979, -9.2068),
                ),
            ),
            "Atlantis Lost Museum Lisbon": PlaceSearchError(
                "API Error: 503 - unavailable", status_code=503
            ),
        }
    )


