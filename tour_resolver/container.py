"""Application wiring.

Binds each port and service type to a factory. Bindings are lazy: the
HTTP adapters, the geocoder and the Gemini client are only built when a
service that needs them is first resolved, and shared from then on.
Tests rebind single ports with fakes and keep the rest of the wiring.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config

_UNSET = object()


@dataclass
class _Binding:
    factory: Callable[[], Any]
    shared: bool
    instance: Any = _UNSET


@dataclass
class Container:
    """Lazy registry of factories keyed by port or service type.

    Example:
        container = Container.create_default()
        planner = container.resolve(TourPlannerService)

        container.register(PlaceSearchPort, lambda: FakeSearch())

    Attributes:
        config: Configuration the default bindings are built from
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[type[Any], _Binding] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        key: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind `key` to `factory`, dropping any instance built before.

        With `singleton=False` every resolve calls the factory again.
        """
        with self._lock:
            self._bindings[key] = _Binding(factory=factory, shared=singleton)

    def resolve(self, key: type[Any]) -> Any:
        """Return the instance bound to `key`.

        Raises:
            KeyError: If nothing is bound to `key`.
        """
        with self._lock:
            binding = self._bindings.get(key)
            if binding is None:
                raise KeyError(f"Nothing bound to {key!r}")
            if not binding.shared:
                return binding.factory()
            if binding.instance is _UNSET:
                binding.instance = binding.factory()
            return binding.instance

    def is_registered(self, key: type[Any]) -> bool:
        return key in self._bindings

    def clear_singletons(self) -> None:
        """Forget built instances; bindings stay."""
        with self._lock:
            for binding in self._bindings.values():
                binding.instance = _UNSET

    def clear_all(self) -> None:
        with self._lock:
            self._bindings.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Bind every port and service to its production implementation.

        The search provider is picked by `config.places.provider`.
        """
        from .adapters.cache import InMemoryCache
        from .adapters.places import GooglePlacesSearchAdapter, NominatimSearchAdapter
        from .adapters.proposal import GeminiPlaceProposer
        from .adapters.rendering import FoliumItineraryRenderer
        from .adapters.routing import GoogleRoutesOptimizerAdapter
        from .domain.models import SearchConstraints
        from .matching import CandidateResolver, ConfidenceScorer
        from .ports.cache import CachePort
        from .ports.proposal import PlaceProposerPort
        from .ports.rendering import MapRendererPort
        from .ports.routing import RouteOptimizerPort
        from .ports.search import PlaceSearchPort
        from .services import (
            TourPlannerService,
            VerificationOrchestrator,
            WaypointSequencer,
        )

        config = config or get_config()
        container = cls(config=config)

        cache: InMemoryCache[Any] = InMemoryCache(
            name="places",
            default_ttl_seconds=config.places.cache_ttl_seconds,
            max_size=1024,
        )
        container.register(CachePort, lambda: cache)

        def create_search() -> PlaceSearchPort:
            if config.places.provider == "nominatim":
                return NominatimSearchAdapter(config.places)
            return GooglePlacesSearchAdapter(config.places, cache)

        container.register(PlaceSearchPort, create_search)
        container.register(
            RouteOptimizerPort,
            lambda: GoogleRoutesOptimizerAdapter(config.routes),
        )
        container.register(
            PlaceProposerPort,
            lambda: GeminiPlaceProposer(config.proposal),
        )
        container.register(MapRendererPort, lambda: FoliumItineraryRenderer())

        def create_resolver() -> CandidateResolver:
            scorer = ConfidenceScorer(region_aliases=config.verification.region_aliases)
            return CandidateResolver(
                scorer=scorer,
                alternatives_limit=config.verification.alternatives_limit,
            )

        container.register(CandidateResolver, create_resolver)

        container.register(
            VerificationOrchestrator,
            lambda: VerificationOrchestrator(
                search=container.resolve(PlaceSearchPort),
                resolver=container.resolve(CandidateResolver),
                constraints=SearchConstraints(
                    max_results=config.places.max_results,
                    language_code=config.places.language_code,
                    region_code=config.places.region_code,
                ),
                threshold=config.verification.threshold,
                max_concurrency=config.verification.max_concurrency,
            ),
        )
        container.register(
            WaypointSequencer,
            lambda: WaypointSequencer(router=container.resolve(RouteOptimizerPort)),
        )

        def create_planner() -> TourPlannerService:
            from .domain.models import TravelMode

            return TourPlannerService(
                proposer=container.resolve(PlaceProposerPort),
                verifier=container.resolve(VerificationOrchestrator),
                sequencer=container.resolve(WaypointSequencer),
                link_config=config.link,
                max_input_length=config.proposal.max_input_length,
                travel_mode=TravelMode.parse(config.default_travel_mode),
            )

        container.register(TourPlannerService, create_planner)

        return container


_default: Optional[Container] = None
_default_lock = threading.Lock()


def get_container() -> Container:
    """Return the process-wide container, building it on first call."""
    global _default
    with _default_lock:
        if _default is None:
            _default = Container.create_default()
        return _default


def reset_container() -> None:
    """Drop the process-wide container so the next call rebuilds it."""
    global _default
    with _default_lock:
        _default = None
