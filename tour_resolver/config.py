"""Centralized configuration using Pydantic Settings.

Every tunable of the tour resolver lives here: search and routing
endpoints, the verification threshold, the concurrency bound, the
proposal model and the navigation link limits.

Configuration can be overridden via environment variables:
- TOUR_PLACES_API_KEY=...
- TOUR_VERIFY_THRESHOLD=0.4
- TOUR_VERIFY_MAX_CONCURRENCY=4
- TOUR_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlacesConfig(BaseSettings):
    """Place search configuration.

    Environment variables prefixed with TOUR_PLACES_.
    """

    model_config = SettingsConfigDict(env_prefix="TOUR_PLACES_")

    provider: Literal["google", "nominatim"] = "google"
    api_key: str = ""
    search_url: str = "https://places.googleapis.com/v1/places:searchText"
    photo_base_url: str = "https://places.googleapis.com/v1"
    photo_max_px: int = 400
    max_results: int = 5
    language_code: str = "en"
    region_code: str = "US"
    timeout_seconds: float = 10.0
    cache_ttl_seconds: Optional[float] = 3600.0
    nominatim_user_agent: str = "walking-tour-resolver"
    nominatim_rate_limit_delay: float = 1.0


class RoutesConfig(BaseSettings):
    """Route optimization configuration.

    Environment variables prefixed with TOUR_ROUTES_.
    """

    model_config = SettingsConfigDict(env_prefix="TOUR_ROUTES_")

    api_key: str = ""
    compute_url: str = "https://routes.googleapis.com/directions/v2:computeRoutes"
    language_code: str = "en-US"
    units: Literal["METRIC", "IMPERIAL"] = "METRIC"
    timeout_seconds: float = 15.0


class VerificationConfig(BaseSettings):
    """Place verification configuration.

    Environment variables prefixed with TOUR_VERIFY_.
    """

    model_config = SettingsConfigDict(env_prefix="TOUR_VERIFY_")

    # Low because proposed coordinates are never cross-checked.
    threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    max_concurrency: int = Field(default=13, ge=1)
    alternatives_limit: int = 3
    region_aliases: tuple[str, ...] = ("portugal", "lisboa", "lisbon")


class ProposalConfig(BaseSettings):
    """Generative model configuration for the place proposal step.

    Environment variables prefixed with TOUR_PROPOSAL_.
    """

    model_config = SettingsConfigDict(env_prefix="TOUR_PROPOSAL_")

    api_key: str = ""
    model: str = "gemini-2.5-flash"
    temperature: float = 0.3
    top_k: int = 1
    max_output_tokens: int = 8192
    max_places: int = 13
    max_input_length: int = 500


class LinkConfig(BaseSettings):
    """Navigation deep link configuration.

    Environment variables prefixed with TOUR_LINK_.
    """

    model_config = SettingsConfigDict(env_prefix="TOUR_LINK_")

    base_url: str = "https://www.google.com/maps/dir/?api=1"
    max_length: int = 2048
    max_waypoints: int = 9
    utm_source: str = "ai_travel_planner"
    utm_campaign: str = "walking_route_generation"
    optimized_utm_campaign: str = "optimized_walking_route"


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with TOUR_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TOUR_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.verification.threshold)
        print(config.places.max_results)

    Environment variables prefixed with TOUR_.
    """

    model_config = SettingsConfigDict(env_prefix="TOUR_")

    places: PlacesConfig = Field(default_factory=PlacesConfig)
    routes: RoutesConfig = Field(default_factory=RoutesConfig)
    verification: VerificationConfig = Field(default_factory=VerificationConfig)
    proposal: ProposalConfig = Field(default_factory=ProposalConfig)
    link: LinkConfig = Field(default_factory=LinkConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    default_travel_mode: Literal["WALK", "DRIVE", "TRANSIT", "BICYCLE"] = "WALK"


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
