"""Typed domain errors for the walking tour resolver.

Every error inherits from TourResolverError and can optionally wrap the
root cause exception for debugging. Services decide which of them are
recovered locally (search, routing) and which reach the caller (input,
proposal, nothing verified).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import BatchSummary


@dataclass
class TourResolverError(Exception):
    """Base error for the tour resolver domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidRequestError(TourResolverError):
    """The free-text user request was empty or too long.

    Attributes:
        length: Length of the rejected request
    """

    length: int = 0


@dataclass
class InvalidMentionsError(TourResolverError):
    """The mention list handed to a verification batch is malformed.

    Attributes:
        received_type: Type name of what was received instead
    """

    received_type: str = ""


@dataclass
class ProposalError(TourResolverError):
    """The proposal model failed or returned unusable output.

    Attributes:
        raw_response: Raw model output, when there was one
        truncated: Whether the output looked cut off
    """

    raw_response: Optional[str] = field(default=None, repr=False)
    truncated: bool = False


@dataclass
class PlaceSearchError(TourResolverError):
    """The place search service answered with a non-success status.

    Attributes:
        query: The search query that failed
        status_code: HTTP status code, if any
    """

    query: str = ""
    status_code: Optional[int] = None


@dataclass
class RouteOptimizationError(TourResolverError):
    """The route computation service could not optimize the order.

    Attributes:
        status_code: HTTP status code, if any
    """

    status_code: Optional[int] = None


@dataclass
class NothingVerifiedError(TourResolverError):
    """Not a single proposed place could be verified.

    Attributes:
        summary: Summary of the batch that produced no verified place
    """

    summary: Optional[BatchSummary] = None


@dataclass
class ConfigurationError(TourResolverError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""


@dataclass
class RenderingError(TourResolverError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
