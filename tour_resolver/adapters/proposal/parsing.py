"""Parsing and validation of the proposal model's JSON output.

Model output is distrusted: it may be wrapped in markdown fences, cut off
by the token limit, or miss required fields. Anything that does not
validate is rejected with a ProposalError carrying the raw text.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...domain.errors import ProposalError
from ...domain.models import PlaceMention, TourProposal, TravelMode

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")

# The last key of the requested format; its absence means the output was cut off.
_COMPLETION_MARKER = '"total_estimated_walking_time"'


class _ProposedPlace(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    description: Optional[str] = None
    reasoning: Optional[str] = None


class _RoutePreferences(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    travel_mode: Optional[str] = None


class _ProposalPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    city: str = Field(min_length=1)
    places: List[_ProposedPlace]
    total_estimated_walking_time: Optional[str] = None
    notes: Optional[str] = None
    route_preferences: Optional[_RoutePreferences] = None


def clean_model_output(text: str) -> str:
    """Strip surrounding whitespace and markdown code fences."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", cleaned))
    return cleaned.strip()


def is_truncated(cleaned: str) -> bool:
    return _COMPLETION_MARKER not in cleaned or not cleaned.endswith("}")


def parse_proposal(text: str, max_places: int = 13) -> TourProposal:
    """Parse raw model output into a TourProposal.

    Args:
        text: Raw model output.
        max_places: Upper bound on the number of proposed places.

    Returns:
        The validated proposal, capped at `max_places` mentions.

    Raises:
        ProposalError: If the output is truncated, not JSON, or incomplete.
    """
    cleaned = clean_model_output(text or "")

    if is_truncated(cleaned):
        raise ProposalError(
            "AI response was truncated. Please try a shorter or more specific request.",
            raw_response=text,
            truncated=True,
        )

    try:
        payload = _ProposalPayload.model_validate_json(cleaned)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise ProposalError(
            f"Invalid JSON response from AI: {location or 'payload'}: {first.get('msg')}",
            raw_response=text,
            cause=e,
        ) from e

    places = payload.places
    if len(places) > max_places:
        logger.warning(
            "Proposal exceeds place limit, truncating",
            extra={"proposed": len(places), "limit": max_places},
        )
        places = places[:max_places]

    preferences = payload.route_preferences
    return TourProposal(
        city=payload.city.strip(),
        mentions=tuple(
            PlaceMention(
                name=place.name.strip(),
                category=place.type.strip(),
                description=place.description or "",
                reasoning=place.reasoning or "",
            )
            for place in places
        ),
        total_estimated_walking_time=payload.total_estimated_walking_time or "",
        notes=payload.notes or "",
        travel_mode=TravelMode.parse(preferences.travel_mode if preferences else None),
    )
