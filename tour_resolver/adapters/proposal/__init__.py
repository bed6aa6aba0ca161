"""Proposal adapters - Implementations of PlaceProposerPort.

Available implementations:
- GeminiPlaceProposer: Gemini model through the google-genai SDK
"""

from .gemini_adapter import GeminiPlaceProposer
from .parsing import clean_model_output, parse_proposal
from .prompt import build_tour_prompt

__all__ = [
    "GeminiPlaceProposer",
    "build_tour_prompt",
    "clean_model_output",
    "parse_proposal",
]
