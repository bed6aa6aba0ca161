"""Gemini place proposer adapter.

Implements PlaceProposerPort with the google-genai SDK. The SDK client is
created once, on first use, and reused for every request handled by this
adapter instance; the container keeps the instance as a singleton.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from google import genai
from google.genai import types

from ...config import ProposalConfig, get_config
from ...domain.errors import ConfigurationError, ProposalError
from ...domain.models import TourProposal
from .parsing import parse_proposal
from .prompt import build_tour_prompt

SAFETY_SETTINGS = [
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    ),
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    ),
]


@dataclass
class GeminiPlaceProposer:
    """Place proposer backed by a Gemini model.

    Attributes:
        config: Proposal model configuration
        client: google-genai client; built from the config when None
    """

    config: ProposalConfig = field(default_factory=lambda: get_config().proposal)
    client: Optional[Any] = field(default=None, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_client(self) -> Any:
        if self.client is not None:
            return self.client
        if not self.config.api_key:
            raise ConfigurationError(
                "Gemini API key is not configured",
                setting_name="TOUR_PROPOSAL_API_KEY",
            )
        self.client = genai.Client(api_key=self.config.api_key)
        return self.client

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self.config.temperature,
            top_k=self.config.top_k,
            max_output_tokens=self.config.max_output_tokens,
            safety_settings=SAFETY_SETTINGS,
        )

    async def propose(self, intent: str) -> TourProposal:
        """Propose places for a free-text request.

        Raises:
            ConfigurationError: If no API key is configured.
            ProposalError: If the model call fails or returns unusable output.
        """
        client = self._get_client()
        prompt = build_tour_prompt(intent, max_places=self.config.max_places)

        try:
            response = await client.aio.models.generate_content(
                model=self.config.model,
                contents=prompt,
                config=self._generation_config(),
            )
        except Exception as e:
            self._logger.error(
                "Gemini request failed",
                extra={"model": self.config.model, "error": str(e)},
            )
            raise ProposalError("Gemini request failed", cause=e) from e

        text = response.text or ""
        self._logger.debug("Gemini raw output", extra={"chars": len(text)})

        proposal = parse_proposal(text, max_places=self.config.max_places)
        self._logger.info(
            "Places proposed",
            extra={"city": proposal.city, "places": len(proposal.mentions)},
        )
        return proposal
