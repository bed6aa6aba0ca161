"""Place proposal port - Abstraction over the generative model."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import TourProposal


class PlaceProposerPort(Protocol):
    """Port for turning a free-text request into proposed places.

    Implementation: adapters/proposal/gemini_adapter.py
    """

    async def propose(self, intent: str) -> TourProposal:
        """Propose a city and a list of place mentions for a request.

        Args:
            intent: The user's free-text request.

        Returns:
            The parsed proposal.

        Raises:
            ProposalError: If the model failed or its output is malformed.
        """
        ...
