"""Tests for the Gemini place proposer."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from tour_resolver.adapters.proposal import GeminiPlaceProposer
from tour_resolver.config import ProposalConfig
from tour_resolver.domain.errors import ConfigurationError, ProposalError

VALID_OUTPUT = json.dumps(
    {
        "city": "Porto",
        "places": [{"name": "Livraria Lello", "type": "bookstore"}],
        "total_estimated_walking_time": "1 hour",
        "notes": "",
    }
)


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=MagicMock(text=VALID_OUTPUT))
    return client


class TestGeminiPlaceProposer:
    def test_propose(self, mock_client):
        proposer = GeminiPlaceProposer(config=ProposalConfig(api_key="k"), client=mock_client)
        proposal = asyncio.run(proposer.propose("bookshops in Porto"))

        assert proposal.city == "Porto"
        assert proposal.mentions[0].name == "Livraria Lello"

        kwargs = mock_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert "bookshops in Porto" in kwargs["contents"]
        assert kwargs["config"].temperature == 0.3
        assert kwargs["config"].max_output_tokens == 8192

    def test_sdk_failure_becomes_proposal_error(self, mock_client):
        mock_client.aio.models.generate_content.side_effect = RuntimeError("quota")
        proposer = GeminiPlaceProposer(config=ProposalConfig(api_key="k"), client=mock_client)
        with pytest.raises(ProposalError) as excinfo:
            asyncio.run(proposer.propose("anything"))
        assert isinstance(excinfo.value.cause, RuntimeError)

    def test_empty_text_is_truncated(self, mock_client):
        mock_client.aio.models.generate_content.return_value = MagicMock(text=None)
        proposer = GeminiPlaceProposer(config=ProposalConfig(api_key="k"), client=mock_client)
        with pytest.raises(ProposalError) as excinfo:
            asyncio.run(proposer.propose("anything"))
        assert excinfo.value.truncated is True

    def test_missing_api_key(self):
        proposer = GeminiPlaceProposer(config=ProposalConfig(api_key=""))
        with pytest.raises(ConfigurationError):
            asyncio.run(proposer.propose("anything"))
