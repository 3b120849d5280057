"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without the Cohere API.
"""

import pytest
from unittest.mock import AsyncMock

from cohere_processor.llm.base_client import BaseVendorClient
from cohere_processor.models.llm_models import (
    ChatResult,
    EmbedResult,
    RerankHit,
    RerankResult,
)


@pytest.fixture
def mock_vendor_client():
    """Mock vendor client returning canned successful results."""
    mock = AsyncMock(spec=BaseVendorClient)
    
    mock.chat = AsyncMock(return_value=ChatResult(
        text="Generated answer",
        finish_reason="COMPLETE",
        latency_ms=120,
    ))
    
    mock.embed = AsyncMock(return_value=EmbedResult(
        embeddings={"float": [[0.1, 0.2, 0.3]], "int8": [[12, -7, 3]]},
        latency_ms=80,
    ))
    
    mock.rerank = AsyncMock(return_value=RerankResult(
        results=[
            RerankHit(index=1, relevance_score=0.93),
            RerankHit(index=0, relevance_score=0.12),
        ],
        latency_ms=60,
    ))
    
    mock.close = AsyncMock(return_value=None)
    
    return mock
