"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest
from typing import Any, Dict

from cohere_processor.config import Settings
from cohere_processor.models.enums import Operation
from cohere_processor.records.models import Payload, Record


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing."""
    return Settings(
        APP_NAME="Cohere Processor (Test)",
        APP_VERSION="0.1.0",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        COHERE_BASE_URL="https://api.cohere.test",
        COHERE_TIMEOUT=5.0,
    )


@pytest.fixture
def command_raw_config() -> Dict[str, Any]:
    """Minimal valid configuration for the command model."""
    return {
        "apiKey": "api-key",
        "model": "command",
        "modelVersion": "command",
    }


@pytest.fixture
def embed_raw_config() -> Dict[str, Any]:
    """Valid embed configuration with fast backoff for tests."""
    return {
        "apiKey": "api-key",
        "model": "embed",
        "modelVersion": "embed-english-v3.0",
        "backoffRetry.count": "2",
        "backoffRetry.min": "100ms",
        "backoffRetry.max": "5s",
        "embedConfig.inputType": "search_document",
        "embedConfig.embeddingTypes": "float,int8",
    }


@pytest.fixture
def rerank_raw_config() -> Dict[str, Any]:
    """Valid rerank configuration."""
    return {
        "apiKey": "api-key",
        "model": "rerank",
        "modelVersion": "rerank-v3.5",
    }


@pytest.fixture
def create_test_record():
    """Factory fixture to create a Record with a custom .Payload.After.
    
    Usage:
        def test_something(create_test_record):
            record = create_test_record(b"some text")
            structured = create_test_record({"query": "q", "documents": ["a"]})
    """
    def _create(
        after: Any = b"test payload",
        before: Any = None,
        key: Any = b"key-1",
        metadata: Dict[str, str] | None = None,
    ) -> Record:
        return Record(
            position=b"pos-1",
            operation=Operation.CREATE,
            metadata=metadata or {"source": "test"},
            key=key,
            payload=Payload(before=before, after=after),
        )
    
    return _create
