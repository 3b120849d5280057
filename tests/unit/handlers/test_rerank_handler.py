"""
Unit tests for RerankHandler.
"""

import json

import pytest

from cohere_processor.handlers.exceptions import PayloadError
from cohere_processor.handlers.rerank import RerankHandler
from cohere_processor.llm.exceptions import VendorError, VendorErrorKind
from cohere_processor.models.processor_config import parse_config
from cohere_processor.records.models import ErrorRecord, SingleRecord
from cohere_processor.records.reference import ReferenceResolver
from cohere_processor.records.writer import ResponseWriter


def create_handler(raw_config, client, response_body=None) -> RerankHandler:
    """Helper to build a handler with a real writer."""
    config = parse_config(raw_config)
    writer = ResponseWriter(ReferenceResolver(response_body or config.response_body))
    return RerankHandler(config, client, writer)


def rerank_payload(**overrides) -> bytes:
    payload = {"query": "capital of France", "documents": ["Berlin", "Paris"]}
    payload.update(overrides)
    return json.dumps(payload).encode()


@pytest.mark.asyncio
async def test_writes_results(rerank_raw_config, mock_vendor_client, create_test_record):
    handler = create_handler(rerank_raw_config, mock_vendor_client)
    record = create_test_record(after=rerank_payload(top_n=2))

    results = await handler.process([record])

    assert results == [SingleRecord(record)]
    assert record.payload.after == {
        "results": [
            {"index": 1, "relevance_score": 0.93},
            {"index": 0, "relevance_score": 0.12},
        ]
    }

    request = mock_vendor_client.rerank.call_args.args[0]
    assert request.model == "rerank-v3.5"
    assert request.query == "capital of France"
    assert request.documents == ["Berlin", "Paris"]
    assert request.top_n == 2


@pytest.mark.asyncio
async def test_structured_payload(rerank_raw_config, mock_vendor_client, create_test_record):
    handler = create_handler(rerank_raw_config, mock_vendor_client, ".Payload.After.ranking")
    record = create_test_record(after={"query": "q", "documents": ["a", "b"]})

    await handler.process([record])

    assert mock_vendor_client.rerank.call_args.args[0].top_n is None
    assert record.payload.after["ranking"]["results"][0]["index"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        b"not json",
        b'["a", "b"]',
        rerank_payload(query=None),
        rerank_payload(documents=[]),
        rerank_payload(documents="Paris"),
        rerank_payload(top_n=0),
    ],
)
async def test_invalid_payload_fails_record(rerank_raw_config, mock_vendor_client, create_test_record, payload):
    handler = create_handler(rerank_raw_config, mock_vendor_client)

    results = await handler.process([create_test_record(after=payload), create_test_record()])

    assert len(results) == 1
    assert isinstance(results[0], ErrorRecord)
    assert isinstance(results[0].error, PayloadError)
    assert str(results[0].error).startswith("invalid rerank payload")
    mock_vendor_client.rerank.assert_not_awaited()


@pytest.mark.asyncio
async def test_vendor_error_stops_batch(rerank_raw_config, mock_vendor_client, create_test_record):
    error = VendorError("bad request", kind=VendorErrorKind.BAD_REQUEST, status_code=400)
    mock_vendor_client.rerank.side_effect = error
    handler = create_handler(rerank_raw_config, mock_vendor_client)

    results = await handler.process(
        [create_test_record(after=rerank_payload()), create_test_record(after=rerank_payload())]
    )

    assert len(results) == 1
    assert results[0].error is error
    assert mock_vendor_client.rerank.await_count == 1
