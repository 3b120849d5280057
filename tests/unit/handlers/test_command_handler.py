"""
Unit tests for CommandHandler.

Tests chat dispatch, response writing and batch halting with a mocked
vendor client.
"""

import pytest

from cohere_processor.handlers.command import CommandHandler
from cohere_processor.llm.exceptions import VendorError, VendorErrorKind
from cohere_processor.models.processor_config import parse_config
from cohere_processor.records.exceptions import FieldResolutionError
from cohere_processor.records.models import ErrorRecord, SingleRecord
from cohere_processor.records.reference import ReferenceResolver
from cohere_processor.records.writer import ResponseWriter


def create_handler(raw_config, client, response_body=None) -> CommandHandler:
    """Helper to build a handler with a real writer."""
    config = parse_config(raw_config)
    writer = ResponseWriter(ReferenceResolver(response_body or config.response_body))
    return CommandHandler(config, client, writer)


@pytest.mark.asyncio
async def test_writes_response_text(command_raw_config, mock_vendor_client, create_test_record):
    handler = create_handler(command_raw_config, mock_vendor_client)
    record = create_test_record(after=b"What is Cohere?")

    results = await handler.process([record])

    assert results == [SingleRecord(record)]
    assert record.payload.after == b"Generated answer"

    request = mock_vendor_client.chat.call_args.args[0]
    assert request.model == "command"
    assert request.message == "What is Cohere?"


@pytest.mark.asyncio
async def test_structured_payload_sent_as_json(command_raw_config, mock_vendor_client, create_test_record):
    handler = create_handler(command_raw_config, mock_vendor_client, ".Payload.After.answer")
    record = create_test_record(after={"prompt": "hi"})

    await handler.process([record])

    assert mock_vendor_client.chat.call_args.args[0].message == '{"prompt": "hi"}'
    assert record.payload.after == {"prompt": "hi", "answer": "Generated answer"}


@pytest.mark.asyncio
async def test_every_record_processed(command_raw_config, mock_vendor_client, create_test_record):
    handler = create_handler(command_raw_config, mock_vendor_client)
    records = [create_test_record(after=f"q{i}".encode()) for i in range(3)]

    results = await handler.process(records)

    assert len(results) == 3
    assert all(isinstance(r, SingleRecord) for r in results)
    assert mock_vendor_client.chat.await_count == 3


@pytest.mark.asyncio
async def test_vendor_error_stops_batch(command_raw_config, mock_vendor_client, create_test_record):
    """The first failure ends the batch; later records are not sent."""
    ok = mock_vendor_client.chat.return_value
    error = VendorError("rate limited", kind=VendorErrorKind.TOO_MANY_REQUESTS, status_code=429)
    mock_vendor_client.chat.side_effect = [ok, error, ok]
    handler = create_handler(command_raw_config, mock_vendor_client)
    records = [create_test_record() for _ in range(3)]

    results = await handler.process(records)

    assert len(results) == 2
    assert isinstance(results[0], SingleRecord)
    assert isinstance(results[1], ErrorRecord)
    assert results[1].error is error
    assert mock_vendor_client.chat.await_count == 2


@pytest.mark.asyncio
async def test_retryable_error_not_retried(command_raw_config, mock_vendor_client, create_test_record):
    mock_vendor_client.chat.side_effect = VendorError(
        "unavailable", kind=VendorErrorKind.SERVICE_UNAVAILABLE, status_code=503
    )
    handler = create_handler(
        {**command_raw_config, "backoffRetry.count": "3"}, mock_vendor_client
    )

    results = await handler.process([create_test_record()])

    assert isinstance(results[0], ErrorRecord)
    assert mock_vendor_client.chat.await_count == 1


@pytest.mark.asyncio
async def test_write_failure_becomes_error_record(command_raw_config, mock_vendor_client, create_test_record):
    handler = create_handler(command_raw_config, mock_vendor_client, ".Payload.After.answer")
    record = create_test_record(after=b"raw text")

    results = await handler.process([record, create_test_record()])

    assert len(results) == 1
    assert isinstance(results[0].error, FieldResolutionError)
    assert "failed setting response body" in str(results[0].error)


@pytest.mark.asyncio
async def test_empty_batch(command_raw_config, mock_vendor_client):
    handler = create_handler(command_raw_config, mock_vendor_client)

    assert await handler.process([]) == []
    mock_vendor_client.chat.assert_not_awaited()
