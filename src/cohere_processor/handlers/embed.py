"""
Embed handler: embeddings with backoff retries.

Per record:

    Building -> Calling -> Succeeded
                        -> RetryWait -> Calling     (retryable error, retries left)
                        -> Failed                   (terminal error, retries exhausted, cancelled)

Retryable errors are the transport/service-class kinds of
cohere_processor.llm.exceptions.RETRYABLE_KINDS. The backoff attempt counter
starts from zero for every record and is reset after success and after a
terminal failure.
"""

import asyncio
from typing import Any, Optional, Sequence

import structlog

from cohere_processor.handlers.base import RequestHandler
from cohere_processor.llm.base_client import BaseVendorClient
from cohere_processor.llm.exceptions import VendorError
from cohere_processor.models.enums import ModelFamily
from cohere_processor.models.llm_models import EmbedRequest
from cohere_processor.models.processor_config import ProcessorConfig
from cohere_processor.monitoring.metrics import vendor_errors_total, vendor_retries_total
from cohere_processor.records.exceptions import FieldResolutionError
from cohere_processor.records.models import ProcessedRecord, Record, payload_text
from cohere_processor.records.writer import ResponseWriter
from cohere_processor.retry.backoff import Backoff
from cohere_processor.retry.cancellation import wait_for_cancellation
from cohere_processor.retry.exceptions import ProcessingCancelled

logger = structlog.get_logger(__name__)


class EmbedHandler(RequestHandler):
    """Embeds .Payload.After; writes embeddings keyed by embedding type."""

    family = ModelFamily.EMBED

    def __init__(
        self,
        config: ProcessorConfig,
        client: BaseVendorClient,
        writer: ResponseWriter,
        backoff: Backoff,
    ):
        super().__init__(config, client, writer)
        self.backoff = backoff

    async def process(
        self,
        records: Sequence[Record],
        cancel: Optional[asyncio.Event] = None,
    ) -> list[ProcessedRecord]:
        out: list[ProcessedRecord] = []
        for index, record in enumerate(records):
            self.backoff.reset()
            try:
                embeddings = await self.embed_with_retry(record, cancel)
                self.writer.write(record, embeddings)
            except (VendorError, ProcessingCancelled, FieldResolutionError) as e:
                self.backoff.reset()
                out.append(self._failed(e, index, len(records)))
                return out

            out.append(self._succeeded(record))

        logger.debug("Embed batch processed", records=len(out))
        return out

    def build_request(self, record: Record) -> EmbedRequest:
        embed = self.config.embed_config
        return EmbedRequest(
            model=self.config.model_version,
            texts=[payload_text(record)],
            input_type=embed.input_type or None,
            embedding_types=list(embed.embedding_types),
            truncate=embed.truncate.value,
        )

    async def embed_with_retry(
        self, record: Record, cancel: Optional[asyncio.Event] = None
    ) -> dict[str, list[list[Any]]]:
        """
        Call the embed endpoint until it succeeds or fails terminally.

        Raises:
            VendorError: Non-retryable error, or retryable error with no retries left
            ProcessingCancelled: Cancellation signalled during a retry wait
        """
        request = self.build_request(record)

        while True:
            try:
                result = await self.client.embed(request)
            except VendorError as e:
                vendor_errors_total.labels(model=self.family.value, error_kind=e.kind.value).inc()
                if not e.retryable:
                    raise

                attempt = self.backoff.attempt
                if attempt >= self.config.backoff_retry_count:
                    logger.debug(
                        "Cohere request retries exhausted",
                        error=str(e),
                        attempts=attempt + 1,
                        **{"backoffRetry.count": self.config.backoff_retry_count},
                    )
                    raise

                delay = self.backoff.next_delay()
                logger.debug(
                    "retrying Cohere HTTP request",
                    error=str(e),
                    attempt=attempt,
                    **{
                        "backoffRetry.count": self.config.backoff_retry_count,
                        "backoffRetry.duration": int(delay.total_seconds() * 1000),
                    },
                )
                vendor_retries_total.labels(model=self.family.value, error_kind=e.kind.value).inc()

                if await wait_for_cancellation(delay, cancel):
                    raise ProcessingCancelled(e) from e
                continue

            self.backoff.reset()
            return result.embeddings
