"""
Base request handler.

A handler owns the per-record loop for one model family: build a vendor
request from the record, call the vendor, write the response into the
configured field. Processing of a batch stops at the first failed record;
the returned list then ends with that record's ErrorRecord and the remaining
records are absent.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import structlog

from cohere_processor.llm.base_client import BaseVendorClient
from cohere_processor.models.enums import ModelFamily
from cohere_processor.models.processor_config import ProcessorConfig
from cohere_processor.monitoring.metrics import records_processed_total
from cohere_processor.records.models import ErrorRecord, ProcessedRecord, Record, SingleRecord
from cohere_processor.records.writer import ResponseWriter

logger = structlog.get_logger(__name__)


class RequestHandler(ABC):
    """
    Abstract handler for one Cohere model family.

    Subclasses set `family` and implement `process`.
    """

    family: ModelFamily

    def __init__(
        self,
        config: ProcessorConfig,
        client: BaseVendorClient,
        writer: ResponseWriter,
    ):
        self.config = config
        self.client = client
        self.writer = writer

    @abstractmethod
    async def process(
        self,
        records: Sequence[Record],
        cancel: Optional[asyncio.Event] = None,
    ) -> list[ProcessedRecord]:
        """
        Process a batch of records, one at a time.

        Args:
            records: Batch supplied by the host
            cancel: Cancellation signal checked while waiting between retries

        Returns:
            One result per processed record, in input order; shorter than
            `records` when a record failed
        """
        pass

    def _succeeded(self, record: Record) -> SingleRecord:
        records_processed_total.labels(model=self.family.value, status="success").inc()
        return SingleRecord(record)

    def _failed(self, error: Exception, index: int, total: int) -> ErrorRecord:
        records_processed_total.labels(model=self.family.value, status="error").inc()
        logger.warning(
            "Record processing failed, stopping batch",
            model=self.family.value,
            record_index=index,
            dropped_records=total - index - 1,
            error_type=type(error).__name__,
            error=str(error),
        )
        return ErrorRecord(error)
