"""
Command (chat) handler: one chat call per record, no retry.
"""

import asyncio
from typing import Optional, Sequence

import structlog

from cohere_processor.handlers.base import RequestHandler
from cohere_processor.llm.exceptions import VendorError
from cohere_processor.models.enums import ModelFamily
from cohere_processor.models.llm_models import ChatRequest
from cohere_processor.monitoring.metrics import vendor_errors_total
from cohere_processor.records.exceptions import FieldResolutionError
from cohere_processor.records.models import ProcessedRecord, Record, payload_text

logger = structlog.get_logger(__name__)


class CommandHandler(RequestHandler):
    """Sends .Payload.After as a single user message; writes the response text."""

    family = ModelFamily.COMMAND

    async def process(
        self,
        records: Sequence[Record],
        cancel: Optional[asyncio.Event] = None,
    ) -> list[ProcessedRecord]:
        out: list[ProcessedRecord] = []
        for index, record in enumerate(records):
            request = ChatRequest(model=self.config.model_version, message=payload_text(record))
            try:
                result = await self.client.chat(request)
            except VendorError as e:
                vendor_errors_total.labels(model=self.family.value, error_kind=e.kind.value).inc()
                out.append(self._failed(e, index, len(records)))
                return out

            try:
                self.writer.write(record, result.text)
            except FieldResolutionError as e:
                out.append(self._failed(e, index, len(records)))
                return out

            out.append(self._succeeded(record))

        logger.debug("Command batch processed", records=len(out))
        return out
