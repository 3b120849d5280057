"""
Rerank handler: one rerank call per record, no retry.

The record's .Payload.After must be a JSON object (raw JSON bytes or
structured data):

    {"query": "...", "documents": ["...", "..."], "top_n": 3}

top_n is optional. The written response is
{"results": [{"index": 1, "relevance_score": 0.93}, ...]}.
"""

import asyncio
import json
from typing import Any, Optional, Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError

from cohere_processor.handlers.base import RequestHandler
from cohere_processor.handlers.exceptions import PayloadError
from cohere_processor.llm.exceptions import VendorError
from cohere_processor.models.enums import ModelFamily
from cohere_processor.models.llm_models import RerankRequest
from cohere_processor.monitoring.metrics import vendor_errors_total
from cohere_processor.records.exceptions import FieldResolutionError
from cohere_processor.records.models import ProcessedRecord, Record

logger = structlog.get_logger(__name__)


class RerankHandler(RequestHandler):
    """Reranks the payload's documents against its query."""

    family = ModelFamily.RERANK

    async def process(
        self,
        records: Sequence[Record],
        cancel: Optional[asyncio.Event] = None,
    ) -> list[ProcessedRecord]:
        out: list[ProcessedRecord] = []
        for index, record in enumerate(records):
            try:
                request = self.build_request(record)
                result = await self.client.rerank(request)
                self.writer.write(
                    record,
                    {"results": [hit.model_dump() for hit in result.results]},
                )
            except VendorError as e:
                vendor_errors_total.labels(model=self.family.value, error_kind=e.kind.value).inc()
                out.append(self._failed(e, index, len(records)))
                return out
            except (PayloadError, FieldResolutionError) as e:
                out.append(self._failed(e, index, len(records)))
                return out

            out.append(self._succeeded(record))

        logger.debug("Rerank batch processed", records=len(out))
        return out

    def build_request(self, record: Record) -> RerankRequest:
        """
        Build the rerank request from the record payload.

        Raises:
            PayloadError: Payload is not a JSON object with query and documents
        """
        payload = _payload_object(record)
        try:
            return RerankRequest(
                model=self.config.model_version,
                query=payload.get("query"),
                documents=payload.get("documents"),
                top_n=payload.get("top_n"),
            )
        except PydanticValidationError as e:
            raise PayloadError(
                "invalid rerank payload: expected query (str), documents (list of str) and optional top_n (int)",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e


def _payload_object(record: Record) -> dict[str, Any]:
    data = record.payload.after
    if isinstance(data, bytes):
        try:
            data = json.loads(data)
        except ValueError as e:
            raise PayloadError(
                f"invalid rerank payload: not JSON ({e})",
                details={"payload_snippet": record.payload.after[:200].decode("utf-8", errors="replace")},
            ) from e

    if not isinstance(data, dict):
        raise PayloadError(
            f"invalid rerank payload: expected a JSON object, got {type(data).__name__}"
        )
    return data
