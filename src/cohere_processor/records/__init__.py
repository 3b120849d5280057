"""
Records flowing through the host pipeline and field addressing.

Components:
- Record / Payload: unit of data with before/after views
- SingleRecord / ErrorRecord: per-record processing outcome
- ReferenceResolver: parsed field-path expression (".Payload.After.x")
- ResponseWriter: writes vendor responses into the configured field
"""

from cohere_processor.records.exceptions import (
    FieldResolutionError,
    RecordError,
    ReferenceParseError,
)
from cohere_processor.records.models import (
    ErrorRecord,
    Payload,
    ProcessedRecord,
    Record,
    SingleRecord,
    payload_text,
    record_bytes,
)
from cohere_processor.records.reference import Reference, ReferenceResolver
from cohere_processor.records.writer import ResponseWriter

__all__ = [
    "Record",
    "Payload",
    "SingleRecord",
    "ErrorRecord",
    "ProcessedRecord",
    "payload_text",
    "record_bytes",
    "Reference",
    "ReferenceResolver",
    "ResponseWriter",
    "RecordError",
    "ReferenceParseError",
    "FieldResolutionError",
]
