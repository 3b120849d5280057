"""
Record data models.

A Record is the unit of data flowing through the host pipeline. Its payload
has a "before" and an "after" view; each view (and the key) holds either raw
bytes or structured data (a dict), or nothing.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from cohere_processor.models.enums import Operation

Data = Optional[Union[dict[str, Any], bytes]]


class Payload(BaseModel):
    """Before/after views of the record's data."""

    before: Data = Field(default=None, description="Data before the change (updates/deletes)")
    after: Data = Field(default=None, description="Data after the change; the processor's input")


class Record(BaseModel):
    """
    One unit of data owned by the host.
    
    Mutable: the processor writes the vendor response into one of its fields.
    """

    position: bytes = Field(default=b"", description="Opaque source position")
    operation: Operation = Field(default=Operation.CREATE)
    metadata: dict[str, str] = Field(default_factory=dict)
    key: Data = Field(default=None)
    payload: Payload = Field(default_factory=Payload)


@dataclass(frozen=True)
class SingleRecord:
    """Successfully processed record."""

    record: Record


@dataclass(frozen=True)
class ErrorRecord:
    """Record that failed processing; carries the triggering error."""

    error: Exception


ProcessedRecord = Union[SingleRecord, ErrorRecord]


def record_bytes(data: Data) -> bytes:
    """Wire bytes of a data view (structured data is JSON-encoded)."""
    if data is None:
        return b""
    if isinstance(data, bytes):
        return data
    return json.dumps(data, default=str).encode("utf-8")


def payload_text(record: Record) -> str:
    """Text sent to the vendor for a record: its .Payload.After bytes."""
    return record_bytes(record.payload.after).decode("utf-8", errors="replace")
