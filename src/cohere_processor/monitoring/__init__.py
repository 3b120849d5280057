"""Monitoring and metrics instrumentation for the Cohere processor."""

from cohere_processor.monitoring.metrics import (
    records_processed_total,
    vendor_errors_total,
    vendor_request_latency_seconds,
    vendor_retries_total,
)

__all__ = [
    "records_processed_total",
    "vendor_retries_total",
    "vendor_errors_total",
    "vendor_request_latency_seconds",
]
