"""Prometheus metrics for the Cohere processor.

The host process exposes the default registry; these metrics land there.
Alert rules should be configured for:
- vendor_errors_total (terminal vendor failures)
- vendor_retries_total (high retry rate indicates vendor instability)
"""

from prometheus_client import Counter, Histogram

# === Record Metrics ===

records_processed_total = Counter(
    "cohere_records_processed_total",
    "Total records processed by model family and outcome",
    ["model", "status"],
)
"""
Processed records counter.

Labels:
- model: command, embed, rerank
- status: success, error
"""

# === Vendor Metrics ===

vendor_retries_total = Counter(
    "cohere_vendor_retries_total",
    "Total retries of vendor calls by error kind",
    ["model", "error_kind"],
)
"""
Retry counter (one increment per backoff wait).

Labels:
- model: Model family
- error_kind: timeout, gateway_timeout, internal_server_error, service_unavailable
"""

vendor_errors_total = Counter(
    "cohere_vendor_errors_total",
    "Total vendor call failures by error kind",
    ["model", "error_kind"],
)
"""
Vendor failure counter (every failed call, retried or not).

Labels:
- model: Model family
- error_kind: VendorErrorKind value
"""

vendor_request_latency_seconds = Histogram(
    "cohere_vendor_request_latency_seconds",
    "Vendor call latency in seconds",
    ["endpoint", "success"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)
"""
Vendor call latency histogram.

Labels:
- endpoint: chat, embed, rerank
- success: true, false
"""
