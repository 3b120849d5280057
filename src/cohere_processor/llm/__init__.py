"""
Vendor client abstraction and the Cohere implementation.

Components:
- BaseVendorClient: Abstract base class for vendor clients
- CohereClient: Implementation over the Cohere SDK (AsyncClientV2)
- exceptions: VendorError and the retryable/terminal classification table
"""

from cohere_processor.llm.base_client import BaseVendorClient
from cohere_processor.llm.cohere_client import CohereClient
from cohere_processor.llm.exceptions import (
    RETRYABLE_KINDS,
    STATUS_KINDS,
    VendorError,
    VendorErrorKind,
    is_retryable,
    kind_for_status,
)

__all__ = [
    "BaseVendorClient",
    "CohereClient",
    "VendorError",
    "VendorErrorKind",
    "RETRYABLE_KINDS",
    "STATUS_KINDS",
    "is_retryable",
    "kind_for_status",
]
