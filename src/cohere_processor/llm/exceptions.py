"""
Vendor error classification.

Every failure of a Cohere call is surfaced as a VendorError carrying a
VendorErrorKind from a closed enumeration. Whether a kind is retryable is
decided by the RETRYABLE_KINDS table, never by exception type matching.
"""

from enum import Enum
from typing import Any, Optional


class VendorErrorKind(str, Enum):
    """Closed set of vendor failure classes."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    UNPROCESSABLE_ENTITY = "unprocessable_entity"
    TOO_MANY_REQUESTS = "too_many_requests"
    INVALID_TOKEN = "invalid_token"
    CLIENT_CLOSED_REQUEST = "client_closed_request"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    NOT_IMPLEMENTED = "not_implemented"
    SERVICE_UNAVAILABLE = "service_unavailable"
    GATEWAY_TIMEOUT = "gateway_timeout"
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    UNKNOWN = "unknown"


STATUS_KINDS: dict[int, VendorErrorKind] = {
    400: VendorErrorKind.BAD_REQUEST,
    401: VendorErrorKind.UNAUTHORIZED,
    403: VendorErrorKind.FORBIDDEN,
    404: VendorErrorKind.NOT_FOUND,
    422: VendorErrorKind.UNPROCESSABLE_ENTITY,
    429: VendorErrorKind.TOO_MANY_REQUESTS,
    498: VendorErrorKind.INVALID_TOKEN,
    499: VendorErrorKind.CLIENT_CLOSED_REQUEST,
    500: VendorErrorKind.INTERNAL_SERVER_ERROR,
    501: VendorErrorKind.NOT_IMPLEMENTED,
    503: VendorErrorKind.SERVICE_UNAVAILABLE,
    504: VendorErrorKind.GATEWAY_TIMEOUT,
}

# Transport/service-class failures; everything else is terminal.
RETRYABLE_KINDS: frozenset[VendorErrorKind] = frozenset(
    {
        VendorErrorKind.TIMEOUT,
        VendorErrorKind.GATEWAY_TIMEOUT,
        VendorErrorKind.INTERNAL_SERVER_ERROR,
        VendorErrorKind.SERVICE_UNAVAILABLE,
    }
)


def kind_for_status(status_code: Optional[int]) -> VendorErrorKind:
    """Map an HTTP status code to its vendor error kind."""
    if status_code is None:
        return VendorErrorKind.UNKNOWN
    return STATUS_KINDS.get(status_code, VendorErrorKind.UNKNOWN)


def is_retryable(kind: VendorErrorKind) -> bool:
    return kind in RETRYABLE_KINDS


class VendorError(Exception):
    """
    Raised by the vendor client for any failed Cohere call.

    Attributes:
        kind: Classified failure (see VendorErrorKind)
        status_code: HTTP status when the vendor answered, None for transport failures
        details: Structured error data (endpoint, response body, ...)
    """

    def __init__(
        self,
        message: str,
        kind: VendorErrorKind = VendorErrorKind.UNKNOWN,
        status_code: Optional[int] = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.details = details or {}

    @property
    def retryable(self) -> bool:
        """Whether the embed handler may retry the call after a backoff."""
        return is_retryable(self.kind)

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code}, {self.kind.value})"
        return f"{self.message} ({self.kind.value})"
