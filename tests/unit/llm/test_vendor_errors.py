"""
Unit tests for vendor error classification.
"""

import pytest

from cohere_processor.llm.exceptions import (
    RETRYABLE_KINDS,
    VendorError,
    VendorErrorKind,
    is_retryable,
    kind_for_status,
)


@pytest.mark.parametrize(
    "status, kind",
    [
        (400, VendorErrorKind.BAD_REQUEST),
        (401, VendorErrorKind.UNAUTHORIZED),
        (403, VendorErrorKind.FORBIDDEN),
        (404, VendorErrorKind.NOT_FOUND),
        (422, VendorErrorKind.UNPROCESSABLE_ENTITY),
        (429, VendorErrorKind.TOO_MANY_REQUESTS),
        (498, VendorErrorKind.INVALID_TOKEN),
        (499, VendorErrorKind.CLIENT_CLOSED_REQUEST),
        (500, VendorErrorKind.INTERNAL_SERVER_ERROR),
        (501, VendorErrorKind.NOT_IMPLEMENTED),
        (503, VendorErrorKind.SERVICE_UNAVAILABLE),
        (504, VendorErrorKind.GATEWAY_TIMEOUT),
        (418, VendorErrorKind.UNKNOWN),
        (None, VendorErrorKind.UNKNOWN),
    ],
)
def test_kind_for_status(status, kind):
    assert kind_for_status(status) is kind


def test_retryable_kinds():
    assert RETRYABLE_KINDS == {
        VendorErrorKind.TIMEOUT,
        VendorErrorKind.GATEWAY_TIMEOUT,
        VendorErrorKind.INTERNAL_SERVER_ERROR,
        VendorErrorKind.SERVICE_UNAVAILABLE,
    }


@pytest.mark.parametrize(
    "kind",
    [
        VendorErrorKind.BAD_REQUEST,
        VendorErrorKind.UNAUTHORIZED,
        VendorErrorKind.TOO_MANY_REQUESTS,
        VendorErrorKind.NOT_IMPLEMENTED,
        VendorErrorKind.CONNECTION,
        VendorErrorKind.UNKNOWN,
    ],
)
def test_terminal_kinds(kind):
    assert not is_retryable(kind)
    assert not VendorError("failed", kind=kind).retryable


def test_vendor_error_defaults():
    error = VendorError("boom")

    assert error.kind is VendorErrorKind.UNKNOWN
    assert error.status_code is None
    assert error.details == {}
    assert str(error) == "boom (unknown)"


def test_vendor_error_str_includes_status():
    error = VendorError(
        "Cohere embed request failed",
        kind=VendorErrorKind.SERVICE_UNAVAILABLE,
        status_code=503,
    )

    assert error.retryable
    assert str(error) == "Cohere embed request failed (status 503, service_unavailable)"
