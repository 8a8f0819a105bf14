# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from collections.abc import Iterator
from enum import Enum

import httpx

# OpenSSL X509_V_ERR_CERT_HAS_EXPIRED
_X509_CERT_HAS_EXPIRED = 10

_DNS_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
)


class LinkHealthError(Exception):
    """Base class for LinkHealth errors."""


class BatchRejectedError(LinkHealthError):
    """A batch was refused before any network activity took place."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidBatchError(BatchRejectedError):
    def __init__(self, message: str = "Invalid links array"):
        super().__init__(message)


class EmptyBatchError(BatchRejectedError):
    def __init__(self, message: str = "Invalid links array"):
        super().__init__(message)


class BatchTooLargeError(BatchRejectedError):
    status_code = 429

    def __init__(self, limit: int, size: int):
        super().__init__(f"Maximum {limit} links per request")
        self.limit = limit
        self.size = size


class NoValidUrlsError(BatchRejectedError):
    def __init__(self, message: str = "No valid URLs provided"):
        super().__init__(message)


class TransportError(str, Enum):
    """Normalized codes for probes that never obtained a response."""

    DNS = "ENOTFOUND"
    REFUSED = "ECONNREFUSED"
    TIMEOUT = "ETIMEDOUT"
    CERT_EXPIRED = "CERT_HAS_EXPIRED"
    CERT_INVALID = "CERT_INVALID"
    RESET = "ECONNRESET"
    MAX_REDIRECTS = "MAX_REDIRECTS"
    UNKNOWN = "ERROR"


_TRANSPORT_MESSAGES = {
    TransportError.DNS: "DNS Resolution Failed",
    TransportError.REFUSED: "Connection Refused",
    TransportError.TIMEOUT: "Request Timeout",
    TransportError.CERT_EXPIRED: "SSL Certificate Expired",
}


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def classify_transport_error(exc: BaseException) -> TransportError:
    """
    Map an httpx/socket/ssl exception to a normalized TransportError.

    httpx wraps the underlying OSError, so the whole cause chain is inspected
    before falling back to message matching.
    """
    if isinstance(exc, httpx.TimeoutException):
        return TransportError.TIMEOUT
    if isinstance(exc, httpx.TooManyRedirects):
        return TransportError.MAX_REDIRECTS

    for item in _exception_chain(exc):
        if isinstance(item, ssl.SSLCertVerificationError):
            if getattr(item, "verify_code", None) == _X509_CERT_HAS_EXPIRED:
                return TransportError.CERT_EXPIRED
            return TransportError.CERT_INVALID
        if isinstance(item, socket.gaierror):
            return TransportError.DNS
        if isinstance(item, ConnectionRefusedError):
            return TransportError.REFUSED
        if isinstance(item, TimeoutError):
            return TransportError.TIMEOUT
        if isinstance(item, ConnectionResetError):
            return TransportError.RESET

    text = " ".join(str(item) for item in _exception_chain(exc)).lower()
    if "certificate has expired" in text:
        return TransportError.CERT_EXPIRED
    if "certificate_verify_failed" in text or "certificate verify failed" in text:
        return TransportError.CERT_INVALID
    if any(marker in text for marker in _DNS_MARKERS):
        return TransportError.DNS
    if "connection refused" in text:
        return TransportError.REFUSED
    if "timed out" in text:
        return TransportError.TIMEOUT
    if "connection reset" in text:
        return TransportError.RESET
    return TransportError.UNKNOWN


def transport_error_message(code: TransportError | str | None) -> str:
    """User-facing message for a transport error code."""
    try:
        category = TransportError(code)
    except ValueError:
        return "Connection Failed"
    return _TRANSPORT_MESSAGES.get(category, "Connection Failed")


__all__ = [
    "BatchRejectedError",
    "BatchTooLargeError",
    "EmptyBatchError",
    "InvalidBatchError",
    "LinkHealthError",
    "NoValidUrlsError",
    "TransportError",
    "classify_transport_error",
    "transport_error_message",
]
