# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Outcome classification for single probes."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import transport_error_message
from ..models import ProbeStatus

HTTP_REASONS: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    429: "Too Many Requests",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
}


@dataclass(frozen=True)
class Classification:
    status: ProbeStatus
    message: str


def reason_phrase(status_code: int) -> str:
    return HTTP_REASONS.get(status_code, f"HTTP {status_code}")


def classify_transport_failure(error_code: str | None) -> Classification:
    return Classification(ProbeStatus.BROKEN, transport_error_message(error_code))


def classify_response(status_code: int, elapsed: float, slow_threshold: float) -> Classification:
    """
    Classify a probe that obtained a response; first match wins.

    Error statuses outrank slowness, and slowness outranks a 3xx.
    """
    if status_code >= 400:
        return Classification(ProbeStatus.BROKEN, reason_phrase(status_code))
    if elapsed > slow_threshold:
        return Classification(ProbeStatus.WARNING, "Slow Response")
    if 300 <= status_code < 400:
        return Classification(ProbeStatus.REDIRECT, "Redirect")
    return Classification(ProbeStatus.HEALTHY, "OK")


__all__ = ["HTTP_REASONS", "Classification", "classify_response", "classify_transport_failure", "reason_phrase"]
