# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe request/result models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

PROCESSING_ERROR = "PROCESSING_ERROR"
USER_AGENT_PROFILES = ("chrome", "mobile", "bot", "default")
DEFAULT_TIMEOUT_MS = 15000


class ProbeStatus(str, Enum):
    HEALTHY = "healthy"
    BROKEN = "broken"
    WARNING = "warning"
    REDIRECT = "redirect"
    ERROR = "error"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing `Z`."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ProbeOptions:
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    follow_redirects: bool = True
    check_ssl: bool = True
    user_agent_profile: str = "default"

    def __post_init__(self) -> None:
        if not isinstance(self.timeout_ms, int) or isinstance(self.timeout_ms, bool) or self.timeout_ms <= 0:
            object.__setattr__(self, "timeout_ms", DEFAULT_TIMEOUT_MS)
        if self.user_agent_profile not in USER_AGENT_PROFILES:
            object.__setattr__(self, "user_agent_profile", "default")

    @property
    def timeout(self) -> float:
        """Timeout in seconds, as consumed by the HTTP layer."""
        return self.timeout_ms / 1000.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ProbeOptions:
        """
        Build options from the JSON shape sent by browser clients.

        Keys: `timeout` (milliseconds), `followRedirects`, `checkSSL`, `userAgent`.
        The two flags are only disabled by an explicit `false`.
        """
        if not isinstance(data, Mapping):
            return cls()

        timeout_ms = DEFAULT_TIMEOUT_MS
        raw_timeout = data.get("timeout")
        if isinstance(raw_timeout, (int, float)) and not isinstance(raw_timeout, bool) and raw_timeout > 0:
            timeout_ms = int(raw_timeout)

        return cls(
            timeout_ms=timeout_ms,
            follow_redirects=data.get("followRedirects") is not False,
            check_ssl=data.get("checkSSL") is not False,
            user_agent_profile=str(data.get("userAgent") or "default"),
        )


@dataclass(frozen=True)
class ProbeRequest:
    url: str
    options: ProbeOptions = field(default_factory=ProbeOptions)


@dataclass(frozen=True)
class RedirectHop:
    from_url: str
    http_status: int
    location: str

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.from_url, "status": self.http_status, "location": self.location}


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of one probe. `status_code` is an HTTP status or a normalized error code."""

    url: str
    status: ProbeStatus
    status_code: int | str
    message: str
    response_time_ms: int = 0
    redirect_chain: tuple[RedirectHop, ...] | None = None
    ssl_valid: bool | None = None
    headers: Mapping[str, str | None] | None = None
    timestamp: datetime = field(default_factory=utc_now)
    error_detail: str | None = None

    @classmethod
    def processing_error(cls, url: str, detail: str | None = None) -> ProbeResult:
        """Placeholder for a probe that faulted outside normal classification."""
        return cls(
            url=url,
            status=ProbeStatus.ERROR,
            status_code=PROCESSING_ERROR,
            message="Failed to process",
            response_time_ms=0,
            error_detail=detail or "Unknown error",
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "url": self.url,
            "status": self.status.value,
            "statusCode": self.status_code,
            "message": self.message,
            "responseTime": self.response_time_ms,
            "redirectChain": [hop.to_dict() for hop in self.redirect_chain] if self.redirect_chain else None,
            "sslValid": self.ssl_valid,
            "timestamp": format_timestamp(self.timestamp),
        }
        if self.headers is not None:
            data["headers"] = dict(self.headers)
        if self.error_detail is not None:
            data["error"] = self.error_detail
        return data
