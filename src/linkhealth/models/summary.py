# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Batch summary and report models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .probe import ProbeResult, ProbeStatus, format_timestamp, utc_now


@dataclass(frozen=True)
class ErrorEntry:
    url: str
    error_detail: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "error": self.error_detail}


@dataclass(frozen=True)
class BatchSummary:
    total: int
    counts_by_status: dict[ProbeStatus, int]
    average_response_time_ms: int
    errors: tuple[ErrorEntry, ...] = ()

    def count(self, status: ProbeStatus | str) -> int:
        return self.counts_by_status.get(ProbeStatus(status), 0)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"total": self.total}
        for status in ProbeStatus:
            data[status.value] = self.counts_by_status.get(status, 0)
        data["averageResponseTime"] = self.average_response_time_ms
        data["errors"] = [entry.to_dict() for entry in self.errors]
        return data


@dataclass(frozen=True)
class BatchReport:
    """Full output of one batch: per-URL results in input order plus their summary."""

    results: tuple[ProbeResult, ...]
    summary: BatchSummary
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def has_failures(self) -> bool:
        return any(result.status in (ProbeStatus.BROKEN, ProbeStatus.ERROR) for result in self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [result.to_dict() for result in self.results],
            "summary": self.summary.to_dict(),
            "processed": self.processed,
            "timestamp": format_timestamp(self.timestamp),
        }
