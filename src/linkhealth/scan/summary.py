# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Reduce per-URL results into batch statistics."""

from __future__ import annotations

import math
from collections.abc import Sequence

from ..models import BatchSummary, ErrorEntry, ProbeResult, ProbeStatus


def summarize(results: Sequence[ProbeResult]) -> BatchSummary:
    """Count results per status and average their latency; an empty batch averages 0."""
    counts = {status: 0 for status in ProbeStatus}
    errors: list[ErrorEntry] = []
    total_time = 0

    for result in results:
        counts[result.status] += 1
        total_time += result.response_time_ms
        if result.error_detail:
            errors.append(ErrorEntry(url=result.url, error_detail=result.error_detail))

    average = math.floor(total_time / len(results) + 0.5) if results else 0
    return BatchSummary(
        total=len(results),
        counts_by_status=counts,
        average_response_time_ms=average,
        errors=tuple(errors),
    )


__all__ = ["summarize"]
