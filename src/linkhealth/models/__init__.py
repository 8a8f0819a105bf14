# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for LinkHealth."""

from .probe import PROCESSING_ERROR, ProbeOptions, ProbeRequest, ProbeResult, ProbeStatus, RedirectHop
from .summary import BatchReport, BatchSummary, ErrorEntry

__all__ = [
    "PROCESSING_ERROR",
    "BatchReport",
    "BatchSummary",
    "ErrorEntry",
    "ProbeOptions",
    "ProbeRequest",
    "ProbeResult",
    "ProbeStatus",
    "RedirectHop",
]
