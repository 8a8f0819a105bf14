# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
LinkHealth package entrypoint.

Checks batches of URLs with lightweight HEAD probes, classifies each outcome
(healthy, broken, warning, redirect, error), records redirect chains and
aggregates per-batch statistics. HTTP behavior is abstracted behind an
injectable client interface, and domain objects are modeled with typed
dataclasses.
"""

from .config import BatchSettings, ProbeSettings, load_batch_settings, load_probe_settings
from .errors import (
    BatchRejectedError,
    BatchTooLargeError,
    EmptyBatchError,
    InvalidBatchError,
    LinkHealthError,
    NoValidUrlsError,
)
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, create_default_http_client
from .log import setup_logging
from .models import BatchReport, BatchSummary, ProbeOptions, ProbeRequest, ProbeResult, ProbeStatus, RedirectHop
from .probe import ProbeExecutor, RedirectTracer
from .runtime import LinkHealth
from .scan import BatchScheduler, ScanEngine, summarize
from .version import __version__

__all__ = [
    "BatchRejectedError",
    "BatchReport",
    "BatchScheduler",
    "BatchSettings",
    "BatchSummary",
    "BatchTooLargeError",
    "EmptyBatchError",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InvalidBatchError",
    "LinkHealth",
    "LinkHealthError",
    "NoValidUrlsError",
    "ProbeExecutor",
    "ProbeOptions",
    "ProbeRequest",
    "ProbeResult",
    "ProbeSettings",
    "ProbeStatus",
    "RedirectHop",
    "RedirectTracer",
    "ScanEngine",
    "create_default_http_client",
    "load_batch_settings",
    "load_probe_settings",
    "setup_logging",
    "summarize",
    "__version__",
]
