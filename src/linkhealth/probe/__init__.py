# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-probe execution, classification and redirect tracing."""

from .classify import HTTP_REASONS, Classification, classify_response, classify_transport_failure, reason_phrase
from .executor import ProbeExecutor
from .tracer import RedirectTracer

__all__ = [
    "HTTP_REASONS",
    "Classification",
    "ProbeExecutor",
    "RedirectTracer",
    "classify_response",
    "classify_transport_failure",
    "reason_phrase",
]
