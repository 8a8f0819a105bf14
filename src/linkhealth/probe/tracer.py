# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Redirect-chain discovery."""

from __future__ import annotations

import logging

from ..config import ProbeSettings, load_probe_settings
from ..http.client import HttpClient
from ..http.models import Headers
from ..http.redirects import walk_redirects
from ..models import RedirectHop

logger = logging.getLogger(__name__)


class RedirectTracer:
    """Re-walks a redirect chain with a short per-hop timeout and a small hop budget."""

    def __init__(self, settings: ProbeSettings | None = None):
        self.settings = settings or load_probe_settings()

    def trace(self, client: HttpClient, url: str, *, headers: Headers | None = None) -> tuple[RedirectHop, ...] | None:
        """Return the recorded hops first-hop-first, or None when nothing was recorded."""
        walk = walk_redirects(
            client,
            url,
            max_hops=self.settings.trace_max_hops,
            timeout=self.settings.trace_timeout,
            headers=headers,
            stop_at_budget=True,
        )
        if walk.failed and walk.response is not None:
            # A failing hop ends the chain; hops gathered so far are still reported.
            logger.debug("Redirect trace for %s stopped at %s: %s", url, walk.final_url, walk.response.error_message)
        return tuple(walk.hops) or None
